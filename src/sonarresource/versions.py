"""Version identity schemes for analysis reports.

``timestamp`` is the canonical scheme: one version per past analysis, keyed by the
analysis date, so the orchestrator can poll incrementally. ``ref`` identifies the
current measurement snapshot by a content hash and is meant for servers where the
analysis history endpoint is unavailable. A deployment uses one scheme only.
"""

from __future__ import annotations

import hashlib
from enum import Enum

from pydantic import ValidationError

from sonarresource.errors import TimelineDecodeError
from sonarresource.models import AnalysisTimeline, Version


class VersionScheme(str, Enum):
    TIMESTAMP = "timestamp"
    REF = "ref"


def decode_timeline(body: bytes) -> AnalysisTimeline:
    try:
        return AnalysisTimeline.model_validate_json(body)
    except ValidationError as exc:
        raise TimelineDecodeError(f"Invalid analysis timeline: {exc}") from exc


def timestamp_versions(timeline: AnalysisTimeline) -> list[Version]:
    """Oldest-first versions from a newest-first timeline.

    Every analysis yields exactly one version; equal dates are kept.
    """
    return [{"timestamp": analysis.date} for analysis in reversed(timeline.analyses)]


def measurement_ref(body: bytes) -> str:
    return hashlib.sha256(body).hexdigest()


def ref_versions(body: bytes) -> list[Version]:
    return [{"ref": measurement_ref(body)}]
