"""ResultSource contract shared by the check and in commands."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

MEASURES_PATH = "/api/measures/component"
ANALYSES_PATH = "/api/project_analyses/search"


class ResultSource(Protocol):
    def fetch_measurement(
        self,
        base_url: str,
        auth_token: str,
        component: str,
        metric_keys: Sequence[str],
    ) -> bytes: ...

    def fetch_analysis_timeline(self, base_url: str, auth_token: str, component: str) -> bytes: ...
