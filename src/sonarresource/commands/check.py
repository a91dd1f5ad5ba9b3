"""Check: report every known version of the analysis report, oldest first."""

from __future__ import annotations

from typing import TextIO

import structlog

from sonarresource.config import settings
from sonarresource.models import CheckRequest, Version, dump_json, parse_request
from sonarresource.sonar.base import ResultSource
from sonarresource.sonar.client import SonarqubeClient
from sonarresource.versions import VersionScheme, decode_timeline, ref_versions, timestamp_versions

logger = structlog.get_logger()


def check(
    request: CheckRequest,
    result_source: ResultSource,
    scheme: VersionScheme | None = None,
) -> list[Version]:
    """Return the version list for the configured component.

    The source is validated before anything is fetched.
    """
    source = request.source
    source.ensure_valid()
    scheme = VersionScheme(scheme or settings.version_scheme)

    if scheme is VersionScheme.REF:
        body = result_source.fetch_measurement(
            source.target, source.auth_token, source.component, source.metrics
        )
        versions = ref_versions(body)
    else:
        body = result_source.fetch_analysis_timeline(source.target, source.auth_token, source.component)
        versions = timestamp_versions(decode_timeline(body))

    logger.info(
        "check.versions",
        component=source.component,
        scheme=scheme.value,
        count=len(versions),
        latest=versions[-1] if versions else None,
    )
    return versions


def run_check(stdin: TextIO, stdout: TextIO, result_source: ResultSource | None = None) -> None:
    request = parse_request(CheckRequest, stdin.read())
    versions = check(request, result_source or SonarqubeClient())
    stdout.write(dump_json(versions))
