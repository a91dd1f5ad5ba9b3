"""In: fetch the current measurement snapshot into the destination directory."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import structlog

from sonarresource.errors import MaterializeError
from sonarresource.models import InRequest, InResponse, dump_json, parse_request
from sonarresource.sonar.base import ResultSource
from sonarresource.sonar.client import SonarqubeClient

logger = structlog.get_logger()

RESULT_FILENAME = "result.json"


def write_snapshot(dest_dir: str | Path, body: bytes) -> Path:
    """Write the raw measurement body to ``<dest_dir>/result.json``, replacing it."""
    path = Path(dest_dir) / RESULT_FILENAME
    try:
        path.write_bytes(body)
    except OSError as exc:
        raise MaterializeError(f"Failed to write {path}: {exc}") from exc
    return path


def fetch_in(request: InRequest, dest_dir: str | Path, result_source: ResultSource) -> InResponse:
    """Materialize the latest measurement and echo the requested version.

    The requested version does not select what is fetched; the service only
    serves current measures.
    """
    source = request.source
    source.ensure_valid()

    body = result_source.fetch_measurement(source.target, source.auth_token, source.component, source.metrics)
    path = write_snapshot(dest_dir, body)

    logger.info(
        "in.materialized",
        component=source.component,
        path=str(path),
        bytes=len(body),
        version=request.version,
    )
    return InResponse(version=request.version)


def run_in(
    stdin: TextIO,
    stdout: TextIO,
    dest_dir: str | Path,
    result_source: ResultSource | None = None,
) -> None:
    request = parse_request(InRequest, stdin.read())
    response = fetch_in(request, dest_dir, result_source or SonarqubeClient())
    stdout.write(dump_json(response))
