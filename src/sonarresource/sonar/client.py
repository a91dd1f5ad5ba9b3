"""HTTP client for the SonarQube web API."""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urlencode, urlsplit, urlunsplit

import httpx
import structlog

from sonarresource.config import settings
from sonarresource.errors import RemoteStatusError, TransportError, UnauthorizedError
from sonarresource.sonar.base import ANALYSES_PATH, MEASURES_PATH

logger = structlog.get_logger()


def build_url(base_url: str, path: str, params: list[tuple[str, str]]) -> str:
    """Append an API path to the target and form-encode the query.

    The target may carry a context path (``https://host/sonar``); the API path is
    appended to it rather than replacing it.
    """
    try:
        parts = urlsplit(base_url)
    except ValueError as exc:
        raise TransportError(f"Invalid target URL {base_url!r}: {exc}") from exc
    if not parts.scheme or not parts.netloc:
        raise TransportError(f"Invalid target URL {base_url!r}")
    full_path = parts.path.rstrip("/") + path
    return urlunsplit((parts.scheme, parts.netloc, full_path, urlencode(params), ""))


class SonarqubeClient:
    """ResultSource backed by a live SonarQube server.

    Every call issues one GET with HTTP Basic auth (token as username, empty
    password), following redirects. Anything other than a final HTTP 200 is an
    error; nothing is retried.
    """

    def __init__(
        self,
        timeout_seconds: float | None = None,
        verify_tls: bool | None = None,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.timeout_seconds = settings.request_timeout_seconds if timeout_seconds is None else timeout_seconds
        self.verify_tls = settings.verify_tls if verify_tls is None else verify_tls
        self.user_agent = user_agent or settings.user_agent
        self._transport = transport

    def fetch_measurement(
        self,
        base_url: str,
        auth_token: str,
        component: str,
        metric_keys: Sequence[str],
    ) -> bytes:
        url = build_url(
            base_url,
            MEASURES_PATH,
            [("component", component), ("metricKeys", ",".join(metric_keys))],
        )
        return self._get(url, auth_token)

    def fetch_analysis_timeline(self, base_url: str, auth_token: str, component: str) -> bytes:
        url = build_url(base_url, ANALYSES_PATH, [("project", component)])
        return self._get(url, auth_token)

    def _get(self, url: str, auth_token: str) -> bytes:
        logger.info("sonar.request", url=url)
        try:
            with httpx.Client(
                auth=httpx.BasicAuth(auth_token, ""),
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_seconds,
                verify=self.verify_tls,
                transport=self._transport,
            ) as client:
                response = client.get(url)
        except httpx.InvalidURL as exc:
            raise TransportError(f"Invalid target URL {url!r}: {exc}") from exc
        except httpx.RequestError as exc:
            logger.error("sonar.request.failed", url=url, error=str(exc))
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        if response.status_code != 200:
            logger.warning("sonar.request.rejected", url=url, status=response.status_code)
            if response.status_code == 401:
                raise UnauthorizedError(response.status_code, response.text)
            raise RemoteStatusError(response.status_code, response.text)

        logger.debug("sonar.request.ok", url=url, bytes=len(response.content))
        return response.content
