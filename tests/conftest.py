"""Pytest fixtures for SonarQube resource tests.

Provides sample service bodies, a recording stub ResultSource, and an httpx
transport that intercepts every request. No test touches the network.
"""

from collections.abc import Callable

import httpx
import pytest

from sonarresource.sonar.client import SonarqubeClient

TARGET = "http://sonar.test"
AUTH_TOKEN = "SONAR_TOKEN"
COMPONENT = "my:component"
METRICS = "ncloc,complexity,violations,coverage"

MEASURES_RAW_PATH = (
    b"/api/measures/component?component=my%3Acomponent&metricKeys=ncloc%2Ccomplexity%2Cviolations%2Ccoverage"
)
ANALYSES_RAW_PATH = b"/api/project_analyses/search?project=my%3Acomponent"

MEASUREMENT_BODY = b"""{
  "component": {
    "id": "AWH_6osdce3G0HojaCW1",
    "key": "my:component",
    "name": "component-name",
    "qualifier": "TRK",
    "measures": [
      {"metric": "violations", "value": "5", "periods": [{"index": 1, "value": "-6"}]},
      {"metric": "coverage", "value": "91.2", "periods": [{"index": 1, "value": "40.5"}]},
      {"metric": "complexity", "value": "84", "periods": [{"index": 1, "value": "21"}]},
      {"metric": "ncloc", "value": "795", "periods": [{"index": 1, "value": "270"}]}
    ]
  }
}"""

TIMELINE_BODY = b"""{
  "paging": {"pageIndex": 1, "pageSize": 100, "total": 12},
  "analyses": [
    {
      "key": "AWKa7VV9drIzrRaH-p_z",
      "date": "2018-04-06T14:27:06+0200",
      "events": [{"key": "AWKa7VsYdrIzrRaH-p_0", "category": "VERSION", "name": "0.0.1-SNAPSHOT"}]
    },
    {"key": "AWKQ3B6rdrIzrRaH-Rt3", "date": "2018-04-04T15:32:28+0200", "events": []},
    {
      "key": "AWJhuKRVdrIzrRaH-JD8",
      "date": "2018-03-26T11:51:30+0200",
      "events": [{"key": "AWJhuKoddrIzrRaH-JD-", "category": "QUALITY_GATE", "name": "Green (was Red)"}]
    },
    {"key": "AWJOESP5NZwlownmr1uo", "date": "2018-03-22T15:15:48+0100", "events": []},
    {"key": "AWIFz6Qd0iGqzMJL9y73", "date": "2018-03-08T14:31:37+0100", "events": []}
  ]
}"""

EXPECTED_CHECK_OUTPUT = (
    '[{"timestamp":"2018-03-08T14:31:37+0100"},'
    '{"timestamp":"2018-03-22T15:15:48+0100"},'
    '{"timestamp":"2018-03-26T11:51:30+0200"},'
    '{"timestamp":"2018-04-04T15:32:28+0200"},'
    '{"timestamp":"2018-04-06T14:27:06+0200"}]'
)


def source_payload(**overrides) -> dict:
    payload = {
        "target": TARGET,
        "sonartoken": AUTH_TOKEN,
        "component": COMPONENT,
        "metrics": METRICS,
    }
    payload.update(overrides)
    return payload


class RecordingTransport(httpx.BaseTransport):
    """Transport that hands every request to ``handler`` and keeps a copy."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


class StubResultSource:
    """ResultSource that returns canned bodies and records its calls."""

    def __init__(
        self,
        measurement: bytes = MEASUREMENT_BODY,
        timeline: bytes = TIMELINE_BODY,
        error: Exception | None = None,
    ) -> None:
        self.measurement = measurement
        self.timeline = timeline
        self.error = error
        self.calls: list[tuple] = []

    def fetch_measurement(self, base_url, auth_token, component, metric_keys) -> bytes:
        self.calls.append(("fetch_measurement", base_url, auth_token, component, list(metric_keys)))
        if self.error:
            raise self.error
        return self.measurement

    def fetch_analysis_timeline(self, base_url, auth_token, component) -> bytes:
        self.calls.append(("fetch_analysis_timeline", base_url, auth_token, component))
        if self.error:
            raise self.error
        return self.timeline


@pytest.fixture
def stub_source() -> StubResultSource:
    return StubResultSource()


@pytest.fixture
def sonar_server():
    """Build a (client, transport) pair answering with ``handler``."""

    def _build(handler: Callable[[httpx.Request], httpx.Response]):
        transport = RecordingTransport(handler)
        return SonarqubeClient(transport=transport), transport

    return _build


@pytest.fixture
def routed_handler():
    """Handler serving the measures and analyses endpoints with sample bodies."""

    def _handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/api/measures/component"):
            return httpx.Response(200, content=MEASUREMENT_BODY)
        if request.url.path.endswith("/api/project_analyses/search"):
            return httpx.Response(200, content=TIMELINE_BODY)
        return httpx.Response(404, json={"errors": [{"msg": "Unknown url"}]})

    return _handler
