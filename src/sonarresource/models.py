"""Pydantic models for the resource protocol envelopes and service payloads."""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sonarresource.errors import MissingFieldError, RequestDecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)

# A version is an opaque string-to-string token handed to the orchestrator.
Version = dict[str, str]


class Source(BaseModel):
    """Connection parameters supplied with every request.

    Field names on the wire are ``target``, ``sonartoken``, ``component`` and
    ``metrics``. ``metrics`` may be a comma-separated string or a list.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    target: str = ""
    auth_token: str = Field("", alias="sonartoken")
    component: str = ""
    metrics: list[str] = Field(default_factory=list)

    @field_validator("target", "auth_token", "component", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("metrics", mode="before")
    @classmethod
    def _split_metrics(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, list):
            return [
                key.strip() if isinstance(key, str) else key
                for key in value
                if not isinstance(key, str) or key.strip()
            ]
        return value

    def is_valid(self) -> bool:
        return bool(self.target and self.auth_token and self.component and self.metrics)

    def ensure_valid(self) -> None:
        if not self.is_valid():
            raise MissingFieldError()

    @property
    def metric_keys(self) -> str:
        return ",".join(self.metrics)


class _SourceEnvelope(BaseModel):
    source: Source = Field(default_factory=Source)

    @field_validator("source", mode="before")
    @classmethod
    def _null_source_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class CheckRequest(_SourceEnvelope):
    # Last version the orchestrator saw; check always reports the full history.
    version: Version | None = None


class InRequest(_SourceEnvelope):
    version: Version = Field(default_factory=dict)
    params: dict[str, Any] = Field(default_factory=dict)


class InResponse(BaseModel):
    version: Version


class Analysis(BaseModel):
    """One historical analysis as returned by ``/api/project_analyses/search``."""

    key: str = ""
    date: str


class AnalysisTimeline(BaseModel):
    analyses: list[Analysis] = Field(default_factory=list)


def parse_request(model: type[ModelT], raw: str) -> ModelT:
    """Decode a request envelope read from stdin."""
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise RequestDecodeError(f"Invalid request: {exc}") from exc


def dump_json(payload: Any) -> str:
    """Compact JSON as written to stdout."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    return json.dumps(payload, separators=(",", ":"))
