"""Data models for the n8n webhook relay."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_CALENDAR_ID = "primary"
MALFORMED_BODY_PREFIX_CHARS = 300


class RelayFlow(str, Enum):
    PIPELINE = "pipeline"
    SCHEDULING = "scheduling"


@dataclass(frozen=True)
class FlowSpec:
    """Static description of one relay endpoint flavor."""

    label: str
    route: str
    config_env: str
    required_fields: tuple[tuple[str, str], ...]  # (field, error message)
    empty_message: str
    malformed_prefix: str
    unreachable_message: str

    @property
    def not_configured_message(self) -> str:
        return f"N8N {self.label.lower()} webhook URL not configured ({self.config_env})"


FLOWS: dict[RelayFlow, FlowSpec] = {
    RelayFlow.PIPELINE: FlowSpec(
        label="Pipeline",
        route="/api/screen",
        config_env="N8N_PIPELINE_WEBHOOK",
        required_fields=(
            ("resume_text", "Resume text is required"),
            ("job_description", "Job description is required"),
        ),
        empty_message=(
            "n8n returned an empty response. Check: (1) workflow is active, "
            "(2) credentials are connected in n8n."
        ),
        malformed_prefix="n8n response is not valid JSON: ",
        unreachable_message="Failed to reach n8n pipeline",
    ),
    RelayFlow.SCHEDULING: FlowSpec(
        label="Scheduling",
        route="/api/schedule",
        config_env="N8N_SCHEDULING_WEBHOOK",
        required_fields=(
            ("candidate_email", "Candidate email is required"),
            ("candidate_name", "Candidate name is required"),
        ),
        empty_message=(
            "n8n scheduling webhook returned an empty response. Check: "
            "(1) workflow is active, (2) credentials are connected in n8n."
        ),
        malformed_prefix="Scheduling response is not valid JSON: ",
        unreachable_message="Failed to reach n8n scheduling webhook",
    ),
}


# --- Requests ---


class _RelayRequest(BaseModel):
    # Unknown fields are forwarded downstream untouched
    model_config = ConfigDict(extra="allow", frozen=True)

    interviewer_calendar_id: str = DEFAULT_CALENDAR_ID

    @field_validator("interviewer_calendar_id", mode="before")
    @classmethod
    def _default_calendar(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_CALENDAR_ID
        return value

    def to_forward_payload(self) -> dict[str, Any]:
        """Body sent downstream: the caller's fields plus the calendar default."""
        return self.model_dump()


class PipelineRequest(_RelayRequest):
    resume_text: str
    job_description: str


class SchedulingRequest(_RelayRequest):
    candidate_email: str
    candidate_name: str


RelayRequest = Union[PipelineRequest, SchedulingRequest]

REQUEST_MODELS: dict[RelayFlow, type[_RelayRequest]] = {
    RelayFlow.PIPELINE: PipelineRequest,
    RelayFlow.SCHEDULING: SchedulingRequest,
}


# --- Outcomes ---


@dataclass(frozen=True)
class Success:
    payload: Any
    status_code: int = 200
    kind: ClassVar[str] = "success"


@dataclass(frozen=True)
class UpstreamRejected:
    status_code: int
    body: str
    kind: ClassVar[str] = "upstream_rejected"


@dataclass(frozen=True)
class UpstreamEmpty:
    status_code: int = 200
    kind: ClassVar[str] = "upstream_empty"


@dataclass(frozen=True)
class UpstreamMalformedJson:
    body_prefix: str
    status_code: int = 200
    kind: ClassVar[str] = "upstream_malformed_json"


@dataclass(frozen=True)
class TransportFailure:
    message: str
    kind: ClassVar[str] = "transport_failure"


@dataclass(frozen=True)
class ConfigurationMissing:
    flow: RelayFlow
    kind: ClassVar[str] = "configuration_missing"


RelayOutcome = Union[
    Success,
    UpstreamRejected,
    UpstreamEmpty,
    UpstreamMalformedJson,
    TransportFailure,
    ConfigurationMissing,
]


@dataclass
class RelayResponse:
    """Normalized response returned to the relay's caller."""

    body: Any
    status_code: int
