"""Shared Pydantic models for recruit-relay audit records."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

from recruit_relay.webhook.models import RelayFlow


class AuditEventType(str, Enum):
    RELAY = "relay"
    VALIDATION_FAILURE = "validation_failure"


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


# Outcome kind -> risk level recorded in the audit trail
OUTCOME_RISK: dict[str, RiskLevel] = {
    "success": RiskLevel.INFO,
    "upstream_rejected": RiskLevel.MEDIUM,
    "upstream_empty": RiskLevel.HIGH,
    "upstream_malformed_json": RiskLevel.HIGH,
    "transport_failure": RiskLevel.HIGH,
    "configuration_missing": RiskLevel.HIGH,
}


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class AuditEvent(BaseModel):
    """One relay call. Never carries webhook URLs or request bodies."""

    timestamp: str = Field(default_factory=_now_iso)
    event_type: AuditEventType
    flow: RelayFlow
    source_ip: str | None = None
    result: str  # outcome kind, or "rejected" for validation failures
    status_code: int
    upstream_status: int | None = None
    duration_ms: int = Field(default=0, ge=0)
    risk_level: RiskLevel
    details: dict[str, object] | None = None
