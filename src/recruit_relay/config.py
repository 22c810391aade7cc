"""Relay configuration, built once at process startup."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from recruit_relay.errors import ConfigurationError
from recruit_relay.webhook.models import FLOWS, RelayFlow

_DEFAULT_TIMEOUT_SECONDS = 30.0

# Names used by the Next.js deployment this relay replaced
_LEGACY_ENV = {
    "N8N_PIPELINE_WEBHOOK": "NEXT_PUBLIC_N8N_PIPELINE_WEBHOOK",
    "N8N_SCHEDULING_WEBHOOK": "NEXT_PUBLIC_N8N_SCHEDULING_WEBHOOK",
}


@dataclass(frozen=True)
class RelayTarget:
    """Downstream endpoint for one flow. ``url`` is None when unconfigured."""

    flow: RelayFlow
    url: SecretStr | None


@dataclass
class ConfigCheckResult:
    valid: bool
    error: str | None = None


class RelayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    pipeline_webhook_url: SecretStr | None = None
    scheduling_webhook_url: SecretStr | None = None
    timeout_seconds: float = Field(default=_DEFAULT_TIMEOUT_SECONDS, gt=0)
    audit_log_path: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RelayConfig:
        """Read configuration from environment variables.

        Blank values are treated as unset.
        """
        env = os.environ if environ is None else environ

        def _read(name: str) -> str | None:
            value = env.get(name, "").strip()
            if not value and name in _LEGACY_ENV:
                value = env.get(_LEGACY_ENV[name], "").strip()
            return value or None

        timeout_raw = _read("RELAY_TIMEOUT_SECONDS")
        try:
            timeout = float(timeout_raw) if timeout_raw else _DEFAULT_TIMEOUT_SECONDS
        except ValueError as exc:
            raise ConfigurationError(
                f"RELAY_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}",
            ) from exc

        pipeline = _read(FLOWS[RelayFlow.PIPELINE].config_env)
        scheduling = _read(FLOWS[RelayFlow.SCHEDULING].config_env)
        return cls(
            pipeline_webhook_url=SecretStr(pipeline) if pipeline else None,
            scheduling_webhook_url=SecretStr(scheduling) if scheduling else None,
            timeout_seconds=timeout,
            audit_log_path=_read("AUDIT_LOG_PATH"),
        )

    def target(self, flow: RelayFlow) -> RelayTarget:
        url = (
            self.pipeline_webhook_url
            if flow is RelayFlow.PIPELINE
            else self.scheduling_webhook_url
        )
        return RelayTarget(flow=flow, url=url)

    def require(self, flow: RelayFlow) -> RelayTarget:
        """Return the flow's target, raising if its URL is not configured."""
        target = self.target(flow)
        if target.url is None:
            raise ConfigurationError(FLOWS[flow].not_configured_message)
        return target

    def check(self) -> ConfigCheckResult:
        """Report the first unconfigured webhook URL (pipeline first)."""
        for flow in (RelayFlow.PIPELINE, RelayFlow.SCHEDULING):
            if self.target(flow).url is None:
                return ConfigCheckResult(
                    valid=False, error=f"{FLOWS[flow].config_env} not configured",
                )
        return ConfigCheckResult(valid=True)
