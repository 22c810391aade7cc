"""Response normalizer: maps a relay outcome to the caller-facing status and body."""

from __future__ import annotations

from recruit_relay.webhook.models import (
    FLOWS,
    ConfigurationMissing,
    RelayFlow,
    RelayOutcome,
    RelayResponse,
    Success,
    TransportFailure,
    UpstreamEmpty,
    UpstreamMalformedJson,
    UpstreamRejected,
)

# Empty and malformed bodies are 502 whatever 2xx status the webhook reported
_BAD_GATEWAY = 502
_SERVER_ERROR = 500


def _error(message: str, status_code: int) -> RelayResponse:
    return RelayResponse(body={"error": message}, status_code=status_code)


def normalize(flow: RelayFlow, outcome: RelayOutcome) -> RelayResponse:
    spec = FLOWS[flow]

    if isinstance(outcome, Success):
        return RelayResponse(body=outcome.payload, status_code=outcome.status_code)
    if isinstance(outcome, UpstreamRejected):
        message = outcome.body or f"{spec.label} failed with status {outcome.status_code}"
        return _error(message, outcome.status_code)
    if isinstance(outcome, UpstreamEmpty):
        return _error(spec.empty_message, _BAD_GATEWAY)
    if isinstance(outcome, UpstreamMalformedJson):
        return _error(f"{spec.malformed_prefix}{outcome.body_prefix}", _BAD_GATEWAY)
    if isinstance(outcome, TransportFailure):
        return _error(outcome.message or spec.unreachable_message, _SERVER_ERROR)
    if isinstance(outcome, ConfigurationMissing):
        return _error(FLOWS[outcome.flow].not_configured_message, _SERVER_ERROR)
    raise TypeError(f"Unknown relay outcome: {outcome!r}")
