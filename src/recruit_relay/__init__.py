"""recruit-relay: relays recruitment requests to n8n webhooks.

This package provides:
- Request validation for the pipeline and scheduling flows
- The webhook relay and its response normalizer
- A FastAPI app exposing the relay endpoints
- A client facade for calling those endpoints
"""

from recruit_relay.client.facade import RelayClient
from recruit_relay.config import RelayConfig, RelayTarget
from recruit_relay.errors import (
    ConfigurationError,
    RelayError,
    RelayRequestError,
    ValidationError,
)
from recruit_relay.proxy.app import create_app, create_app_from_env
from recruit_relay.webhook.models import (
    PipelineRequest,
    RelayFlow,
    RelayResponse,
    SchedulingRequest,
)
from recruit_relay.webhook.normalizer import normalize
from recruit_relay.webhook.relay import WebhookRelay, classify

__all__ = [
    "ConfigurationError",
    "PipelineRequest",
    "RelayClient",
    "RelayConfig",
    "RelayError",
    "RelayFlow",
    "RelayRequestError",
    "RelayResponse",
    "RelayTarget",
    "SchedulingRequest",
    "ValidationError",
    "WebhookRelay",
    "classify",
    "create_app",
    "create_app_from_env",
    "normalize",
]
