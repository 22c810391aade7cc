"""Webhook relay: forwards one request to an n8n webhook and classifies the result.

Classification order (first match wins):
1. Transport failure (DNS, connect, timeout, invalid URL)
2. Non-2xx status
3. Blank body
4. Body that is not JSON
5. Success
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from recruit_relay.webhook.models import (
    FLOWS,
    MALFORMED_BODY_PREFIX_CHARS,
    ConfigurationMissing,
    RelayFlow,
    RelayOutcome,
    Success,
    TransportFailure,
    UpstreamEmpty,
    UpstreamMalformedJson,
    UpstreamRejected,
)

if TYPE_CHECKING:
    from recruit_relay.config import RelayTarget

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def classify(status_code: int, text: str) -> RelayOutcome:
    """Classify a completed HTTP exchange from its status and raw body.

    NaN and Infinity are not JSON and make the body malformed.
    """
    if not 200 <= status_code < 300:
        return UpstreamRejected(status_code=status_code, body=text)
    if not text.strip():
        return UpstreamEmpty(status_code=status_code)
    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return UpstreamMalformedJson(
            body_prefix=text[:MALFORMED_BODY_PREFIX_CHARS],
            status_code=status_code,
        )
    return Success(payload=payload, status_code=status_code)


class WebhookRelay:
    """Relays validated requests to the webhook URL of one flow.

    The target URL is a secret: it is never logged or returned.
    """

    def __init__(
        self,
        target: RelayTarget,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._target = target
        self._timeout = timeout
        self._transport = transport

    @property
    def flow(self) -> RelayFlow:
        return self._target.flow

    async def relay(self, payload: Mapping[str, Any]) -> RelayOutcome:
        """Forward ``payload`` exactly once and return the classified outcome."""
        spec = FLOWS[self._target.flow]
        if self._target.url is None:
            logger.error("%s webhook URL is not configured (%s)", spec.label, spec.config_env)
            return ConfigurationMissing(flow=self._target.flow)

        url = self._target.url.get_secret_value()
        headers = {"Content-Type": "application/json"}

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    url, json=dict(payload), headers=headers, timeout=self._timeout,
                )
                status_code = resp.status_code
                text = resp.text
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(
                "%s webhook unreachable: %s", spec.label, type(exc).__name__,
            )
            message = str(exc).replace(url, "<webhook-url>")
            return TransportFailure(message=message or spec.unreachable_message)

        outcome = classify(status_code, text)
        if not isinstance(outcome, Success):
            logger.warning(
                "%s webhook returned %s (status %d)", spec.label, outcome.kind, status_code,
            )
        return outcome
