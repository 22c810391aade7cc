"""Client facade for the relay endpoints.

Calls the local relay routes (``/api/screen``, ``/api/schedule``) rather than
the n8n webhooks, so the webhook URLs stay server-side.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from recruit_relay.errors import RelayRequestError
from recruit_relay.webhook.models import FLOWS, RelayFlow
from recruit_relay.webhook.validator import parse_request

logger = logging.getLogger(__name__)

# Downstream result shapes are owned by the n8n workflows and passed through as-is
ScreeningResult = dict[str, Any]
SchedulingResult = dict[str, Any]


class RelayClient:
    """Async caller-facing entry points, one per flow."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def run_pipeline(self, payload: Mapping[str, Any]) -> ScreeningResult:
        """Run the full screening pipeline.

        Raises:
            ValidationError: ``resume_text`` or ``job_description`` is blank.
            RelayRequestError: The relay answered with a non-2xx status.
        """
        return await self._call(RelayFlow.PIPELINE, payload)

    async def schedule_interview(self, payload: Mapping[str, Any]) -> SchedulingResult:
        """Schedule an interview for a candidate.

        Raises:
            ValidationError: ``candidate_email`` or ``candidate_name`` is blank.
            RelayRequestError: The relay answered with a non-2xx status.
        """
        return await self._call(RelayFlow.SCHEDULING, payload)

    async def _call(self, flow: RelayFlow, payload: Mapping[str, Any]) -> Any:
        spec = FLOWS[flow]
        request = parse_request(flow, payload)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    f"{self._base_url}{spec.route}",
                    json=request.to_forward_payload(),
                    timeout=self._timeout,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Relay %s unreachable: %s", spec.route, type(exc).__name__)
            raise RelayRequestError(
                str(exc) or f"{spec.label} request could not reach the relay",
            ) from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not resp.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            raise RelayRequestError(
                message or f"{spec.label} failed (status {resp.status_code})",
                status_code=resp.status_code,
            )
        return data
