"""FastAPI relay application exposing the pipeline and scheduling endpoints."""

from __future__ import annotations

import json
import logging
import time

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recruit_relay.audit.logger import AuditLogger
from recruit_relay.config import RelayConfig
from recruit_relay.errors import ValidationError
from recruit_relay.models import OUTCOME_RISK, AuditEvent, AuditEventType, RiskLevel
from recruit_relay.webhook.models import (
    FLOWS,
    RelayFlow,
    RelayOutcome,
    RelayResponse,
    Success,
    UpstreamEmpty,
    UpstreamMalformedJson,
    UpstreamRejected,
)
from recruit_relay.webhook.normalizer import normalize
from recruit_relay.webhook.relay import WebhookRelay
from recruit_relay.webhook.validator import parse_request

logger = logging.getLogger(__name__)

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    config = RelayConfig.from_env()
    check = config.check()
    if not check.valid:
        # Unconfigured flows still answer, with a 500 per request
        logger.error("Relay started with incomplete configuration: %s", check.error)
    audit_logger = (
        AuditLogger.from_env(config.audit_log_path) if config.audit_log_path else None
    )
    return create_app(config, audit_logger)


def create_app(
    config: RelayConfig,
    audit_logger: AuditLogger | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the relay app. ``transport`` replaces the network for the webhook calls."""
    app = FastAPI(docs_url=None, redoc_url=None)
    app.add_exception_handler(StarletteHTTPException, _http_error)  # type: ignore[arg-type]
    relays = {
        flow: WebhookRelay(
            config.target(flow), timeout=config.timeout_seconds, transport=transport,
        )
        for flow in RelayFlow
    }

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.api_route(FLOWS[RelayFlow.PIPELINE].route, methods=_ALL_METHODS)
    async def screen(request: Request) -> Response:
        return await _handle(request, relays[RelayFlow.PIPELINE], audit_logger)

    @app.api_route(FLOWS[RelayFlow.SCHEDULING].route, methods=_ALL_METHODS)
    async def schedule(request: Request) -> Response:
        return await _handle(request, relays[RelayFlow.SCHEDULING], audit_logger)

    return app


async def _http_error(request: Request, exc: StarletteHTTPException) -> Response:
    """Render routing errors (unknown path, unlisted method) as ``{"error": ...}``."""
    if exc.status_code == 405:
        message = "Method not allowed"
    else:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        {"error": message}, status_code=exc.status_code, headers=exc.headers,
    )


async def _handle(
    request: Request,
    relay: WebhookRelay,
    audit_logger: AuditLogger | None,
) -> Response:
    if request.method != "POST":
        return JSONResponse({"error": "Method not allowed"}, status_code=405)

    flow = relay.flow
    source_ip = request.client.host if request.client else None

    try:
        body = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None

    try:
        relay_request = parse_request(flow, body)
    except ValidationError as e:
        if audit_logger:
            audit_logger.log(AuditEvent(
                event_type=AuditEventType.VALIDATION_FAILURE,
                flow=flow,
                source_ip=source_ip,
                result="rejected",
                status_code=e.status_code or 400,
                risk_level=RiskLevel.LOW,
                details={"reason": e.message},
            ))
        return JSONResponse({"error": e.message}, status_code=e.status_code or 400)

    started = time.monotonic()
    outcome = await relay.relay(relay_request.to_forward_payload())
    duration_ms = int((time.monotonic() - started) * 1000)
    response = normalize(flow, outcome)

    if audit_logger:
        audit_logger.log(AuditEvent(
            event_type=AuditEventType.RELAY,
            flow=flow,
            source_ip=source_ip,
            result=outcome.kind,
            status_code=response.status_code,
            upstream_status=_upstream_status(outcome),
            duration_ms=duration_ms,
            risk_level=OUTCOME_RISK[outcome.kind],
        ))

    return _to_json_response(response)


def _upstream_status(outcome: RelayOutcome) -> int | None:
    if isinstance(
        outcome, (Success, UpstreamRejected, UpstreamEmpty, UpstreamMalformedJson),
    ):
        return outcome.status_code
    return None


def _to_json_response(response: RelayResponse) -> JSONResponse:
    return JSONResponse(content=response.body, status_code=response.status_code)
