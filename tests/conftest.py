"""Shared test fixtures for recruit-relay."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from pydantic import SecretStr

from recruit_relay.audit.logger import AuditLogger
from recruit_relay.config import RelayConfig

PIPELINE_URL = "https://n8n.example.test/webhook/pipeline-secret-abc"
SCHEDULING_URL = "https://n8n.example.test/webhook/scheduling-secret-xyz"


@pytest.fixture
def mock_audit_logger() -> MagicMock:
    return MagicMock(spec=AuditLogger)


@pytest.fixture
def relay_config() -> RelayConfig:
    return make_relay_config()


# --- Factory functions for test data ---


def make_relay_config(**kwargs: Any) -> RelayConfig:
    """Factory for RelayConfig with both webhook URLs set."""
    defaults: dict[str, Any] = {
        "pipeline_webhook_url": SecretStr(PIPELINE_URL),
        "scheduling_webhook_url": SecretStr(SCHEDULING_URL),
        "timeout_seconds": 5.0,
    }
    defaults.update(kwargs)
    return RelayConfig(**defaults)


def make_pipeline_payload(**kwargs: Any) -> dict[str, Any]:
    defaults: dict[str, Any] = {
        "resume_text": "Jane Doe. Ten years of Python.",
        "job_description": "Senior backend engineer.",
        "job_id": "job-42",
    }
    defaults.update(kwargs)
    return defaults


def make_scheduling_payload(**kwargs: Any) -> dict[str, Any]:
    defaults: dict[str, Any] = {
        "candidate_email": "jane@example.com",
        "candidate_name": "Jane Doe",
        "job_title": "Senior Backend Engineer",
        "job_id": "job-42",
    }
    defaults.update(kwargs)
    return defaults


def make_mock_upstream(
    status_code: int = 200,
    content: bytes = b'{"ok": true}',
) -> AsyncMock:
    """Create a mock httpx.AsyncClient context manager with a preset response."""
    fake_response = httpx.Response(status_code=status_code, content=content)

    mock_instance = AsyncMock()
    mock_instance.post = AsyncMock(return_value=fake_response)
    mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_instance.__aexit__ = AsyncMock(return_value=False)
    return mock_instance


class RecordingUpstream:
    """Downstream webhook double for httpx.MockTransport that counts calls."""

    def __init__(
        self,
        status_code: int = 200,
        content: bytes = b'{"ok": true}',
        error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.error = error
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(status_code=self.status_code, content=self.content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream_factory() -> Callable[..., RecordingUpstream]:
    return RecordingUpstream
