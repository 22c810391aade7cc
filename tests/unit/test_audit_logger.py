"""Tests for the audit logger."""

from __future__ import annotations

import json
from pathlib import Path

from recruit_relay.audit.logger import AuditLogger
from recruit_relay.models import AuditEvent, AuditEventType, RiskLevel
from recruit_relay.webhook.models import RelayFlow


def _make_event(**kwargs: object) -> AuditEvent:
    defaults: dict[str, object] = {
        "event_type": AuditEventType.RELAY,
        "flow": RelayFlow.PIPELINE,
        "result": "success",
        "status_code": 200,
        "risk_level": RiskLevel.INFO,
    }
    defaults.update(kwargs)
    return AuditEvent(**defaults)  # type: ignore[arg-type]


def test_log_appends_json_line(tmp_path: Path) -> None:
    log_file = tmp_path / "audit.jsonl"
    logger = AuditLogger(log_path=str(log_file))
    logger.log(_make_event(upstream_status=200))

    lines = log_file.read_text().strip().split("\n")
    assert len(lines) == 1
    parsed = json.loads(lines[0])
    assert parsed["event_type"] == "relay"
    assert parsed["flow"] == "pipeline"
    assert parsed["upstream_status"] == 200
    assert parsed["risk_level"] == "info"


def test_log_multiple_events_append(tmp_path: Path) -> None:
    log_file = tmp_path / "audit.jsonl"
    logger = AuditLogger(log_path=str(log_file))

    for status in (200, 404, 502):
        logger.log(_make_event(status_code=status))

    lines = log_file.read_text().strip().split("\n")
    assert [json.loads(line)["status_code"] for line in lines] == [200, 404, 502]


def test_log_creates_parent_dirs(tmp_path: Path) -> None:
    log_file = tmp_path / "nested" / "dir" / "audit.jsonl"
    AuditLogger(log_path=str(log_file)).log(_make_event())
    assert log_file.exists()


def test_rotation_when_max_bytes_exceeded(tmp_path: Path) -> None:
    log_file = tmp_path / "audit.jsonl"
    logger = AuditLogger(log_path=str(log_file), max_bytes=100, backup_count=2)

    for _ in range(5):
        logger.log(_make_event())

    assert (tmp_path / "audit.jsonl.1").exists()
    assert (tmp_path / "audit.jsonl.2").exists()
    assert not (tmp_path / "audit.jsonl.3").exists()


def test_from_env_reads_rotation_settings(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AUDIT_LOG_MAX_BYTES", "2048")
    monkeypatch.setenv("AUDIT_LOG_BACKUP_COUNT", "3")
    logger = AuditLogger.from_env(str(tmp_path / "audit.jsonl"))
    assert logger._max_bytes == 2048
    assert logger._backup_count == 3


def test_timestamp_defaults_to_now() -> None:
    event = _make_event()
    assert event.timestamp.endswith("+00:00")
