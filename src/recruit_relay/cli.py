"""Click CLI for running and exercising the relay."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import click

from recruit_relay.client.facade import RelayClient
from recruit_relay.config import RelayConfig
from recruit_relay.errors import RelayError

_DEFAULT_BASE_URL = "http://127.0.0.1:8000"


@click.group()
@click.option("--log-level", default="INFO", help="Python logging level.")
def cli(log_level: str) -> None:
    """n8n recruitment webhook relay."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("check-config")
def check_config() -> None:
    """Verify both webhook URLs are configured."""
    result = RelayConfig.from_env().check()
    if not result.valid:
        click.echo(result.error, err=True)
        raise SystemExit(1)
    click.echo("Webhook configuration OK")


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=8000, type=int, help="Bind port.")
def serve(host: str, port: int) -> None:
    """Serve the relay endpoints with uvicorn."""
    import uvicorn

    uvicorn.run(
        "recruit_relay.proxy.app:create_app_from_env",
        factory=True,
        host=host,
        port=port,
    )


def _run(coro: Any) -> None:
    try:
        result = asyncio.run(coro)
    except RelayError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1) from e
    click.echo(json.dumps(result, indent=2))


@cli.command()
@click.option("--resume-file", required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--job-description-file", required=True,
              type=click.Path(exists=True, dir_okay=False))
@click.option("--job-id", required=True, help="Job identifier.")
@click.option("--calendar-id", default=None, help="Interviewer calendar (default: primary).")
@click.option("--base-url", default=_DEFAULT_BASE_URL, help="Relay base URL.")
def screen(
    resume_file: str,
    job_description_file: str,
    job_id: str,
    calendar_id: str | None,
    base_url: str,
) -> None:
    """Run the screening pipeline for a resume against a job description."""
    client = RelayClient(base_url)
    _run(client.run_pipeline({
        "resume_text": Path(resume_file).read_text(),
        "job_description": Path(job_description_file).read_text(),
        "job_id": job_id,
        "interviewer_calendar_id": calendar_id,
    }))


@cli.command()
@click.option("--email", required=True, help="Candidate email.")
@click.option("--name", required=True, help="Candidate name.")
@click.option("--job-title", required=True, help="Job title.")
@click.option("--job-id", required=True, help="Job identifier.")
@click.option("--calendar-id", default=None, help="Interviewer calendar (default: primary).")
@click.option("--base-url", default=_DEFAULT_BASE_URL, help="Relay base URL.")
def schedule(
    email: str,
    name: str,
    job_title: str,
    job_id: str,
    calendar_id: str | None,
    base_url: str,
) -> None:
    """Schedule an interview for a candidate."""
    client = RelayClient(base_url)
    _run(client.schedule_interview({
        "candidate_email": email,
        "candidate_name": name,
        "job_title": job_title,
        "job_id": job_id,
        "interviewer_calendar_id": calendar_id,
    }))
