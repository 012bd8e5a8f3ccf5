"""Typer-based CLI for bundling, publishing and managing Central deployments."""

from __future__ import annotations

import json
from typing import Optional

import typer

from central_publisher.logging_config import configure_logging
from central_publisher.modules.publishing.pipeline import Stage
from central_publisher.modules.publishing.service import OperationResult, PublishingService
from central_publisher.settings import get_settings

app = typer.Typer(add_completion=False, help="central-publisher: bundle and publish Maven artifacts to Sonatype Central")


def build_service() -> PublishingService:
    settings = get_settings()
    configure_logging(settings.log_level)
    return PublishingService(settings)


def _report(result: OperationResult) -> None:
    """Echo ``result`` and exit non-zero on failure."""
    if not result.ok:
        typer.echo(f"ERROR: {result.message}", err=True)
        if result.data is not None:
            typer.echo(json.dumps(result.data, indent=2), err=True)
        raise typer.Exit(code=1)
    typer.echo(result.message)
    if result.data is not None:
        typer.echo(json.dumps(result.data, indent=2, ensure_ascii=False))


@app.command("publish")
def publish(
    publishing_type: Optional[str] = typer.Option(None, help="AUTOMATIC or USER_MANAGED"),
    component_type: Optional[str] = typer.Option(None, help="library or version-catalog"),
) -> None:
    """Generate, sign, aggregate, hash, zip and upload the bundle."""
    svc = build_service()
    try:
        _report(svc.publish(publishing_type=publishing_type, component_type=component_type))
    finally:
        svc.close()


@app.command("bundle")
def bundle(
    component_type: Optional[str] = typer.Option(None, help="library or version-catalog"),
    verify: bool = typer.Option(False, "--verify", help="Re-check every digest file after bundling"),
) -> None:
    """Build upload.zip without uploading it."""
    svc = build_service()
    try:
        result = svc.publish(component_type=component_type, until=Stage.CREATE_ARCHIVE)
        if result.ok and verify:
            _report(result)
            result = svc.verify_bundle()
        _report(result)
    finally:
        svc.close()


@app.command("status")
def status(deployment_id: str = typer.Argument(..., help="Deployment id returned by publish")) -> None:
    """Show the state of a deployment."""
    svc = build_service()
    try:
        _report(svc.deployment_status(deployment_id))
    finally:
        svc.close()


@app.command("drop")
def drop(deployment_id: str = typer.Argument(..., help="Deployment id returned by publish")) -> None:
    """Drop a deployment that has not been published yet."""
    svc = build_service()
    try:
        _report(svc.drop_deployment(deployment_id))
    finally:
        svc.close()


if __name__ == "__main__":  # pragma: no cover
    app()
