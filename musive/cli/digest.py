"""CLI commands for the music news digest."""

import asyncio
import json
import logging
import sys
import uuid
from pathlib import Path

import click
import structlog
from pydantic import ValidationError

from musive import __version__
from musive.config.constants import COMPONENT_CLI
from musive.config.loader import ConfigValidationError, load_sources
from musive.config.registry import default_sources_config
from musive.config.schemas.sources import SourcesConfig
from musive.observability.logging import configure_logging
from musive.pipeline.digest import run_digest
from musive.pipeline.models import RunOutcome, RunStatus
from musive.renderer.json_renderer import JsonRenderer
from musive.settings.app import AppSettings, get_settings


logger = structlog.get_logger()


def _setup_logging(json_logs: bool, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    configure_logging(level=log_level, json_format=json_logs)


def _load_registry(sources_path: Path | None) -> SourcesConfig:
    """Load the source registry, exiting on an invalid file.

    Args:
        sources_path: Optional sources.yaml overriding the built-in feeds.

    Returns:
        The validated registry.
    """
    if sources_path is None:
        return default_sources_config()
    try:
        return load_sources(sources_path)
    except ConfigValidationError as e:
        click.echo(f"Configuration validation failed: {e.file_path}", err=True)
        for line in e.formatted():
            click.echo(f"  - {line}", err=True)
        sys.exit(1)


def _load_settings() -> AppSettings:
    try:
        return get_settings()
    except ValidationError as e:
        click.echo("Invalid environment settings:", err=True)
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"])
            click.echo(f"  - {loc}: {err['msg']}", err=True)
        sys.exit(1)


def _execute(sources_path: Path | None, trigger: str) -> RunOutcome:
    registry = _load_registry(sources_path)
    settings = _load_settings()
    return asyncio.run(
        run_digest(
            settings,
            registry.enabled_sources,
            run_id=str(uuid.uuid4()),
            trigger=trigger,
        )
    )


_sources_option = click.option(
    "--sources",
    "sources_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a sources.yaml overriding the built-in feeds.",
)
_json_logs_option = click.option(
    "--json-logs/--no-json-logs",
    default=True,
    help="Use JSON format for logs (default: true).",
)
_verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Daily music news digest CLI."""


@cli.command()
@_sources_option
@click.option(
    "--out",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("public"),
    show_default=True,
    help="Output directory for digest.json.",
)
@_json_logs_option
@_verbose_option
def run(
    sources_path: Path | None,
    output_dir: Path,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Run the daily digest and write digest.json.

    An empty digest writes nothing and exits 0. A failed run exits 1.
    """
    _setup_logging(json_logs, verbose)
    outcome = _execute(sources_path, trigger="scheduled")
    log = logger.bind(component=COMPONENT_CLI, command="run", run_id=outcome.run_id)

    if outcome.status == RunStatus.FAILED:
        click.echo(f"Digest run failed: {outcome.error}", err=True)
        sys.exit(1)

    if outcome.digest is None or outcome.status == RunStatus.EMPTY:
        log.info("delivery_skipped", reason="empty_digest")
        click.echo("No news items for today; nothing written.")
        return

    file_info = JsonRenderer(output_dir, outcome.run_id).render(outcome.digest)
    click.echo(
        f"Digest ready: {len(outcome.digest.items)} items -> {file_info.absolute_path}"
    )


@cli.command()
@_sources_option
@_json_logs_option
@_verbose_option
def inspect(sources_path: Path | None, json_logs: bool, verbose: bool) -> None:
    """Run the digest on demand and print it to stdout."""
    _setup_logging(json_logs, verbose)
    outcome = _execute(sources_path, trigger="inspect")

    if outcome.status == RunStatus.FAILED:
        click.echo(f"Digest run failed: {outcome.error}", err=True)
        sys.exit(1)

    items = outcome.digest.items if outcome.digest else []
    payload = {
        "count": len(items),
        "data": [item.to_json_dict() for item in items],
    }
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@cli.command()
@_sources_option
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
def sources(sources_path: Path | None, json_output: bool) -> None:
    """List the registered feeds."""
    registry = _load_registry(sources_path)

    if json_output:
        output = [source.model_dump() for source in registry.sources]
        click.echo(json.dumps(output, indent=2))
        return

    click.echo(f"Sources: {len(registry.sources)}")
    for source in registry.sources:
        marker = "" if source.enabled else " (disabled)"
        click.echo(f"  {source.id}: {source.name} <{source.url}>{marker}")
