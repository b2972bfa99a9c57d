"""Command line entry point."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from surgeon.config import load_config
from surgeon.protocol.commands import CommandContext
from surgeon.protocol.dispatch import Dispatcher, Session
from surgeon.protocol.server import serve_stdio
from surgeon.refactoring.registry import default_registry

app = typer.Typer(add_completion=False, help="Refactoring engine driven by editor commands.")

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    # stdout carries protocol replies; logs must go to stderr
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def serve(
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Directory whose .surgeon/config.json overrides the global config.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr output (overrides config).",
    ),
) -> None:
    """Answer protocol requests on stdin, one JSON object per line."""
    config = load_config(config_dir)
    level = log_level or config.log_level
    if level.upper() not in logging.getLevelNamesMapping():
        raise typer.BadParameter(f"unknown log level: {level}", param_hint="--log-level")
    _configure_logging(level)

    session = Session(Dispatcher(CommandContext(config=config)))
    logger.info("Serving on stdio")
    try:
        asyncio.run(serve_stdio(session))
    except KeyboardInterrupt:
        raise typer.Exit(code=130)


@app.command()
def transformations() -> None:
    """Print the registered transformations."""
    for short_name, transformation in default_registry().all_registered().items():
        description = transformation.description()
        typer.echo(f"{short_name}\t{description.name}\t{description.quality.value}")


def main() -> None:
    app()
