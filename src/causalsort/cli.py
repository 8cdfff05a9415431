"""
causalsort CLI - Order exported messages by their hash references.

Commands:
    causalsort sort     Print message keys from causally newest to oldest
    causalsort refs     List the references embedded in a JSON document
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from causalsort.config import get_config
from causalsort.errors import CausalSortError
from causalsort.extract import extract_references, parse_body
from causalsort.loader import MessageLoader, to_triples
from causalsort.log import configure_logging
from causalsort.sort import CausalSorter

__all__ = ["main"]

_LOG_LEVELS = click.Choice(["debug", "info", "warning", "error"], case_sensitive=False)


def _setup_logging(log_level: Optional[str]) -> None:
    config = get_config()
    configure_logging(level=log_level or config.log_level, fmt=config.log_format)


@click.group()
@click.version_option(package_name="causalsort")
def main() -> None:
    """causalsort - causal ordering of content-addressed messages."""
    pass


@main.command("sort")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(["text", "json"]), default="text",
    help="Output format",
)
@click.option(
    "--duplicates",
    type=click.Choice(["keep_first", "reject"]), default=None,
    help="Policy for repeated message keys (default from config)",
)
@click.option("--log-level", type=_LOG_LEVELS, default=None, help="Override log level")
def sort_cmd(
    file: Path,
    output_format: str,
    duplicates: Optional[str],
    log_level: Optional[str],
) -> None:
    """Sort the messages in FILE (JSON array or JSON Lines), newest first."""
    _setup_logging(log_level)

    try:
        records = MessageLoader().load(file)
    except ValueError as e:
        # pydantic ValidationError and JSONDecodeError are both ValueErrors
        raise click.ClickException(f"Could not load messages from {file}: {e}") from e

    try:
        result = CausalSorter(duplicate_policy=duplicates).sort(to_triples(records))
    except CausalSortError as e:
        if output_format == "json":
            click.echo(json.dumps(e.to_dict(), indent=2))
            raise SystemExit(1)
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(), indent=2))
        return

    for key in result.order:
        click.echo(key)


@main.command("refs")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def refs_cmd(file: Path) -> None:
    """List every hash reference embedded in the JSON document FILE."""
    body = parse_body(file.read_bytes())
    for ref in extract_references(body):
        click.echo(str(ref))


if __name__ == "__main__":
    main()
