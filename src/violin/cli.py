"""CLI interface for violin using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from violin import __description__, __version__
from violin.config import LogLevel, load_config
from violin.errors import ConfigurationError
from violin.validator import Violin

app = typer.Typer(
    name="violin",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2

_LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"violin version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """violin - rule-chain validation for form and request input."""


def _load_json_object(path: Path, label: str) -> dict[str, Any]:
    """Load a JSON file that must contain an object."""
    if not path.exists():
        raise FileNotFoundError(f"{label} file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = jsonlib.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{label} file must contain a JSON object: {path}")
    return data


def _load_messages(path: Path) -> dict[str, str]:
    """Load rule message templates, which must all be strings."""
    messages = _load_json_object(path, "Messages")

    for rule, template in messages.items():
        if not isinstance(template, str):
            raise ValueError(f"Message template for rule '{rule}' must be a string: {path}")
    return messages


def _setup_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else _LOG_LEVELS[LogLevel(level).value],
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def validate(
    data_file: Annotated[
        Path,
        typer.Argument(help="JSON file with field values")
    ],
    rules_file: Annotated[
        Path,
        typer.Argument(help="JSON file mapping fields to rule chains")
    ],
    messages_file: Annotated[
        Optional[Path],
        typer.Option("--messages", "-m", help="JSON file with rule message templates")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .violin.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Validate a JSON data file against rule chains."""
    valid_formats = ["table", "json"]

    if format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    try:
        violin_config = load_config(config)
        _setup_logging(violin_config.logging.level, verbose)

        data = _load_json_object(data_file, "Data")
        rules = _load_json_object(rules_file, "Rules")

        violin = Violin.from_config(violin_config)
        if messages_file is not None:
            violin.add_rule_messages(_load_messages(messages_file))

        result = violin.validate(data, rules)
        messages = result.errors()

    except (FileNotFoundError, ValueError, ConfigurationError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    if format == "json":
        payload = {
            "passes": result.passes(),
            "errors": messages.to_dict() if messages else {},
        }
        typer.echo(jsonlib.dumps(payload, indent=2))
    elif messages is None:
        console.print("[green]Validation passed[/green]")
    else:
        console.print(f"[red]Validation failed:[/red] {len(messages)} field(s) with errors")

        table = Table()
        table.add_column("Field", style="cyan")
        table.add_column("Message", style="white")

        for field, field_messages in messages.items():
            for message in field_messages:
                table.add_row(escape(field), escape(message))

        console.print(table)

    raise typer.Exit(EXIT_PASSED if result.passes() else EXIT_FAILED)


if __name__ == "__main__":
    app()
