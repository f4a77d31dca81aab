"""
LiteSpec CLI.

    litespec compile models/customer.ls                  # schema JSON to stdout
    litespec compile models/customer.ls -o customer.json
    litespec validate models/customer.ls record.json     # exit 1 when invalid
"""

from __future__ import annotations

import json
import logging
import platform
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from litespec._version import get_version
from litespec.core import (
    CompilerOptions,
    LiteSpecError,
    ParseError,
    compile_file,
    find_config,
    load_options,
    validate_data,
)

console = Console(stderr=True)

app = typer.Typer(
    help="LiteSpec - compile terse data-model definitions to JSON Schema",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"LiteSpec version {get_version()}")
        typer.echo(f"  Python: {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log compiler decisions (DEBUG)"),
) -> None:
    """LiteSpec CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def print_error(message: str) -> None:
    console.print(f"[bold red]✗[/bold red] {message}", highlight=False)


def print_success(message: str) -> None:
    console.print(f"[bold green]✓[/bold green] {message}", highlight=False)


def _resolve_options(source: Path, config: Path | None) -> CompilerOptions:
    path = config if config is not None else find_config(source)
    return load_options(path)


def _compile_or_exit(source: Path, config: Path | None) -> dict[str, Any]:
    try:
        options = _resolve_options(source, config)
        return compile_file(source, options)
    except ParseError as e:
        print_error(f"Parse error: {e}")
        raise typer.Exit(code=1)
    except LiteSpecError as e:
        print_error(f"Error: {e}")
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Cannot read {source}: {e}")
        raise typer.Exit(code=1)


@app.command("compile")
def compile_command(
    source: Path = typer.Argument(..., help="LiteSpec file (.ls)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the schema here"),
    indent: int = typer.Option(2, "--indent", help="JSON indentation"),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="litespec.toml or pyproject.toml (default: next to source)"
    ),
) -> None:
    """
    Compile a LiteSpec file to JSON Schema.
    """
    schema = _compile_or_exit(source, config)
    rendered = json.dumps(schema, indent=indent if indent > 0 else None)

    if output is None:
        typer.echo(rendered)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered + "\n", encoding="utf-8")
    print_success(f"Wrote {output}")


@app.command("validate")
def validate_command(
    source: Path = typer.Argument(..., help="LiteSpec file (.ls)"),
    data: Path = typer.Argument(..., help="JSON document to check"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
) -> None:
    """
    Compile a LiteSpec file and validate a JSON document against it.
    """
    schema = _compile_or_exit(source, config)

    try:
        record = json.loads(data.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print_error(f"Cannot load {data}: {e}")
        raise typer.Exit(code=1)

    try:
        result = validate_data(schema, record)
    except LiteSpecError as e:
        print_error(f"Error: {e}")
        raise typer.Exit(code=1)

    if result.valid:
        print_success(f"{data} is valid")
        return

    table = Table(title=f"{data}: {len(result.errors or [])} problem(s)")
    table.add_column("Path")
    table.add_column("Keyword")
    table.add_column("Message")
    for issue in result.errors or []:
        table.add_row(issue.path, issue.keyword, issue.message)
    console.print(table)
    raise typer.Exit(code=1)


def main(argv: list[str] | None = None) -> None:
    app(args=argv)


if __name__ == "__main__":
    main()
