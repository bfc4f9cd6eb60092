"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
import typer
from rich.console import Console

from kv_facade_core.config.settings import Settings
from kv_facade_core.exceptions import KVFacadeError
from kv_facade_core.models.entry import ExistsMode
from kv_facade_infra.observability import configure_logging
from kv_facade_infra.store.facade import KeyValueFacade
from kv_facade_infra.store.registry import ClientRegistry

app = typer.Typer(
    name="kv-facade",
    help="Immediate and transactional access to a Redis-compatible key-value store",
)
console = Console()
logger = structlog.get_logger()

VERSION = "0.1.0"


@app.command()
def get(
    key: str = typer.Argument(..., help="Key to read"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Print the value stored at KEY."""
    value = _run(lambda facade: facade.get_value(key), verbose=verbose)
    if value is None:
        console.print(f"[yellow]{key}[/yellow] not found")
        raise typer.Exit(code=1)
    console.print(value, markup=False, highlight=False)


@app.command("set")
def set_(
    key: str = typer.Argument(..., help="Key to write"),
    value: str = typer.Argument(..., help="Value to store"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Store VALUE at KEY."""
    status = _run(lambda facade: facade.set_value(key, value), verbose=verbose)
    console.print(f"[green]{status}[/green]")


@app.command("set-json")
def set_json(
    key: str = typer.Argument(..., help="Key to write"),
    document: str = typer.Argument(..., help="JSON document to store"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Validate DOCUMENT as JSON and store it at KEY."""
    try:
        parsed = json.loads(document)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] invalid JSON: {exc}")
        raise typer.Exit(code=1) from exc
    status = _run(lambda facade: facade.set_json_value(key, parsed), verbose=verbose)
    console.print(f"[green]{status}[/green]")


@app.command("get-json")
def get_json(
    key: str = typer.Argument(..., help="Key to read"),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on missing keys or malformed JSON instead of printing {}"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Print the JSON document stored at KEY."""
    value = _run(lambda facade: facade.get_json_value(key, strict=strict), verbose=verbose)
    if strict and value is None:
        console.print(f"[yellow]{key}[/yellow] not found")
        raise typer.Exit(code=1)
    console.print_json(data=value)


@app.command()
def keys(
    pattern: str = typer.Argument("*", help="Glob pattern"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """List keys matching PATTERN."""
    found = _run(lambda facade: facade.get_keys_by_pattern(pattern), verbose=verbose)
    for key in sorted(found):
        console.print(key, markup=False, highlight=False)
    console.print(f"[dim]{len(found)} key(s)[/dim]")


@app.command()
def delete(
    patterns: list[str] = typer.Argument(..., help="One or more glob patterns; '*' is refused"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Delete every key matching any of PATTERNS."""
    if len(patterns) == 1:
        status = _run(lambda facade: facade.delete_by_pattern(patterns[0]), verbose=verbose)
    else:
        status = _run(lambda facade: facade.delete_by_patterns(patterns), verbose=verbose)
    console.print(f"[green]{status}[/green]")


@app.command()
def exists(
    keys: list[str] = typer.Argument(..., help="Keys to check"),
    mode: str = typer.Option("all", "--mode", help="Quantifier: all, any or raw"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Check whether KEYS exist."""
    try:
        quantifier = ExistsMode(mode.upper())
    except ValueError as exc:
        console.print(f"[red]Error:[/red] unknown mode {mode!r}; use all, any or raw")
        raise typer.Exit(code=1) from exc

    result = _run(lambda facade: facade.check_exists(quantifier, *keys), verbose=verbose)
    if isinstance(result, list):
        for key, present in zip(keys, result, strict=True):
            console.print(f"{key}: {'[green]yes[/green]' if present else '[red]no[/red]'}")
        return
    console.print(str(result).lower())
    if not result:
        raise typer.Exit(code=1)


@app.command()
def flushall(
    yes: bool = typer.Option(False, "--yes", help="Confirm wiping every key in the store"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Remove every key from the store."""
    if not yes:
        console.print("[red]Error:[/red] flushall wipes the whole store; pass --yes to confirm")
        raise typer.Exit(code=1)
    status = _run(lambda facade: facade.flushall(), verbose=verbose)
    console.print(f"[green]{status}[/green]")


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"kv-facade v{VERSION}")


def _run(
    operation: Callable[[KeyValueFacade], Awaitable[Any]],
    *,
    verbose: bool,
) -> Any:  # noqa: ANN401
    """Configure logging, run ``operation`` on an immediate facade, render library errors."""
    settings = Settings()
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)

    try:
        return asyncio.run(_with_registry(settings, operation))
    except KVFacadeError as exc:
        logger.debug("cli_command_failed", error=str(exc))
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


async def _with_registry(
    settings: Settings,
    operation: Callable[[KeyValueFacade], Awaitable[Any]],
) -> Any:  # noqa: ANN401
    """Open a registry for one command and always close it."""
    registry = ClientRegistry(settings)
    try:
        return await operation(registry.get_client())
    finally:
        await registry.aclose()


if __name__ == "__main__":
    app()
