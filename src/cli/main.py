"""CLI de ruled-http (Typer + Rich)."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.ruled_http_client import RuledHttpClient, match_rule
from adapters.rules_loader import load_rules
from cli.ui_components import build_body_panel, build_match_table, build_response_table
from core.config import AppSettings
from core.domain.models import HttpRule
from core.logging import setup_logging

app = typer.Typer(no_args_is_help=True, help="HTTP requests decorated by URL-prefix rules.")

_console = Console()

RulesOption = typer.Option(
    None,
    "--rules",
    "-r",
    help="JSON file with the ordered rule list (defaults to RULED_HTTP_RULES_PATH).",
)


def _resolve_rules(path: Path | None, settings: AppSettings) -> list[HttpRule]:
    path = path or settings.rules_path
    if path is None:
        return []
    try:
        return load_rules(path).rules
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"rules file not found: {path}") from exc
    except (json.JSONDecodeError, ValidationError) as exc:
        raise typer.BadParameter(f"invalid rules file {path}: {exc}") from exc


def _print_response(response: httpx.Response) -> None:
    _console.print(build_response_table(response))
    if response.content:
        _console.print(build_body_panel(response))


async def _get(url: str, rules: list[HttpRule], settings: AppSettings) -> httpx.Response:
    async with RuledHttpClient(settings) as client:
        return await client.get(url, rules)


async def _put(
    url: str,
    content: bytes,
    rules: list[HttpRule],
    settings: AppSettings,
    content_type: str | None,
) -> httpx.Response:
    async with RuledHttpClient(settings) as client:
        return await client.put(url, content, rules, content_type=content_type)


@app.command()
def get(
    url: str = typer.Argument(..., help="Target URL."),
    rules_path: Path | None = RulesOption,
) -> None:
    """Send a GET (retried on transient network failures) and show the response."""

    settings = AppSettings()
    setup_logging(settings)
    rules = _resolve_rules(rules_path, settings)

    try:
        response = asyncio.run(_get(url, rules, settings))
    except httpx.TransportError as exc:
        _console.print(f"[red]Transport error:[/red] {escape(repr(exc))}")
        raise typer.Exit(code=1) from exc

    _print_response(response)


@app.command()
def put(
    url: str = typer.Argument(..., help="Target URL."),
    data: str | None = typer.Option(None, "--data", "-d", help="Request body as text (UTF-8)."),
    file: Path | None = typer.Option(
        None,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Read the request body from a file.",
    ),
    content_type: str | None = typer.Option(None, "--content-type", "-t", help="Content-Type of the body."),
    rules_path: Path | None = RulesOption,
) -> None:
    """Send a single PUT (never retried) and show the response."""

    if (data is None) == (file is None):
        raise typer.BadParameter("pass exactly one of --data or --file")

    settings = AppSettings()
    setup_logging(settings)
    rules = _resolve_rules(rules_path, settings)
    content = data.encode("utf-8") if data is not None else file.read_bytes()

    try:
        response = asyncio.run(_put(url, content, rules, settings, content_type))
    except httpx.TransportError as exc:
        _console.print(f"[red]Transport error:[/red] {escape(repr(exc))}")
        raise typer.Exit(code=1) from exc

    _print_response(response)


@app.command()
def match(
    url: str = typer.Argument(..., help="URL to test against the rules."),
    rules_path: Path | None = RulesOption,
) -> None:
    """Show which rule would decorate URL, without sending anything."""

    settings = AppSettings()
    rules = _resolve_rules(rules_path, settings)
    _console.print(build_match_table(url, match_rule(url, rules)))


def run() -> None:
    app()
