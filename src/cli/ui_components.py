"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- `get` y `put` presentan la respuesta con la misma tabla/panel.
"""

from __future__ import annotations

import httpx
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import HttpRule

_BODY_PREVIEW_CHARS = 2000


def build_response_table(response: httpx.Response) -> Table:
    """Tabla con status y headers de la respuesta."""

    status_style = "green" if response.is_success else "yellow"
    table = Table(title=f"{response.request.method} {response.url}")
    table.add_column("Header", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("status", Text(f"{response.status_code} {response.reason_phrase}", style=status_style))
    for key, value in response.headers.multi_items():
        table.add_row(key, value)
    return table


def build_body_panel(response: httpx.Response) -> Panel:
    body = response.text
    if len(body) > _BODY_PREVIEW_CHARS:
        body = body[:_BODY_PREVIEW_CHARS] + "\n…"
    return Panel(Text(body), title="Body", border_style="dim")


def build_match_table(url: str, rule: HttpRule | None) -> Table:
    """Muestra qué regla aplicaría a `url` (valores de headers ocultos)."""

    table = Table(title="Rule match")
    table.add_column("Field", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("url", url)
    if rule is None:
        table.add_row("rule", Text("none", style="dim"))
        table.add_row("final url", url)
        return table

    table.add_row("rule", rule.base_url)
    table.add_row("final url", url + rule.query)
    table.add_row("headers", ", ".join(rule.headers) or "-")
    return table
