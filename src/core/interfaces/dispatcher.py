"""Contrato del dispatcher de peticiones con reglas.

Por qué Protocol:
- La CLI y los consumidores dependen de `get`/`put`, no de httpx.
- Permite sustituir el dispatcher por un doble de pruebas sin herencia.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

import httpx

from core.domain.models import HttpRule


@runtime_checkable
class RequestDispatcher(Protocol):
    """Contrato mínimo para enviar peticiones decoradas por reglas.

    Reglas de diseño:
    - Ambos métodos son asíncronos (I/O de red).
    - La respuesta se devuelve sin modificar, sea cual sea su status.
    """

    async def get(self, url: str, rules: Sequence[HttpRule]) -> httpx.Response:
        """GET con reintentos ante fallos de transporte."""

        ...

    async def put(
        self,
        url: str,
        content: bytes,
        rules: Sequence[HttpRule],
        *,
        content_type: str | None = None,
    ) -> httpx.Response:
        """PUT de un único intento."""

        ...
