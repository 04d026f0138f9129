"""Cliente HTTP con reglas por prefijo de URL.

Qué hace:
- Decora cada petición con la primera regla cuyo `base_url` sea prefijo de la URL:
  concatena `rule.query` a la URL y añade `rule.headers`.
- Reintenta los GET ante fallos de red transitorios (`httpx.NetworkError`,
  `httpx.RemoteProtocolError`) con un número fijo de intentos y una espera fija.
  Los timeouts no se reintentan.
- Los PUT se envían una sola vez.

Limitación conocida:
- La query se concatena literalmente; si la URL ya trae `?a=b` el resultado
  puede ser una URL inválida. No se fusionan parámetros.
"""

from __future__ import annotations

import asyncio
from typing import Mapping, Sequence

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import HttpRule
from core.interfaces.dispatcher import RequestDispatcher
from core.logging import get_logger

logger = get_logger(__name__)

# Fallos de red que pueden desaparecer al reintentar. Timeouts, esquemas no
# soportados y headers inválidos quedan fuera: fallarían igual en cada intento.
TRANSIENT_ERRORS: tuple[type[httpx.TransportError], ...] = (httpx.NetworkError, httpx.RemoteProtocolError)


def match_rule(url: str, rules: Sequence[HttpRule]) -> HttpRule | None:
    """Devuelve la primera regla (en orden de lista) que aplica a `url`."""

    for rule in rules:
        if rule.matches(url):
            return rule
    return None


class RuledHttpClient(RequestDispatcher):
    """Dispatcher de peticiones decoradas por reglas.

    Reglas de diseño:
    - Un único `httpx.AsyncClient` de larga vida, propio o inyectado.
    - Cada intento construye un `httpx.Request` nuevo: el transporte no admite
      reenviar el mismo objeto.
    - Un status no-2xx no es un error aquí; la respuesta vuelve tal cual.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client if client is not None else build_async_client(self._settings)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def __aenter__(self) -> "RuledHttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        # Un cliente inyectado pertenece al llamador.
        if self._owns_client:
            await self._client.aclose()

    def match_rule(self, url: str, rules: Sequence[HttpRule]) -> HttpRule | None:
        return match_rule(url, rules)

    def build_request(
        self,
        url: str,
        rules: Sequence[HttpRule],
        method: str,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Request:
        """Construye la petición aplicando la regla que corresponda.

        Los headers de la regla se añaden a los ya presentes (defaults del
        cliente y `headers` incluidos) sin sobrescribir: un nombre repetido se envía dos veces.
        """

        rule = self.match_rule(url, rules)
        # TODO: fusionar la query cuando `url` ya contiene parámetros.
        target = url + rule.query if rule else url

        request = self._client.build_request(method, target, content=content, headers=headers)
        if rule and rule.headers:
            request.headers = httpx.Headers(
                [*request.headers.multi_items(), *rule.headers.items()]
            )

        # Query y headers de la regla pueden llevar secretos: solo se loguea el prefijo.
        logger.debug("{} {} (rule={})", method, url, rule.base_url if rule else None)
        return request

    async def get(self, url: str, rules: Sequence[HttpRule]) -> httpx.Response:
        """GET con hasta `retry_count` intentos ante `TRANSIENT_ERRORS`.

        Tras el último intento fallido la excepción original se propaga; cualquier
        otro `httpx.TransportError` (timeouts incluidos) se propaga sin reintento.
        """

        retry_count = self._settings.retry_count
        attempt = 0
        while True:
            attempt += 1
            request = self.build_request(url, rules, "GET")
            try:
                return await self._client.send(request)
            except TRANSIENT_ERRORS as exc:
                if attempt >= retry_count:
                    logger.error("GET {} failed after {} attempts: {!r}", url, attempt, exc)
                    raise
                logger.warning(
                    "GET {} attempt {}/{} failed: {!r}; retrying in {}s",
                    url,
                    attempt,
                    retry_count,
                    exc,
                    self._settings.retry_interval_seconds,
                )
            await asyncio.sleep(self._settings.retry_interval_seconds)

    async def put(
        self,
        url: str,
        content: bytes,
        rules: Sequence[HttpRule],
        *,
        content_type: str | None = None,
    ) -> httpx.Response:
        """PUT de un único intento; los fallos de transporte se propagan."""

        headers = {"Content-Type": content_type} if content_type else None
        request = self.build_request(url, rules, "PUT", content=content, headers=headers)
        return await self._client.send(request)
