"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Las reglas llegan de configuración externa (JSON); validarlas en el borde
  evita que el dispatcher tenga que defenderse de datos mal formados.
- `frozen=True`: una regla es de solo lectura durante el despacho.

Nota:
- Estos modelos describen *qué* decora una petición, no *cómo* se envía.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class HttpRule(BaseModel):
    """Regla de decoración para URLs que empiezan por `base_url`.

    Si la regla aplica, la URL final es `url + query` (concatenación literal)
    y cada header se añade a la petición.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    base_url: str = Field(
        default="",
        alias="baseUrl",
        description="Prefijo de URL. Una regla con prefijo vacío nunca aplica.",
    )
    query: str = Field(
        default="",
        description="Sufijo que se concatena tal cual a la URL (p.ej. '?token=abc').",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers a inyectar en la petición.",
    )

    def matches(self, url: str) -> bool:
        return bool(self.base_url) and url.startswith(self.base_url)


class RulesFile(BaseModel):
    """Documento JSON con la lista ordenada de reglas."""

    model_config = ConfigDict(extra="ignore")

    rules: list[HttpRule] = Field(
        default_factory=list,
        description="Reglas en orden de prioridad; gana la primera que aplica.",
    )
