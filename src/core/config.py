"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los adaptadores HTTP leen timeouts y política de reintentos desde un único contrato.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "ruled-http"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ruled-http"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ruled-http"
    return Path.home() / ".config" / "ruled-http"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Los reintentos (cantidad e intervalo) son configurables; los valores por
    defecto reproducen la política fija: 3 intentos, 1 segundo entre ellos.
    """

    model_config = SettingsConfigDict(
        env_prefix="RULED_HTTP_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=100.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="ruled-http/0.1",
        min_length=1,
        description="User-Agent por defecto del cliente compartido.",
    )

    retry_count: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Intentos totales de un GET ante fallos de transporte.",
    )
    retry_interval_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Espera fija entre intentos de un GET (segundos).",
    )

    rules_path: Path | None = Field(
        default=None,
        description="Ruta a un JSON de reglas usado por la CLI si no se pasa --rules.",
    )
    log_level: LogLevel = Field(
        default="INFO",
        description="Nivel de log para la consola (loguru).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
