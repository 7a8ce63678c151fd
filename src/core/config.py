"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El cliente HTTP y la CLI leen la misma configuración (red, API key, paginación).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.network import Network


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "opensea-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "opensea-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "opensea-client"
    return Path.home() / ".config" / "opensea-client"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# opensea-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Los overrides explícitos (`api_base_url`, `host_url`) tienen prioridad
    sobre los valores derivados de `network`.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENSEA_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    network: Network = Field(
        default=Network.MAIN,
        description="Red objetivo (main | rinkeby).",
    )
    api_key: str | None = Field(
        default=None,
        description="API key enviada como cabecera X-API-KEY.",
    )
    api_base_url: str | None = Field(
        default=None,
        min_length=8,
        description="Override explícito de la URL base de la API.",
    )
    host_url: str | None = Field(
        default=None,
        min_length=8,
        description="Override explícito del host del sitio web.",
    )
    page_size: int = Field(
        default=20,
        ge=1,
        le=300,
        description="Tamaño de página para endpoints de listado.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="opensea-client/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones a la API.",
    )

    retry_delay_seconds: float = Field(
        default=0.0,
        ge=0,
        le=60,
        description="Espera fija entre reintentos ante fallos transitorios (0 = inmediato).",
    )
    post_order_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Reintentos por defecto para post_order.",
    )
    get_asset_retries: int = Field(
        default=1,
        ge=0,
        le=10,
        description="Reintentos por defecto para get_asset.",
    )
    get_tokens_retries: int = Field(
        default=1,
        ge=0,
        le=10,
        description="Reintentos por defecto para get_tokens.",
    )
