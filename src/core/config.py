"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (transporte HTTP) lean config de forma consistente.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import set_key
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_SERVER_URL = "http://www.ensembl.org/biomart/martservice"


def get_user_config_dir() -> Path:
    """`$XDG_CONFIG_HOME/martclient`, o `~/.config/martclient` si no está definido."""

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "martclient"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes que no aparecen en `values` se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    if not env_path.exists():
        env_path.write_text("# martclient user config (.env)\n", encoding="utf-8")

    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Un único contrato de configuración para CLI y transporte.
    """

    model_config = SettingsConfigDict(
        env_prefix="MARTCLIENT_",
        extra="ignore",
        case_sensitive=False,
        env_file_encoding="utf-8",
    )

    server_url: str = Field(
        default=DEFAULT_SERVER_URL,
        min_length=8,
        description="URL completa del endpoint martservice.",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos). Las consultas grandes son lentas.",
    )
    user_agent: str = Field(
        default="martclient/0.1 (+https://local)",
        min_length=1,
        description="User-Agent de las peticiones.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Nivel de logging no soportado: {value}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # El .env de usuario se resuelve en cada instancia, no al importar.
        # Orden: proyecto primero (dev), luego config global de usuario.
        dotenv = DotEnvSettingsSource(settings_cls, env_file=(".env", get_user_env_file()))
        return init_settings, env_settings, dotenv, file_secret_settings
