"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:    str = "betapad"
    db_url:      str = "sqlite:///betapad.db"
    indent_unit: str = Field(default="  ", min_length=1, description="Text inserted per indent level in exports")
    resource_extensions: list[str] = Field(default=[".csv", ".txt"], description="File suffixes picked up by import")
    host:        str = Field(default="127.0.0.1", description="API bind host")
    port:        int = Field(default=8000, ge=1, le=65535, description="API bind port")
    log_level:   str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$", description="Default log level")


def _parse_env(name: str, val: str) -> Any:
    """List fields are given as comma-separated env values; pydantic coerces the rest."""
    if name == "resource_extensions":
        return [v.strip() for v in val.split(",") if v.strip()]
    return val


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BETAPAD_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"BETAPAD_{name.upper()}"):
            data[name] = _parse_env(name, val)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
