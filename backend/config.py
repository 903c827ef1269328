"""
Server configuration.

Settings come from, in increasing priority:
  1. built-in defaults
  2. a TOML file (config.toml in the working directory, or --config PATH)
  3. TRAITS_* environment variables

A missing default config file is fine; a missing explicitly requested one is not.
"""
from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.toml")

ENV_PREFIX = "TRAITS_"


class ConfigError(RuntimeError):
    pass


class Settings(BaseModel):
    site_dir:     Path      = Path("./site/dist")
    host:         str       = "127.0.0.1"
    port:         int       = Field(8001, ge=1, le=65535)
    allow_origin: list[str] = Field(default_factory=list)


def _read_toml(path: Path) -> dict:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse config {path}: {e}") from e


def _env_overrides(environ: dict[str, str]) -> dict:
    out = {}
    for key in ("site_dir", "host", "port"):
        val = environ.get(ENV_PREFIX + key.upper())
        if val:
            out[key] = val
    origins = environ.get(ENV_PREFIX + "ALLOW_ORIGIN")
    if origins:
        out["allow_origin"] = [o.strip() for o in origins.split(",") if o.strip()]
    return out


def load_settings(
    config_path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    environ = dict(os.environ) if environ is None else environ

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Failed to read config: {path} does not exist")
        logger.info("Using config: %s", path)
        raw = _read_toml(path)
    elif DEFAULT_CONFIG_PATH.exists():
        logger.info("Using default config: %s", DEFAULT_CONFIG_PATH)
        raw = _read_toml(DEFAULT_CONFIG_PATH)
    else:
        logger.info("No config file found, using defaults")
        raw = {}

    raw.update(_env_overrides(environ))
    try:
        settings = Settings(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info("Config loaded")
    return settings
