"""Core configuration.

Why here:
- Centralizes the tool's knobs (pydantic-settings) without polluting the CLI.
- Holds the one-shot `.env` loader that runs before argument parsing.

The database URL is not part of `AppSettings`: it comes from `--url` or the
`DATABASE_URL` environment variable (see `cli.main`).
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigurationError

DEFAULT_ENV_FILE = Path(".env")
DEFAULT_RECREATE_SCRIPT = Path("./db_recreate.sh")
DEFAULT_SEED_FILE = Path("insert_data.sql")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def load_local_env(path: Path = DEFAULT_ENV_FILE) -> bool:
    """Best-effort load of a local `.env` into the process environment.

    Variables already present in the environment win. A missing file is not
    an error. Returns whether anything was loaded.
    """

    if not path.is_file():
        logger.debug("No %s file found; using the process environment only", path)
        return False
    loaded = load_dotenv(path, override=False, encoding="utf-8")
    logger.debug("Loaded environment from %s", path)
    return loaded


class AppSettings(BaseSettings):
    """Central configuration for db-ops (env vars prefixed `DB_OPS_`)."""

    model_config = SettingsConfigDict(
        env_prefix="DB_OPS_",
        extra="ignore",
        case_sensitive=False,
    )

    recreate_script: Path = Field(
        default=DEFAULT_RECREATE_SCRIPT,
        description="Executable that drops and recreates the schema.",
    )
    seed_file: Path = Field(
        default=DEFAULT_SEED_FILE,
        description="Default SQL file for `seed` and `reset`.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_settings() -> AppSettings:
    """Build `AppSettings`, reporting bad values as a `ConfigurationError`."""

    try:
        return AppSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(problems, context="Invalid configuration") from exc

