"""Application settings, read from CONNECT4_* environment variables."""

import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "CONNECT4_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    # frozen -> hashable, so a configuration can key the engine cache in src/db/database.py
    model_config = ConfigDict(frozen=True)

    database_url: str = "sqlite:///./connect4.db"
    echo_sql: bool = False
    log_level: str = "INFO"
    # Board dimensions used for newly created games
    rows: int = Field(default=6, ge=4)
    columns: int = Field(default=7, ge=4)
    recent_games_limit: int = Field(default=10, ge=1, le=100)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level {value!r}. Pick one from {','.join(LOG_LEVELS)}"
            )
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Only variables carrying the CONNECT4_ prefix are considered, e.g. CONNECT4_DATABASE_URL.
    pydantic takes care of the type conversion (and raises a ValidationError on nonsense values).
    """
    environ = os.environ if environ is None else environ
    values = {
        name: environ[f"{ENV_PREFIX}{name.upper()}"]
        for name in Settings.model_fields
        if f"{ENV_PREFIX}{name.upper()}" in environ
    }
    return Settings(**values)
