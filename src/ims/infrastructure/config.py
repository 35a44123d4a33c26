"""Runtime settings, read from the environment.

``load_settings()`` reads the variables at call time so a CLI invocation
(or a test) can point the application at another database.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _get_bool(env_name: str, default: bool = False) -> bool:
    val = os.getenv(env_name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    db_url: str
    log_level: str = "WARNING"
    sql_echo: bool = False


def load_settings() -> Settings:
    return Settings(
        db_url=os.getenv("IMS_DB_URL", f"sqlite:///{_DATA_DIR / 'ims.db'}"),
        log_level=os.getenv("IMS_LOG_LEVEL", "WARNING").upper(),
        sql_echo=_get_bool("IMS_SQL_ECHO", False),
    )
