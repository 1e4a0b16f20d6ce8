"""Application configuration, read from the environment once at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    database_path: Path = _DATA_DIR / "storefront.db"
    db_timeout: float = 5.0
    secret_key: str = "change-me"
    session_secret: str = "change-me-too"
    session_max_age: int = 24 * 60 * 60
    environment: str = "development"
    log_level: str | None = None

    @property
    def is_production(self) -> bool:
        return self.environment in ("production", "staging")

    @staticmethod
    def from_env() -> Settings:
        env = os.getenv
        return Settings(
            database_path=Path(env("STOREFRONT_DATABASE", str(_DATA_DIR / "storefront.db"))),
            db_timeout=float(env("STOREFRONT_DB_TIMEOUT", "5")),
            secret_key=env("STOREFRONT_SECRET_KEY", "change-me"),
            session_secret=env("STOREFRONT_SESSION_SECRET", "change-me-too"),
            session_max_age=int(env("STOREFRONT_SESSION_MAX_AGE", str(24 * 60 * 60))),
            environment=env("STOREFRONT_ENV", "development").lower(),
            log_level=env("LOG_LEVEL"),
        )
