from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# DB SQLite par défaut à la racine du projet
DEFAULT_DB_PATH = Path(__file__).resolve().parents[1] / "hospital.sqlite"
DEFAULT_DATABASE_URL = f"sqlite:///{DEFAULT_DB_PATH}"

SCHEMA_SYNC_MODES = ("none", "update", "create")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    db_username: str | None = None
    db_password: str | None = None
    schema_sync: str = "update"
    sql_echo: bool = False
    server_host: str = "127.0.0.1"
    server_port: int = 8080
    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self) -> None:
        if self.schema_sync not in SCHEMA_SYNC_MODES:
            raise ValueError(
                f"SCHEMA_SYNC invalide: {self.schema_sync!r} (attendu: {', '.join(SCHEMA_SYNC_MODES)})"
            )

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Settings":
        """Lit .env (si présent) puis les variables d'environnement."""
        load_dotenv(env_file)
        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            db_username=os.getenv("DB_USERNAME") or None,
            db_password=os.getenv("DB_PASSWORD") or None,
            schema_sync=os.getenv("SCHEMA_SYNC", "update").strip().lower(),
            sql_echo=_env_bool("SQL_ECHO"),
            server_host=os.getenv("SERVER_HOST", "127.0.0.1"),
            server_port=int(os.getenv("SERVER_PORT", "8080")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
        )
