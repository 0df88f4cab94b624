"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables once, at process start, via
:meth:`Settings.from_env`.  Defaults are provided for all fields.  The
resulting object is passed explicitly into ``create_app`` and the
``Database``; nothing reads the environment after startup.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


def _get_env(env: Mapping[str, str], key: str, fallback: str) -> str:
    """Return ``env[key]`` unless it is missing or empty."""
    value = env.get(key, "")
    return value if value else fallback


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    project_name: str = "Syllabus Hierarchy API"
    api_version: str = "1.0.0"
    log_level: str = "INFO"
    log_file: str = ""

    # Database connection.  ``db_driver`` selects between ``postgres``
    # (psycopg2) and ``sqlite``; for SQLite ``db_name`` is the path of the
    # database file.
    db_driver: str = "postgres"
    db_host: str = "127.0.0.1"
    db_port: int = 5432
    db_user: str = ""
    db_password: str = ""
    db_name: str = ""
    db_sslmode: str = "disable"
    timezone: str = "Asia/Vientiane"

    # Apply the bundled migrations at startup.  Off by default: the
    # schema normally belongs to whoever owns the database.
    db_migrate: bool = False

    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (``os.environ`` by default)."""
        if env is None:
            env = os.environ
        return cls(
            project_name=_get_env(env, "PROJECT_NAME", cls.project_name),
            api_version=_get_env(env, "API_VERSION", cls.api_version),
            log_level=_get_env(env, "LOG_LEVEL", cls.log_level),
            log_file=_get_env(env, "LOG_FILE", cls.log_file),
            db_driver=_get_env(env, "DB_DRIVER", cls.db_driver).lower(),
            db_host=_get_env(env, "DB_HOST", cls.db_host),
            db_port=int(_get_env(env, "DB_PORT", str(cls.db_port))),
            db_user=_get_env(env, "DB_USER", cls.db_user),
            db_password=_get_env(env, "DB_PASSWORD", cls.db_password),
            db_name=_get_env(env, "DB_NAME", cls.db_name),
            db_sslmode=_get_env(env, "DB_SSLMODE", cls.db_sslmode),
            timezone=_get_env(env, "TZ", cls.timezone),
            db_migrate=_get_env(env, "DB_MIGRATE", "false").lower() in {"1", "true", "yes"},
            host=_get_env(env, "HOST", cls.host),
            port=int(_get_env(env, "PORT", str(cls.port))),
        )

    def postgres_params(self) -> Dict[str, Any]:
        """Return keyword arguments for ``psycopg2.connect``.

        Empty credentials are left out so that libpq can fall back to its
        own defaults (``PGUSER``, ``.pgpass`` and so on).
        """
        params: Dict[str, Any] = {
            "host": self.db_host,
            "port": self.db_port,
            "user": self.db_user,
            "password": self.db_password,
            "dbname": self.db_name,
            "sslmode": self.db_sslmode,
            "options": f"-c TimeZone={self.timezone}",
        }
        return {key: value for key, value in params.items() if value not in ("", None)}
