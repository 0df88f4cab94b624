"""
Database access and a simple migration system.

This module wraps the two supported drivers behind a small
``Database`` object: PostgreSQL through ``psycopg2`` (the production
setup) and SQLite through the standard library (handy for local runs
and tests).  Every call opens its own connection and closes it
afterwards; pooling is left to the server in front of the database.

Driver exceptions never leak out of this module.  They are re-raised
as :class:`StorageError`, chained to the original exception, so callers
can tell storage failures apart from their own errors.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.  It only
runs when ``Settings.db_migrate`` is enabled; normally the schema is
owned by whoever owns the database.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, Sequence

import psycopg2

from .config import Settings

logger = logging.getLogger(__name__)

DRIVER_ERRORS = (sqlite3.Error, psycopg2.Error)

SUPPORTED_DRIVERS = ("postgres", "sqlite")

DEFAULT_SQLITE_PATH = "syllabus.db"


class StorageError(RuntimeError):
    """Any data-access failure: connectivity, bad SQL, missing tables."""


class Database:
    """Handle to the configured relational store.

    Parameters
    ----------
    settings : Settings
        Application settings; ``db_driver`` picks the driver and the
        remaining ``db_*`` fields describe where the database lives.
    """

    def __init__(self, settings: Settings) -> None:
        driver = settings.db_driver
        if driver == "postgresql":
            driver = "postgres"
        if driver not in SUPPORTED_DRIVERS:
            raise ValueError(
                f"unsupported database driver {settings.db_driver!r}; "
                f"expected one of {', '.join(SUPPORTED_DRIVERS)}"
            )
        self.settings = settings
        self.driver = driver
        # Parameter marker understood by the driver's paramstyle.
        self.placeholder = "%s" if driver == "postgres" else "?"
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get_database_path(self) -> str:
        """Path of the SQLite database file.

        Relative paths are resolved against the current working
        directory.
        """
        return str(Path(self.settings.db_name or DEFAULT_SQLITE_PATH).resolve())

    def _open(self) -> Any:
        if self.driver == "sqlite":
            conn = sqlite3.connect(self.get_database_path())
            conn.row_factory = sqlite3.Row
            return conn
        return psycopg2.connect(**self.settings.postgres_params())

    @contextmanager
    def connect(self) -> Iterator[Any]:
        """Yield a new connection and close it on exit.

        Driver errors raised while connecting or inside the ``with``
        block are converted to :class:`StorageError`.
        """
        if self._closed:
            raise StorageError("database is closed")
        try:
            conn = self._open()
        except DRIVER_ERRORS as exc:
            raise StorageError(f"failed to connect to {self.driver} database: {exc}") from exc
        try:
            yield conn
        except DRIVER_ERRORS as exc:
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    def query_row(self, sql: str, params: Sequence[Any] = ()) -> Optional[Any]:
        """Execute ``sql`` and return the first row, or ``None`` if there is none."""
        with self.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(sql, tuple(params))
            return cursor.fetchone()

    def run_query(
        self,
        sql: str,
        collect: Callable[[Any], None],
        params: Sequence[Any] = (),
    ) -> None:
        """Execute ``sql`` and hand every resulting row to ``collect``."""
        with self.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(sql, tuple(params))
            for row in cursor:
                collect(row)

    def ping(self) -> None:
        """Check that the database is reachable; raises :class:`StorageError` otherwise."""
        self.query_row("SELECT 1")
        logger.info("Connected to %s database", self.driver)

    def close(self) -> None:
        """Refuse further queries.  Connections are per call, so nothing else is held."""
        self._closed = True
        logger.info("Closed %s database", self.driver)


# Each entry is ``(version, sql)``.  Statements are separated by ``;`` and
# must be valid for both PostgreSQL and SQLite.  Append new migrations
# with an incremented version number; never edit an applied one.
MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS syllabuses (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            term TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS syllabus_relations (
            parent_id TEXT NOT NULL,
            child_id TEXT NOT NULL,
            PRIMARY KEY (parent_id, child_id)
        );

        CREATE INDEX IF NOT EXISTS idx_syllabus_relations_child_id
            ON syllabus_relations(child_id);
        """,
    ),
]


def _statements(script: str) -> list[str]:
    return [stmt.strip() for stmt in script.split(";") if stmt.strip()]


def init_db(db: Database) -> int:
    """Apply pending migrations and return the resulting schema version."""
    with db.connect() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations ("
            "version INTEGER PRIMARY KEY, "
            "applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP)"
        )
        cursor.execute("SELECT MAX(version) FROM migrations")
        row = cursor.fetchone()
        current_version = row[0] if row and row[0] is not None else 0

        for version, script in MIGRATIONS:
            if version <= current_version:
                continue
            for statement in _statements(script):
                cursor.execute(statement)
            cursor.execute(
                f"INSERT INTO migrations (version) VALUES ({db.placeholder})",
                (version,),
            )
            current_version = version
            logger.info("Applied migration %s", version)

        conn.commit()
    return current_version
