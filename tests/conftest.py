"""
Shared fixtures.

Tests run against a throw-away SQLite database in ``tmp_path`` with the
bundled migrations applied.
"""

from typing import Iterable, Tuple

import pytest
from fastapi.testclient import TestClient

from syllabus_api.app.core.config import Settings
from syllabus_api.app.core.db import Database, init_db
from syllabus_api.app.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(db_driver="sqlite", db_name=str(tmp_path / "syllabus.db"), db_migrate=True)


@pytest.fixture
def db(settings) -> Database:
    database = Database(settings)
    init_db(database)
    return database


@pytest.fixture
def seed(db):
    """Insert syllabus rows ``(id, name, term)`` and relation rows ``(parent_id, child_id)``."""

    def _seed(
        syllabuses: Iterable[Tuple[str, str, str]] = (),
        relations: Iterable[Tuple[str, str]] = (),
    ) -> None:
        with db.connect() as conn:
            conn.executemany(
                "INSERT INTO syllabuses (id, name, term) VALUES (?, ?, ?)", list(syllabuses)
            )
            conn.executemany(
                "INSERT INTO syllabus_relations (parent_id, child_id) VALUES (?, ?)",
                list(relations),
            )
            conn.commit()

    return _seed


@pytest.fixture
def client(settings, db):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def nullable_schema(db):
    """Rebuild both tables without NOT NULL constraints, as a foreign schema might."""
    with db.connect() as conn:
        conn.executescript(
            """
            DROP TABLE syllabuses;
            DROP TABLE syllabus_relations;
            CREATE TABLE syllabuses (id TEXT PRIMARY KEY, name TEXT, term TEXT);
            CREATE TABLE syllabus_relations (parent_id TEXT, child_id TEXT);
            """
        )
    return db
