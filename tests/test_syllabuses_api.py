"""
HTTP tests for ``GET /v1/syllabuses/{id}``.

Tests cover:
- The JSON shape of a found syllabus
- 404 for unknown identifiers
- 500 for storage failures and malformed rows
- Request logging
"""

import logging

from fastapi.testclient import TestClient

from syllabus_api.app.api.v1.endpoints.syllabuses import get_syllabus_service
from syllabus_api.app.core.config import Settings
from syllabus_api.app.core.db import StorageError
from syllabus_api.app.main import create_app


def test_get_syllabus_returns_aggregate(client, seed):
    seed(syllabuses=[("s1", "Algebra", "2024")], relations=[("s1", "s2")])

    response = client.get("/v1/syllabuses/s1")

    assert response.status_code == 200
    assert response.json() == {
        "id": "s1",
        "name": "Algebra",
        "term": "2024",
        "parents": [{"parentId": "s1", "childId": "s2"}],
    }


def test_get_syllabus_without_relations_has_empty_parents(client, seed):
    seed(syllabuses=[("s1", "Algebra", "2024")])

    response = client.get("/v1/syllabuses/s1")

    assert response.status_code == 200
    assert response.json()["parents"] == []


def test_unknown_syllabus_is_404(client):
    response = client.get("/v1/syllabuses/unknown")

    assert response.status_code == 404
    body = response.json()
    assert body == {"detail": "unknown syllabus"}
    for field in ("id", "name", "term", "parents"):
        assert field not in body


def test_storage_failure_is_500(tmp_path):
    # No migrations: the tables do not exist.
    settings = Settings(db_driver="sqlite", db_name=str(tmp_path / "empty.db"))

    with TestClient(create_app(settings)) as client:
        response = client.get("/v1/syllabuses/s1")

    assert response.status_code == 500
    assert response.json() == {"detail": "internal server error"}


def test_malformed_row_is_json_500_and_logged(client, nullable_schema, seed, caplog):
    seed(syllabuses=[("s1", None, "2024")])
    caplog.set_level(logging.INFO, logger="syllabus_api.app")

    response = client.get("/v1/syllabuses/s1")

    assert response.status_code == 500
    assert response.json() == {"detail": "internal server error"}
    assert "Failed to load syllabus s1" in caplog.text
    assert "GET /v1/syllabuses/s1 -> 500" in caplog.text


def test_service_errors_are_mapped_without_a_database(tmp_path):
    class FailingService:
        async def get_by_id(self, syllabus_id):
            raise StorageError("connection refused")

    app = create_app(Settings(db_driver="sqlite", db_name=str(tmp_path / "unused.db")))
    app.dependency_overrides[get_syllabus_service] = lambda: FailingService()

    response = TestClient(app).get("/v1/syllabuses/s1")

    assert response.status_code == 500


def test_requests_are_logged(client, seed, caplog):
    seed(syllabuses=[("s1", "Algebra", "2024")])
    caplog.set_level(logging.INFO, logger="syllabus_api.app.main")

    client.get("/v1/syllabuses/s1")
    client.get("/v1/syllabuses/missing")

    assert "GET /v1/syllabuses/s1 -> 200" in caplog.text
    assert "GET /v1/syllabuses/missing -> 404" in caplog.text


def test_startup_applies_migrations(tmp_path):
    settings = Settings(db_driver="sqlite", db_name=str(tmp_path / "fresh.db"), db_migrate=True)

    with TestClient(create_app(settings)) as client:
        response = client.get("/v1/syllabuses/s1")

    assert response.status_code == 404
