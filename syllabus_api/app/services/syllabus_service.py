"""
Service layer for syllabus lookups.

``SyllabusService.get_by_id`` composes two read queries: one for the
syllabus row and one for the relation edges in which that syllabus is
the parent.  The queries are not wrapped in a transaction, so an edge
that points at a syllabus deleted in between is returned as stored.

All queries use parameterized statements.  The blocking driver calls
run in FastAPI's thread pool; within one request they still execute
one after the other.
"""

from __future__ import annotations

import logging
from typing import Any, List

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from syllabus_api.app.core.db import Database, StorageError
from syllabus_api.app.schemas.syllabus import RelationRead, SyllabusRead

logger = logging.getLogger(__name__)


class UnknownSyllabusError(LookupError):
    """No syllabus exists with the requested identifier."""

    def __init__(self, syllabus_id: str) -> None:
        super().__init__("unknown syllabus")
        self.syllabus_id = syllabus_id


class SyllabusService:
    """Read access to syllabuses and their immediate relations."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def get_by_id(self, syllabus_id: str) -> SyllabusRead:
        """Return the syllabus ``syllabus_id`` with its relations attached.

        Raises
        ------
        UnknownSyllabusError
            If no row matches ``syllabus_id``.
        StorageError
            On any other data-access failure.
        """
        return await run_in_threadpool(self._get_by_id, syllabus_id)

    def _get_by_id(self, syllabus_id: str) -> SyllabusRead:
        syllabus = self._get_syllabus(syllabus_id)
        relations = self._get_relations_by_parent_id(syllabus.id)
        logger.debug("Loaded syllabus %s with %d relation(s)", syllabus.id, len(relations))
        return syllabus.model_copy(update={"relations": relations})

    def _get_syllabus(self, syllabus_id: str) -> SyllabusRead:
        row = self.db.query_row(
            f"SELECT id, name, term FROM syllabuses WHERE id = {self.db.placeholder}",
            (syllabus_id,),
        )
        if row is None:
            raise UnknownSyllabusError(syllabus_id)
        return _scan_syllabus(row)

    def _get_relations_by_parent_id(self, parent_id: str) -> List[RelationRead]:
        relations: List[RelationRead] = []

        def collect(row: Any) -> None:
            relations.append(_scan_relation(row))

        self.db.run_query(
            "SELECT child_id, parent_id FROM syllabus_relations "
            f"WHERE parent_id = {self.db.placeholder}",
            collect,
            (parent_id,),
        )
        return relations


# A row that cannot be mapped (NULL or mistyped column) is a storage fault,
# not a caller error.
def _scan_syllabus(row: Any) -> SyllabusRead:
    try:
        return SyllabusRead(id=row[0], name=row[1], term=row[2])
    except ValidationError as exc:
        raise StorageError(f"malformed syllabus row: {exc}") from exc


def _scan_relation(row: Any) -> RelationRead:
    try:
        return RelationRead(child_id=row[0], parent_id=row[1])
    except ValidationError as exc:
        raise StorageError(f"malformed syllabus relation row: {exc}") from exc
