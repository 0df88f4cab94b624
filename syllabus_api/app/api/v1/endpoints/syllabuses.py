"""
Syllabus endpoints for API v1.

Read-only: a syllabus is fetched by its identifier together with the
relation edges in which it is the parent.  Unknown identifiers map to
HTTP 404; any storage failure maps to HTTP 500 and is logged with its
traceback.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from syllabus_api.app.core.db import StorageError
from syllabus_api.app.schemas.syllabus import SyllabusRead
from syllabus_api.app.services.syllabus_service import SyllabusService, UnknownSyllabusError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_syllabus_service(request: Request) -> SyllabusService:
    """Return the service built at application startup."""
    return request.app.state.syllabus_service


@router.get("/{syllabus_id}", response_model=SyllabusRead)
async def get_syllabus(
    syllabus_id: str,
    service: SyllabusService = Depends(get_syllabus_service),
) -> SyllabusRead:
    """Retrieve a single syllabus and its relations by ID.

    Returns HTTP 404 if the syllabus is not found.
    """
    try:
        return await service.get_by_id(syllabus_id)
    except UnknownSyllabusError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StorageError as e:
        logger.exception("Failed to load syllabus %s", syllabus_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="internal server error",
        ) from e
