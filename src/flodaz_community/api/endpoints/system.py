"""Health endpoint for the Flodaz Community API."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from flodaz_community.api.dependencies import SessionDep
from flodaz_community.core.errors import StoreError
from flodaz_community.db.time import utcnow
from flodaz_community.repositories import PostRepository
from flodaz_community.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health_check(db: SessionDep) -> HealthResponse:
    """Report liveness and whether the content store answers a trivial query.

    Always responds 200; a failing database only changes the ``database`` field.
    """
    timestamp = utcnow().isoformat().replace("+00:00", "Z")
    try:
        PostRepository(db).ping()
    except StoreError:
        database = "Connection failed"
    except Exception as exc:  # noqa: BLE001
        logger.warning("Health check could not test the database: %s", exc)
        return HealthResponse(
            status="OK",
            timestamp=timestamp,
            message="Server running, database connection not tested",
            database="Unknown",
        )
    else:
        database = "Connected"

    return HealthResponse(
        status="OK",
        timestamp=timestamp,
        message="Server is running successfully!",
        database=database,
    )
