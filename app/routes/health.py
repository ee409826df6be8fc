"""Health check endpoint."""

import logging

from fastapi import APIRouter, Depends

from app.feedback.errors import StorageError
from app.feedback.store import FeedbackStore
from app.models.schemas import HealthResponse
from app.routes.feedback import get_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
def health(store: FeedbackStore = Depends(get_store)):
    try:
        records = store.count()
        status = "ok"
    except StorageError as e:
        logger.warning("Health check could not reach storage: %s", e)
        records = None
        status = "degraded"

    return HealthResponse(
        status=status,
        service="campus-feedback-radar",
        storage_backend=store.backend_name,
        records=records,
    )
