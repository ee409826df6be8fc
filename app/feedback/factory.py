"""Build the one feedback store a process uses."""

import logging

from app.config import Settings
from app.feedback.sql_store import SqlFeedbackStore
from app.feedback.store import FeedbackStore, InMemoryFeedbackStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> FeedbackStore:
    if settings.storage_backend == "sql":
        store: FeedbackStore = SqlFeedbackStore(settings.database_url)
    else:
        store = InMemoryFeedbackStore()
    logger.info("Feedback store initialised (backend: %s)", store.backend_name)
    return store
