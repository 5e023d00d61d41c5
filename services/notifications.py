"""User-facing notifications emitted by mutating repository operations."""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class Messages:
    """The fixed set of notification strings shown to users."""

    NOVEL_CREATED = "Novel created successfully!"
    NOVEL_UPDATED = "Novel updated successfully!"
    NOVEL_DELETED = "Novel deleted successfully!"
    NOVEL_NOT_FOUND = "Novel not found"
    CREATE_NOVEL_FAILED = "Failed to create novel"
    UPDATE_NOVEL_FAILED = "Failed to update novel"
    DELETE_NOVEL_FAILED = "Failed to delete novel"
    FETCH_NOVELS_FAILED = "Failed to fetch novels"
    FETCH_NOVEL_FAILED = "Failed to fetch novel"
    FETCH_GENRES_FAILED = "Failed to fetch genres"
    SEARCH_NOVELS_FAILED = "Failed to search novels"

    CHAPTER_CREATED = "Chapter created successfully!"
    CHAPTER_UPDATED = "Chapter updated successfully!"
    CHAPTER_DELETED = "Chapter deleted successfully!"
    CHAPTER_NOT_FOUND = "Chapter not found"
    CHAPTER_ORDER_UPDATED = "Chapter order updated"
    CREATE_CHAPTER_FAILED = "Failed to create chapter"
    UPDATE_CHAPTER_FAILED = "Failed to update chapter"
    DELETE_CHAPTER_FAILED = "Failed to delete chapter"
    REORDER_CHAPTERS_FAILED = "Failed to update chapter order"
    FETCH_CHAPTERS_FAILED = "Failed to fetch chapters"
    FETCH_CHAPTER_FAILED = "Failed to fetch chapter"


@runtime_checkable
class Notifier(Protocol):
    """Sink for success/failure messages visible to the caller's UI layer."""

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Default notifier that forwards messages to the standard logger."""

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.warning(message)
