"""Repository interfaces shared by the remote and mock data sources."""

import logging
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional, Sequence

from config.exceptions import DataSourceError
from models.chapter import Chapter, ChapterFormData
from models.novel import Genre, Novel, NovelFormData
from services.notifications import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_genre_names(names: Iterable[str]) -> list[str]:
    """Strip requested genre names and drop blanks."""
    return [n.strip() for n in names if n and n.strip()]


def unique_genres(genres: Iterable[Genre]) -> list[Genre]:
    """Deduplicate by id, keeping the first occurrence."""
    seen: set[str] = set()
    result = []
    for genre in genres:
        if genre.id not in seen:
            seen.add(genre.id)
            result.append(genre)
    return result


def matches_query(novel: Novel, query: str) -> bool:
    """Case-insensitive substring match on title or description."""
    if not query:
        return True
    needle = query.casefold()
    return needle in novel.title.casefold() or needle in novel.description.casefold()


def has_all_genres(novel: Novel, genre_ids: Iterable[str]) -> bool:
    """True when every requested genre id is present on the novel."""
    return set(genre_ids) <= novel.genre_ids


def filter_novels(novels: Iterable[Novel], query: str = "", genre_ids: Sequence[str] = ()) -> list[Novel]:
    return [n for n in novels if matches_query(n, query) and has_all_genres(n, genre_ids)]


class BaseRepository:
    """Holds the notifier and the shared failure-reporting policy."""

    def __init__(self, notifier: Optional[Notifier] = None):
        self.notifier = notifier or LoggingNotifier()

    @contextmanager
    def _reporting(self, message: str) -> Iterator[None]:
        """Log, notify and re-raise any data source failure in the block."""
        try:
            yield
        except DataSourceError as e:
            logger.error("%s: %s", message, e)
            self.notifier.error(f"{message}: {e.message}")
            raise


class NovelRepository(BaseRepository, ABC):
    """CRUD and search over novels and the shared genre set."""

    @abstractmethod
    async def list_all(self) -> list[Novel]:
        ...

    @abstractmethod
    async def get(self, novel_id: str) -> Optional[Novel]:
        ...

    @abstractmethod
    async def create(self, form: NovelFormData) -> Novel:
        ...

    @abstractmethod
    async def update(self, novel_id: str, form: NovelFormData) -> Optional[Novel]:
        ...

    @abstractmethod
    async def delete(self, novel_id: str) -> bool:
        ...

    @abstractmethod
    async def list_genres(self) -> list[Genre]:
        ...

    @abstractmethod
    async def search(self, query: str = "", genre_ids: Sequence[str] = ()) -> list[Novel]:
        ...


class ChapterRepository(BaseRepository, ABC):
    """CRUD over chapters plus maintenance of the dense per-novel ordering."""

    @abstractmethod
    async def list_by_novel(self, novel_id: str) -> list[Chapter]:
        ...

    @abstractmethod
    async def get(self, chapter_id: str) -> Optional[Chapter]:
        ...

    @abstractmethod
    async def create(self, novel_id: str, form: ChapterFormData) -> Chapter:
        ...

    @abstractmethod
    async def update(self, chapter_id: str, form: ChapterFormData) -> Optional[Chapter]:
        ...

    @abstractmethod
    async def delete(self, chapter_id: str) -> bool:
        ...

    @abstractmethod
    async def reorder(self, novel_id: str, ordered_ids: Sequence[str]) -> bool:
        ...


def warn_omitted(novel_id: str, chapter_ids: Iterable[str], ordered_ids: Sequence[str]) -> None:
    """Log chapters left at their previous order by a partial reorder list."""
    omitted = sorted(set(chapter_ids) - set(ordered_ids))
    if omitted:
        logger.warning(
            "Reorder of novel %s omitted %d chapter(s), order unchanged: %s",
            novel_id, len(omitted), ", ".join(omitted),
        )
