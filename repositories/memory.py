"""Repositories backed by the in-memory mock store.

Every operation sleeps first to emulate network latency. Records are
replaced whole (``dataclasses.replace``) rather than mutated in place.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Optional, Sequence

from models.chapter import Chapter, ChapterFormData
from models.novel import Genre, Novel, NovelFormData
from models.store import MockStore
from repositories.base import (
    ChapterRepository,
    NovelRepository,
    filter_novels,
    new_id,
    normalize_genre_names,
    unique_genres,
    utcnow,
    warn_omitted,
)
from services.notifications import Messages, Notifier

logger = logging.getLogger(__name__)


class _MockLatency:
    def __init__(self, read_delay: float, write_delay: float):
        self.read_delay = read_delay
        self.write_delay = write_delay

    async def read(self) -> None:
        if self.read_delay:
            await asyncio.sleep(self.read_delay)

    async def write(self) -> None:
        if self.write_delay:
            await asyncio.sleep(self.write_delay)


class MockNovelRepository(NovelRepository):
    def __init__(
        self,
        store: MockStore,
        notifier: Optional[Notifier] = None,
        read_delay: float = 0.0,
        write_delay: float = 0.0,
    ):
        super().__init__(notifier)
        self.store = store
        self._latency = _MockLatency(read_delay, write_delay)

    def _resolve_genres(self, names: list[str]) -> list[Genre]:
        """Reuse genres matching case-insensitively; mint the rest."""
        resolved = []
        for name in normalize_genre_names(names):
            key = name.casefold()
            existing = self.store.genres.find(lambda g: g.name.casefold() == key)
            if existing:
                resolved.append(existing[0])
                continue
            genre = Genre(id=new_id(), name=name)
            self.store.genres.insert(genre)
            logger.debug("Created genre %r (%s)", genre.name, genre.id)
            resolved.append(genre)
        return unique_genres(resolved)

    async def list_all(self) -> list[Novel]:
        await self._latency.read()
        return self.store.novels.list()

    async def get(self, novel_id: str) -> Optional[Novel]:
        await self._latency.read()
        return self.store.novels.get(novel_id)

    async def create(self, form: NovelFormData) -> Novel:
        await self._latency.write()
        now = utcnow()
        novel = Novel(
            id=new_id(),
            title=form.title,
            description=form.description,
            image_url=form.image_url,
            genres=self._resolve_genres(form.genres),
            created_at=now,
            updated_at=now,
        )
        self.store.novels.insert(novel)
        logger.info("Novel created: %s (%s)", novel.title, novel.id)
        self.notifier.success(Messages.NOVEL_CREATED)
        return novel

    async def update(self, novel_id: str, form: NovelFormData) -> Optional[Novel]:
        await self._latency.write()
        current = self.store.novels.get(novel_id)
        if current is None:
            self.notifier.error(Messages.NOVEL_NOT_FOUND)
            return None

        updated = replace(
            current,
            title=form.title,
            description=form.description,
            image_url=form.image_url,
            genres=self._resolve_genres(form.genres),
            updated_at=utcnow(),
        )
        self.store.novels.update(updated)
        self.notifier.success(Messages.NOVEL_UPDATED)
        return updated

    async def delete(self, novel_id: str) -> bool:
        await self._latency.write()
        if self.store.novels.delete(novel_id) is None:
            self.notifier.error(Messages.NOVEL_NOT_FOUND)
            return False

        removed = self.store.chapters.delete_where(lambda c: c.novel_id == novel_id)
        logger.info("Novel %s deleted with %d chapter(s)", novel_id, removed)
        self.notifier.success(Messages.NOVEL_DELETED)
        return True

    async def list_genres(self) -> list[Genre]:
        await self._latency.read()
        return self.store.genres.list()

    async def search(self, query: str = "", genre_ids: Sequence[str] = ()) -> list[Novel]:
        await self._latency.read()
        return filter_novels(self.store.novels.list(), query, genre_ids)


class MockChapterRepository(ChapterRepository):
    def __init__(
        self,
        store: MockStore,
        notifier: Optional[Notifier] = None,
        read_delay: float = 0.0,
        write_delay: float = 0.0,
    ):
        super().__init__(notifier)
        self.store = store
        self._latency = _MockLatency(read_delay, write_delay)

    def _chapters_of(self, novel_id: str) -> list[Chapter]:
        chapters = self.store.chapters.find(lambda c: c.novel_id == novel_id)
        return sorted(chapters, key=lambda c: c.order)

    async def list_by_novel(self, novel_id: str) -> list[Chapter]:
        await self._latency.read()
        return self._chapters_of(novel_id)

    async def get(self, chapter_id: str) -> Optional[Chapter]:
        await self._latency.read()
        return self.store.chapters.get(chapter_id)

    async def create(self, novel_id: str, form: ChapterFormData) -> Chapter:
        await self._latency.write()
        next_order = max((c.order for c in self._chapters_of(novel_id)), default=0) + 1
        now = utcnow()
        chapter = Chapter(
            id=new_id(),
            novel_id=novel_id,
            title=form.title,
            content=form.content,
            order=next_order,
            created_at=now,
            updated_at=now,
        )
        self.store.chapters.insert(chapter)
        logger.info("Chapter %d created for novel %s (%s)", next_order, novel_id, chapter.id)
        self.notifier.success(Messages.CHAPTER_CREATED)
        return chapter

    async def update(self, chapter_id: str, form: ChapterFormData) -> Optional[Chapter]:
        await self._latency.write()
        current = self.store.chapters.get(chapter_id)
        if current is None:
            self.notifier.error(Messages.CHAPTER_NOT_FOUND)
            return None

        updated = replace(current, title=form.title, content=form.content, updated_at=utcnow())
        self.store.chapters.update(updated)
        self.notifier.success(Messages.CHAPTER_UPDATED)
        return updated

    async def delete(self, chapter_id: str) -> bool:
        await self._latency.write()
        removed = self.store.chapters.delete(chapter_id)
        if removed is None:
            self.notifier.error(Messages.CHAPTER_NOT_FOUND)
            return False

        remaining = self._chapters_of(removed.novel_id)
        resequenced = [
            replace(c, order=position)
            for position, c in enumerate(remaining, start=1)
            if c.order != position
        ]
        self.store.chapters.update_many(resequenced)
        logger.info(
            "Chapter %s deleted; %d chapter(s) of novel %s renumbered",
            chapter_id, len(resequenced), removed.novel_id,
        )
        self.notifier.success(Messages.CHAPTER_DELETED)
        return True

    async def reorder(self, novel_id: str, ordered_ids: Sequence[str]) -> bool:
        await self._latency.write()
        positions = {cid: i for i, cid in enumerate(ordered_ids, start=1)}
        chapters = self._chapters_of(novel_id)
        warn_omitted(novel_id, (c.id for c in chapters), ordered_ids)

        self.store.chapters.update_many(
            replace(c, order=positions[c.id]) for c in chapters if c.id in positions
        )
        self.notifier.success(Messages.CHAPTER_ORDER_UPDATED)
        return True
