"""Read-only compositions behind the landing, novel detail and reader pages."""

import asyncio
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, Optional, Sequence, TypeVar

from config.settings import Settings
from models.chapter import Chapter
from models.enums import ChapterSort
from models.novel import Novel
from repositories.base import ChapterRepository, NovelRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _stamp(value: Optional[datetime]) -> datetime:
    return value or _EPOCH


@dataclass
class Page(Generic[T]):
    items: list[T]
    page: int
    per_page: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.per_page)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(items: Sequence[T], page: int, per_page: int) -> Page[T]:
    """Slice one page out of ``items``; ``page`` is clamped into range."""
    if per_page < 1:
        raise ValueError("per_page must be >= 1")
    total_pages = max(math.ceil(len(items) / per_page), 1)
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return Page(
        items=list(items[start:start + per_page]),
        page=page,
        per_page=per_page,
        total_items=len(items),
    )


@dataclass
class LatestChapter:
    chapter: Chapter
    novel: Novel


@dataclass
class HomePage:
    latest_novels: list[Novel]
    latest_chapters: Page[LatestChapter]


@dataclass
class NovelDetail:
    novel: Novel
    chapters: Page[Chapter]
    sort: ChapterSort = ChapterSort.OLDEST


@dataclass
class ReaderView:
    novel: Novel
    chapter: Chapter
    previous: Optional[Chapter] = None
    next: Optional[Chapter] = None
    chapter_count: int = 0


def latest_novels(novels: Sequence[Novel], limit: int = 4) -> list[Novel]:
    """Most recently updated novels first, at most ``limit``."""
    return sorted(novels, key=lambda n: _stamp(n.updated_at), reverse=True)[:limit]


def latest_chapter(chapters: Sequence[Chapter]) -> Optional[Chapter]:
    """The chapter with the greatest ``updated_at``, or None."""
    if not chapters:
        return None
    return max(chapters, key=lambda c: _stamp(c.updated_at))


def sort_chapters(chapters: Sequence[Chapter], sort: ChapterSort = ChapterSort.OLDEST) -> list[Chapter]:
    """Order chapters by creation time."""
    return sorted(
        chapters,
        key=lambda c: _stamp(c.created_at),
        reverse=sort == ChapterSort.NEWEST,
    )


def chapter_neighbors(
    chapters: Sequence[Chapter], current: Chapter
) -> tuple[Optional[Chapter], Optional[Chapter]]:
    """Return the chapters at ``order - 1`` and ``order + 1`` in the same novel.

    Relies on the dense ordering the repositories maintain; a gap yields None.
    """
    siblings = {c.order: c for c in chapters if c.novel_id == current.novel_id}
    return siblings.get(current.order - 1), siblings.get(current.order + 1)


async def collect_latest_chapters(
    novels_repo: NovelRepository,
    chapters_repo: ChapterRepository,
    novels: Optional[Sequence[Novel]] = None,
) -> list[LatestChapter]:
    """One (latest chapter, novel) pair per novel with chapters, newest first.

    Chapter lists are fetched concurrently; any failure aborts the batch.
    """
    if novels is None:
        novels = await novels_repo.list_all()
    chapter_lists = await asyncio.gather(*(chapters_repo.list_by_novel(n.id) for n in novels))

    pairs = []
    for novel, chapters in zip(novels, chapter_lists):
        chapter = latest_chapter(chapters)
        if chapter is not None:
            pairs.append(LatestChapter(chapter=chapter, novel=novel))
    pairs.sort(key=lambda p: _stamp(p.chapter.updated_at), reverse=True)
    return pairs


async def load_home(
    novels_repo: NovelRepository,
    chapters_repo: ChapterRepository,
    page: int = 1,
    settings: Optional[Settings] = None,
) -> HomePage:
    settings = settings or Settings()
    novels = await novels_repo.list_all()
    pairs = await collect_latest_chapters(novels_repo, chapters_repo, novels)
    return HomePage(
        latest_novels=latest_novels(novels, settings.latest_novels_limit),
        latest_chapters=paginate(pairs, page, settings.latest_chapters_page_size),
    )


async def load_novel_detail(
    novels_repo: NovelRepository,
    chapters_repo: ChapterRepository,
    novel_id: str,
    sort: ChapterSort = ChapterSort.OLDEST,
    page: int = 1,
    per_page: int = 10,
) -> Optional[NovelDetail]:
    """Novel with one page of its chapters, or None if the novel is absent."""
    novel, chapters = await asyncio.gather(
        novels_repo.get(novel_id),
        chapters_repo.list_by_novel(novel_id),
    )
    if novel is None:
        return None
    return NovelDetail(
        novel=novel,
        chapters=paginate(sort_chapters(chapters, sort), page, per_page),
        sort=sort,
    )


async def load_reader(
    novels_repo: NovelRepository,
    chapters_repo: ChapterRepository,
    novel_id: str,
    chapter_id: str,
) -> Optional[ReaderView]:
    novel, chapter, chapters = await asyncio.gather(
        novels_repo.get(novel_id),
        chapters_repo.get(chapter_id),
        chapters_repo.list_by_novel(novel_id),
    )
    if novel is None or chapter is None:
        return None
    if chapter.novel_id != novel.id:
        logger.warning("Chapter %s does not belong to novel %s", chapter_id, novel_id)
        return None

    previous, following = chapter_neighbors(chapters, chapter)
    return ReaderView(
        novel=novel,
        chapter=chapter,
        previous=previous,
        next=following,
        chapter_count=len(chapters),
    )
