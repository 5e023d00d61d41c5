"""Repositories backed by the remote table service."""

import json
import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from config.exceptions import DataSourceError, RowNotFoundError
from models.chapter import Chapter, ChapterFormData
from models.novel import Genre, Novel, NovelFormData
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
from repositories.postgrest import RemoteClient, escape_like, quote_value
from services.notifications import Messages, Notifier

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _format_timestamp(value: datetime) -> str:
    return value.isoformat()


def _parse_genres(raw: Any, novel_id: str) -> list[Genre]:
    """Read the embedded genres column, stored as a JSON array or string."""
    if not raw:
        return []
    try:
        items = json.loads(raw) if isinstance(raw, str) else raw
        return [Genre(id=str(g["id"]), name=g["name"]) for g in items]
    except (json.JSONDecodeError, TypeError, KeyError) as e:
        logger.error("Error parsing genres for novel %s: %s", novel_id, e)
        return []


def row_to_novel(row: dict) -> Novel:
    return Novel(
        id=str(row["id"]),
        title=row.get("title") or "",
        description=row.get("description") or "",
        image_url=row.get("image_url") or "",
        genres=_parse_genres(row.get("genres"), row["id"]),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def row_to_chapter(row: dict) -> Chapter:
    return Chapter(
        id=str(row["id"]),
        novel_id=str(row["novel_id"]),
        title=row.get("title") or "",
        content=row.get("content") or "",
        order=int(row["order"]),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


class RemoteNovelRepository(NovelRepository):
    def __init__(self, client: RemoteClient, notifier: Optional[Notifier] = None):
        super().__init__(notifier)
        self.client = client

    async def _resolve_genres(self, names: list[str]) -> list[Genre]:
        """Reuse genres matching case-insensitively; insert the rest.

        Names are compared client-side against the whole genre table;
        PostgREST patterns cannot match a literal ``*``. A failed lookup is
        treated as an empty table; insert failures drop that genre from the
        result. Both are logged only.
        """
        requested = normalize_genre_names(names)
        if not requested:
            return []

        try:
            rows = await self.client.table("genres").select("id,name").execute()
        except DataSourceError as e:
            logger.error("Error fetching genres: %s", e)
            rows = []
        known: dict[str, Genre] = {}
        for r in rows:
            known.setdefault(str(r["name"]).casefold(), Genre(id=str(r["id"]), name=r["name"]))

        resolved = []
        for name in requested:
            key = name.casefold()
            if key in known:
                resolved.append(known[key])
                continue

            try:
                created = await self.client.table("genres").insert({"id": new_id(), "name": name})
            except DataSourceError as e:
                logger.error("Error creating genre %r: %s", name, e)
                continue
            genre = Genre(id=str(created[0]["id"]), name=created[0]["name"])
            known[key] = genre
            resolved.append(genre)
        return unique_genres(resolved)

    @staticmethod
    def _genres_column(genres: list[Genre]) -> list[dict]:
        return [{"id": g.id, "name": g.name} for g in genres]

    async def list_all(self) -> list[Novel]:
        with self._reporting(Messages.FETCH_NOVELS_FAILED):
            rows = await (
                self.client.table("novels").select("*").order("created_at", ascending=False).execute()
            )
        return [row_to_novel(r) for r in rows]

    async def get(self, novel_id: str) -> Optional[Novel]:
        with self._reporting(Messages.FETCH_NOVEL_FAILED):
            try:
                row = await self.client.table("novels").select("*").eq("id", novel_id).single()
            except RowNotFoundError:
                return None
        return row_to_novel(row)

    async def create(self, form: NovelFormData) -> Novel:
        with self._reporting(Messages.CREATE_NOVEL_FAILED):
            genres = await self._resolve_genres(form.genres)
            now = _format_timestamp(utcnow())
            rows = await self.client.table("novels").insert({
                "id": new_id(),
                "title": form.title,
                "description": form.description,
                "image_url": form.image_url,
                "genres": self._genres_column(genres),
                "created_at": now,
                "updated_at": now,
            })
        novel = row_to_novel(rows[0])
        novel.genres = genres
        logger.info("Novel created: %s (%s)", novel.title, novel.id)
        self.notifier.success(Messages.NOVEL_CREATED)
        return novel

    async def update(self, novel_id: str, form: NovelFormData) -> Optional[Novel]:
        with self._reporting(Messages.UPDATE_NOVEL_FAILED):
            genres = await self._resolve_genres(form.genres)
            rows = await self.client.table("novels").eq("id", novel_id).update({
                "title": form.title,
                "description": form.description,
                "image_url": form.image_url,
                "genres": self._genres_column(genres),
                "updated_at": _format_timestamp(utcnow()),
            })
        if not rows:
            self.notifier.error(Messages.NOVEL_NOT_FOUND)
            return None
        novel = row_to_novel(rows[0])
        novel.genres = genres
        self.notifier.success(Messages.NOVEL_UPDATED)
        return novel

    async def delete(self, novel_id: str) -> bool:
        # Cascade first; a failure here leaves orphaned chapters but must not
        # block the novel delete.
        try:
            await self.client.table("chapters").eq("novel_id", novel_id).delete()
        except DataSourceError as e:
            logger.error("Error deleting chapters of novel %s: %s", novel_id, e)

        with self._reporting(Messages.DELETE_NOVEL_FAILED):
            rows = await self.client.table("novels").eq("id", novel_id).delete()
        if not rows:
            self.notifier.error(Messages.NOVEL_NOT_FOUND)
            return False
        logger.info("Novel %s deleted", novel_id)
        self.notifier.success(Messages.NOVEL_DELETED)
        return True

    async def list_genres(self) -> list[Genre]:
        with self._reporting(Messages.FETCH_GENRES_FAILED):
            rows = await self.client.table("genres").select("id,name").order("name").execute()
        return [Genre(id=str(r["id"]), name=r["name"]) for r in rows]

    async def search(self, query: str = "", genre_ids: Sequence[str] = ()) -> list[Novel]:
        if not query and not genre_ids:
            return await self.list_all()

        with self._reporting(Messages.SEARCH_NOVELS_FAILED):
            request = self.client.table("novels").select("*").order("created_at", ascending=False)
            if query:
                # "*" is a wildcard in PostgREST patterns; "_" narrows the server
                # match and the exact substring test runs below.
                needle = escape_like(query).replace("*", "_")
                pattern = quote_value(f"*{needle}*")
                request = request.or_(f"title.ilike.{pattern}", f"description.ilike.{pattern}")
            rows = await request.execute()
        return filter_novels((row_to_novel(r) for r in rows), query, genre_ids)


class RemoteChapterRepository(ChapterRepository):
    def __init__(self, client: RemoteClient, notifier: Optional[Notifier] = None):
        super().__init__(notifier)
        self.client = client

    async def list_by_novel(self, novel_id: str) -> list[Chapter]:
        with self._reporting(Messages.FETCH_CHAPTERS_FAILED):
            rows = await (
                self.client.table("chapters").select("*").eq("novel_id", novel_id).order("order").execute()
            )
        return [row_to_chapter(r) for r in rows]

    async def get(self, chapter_id: str) -> Optional[Chapter]:
        with self._reporting(Messages.FETCH_CHAPTER_FAILED):
            try:
                row = await self.client.table("chapters").select("*").eq("id", chapter_id).single()
            except RowNotFoundError:
                return None
        return row_to_chapter(row)

    async def create(self, novel_id: str, form: ChapterFormData) -> Chapter:
        with self._reporting(Messages.CREATE_CHAPTER_FAILED):
            last = await (
                self.client.table("chapters")
                .select("order")
                .eq("novel_id", novel_id)
                .order("order", ascending=False)
                .limit(1)
                .execute()
            )
            next_order = int(last[0]["order"]) + 1 if last else 1
            now = _format_timestamp(utcnow())
            rows = await self.client.table("chapters").insert({
                "id": new_id(),
                "novel_id": novel_id,
                "title": form.title,
                "content": form.content,
                "order": next_order,
                "created_at": now,
                "updated_at": now,
            })
        chapter = row_to_chapter(rows[0])
        logger.info("Chapter %d created for novel %s (%s)", chapter.order, novel_id, chapter.id)
        self.notifier.success(Messages.CHAPTER_CREATED)
        return chapter

    async def update(self, chapter_id: str, form: ChapterFormData) -> Optional[Chapter]:
        with self._reporting(Messages.UPDATE_CHAPTER_FAILED):
            rows = await self.client.table("chapters").eq("id", chapter_id).update({
                "title": form.title,
                "content": form.content,
                "updated_at": _format_timestamp(utcnow()),
            })
        if not rows:
            self.notifier.error(Messages.CHAPTER_NOT_FOUND)
            return None
        self.notifier.success(Messages.CHAPTER_UPDATED)
        return row_to_chapter(rows[0])

    async def _resequence(self, novel_id: str) -> int:
        """Renumber a novel's chapters to 1..N; failures are logged only."""
        try:
            rows = await (
                self.client.table("chapters").select("id,order").eq("novel_id", novel_id).order("order").execute()
            )
        except DataSourceError as e:
            logger.error("Error fetching remaining chapters of novel %s: %s", novel_id, e)
            return 0

        renumbered = 0
        for position, row in enumerate(rows, start=1):
            if int(row["order"]) == position:
                continue
            try:
                await self.client.table("chapters").eq("id", row["id"]).update({"order": position})
                renumbered += 1
            except DataSourceError as e:
                logger.error("Error renumbering chapter %s to %d: %s", row["id"], position, e)
        return renumbered

    async def delete(self, chapter_id: str) -> bool:
        with self._reporting(Messages.DELETE_CHAPTER_FAILED):
            try:
                target = await self.client.table("chapters").select("novel_id").eq("id", chapter_id).single()
            except RowNotFoundError:
                self.notifier.error(Messages.CHAPTER_NOT_FOUND)
                return False
            await self.client.table("chapters").eq("id", chapter_id).delete()

        novel_id = str(target["novel_id"])
        renumbered = await self._resequence(novel_id)
        logger.info(
            "Chapter %s deleted; %d chapter(s) of novel %s renumbered",
            chapter_id, renumbered, novel_id,
        )
        self.notifier.success(Messages.CHAPTER_DELETED)
        return True

    async def reorder(self, novel_id: str, ordered_ids: Sequence[str]) -> bool:
        with self._reporting(Messages.REORDER_CHAPTERS_FAILED):
            rows = await self.client.table("chapters").select("id").eq("novel_id", novel_id).execute()
        warn_omitted(novel_id, (str(r["id"]) for r in rows), ordered_ids)

        failed = []
        for position, chapter_id in enumerate(ordered_ids, start=1):
            try:
                await (
                    self.client.table("chapters")
                    .eq("id", chapter_id)
                    .eq("novel_id", novel_id)
                    .update({"order": position})
                )
            except DataSourceError as e:
                logger.error("Error updating order for chapter %s: %s", chapter_id, e)
                failed.append(chapter_id)

        if failed:
            self.notifier.error(Messages.REORDER_CHAPTERS_FAILED)
            return False
        self.notifier.success(Messages.CHAPTER_ORDER_UPDATED)
        return True
