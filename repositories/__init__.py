"""Repositories package — the remote and mock data sources behind one interface."""

from repositories.base import NovelRepository, ChapterRepository
from repositories.memory import MockNovelRepository, MockChapterRepository
from repositories.postgrest import RemoteClient, TableQuery
from repositories.remote import RemoteNovelRepository, RemoteChapterRepository
from repositories.selector import (
    DataSource,
    create_data_source,
    get_data_source,
    is_remote_configured,
    reset_data_source,
)

__all__ = [
    "NovelRepository",
    "ChapterRepository",
    "MockNovelRepository",
    "MockChapterRepository",
    "RemoteClient",
    "TableQuery",
    "RemoteNovelRepository",
    "RemoteChapterRepository",
    "DataSource",
    "create_data_source",
    "get_data_source",
    "is_remote_configured",
    "reset_data_source",
]
