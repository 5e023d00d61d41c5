"""Models package — entities, form payloads, enums, and the mock store."""

from models.novel import Genre, Novel, NovelFormData
from models.chapter import Chapter, ChapterFormData
from models.store import MemoryTable, MockStore
from models.enums import DataSourceMode, ChapterSort

__all__ = [
    "Genre",
    "Novel",
    "NovelFormData",
    "Chapter",
    "ChapterFormData",
    "MemoryTable",
    "MockStore",
    "DataSourceMode",
    "ChapterSort",
]
