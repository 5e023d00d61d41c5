"""In-memory mock store used when no remote data service is configured."""

import copy
import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, Optional, TypeVar

from models.chapter import Chapter
from models.novel import Genre, Novel

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MemoryTable(Generic[T]):
    """Ordered map of records keyed by their ``id`` attribute.

    Mutations build a new map and swap it in, so a reader holding the old
    map never sees a half-applied change. Records are deep-copied on the way
    in and out; callers cannot alias stored state.
    """

    def __init__(self, records: Iterable[T] = ()):
        self._rows: dict[str, T] = {}
        for record in records:
            self._rows[record.id] = copy.deepcopy(record)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._rows

    def get(self, record_id: str) -> Optional[T]:
        record = self._rows.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def find(self, predicate: Callable[[T], bool]) -> list[T]:
        return [copy.deepcopy(r) for r in self._rows.values() if predicate(r)]

    def insert(self, record: T) -> T:
        if record.id in self._rows:
            raise KeyError(f"Duplicate id: {record.id}")
        rows = dict(self._rows)
        rows[record.id] = copy.deepcopy(record)
        self._rows = rows
        return copy.deepcopy(record)

    def update(self, record: T) -> bool:
        """Replace the stored record with the same id. False if absent."""
        if record.id not in self._rows:
            return False
        rows = dict(self._rows)
        rows[record.id] = copy.deepcopy(record)
        self._rows = rows
        return True

    def update_many(self, records: Iterable[T]) -> int:
        """Replace several records in one swap. Unknown ids are ignored."""
        rows = dict(self._rows)
        updated = 0
        for record in records:
            if record.id in rows:
                rows[record.id] = copy.deepcopy(record)
                updated += 1
        self._rows = rows
        return updated

    def delete(self, record_id: str) -> Optional[T]:
        """Remove a record and return it, or None if absent."""
        if record_id not in self._rows:
            return None
        rows = dict(self._rows)
        removed = rows.pop(record_id)
        self._rows = rows
        return removed

    def delete_where(self, predicate: Callable[[T], bool]) -> int:
        rows = {k: v for k, v in self._rows.items() if not predicate(v)}
        removed = len(self._rows) - len(rows)
        self._rows = rows
        return removed

    # Defined last: the name shadows the builtin for the rest of the class body.
    def list(self) -> list[T]:
        return [copy.deepcopy(r) for r in self._rows.values()]


@dataclass
class MockStore:
    """The three tables backing the mock repositories."""
    novels: MemoryTable[Novel] = field(default_factory=MemoryTable)
    chapters: MemoryTable[Chapter] = field(default_factory=MemoryTable)
    genres: MemoryTable[Genre] = field(default_factory=MemoryTable)

    @classmethod
    def seeded(cls) -> "MockStore":
        """Return a store pre-loaded with the fixed sample data."""
        from models.mock_data import MOCK_CHAPTERS, MOCK_GENRES, MOCK_NOVELS

        store = cls(
            novels=MemoryTable(MOCK_NOVELS),
            chapters=MemoryTable(MOCK_CHAPTERS),
            genres=MemoryTable(MOCK_GENRES),
        )
        logger.debug(
            "Mock store seeded: %d novels, %d chapters, %d genres",
            len(store.novels), len(store.chapters), len(store.genres),
        )
        return store
