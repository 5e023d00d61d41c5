"""Shared pytest fixtures for the novelshelf test suite."""

import json
import re
from datetime import datetime

import httpx
import pytest
import pytest_asyncio


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path):
    """Return a Settings instance in mock mode with no artificial latency."""
    from config.settings import Settings
    return Settings(
        _env_file=None,
        supabase_url="",
        supabase_anon_key="",
        mock_read_delay=0,
        mock_write_delay=0,
        log_dir=tmp_path / "logs",
    )


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class RecordingNotifier:
    """Collects notifications so tests can assert on them."""

    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def notifier():
    return RecordingNotifier()


# ---------------------------------------------------------------------------
# Mock store fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store():
    """Return a MockStore seeded with the sample data."""
    from models.store import MockStore
    return MockStore.seeded()


@pytest.fixture
def empty_store():
    from models.store import MockStore
    return MockStore()


@pytest.fixture
def mock_novels(store, notifier):
    from repositories.memory import MockNovelRepository
    return MockNovelRepository(store, notifier)


@pytest.fixture
def mock_chapters(store, notifier):
    from repositories.memory import MockChapterRepository
    return MockChapterRepository(store, notifier)


# ---------------------------------------------------------------------------
# Remote table service fake
# ---------------------------------------------------------------------------

_OR_CONDITION = re.compile(r'(\w+)\.ilike\."((?:[^"\\]|\\.)*)"')


def _like_to_regex(pattern: str) -> re.Pattern:
    parts = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "\\":
            parts.append(re.escape(next(chars, "")))
        elif ch in "*%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def _ilike(value, pattern: str) -> bool:
    return _like_to_regex(pattern).fullmatch(str(value or "")) is not None


class FakePostgrest:
    """In-process stand-in for the PostgREST endpoint, mounted via httpx.MockTransport.

    Supports the filters the client emits: ``eq``, ``or`` groups of
    ``ilike`` conditions, ``order`` and ``limit``. ``fail`` maps
    ``(method, table)`` to an HTTP status returned instead of the real result.
    """

    def __init__(self, tables: dict[str, list[dict]] | None = None):
        self.tables = {"novels": [], "chapters": [], "genres": []}
        self.tables.update(tables or {})
        self.requests: list[httpx.Request] = []
        self.fail: dict[tuple[str, str], int] = {}

    @classmethod
    def seeded(cls) -> "FakePostgrest":
        from models.mock_data import MOCK_CHAPTERS, MOCK_GENRES, MOCK_NOVELS

        def stamp(value: datetime) -> str:
            return value.isoformat().replace("+00:00", "Z")

        return cls({
            "genres": [{"id": g.id, "name": g.name} for g in MOCK_GENRES],
            "novels": [
                {
                    "id": n.id,
                    "title": n.title,
                    "description": n.description,
                    "image_url": n.image_url,
                    "genres": json.dumps([{"id": g.id, "name": g.name} for g in n.genres]),
                    "created_at": stamp(n.created_at),
                    "updated_at": stamp(n.updated_at),
                }
                for n in MOCK_NOVELS
            ],
            "chapters": [
                {
                    "id": c.id,
                    "novel_id": c.novel_id,
                    "title": c.title,
                    "content": c.content,
                    "order": c.order,
                    "created_at": stamp(c.created_at),
                    "updated_at": stamp(c.updated_at),
                }
                for c in MOCK_CHAPTERS
            ],
        })

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def rows(self, table: str, **eq) -> list[dict]:
        return [r for r in self.tables[table] if all(str(r.get(k)) == str(v) for k, v in eq.items())]

    def _matches(self, row: dict, filters: list[tuple[str, str]]) -> bool:
        for column, expr in filters:
            if column == "or":
                conditions = [
                    (col, re.sub(r"\\(.)", r"\1", quoted))
                    for col, quoted in _OR_CONDITION.findall(expr)
                ]
                if not any(_ilike(row.get(col), pat) for col, pat in conditions):
                    return False
            elif expr.startswith("eq."):
                if str(row.get(column)) != expr[3:]:
                    return False
            else:
                raise AssertionError(f"Unsupported filter {column}={expr}")
        return True

    @staticmethod
    def _project(rows: list[dict], columns: str) -> list[dict]:
        if columns == "*":
            return [dict(r) for r in rows]
        names = columns.split(",")
        return [{k: r.get(k) for k in names} for r in rows]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        table = request.url.path.rsplit("/", 1)[-1]
        if (request.method, table) in self.fail:
            return httpx.Response(
                self.fail[(request.method, table)],
                json={"code": "XX000", "message": "simulated failure"},
            )

        params = list(request.url.params.multi_items())
        columns = next((v for k, v in params if k == "select"), "*")
        order = next((v for k, v in params if k == "order"), None)
        limit = next((int(v) for k, v in params if k == "limit"), None)
        filters = [(k, v) for k, v in params if k not in ("select", "order", "limit")]
        returning = request.headers.get("Prefer") == "return=representation"

        if request.method == "POST":
            row = json.loads(request.content)
            self.tables[table].append(row)
            return httpx.Response(201, json=self._project([row], columns) if returning else None)

        matched = [r for r in self.tables[table] if self._matches(r, filters)]

        if request.method == "GET":
            if order:
                column, _, direction = order.rpartition(".")
                matched.sort(key=lambda r: r.get(column), reverse=direction == "desc")
            if limit is not None:
                matched = matched[:limit]
            return httpx.Response(200, json=self._project(matched, columns))

        if request.method == "PATCH":
            values = json.loads(request.content)
            for row in matched:
                row.update(values)
            return httpx.Response(200, json=self._project(matched, columns) if returning else [])

        if request.method == "DELETE":
            ids = {id(r) for r in matched}
            self.tables[table] = [r for r in self.tables[table] if id(r) not in ids]
            return httpx.Response(200, json=self._project(matched, columns) if returning else [])

        return httpx.Response(405, json={"message": "Method not allowed"})


@pytest.fixture
def postgrest():
    return FakePostgrest.seeded()


@pytest_asyncio.fixture
async def remote_client(postgrest):
    from repositories.postgrest import RemoteClient
    client = RemoteClient("https://example.supabase.co", "anon-key", transport=postgrest.transport())
    yield client
    await client.aclose()


@pytest.fixture
def remote_novels(remote_client, notifier):
    from repositories.remote import RemoteNovelRepository
    return RemoteNovelRepository(remote_client, notifier)


@pytest.fixture
def remote_chapters(remote_client, notifier):
    from repositories.remote import RemoteChapterRepository
    return RemoteChapterRepository(remote_client, notifier)
