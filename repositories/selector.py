"""Data source selection: remote table service or in-memory mock store.

The choice is made once, from configuration, when a data source is built.
Callers receive the repositories explicitly and never branch on the mode.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from config.settings import Settings, get_settings
from models.enums import DataSourceMode
from models.store import MockStore
from repositories.base import ChapterRepository, NovelRepository
from repositories.memory import MockChapterRepository, MockNovelRepository
from repositories.postgrest import RemoteClient
from repositories.remote import RemoteChapterRepository, RemoteNovelRepository
from services.notifications import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)


@dataclass
class DataSource:
    """The novel and chapter repositories bound to one backing store."""
    mode: DataSourceMode
    novels: NovelRepository
    chapters: ChapterRepository
    client: Optional[RemoteClient] = None

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()


def is_remote_configured(settings: Settings) -> bool:
    """True iff both the endpoint URL and access key are non-empty."""
    return settings.remote_configured


def create_data_source(
    settings: Optional[Settings] = None,
    notifier: Optional[Notifier] = None,
    store: Optional[MockStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> DataSource:
    """Build repositories for the mode the configuration selects.

    Args:
        settings: Application settings. Defaults to the cached instance.
        notifier: Sink for user-facing messages. Defaults to logging.
        store: Mock store to use in mock mode. Defaults to a freshly seeded one.
        transport: Optional httpx transport for the remote client (tests).
    """
    settings = settings or get_settings()
    notifier = notifier or LoggingNotifier()

    if is_remote_configured(settings):
        client = RemoteClient(
            settings.supabase_url,
            settings.supabase_anon_key,
            timeout=settings.remote_timeout,
            transport=transport,
        )
        logger.info("Using remote data service at %s", client.base_url)
        return DataSource(
            mode=DataSourceMode.REMOTE,
            novels=RemoteNovelRepository(client, notifier),
            chapters=RemoteChapterRepository(client, notifier),
            client=client,
        )

    store = store if store is not None else MockStore.seeded()
    logger.info("Remote data service not configured; using mock store")
    return DataSource(
        mode=DataSourceMode.MOCK,
        novels=MockNovelRepository(
            store, notifier,
            read_delay=settings.mock_read_delay,
            write_delay=settings.mock_write_delay,
        ),
        chapters=MockChapterRepository(
            store, notifier,
            read_delay=settings.mock_read_delay,
            write_delay=settings.mock_write_delay,
        ),
    )


_data_source_instance: DataSource | None = None


def get_data_source() -> DataSource:
    """Get the process-wide data source, built on first use."""
    global _data_source_instance
    if _data_source_instance is None:
        _data_source_instance = create_data_source()
    return _data_source_instance


def reset_data_source() -> None:
    global _data_source_instance
    _data_source_instance = None
