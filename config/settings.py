"""Configuration settings loaded from .env file."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, loaded from the environment and .env file.

    The remote data service is used only when both ``supabase_url`` and
    ``supabase_anon_key`` are set; otherwise every repository runs against
    the in-memory mock store.
    """

    # Remote data service
    supabase_url: str = ""
    supabase_anon_key: str = ""
    remote_timeout: float = 10.0

    # Mock store latency, in seconds
    mock_read_delay: float = 0.3
    mock_write_delay: float = 0.8

    # Views
    latest_novels_limit: int = 4
    latest_chapters_page_size: int = 8
    detail_chapters_page_size: int = 10

    # Logging
    log_dir: Path = Path("./data/logs")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("supabase_url")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("supabase_anon_key")
    @classmethod
    def strip_key(cls, v: str) -> str:
        return v.strip()

    @field_validator("remote_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("remote_timeout must be > 0")
        return v

    @field_validator("mock_read_delay", "mock_write_delay")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Mock delay must be non-negative")
        return v

    @field_validator("latest_novels_limit", "latest_chapters_page_size", "detail_chapters_page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Page size must be >= 1")
        return v

    @field_validator("log_dir")
    @classmethod
    def ensure_parent_dirs(cls, v: Path) -> Path:
        v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def remote_configured(self) -> bool:
        """True when both remote endpoint and access key are present."""
        return bool(self.supabase_url and self.supabase_anon_key)


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
