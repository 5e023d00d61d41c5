"""Configuration package — settings, logging, and exceptions."""

from config.exceptions import (
    NovelShelfError,
    DataSourceError,
    RemoteServiceError,
    RowNotFoundError,
    DocumentExtractionError,
    ValidationError,
)
from config.logging_config import setup_logging
from config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "NovelShelfError",
    "DataSourceError",
    "RemoteServiceError",
    "RowNotFoundError",
    "DocumentExtractionError",
    "ValidationError",
]
