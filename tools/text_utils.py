"""Text utilities: titles from file names, previews, and relative times."""

import re
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Optional

import humanize


def title_from_filename(file_name: str) -> str:
    """Derive a chapter title from an uploaded file name.

    Directory components and the final extension are stripped; a name with
    nothing left after stripping is returned unchanged.
    """
    stem = PurePath(file_name).stem.strip()
    return stem or file_name


def has_extension(file_name: str, extension: str) -> bool:
    """Case-insensitive check of a file name's final extension."""
    return PurePath(file_name).suffix.lower() == extension.lower()


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def excerpt(content: str, char_limit: int = 150) -> str:
    """Return the opening of a text for previews, cut on a word boundary.

    Whitespace runs are collapsed. An ellipsis marks truncation.
    """
    if not content:
        return ""
    flat = re.sub(r"\s+", " ", content).strip()
    if len(flat) <= char_limit:
        return flat
    cut = flat[:char_limit]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip(",.;:") + "..."


def split_into_paragraphs(text: str) -> list[str]:
    """Split text into paragraphs."""
    paragraphs = re.split(r"\n\s*\n|\n", text)
    return [p.strip() for p in paragraphs if p.strip()]


def time_ago(moment: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Describe how long ago ``moment`` was, e.g. "3 days ago".

    Naive datetimes are taken as UTC.
    """
    if moment is None:
        return "-"
    now = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return humanize.naturaltime(moment, when=now)
