"""Chapter data model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from config.exceptions import ValidationError


@dataclass
class Chapter:
    """Represents a single chapter.

    ``order`` is the 1-based position within the novel; the repositories keep
    it dense (no gaps) after every delete.
    """
    id: str = ""
    novel_id: str = ""
    title: str = ""
    content: str = ""
    order: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ChapterFormData:
    """Author-supplied fields for creating or editing a chapter."""
    title: str = ""
    content: str = ""

    def validate(self) -> None:
        missing = [
            name for name, value in (("title", self.title), ("content", self.content))
            if not value.strip()
        ]
        if missing:
            raise ValidationError(
                f"Required field(s) empty: {', '.join(missing)}",
                {"fields": missing},
            )
