"""Novel and genre data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from config.exceptions import ValidationError


@dataclass
class Genre:
    """A shared descriptive tag. Immutable once created."""
    id: str = ""
    name: str = ""


@dataclass
class Novel:
    """Represents a novel and its metadata.

    ``genres`` is a by-value snapshot of the genre records taken when the
    novel was last written, not a live reference into the genre table.
    """
    id: str = ""
    title: str = ""
    description: str = ""
    image_url: str = ""
    genres: list[Genre] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def genre_ids(self) -> set[str]:
        return {g.id for g in self.genres}


@dataclass
class NovelFormData:
    """Author-supplied fields for creating or editing a novel."""
    title: str = ""
    description: str = ""
    image_url: str = ""
    genres: list[str] = field(default_factory=list)  # genre names

    def validate(self) -> None:
        missing = [
            name for name, value in (("title", self.title), ("description", self.description))
            if not value.strip()
        ]
        if missing:
            raise ValidationError(
                f"Required field(s) empty: {', '.join(missing)}",
                {"fields": missing},
            )
