"""Data models for chapter front matter."""

import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Front-matter keys understood by the loader. Anything else is ignored.
FRONT_MATTER_KEYS = (
    "title",
    "description",
    "author",
    "date",
    "status",
    "part",
    "chapter",
    "reviewer",
    "translator",
    "estimatedReadTime",
    "partNumber",
    "partName",
    "lastUpdated",
)

REQUIRED_KEYS = ("title", "part", "chapter", "status")


def whole_number(value: Any) -> int:
    """Coerce a YAML int or a string of digits to int."""
    # YAML turns `yes`/`no` into booleans; never accept those as numbers
    if isinstance(value, bool):
        raise ValueError("must be an integer, not a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise ValueError("must be an integer")


class ChapterStatus(str, Enum):
    """Lifecycle state of a chapter (draft -> complete)."""

    DRAFT = "draft"
    COMPLETE = "complete"


class ChapterFields(BaseModel):
    """Fields shared by loaded and validated chapters."""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    title: str = Field(min_length=1)
    description: str | None = None
    author: str | None = None
    reviewer: str | None = None
    translator: str | None = None
    date: datetime.date | None = None
    last_updated: datetime.date | None = Field(default=None, alias="lastUpdated")
    part: int
    part_name: str | None = Field(default=None, alias="partName")
    chapter: int

    @field_validator("part", "chapter", mode="before")
    @classmethod
    def _whole_number(cls, value: Any) -> int:
        return whole_number(value)


class ChapterDocument(ChapterFields):
    """One chapter file as loaded from disk.

    ``status`` and ``estimated_read_time`` keep their raw front-matter values;
    the manifest builder checks them so that bad values surface as validation
    errors instead of parse errors.
    """

    status: Any
    estimated_read_time: Any = Field(default=None, alias="estimatedReadTime")
    line_count: int = 0

    @property
    def key(self) -> tuple[int, int]:
        return (self.part, self.chapter)

    def front_matter(self) -> dict[str, Any]:
        """Front-matter mapping for this chapter, keyed as in the source file."""
        return self.model_dump(
            by_alias=True,
            exclude={"path", "line_count"},
            exclude_none=True,
        )


class ManifestChapter(ChapterFields):
    """Chapter whose status and read time passed validation."""

    status: ChapterStatus
    estimated_read_time: int | None = Field(
        default=None, ge=0, alias="estimatedReadTime"
    )
