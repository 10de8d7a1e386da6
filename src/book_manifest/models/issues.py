"""Data models for validation errors and warnings."""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Hard error categories. Any of these blocks the manifest."""

    PARSE_ERROR = "parse_error"
    DUPLICATE_CHAPTER = "duplicate_chapter"
    INVALID_STATUS = "invalid_status"
    INVALID_READ_TIME = "invalid_read_time"
    PLACEHOLDER = "placeholder"


class WarningKind(str, Enum):
    """Soft warning categories. Reported, never blocking."""

    MISSING_READ_TIME = "missing_read_time"
    PLACEHOLDER = "placeholder"
    CHAPTER_GAP = "chapter_gap"
    PART_NAME_MISMATCH = "part_name_mismatch"
    SHORT_FILE = "short_file"


class Issue(BaseModel):
    """Common shape of every reported problem."""

    kind: ErrorKind | WarningKind
    path: str
    message: str

    def sort_key(self) -> tuple[str, str, str]:
        return (self.path, self.kind.value, self.message)


class ParseError(Issue):
    """Front matter missing, malformed, unreadable, or missing a required key."""

    kind: Literal[ErrorKind.PARSE_ERROR] = ErrorKind.PARSE_ERROR
    key: str | None = None


class DuplicateChapterError(Issue):
    """Two files claim the same (part, chapter) pair."""

    kind: Literal[ErrorKind.DUPLICATE_CHAPTER] = ErrorKind.DUPLICATE_CHAPTER
    paths: list[str]
    part: int
    chapter: int


class InvalidStatusError(Issue):
    """Status value outside the recognized enum."""

    kind: Literal[ErrorKind.INVALID_STATUS] = ErrorKind.INVALID_STATUS
    value: Any = None


class InvalidReadTimeError(Issue):
    """estimatedReadTime present but not a non-negative integer."""

    kind: Literal[ErrorKind.INVALID_READ_TIME] = ErrorKind.INVALID_READ_TIME
    value: Any = None


class PlaceholderError(Issue):
    """Reviewer or translator still holds a placeholder (strict policy only)."""

    kind: Literal[ErrorKind.PLACEHOLDER] = ErrorKind.PLACEHOLDER
    field: str
    value: str


ValidationIssue = Annotated[
    Union[
        ParseError,
        DuplicateChapterError,
        InvalidStatusError,
        InvalidReadTimeError,
        PlaceholderError,
    ],
    Field(discriminator="kind"),
]


class ManifestWarning(Issue):
    """Non-blocking finding."""

    kind: WarningKind
