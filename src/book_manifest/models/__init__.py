"""Data models."""

from book_manifest.models.chapter import (
    FRONT_MATTER_KEYS,
    REQUIRED_KEYS,
    ChapterDocument,
    ChapterStatus,
    ManifestChapter,
)
from book_manifest.models.issues import (
    DuplicateChapterError,
    ErrorKind,
    InvalidReadTimeError,
    InvalidStatusError,
    ManifestWarning,
    ParseError,
    PlaceholderError,
    ValidationIssue,
    WarningKind,
)
from book_manifest.models.manifest import (
    BookManifest,
    ManifestResult,
    PartEntry,
    ReadTimeReport,
)

__all__ = [
    # Chapter models
    "FRONT_MATTER_KEYS",
    "REQUIRED_KEYS",
    "ChapterStatus",
    "ChapterDocument",
    "ManifestChapter",
    # Issue models
    "ErrorKind",
    "WarningKind",
    "ParseError",
    "DuplicateChapterError",
    "InvalidStatusError",
    "InvalidReadTimeError",
    "PlaceholderError",
    "ValidationIssue",
    "ManifestWarning",
    # Manifest models
    "PartEntry",
    "BookManifest",
    "ManifestResult",
    "ReadTimeReport",
]
