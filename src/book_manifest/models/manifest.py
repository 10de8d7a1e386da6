"""Data models for the assembled book manifest."""

from pydantic import BaseModel, Field, computed_field, model_validator

from book_manifest.models.chapter import ManifestChapter
from book_manifest.models.issues import (
    ErrorKind,
    ManifestWarning,
    ValidationIssue,
)


class PartEntry(BaseModel):
    """One part of the book with its chapters in order."""

    number: int
    name: str | None = None
    chapters: list[ManifestChapter] = Field(default_factory=list)
    read_time: int = 0


class BookManifest(BaseModel):
    """Validated, ordered view of every chapter in the book.

    No timestamp is stored, so identical inputs give identical manifests.
    """

    parts: list[PartEntry] = Field(default_factory=list)
    total_read_time: int = 0

    @computed_field
    @property
    def chapter_count(self) -> int:
        return sum(len(part.chapters) for part in self.parts)

    def chapters(self) -> list[ManifestChapter]:
        """All chapters in book order."""
        return [chapter for part in self.parts for chapter in part.chapters]

    def get_part(self, number: int) -> PartEntry | None:
        for part in self.parts:
            if part.number == number:
                return part
        return None


class ManifestResult(BaseModel):
    """Outcome of a manifest build: a manifest, or the errors preventing one."""

    manifest: BookManifest | None = None
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ManifestWarning] = Field(default_factory=list)

    @model_validator(mode="after")
    def _manifest_only_when_clean(self) -> "ManifestResult":
        if self.errors and self.manifest is not None:
            raise ValueError("a manifest cannot accompany validation errors")
        if not self.errors and self.manifest is None:
            raise ValueError("a clean result must carry a manifest")
        return self

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def parse_errors(self) -> list[ValidationIssue]:
        return [e for e in self.errors if e.kind == ErrorKind.PARSE_ERROR]


class ReadTimeReport(BaseModel):
    """Estimated read time per part, in minutes."""

    by_part: dict[int, int] = Field(default_factory=dict)
    total: int = 0
    warnings: list[ManifestWarning] = Field(default_factory=list)
