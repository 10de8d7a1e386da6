"""Validate chapter front matter across files and assemble the book manifest."""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable

from book_manifest.config import Settings, get_settings
from book_manifest.core.loader import discover_chapters, load_chapters
from book_manifest.models.chapter import ChapterDocument, ChapterStatus, ManifestChapter
from book_manifest.models.issues import (
    DuplicateChapterError,
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

log = logging.getLogger(__name__)

STATUS_VALUES = tuple(s.value for s in ChapterStatus)
PLACEHOLDER_FIELDS = ("reviewer", "translator")


def build_manifest(
    paths: Iterable[Path | str],
    settings: Settings | None = None,
) -> ManifestResult:
    """Load every chapter and assemble the manifest.

    All files are loaded before any cross-file check runs. Every problem is
    collected; the manifest is returned only when there are no errors.
    """
    settings = settings or get_settings()
    loaded = load_chapters(paths, max_workers=settings.max_workers)

    errors: list[ValidationIssue] = []
    warnings: list[ManifestWarning] = []
    documents: list[ChapterDocument] = []

    for item in loaded:
        if isinstance(item, ParseError):
            errors.append(item)
        else:
            documents.append(item)

    errors.extend(_check_duplicates(documents))

    chapters: list[ManifestChapter] = []
    for doc in documents:
        doc_errors = _check_chapter(doc, settings, warnings)
        if doc_errors:
            errors.extend(doc_errors)
            continue
        chapters.append(
            ManifestChapter.model_validate(doc.model_dump(exclude={"line_count"}))
        )

    errors.sort(key=lambda e: e.sort_key())

    if errors:
        warnings.sort(key=lambda w: w.sort_key())
        log.info(
            "Validation failed: %d error(s) across %d file(s)",
            len(errors),
            len(loaded),
        )
        return ManifestResult(errors=errors, warnings=warnings)

    manifest, assembly_warnings = _assemble(chapters)
    warnings.extend(assembly_warnings)
    warnings.extend(compute_read_time(manifest).warnings)
    warnings.sort(key=lambda w: w.sort_key())

    log.info(
        "Built manifest: %d part(s), %d chapter(s), %d minute(s)",
        len(manifest.parts),
        manifest.chapter_count,
        manifest.total_read_time,
    )
    return ManifestResult(manifest=manifest, warnings=warnings)


def build_manifest_from_root(
    root: Path,
    settings: Settings | None = None,
) -> ManifestResult:
    """Discover chapter files under a root and build the manifest from them."""
    settings = settings or get_settings()
    discovery = discover_chapters(root, settings)
    result = build_manifest(discovery.paths, settings)

    if discovery.warnings:
        warnings = sorted(
            [*discovery.warnings, *result.warnings], key=lambda w: w.sort_key()
        )
        result = result.model_copy(update={"warnings": warnings})
    return result


def compute_read_time(manifest: BookManifest) -> ReadTimeReport:
    """Sum estimated read time per part.

    Chapters without a read time count as zero and get a warning.
    """
    by_part: dict[int, int] = {}
    warnings: list[ManifestWarning] = []

    for part in manifest.parts:
        total = 0
        for chapter in part.chapters:
            if chapter.estimated_read_time is None:
                warnings.append(
                    ManifestWarning(
                        kind=WarningKind.MISSING_READ_TIME,
                        path=chapter.path,
                        message=(
                            f"chapter {chapter.chapter} has no estimatedReadTime; "
                            "counted as 0 minutes"
                        ),
                    )
                )
            else:
                total += chapter.estimated_read_time
        by_part[part.number] = total

    return ReadTimeReport(
        by_part=by_part,
        total=sum(by_part.values()),
        warnings=warnings,
    )


def _check_duplicates(documents: list[ChapterDocument]) -> list[DuplicateChapterError]:
    """One error per (part, chapter) pair claimed by more than one file."""
    claims: dict[tuple[int, int], list[str]] = defaultdict(list)
    for doc in documents:
        claims[doc.key].append(doc.path)

    errors = []
    for (part, chapter), paths in sorted(claims.items()):
        if len(paths) < 2:
            continue
        paths = sorted(paths)
        errors.append(
            DuplicateChapterError(
                path=paths[0],
                paths=paths,
                part=part,
                chapter=chapter,
                message=(
                    f"part {part}, chapter {chapter} is claimed by "
                    + " and ".join(paths)
                ),
            )
        )
    return errors


def _check_chapter(
    doc: ChapterDocument,
    settings: Settings,
    warnings: list[ManifestWarning],
) -> list[ValidationIssue]:
    """Per-chapter value checks. Appends soft findings to ``warnings``."""
    errors: list[ValidationIssue] = []

    if not isinstance(doc.status, str) or doc.status not in STATUS_VALUES:
        errors.append(
            InvalidStatusError(
                path=doc.path,
                value=doc.status,
                message=(
                    f"status {doc.status!r} is not one of "
                    + ", ".join(STATUS_VALUES)
                ),
            )
        )

    read_time = doc.estimated_read_time
    if read_time is not None and (
        isinstance(read_time, bool) or not isinstance(read_time, int) or read_time < 0
    ):
        errors.append(
            InvalidReadTimeError(
                path=doc.path,
                value=read_time,
                message=(
                    f"estimatedReadTime {read_time!r} is not a non-negative "
                    "whole number of minutes"
                ),
            )
        )

    if settings.placeholder_policy != "ignore":
        for field_name in PLACEHOLDER_FIELDS:
            value = getattr(doc, field_name)
            if value is None or value.strip() not in settings.placeholder_values:
                continue
            message = f"{field_name} is still the placeholder {value!r}"
            if settings.placeholder_policy == "error":
                errors.append(
                    PlaceholderError(
                        path=doc.path, field=field_name, value=value, message=message
                    )
                )
            else:
                warnings.append(
                    ManifestWarning(
                        kind=WarningKind.PLACEHOLDER, path=doc.path, message=message
                    )
                )

    return errors


def _assemble(
    chapters: list[ManifestChapter],
) -> tuple[BookManifest, list[ManifestWarning]]:
    """Group validated chapters into ordered parts."""
    warnings: list[ManifestWarning] = []
    by_part: dict[int, list[ManifestChapter]] = defaultdict(list)
    for chapter in chapters:
        by_part[chapter.part].append(chapter)

    parts = []
    for number in sorted(by_part):
        members = sorted(by_part[number], key=lambda c: c.chapter)

        names = [c.part_name for c in members if c.part_name]
        name = names[0] if names else None
        for chapter in members:
            if chapter.part_name and chapter.part_name != name:
                warnings.append(
                    ManifestWarning(
                        kind=WarningKind.PART_NAME_MISMATCH,
                        path=chapter.path,
                        message=(
                            f"partName {chapter.part_name!r} differs from "
                            f"{name!r} used elsewhere in part {number}"
                        ),
                    )
                )

        for prev, cur in zip(members, members[1:]):
            if cur.chapter - prev.chapter > 1:
                warnings.append(
                    ManifestWarning(
                        kind=WarningKind.CHAPTER_GAP,
                        path=cur.path,
                        message=(
                            f"part {number}: chapter {cur.chapter} follows "
                            f"chapter {prev.chapter}"
                        ),
                    )
                )

        parts.append(PartEntry(number=number, name=name, chapters=members))

    manifest = BookManifest(parts=parts)
    report = compute_read_time(manifest)
    for part in manifest.parts:
        part.read_time = report.by_part[part.number]
    manifest.total_read_time = report.total

    return manifest, warnings
