"""Discover chapter files and load their front matter."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from book_manifest.config import Settings, get_settings
from book_manifest.core.frontmatter import parse_front_matter
from book_manifest.errors import DiscoveryError, FrontMatterError
from book_manifest.models.chapter import (
    FRONT_MATTER_KEYS,
    REQUIRED_KEYS,
    ChapterDocument,
    whole_number,
)
from book_manifest.models.issues import ManifestWarning, ParseError, WarningKind

log = logging.getLogger(__name__)

# Manuscript layout used by the book build; scanned instead of the whole tree when present
CONTENT_DIRS = ("content/chapters", "content/appendices")


@dataclass
class Discovery:
    """Chapter files found under a manuscript root."""

    root: Path
    paths: list[Path] = field(default_factory=list)
    warnings: list[ManifestWarning] = field(default_factory=list)


def load_chapter(path: Path | str) -> ChapterDocument | ParseError:
    """Load one chapter file.

    Never raises for a bad file: unreadable files, missing or malformed front
    matter, missing required keys and badly typed values all come back as a
    ParseError.
    """
    path = Path(path)
    display = str(path)

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return _parse_error(display, "file is not valid UTF-8")
    except OSError as e:
        return _parse_error(display, f"cannot read file: {e.strerror or e}")

    try:
        data, _ = parse_front_matter(text)
    except FrontMatterError as e:
        return _parse_error(display, str(e))

    fields = {key: data[key] for key in FRONT_MATTER_KEYS if key in data}

    for key in REQUIRED_KEYS:
        if key == "part" and fields.get("part") is None:
            if fields.get("partNumber") is not None:
                continue
        if fields.get(key) is None:
            return _parse_error(display, f"missing required key '{key}'", key=key)

    part_number = fields.pop("partNumber", None)
    if part_number is not None:
        try:
            part_number = whole_number(part_number)
        except ValueError as e:
            return _parse_error(
                display, f"invalid value for 'partNumber': {e}", key="partNumber"
            )

    if fields.get("part") is None:
        fields["part"] = part_number
    elif part_number is not None:
        try:
            part = whole_number(fields["part"])
        except ValueError:
            # Reported under 'part' by model validation below
            part = None
        if part is not None and part != part_number:
            return _parse_error(
                display,
                f"partNumber ({part_number}) does not match part ({part})",
                key="partNumber",
            )

    try:
        return ChapterDocument.model_validate(
            {**fields, "path": display, "line_count": len(text.splitlines())}
        )
    except ValidationError as e:
        first = e.errors()[0]
        key = str(first["loc"][0]) if first["loc"] else None
        return _parse_error(display, f"invalid value for '{key}': {first['msg']}", key=key)


def _parse_error(path: str, message: str, key: str | None = None) -> ParseError:
    log.debug("Parse error in %s: %s", path, message)
    return ParseError(path=path, message=message, key=key)


def load_chapters(
    paths: Iterable[Path | str],
    max_workers: int = 8,
) -> list[ChapterDocument | ParseError]:
    """Load many chapter files concurrently.

    Results come back in input order whatever order the reads finish in.
    """
    paths = list(paths)
    if not paths:
        return []

    with ThreadPoolExecutor(max_workers=min(max_workers, len(paths))) as executor:
        return list(executor.map(load_chapter, paths))


def _is_excluded(rel_path: str, patterns: list[str]) -> bool:
    name = rel_path.rsplit("/", 1)[-1]
    return any(fnmatch(name, p) or fnmatch(rel_path, p) for p in patterns)


def _count_lines(path: Path) -> int:
    with open(path, "rb") as f:
        return sum(1 for _ in f)


def discover_chapters(root: Path, settings: Settings | None = None) -> Discovery:
    """Find chapter files under a manuscript root.

    Skips hidden directories, excluded names, and files shorter than
    ``settings.min_lines`` (reported as short_file warnings).
    """
    settings = settings or get_settings()
    root = Path(root)

    if not root.is_dir():
        raise DiscoveryError(f"Not a directory: {root}")

    search_roots = [root / d for d in CONTENT_DIRS if (root / d).is_dir()] or [root]
    candidates = sorted(
        {p for base in search_roots for p in base.rglob("*.md") if p.is_file()}
    )

    discovery = Discovery(root=root)
    for path in candidates:
        rel_path = path.relative_to(root).as_posix()

        if any(part.startswith(".") for part in rel_path.split("/")[:-1]):
            continue
        if _is_excluded(rel_path, settings.exclude):
            log.info("Excluded %s", rel_path)
            continue

        if settings.min_lines:
            try:
                line_count = _count_lines(path)
            except OSError:
                # Left in so the loader reports it as a parse error
                line_count = None
            if line_count is not None and line_count < settings.min_lines:
                log.info("Skipping short file %s (%d lines)", rel_path, line_count)
                discovery.warnings.append(
                    ManifestWarning(
                        kind=WarningKind.SHORT_FILE,
                        path=str(path),
                        message=(
                            f"skipped: {line_count} lines, "
                            f"minimum {settings.min_lines} required"
                        ),
                    )
                )
                continue

        discovery.paths.append(path)

    log.info("Discovered %d chapter file(s) under %s", len(discovery.paths), root)
    return discovery
