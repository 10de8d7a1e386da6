"""Shared fixtures for book-manifest tests."""

from __future__ import annotations

import datetime
import os
from pathlib import Path
from typing import Any, Callable

import pytest
from typer.testing import CliRunner

from book_manifest.config import get_settings
from book_manifest.core.frontmatter import dump_front_matter

ChapterFactory = Callable[..., Path]


def chapter_front_matter(**overrides: Any) -> dict[str, Any]:
    """Front matter shaped like the book's chapter files."""
    data: dict[str, Any] = {
        "title": "A First Look at the C Programming Language",
        "description": "Core C concepts needed before writing kernel code",
        "author": "Edson Brandi",
        "date": datetime.date(2025, 8, 30),
        "status": "draft",
        "part": 1,
        "chapter": 4,
        "estimatedReadTime": 480,
    }
    data.update(overrides)
    return data


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test without BOOK_MANIFEST_* env vars or a stray .env file."""
    for var in list(os.environ):
        if var.upper().startswith("BOOK_MANIFEST_"):
            monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def book_root(tmp_path) -> Path:
    root = tmp_path / "book"
    root.mkdir()
    return root


@pytest.fixture
def write_chapter(book_root) -> ChapterFactory:
    """Write a chapter file under the book root.

    Keyword arguments override front-matter keys; ``omit`` drops keys.
    The body is padded to ``body_lines`` lines so discovery keeps the file.
    """

    def _write(
        name: str,
        omit: tuple[str, ...] = (),
        body_lines: int = 25,
        **fields: Any,
    ) -> Path:
        data = chapter_front_matter(**fields)
        for key in omit:
            data.pop(key, None)
        body = "\n# Heading\n\n" + "Some prose.\n" * body_lines
        path = book_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_front_matter(data, body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def corpus(write_chapter) -> list[Path]:
    """The two chapters of part 1 as they appear in the manuscript."""
    return [
        write_chapter(
            "content/chapters/part1/chapter-03.md",
            title="A Gentle Introduction to UNIX",
            chapter=3,
            estimatedReadTime=120,
            reviewer="TBD",
            translator="TBD",
        ),
        write_chapter(
            "content/chapters/part1/chapter-04.md",
            chapter=4,
            estimatedReadTime=480,
            reviewer="TBD",
            translator="TBD",
        ),
    ]


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
