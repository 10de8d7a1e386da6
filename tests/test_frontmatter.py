"""Tests for front-matter splitting, parsing and serialization."""

from __future__ import annotations

import datetime

import pytest

from book_manifest.core.frontmatter import (
    dump_front_matter,
    parse_front_matter,
    split_front_matter,
)
from book_manifest.errors import FrontMatterError

from .conftest import chapter_front_matter

pytestmark = pytest.mark.unit


class TestSplitFrontMatter:
    """Locating the --- delimited block."""

    def test_splits_block_and_body(self):
        raw, body = split_front_matter("---\ntitle: Intro\n---\n# Body\n")

        assert raw == "title: Intro\n"
        assert body == "# Body\n"

    def test_accepts_dots_as_closing_fence(self):
        raw, body = split_front_matter("---\ntitle: Intro\n...\ntext")

        assert raw == "title: Intro\n"
        assert body == "text"

    def test_closing_fence_at_end_of_file(self):
        raw, body = split_front_matter("---\ntitle: Intro\n---")

        assert raw == "title: Intro\n"
        assert body == ""

    def test_strips_byte_order_mark(self):
        raw, _ = split_front_matter("\ufeff---\ntitle: Intro\n---\n")

        assert raw == "title: Intro\n"

    def test_missing_opening_fence(self):
        with pytest.raises(FrontMatterError, match="does not start"):
            split_front_matter("# Just a heading\n")

    def test_unclosed_block(self):
        with pytest.raises(FrontMatterError, match="not closed"):
            split_front_matter("---\ntitle: Intro\n# no closing fence\n")

    def test_horizontal_rule_in_body_is_not_a_fence(self):
        raw, body = split_front_matter("---\ntitle: Intro\n---\nabove\n\n---\nbelow\n")

        assert raw == "title: Intro\n"
        assert "---" in body


class TestParseFrontMatter:
    """Loading the block as YAML."""

    def test_typed_values(self):
        data, _ = parse_front_matter(
            "---\n"
            'title: "A Gentle Introduction to UNIX"\n'
            "date: 2025-08-30\n"
            "part: 1\n"
            "chapter: 3\n"
            "estimatedReadTime: 120\n"
            "---\n"
        )

        assert data["title"] == "A Gentle Introduction to UNIX"
        assert data["date"] == datetime.date(2025, 8, 30)
        assert data["part"] == 1
        assert data["estimatedReadTime"] == 120

    def test_empty_block_is_empty_mapping(self):
        data, body = parse_front_matter("---\n---\nbody")

        assert data == {}
        assert body == "body"

    def test_malformed_yaml(self):
        with pytest.raises(FrontMatterError, match="malformed YAML"):
            parse_front_matter("---\ntitle: [unclosed\n---\n")

    def test_impossible_date_is_malformed_yaml(self):
        with pytest.raises(FrontMatterError, match="malformed YAML"):
            parse_front_matter("---\ndate: 2024-13-45\n---\n")

    def test_list_is_not_a_mapping(self):
        with pytest.raises(FrontMatterError, match="mapping"):
            parse_front_matter("---\n- one\n- two\n---\n")

    def test_scalar_is_not_a_mapping(self):
        with pytest.raises(FrontMatterError, match="got str"):
            parse_front_matter("---\njust text\n---\n")


class TestDumpFrontMatter:
    """Serializing a mapping back to a document."""

    def test_round_trip_is_identical(self):
        original = chapter_front_matter(
            reviewer="TBD",
            translator="TBD",
            partName="UNIX and C Foundations",
            lastUpdated=datetime.date(2025, 9, 1),
        )

        data, body = parse_front_matter(dump_front_matter(original, "# Body\n"))

        assert data == original
        assert body == "# Body\n"

    def test_round_trip_twice_is_stable(self):
        once = dump_front_matter(chapter_front_matter())
        data, _ = parse_front_matter(once)

        assert dump_front_matter(data) == once

    def test_keeps_key_order(self):
        text = dump_front_matter({"title": "T", "status": "draft", "part": 1})

        assert text.index("title") < text.index("status") < text.index("part")

    def test_non_ascii_text_is_written_verbatim(self):
        text = dump_front_matter({"title": "Introdução ao UNIX"})

        assert "Introdução ao UNIX" in text
        assert parse_front_matter(text)[0]["title"] == "Introdução ao UNIX"
