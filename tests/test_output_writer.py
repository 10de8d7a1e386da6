"""Tests for writing manifests and error reports to disk."""

from __future__ import annotations

import json

import pytest

from book_manifest.config import Settings
from book_manifest.core.output_writer import ManifestWriter, render_errors_json
from book_manifest.core.validator import build_manifest
from book_manifest.models import BookManifest

pytestmark = pytest.mark.unit


class TestManifestWriter:
    """manifest.json for clean runs, errors.json otherwise."""

    def test_writes_manifest(self, corpus, tmp_path):
        result = build_manifest(corpus, Settings())

        path = ManifestWriter(tmp_path / "out").write(result)

        assert path.name == "manifest.json"
        manifest = BookManifest.model_validate_json(path.read_text())
        assert manifest == result.manifest
        assert manifest.parts[0].read_time == 600
        assert json.loads(path.read_text())["chapter_count"] == 2

    def test_manifest_json_is_deterministic(self, corpus, tmp_path):
        first = ManifestWriter(tmp_path / "a").write(build_manifest(corpus, Settings()))
        second = ManifestWriter(tmp_path / "b").write(build_manifest(corpus, Settings()))

        assert first.read_text() == second.read_text()

    def test_writes_errors(self, write_chapter, tmp_path):
        bad = write_chapter("chapter-04.md", status="in-review")
        result = build_manifest([bad], Settings())

        path = ManifestWriter(tmp_path / "out").write(result)

        assert path.name == "errors.json"
        payload = json.loads(path.read_text())
        assert payload["errors"][0]["kind"] == "invalid_status"
        assert payload["errors"][0]["path"] == str(bad)
        assert payload["errors"][0]["value"] == "in-review"
        assert "warnings" in payload

    def test_removes_stale_file_of_other_kind(self, corpus, write_chapter, tmp_path):
        out = tmp_path / "out"
        writer = ManifestWriter(out)
        writer.write(build_manifest(corpus, Settings()))

        broken = write_chapter("chapter-09.md", chapter=9, status="??")
        writer.write(build_manifest([broken], Settings()))

        assert not (out / "manifest.json").exists()
        assert (out / "errors.json").exists()


def test_render_errors_json_round_trips_duplicate_paths(write_chapter):
    first = write_chapter("a.md", chapter=2)
    second = write_chapter("b.md", chapter=2)

    payload = json.loads(render_errors_json(build_manifest([first, second], Settings())))

    assert payload["errors"][0]["kind"] == "duplicate_chapter"
    assert payload["errors"][0]["paths"] == [str(first), str(second)]
