"""Tests for cleaning the root and writing/listing cached files."""

from __future__ import annotations

from pathlib import Path

import pytest

from staticcache.exceptions import CacheWriteError
from staticcache.storage import clean_root, list_artifacts, write_artifact


# ------------------------------------------------------------------ #
# clean_root
# ------------------------------------------------------------------ #


class TestCleanRoot:
    def test_removes_everything_beneath_root(self, cache_root: Path) -> None:
        (cache_root / "foo").mkdir()
        (cache_root / "foo" / "index.html").write_text("old")
        (cache_root / "bar.txt").write_text("old")

        clean_root(cache_root)

        assert cache_root.is_dir()
        assert list(cache_root.iterdir()) == []

    def test_creates_missing_root(self, tmp_path: Path) -> None:
        root = tmp_path / "a" / "b"
        clean_root(root)
        assert root.is_dir()

    def test_root_that_is_a_file_raises(self, tmp_path: Path) -> None:
        root = tmp_path / "not-a-dir"
        root.write_text("x")
        with pytest.raises(CacheWriteError) as exc_info:
            clean_root(root)
        assert exc_info.value.path == str(root)
        assert exc_info.value.exit_code == 5


# ------------------------------------------------------------------ #
# write_artifact
# ------------------------------------------------------------------ #


class TestWriteArtifact:
    def test_writes_text_as_utf8(self, cache_root: Path) -> None:
        target = cache_root / "page" / "index.html"
        written = write_artifact(target, "héllo")
        assert target.read_bytes() == "héllo".encode("utf-8")
        assert written == len("héllo".encode("utf-8"))

    def test_writes_bytes_verbatim(self, cache_root: Path) -> None:
        target = cache_root / "logo.png"
        write_artifact(target, b"\x89PNG\r\n")
        assert target.read_bytes() == b"\x89PNG\r\n"

    def test_creates_parent_directories(self, cache_root: Path) -> None:
        target = cache_root / "a" / "b" / "c" / "index.html"
        write_artifact(target, "deep")
        assert target.read_text() == "deep"

    def test_overwrites_rather_than_appends(self, cache_root: Path) -> None:
        target = cache_root / "index.html"
        write_artifact(target, "Hello World")
        write_artifact(target, "Hello World")
        assert target.read_text() == "Hello World"

        write_artifact(target, "Bye")
        assert target.read_text() == "Bye"

    def test_leaves_no_temp_files(self, cache_root: Path) -> None:
        write_artifact(cache_root / "index.html", "x")
        assert [p.name for p in cache_root.iterdir()] == ["index.html"]

    def test_parent_is_a_file_raises(self, cache_root: Path) -> None:
        (cache_root / "foo").write_text("file, not a dir")
        with pytest.raises(CacheWriteError, match="Could not write"):
            write_artifact(cache_root / "foo" / "index.html", "x")

    def test_null_byte_in_path_raises(self, cache_root: Path) -> None:
        with pytest.raises(CacheWriteError):
            write_artifact(cache_root / "a\x00b" / "index.html", "x")

    def test_target_is_a_directory_raises_and_cleans_up(self, cache_root: Path) -> None:
        (cache_root / "data.json").mkdir()
        with pytest.raises(CacheWriteError):
            write_artifact(cache_root / "data.json", "{}")
        assert [p.name for p in cache_root.iterdir()] == ["data.json"]


# ------------------------------------------------------------------ #
# list_artifacts
# ------------------------------------------------------------------ #


class TestListArtifacts:
    def test_lists_files_sorted_with_url_paths(self, cache_root: Path) -> None:
        write_artifact(cache_root / "index.html", "home")
        write_artifact(cache_root / "foo" / "bar.txt", "bar")
        write_artifact(cache_root / "foo" / "index.html", "foo")

        artifacts = list(list_artifacts(cache_root))

        assert [a.url_path for a in artifacts] == ["/foo/bar.txt", "/foo/", "/"]
        assert [a.size for a in artifacts] == [3, 3, 4]
        assert artifacts[0].path == str(cache_root / "foo" / "bar.txt")

    def test_skips_in_flight_temp_files(self, cache_root: Path) -> None:
        (cache_root / ".index.html.abc123.tmp").write_text("partial")
        assert list(list_artifacts(cache_root)) == []

    def test_missing_root_yields_nothing(self, tmp_path: Path) -> None:
        assert list(list_artifacts(tmp_path / "missing")) == []
