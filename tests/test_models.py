"""Tests for CacheOptions validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from staticcache.exceptions import ConfigError
from staticcache.models import CacheOptions


class TestParse:
    def test_none_is_rejected(self) -> None:
        with pytest.raises(ConfigError, match="options object"):
            CacheOptions.parse(None)

    def test_missing_root_is_rejected(self) -> None:
        with pytest.raises(ConfigError, match="root"):
            CacheOptions.parse({})

    def test_empty_root_is_rejected(self) -> None:
        with pytest.raises(ConfigError):
            CacheOptions.parse({"root": ""})

    def test_non_mapping_is_rejected(self) -> None:
        with pytest.raises(ConfigError, match="mapping"):
            CacheOptions.parse("./cache")  # type: ignore[arg-type]

    def test_config_error_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            CacheOptions.parse({"clean": True})

    def test_defaults(self) -> None:
        options = CacheOptions.parse({"root": "./"})
        assert options.root == "./"
        assert options.clean is False
        assert options.index_file == "index.html"

    def test_existing_options_returned_unchanged(self) -> None:
        options = CacheOptions(root="./")
        assert CacheOptions.parse(options) is options

    def test_path_root_is_accepted(self, tmp_path: Path) -> None:
        options = CacheOptions.parse({"root": tmp_path})
        assert options.root == str(tmp_path)

    def test_unknown_key_is_rejected(self) -> None:
        with pytest.raises(ConfigError):
            CacheOptions.parse({"root": "./", "ttl": 30})

    @pytest.mark.parametrize("index_file", ["", ".", "..", "a/index.html", "a\\b"])
    def test_index_file_must_be_bare_filename(self, index_file: str) -> None:
        with pytest.raises(ConfigError):
            CacheOptions.parse({"root": "./", "index_file": index_file})


def test_options_are_frozen() -> None:
    options = CacheOptions(root="./")
    with pytest.raises(ValidationError):
        options.root = "/elsewhere"  # type: ignore[misc]
