"""Tests for tagged JSON loading."""

from __future__ import annotations

from pathlib import Path

from skills_lock.core.loading import Loaded, Malformed, Missing, load_json


class TestLoadJson:
    def test_missing(self, tmp_path: Path) -> None:
        result = load_json(tmp_path / "nope.json")
        assert isinstance(result, Missing)
        assert result.path == tmp_path / "nope.json"

    def test_loaded_any_json_type(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        assert load_json(path) == Loaded(path, [1, 2])

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{")
        result = load_json(path)
        assert isinstance(result, Malformed)
        assert "invalid JSON" in result.reason

    def test_directory_is_malformed(self, tmp_path: Path) -> None:
        assert isinstance(load_json(tmp_path), Malformed)

    def test_non_utf8_is_malformed(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes(b'"\xff"')
        assert isinstance(load_json(path), Malformed)
