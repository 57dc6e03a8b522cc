"""Tests for guidelines.json loading and validation."""

import json
from pathlib import Path

import pytest

from guideline_corpus.config import CorpusConfig, load_config
from guideline_corpus.errors import InvalidConfigError, PatternError


def _write_config(root: Path, payload) -> Path:
    path = root / "guidelines.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config == CorpusConfig()
    assert config.include == ("**/*.md",)
    assert config.exclude == ()
    assert config.default_apply_to == "**"


def test_full_config(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        {
            "include": ["**/*.instructions.md", "README.md"],
            "exclude": ["archive/**"],
            "default_apply_to": "**/*.ts",
        },
    )
    config = load_config(tmp_path)
    assert config.include == ("**/*.instructions.md", "README.md")
    assert config.exclude == ("archive/**",)
    assert config.default_apply_to == "**/*.ts"


def test_selects_respects_include_and_exclude() -> None:
    config = CorpusConfig(include=("**/*.md",), exclude=("archive/**",))
    assert config.selects("java.md")
    assert config.selects("angular/components.md")
    assert not config.selects("archive/old.md")
    assert not config.selects("notes.txt")


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "guidelines.json"
    path.write_text("{not-json", encoding="utf-8")
    with pytest.raises(InvalidConfigError) as excinfo:
        load_config(tmp_path)
    assert excinfo.value.path == path
    assert "invalid JSON" in str(excinfo.value)


def test_unknown_key_fails_schema(tmp_path: Path) -> None:
    _write_config(tmp_path, {"includes": ["**/*.md"]})
    with pytest.raises(InvalidConfigError) as excinfo:
        load_config(tmp_path)
    assert "includes" in str(excinfo.value)


def test_wrong_type_reports_location(tmp_path: Path) -> None:
    _write_config(tmp_path, {"exclude": ["ok/**", 3]})
    with pytest.raises(InvalidConfigError) as excinfo:
        load_config(tmp_path)
    assert "at exclude.1" in str(excinfo.value)


def test_non_object_fails_schema(tmp_path: Path) -> None:
    _write_config(tmp_path, ["**/*.md"])
    with pytest.raises(InvalidConfigError):
        load_config(tmp_path)


def test_malformed_glob_in_config(tmp_path: Path) -> None:
    path = _write_config(tmp_path, {"include": ["**/*.{md"]})
    with pytest.raises(PatternError) as excinfo:
        load_config(tmp_path)
    assert excinfo.value.path == path


def test_unreadable_config(tmp_path: Path) -> None:
    path = tmp_path / "guidelines.json"
    path.mkdir()
    with pytest.raises(InvalidConfigError) as excinfo:
        load_config(tmp_path)
    assert excinfo.value.path == path
    assert "cannot read file" in str(excinfo.value)
