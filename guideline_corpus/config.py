"""Corpus configuration loaded from ``guidelines.json``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from guideline_corpus.constants import CONFIG_FILENAME, DEFAULT_APPLY_TO, DEFAULT_INCLUDE
from guideline_corpus.errors import InvalidConfigError, PatternError
from guideline_corpus.globs import GlobPattern, compile_glob, compile_patterns
from guideline_corpus.utils import read_json

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "schema.json"


def load_json_schema(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


@dataclass(frozen=True)
class CorpusConfig:
    include: tuple[str, ...] = DEFAULT_INCLUDE
    exclude: tuple[str, ...] = ()
    default_apply_to: str = DEFAULT_APPLY_TO

    @property
    def include_globs(self) -> tuple[GlobPattern, ...]:
        return tuple(compile_glob(item) for item in self.include)

    @property
    def exclude_globs(self) -> tuple[GlobPattern, ...]:
        return tuple(compile_glob(item) for item in self.exclude)

    def selects(self, relative_path: str) -> bool:
        if any(item.matches(relative_path) for item in self.exclude_globs):
            return False
        return any(item.matches(relative_path) for item in self.include_globs)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CorpusConfig":
        return cls(
            include=tuple(payload.get("include", DEFAULT_INCLUDE)),
            exclude=tuple(payload.get("exclude", ())),
            default_apply_to=payload.get("default_apply_to", DEFAULT_APPLY_TO),
        )


def load_config(root: Path) -> CorpusConfig:
    path = root / CONFIG_FILENAME
    if not path.exists():
        return CorpusConfig()

    try:
        payload = read_json(path)
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(path, f"invalid JSON: {exc.msg}") from exc
    except UnicodeDecodeError as exc:
        raise InvalidConfigError(path, "not valid UTF-8") from exc
    except OSError as exc:
        raise InvalidConfigError(path, f"cannot read file: {exc.strerror or exc}") from exc

    validator = Draft202012Validator(load_json_schema(_SCHEMA_PATH))
    error = next(iter(validator.iter_errors(payload)), None)
    if error is not None:
        raise InvalidConfigError(path, format_schema_error(error))

    config = CorpusConfig.from_payload(payload)
    try:
        for pattern in (*config.include, *config.exclude):
            compile_glob(pattern)
        compile_patterns(config.default_apply_to)
    except PatternError as exc:
        raise exc.with_path(path) from exc

    logger.debug("Loaded corpus config from %s", path)
    return config
