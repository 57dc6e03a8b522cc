"""Parse guideline documents with YAML front matter."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from guideline_corpus.constants import APPLY_TO_KEY, DEFAULT_APPLY_TO, DESCRIPTION_KEY
from guideline_corpus.documents.models import GuidelineDocument
from guideline_corpus.errors import DocumentParseError, PatternError
from guideline_corpus.utils import normalize_path

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


def parse_document(
    source_path: Path, root: Path, default_apply_to: str = DEFAULT_APPLY_TO
) -> GuidelineDocument:
    relative = normalize_path(source_path.relative_to(root).as_posix())
    try:
        text = source_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentParseError(source_path, f"not valid UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise DocumentParseError(source_path, exc.strerror or str(exc)) from exc
    return parse_text(
        relative,
        text,
        default_apply_to=default_apply_to,
        source_path=source_path,
    )


def parse_text(
    path: str,
    text: str,
    default_apply_to: str = DEFAULT_APPLY_TO,
    source_path: Path | None = None,
) -> GuidelineDocument:
    error_path = source_path or path
    text = text.lstrip("\ufeff")

    match = _FRONTMATTER_RE.match(text)
    if match:
        try:
            raw = yaml.safe_load(match.group(1))
        except yaml.YAMLError as exc:
            raise DocumentParseError(error_path, f"invalid front matter: {exc}") from exc
        body = text[match.end() :]
    else:
        raw = None
        body = text

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise DocumentParseError(error_path, "front matter must be a mapping")

    apply_to = _read_apply_to(raw, error_path, default_apply_to)
    description = raw.get(DESCRIPTION_KEY)

    try:
        document = GuidelineDocument(
            path=normalize_path(path),
            body=body,
            apply_to=apply_to,
            description="" if description is None else str(description).strip(),
            source_path=source_path,
        )
    except PatternError as exc:
        raise exc.with_path(error_path) from exc

    logger.debug("Parsed %s (applyTo=%s)", document.path, document.apply_to)
    return document


def _read_apply_to(raw: dict[str, Any], error_path: Path | str, default: str) -> str:
    value = raw.get(APPLY_TO_KEY)
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return ", ".join(value)
    raise DocumentParseError(
        error_path, f"'{APPLY_TO_KEY}' must be a string or a list of strings"
    )
