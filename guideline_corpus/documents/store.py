"""Read-only store of guideline documents keyed by relative path."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from guideline_corpus.config import CorpusConfig, load_config
from guideline_corpus.constants import CORPUS_IGNORED_DIRS
from guideline_corpus.documents.models import GuidelineDocument
from guideline_corpus.documents.parser import parse_document
from guideline_corpus.errors import CorpusFileError, DocumentNotFoundError, DocumentParseError
from guideline_corpus.utils import normalize_path

logger = logging.getLogger(__name__)


class DocumentStore:
    """Holds a corpus loaded once and never mutated afterwards.

    Loading is all-or-nothing: the first malformed document aborts the load
    with a ``DocumentParseError`` or ``PatternError`` naming its path.
    """

    def __init__(
        self, documents: Iterable[GuidelineDocument] = (), root: Path | None = None
    ) -> None:
        self._root = root
        indexed: dict[str, GuidelineDocument] = {}
        for document in documents:
            if document.path in indexed:
                raise DocumentParseError(document.path, "duplicate document path")
            indexed[document.path] = document
        self._documents = {path: indexed[path] for path in sorted(indexed)}

    @classmethod
    def load(
        cls, root: str | Path, config: CorpusConfig | None = None
    ) -> "DocumentStore":
        corpus_root = Path(root).expanduser().resolve()
        if not corpus_root.is_dir():
            raise CorpusFileError(corpus_root, "Corpus root is not a directory")
        if config is None:
            config = load_config(corpus_root)

        documents = [
            parse_document(path, corpus_root, default_apply_to=config.default_apply_to)
            for path in discover_documents(corpus_root, config)
        ]
        logger.info("Loaded %d guideline document(s) from %s", len(documents), corpus_root)
        return cls(documents, root=corpus_root)

    @property
    def root(self) -> Path | None:
        return self._root

    def get(self, path: str | Path) -> GuidelineDocument:
        key = normalize_path(path)
        try:
            return self._documents[key]
        except KeyError:
            raise DocumentNotFoundError(key) from None

    def list_all(self) -> Iterator[GuidelineDocument]:
        return iter(self._documents.values())

    def paths(self) -> list[str]:
        return list(self._documents)

    def __iter__(self) -> Iterator[GuidelineDocument]:
        return self.list_all()

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return normalize_path(path) in self._documents


def _raise_walk_error(exc: OSError) -> None:
    path = exc.filename if exc.filename is not None else "<unknown>"
    raise DocumentParseError(path, f"cannot read directory: {exc.strerror or exc}") from exc


def discover_documents(root: Path, config: CorpusConfig) -> list[Path]:
    found: list[Path] = []

    for current, dir_names, file_names in os.walk(
        str(root), topdown=True, onerror=_raise_walk_error
    ):
        dir_names[:] = [name for name in dir_names if name not in CORPUS_IGNORED_DIRS]
        current_path = Path(current)
        for name in file_names:
            path = current_path / name
            relative = path.relative_to(root).as_posix()
            if config.selects(relative):
                found.append(path)
            else:
                logger.debug("Skipping %s", relative)

    return sorted(found)
