"""Select the guideline documents that govern a file path."""

from __future__ import annotations

from pathlib import Path

from guideline_corpus.documents import DocumentStore, GuidelineDocument
from guideline_corpus.utils import normalize_path


class Matcher:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    @property
    def store(self) -> DocumentStore:
        return self._store

    def match(self, file_path: str | Path) -> frozenset[GuidelineDocument]:
        """Return every document whose ``applyTo`` scope covers ``file_path``.

        No precedence is applied between matches; overlapping documents are
        all returned and callers decide how to combine them.
        """
        target = normalize_path(file_path)
        return frozenset(
            document for document in self._store.list_all() if document.applies_to(target)
        )

    def match_sorted(self, file_path: str | Path) -> list[GuidelineDocument]:
        return sorted(self.match(file_path), key=lambda document: document.path)
