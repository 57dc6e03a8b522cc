"""Advisory extraction of rule entries from guideline prose.

Guideline documents are written for people and assistants, not machines, so
extraction is best effort: anything that does not look like a rule is
skipped and parsing never fails. Recognised shapes, inside a section whose
heading names a category (``## Bugs``, ``### Code Smells``, ...):

- ``- **Title**: rationale`` and ``1. **Title** - rationale`` items
- ``#### Title`` sub-headings followed by a paragraph

Fenced code blocks after a rule become its examples, tagged by the closest
label line before them (``Don't:``, ``Bad:``, ``Prefer:``, emoji marks, ...).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from guideline_corpus.documents import DocumentStore, GuidelineDocument
from guideline_corpus.rules.models import ExampleKind, RuleCategory, RuleEntry, RuleExample

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^\s{0,3}(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
_FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})\s*([^\s`]*)")
_BOLD_ITEM_RE = re.compile(
    r"^\s*(?:[-*+]|\d+[.)])\s+(?:\*\*|__)(?P<title>.+?)(?:\*\*|__)(?P<rest>.*)$"
)
_BULLET_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+")
_EMPHASIS_RE = re.compile(r"(\*\*|__)(.+?)\1")
_ITALIC_RE = re.compile(r"(?<![\w*])\*(?!\s)([^*]+?)(?<!\s)\*(?![\w*])")
_LEADING_NUMBER_RE = re.compile(r"^(?:\d+ )+")

_DONT_LABEL_RE = re.compile(
    r"^(?:don't|do not|avoid|bad|noncompliant|non-compliant|incorrect|wrong)\b",
    re.IGNORECASE,
)
_DO_LABEL_RE = re.compile(
    r"^(?:do|prefer|good|compliant|correct|better|instead)\b", re.IGNORECASE
)
_LABEL_ONLY_RE = re.compile(
    r"^(?:don't|do not|do|avoid|prefer|bad|good|noncompliant|non-compliant|compliant"
    r"|incorrect|correct|wrong|better|instead)"
    r"(?:\s+(?:example|examples|code|solution|practice|pattern))?\s*:$",
    re.IGNORECASE,
)

_CATEGORY_NAMES: dict[str, RuleCategory] = {
    "vulnerability": RuleCategory.VULNERABILITY,
    "vulnerabilities": RuleCategory.VULNERABILITY,
    "bug": RuleCategory.BUG,
    "bugs": RuleCategory.BUG,
    "code smell": RuleCategory.CODE_SMELL,
    "code smells": RuleCategory.CODE_SMELL,
    "security hotspot": RuleCategory.SECURITY_HOTSPOT,
    "security hotspots": RuleCategory.SECURITY_HOTSPOT,
    "hotspots": RuleCategory.SECURITY_HOTSPOT,
    "best practice": RuleCategory.BEST_PRACTICE,
    "best practices": RuleCategory.BEST_PRACTICE,
    "accessibility": RuleCategory.ACCESSIBILITY,
    "a11y": RuleCategory.ACCESSIBILITY,
    "convention": RuleCategory.CONVENTION,
    "conventions": RuleCategory.CONVENTION,
    "code style": RuleCategory.CONVENTION,
    "coding style": RuleCategory.CONVENTION,
    "style guide": RuleCategory.CONVENTION,
}


def category_for_heading(text: str) -> Optional[RuleCategory]:
    normalized = re.sub(r"[^a-z0-9]+", " ", text.lower()).strip()
    normalized = _LEADING_NUMBER_RE.sub("", normalized)
    if not normalized:
        return None
    exact = _CATEGORY_NAMES.get(normalized)
    if exact is not None:
        return exact
    for name in sorted(_CATEGORY_NAMES, key=len, reverse=True):
        if normalized.endswith(f" {name}"):
            return _CATEGORY_NAMES[name]
    return None


def clean_inline(text: str) -> str:
    text = _EMPHASIS_RE.sub(r"\2", text)
    text = _ITALIC_RE.sub(r"\1", text)
    return " ".join(text.split())


def is_label_only(line: str) -> bool:
    text = clean_inline(_BULLET_RE.sub("", line)).replace("\u2019", "'")
    return _LABEL_ONLY_RE.match(text) is not None


def label_kind(line: str) -> Optional[ExampleKind]:
    if "\u274c" in line or "\U0001f6ab" in line:
        return ExampleKind.DONT
    if "\u2705" in line:
        return ExampleKind.DO
    text = clean_inline(_BULLET_RE.sub("", line)).replace("\u2019", "'")
    if not text.endswith(":"):
        return None
    if _DONT_LABEL_RE.match(text):
        return ExampleKind.DONT
    if _DO_LABEL_RE.match(text):
        return ExampleKind.DO
    return None


@dataclass
class _PendingRule:
    title: str
    rationale: str = ""
    examples: list[RuleExample] = field(default_factory=list)


class _RuleExtractor:
    def __init__(self, document_path: str) -> None:
        self.document_path = document_path
        self.entries: list[RuleEntry] = []
        self.category: Optional[RuleCategory] = None
        self.category_level = 0
        self.pending: Optional[_PendingRule] = None
        self.label: Optional[ExampleKind] = None
        self.fence: Optional[str] = None
        self.fence_language = ""
        self.fence_lines: list[str] = []

    def feed(self, body: str) -> list[RuleEntry]:
        for line in body.splitlines():
            if self.fence is not None:
                self._feed_fenced(line)
            else:
                self._feed_line(line)
        self._flush()
        return self.entries

    def _feed_fenced(self, line: str) -> None:
        stripped = line.strip()
        if stripped.startswith(self.fence) and not stripped.strip(self.fence[0]):
            if self.pending is not None:
                self.pending.examples.append(
                    RuleExample(
                        kind=self.label or ExampleKind.DO,
                        code="\n".join(self.fence_lines),
                        language=self.fence_language,
                    )
                )
            self.label = None
            self.fence = None
            self.fence_lines = []
            return
        self.fence_lines.append(line)

    def _feed_line(self, line: str) -> None:
        fence = _FENCE_RE.match(line)
        if fence:
            self.fence = fence.group(1)
            self.fence_language = fence.group(2).lower()
            self.fence_lines = []
            return

        heading = _HEADING_RE.match(line)
        if heading:
            self._feed_heading(len(heading.group(1)), heading.group(2))
            return

        if self.category is None or not line.strip():
            return

        if is_label_only(line):
            self.label = label_kind(line)
            return

        item = _BOLD_ITEM_RE.match(line)
        if item:
            self._flush()
            rest = item.group("rest").strip().lstrip(":-\u2013\u2014.").strip()
            self._start(item.group("title"), clean_inline(rest))
            return

        if self.pending is None:
            return

        kind = label_kind(line)
        if kind is not None:
            self.label = kind
            return

        if not self.pending.rationale:
            self.pending.rationale = clean_inline(_BULLET_RE.sub("", line))

    def _feed_heading(self, level: int, text: str) -> None:
        category = category_for_heading(text)
        if category is not None:
            self._flush()
            self.category = category
            self.category_level = level
            return
        if self.category is None:
            return
        self._flush()
        if level <= self.category_level:
            self.category = None
            return
        self._start(text, "")

    def _start(self, title: str, rationale: str) -> None:
        self.pending = _PendingRule(
            title=clean_inline(title).rstrip(":-\u2013\u2014.").strip(), rationale=rationale
        )
        self.label = None

    def _flush(self) -> None:
        pending = self.pending
        self.pending = None
        self.label = None
        if pending is None or self.category is None:
            return
        if not pending.title or not pending.rationale:
            return
        self.entries.append(
            RuleEntry(
                document=self.document_path,
                category=self.category,
                title=pending.title,
                rationale=pending.rationale,
                examples=tuple(pending.examples),
            )
        )


def parse_rules(document: GuidelineDocument) -> tuple[RuleEntry, ...]:
    if not isinstance(document.body, str):
        return ()
    return tuple(_RuleExtractor(document.path).feed(document.body))


def group_by_category(entries: Iterable[RuleEntry]) -> dict[str, list[dict[str, str]]]:
    """Group entries as ``{category: [{"title", "rationale"}, ...]}``.

    Categories follow the enumeration order and entries keep their order.
    """
    grouped: dict[RuleCategory, list[dict[str, str]]] = {}
    for entry in entries:
        grouped.setdefault(entry.category, []).append(entry.as_dict())
    return {
        category.value: grouped[category] for category in RuleCategory if category in grouped
    }


class RuleCatalog:
    def __init__(self, store: DocumentStore | None = None) -> None:
        self._store = store if store is not None else DocumentStore()
        self._cache: dict[str, tuple[RuleEntry, ...]] = {}

    @staticmethod
    def parse(document: GuidelineDocument) -> tuple[RuleEntry, ...]:
        return parse_rules(document)

    def entries_for(self, document_path: str | Path) -> tuple[RuleEntry, ...]:
        document = self._store.get(document_path)
        cached = self._cache.get(document.path)
        if cached is None:
            cached = parse_rules(document)
            self._cache[document.path] = cached
            logger.debug("Extracted %d rule(s) from %s", len(cached), document.path)
        return cached

    def entries_for_documents(
        self, documents: Iterable[GuidelineDocument]
    ) -> dict[str, tuple[RuleEntry, ...]]:
        return {
            document.path: self.entries_for(document.path)
            for document in sorted(documents, key=lambda item: item.path)
        }
