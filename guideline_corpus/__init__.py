"""Load, validate and query corpora of coding guideline documents."""

from guideline_corpus.documents import DocumentStore, GuidelineDocument
from guideline_corpus.errors import (
    CorpusError,
    DocumentNotFoundError,
    DocumentParseError,
    PatternError,
)
from guideline_corpus.matcher import Matcher
from guideline_corpus.rules import RuleCatalog, RuleCategory, RuleEntry

__all__ = [
    "CorpusError",
    "DocumentNotFoundError",
    "DocumentParseError",
    "DocumentStore",
    "GuidelineDocument",
    "Matcher",
    "PatternError",
    "RuleCatalog",
    "RuleCategory",
    "RuleEntry",
]
