from guideline_corpus.documents.models import GuidelineDocument
from guideline_corpus.documents.parser import parse_document, parse_text
from guideline_corpus.documents.store import DocumentStore

__all__ = [
    "GuidelineDocument",
    "DocumentStore",
    "parse_document",
    "parse_text",
]
