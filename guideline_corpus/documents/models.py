"""Guideline document models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from guideline_corpus.constants import DEFAULT_APPLY_TO
from guideline_corpus.globs import GlobPattern, compile_patterns


@dataclass(frozen=True)
class GuidelineDocument:
    path: str
    body: str
    apply_to: str = DEFAULT_APPLY_TO
    description: str = ""
    source_path: Path | None = field(default=None, compare=False)
    globs: tuple[GlobPattern, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.globs:
            object.__setattr__(self, "globs", compile_patterns(self.apply_to))

    @property
    def patterns(self) -> tuple[str, ...]:
        return tuple(item.pattern for item in self.globs)

    def applies_to(self, file_path: str) -> bool:
        return any(item.matches(file_path) for item in self.globs)
