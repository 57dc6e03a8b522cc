"""Rule entry models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RuleCategory(str, Enum):
    VULNERABILITY = "Vulnerability"
    BUG = "Bug"
    CODE_SMELL = "Code Smell"
    SECURITY_HOTSPOT = "Security Hotspot"
    BEST_PRACTICE = "Best Practice"
    ACCESSIBILITY = "Accessibility"
    CONVENTION = "Convention"


class ExampleKind(str, Enum):
    DO = "do"
    DONT = "dont"


@dataclass(frozen=True)
class RuleExample:
    kind: ExampleKind
    code: str
    language: str = ""


@dataclass(frozen=True)
class RuleEntry:
    document: str
    category: RuleCategory
    title: str
    rationale: str
    examples: tuple[RuleExample, ...] = ()

    def as_dict(self) -> dict[str, str]:
        return {"title": self.title, "rationale": self.rationale}
