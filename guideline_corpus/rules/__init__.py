from guideline_corpus.rules.catalog import RuleCatalog, group_by_category, parse_rules
from guideline_corpus.rules.models import ExampleKind, RuleCategory, RuleEntry, RuleExample

__all__ = [
    "ExampleKind",
    "RuleCatalog",
    "RuleCategory",
    "RuleEntry",
    "RuleExample",
    "group_by_category",
    "parse_rules",
]
