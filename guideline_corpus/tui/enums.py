from enum import Enum

from guideline_corpus.rules.models import ExampleKind, RuleCategory


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


CATEGORY_STYLE = {
    RuleCategory.VULNERABILITY: UIStyle.RED.value,
    RuleCategory.BUG: UIStyle.RED.value,
    RuleCategory.SECURITY_HOTSPOT: UIStyle.MAGENTA.value,
    RuleCategory.CODE_SMELL: UIStyle.YELLOW.value,
    RuleCategory.BEST_PRACTICE: UIStyle.GREEN.value,
    RuleCategory.ACCESSIBILITY: UIStyle.CYAN.value,
    RuleCategory.CONVENTION: UIStyle.BLUE.value,
}

EXAMPLE_KIND_STYLE = {
    ExampleKind.DO: UIStyle.GREEN.value,
    ExampleKind.DONT: UIStyle.RED.value,
}
