from typing import Final


CONFIG_FILENAME: Final[str] = "guidelines.json"

DEFAULT_APPLY_TO: Final[str] = "**"
DEFAULT_INCLUDE: Final[tuple[str, ...]] = ("**/*.md",)

APPLY_TO_KEY: Final[str] = "applyTo"
DESCRIPTION_KEY: Final[str] = "description"

CORPUS_IGNORED_DIRS: Final[tuple[str, ...]] = (
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    ".venv",
)
