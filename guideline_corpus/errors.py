from pathlib import Path
from typing import Optional


class CorpusError(Exception):
    """Base user-facing corpus error."""


class CorpusFileError(CorpusError):
    def __init__(self, path: Path | str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class DocumentNotFoundError(CorpusFileError):
    def __init__(self, path: Path | str) -> None:
        super().__init__(path=path, message="Guideline document not found")


class DocumentParseError(CorpusFileError):
    def __init__(self, path: Path | str, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot parse guideline document ({detail})")


class InvalidConfigError(CorpusFileError):
    def __init__(self, path: Path | str, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid corpus config ({detail})")


class PatternError(CorpusError):
    def __init__(
        self, pattern: str, detail: str, path: Optional[Path | str] = None
    ) -> None:
        self.pattern = pattern
        self.detail = detail
        self.path = path
        message = f"Invalid glob pattern {pattern!r} ({detail})"
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)

    def with_path(self, path: Path | str) -> "PatternError":
        return PatternError(self.pattern, self.detail, path=path)
