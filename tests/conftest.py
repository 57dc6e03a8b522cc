import sys
from pathlib import Path
from typing import Callable, Optional

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture
def corpus_root(tmp_path: Path) -> Path:
    root = tmp_path / "corpus"
    root.mkdir()
    return root


@pytest.fixture
def write_doc(corpus_root: Path) -> Callable[..., Path]:
    def _write(relative: str, body: str, apply_to: Optional[str] = None) -> Path:
        path = corpus_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        text = body
        if apply_to is not None:
            text = f"---\napplyTo: '{apply_to}'\n---\n{body}"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
