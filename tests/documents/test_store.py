"""Tests for DocumentStore."""

import json
from pathlib import Path

import pytest

from guideline_corpus.config import CorpusConfig
from guideline_corpus.documents import DocumentStore, GuidelineDocument
from guideline_corpus.errors import (
    CorpusFileError,
    DocumentNotFoundError,
    DocumentParseError,
    InvalidConfigError,
    PatternError,
)
from guideline_corpus.matcher import Matcher


def test_load_empty_corpus(corpus_root: Path) -> None:
    store = DocumentStore.load(corpus_root)
    assert len(store) == 0
    assert list(store.list_all()) == []


def test_load_populated(corpus_root: Path, write_doc) -> None:
    write_doc("java.md", "# Java\n", apply_to="**/*.java")
    write_doc("angular/components.md", "# Components\n", apply_to="src/app/**/*.ts")
    write_doc("README.md", "# Knowledge base\n")

    store = DocumentStore.load(corpus_root)

    assert store.paths() == ["README.md", "angular/components.md", "java.md"]
    assert store.get("java.md").apply_to == "**/*.java"
    assert store.get("README.md").apply_to == "**"
    assert store.root == corpus_root.resolve()


def test_get_normalizes_lookup_path(corpus_root: Path, write_doc) -> None:
    write_doc("angular/components.md", "Body\n")
    store = DocumentStore.load(corpus_root)
    assert store.get("./angular/components.md").path == "angular/components.md"
    assert store.get("angular\\components.md").path == "angular/components.md"
    assert "angular/components.md" in store
    assert "missing.md" not in store
    assert 42 not in store


def test_get_missing_raises_not_found(corpus_root: Path, write_doc) -> None:
    write_doc("java.md", "Body\n")
    store = DocumentStore.load(corpus_root)
    with pytest.raises(DocumentNotFoundError) as excinfo:
        store.get("typescript.md")
    assert excinfo.value.path == "typescript.md"


def test_every_listed_path_can_be_fetched(corpus_root: Path, write_doc) -> None:
    write_doc("a.md", "A\n", apply_to="**/*.ts")
    write_doc("nested/b.md", "B\n")
    write_doc("nested/deeper/c.md", "C\n", apply_to="**/*.html")
    store = DocumentStore.load(corpus_root)

    for document in store.list_all():
        assert store.get(document.path) is document


def test_list_all_is_restartable(corpus_root: Path, write_doc) -> None:
    write_doc("a.md", "A\n")
    write_doc("b.md", "B\n")
    store = DocumentStore.load(corpus_root)

    first = [document.path for document in store.list_all()]
    second = [document.path for document in store.list_all()]
    assert first == second == ["a.md", "b.md"]
    assert [document.path for document in store] == first


def test_load_skips_vcs_and_ignored_dirs(corpus_root: Path, write_doc) -> None:
    write_doc("visible.md", "Body\n")
    write_doc(".git/info.md", "Body\n")
    write_doc("node_modules/pkg/README.md", "Body\n")
    write_doc(".venv/lib/notes.md", "Body\n")

    store = DocumentStore.load(corpus_root)
    assert store.paths() == ["visible.md"]


def test_load_includes_github_instruction_files(corpus_root: Path, write_doc) -> None:
    write_doc(".github/instructions/java.instructions.md", "Body\n", apply_to="**/*.java")
    write_doc(".github/copilot-instructions.md", "Body\n", apply_to="**/*.ts")
    write_doc("README.md", "Body\n", apply_to="docs/**")

    store = DocumentStore.load(corpus_root)
    assert store.paths() == [
        ".github/copilot-instructions.md",
        ".github/instructions/java.instructions.md",
        "README.md",
    ]
    assert [document.path for document in Matcher(store).match_sorted("src/Foo.java")] == [
        ".github/instructions/java.instructions.md"
    ]


def test_load_raises_on_unreadable_directory(
    corpus_root: Path, write_doc, monkeypatch: pytest.MonkeyPatch
) -> None:
    write_doc("rule.md", "Body\n")
    locked = corpus_root / "locked"

    def _walk(top, topdown=True, onerror=None, followlinks=False):
        yield top, [], ["rule.md"]
        onerror(PermissionError(13, "Permission denied", str(locked)))

    monkeypatch.setattr("guideline_corpus.documents.store.os.walk", _walk)

    with pytest.raises(DocumentParseError) as excinfo:
        DocumentStore.load(corpus_root)
    assert excinfo.value.path == str(locked)
    assert "Permission denied" in str(excinfo.value)



def test_load_ignores_non_markdown_files(corpus_root: Path, write_doc) -> None:
    write_doc("rule.md", "Body\n")
    write_doc("notes.txt", "text\n")
    write_doc("snippet.java", "class A {}\n")

    store = DocumentStore.load(corpus_root)
    assert store.paths() == ["rule.md"]


def test_load_is_all_or_nothing_on_parse_error(corpus_root: Path, write_doc) -> None:
    write_doc("good.md", "Body\n", apply_to="**/*.java")
    bad = write_doc("bad.md", "---\napplyTo: [oops\n---\nBody\n")

    with pytest.raises(DocumentParseError) as excinfo:
        DocumentStore.load(corpus_root)
    assert excinfo.value.path == bad.resolve()


def test_load_raises_pattern_error_for_malformed_glob(corpus_root: Path, write_doc) -> None:
    write_doc("good.md", "Body\n", apply_to="**/*.java")
    write_doc("broken.md", "Body\n", apply_to="src/[abc")

    with pytest.raises(PatternError) as excinfo:
        DocumentStore.load(corpus_root)
    assert excinfo.value.pattern == "src/[abc"
    assert str(excinfo.value.path).endswith("broken.md")


def test_load_rejects_non_directory_root(tmp_path: Path) -> None:
    target = tmp_path / "file.md"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(CorpusFileError):
        DocumentStore.load(target)
    with pytest.raises(CorpusFileError):
        DocumentStore.load(tmp_path / "missing")


def test_load_with_explicit_config(corpus_root: Path, write_doc) -> None:
    write_doc("docs/a.instructions.md", "Body\n")
    write_doc("docs/b.md", "Body\n")
    write_doc("drafts/c.instructions.md", "Body\n")

    config = CorpusConfig(include=("**/*.instructions.md",), exclude=("drafts/**",))
    store = DocumentStore.load(corpus_root, config=config)
    assert store.paths() == ["docs/a.instructions.md"]


def test_load_reads_config_file(corpus_root: Path, write_doc) -> None:
    write_doc("scoped.md", "Body\n")
    write_doc("java.md", "Body\n", apply_to="**/*.java")
    (corpus_root / "guidelines.json").write_text(
        json.dumps({"default_apply_to": "**/*.md"}), encoding="utf-8"
    )

    store = DocumentStore.load(corpus_root)
    assert store.get("scoped.md").apply_to == "**/*.md"
    assert store.get("java.md").apply_to == "**/*.java"


def test_load_surfaces_invalid_config(corpus_root: Path, write_doc) -> None:
    write_doc("a.md", "Body\n")
    (corpus_root / "guidelines.json").write_text('{"include": []}', encoding="utf-8")
    with pytest.raises(InvalidConfigError):
        DocumentStore.load(corpus_root)


def test_constructor_rejects_duplicate_paths() -> None:
    documents = [
        GuidelineDocument(path="a.md", body="one"),
        GuidelineDocument(path="a.md", body="two"),
    ]
    with pytest.raises(DocumentParseError):
        DocumentStore(documents)


def test_constructor_from_documents() -> None:
    store = DocumentStore(
        [GuidelineDocument(path="b.md", body=""), GuidelineDocument(path="a.md", body="")]
    )
    assert store.paths() == ["a.md", "b.md"]
    assert store.root is None
