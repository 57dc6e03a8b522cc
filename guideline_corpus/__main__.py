import json
import logging
from pathlib import Path
from typing import Any, Dict

import click
from rich.console import Console
from rich.logging import RichHandler

from guideline_corpus.documents import DocumentStore, GuidelineDocument
from guideline_corpus.errors import CorpusError
from guideline_corpus.matcher import Matcher
from guideline_corpus.rules import RuleCatalog, group_by_category
from guideline_corpus.tui import CorpusConsoleUI


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("guideline_corpus")
    logger.handlers[:] = [
        RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    ]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _load_store(obj: Dict[str, Any]) -> DocumentStore:
    try:
        return DocumentStore.load(obj["root"])
    except CorpusError as exc:
        raise click.ClickException(str(exc))


def _get_document(store: DocumentStore, path: str) -> GuidelineDocument:
    try:
        return store.get(path)
    except CorpusError as exc:
        raise click.ClickException(str(exc))


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _document_payload(
    document: GuidelineDocument, catalog: RuleCatalog, include_rules: bool
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "document": document.path,
        "applyTo": document.apply_to,
    }
    if document.description:
        payload["description"] = document.description
    if include_rules:
        payload["rules"] = group_by_category(catalog.entries_for(document.path))
    return payload


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--root",
    type=click.Path(path_type=Path, file_okay=False),
    default=".",
    show_default=True,
    help="Guideline corpus directory.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, root: Path, verbose: bool) -> None:
    """Load and query a corpus of coding guideline documents."""
    _configure_logging(verbose)
    ctx.obj = {"root": root}


@cli.command("list", help="List guideline documents and their scopes.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of tables.")
@click.pass_obj
def list_documents(obj: Dict[str, Any], as_json: bool) -> None:
    store = _load_store(obj)
    catalog = RuleCatalog(store)
    documents = list(store.list_all())

    if as_json:
        _echo_json(
            [_document_payload(document, catalog, include_rules=False) for document in documents]
        )
        return

    rule_counts = {document.path: len(catalog.entries_for(document.path)) for document in documents}
    ui = CorpusConsoleUI(Console())
    ui.render_documents(documents, rule_counts, root=str(store.root))


@cli.command(help="Show a document's scope and extracted rules.")
@click.argument("path")
@click.option("--examples", is_flag=True, help="Print example snippets too.")
@click.pass_obj
def show(obj: Dict[str, Any], path: str, examples: bool) -> None:
    store = _load_store(obj)
    document = _get_document(store, path)
    entries = list(RuleCatalog(store).entries_for(document.path))
    CorpusConsoleUI(Console()).render_document(document, entries, show_examples=examples)


@cli.command(help="Print the rules of one document grouped by category.")
@click.argument("path")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of tables.")
@click.pass_obj
def rules(obj: Dict[str, Any], path: str, as_json: bool) -> None:
    store = _load_store(obj)
    document = _get_document(store, path)
    entries = RuleCatalog(store).entries_for(document.path)

    if as_json:
        _echo_json(group_by_category(entries))
        return
    CorpusConsoleUI(Console()).render_rules(list(entries))


@cli.command(help="Find the documents whose scope covers each file.")
@click.argument("files", nargs=-1, required=True)
@click.option("--rules", "with_rules", is_flag=True, help="Include extracted rules (JSON only).")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of tables.")
@click.pass_obj
def match(obj: Dict[str, Any], files: tuple[str, ...], with_rules: bool, as_json: bool) -> None:
    store = _load_store(obj)
    matcher = Matcher(store)
    matches = {file_path: matcher.match_sorted(file_path) for file_path in files}

    if as_json:
        catalog = RuleCatalog(store)
        _echo_json(
            {
                file_path: [
                    _document_payload(document, catalog, include_rules=with_rules)
                    for document in documents
                ]
                for file_path, documents in matches.items()
            }
        )
        return
    CorpusConsoleUI(Console()).render_matches(matches)


@cli.command(help="Load the corpus and report structural errors.")
@click.pass_obj
def check(obj: Dict[str, Any]) -> None:
    store = _load_store(obj)
    catalog = RuleCatalog(store)
    rule_count = sum(len(catalog.entries_for(path)) for path in store.paths())
    CorpusConsoleUI(Console()).render_check(len(store), rule_count, root=str(store.root))


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
