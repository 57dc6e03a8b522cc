from typing import Optional

from rich.console import Console, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from guideline_corpus.documents import GuidelineDocument
from guideline_corpus.rules.models import RuleEntry
from guideline_corpus.tui.enums import EXAMPLE_KIND_STYLE, UIStyle
from guideline_corpus.tui.tables import DocumentTable, MatchTable, RuleTable
from guideline_corpus.utils import compact_home_path


def _panel(
    title: str, body: RenderableType, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None
) -> Panel:
    return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))


class CorpusConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_documents(
        self, documents: list[GuidelineDocument], rule_counts: dict[str, int], root: str
    ) -> None:
        if not documents:
            self.console.print(
                _panel(
                    "documents",
                    f"No guideline documents found in {escape(compact_home_path(root))}.",
                    style=UIStyle.YELLOW.value,
                )
            )
            return
        self.console.print(
            _panel(
                "documents",
                DocumentTable.documents_table(documents, rule_counts),
                subtitle=escape(compact_home_path(root)),
            )
        )

    def render_document(
        self, document: GuidelineDocument, entries: list[RuleEntry], show_examples: bool = False
    ) -> None:
        self.console.print(
            _panel("document", DocumentTable.summary_block(document, entries))
        )
        self.render_rules(entries, show_examples=show_examples)

    def render_rules(self, entries: list[RuleEntry], show_examples: bool = False) -> None:
        if not entries:
            self.console.print(
                _panel("rules", "No rules recognised.", style=UIStyle.DIM.value)
            )
            return

        self.console.print(
            _panel("rules", RuleTable.rules_table(entries), style=UIStyle.CYAN.value)
        )
        if not show_examples:
            return
        for entry in entries:
            for example in entry.examples:
                self.console.print(
                    _panel(
                        f"{escape(entry.title)} ({example.kind.value})",
                        Syntax(example.code, example.language or "text"),
                        style=EXAMPLE_KIND_STYLE[example.kind],
                    )
                )

    def render_matches(self, matches: dict[str, list[GuidelineDocument]]) -> None:
        self.console.print(
            _panel("matches", MatchTable.matches_table(matches), style=UIStyle.MAGENTA.value)
        )

    def render_check(self, document_count: int, rule_count: int, root: str) -> None:
        self.console.print(
            _panel(
                "check",
                f"Loaded [bold]{document_count}[/bold] document(s) with "
                f"[bold]{rule_count}[/bold] recognised rule(s).\n"
                f"{escape(compact_home_path(root))}",
                style=UIStyle.GREEN.value,
            )
        )
