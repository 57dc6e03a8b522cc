from collections import Counter

from rich.markup import escape
from rich.table import Column, Table

from guideline_corpus.documents import GuidelineDocument
from guideline_corpus.rules.models import RuleEntry
from guideline_corpus.tui.enums import CATEGORY_STYLE, EXAMPLE_KIND_STYLE, UIStyle


def _styled(value: str, style: str) -> str:
    return f"[{style}]{value}[/{style}]"


class DocumentTable:
    @staticmethod
    def documents_table(
        documents: list[GuidelineDocument], rule_counts: dict[str, int]
    ) -> Table:
        table = Table(
            Column(header="Document", overflow="fold", max_width=48),
            Column(header="Applies to", overflow="fold", max_width=36),
            Column(header="Description", overflow="ellipsis"),
            Column(header="Rules", width=6, justify="right"),
            expand=True,
            header_style="bold",
        )
        for document in documents:
            table.add_row(
                escape(document.path),
                escape(document.apply_to),
                escape(document.description),
                str(rule_counts.get(document.path, 0)),
            )
        return table

    @staticmethod
    def summary_block(document: GuidelineDocument, entries: list[RuleEntry]):
        counts = Counter(entry.category.value for entry in entries)
        chips = [f"{key}={value}" for key, value in sorted(counts.items())]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Path", escape(document.path))
        table.add_row("Applies to", escape(", ".join(document.patterns)))
        if document.description:
            table.add_row("Description", escape(document.description))
        table.add_row("Rules", str(len(entries)))
        table.add_row("Categories", "  ".join(chips))
        return table


class RuleTable:
    @staticmethod
    def rules_table(entries: list[RuleEntry]) -> Table:
        table = Table(
            Column(header="Category", width=16),
            Column(header="Title", overflow="fold", max_width=40),
            Column(header="Rationale", overflow="fold"),
            Column(header="Examples", width=10),
            expand=True,
            header_style="bold",
        )
        for entry in entries:
            style = CATEGORY_STYLE.get(entry.category, UIStyle.WHITE.value)
            examples = " ".join(
                _styled(example.kind.value, EXAMPLE_KIND_STYLE[example.kind])
                for example in entry.examples
            )
            table.add_row(
                _styled(entry.category.value, style),
                escape(entry.title),
                escape(entry.rationale),
                examples,
            )
        return table


class MatchTable:
    @staticmethod
    def matches_table(matches: dict[str, list[GuidelineDocument]]) -> Table:
        table = Table(
            Column(header="File", overflow="fold", max_width=48),
            Column(header="Document", overflow="fold"),
            Column(header="Applies to", overflow="fold", max_width=36),
            expand=True,
            header_style="bold",
        )
        for file_path, documents in matches.items():
            if not documents:
                table.add_row(escape(file_path), _styled("(no guidelines)", UIStyle.DIM.value), "")
                continue
            for index, document in enumerate(documents):
                table.add_row(
                    escape(file_path) if index == 0 else "",
                    escape(document.path),
                    escape(document.apply_to),
                )
        return table
