# src/asmode/cli/formatter.py
import difflib
from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from asmode.core.models import Classification, LineKind, LineReport

# Initialize the Rich console for high-quality terminal output
console = Console()

# Highlight faces per character category
FACES = {
    "label": "bold yellow",
    "directive": "magenta",
    "operation": "bold cyan",
    "operand": "white",
    "prefix": "blue",
    "variable": "green",
    "comment": "dim italic",
    "doc": "bold dim",
}


def highlight(classification: Classification) -> Text:
    """Builds a styled Text for one line from its classification spans."""
    text = Text(classification.text.expandtabs(1))
    for name, span in classification.code_spans:
        text.stylize(FACES[name], span.start, span.end)
    for span in classification.variable_spans:
        text.stylize(FACES["variable"], span.start, span.end)
    comment_face = FACES["doc"] if classification.is_doc_comment else FACES["comment"]
    for span in classification.comment_spans:
        text.stylize(comment_face, span.start, span.end)
    return text


class AsmFormatter:
    """
    AsmFormatter: The visual heart of the CLI.
    Renders classification reports, layout diffs and summaries.
    """

    def show_report(self, reports: List[LineReport], file_name: str):
        table = Table(title=f"Line Classification: {file_name}", show_header=True,
                      header_style="bold magenta")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Kind")
        table.add_column("Indent", justify="right")
        table.add_column("Now", justify="right", style="dim")
        table.add_column("Source", overflow="fold")

        for r in reports:
            kind = r.classification.kind.value
            if r.classification.is_doc_comment:
                kind = "doc-comment"
            table.add_row(str(r.line_no), kind, str(r.indent), str(r.current_indent),
                          highlight(r.classification))

        console.print(table)

    def display_diff(self, original_text: str, laid_out_text: str, file_name: str) -> bool:
        """
        Renders a colorized unified diff between the source and its canonical
        layout. Returns False when there is nothing to show.
        """
        diff_list = list(difflib.unified_diff(
            original_text.splitlines(),
            laid_out_text.splitlines(),
            fromfile=f"Original: {file_name}",
            tofile="Indented Version",
            lineterm=""
        ))

        if not diff_list:
            console.print(f"[dim]ℹ {file_name} already follows the column layout.[/dim]")
            return False

        syntax = Syntax("\n".join(diff_list), "diff", theme="monokai", line_numbers=True)
        console.print(Panel(syntax, title=f"Proposed Layout: {file_name}", border_style="green"))
        return True

    def print_summary(self, file_name: str, reports: List[LineReport], misaligned: List[int]):
        counts = {kind: 0 for kind in LineKind}
        for r in reports:
            counts[r.classification.kind] += 1

        summary = ", ".join(f"{kind.value}: {n}" for kind, n in counts.items() if n)
        status = "[green]aligned[/green]" if not misaligned else \
            f"[yellow]{len(misaligned)} line(s) off layout[/yellow]"
        console.print(Panel(
            f"[bold white]{file_name}[/bold white]\n"
            f"Lines:   {len(reports)} ({summary})\n"
            f"Layout:  {status}",
            border_style="dim"
        ))
