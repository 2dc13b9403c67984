"""Rich rendering of theory results."""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .domain.models import TheoryCaseResult


def _format_arguments(result: TheoryCaseResult, max_length: int = 60) -> str:
    text = ", ".join(repr(argument) for argument in result.arguments)
    if len(text) > max_length:
        text = text[: max_length - 3] + "..."
    return text


def build_results_table(
    results: Sequence[TheoryCaseResult], title: str = "Theory Results"
) -> Table:
    """Build a table with one line per theory case."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold blue",
        border_style="blue",
    )
    table.add_column("#", justify="right", style="cyan", min_width=3)
    table.add_column("Case", style="green", min_width=10)
    table.add_column("Arguments", style="white", max_width=60)
    table.add_column("Outcome", justify="center", min_width=8)

    for result in results:
        outcome = "[green]passed[/]" if result.passed else "[red]failed[/]"
        table.add_row(
            str(result.index),
            escape(result.case_id or "-"),
            escape(_format_arguments(result)),
            outcome,
        )

    return table


def render_results(
    results: Sequence[TheoryCaseResult],
    console: Console | None = None,
    title: str = "Theory Results",
) -> None:
    """Print the results table, each failure's message, and a summary line."""
    console = console or Console()
    console.print(build_results_table(results, title=title))

    failures = [result for result in results if not result.passed]
    for result in failures:
        console.print(
            f"[red]case {result.index}[/] {escape(result.error_message or '')}"
        )

    passed = len(results) - len(failures)
    style = "green" if not failures else "red"
    console.print(f"[{style}]{passed} passed, {len(failures)} failed[/]")
