"""Tests for rich rendering of theory results."""

from io import StringIO

from rich.console import Console

from autospecimen.domain.models import TheoryCaseResult
from autospecimen.report import build_results_table, render_results


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, width=120, color_system=None), buffer


class TestRenderResults:
    """Test the results table and summary."""

    def setup_method(self):
        self.results = [
            TheoryCaseResult(index=0, case_id="1337", arguments=(1337, 5), passed=True),
            TheoryCaseResult(
                index=1,
                case_id="0",
                arguments=(0, 6),
                passed=False,
                error_message="AssertionError: x must be 1337",
            ),
        ]

    def test_table_has_one_row_per_case(self):
        table = build_results_table(self.results)

        assert table.row_count == 2
        assert [column.header for column in table.columns] == [
            "#",
            "Case",
            "Arguments",
            "Outcome",
        ]

    def test_render_prints_failures_and_summary(self):
        console, buffer = _console()

        render_results(self.results, console=console)

        output = buffer.getvalue()
        assert "Theory Results" in output
        assert "1337, 5" in output
        assert "x must be 1337" in output
        assert "1 passed, 1 failed" in output

    def test_render_all_passed(self):
        console, buffer = _console()

        render_results(self.results[:1], console=console, title="Sums")

        output = buffer.getvalue()
        assert "Sums" in output
        assert "1 passed, 0 failed" in output

    def test_long_arguments_are_truncated(self):
        console, buffer = _console()
        result = TheoryCaseResult(index=0, arguments=("x" * 200,), passed=True)

        render_results([result], console=console)

        assert "x" * 200 not in buffer.getvalue()
        assert "..." in buffer.getvalue()
