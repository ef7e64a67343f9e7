"""
Table formatter for human-readable results.
"""

import io
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from complexityscanner.core.models import AnalysisResult, Summary


ABOVE_THRESHOLD_MARKER = "*"

# Plain output is never wrapped to a terminal width
PLAIN_WIDTH = 1000


def supports_color() -> bool:
    """Check if stdout is a terminal that can show colors."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


class TableFormatter:
    """
    Renders an AnalysisResult as a table of functions, optionally followed
    by the summary block and any skipped files.

    Names and paths are shown verbatim, never read as console markup.
    """

    def __init__(
        self, use_color: bool = True, width: Optional[int] = None, show_summary: bool = True
    ):
        self.use_color = use_color
        self.width = width
        self.show_summary = show_summary

    def _console(self, buffer: io.StringIO) -> Console:
        return Console(
            file=buffer,
            width=self.width or (None if self.use_color else PLAIN_WIDTH),
            force_terminal=self.use_color,
            no_color=not self.use_color,
            highlight=False,
            emoji=False,
        )

    def build_table(self, result: AnalysisResult) -> Table:
        table = Table()
        table.add_column("Function")
        table.add_column("File", overflow="fold")
        table.add_column("Line", justify="right")
        table.add_column("Complexity", justify="right")

        for func in result.functions:
            if func.complexity > result.threshold:
                complexity = Text(f"{func.complexity} {ABOVE_THRESHOLD_MARKER}", style="bold red")
            else:
                complexity = Text(str(func.complexity))
            table.add_row(Text(func.name), Text(func.file_path), str(func.start_line), complexity)

        return table

    def format_summary(self, summary: Summary, threshold: int) -> List[str]:
        return [
            "Summary:",
            f"Mean Complexity: {summary.mean_complexity:.2f}",
            f"Max Complexity: {summary.max_complexity}",
            f"Total Functions: {summary.total_functions}",
            f"Functions above threshold ({threshold}): {summary.functions_above_threshold}",
        ]

    def format_result(self, result: AnalysisResult) -> str:
        buffer = io.StringIO()
        console = self._console(buffer)
        console.print(self.build_table(result))

        if self.show_summary and result.summary is not None:
            console.print()
            for line in self.format_summary(result.summary, result.threshold):
                console.print(line, markup=False)

        if result.errors:
            console.print()
            console.print(f"Skipped files ({len(result.errors)}):", style="yellow", markup=False)
            for error in result.errors:
                console.print(f"  {error.file_path} [{error.kind}]: {error.message}", markup=False)

        return buffer.getvalue().rstrip("\n")
