"""Output formatting utilities for the zsync CLI."""

import json
import sys
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class OutputFormatter:
    """Handles user-facing output in human-readable or JSON form.

    Informational messages go to stdout, errors and warnings to stderr.
    In quiet mode only errors, warnings and JSON payloads are written.
    """

    def __init__(self, json_output: bool = False, quiet: bool = False):
        """Initialize output formatter.

        Args:
            json_output: Whether to emit machine-readable JSON
            quiet: Whether to suppress non-essential output
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console(soft_wrap=True)
        self.console_err = Console(stderr=True, soft_wrap=True)

    def print(self, message: str = "") -> None:
        """Print a plain message."""
        if not self.quiet and not self.json_output:
            self.console.print(message, highlight=False, markup=False)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self.quiet and not self.json_output:
            self.console.print(message, highlight=False, markup=False)

    def success(self, message: str) -> None:
        """Print a success message."""
        if not self.quiet and not self.json_output:
            self.console.print(f"[green]✓[/green] {escape(message)}", highlight=False)

    def warning(self, message: str) -> None:
        """Print a warning message."""
        if not self.json_output:
            self.console_err.print(
                f"[yellow]Warning:[/yellow] {escape(message)}", highlight=False
            )

    def error(self, message: str) -> None:
        """Print an error message."""
        if self.json_output:
            print(json.dumps({"error": message}), file=sys.stderr)
        else:
            self.console_err.print(
                f"[red]Error:[/red] {escape(message)}", highlight=False
            )

    def output_json(self, data: Any) -> None:
        """Print data as JSON."""
        print(json.dumps(data, indent=2, default=str))

    def output_table(
        self,
        columns: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows as a rich table.

        Args:
            columns: Column headers
            rows: Table rows, one list of cell strings per row
            title: Optional table title
        """
        if self.quiet:
            return
        table = Table(title=title)
        for column in columns:
            table.add_column(column, overflow="fold")
        for row in rows:
            table.add_row(*[escape(cell) for cell in row])
        self.console.print(table)
