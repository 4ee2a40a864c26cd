"""
Console output for the setup wizard, rendered with Rich.
"""

import json
from typing import Any, List, Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table


class Console:
    """
    User-facing output for the wizard.

    Diagnostics belong in the structured logger; this class is only for what
    the person running the wizard should read.
    """

    def __init__(self, no_color: bool = False, rich_console: Optional[RichConsole] = None):
        """
        Initialize the console.

        Args:
            no_color: Disable all colors in output
            rich_console: Rich console to render into, mainly for tests
        """
        self.no_color = no_color
        self._console = rich_console or RichConsole(
            color_system=None if no_color else "auto",
            highlight=False,
        )

    def print(self, message: Any = "", style: Optional[str] = None) -> None:
        """Print a message with optional styling."""
        self._console.print(message, style=style)

    def print_banner(self) -> None:
        """Print the Tiger Agent setup banner."""
        banner = (
            "Hi! I'm eon, a TigerData agent!\n"
            "I'm going to guide you through the setup with the services you need."
        )
        self._console.print(
            Panel(
                banner,
                title="🐅 Tiger Agent Interactive Setup",
                border_style="blue",
                style="bold",
            )
        )

    def heading(self, title: str) -> None:
        """Print a section heading."""
        self._console.print()
        self._console.print(f"[bold blue]{escape(title)}[/bold blue]")
        self._console.print("[cyan]" + "=" * 50 + "[/cyan]")

    def info(self, message: str) -> None:
        """Print an informational message."""
        self._console.print(f"[cyan]ℹ️  {escape(message)}[/cyan]")

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(f"[green]✅  {escape(message)}[/green]")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._console.print(f"[yellow]⚠️  {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        """Print an error message."""
        self._console.print(f"[red]❌  {escape(message)}[/red]")

    def print_list(self, items: List[str], header: str = "") -> None:
        if header:
            self._console.print(escape(header))
        for item in items:
            self._console.print(f"  - {escape(item)}")
        self._console.print()

    def print_json(self, data: Any) -> None:
        """Pretty-print a JSON document, e.g. a Slack app manifest."""
        self._console.print(
            Syntax(json.dumps(data, indent=2), "json", word_wrap=True)
        )

    def print_table(self, title: str, rows: List[tuple], headers: List[str]) -> None:
        """Print a formatted table."""
        table = Table(title=title)
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*[escape(str(cell)) for cell in row])
        self._console.print(table)

    def print_link(self, label: str, url: str) -> None:
        self._console.print(f"{escape(label)} [link={url}]{escape(url)}[/link]")

