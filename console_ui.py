#!/usr/bin/env python3
"""
Generic Console UI Module using Rich

Provides styled status lines, headers, settings tables and separators for
the Kathairo command line.
"""

from typing import IO, Any, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table


class ConsoleUI:
    """Generic console UI handler using Rich for CLI output"""

    def __init__(self, force_terminal: Optional[bool] = None, file: Optional[IO[str]] = None):
        """Initialize console with optional terminal forcing and output stream"""
        self.console = Console(force_terminal=force_terminal, file=file, highlight=False)

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green")

    def print_error(self, message: str):
        """Print error message in red"""
        self.console.print(message, style="red bold")

    def print_warning(self, message: str):
        """Print warning message in yellow"""
        self.console.print(message, style="yellow")

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan")

    def print_progress(self, message: str):
        """Print progress message in dim white"""
        self.console.print(message, style="white dim")

    def print_plain(self, message: str):
        self.console.print(message, style="white")

    def print_header(self, title: str, subtitle: Optional[str] = None):
        """Print a header with optional subtitle"""
        if subtitle:
            header_text = f"[bold]{title}[/bold]\n[dim]{subtitle}[/dim]"
        else:
            header_text = f"[bold]{title}[/bold]"

        panel = Panel(header_text, box=box.ROUNDED, padding=(0, 1))
        self.console.print(panel)

    def show_configuration(self, config: dict[str, Any]):
        """Display settings in a two-column table"""
        table = Table(show_header=False, box=box.SIMPLE)
        table.add_column("Setting", style="cyan dim", min_width=12, justify="right")
        table.add_column("Value", style="cyan", min_width=30)

        for key, value in config.items():
            if isinstance(value, (list, tuple)):
                value = " ".join(str(v) for v in value)
            table.add_row(key, str(value))

        self.console.print(table)

    def print_separator(self, char: str = "─", length: int = 50):
        """Print a separator line"""
        self.console.print(char * length, style="dim")
