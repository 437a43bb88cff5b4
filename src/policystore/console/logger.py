"""Console logging and status output for the command line."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from policystore.console.display import print_rules_table, print_store_stats


if TYPE_CHECKING:
    from policystore.core.models import CasbinRule


class StoreConsole:
    """Rich console interface for policy store commands."""

    def __init__(self, verbose: bool = False) -> None:
        self.console = Console()
        self.verbose = verbose

    def setup_logging(self, level: str = "INFO") -> None:
        logging.basicConfig(
            level=level if self.verbose else "WARNING",
            format="%(message)s",
            handlers=[
                RichHandler(
                    console=self.console, rich_tracebacks=True, show_time=False, show_path=False
                )
            ],
            force=True,
        )

    def print_rules_table(self, rules: list[CasbinRule], title: str = "Policy Rules") -> None:
        print_rules_table(self.console, rules, title)

    def print_store_stats(self, stats: dict[str, Any]) -> None:
        print_store_stats(self.console, stats)

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def print_error(self, error: str) -> None:
        self.console.print()
        self.console.print(
            Panel(f"[red]{escape(error)}[/red]", title="[red]Error[/red]", border_style="red")
        )
