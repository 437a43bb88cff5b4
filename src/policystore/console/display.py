"""Display components for console output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from policystore.core.types import VALUE_COLUMNS


if TYPE_CHECKING:
    from rich.console import Console

    from policystore.core.models import CasbinRule


def print_rules_table(console: Console, rules: list[CasbinRule], title: str = "Policy Rules") -> None:
    """Print stored rules, one row per table row."""
    if not rules:
        console.print("  [yellow]⚠[/yellow] No policy rules stored")
        return
    table = Table(title=title, border_style="dim")
    table.add_column("Type", style="cyan")
    for column in VALUE_COLUMNS:
        table.add_column(column.upper())
    for rule in rules:
        cells = [escape(value) if value else "[dim]-[/dim]" for value in rule.value_columns]
        table.add_row(escape(rule.p_type), *cells)
    console.print(table)


def print_store_stats(console: Console, stats: dict[str, Any]) -> None:
    """Print policy store statistics."""
    table = Table(title="Policy Store Statistics", border_style="blue")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Database", str(stats["db_path"]))
    table.add_row("Table", str(stats["table_name"]))
    table.add_row("Total Rules", str(stats["total_rules"]))
    for ptype, count in stats.get("by_ptype", {}).items():
        table.add_row(f"  {ptype}", str(count))
    console.print()
    console.print(table)
