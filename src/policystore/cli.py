"""Command-line interface for policystore."""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from typing import TYPE_CHECKING

from policystore.config.settings import Settings
from policystore.console.logger import StoreConsole
from policystore.core.exceptions import PolicyStoreError
from policystore.storage.adapter import SQLiteAdapter


if TYPE_CHECKING:
    from collections.abc import Sequence

console = StoreConsole()


def list_rules(adapter: SQLiteAdapter, ptype: str | None = None) -> None:
    """Print the stored rules."""
    rules = adapter.rules(ptype)
    console.print_rules_table(rules, title=f"{ptype} rules" if ptype else "Policy Rules")


def show_stats(adapter: SQLiteAdapter) -> None:
    """Print row counts per policy type."""
    by_ptype = Counter(rule.p_type for rule in adapter.rules())
    console.print_store_stats(
        {
            "db_path": adapter.db_path,
            "table_name": adapter.table_name,
            "total_rules": adapter.count(),
            "by_ptype": dict(sorted(by_ptype.items())),
        }
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="policystore", description="Manage Casbin policy rules stored in SQLite"
    )
    parser.add_argument("--db", help="Policy database path (default: POLICYSTORE_DB_PATH)")
    parser.add_argument("--table", help="Policy table name (default: POLICYSTORE_TABLE_NAME)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show log output")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init", help="Create the policy table")

    list_cmd = subparsers.add_parser("list", help="List stored rules")
    list_cmd.add_argument("--ptype", help="Only rules of this policy type")

    add_cmd = subparsers.add_parser("add", help="Add a rule")
    add_cmd.add_argument("ptype", help="Policy type, e.g. p or g")
    add_cmd.add_argument("fields", nargs="+", help="Rule fields in order")

    rm_cmd = subparsers.add_parser("remove", help="Remove every copy of a rule")
    rm_cmd.add_argument("ptype", help="Policy type, e.g. p or g")
    rm_cmd.add_argument("fields", nargs="+", help="Rule fields in order")

    filt_cmd = subparsers.add_parser(
        "remove-filtered", help="Remove rules matching fields from an index on"
    )
    filt_cmd.add_argument("ptype", help="Policy type, e.g. p or g")
    filt_cmd.add_argument("field_index", type=int, help="Index of the first field to match")
    filt_cmd.add_argument("values", nargs="+", help="Field values, empty string matches anything")

    subparsers.add_parser("drop", help="Drop the policy table")
    subparsers.add_parser("stats", help="Show policy store statistics")
    return parser


def run(args: argparse.Namespace, settings: Settings) -> None:
    """Execute one parsed command against the configured store."""
    adapter = SQLiteAdapter(
        args.db or settings.db_path, args.table or settings.table_name, settings.timeout
    )
    with adapter:
        if args.command == "init":
            console.print_success(f"Policy table {adapter.table_name} ready in {adapter.db_path}")
        elif args.command == "list":
            list_rules(adapter, args.ptype)
        elif args.command == "add":
            adapter.add_policy(args.ptype[:1], args.ptype, args.fields)
            console.print_success(f"Added {args.ptype}, {', '.join(args.fields)}")
        elif args.command == "remove":
            adapter.remove_policy(args.ptype[:1], args.ptype, args.fields)
            console.print_success(f"Removed {args.ptype}, {', '.join(args.fields)}")
        elif args.command == "remove-filtered":
            adapter.remove_filtered_policy(
                args.ptype[:1], args.ptype, args.field_index, *args.values
            )
            console.print_success(f"Removed {args.ptype} rules matching from field {args.field_index}")
        elif args.command == "drop":
            adapter.drop_schema()
            console.print_success(f"Dropped policy table {adapter.table_name}")
        elif args.command == "stats":
            show_stats(adapter)


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        settings = Settings()
        console.verbose = args.verbose
        console.setup_logging(settings.log_level)
        run(args, settings)
    except KeyboardInterrupt:
        console.console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except (PolicyStoreError, ValueError) as e:
        console.print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
