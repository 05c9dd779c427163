"""
Run Supply Chain Reports
========================

Loads the seven input tables, runs the reports and prints or exports them.

Sources:
    --data-dir DIR      Directory of CSV files (default: bundled sample data)
    --source database   Tables from a database schema (--schema, default dbo)

Usage:
    python -m supply_chain.scripts.run_reports
    python -m supply_chain.scripts.run_reports --data-dir data/
    python -m supply_chain.scripts.run_reports --report on_time_rate_by_carrier
    python -m supply_chain.scripts.run_reports --export-dir out/ --format parquet
    python -m supply_chain.scripts.run_reports --source database --schema dbo
    python -m supply_chain.scripts.run_reports --list
"""

import argparse
import sys
from pathlib import Path

from supply_chain.version import VERSION
from supply_chain.data import SAMPLE_DIR
from supply_chain.data.loaders import load_tables_from_csv, load_tables_from_database, DEFAULT_SCHEMA
from supply_chain.pipeline import (
    Tables,
    overlapping_freight_bands,
    unmatched_orders,
    print_report,
    export_reports,
    EXPORT_FORMATS,
)
from supply_chain.reports import ALL, get_report, run_reports


# =============================================================================
# STEPS
# =============================================================================

def load_tables(source: str, data_dir: Path, schema: str) -> Tables:
    """Load tables from the selected source."""
    if source == "database":
        return load_tables_from_database(schema=schema)
    return load_tables_from_csv(data_dir)


def print_data_quality(tables: Tables) -> None:
    """Print notes on rows the reports drop or multiply."""
    print("\nData quality:")

    overlaps = overlapping_freight_bands(tables.freight_rates)
    if len(overlaps) > 0:
        print(f"  {len(overlaps):,} overlapping freight rate band pair(s) "
              f"(orders in the overlap appear once per band)")

    total = len(tables.orders)
    noted = False
    for reason, count in unmatched_orders(tables).items():
        if count > 0:
            print(f"  {count:,} of {total:,} orders: {reason}")
            noted = True

    if not noted and len(overlaps) == 0:
        print("  No unmatched orders or overlapping bands")


def list_reports() -> None:
    """Print available report names."""
    print("Available reports:")
    for report in ALL:
        print(f"  {report.name:35} {report.title}")


# =============================================================================
# MAIN
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run supply chain logistics reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m supply_chain.scripts.run_reports
  python -m supply_chain.scripts.run_reports --data-dir data/ --quiet --export-dir out/
  python -m supply_chain.scripts.run_reports --report top_plants_by_weight --report warehouse_utilization
  python -m supply_chain.scripts.run_reports --source database --schema dbo
        """
    )

    parser.add_argument(
        "--source",
        choices=["csv", "database"],
        default="csv",
        help="Where to load the tables from (default: csv)"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=SAMPLE_DIR,
        help="Directory of CSV files (default: bundled sample data)"
    )
    parser.add_argument(
        "--schema",
        default=DEFAULT_SCHEMA,
        help=f"Database schema for --source database (default: {DEFAULT_SCHEMA})"
    )
    parser.add_argument(
        "--report",
        action="append",
        dest="reports",
        metavar="NAME",
        help="Report to run (repeatable, default: all)"
    )
    parser.add_argument(
        "--export-dir",
        type=Path,
        help="Write each report to this directory"
    )
    parser.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default="csv",
        help="Export file format (default: csv)"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print report tables"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available reports and exit"
    )

    args = parser.parse_args(argv)

    if args.list:
        list_reports()
        return 0

    if args.reports:
        try:
            for name in args.reports:
                get_report(name)
        except KeyError as e:
            print(f"Error: {e.args[0]}")
            return 1

    print("=" * 60)
    print(f"SUPPLY CHAIN REPORTS (v{VERSION})")
    print("=" * 60)

    print("\nStep 1: Loading tables...")
    try:
        tables = load_tables(args.source, args.data_dir, args.schema)
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        print(f"Error: {e}")
        return 1

    counts = tables.summary()
    print(f"  Loaded {sum(counts.values()):,} rows across {len(counts)} tables")

    print_data_quality(tables)

    print("\nStep 2: Running reports...")
    results = run_reports(tables, args.reports)
    for name, df in results.items():
        print(f"  {name}: {len(df):,} rows")

    if not args.quiet:
        for name, df in results.items():
            print()
            print_report(get_report(name).title, df)

    if args.export_dir is not None:
        print(f"\nStep 3: Exporting to {args.export_dir}...")
        export_reports(results, args.export_dir, args.format)

    return 0


if __name__ == "__main__":
    sys.exit(main())
