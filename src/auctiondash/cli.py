"""Command line interface for auctiondash.

Run via: auctiondash <command>
Or: python -m auctiondash.cli <command>
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .analysis import PropertyRanker, calculate_metrics
from .analysis.statistics import (
    STATISTICS_FIELDS,
    aggregate_remodeling_costs,
    budget_comparison,
    category_shares,
)
from .config import config
from .models.property import InvestmentMetrics, PropertyDraft, PropertyFinancials
from .storage import PropertyStore, StoreError, create_store, fetch_properties

console = Console()

FINANCIAL_OPTIONS = [
    ("--appraisal-price", "appraisal_price", "Court appraisal price"),
    ("--minimum-price", "minimum_price", "Minimum bid price"),
    ("--purchase-price", "purchase_price", "Winning bid / purchase price"),
    ("--demolition-cost", "demolition_cost", "Demolition budget"),
    ("--carpentry-cost", "carpentry_cost", "Carpentry budget"),
    ("--tile-cost", "tile_cost", "Tile budget"),
    ("--labor-cost", "labor_cost", "Labor budget"),
    ("--expected-sale-price", "expected_sale_price", "Expected resale price"),
]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def format_currency(value: float) -> str:
    """Format number as whole-won currency."""
    return f"₩{value:,.0f}"


def format_roi(value: float) -> str:
    """Format ROI with explicit sign, colored by profit/loss."""
    color = "green" if value >= 0 else "red"
    return f"[{color}]{value:+.2f}%[/{color}]"


def print_metrics(metrics: InvestmentMetrics) -> None:
    """Print the derived figures for one property."""
    table = Table(title="Investment Summary", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Total remodeling cost", format_currency(metrics.total_remodeling_cost))
    table.add_row("Total investment", format_currency(metrics.total_investment))
    table.add_row("Acquisition tax", format_currency(metrics.acquisition_tax))
    table.add_row("Total investment (incl. tax)", format_currency(metrics.total_investment_with_tax))
    table.add_row("Net profit", format_currency(metrics.net_profit))
    table.add_row("ROI", format_roi(metrics.roi))
    console.print(table)


# =============================================================================
# Commands
# =============================================================================


async def cmd_list(store: PropertyStore, args: argparse.Namespace) -> int:
    records = await fetch_properties(store)
    if not records:
        console.print("[yellow]No properties registered.[/yellow]")
        return 0

    ranker = PropertyRanker()
    if args.sort == "roi":
        ranked = ranker.rank_by_roi(records)
    else:
        ranked = ranker.rank_by_created(records)

    table = Table(title=f"Properties ({len(records)})")
    for column in ("Case", "Address", "Purchase", "Remodeling", "Investment", "Expected Sale", "ROI", "Status"):
        justify = "left" if column in ("Case", "Address", "Status") else "right"
        table.add_column(column, justify=justify)

    for record, metrics in ranked:
        table.add_row(
            record.case_number,
            record.address[:40],
            format_currency(record.purchase_price),
            format_currency(metrics.total_remodeling_cost),
            format_currency(metrics.total_investment_with_tax),
            format_currency(record.expected_sale_price),
            format_roi(metrics.roi),
            record.status.value,
        )
    console.print(table)

    summary = ranker.summarize(records)
    console.print(
        f"Active: {summary.active_count} | "
        f"Total investment: {format_currency(summary.total_investment)} | "
        f"Expected profit: {format_currency(summary.expected_profit)} "
        f"({format_roi(summary.expected_profit_rate)})"
    )
    return 0


def _draft_from_args(args: argparse.Namespace) -> PropertyDraft:
    return PropertyDraft(
        case_number=args.case_number,
        address=args.address,
        property_name=args.name,
        appraisal_price=args.appraisal_price,
        minimum_price=args.minimum_price,
        purchase_price=args.purchase_price,
        demolition_cost=args.demolition_cost,
        carpentry_cost=args.carpentry_cost,
        tile_cost=args.tile_cost,
        labor_cost=args.labor_cost,
        acquisition_tax_rate=args.tax_rate,
        expected_sale_price=args.expected_sale_price,
        auction_date=args.auction_date,
        vacate_date=args.vacate_date,
        construction_start_date=args.construction_start_date,
        notes=args.notes,
    )


async def cmd_add(store: PropertyStore, args: argparse.Namespace) -> int:
    try:
        draft = _draft_from_args(args)
    except ValidationError as e:
        console.print(f"[red]Invalid property:[/red] {e}")
        return 2

    inserted = await store.insert(draft)
    console.print(f"[green]Saved {draft.case_number}[/green] ({inserted[0].id if inserted else '-'})")
    print_metrics(calculate_metrics(draft))
    return 0


async def cmd_preview(store: PropertyStore, args: argparse.Namespace) -> int:
    financials = PropertyFinancials(
        appraisal_price=args.appraisal_price,
        minimum_price=args.minimum_price,
        purchase_price=args.purchase_price,
        demolition_cost=args.demolition_cost,
        carpentry_cost=args.carpentry_cost,
        tile_cost=args.tile_cost,
        labor_cost=args.labor_cost,
        acquisition_tax_rate=args.tax_rate,
        expected_sale_price=args.expected_sale_price,
    )
    print_metrics(calculate_metrics(financials))
    return 0


async def cmd_stats(store: PropertyStore, args: argparse.Namespace) -> int:
    records = await fetch_properties(store, fields=STATISTICS_FIELDS, order_by=None, refresh=False)

    totals = aggregate_remodeling_costs(records)
    if not totals:
        console.print("[yellow]No remodeling costs recorded.[/yellow]")
    else:
        shares = category_shares(totals)
        table = Table(title="Remodeling Cost by Category")
        table.add_column("Category")
        table.add_column("Total", justify="right")
        table.add_column("Share", justify="right")
        for label, value in totals.items():
            table.add_row(label, format_currency(value), f"{shares.get(label, 0.0):.1f}%")
        table.add_row("[bold]Total[/bold]", format_currency(sum(totals.values())), "")
        console.print(table)

    comparison = budget_comparison(records)
    if comparison:
        table = Table(title="Planned Budget vs Recorded Total")
        table.add_column("Property")
        table.add_column("Planned", justify="right")
        table.add_column("Recorded", justify="right")
        table.add_column("Variance", justify="right")
        for row in comparison:
            table.add_row(
                row.label,
                format_currency(row.planned),
                format_currency(row.recorded),
                format_currency(row.variance),
            )
        console.print(table)
    return 0


async def cmd_report(store: PropertyStore, args: argparse.Namespace) -> int:
    records = await fetch_properties(store)
    console.print(PropertyRanker().generate_report(records, top_n=args.top), markup=False)
    return 0


async def cmd_export(store: PropertyStore, args: argparse.Namespace) -> int:
    records = await fetch_properties(store)
    csv_text = PropertyRanker().generate_csv(records)
    if args.output:
        Path(args.output).write_text(csv_text, encoding="utf-8")
        console.print(f"[green]Exported {len(records)} properties to {args.output}[/green]")
    else:
        sys.stdout.write(csv_text)
    return 0


COMMANDS = {
    "list": cmd_list,
    "add": cmd_add,
    "preview": cmd_preview,
    "stats": cmd_stats,
    "report": cmd_report,
    "export": cmd_export,
}


def _add_financial_arguments(parser: argparse.ArgumentParser) -> None:
    for flag, dest, help_text in FINANCIAL_OPTIONS:
        parser.add_argument(flag, dest=dest, type=float, default=0.0, help=help_text)
    parser.add_argument(
        "--tax-rate",
        type=float,
        default=config.default_acquisition_tax_rate,
        help="Acquisition tax rate in percent (default: %(default)s)",
    )


def non_negative_int(value: str) -> int:
    """argparse type for counts that must be 0 or more."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="auctiondash",
        description="Auction property and renovation profitability tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  auctiondash list --sort roi
  auctiondash preview --purchase-price 400000000 --expected-sale-price 450000000
  auctiondash add --case-number 2024타경12345 --address "Seoul ..." \\
      --appraisal-price 500000000 --minimum-price 400000000
  auctiondash export --output properties.csv
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="List registered properties")
    list_parser.add_argument(
        "--sort",
        choices=["created", "roi"],
        default="created",
        help="Order by creation time or computed ROI (default: created)",
    )

    add_parser = sub.add_parser("add", help="Register a new property")
    add_parser.add_argument("--case-number", required=True, help="Court case number")
    add_parser.add_argument("--address", required=True, help="Property address")
    add_parser.add_argument("--name", default=None, help="Optional display name")
    add_parser.add_argument("--auction-date", default=None, help="YYYY-MM-DD")
    add_parser.add_argument("--vacate-date", default=None, help="YYYY-MM-DD")
    add_parser.add_argument("--construction-start-date", default=None, help="YYYY-MM-DD")
    add_parser.add_argument("--notes", default=None)
    _add_financial_arguments(add_parser)

    preview_parser = sub.add_parser("preview", help="Compute metrics without saving")
    _add_financial_arguments(preview_parser)

    sub.add_parser("stats", help="Remodeling cost statistics")

    report_parser = sub.add_parser("report", help="Text portfolio report")
    report_parser.add_argument("--top", type=non_negative_int, default=5, help="Top properties by ROI to list")

    export_parser = sub.add_parser("export", help="CSV export ordered by ROI")
    export_parser.add_argument("--output", "-o", default=None, help="File to write (stdout if omitted)")

    return parser


def main(argv: Optional[list[str]] = None, store: Optional[PropertyStore] = None) -> None:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)

    command = COMMANDS[args.command]
    try:
        if store is None and args.command != "preview":
            store = create_store()
        result = asyncio.run(command(store, args))
    except StoreError as e:
        console.print(f"[red]Operation failed:[/red] {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)

    sys.exit(result)


if __name__ == "__main__":
    main()
