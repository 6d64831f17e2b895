"""
Ghana Facility Insights - Command Line Interface

Runs the cleaning pipeline over the facility CSV and prints a report:
dataset summary, facility types, regional medical-desert risk, top
specialties and the facilities most in need of data follow-up.

Usage Examples:
    # Report on the default CSV (data/Virtue Foundation Ghana v0.3 - Sheet1.csv)
    python main.py

    # Another export
    python main.py --csv path/to/export.csv

    # Full result as JSON (facilities, summary, regionAnalysis, quality)
    python main.py --json > result.json

    # Verbose logging
    python main.py --verbose

Environment Variables:
    FACILITY_CSV: Default CSV path
    INCOMPLETE_SCORE_THRESHOLD: Score below which a facility counts as incomplete (default 50)
    LOG_LEVEL: Logging level (default INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.facility_insights.config import DEFAULT_CSV, INCOMPLETE_SCORE_THRESHOLD, LOG_FORMAT, LOG_LEVEL
from src.facility_insights.errors import format_load_error
from src.facility_insights.pipeline import DatasetResult, load_dataset
from src.facility_insights.quality import lowest_scoring
from src.facility_insights.scoring import MAX_COMPLETENESS_SCORE
from src.facility_insights.summary import top_regions, top_specialties

console = Console()

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)

RISK_STYLES = {
    "CRITICAL": "bold red",
    "HIGH": "red",
    "MEDIUM": "yellow",
    "LOW": "green",
}


# ── Report Formatting ───────────────────────────────────────────────────────


def print_summary(result: DatasetResult) -> None:
    """Headline numbers in a panel."""
    s = result.summary
    total = s.total_facilities or 1
    text = (
        f"[bold]Facilities:[/bold] {s.total_facilities}\n"
        f"[bold]Average completeness:[/bold] {s.average_completeness_score} / {MAX_COMPLETENESS_SCORE}\n"
        f"[bold]Incomplete (<{INCOMPLETE_SCORE_THRESHOLD}):[/bold] {s.facilities_with_incomplete_data} "
        f"({round(s.facilities_with_incomplete_data * 100 / total)}%)\n"
        f"[bold]No medical data:[/bold] {s.facilities_with_no_medical_data}\n\n"
        f"[bold]With doctor count:[/bold] {s.facilities_with_doctors}\n"
        f"[bold]With bed capacity:[/bold] {s.facilities_with_beds}\n"
        f"[bold]With emergency capability:[/bold] {s.facilities_with_emergency_capability}"
    )
    console.print(Panel(text, title=f"📊 {result.source}", border_style="blue", expand=False))


def print_facility_types(result: DatasetResult) -> None:
    table = Table(title="Facility Types", show_header=True, header_style="bold cyan")
    table.add_column("Type")
    table.add_column("Count", justify="right")
    for facility_type, count in result.summary.by_facility_type.items():
        table.add_row(facility_type.capitalize(), str(count))
    console.print(table)


def print_regions(result: DatasetResult, limit: int) -> None:
    """Region risk table, largest regions first."""
    table = Table(title="Medical Desert Risk by Region", show_header=True, header_style="bold cyan")
    table.add_column("Region", style="bold")
    table.add_column("Total", justify="right")
    table.add_column("Hospitals", justify="right")
    table.add_column("Clinics", justify="right")
    table.add_column("Doctors", justify="right")
    table.add_column("Beds", justify="right")
    table.add_column("Emergency", justify="right")
    table.add_column("Avg score", justify="right")
    table.add_column("Risk")

    for r in result.regions[:limit]:
        style = RISK_STYLES.get(r.risk_level, "")
        table.add_row(
            r.region,
            str(r.total_facilities),
            str(r.hospitals),
            str(r.clinics),
            str(r.with_doctors),
            str(r.with_beds),
            str(r.with_emergency),
            str(r.avg_completeness),
            f"[{style}]{r.risk_level}[/{style}]",
        )
    console.print(table)

    counts = result.quality.risk_level_counts
    console.print(
        " ".join(f"[{RISK_STYLES[level]}]{level}: {counts[level]}[/{RISK_STYLES[level]}]" for level in counts)
    )
    if len(result.regions) > limit:
        console.print(f"[dim]... and {len(result.regions) - limit} more regions[/dim]")


def print_top(title: str, rows: list[tuple[str, int]]) -> None:
    if not rows:
        return
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Name")
    table.add_column("Facilities", justify="right")
    for name, count in rows:
        table.add_row(name, str(count))
    console.print(table)


def print_worst(result: DatasetResult, limit: int) -> None:
    """Facilities with the lowest completeness scores."""
    worst = lowest_scoring(result.facilities, limit)
    if not worst:
        return
    table = Table(title="Lowest Data Completeness", show_header=True, header_style="bold cyan")
    table.add_column("Facility", style="bold")
    table.add_column("City")
    table.add_column("Score", justify="right")
    table.add_column("Address")
    table.add_column("Contact")
    table.add_column("Medical")
    table.add_column("Capacity")

    def mark(flag: bool) -> str:
        return "[green]✓[/green]" if flag else "[red]✗[/red]"

    for f in worst:
        table.add_row(
            f.name,
            f.city,
            str(f.data_completeness_score),
            mark(f.has_complete_address),
            mark(f.has_contact_info),
            mark(f.has_medical_data),
            mark(f.has_capacity_data),
        )
    console.print(table)


def print_report(result: DatasetResult, top: int) -> None:
    print_summary(result)
    print_facility_types(result)
    print_regions(result, limit=top)
    print_top("Top Regions", top_regions(result.summary, top))
    print_top("Top Specialties", top_specialties(result.summary, top))
    print_worst(result, limit=top)


# ── Main Entry Point ────────────────────────────────────────────────────────


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Ghana Facility Insights report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Report on the default CSV
  %(prog)s --csv export.csv         # Report on another CSV
  %(prog)s --json > result.json     # Dump the full result as JSON
        """,
    )
    parser.add_argument("--csv", type=Path, default=None, help=f"Path to CSV (default: {DEFAULT_CSV})")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON instead of tables")
    parser.add_argument("--top", type=int, default=15, help="Rows per table (default: 15)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser.parse_args()


def main() -> None:
    """Main CLI entry point."""
    args = parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if args.json:
            result = load_dataset(args.csv)
        else:
            with console.status("[bold green]Processing dataset...", spinner="dots"):
                result = load_dataset(args.csv)
    except Exception as e:
        console.print(f"[bold red]❌ Failed to load dataset: {format_load_error(e)}[/bold red]")
        logger.error("Dataset load failed", exc_info=args.verbose)
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    print_report(result, top=args.top)


if __name__ == "__main__":
    main()
