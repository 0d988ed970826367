#!/usr/bin/env python3
"""CLI entry point for the itinerary cost engine.

Usage:
    python cost_itinerary.py --trip trip.json --service-prices prices.json --hotels hotels.json

Options:
    --trip PATH            Trip JSON (travelers, pax, settings, days)
    --service-prices PATH  Service price catalog JSON array
    --hotels PATH          Hotel definition catalog JSON array
    --output-dir DIR       Directory for output files (default: output/)
    --format FMT           Output format: report, csv, json, all (default: all)
    --dry-run              Show totals without writing files
    --verbose              Log per-item pricing details
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from itinerary_costs.aggregate import calculate_all_costs
from itinerary_costs.config import HOTELS_PATH, LOG_LEVEL, OUTPUT_DIR, SERVICE_PRICES_PATH, TRIP_PATH
from itinerary_costs.loader import (
    TripDataError,
    load_hotel_definitions_file,
    load_service_prices_file,
    load_trip_file,
)
from itinerary_costs.output import (
    detailed_items_to_csv,
    format_cost_report,
    per_person_to_csv,
    to_json,
)


def _load_catalog(loader, path: str, what: str) -> list:
    """Catalogs are optional: a missing file means an empty catalog."""
    if not Path(path).exists():
        print(f"No {what} file at {path}; continuing without it", file=sys.stderr)
        return []
    return loader(path)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Compute the cost breakdown of a planned itinerary.",
    )
    parser.add_argument("--trip", default=TRIP_PATH, help="Path to the trip JSON")
    parser.add_argument("--service-prices", default=SERVICE_PRICES_PATH, help="Path to the service price catalog")
    parser.add_argument("--hotels", default=HOTELS_PATH, help="Path to the hotel definition catalog")
    parser.add_argument("--output-dir", default=str(OUTPUT_DIR), help="Output directory")
    parser.add_argument(
        "--format",
        choices=["report", "csv", "json", "all"],
        default="all",
        help="Output format (report, csv, json, all)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show totals only, don't write files")
    parser.add_argument("--verbose", action="store_true", help="Log per-item pricing")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        trip = load_trip_file(args.trip)
        service_prices = _load_catalog(load_service_prices_file, args.service_prices, "service price")
        hotels = _load_catalog(load_hotel_definitions_file, args.hotels, "hotel definition")
    except (TripDataError, OSError, json.JSONDecodeError) as e:
        print(f"ERROR loading input: {e}", file=sys.stderr)
        return 1

    summary = calculate_all_costs(trip, service_prices, hotels)
    currency = trip.pax.currency

    if summary.warnings:
        print(f"{len(summary.warnings)} warning(s):", file=sys.stderr)
        for w in summary.warnings:
            print(f"  - {w}", file=sys.stderr)

    if args.dry_run:
        print(f"\nDry run complete. {len(summary.detailed_items)} items, grand total {summary.grand_total:.2f} {currency}.")
        return 0

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if args.format in ("report", "all"):
        report = format_cost_report(summary, trip.travelers, currency)
        report_path = output_dir / "cost_report.txt"
        report_path.write_text(report, encoding="utf-8")
        print(f"\nReport written to: {report_path}")
        print(report)

    if args.format in ("csv", "all"):
        items_path = output_dir / "cost_items.csv"
        people_path = output_dir / "cost_per_person.csv"
        detailed_items_to_csv(summary, items_path)
        per_person_to_csv(summary, trip.travelers, people_path)
        print(f"CSV written to: {items_path}, {people_path}")

    if args.format in ("json", "all"):
        json_path = output_dir / "cost_summary.json"
        to_json(summary, json_path)
        print(f"JSON written to: {json_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
