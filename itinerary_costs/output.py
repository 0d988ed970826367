"""Output formatters: JSON, CSV, and a human-readable cost report."""

import csv
import json
from pathlib import Path
from typing import Dict, List, Optional

from itinerary_costs.config import UNASSIGNED_TRAVELER_ID
from itinerary_costs.models import CostSummary, DetailedSummaryItem, HotelOccupancyDetail, Traveler
from itinerary_costs.normalize.currency import format_currency


def _day_str(day: Optional[int]) -> str:
    return "" if day is None else str(day)


def _traveler_labels(travelers: List[Traveler]) -> Dict[str, str]:
    labels = {t.id: t.label for t in travelers}
    labels.setdefault(UNASSIGNED_TRAVELER_ID, "Unassigned")
    return labels


# ---------------------------------------------------------------------------
# JSON output (same keys the planner UI consumes)
# ---------------------------------------------------------------------------

def _occupancy_to_dict(od: HotelOccupancyDetail) -> dict:
    d = {
        "roomTypeName": od.room_type_name,
        "numRooms": od.num_rooms,
        "nights": od.nights,
        "characteristics": od.characteristics,
        "assignedTravelerLabels": od.assigned_traveler_labels,
        "totalRoomBlockCost": od.total_room_block_cost,
        "extraBedAdded": od.extra_bed_added,
    }
    if od.note:
        d["note"] = od.note
    return d


def _item_to_dict(item: DetailedSummaryItem) -> dict:
    d = {
        "id": item.id,
        "type": item.type,
        "name": item.name,
        "configurationDetails": item.configuration_details,
        "excludedTravelers": item.excluded_travelers,
        "adultCost": item.adult_cost,
        "childCost": item.child_cost,
        "totalCost": item.total_cost,
        "warnings": list(item.warnings),
    }
    if item.day is not None:
        d["day"] = item.day
    if item.note:
        d["note"] = item.note
    if item.province:
        d["province"] = item.province
    if item.occupancy_details is not None:
        d["occupancyDetails"] = [_occupancy_to_dict(od) for od in item.occupancy_details]
    return d


def summary_to_dict(summary: CostSummary) -> dict:
    return {
        "grandTotal": summary.grand_total,
        "perPersonTotals": dict(summary.per_person_totals),
        "detailedItems": [_item_to_dict(i) for i in summary.detailed_items],
        "warnings": list(summary.warnings),
    }


def to_json(summary: CostSummary, path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(summary_to_dict(summary), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


# ---------------------------------------------------------------------------
# CSV output
# ---------------------------------------------------------------------------

def detailed_items_to_csv(summary: CostSummary, path: Path):
    """One row per itinerary item, hotel room blocks folded into one column."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([
            "day", "type", "name", "province", "configuration", "excluded_travelers",
            "adult_cost", "child_cost", "total_cost", "rooms", "note", "warnings",
        ])
        for item in summary.detailed_items:
            rooms = "; ".join(
                f"{od.num_rooms}x {od.room_type_name} ({od.nights}n, {od.assigned_traveler_labels}): "
                f"{od.total_room_block_cost:.2f}"
                for od in item.occupancy_details or ()
            )
            writer.writerow([
                _day_str(item.day), item.type, item.name, item.province,
                item.configuration_details, item.excluded_travelers,
                f"{item.adult_cost:.2f}", f"{item.child_cost:.2f}", f"{item.total_cost:.2f}",
                rooms, item.note, "; ".join(item.warnings),
            ])


def per_person_to_csv(summary: CostSummary, travelers: List[Traveler], path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    labels = _traveler_labels(travelers)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["traveler_id", "label", "total"])
        for tid, total in summary.per_person_totals.items():
            writer.writerow([tid, labels.get(tid, tid), f"{total:.2f}"])
        writer.writerow(["", "Grand total", f"{summary.grand_total:.2f}"])


# ---------------------------------------------------------------------------
# Human-readable report
# ---------------------------------------------------------------------------

def format_cost_report(summary: CostSummary, travelers: List[Traveler], currency: str) -> str:
    """Line-by-line cost breakdown for internal review."""
    lines = []
    lines.append("=" * 72)
    lines.append("  ITINERARY COSTS: Detailed Breakdown")
    lines.append("=" * 72)

    current_day = object()
    for item in summary.detailed_items:
        if item.day != current_day:
            current_day = item.day
            if item.day is not None:
                lines.append(f"\n--- Day {item.day} {'─' * 58}")

        lines.append(f"\n  [{item.type}] {item.name}  |  {format_currency(item.total_cost, currency)}")
        lines.append(
            f"    Adults: {format_currency(item.adult_cost, currency)}   "
            f"Children: {format_currency(item.child_cost, currency)}"
        )
        if item.configuration_details:
            lines.append(f"    {item.configuration_details}")
        if item.excluded_travelers != "None":
            lines.append(f"    Excluded: {item.excluded_travelers}")
        for od in item.occupancy_details or ():
            bed = " + extra bed" if od.extra_bed_added else ""
            lines.append(
                f"    🏨 {od.num_rooms}x {od.room_type_name}{bed}, {od.nights}n "
                f"({od.assigned_traveler_labels}): {format_currency(od.total_room_block_cost, currency)}"
            )
            if od.note:
                lines.append(f"       {od.note}")
        if item.note:
            lines.append(f"    Note: {item.note}")
        for warning in item.warnings:
            lines.append(f"    ⚠ {warning}")

    labels = _traveler_labels(travelers)
    lines.append(f"\n{'=' * 72}")
    lines.append("  Per traveler:")
    for tid, total in summary.per_person_totals.items():
        lines.append(f"    {labels.get(tid, tid):<24} {format_currency(total, currency):>20}")
    lines.append(f"\n  Grand total: {format_currency(summary.grand_total, currency)}")
    lines.append("=" * 72)

    return "\n".join(lines)
