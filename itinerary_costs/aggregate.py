"""Aggregates every itinerary item into a CostSummary: dispatch → accumulate → round."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Optional

from itinerary_costs.config import ROUNDING_PLACES, UNASSIGNED_TRAVELER_ID
from itinerary_costs.calculate.activity import calculate_activity_cost
from itinerary_costs.calculate.hotel import calculate_hotel_cost
from itinerary_costs.calculate.meal import calculate_meal_cost
from itinerary_costs.calculate.misc import calculate_misc_cost
from itinerary_costs.calculate.pricing import PricingContext
from itinerary_costs.calculate.transfer import calculate_transfer_cost
from itinerary_costs.models import (
    ActivityItem,
    CostSummary,
    DetailedSummaryItem,
    HotelDefinition,
    HotelItem,
    ItemCostResult,
    ItemType,
    ItineraryItem,
    MealItem,
    MiscItem,
    ServicePriceDefinition,
    TransferItem,
    TripData,
    UnknownItem,
)
from itinerary_costs.normalize.date_parser import parse_date

logger = logging.getLogger(__name__)

Calculator = Callable[[ItineraryItem, PricingContext], ItemCostResult]

_CALCULATORS: Dict[type, Calculator] = {
    TransferItem: calculate_transfer_cost,
    ActivityItem: calculate_activity_cost,
    HotelItem: calculate_hotel_cost,
    MealItem: calculate_meal_cost,
    MiscItem: calculate_misc_cost,
}

# Plural display labels. "Miscellaneous" rather than a mechanical "Miscs".
TYPE_LABELS = {
    ItemType.TRANSFER: "Transfers",
    ItemType.ACTIVITY: "Activities",
    ItemType.HOTEL: "Hotels",
    ItemType.MEAL: "Meals",
    ItemType.MISC: "Miscellaneous",
}

_QUANTUM = Decimal(1).scaleb(-ROUNDING_PLACES)

# Anything below this is float noise, not an unattributed cost
_ORPHAN_TOLERANCE = 1e-6


def _index_by_id(entries: Optional[Iterable]) -> dict:
    return {e.id: e for e in entries or ()}


def _round(value: float) -> float:
    """Half-up on the stored binary value: 0.125 -> 0.13, 1.005 (really 1.00499...) -> 1.0."""
    rounded = Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0  # + 0.0 folds -0.0 into 0.0


def _ordered_items(trip: TripData) -> List[ItineraryItem]:
    items = []
    for day_number in sorted(trip.days):
        items.extend(trip.days[day_number].items)
    return items


def _finalize(summary: CostSummary) -> CostSummary:
    """Round every reported amount once, after all accumulation."""
    summary.grand_total = _round(summary.grand_total)
    summary.per_person_totals = {tid: _round(v) for tid, v in summary.per_person_totals.items()}
    for item in summary.detailed_items:
        item.adult_cost = _round(item.adult_cost)
        item.child_cost = _round(item.child_cost)
        item.total_cost = _round(item.total_cost)
        for od in item.occupancy_details or ():
            od.total_room_block_cost = _round(od.total_room_block_cost)
    return summary


def calculate_all_costs(
    trip: TripData,
    service_prices: Optional[List[ServicePriceDefinition]] = None,
    hotel_definitions: Optional[List[HotelDefinition]] = None,
) -> CostSummary:
    """Price every item of the trip and total it up.

    Args:
        trip: Travelers, settings and day-by-day items. Not modified.
        service_prices: Service price catalog referenced by items.
        hotel_definitions: Hotel catalog referenced by hotel items.

    Returns:
        A fresh CostSummary. Bad items are priced at zero and reported in
        `warnings`; nothing in the trip data makes this raise.
    """
    currency = trip.pax.currency
    ctx = PricingContext(
        travelers=trip.travelers,
        currency=currency,
        trip_start=parse_date(trip.settings.start_date),
        raw_start_date=str(trip.settings.start_date or ""),
        service_prices=_index_by_id(service_prices),
        hotel_definitions=_index_by_id(hotel_definitions),
    )
    if ctx.trip_start is None:
        logger.warning("Trip start date %r is invalid; date-based rates are unavailable", trip.settings.start_date)

    summary = CostSummary(per_person_totals={t.id: 0.0 for t in trip.travelers})
    grand_total = 0.0
    unassigned = 0.0
    multi_day = (trip.settings.num_days or 1) > 1

    for item in _ordered_items(trip):
        calculator = _CALCULATORS.get(type(item))
        if calculator is None:
            raw_type = item.raw_type if isinstance(item, UnknownItem) else type(item).__name__
            msg = f"Item '{item.name or item.id}' has unrecognized type '{raw_type}'; skipped"
            logger.warning(msg)
            summary.warnings.append(msg)
            continue

        result = calculator(item, ctx)
        logger.debug("Priced %s %s: %.2f", item.item_type.value, item.id, result.total_cost)

        grand_total += result.total_cost
        attributed = 0.0
        for traveler_id, amount in result.individual_contributions.items():
            if traveler_id in ctx.travelers_by_id:
                summary.per_person_totals[traveler_id] += amount
                attributed += amount

        orphaned = result.total_cost - attributed
        if abs(orphaned) > _ORPHAN_TOLERANCE:
            unassigned += orphaned
            result.warnings.append(
                f"{orphaned:.2f} of this item's cost is not attributed to any traveler"
            )

        for warning in result.warnings:
            summary.warnings.append(f"{item.name or item.id} (day {item.day}): {warning}")

        summary.detailed_items.append(DetailedSummaryItem(
            id=item.id,
            type=TYPE_LABELS[item.item_type],
            day=item.day if multi_day else None,
            name=item.name,
            note=item.note,
            province=item.province,
            configuration_details=result.configuration_details,
            excluded_travelers=", ".join(result.excluded_traveler_labels) or "None",
            adult_cost=result.adult_cost,
            child_cost=result.child_cost,
            total_cost=result.total_cost,
            occupancy_details=result.occupancy_details,
            warnings=list(result.warnings),
        ))

    if unassigned:
        summary.per_person_totals[UNASSIGNED_TRAVELER_ID] = unassigned
    summary.grand_total = grand_total
    return _finalize(summary)
