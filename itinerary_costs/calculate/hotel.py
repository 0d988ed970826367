"""Hotel pricing: nightly seasonal rates per room block, split among occupants.

Each selected room block is priced night by night from its room type's
seasonal prices. The block's cost goes to the travelers assigned to it,
or to everyone on the item when nobody (participating) is assigned.
The item's adult/child costs are then re-derived from those individual
shares rather than from a headcount split, since occupants of different
blocks pay different rates.
"""

import logging
from datetime import date
from typing import Dict, List, Tuple

from itinerary_costs.calculate.participation import resolve_participation
from itinerary_costs.calculate.pricing import PricingContext, with_province
from itinerary_costs.calculate.rates import describe_period, find_seasonal_price, invalid_periods
from itinerary_costs.models import (
    HotelItem,
    HotelOccupancyDetail,
    HotelRoomTypeDefinition,
    ItemCostResult,
    ParticipationResult,
    SelectedHotelRoomConfiguration,
    TravelerType,
)
from itinerary_costs.normalize.date_parser import trip_date_for_day

logger = logging.getLogger(__name__)


def _no_cost(result: ItemCostResult, details: str, reason: str, province: str) -> ItemCostResult:
    logger.warning("Hotel priced at zero: %s", reason)
    result.warnings.append(reason)
    result.configuration_details = with_province(f"{details}. {reason}. No cost.", province)
    return result


def _price_room_block(
    room: SelectedHotelRoomConfiguration,
    room_type: HotelRoomTypeDefinition,
    stay_dates: List[date],
    warnings: List[str],
) -> Tuple[float, bool]:
    """Total cost of one block over the stay, and whether an extra bed is included."""
    num_rooms = room.num_rooms or 0
    extra_bed = room.add_extra_bed and room_type.extra_bed_allowed
    if room.add_extra_bed and not room_type.extra_bed_allowed:
        warnings.append(f"Extra bed requested for '{room_type.name}' but the room type does not allow one")

    block_cost = 0.0
    unpriced = []
    for night in stay_dates:
        season = find_seasonal_price(room_type.seasonal_prices, night)
        if season is None:
            unpriced.append(night)
            continue
        nightly = season.rate or 0.0
        if extra_bed and season.extra_bed_rate is not None:
            nightly += season.extra_bed_rate
        block_cost += nightly * num_rooms

    if unpriced:
        warnings.append(
            f"No seasonal rate for '{room_type.name}' on "
            f"{', '.join(d.isoformat() for d in unpriced)}; those nights priced at 0"
        )
    return block_cost, extra_bed


def _block_payers(
    room: SelectedHotelRoomConfiguration, part: ParticipationResult, ctx: PricingContext, warnings: List[str],
) -> List[str]:
    """Travelers who share this block's cost."""
    participating = set(part.participating_ids)
    payers = []
    dropped = []
    for tid in room.assigned_traveler_ids:
        if tid in participating:
            if tid not in payers:
                payers.append(tid)
        else:
            dropped.append(ctx.traveler_label(tid))
    if dropped:
        warnings.append(
            f"Travelers not taking part in this stay are assigned to "
            f"'{room.room_type_name_cache or room.room_type_definition_id}' and are not charged: {', '.join(dropped)}"
        )
    return payers or list(part.participating_ids)


def _characteristics(room_type: HotelRoomTypeDefinition) -> str:
    return "; ".join(f"{c.key}: {c.value}" for c in room_type.characteristics)


def calculate_hotel_cost(item: HotelItem, ctx: PricingContext) -> ItemCostResult:
    part = resolve_participation(item.excluded_traveler_ids, ctx.travelers)
    result = ItemCostResult(excluded_traveler_labels=part.excluded_traveler_labels, occupancy_details=[])

    checkin = item.day
    checkout = item.checkout_day
    nights = max(0, checkout - checkin)

    hotel = ctx.hotel_definitions.get(item.hotel_definition_id)
    details = f"In: Day {checkin}, Out: Day {checkout} ({nights}n)"
    if hotel is not None and hotel.name:
        details = f"{hotel.name}; {details}"

    if hotel is None:
        return _no_cost(result, details, f"Hotel definition '{item.hotel_definition_id}' missing", item.province)
    if nights <= 0:
        return _no_cost(result, details, f"Invalid nights: {nights}", item.province)
    if ctx.trip_start is None:
        return _no_cost(result, details, f"Invalid trip start date '{ctx.raw_start_date}'", item.province)
    for room in item.selected_rooms:
        room_type = hotel.room_type(room.room_type_definition_id)
        bad = invalid_periods(room_type.seasonal_prices) if room_type else []
        if bad:
            return _no_cost(
                result, details,
                f"Room type '{room_type.name}' has seasonal prices with invalid dates: "
                f"{', '.join(describe_period(p) for p in bad)}",
                item.province,
            )

    stay_dates = [trip_date_for_day(ctx.trip_start, checkin + n) for n in range(nights)]
    contributions: Dict[str, float] = {}

    for room in item.selected_rooms:
        room_type = hotel.room_type(room.room_type_definition_id)
        labels = ", ".join(ctx.traveler_label(tid) for tid in room.assigned_traveler_ids) or "None"
        if room_type is None:
            name = room.room_type_name_cache or room.room_type_definition_id
            msg = f"Room type definition '{room.room_type_definition_id}' missing from '{hotel.name or hotel.id}'"
            logger.warning("%s (item %s)", msg, item.id)
            result.warnings.append(msg)
            result.occupancy_details.append(HotelOccupancyDetail(
                room_type_name=name,
                num_rooms=room.num_rooms or 0,
                nights=nights,
                assigned_traveler_labels=labels,
                note="Room type definition missing. No cost.",
            ))
            continue

        block_cost, extra_bed = _price_room_block(room, room_type, stay_dates, result.warnings)
        result.occupancy_details.append(HotelOccupancyDetail(
            room_type_name=room_type.name or room.room_type_name_cache,
            num_rooms=room.num_rooms or 0,
            nights=nights,
            characteristics=_characteristics(room_type),
            assigned_traveler_labels=labels,
            total_room_block_cost=block_cost,
            extra_bed_added=extra_bed,
        ))
        result.total_cost += block_cost

        payers = _block_payers(room, part, ctx, result.warnings)
        if payers and block_cost:
            share = block_cost / len(payers)
            for tid in payers:
                contributions[tid] = contributions.get(tid, 0.0) + share

    result.individual_contributions = contributions
    for tid in part.participating_ids:
        amount = contributions.get(tid, 0.0)
        if ctx.traveler_type(tid) == TravelerType.CHILD:
            result.child_cost += amount
        else:
            result.adult_cost += amount

    rooms = sum(room.num_rooms or 0 for room in item.selected_rooms)
    result.configuration_details = with_province(f"{details}; Rooms: {rooms}", item.province)
    return result
