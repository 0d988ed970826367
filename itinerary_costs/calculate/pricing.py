"""Shared pieces for the per-item calculators."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from itinerary_costs.models import (
    HotelDefinition,
    ItineraryItem,
    ParticipationResult,
    ServicePriceDefinition,
    Traveler,
    TravelerType,
)

logger = logging.getLogger(__name__)


@dataclass
class PricingContext:
    """Reference data for one aggregation call. Read-only."""
    travelers: List[Traveler]
    currency: str
    trip_start: Optional[date] = None
    raw_start_date: str = ""
    service_prices: Dict[str, ServicePriceDefinition] = field(default_factory=dict)
    hotel_definitions: Dict[str, HotelDefinition] = field(default_factory=dict)

    def __post_init__(self):
        self.travelers_by_id = {t.id: t for t in self.travelers}

    def traveler_type(self, traveler_id: str) -> Optional[TravelerType]:
        t = self.travelers_by_id.get(traveler_id)
        return t.type if t else None

    def traveler_label(self, traveler_id: str) -> str:
        t = self.travelers_by_id.get(traveler_id)
        return t.label if t else traveler_id


def lookup_service(
    item: ItineraryItem, ctx: PricingContext, warnings: List[str],
) -> Optional[ServicePriceDefinition]:
    """Service price definition the item points at, if any."""
    if not item.selected_service_price_id:
        return None
    service = ctx.service_prices.get(item.selected_service_price_id)
    if service is None:
        msg = f"Service price definition '{item.selected_service_price_id}' not found; using item prices"
        logger.warning("%s (item %s)", msg, item.id)
        warnings.append(msg)
    return service


def type_priced(
    part: ParticipationResult, ctx: PricingContext, adult_price: float, child_price: float,
) -> Tuple[float, float, Dict[str, float]]:
    """Each participant pays the price for their traveler type."""
    adult_cost = part.adult_count * adult_price
    child_cost = part.child_count * child_price
    contributions = {}
    for tid in part.participating_ids:
        contributions[tid] = child_price if ctx.traveler_type(tid) == TravelerType.CHILD else adult_price
    return adult_cost, child_cost, contributions


def prorated(part: ParticipationResult, total: float) -> Tuple[float, float, Dict[str, float]]:
    """Split a shared total evenly per head. Nobody participating -> no shares."""
    if part.headcount <= 0:
        return 0.0, 0.0, {}
    share = total / part.headcount
    contributions = {tid: share for tid in part.participating_ids}
    return share * part.adult_count, share * part.child_count, contributions


def with_province(details: str, province: str) -> str:
    return f"Prov: {province}; {details}" if province else details
