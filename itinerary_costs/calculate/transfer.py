"""Transfer pricing: per-ticket or per-vehicle with date surcharges."""

import logging
from typing import List, Optional, Tuple

from itinerary_costs.calculate.participation import resolve_participation
from itinerary_costs.calculate.pricing import (
    PricingContext,
    lookup_service,
    prorated,
    type_priced,
    with_province,
)
from itinerary_costs.calculate.rates import describe_period, find_surcharge, invalid_periods
from itinerary_costs.models import ItemCostResult, ServicePriceDefinition, TransferItem, TransferMode
from itinerary_costs.normalize.currency import format_currency
from itinerary_costs.normalize.date_parser import trip_date_for_day

logger = logging.getLogger(__name__)


def _ticket_prices(item: TransferItem, service: Optional[ServicePriceDefinition]) -> Tuple[float, float]:
    adult = item.adult_ticket_price or 0.0
    if service is not None and service.price1 is not None:
        adult = service.price1

    if service is not None and service.price2 is not None:
        child = service.price2
    elif item.child_ticket_price is not None:
        child = item.child_ticket_price
    else:
        child = adult
    return adult, child


def _vehicle_base_cost(
    item: TransferItem, service: Optional[ServicePriceDefinition], warnings: List[str],
) -> Tuple[float, str]:
    """(cost per vehicle, vehicle type) in priority order: option, service base, item."""
    if service is not None:
        if item.selected_vehicle_option_id:
            for opt in service.vehicle_options:
                if opt.id == item.selected_vehicle_option_id:
                    return opt.price, opt.vehicle_type or item.vehicle_type
            warnings.append(
                f"Vehicle option '{item.selected_vehicle_option_id}' not found on '{service.name or service.id}'; "
                "using item cost per vehicle"
            )
        elif not service.vehicle_options and service.price1 is not None:
            return service.price1, item.vehicle_type
    return item.cost_per_vehicle or 0.0, item.vehicle_type


def calculate_transfer_cost(item: TransferItem, ctx: PricingContext) -> ItemCostResult:
    part = resolve_participation(item.excluded_traveler_ids, ctx.travelers)
    result = ItemCostResult(excluded_traveler_labels=part.excluded_traveler_labels)
    service = lookup_service(item, ctx, result.warnings)
    details = f"Mode: {item.mode.value}"

    if item.mode == TransferMode.TICKET:
        adult_price, child_price = _ticket_prices(item, service)
        result.adult_cost, result.child_cost, result.individual_contributions = type_priced(
            part, ctx, adult_price, child_price,
        )
        result.total_cost = result.adult_cost + result.child_cost
        details += f"; Ad: {format_currency(adult_price, ctx.currency)}, Ch: {format_currency(child_price, ctx.currency)}"
        result.configuration_details = with_province(details, item.province)
        return result

    base_cost, vehicle_type = _vehicle_base_cost(item, service, result.warnings)
    num_vehicles = item.vehicles or 1

    surcharge = 0.0
    surcharge_note = ""
    if service is not None and service.surcharge_periods:
        for p in invalid_periods(service.surcharge_periods):
            result.warnings.append(f"Surcharge period {describe_period(p)} has an invalid date and is ignored")
        travel_date = trip_date_for_day(ctx.trip_start, item.day)
        if travel_date is None:
            result.warnings.append(
                f"Trip start date '{ctx.raw_start_date}' is invalid; surcharges not evaluated"
            )
        else:
            period = find_surcharge(service.surcharge_periods, travel_date)
            if period is not None:
                surcharge = period.surcharge_amount or 0.0
                surcharge_note = f"; Surcharge ({period.name or 'period'}): {format_currency(surcharge, ctx.currency)}"
                logger.debug("Surcharge %s applied to transfer %s on %s", period.name, item.id, travel_date)

    result.total_cost = (base_cost + surcharge) * num_vehicles
    result.adult_cost, result.child_cost, result.individual_contributions = prorated(part, result.total_cost)

    details += (
        f"; Type: {vehicle_type or 'N/A'}; #Veh: {num_vehicles}; "
        f"Cost/V: {format_currency(base_cost, ctx.currency)}{surcharge_note}; "
        f"Total: {format_currency(result.total_cost, ctx.currency)}"
    )
    if part.headcount == 0:
        details += "; No participants"
    result.configuration_details = with_province(details, item.province)
    return result
