"""Miscellaneous items: charged to everyone in full, or shared as one total."""

from itinerary_costs.calculate.participation import resolve_participation
from itinerary_costs.calculate.pricing import PricingContext, lookup_service, prorated, with_province
from itinerary_costs.models import CostAssignment, ItemCostResult, MiscItem
from itinerary_costs.normalize.currency import format_currency


def calculate_misc_cost(item: MiscItem, ctx: PricingContext) -> ItemCostResult:
    part = resolve_participation(item.excluded_traveler_ids, ctx.travelers)
    result = ItemCostResult(excluded_traveler_labels=part.excluded_traveler_labels)
    service = lookup_service(item, ctx, result.warnings)

    unit_cost = item.unit_cost or 0.0
    if service is not None and service.price1 is not None:
        unit_cost = service.price1
    quantity = item.quantity or 1
    item_total = unit_cost * quantity

    details = f"Assign: {item.cost_assignment.value}, Cost: {format_currency(unit_cost, ctx.currency)}, Qty: {quantity}"

    if item.cost_assignment == CostAssignment.PER_PERSON:
        result.adult_cost = part.adult_count * item_total
        result.child_cost = part.child_count * item_total
        result.total_cost = result.adult_cost + result.child_cost
        result.individual_contributions = {tid: item_total for tid in part.participating_ids}
        details += f"; Total: {format_currency(result.total_cost, ctx.currency)} (Per Pers)"
    else:
        result.total_cost = item_total
        result.adult_cost, result.child_cost, result.individual_contributions = prorated(part, item_total)
        details += f"; Total Shared: {format_currency(result.total_cost, ctx.currency)}"

    result.configuration_details = with_province(details, item.province)
    return result
