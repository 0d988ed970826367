"""Meal pricing: per-head price times number of meals."""

from itinerary_costs.calculate.participation import resolve_participation
from itinerary_costs.calculate.pricing import PricingContext, lookup_service, type_priced, with_province
from itinerary_costs.models import ItemCostResult, MealItem
from itinerary_costs.normalize.currency import format_currency


def calculate_meal_cost(item: MealItem, ctx: PricingContext) -> ItemCostResult:
    part = resolve_participation(item.excluded_traveler_ids, ctx.travelers)
    result = ItemCostResult(excluded_traveler_labels=part.excluded_traveler_labels)
    service = lookup_service(item, ctx, result.warnings)

    if service is not None and service.price1 is not None:
        adult_price, child_price = service.price1, service.price2
    else:
        adult_price, child_price = item.adult_meal_price or 0.0, item.child_meal_price
    if child_price is None:
        child_price = adult_price
    num_meals = item.total_meals or 0

    result.adult_cost, result.child_cost, result.individual_contributions = type_priced(
        part, ctx, adult_price * num_meals, child_price * num_meals,
    )
    result.total_cost = result.adult_cost + result.child_cost
    result.configuration_details = with_province(
        f"# Meals: {num_meals}, Ad: {format_currency(adult_price, ctx.currency)}, "
        f"Ch: {format_currency(child_price, ctx.currency)}",
        item.province,
    )
    return result
