"""Activity pricing: one fixed price per participant, however many days it spans."""

from datetime import date
from typing import List, Optional, Tuple

from itinerary_costs.calculate.participation import resolve_participation
from itinerary_costs.calculate.pricing import PricingContext, lookup_service, type_priced, with_province
from itinerary_costs.models import ActivityItem, ActivityPackage, ItemCostResult, ServicePriceDefinition
from itinerary_costs.normalize.currency import format_currency
from itinerary_costs.normalize.date_parser import trip_date_for_day

_WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _find_package(
    item: ActivityItem, service: Optional[ServicePriceDefinition], warnings: List[str],
) -> Optional[ActivityPackage]:
    if service is None or not item.selected_package_id:
        return None
    for pkg in service.activity_packages:
        if pkg.id == item.selected_package_id:
            return pkg
    warnings.append(f"Activity package '{item.selected_package_id}' not found on '{service.name or service.id}'")
    return None


def _prices(
    item: ActivityItem, service: Optional[ServicePriceDefinition], package: Optional[ActivityPackage],
) -> Tuple[float, float]:
    if package is not None:
        adult, child = package.price1, package.price2
    elif service is not None and service.price1 is not None:
        adult, child = service.price1, service.price2
    else:
        adult, child = item.adult_price or 0.0, item.child_price
    if child is None:
        child = adult
    return adult, child


def schedule_conflicts(package: ActivityPackage, on_date: date) -> List[str]:
    """Reasons the package does not operate on `on_date` (empty if it does)."""
    problems = []
    if package.validity_start_date and on_date < package.validity_start_date:
        problems.append(f"before validity start {package.validity_start_date.isoformat()}")
    if package.validity_end_date and on_date > package.validity_end_date:
        problems.append(f"after validity end {package.validity_end_date.isoformat()}")
    # date.weekday(): Monday = 0; packages count from Sunday = 0
    weekday = (on_date.weekday() + 1) % 7
    if weekday in package.closed_weekdays:
        problems.append(f"closed on {_WEEKDAYS[weekday]}")
    if on_date in package.specific_closed_dates:
        problems.append(f"closed on {on_date.isoformat()}")
    return problems


def calculate_activity_cost(item: ActivityItem, ctx: PricingContext) -> ItemCostResult:
    part = resolve_participation(item.excluded_traveler_ids, ctx.travelers)
    result = ItemCostResult(excluded_traveler_labels=part.excluded_traveler_labels)
    service = lookup_service(item, ctx, result.warnings)
    package = _find_package(item, service, result.warnings)
    adult_price, child_price = _prices(item, service, package)

    result.adult_cost, result.child_cost, result.individual_contributions = type_priced(
        part, ctx, adult_price, child_price,
    )
    result.total_cost = result.adult_cost + result.child_cost

    start_day = item.day
    end_day = item.end_day or start_day
    duration = max(1, end_day - start_day + 1)

    details = f"Day {start_day}{'-' + str(end_day) if duration > 1 else ''} (Dur: {duration}d)."
    if package is not None:
        details += f" Pkg: {package.name or package.id}."
    details += (
        f" Ad: {format_currency(adult_price, ctx.currency)}, "
        f"Ch: {format_currency(child_price, ctx.currency)}. Fixed Price."
    )
    result.configuration_details = with_province(details, item.province)

    if package is not None:
        on_date = trip_date_for_day(ctx.trip_start, item.day)
        if on_date is not None:
            for problem in schedule_conflicts(package, on_date):
                result.warnings.append(f"Package '{package.name or package.id}' {problem}")
    return result
