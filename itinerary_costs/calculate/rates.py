"""Date-bounded rate lookup for hotel seasons and transfer surcharges.

Both lists are scanned in the order they were defined and the first
period whose closed interval contains the date wins. Overlapping periods
are not reconciled and surcharges never stack.
"""

from datetime import date
from typing import List, Optional, Sequence, Union

from itinerary_costs.models import RoomTypeSeasonalPrice, SurchargePeriod
from itinerary_costs.normalize.date_parser import in_closed_range

Period = Union[RoomTypeSeasonalPrice, SurchargePeriod]


def _first_containing(periods: Sequence[Period], on_date: date) -> Optional[Period]:
    for p in periods or ():
        if in_closed_range(on_date, p.start_date, p.end_date):
            return p
    return None


def find_seasonal_price(
    seasonal_prices: Sequence[RoomTypeSeasonalPrice], on_date: date,
) -> Optional[RoomTypeSeasonalPrice]:
    """Season covering the night of `on_date`, or None (night is unpriced)."""
    return _first_containing(seasonal_prices, on_date)


def find_surcharge(periods: Sequence[SurchargePeriod], on_date: Optional[date]) -> Optional[SurchargePeriod]:
    """Surcharge period covering `on_date`, or None."""
    if on_date is None:
        return None
    return _first_containing(periods, on_date)


def invalid_periods(periods: Sequence[Period]) -> List[Period]:
    """Periods with a bound that failed to parse."""
    return [p for p in periods or () if p.start_date is None or p.end_date is None]


def describe_period(p: Period) -> str:
    name = getattr(p, "season_name", "") or getattr(p, "name", "") or p.id or "unnamed"
    start = p.start_date.isoformat() if p.start_date else (p.raw_start or "?")
    end = p.end_date.isoformat() if p.end_date else (p.raw_end or "?")
    return f"{name} ({start} to {end})"
