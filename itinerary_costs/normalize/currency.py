"""Display formatting for amounts in configuration strings and reports."""

from itinerary_costs.config import DEFAULT_CURRENCY


def format_currency(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount with its currency code, e.g. "THB 1,200.00"."""
    code = (currency or DEFAULT_CURRENCY).upper()
    return f"{code} {amount:,.2f}"
