"""Presentation helpers shared by the email and Airtable sinks.

The canonical PaymentFailure keeps minor units and the currency as
received. Sinks convert at their own boundary through these helpers so
both render identical defaults.
"""

UNKNOWN = "Unknown"


def display_value(value: str | None, default: str = UNKNOWN) -> str:
    """Return value, or default when it is missing or empty."""
    return value if value else default


def major_units(amount: int) -> float:
    """Convert minor units to major units rounded to two decimals.

    Args:
        amount: Amount in minor units (e.g. cents)

    Returns:
        Amount in major units, e.g. 2500 -> 25.0
    """
    return round(amount / 100, 2)


def format_major_units(amount: int) -> str:
    """Format minor units as a two-decimal major-unit string (2500 -> "25.00")."""
    return f"{amount / 100:.2f}"


def display_currency(currency: str) -> str:
    return currency.upper()
