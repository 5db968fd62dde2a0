"""Currency — conversion between display amounts and minor units, plus formatting.

Invariants:
    - Persisted amounts are integer cents: to_minor_units(x) == round_half_up(x * 100)
    - from_minor_units(to_minor_units(x)) == x for any x with at most two decimals
    - format_currency renders en-US dollars: thousands separators, two decimals

Design Decisions:
    - Decimal arithmetic for the ×100 step: float multiplication turns 19.99 into 1998.9999…
"""

from decimal import Decimal, ROUND_HALF_UP

from dashboard.core.domain_types import MinorUnits

_CENTS = Decimal(100)


def to_minor_units(amount: Decimal | int | str) -> MinorUnits:
    """Convert a user-facing decimal amount to integer cents."""
    cents = (Decimal(amount) * _CENTS).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return MinorUnits(int(cents))


def from_minor_units(amount: int) -> float:
    """Convert integer cents back to the user-facing amount."""
    return float(Decimal(amount) / _CENTS)


def format_currency(amount: int) -> str:
    """Format integer cents as a display string, e.g. 123456 -> '$1,234.56'."""
    value = Decimal(amount) / _CENTS
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
