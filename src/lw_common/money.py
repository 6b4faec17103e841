"""Currency and odds arithmetic.

Balances, stakes and payouts are int cents. Decimal odds are carried as
Decimal so that the product of leg odds is exact; only the final payout is
rounded, and always down to a whole cent (the book never overpays).
"""

from collections.abc import Iterable
from decimal import ROUND_DOWN, Decimal

ONE = Decimal("1")


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 6500 -> '$65.00', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"


def to_odds(value: float | int | str | Decimal) -> Decimal:
    """Normalize an odds value to Decimal without float representation noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def multiply_odds(odds: Iterable[Decimal]) -> Decimal:
    """Product of decimal odds; an empty iterable yields 1."""
    product = ONE
    for o in odds:
        product *= o
    return product


def payout_cents(stake: int, combined_odds: Decimal) -> int:
    """Gross return of a winning wager: floor(stake * combined_odds)."""
    return int((Decimal(stake) * combined_odds).to_integral_value(rounding=ROUND_DOWN))
