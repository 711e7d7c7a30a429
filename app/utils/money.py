"""Money helpers for panel billing."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

CENT = Decimal("0.01")


def parse_monthly_rate(value: object) -> Optional[Decimal]:
    """
    Read a monthly rate as a positive Decimal.

    Returns None when the value is missing, not numeric, not finite, or not
    strictly positive; callers then apply the default rate.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        rate = value
    elif isinstance(value, (int, float, str)):
        try:
            rate = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not rate.is_finite() or rate <= 0:
        return None
    return rate


def round_currency(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
