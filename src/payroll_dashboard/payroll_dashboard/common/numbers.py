from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def money(value: Decimal) -> Decimal:
    """Round half-up to 2 decimal places."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_amount(value: Any, default: Decimal = ZERO) -> Decimal:
    """Parse a currency amount, falling back to ``default``.

    Ingestion is lenient on purpose: missing, blank, non-numeric and
    non-finite values become ``default`` instead of failing the whole batch.
    Use ``validators.require_decimal`` where a bad value should be rejected.
    """

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        parsed = value
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return default
        try:
            parsed = Decimal(text)
        except (InvalidOperation, ValueError):
            return default
    if not parsed.is_finite():
        return default
    return money(parsed)
