from __future__ import annotations

from decimal import Decimal
from typing import Any

from ..core.enums import Position
from .numbers import to_amount

CURRENCY_SYMBOL = "K"

POSITION_LABELS = {
    Position.MANAGER.value: "Manager",
    Position.ASSISTANT_MANAGER.value: "Assistant Manager",
    Position.CASHIER.value: "Cashier",
    Position.IT_TECHNICIAN.value: "IT Technician",
    Position.SECURITY.value: "Security",
    Position.CLEANER.value: "Cleaner",
    Position.BIKER.value: "Biker",
    Position.CALL_CENTER_AGENT.value: "Call Center Agent",
}


def fmt(value: Any) -> str:
    """Whole-kwacha display, e.g. ``K12,500``."""
    return f"{CURRENCY_SYMBOL}{to_amount(value):,.0f}"


def fmt_dec(value: Any) -> str:
    """Two-decimal display, e.g. ``K12,500.00``."""
    return f"{CURRENCY_SYMBOL}{to_amount(value):,.2f}"


def fmt_quantity(value: Decimal) -> str:
    """Shift counts without trailing zeros: 3, 2.5."""
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def position_label(position: str) -> str:
    return POSITION_LABELS.get(position, position)
