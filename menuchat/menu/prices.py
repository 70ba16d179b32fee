# menuchat/menu/prices.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

CURRENCY = "RM"

_CENTS = Decimal("0.01")


def quantize_amount(raw: str) -> str:
    """'8.5' -> '8.50'. Anything unparseable degrades to '0.00'."""
    try:
        return str(Decimal(raw).quantize(_CENTS))
    except (InvalidOperation, TypeError, ValueError):
        return "0.00"


def format_price(amount: Any) -> str:
    v = to_amount(amount)
    return f"{CURRENCY} {(v or 0.0):.2f}"


def to_amount(value: Any) -> Optional[float]:
    """Lenient float conversion for values coming out of forms / the DB.

    Returns None for missing or garbage input (and for NaN / inf).
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        v = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if v != v or v in (float("inf"), float("-inf")):
        return None
    return v


def price_to_float(price: str | None) -> float:
    # "RM 8.50" -> 8.5
    raw = (price or "").strip()
    if raw[:2].upper() == CURRENCY:
        raw = raw[2:]
    v = to_amount(raw)
    return v if v is not None else 0.0
