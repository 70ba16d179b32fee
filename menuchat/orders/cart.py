# menuchat/orders/cart.py
from __future__ import annotations

from typing import Any, Dict, Iterable

from ..menu.prices import to_amount

DEFAULT_DELIVERY_FEE = 3.00


def _qty(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def line_total(price: Any, qty: Any) -> float:
    q = _qty(qty)
    if q <= 0:
        return 0.0
    return round((to_amount(price) or 0.0) * q, 2)


def items_total(lines: Iterable[Dict[str, Any]]) -> float:
    total = 0.0
    for line in lines:
        total += line_total(line.get("price"), line.get("quantity"))
    return round(total, 2)


def grand_total(
    lines: Iterable[Dict[str, Any]],
    is_delivery: bool = False,
    delivery_fee: float = DEFAULT_DELIVERY_FEE,
) -> float:
    total = items_total(lines)
    if is_delivery:
        total += delivery_fee
    return round(total, 2)
