# menuchat/orders/summary.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from babel.dates import format_date

from ..menu.prices import format_price, to_amount

NO_ORDERS = "No orders yet."
DEFAULT_LOCALE = "ms_MY"

DateLike = Union[date, datetime, str]


def format_menu_date(value: DateLike, locale: str = DEFAULT_LOCALE) -> str:
    """
    Long localized date for the summary header, e.g. "Ahad, 18 Oktober 2026".
    Bad dates / unknown locales raise; callers decide what to do with that.
    """
    if isinstance(value, datetime):
        d = value.date()
    elif isinstance(value, date):
        d = value
    else:
        d = date.fromisoformat(str(value).strip()[:10])
    return format_date(d, format="full", locale=locale)


def _qty(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _price_tag(value: Any) -> str:
    # zero / missing / garbage -> no tag
    amount = to_amount(value)
    return f"({format_price(amount)})" if amount else ""


def total_collected(orders: Sequence[Mapping[str, Any]]) -> float:
    return round(sum((to_amount(o.get("total_amount")) or 0.0) for o in orders), 2)


def _render_order(index: int, order: Mapping[str, Any]) -> List[str]:
    delivery = bool(order.get("is_delivery"))
    delivery_tag = " 🚚" if delivery else ""
    lines = [f"{index}. *{order.get('customer_name') or ''}* {_price_tag(order.get('total_amount'))}{delivery_tag}"]

    for detail in order.get("order_details") or []:
        qty = _qty(detail.get("quantity"))
        if qty <= 0:
            continue
        price = _price_tag(detail.get("price"))
        lines.append(f"   • {detail.get('item_name') or ''} {price + ' ' if price else ''}× {qty}")

    address = (order.get("delivery_address") or "").strip()
    if delivery and address:
        lines.append(f"   📍 {address}")

    remarks = (order.get("remarks") or "").strip()
    if remarks:
        lines.append(f"   📝 {remarks}")

    if order.get("is_paid"):
        lines.append("   ✅ Paid")
    return lines


def format_orders_for_chat(
    orders: Optional[Sequence[Mapping[str, Any]]],
    menu_date: DateLike,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """
    Render orders as one chat-ready block (WhatsApp-style *bold*).
    Orders are printed in the order given; sort or group before calling.
    """
    if not orders:
        return NO_ORDERS

    text = f"📋 *Order List - {format_menu_date(menu_date, locale)}*\n"
    text += f"💰 *Total Collected: {format_price(total_collected(orders))}*\n\n"

    for i, order in enumerate(orders, start=1):
        text += "\n".join(_render_order(i, order)) + "\n\n"
    return text


def order_to_record(order: Any) -> Dict[str, Any]:
    """ORM Order (with details loaded) -> the plain mapping the formatter reads."""
    return {
        "customer_name": order.customer_name,
        "order_details": [
            {"item_name": d.item_name, "price": d.price, "quantity": d.quantity}
            for d in order.details
        ],
        "is_delivery": order.is_delivery,
        "delivery_address": order.delivery_address,
        "phone_number": order.phone_number,
        "remarks": order.remarks,
        "is_paid": order.is_paid,
        "total_amount": order.total_amount,
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }
