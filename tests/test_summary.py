from datetime import date, datetime

import pytest
from babel.core import UnknownLocaleError

from menuchat.orders.summary import (
    NO_ORDERS,
    format_menu_date,
    format_orders_for_chat,
    total_collected,
)

MENU_DATE = date(2026, 10, 18)


def _ali(**kw):
    order = {
        "customer_name": "Ali",
        "total_amount": 12.5,
        "order_details": [{"item_name": "Nasi Lemak", "price": 8.5, "quantity": 1}],
        "is_paid": True,
    }
    order.update(kw)
    return order


@pytest.mark.parametrize("orders", [[], None])
def test_no_orders(orders):
    assert format_orders_for_chat(orders, MENU_DATE) == NO_ORDERS == "No orders yet."


def test_single_paid_order():
    text = format_orders_for_chat([_ali()], MENU_DATE)

    assert "Ali" in text
    assert "RM 12.50" in text
    assert "Nasi Lemak" in text
    assert "✅ Paid" in text
    assert "📍" not in text


def test_exact_layout():
    orders = [
        _ali(is_delivery=True, delivery_address="No 5, Jalan Mawar", remarks="Kurang pedas"),
        {
            "customer_name": "Siti",
            "total_amount": None,
            "order_details": [{"item_name": "Teh Tarik", "price": None, "quantity": 2}],
            "is_paid": False,
        },
    ]
    text = format_orders_for_chat(orders, MENU_DATE, locale="en")

    assert text == (
        "📋 *Order List - Sunday, October 18, 2026*\n"
        "💰 *Total Collected: RM 12.50*\n"
        "\n"
        "1. *Ali* (RM 12.50) 🚚\n"
        "   • Nasi Lemak (RM 8.50) × 1\n"
        "   📍 No 5, Jalan Mawar\n"
        "   📝 Kurang pedas\n"
        "   ✅ Paid\n"
        "\n"
        "2. *Siti* \n"
        "   • Teh Tarik × 2\n"
        "\n"
    )


def test_zero_quantity_lines_suppressed():
    order = _ali(order_details=[
        {"item_name": "Nasi Lemak", "price": 8.5, "quantity": 0},
        {"item_name": "Roti Canai", "price": 2, "quantity": "3"},
        {"item_name": "Kuih", "price": 1, "quantity": None},
    ])
    text = format_orders_for_chat([order], MENU_DATE)

    assert "Nasi Lemak" not in text
    assert "   • Roti Canai (RM 2.00) × 3\n" in text
    assert "Kuih" not in text


def test_address_only_for_delivery():
    text = format_orders_for_chat([_ali(is_delivery=False, delivery_address="Somewhere")], MENU_DATE)
    assert "Somewhere" not in text
    assert "🚚" not in text


def test_input_order_is_preserved():
    orders = [_ali(customer_name="Zara"), _ali(customer_name="Ahmad")]
    text = format_orders_for_chat(orders, MENU_DATE)
    assert text.index("1. *Zara*") < text.index("2. *Ahmad*")


def test_total_collected_handles_bad_amounts():
    orders = [
        {"total_amount": "10.10"},
        {"total_amount": 5.255},
        {"total_amount": "abc"},
        {"total_amount": None},
        {},
    ]
    assert total_collected(orders) == pytest.approx(15.36, abs=0.005)
    assert total_collected(list(reversed(orders))) == total_collected(orders)


def test_total_line_sums_all_orders():
    orders = [_ali(total_amount=3.3), _ali(total_amount="4.2"), _ali(total_amount=None)]
    text = format_orders_for_chat(orders, MENU_DATE)
    assert "💰 *Total Collected: RM 7.50*" in text


def test_malay_long_date_default():
    header = format_menu_date(MENU_DATE)
    assert "Oktober" in header
    assert "2026" in header
    assert "18" in header


@pytest.mark.parametrize("value", [MENU_DATE, datetime(2026, 10, 18, 9, 30), "2026-10-18", "2026-10-18T09:30:00"])
def test_date_inputs(value):
    assert format_menu_date(value, locale="en") == "Sunday, October 18, 2026"


def test_bad_date_propagates():
    with pytest.raises(ValueError):
        format_orders_for_chat([_ali()], "not-a-date")


def test_unknown_locale_propagates():
    with pytest.raises(UnknownLocaleError):
        format_menu_date(MENU_DATE, locale="xx_QQ")
