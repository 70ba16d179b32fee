# menuchat/main.py
from __future__ import annotations

import io
import logging
import os
from datetime import date
from typing import Any, Dict, List

import qrcode
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

# Load .env before db.py reads DATABASE_URL
load_dotenv()

from .db import Base, engine, get_db
from .menu.catalog import count_items, flatten_categories, group_menu_items
from .menu.parser import parse_menu_text
from .models import Menu, MenuItem, Order, OrderDetail
from .orders.cart import DEFAULT_DELIVERY_FEE, grand_total
from .orders.summary import format_orders_for_chat, order_to_record


# -------------------
# Config (env-driven)
# -------------------
class Settings(BaseModel):
    delivery_fee: float = float(os.getenv("DELIVERY_FEE", str(DEFAULT_DELIVERY_FEE)))
    summary_locale: str = os.getenv("SUMMARY_LOCALE", "ms_MY").strip()
    public_base_url: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").strip().rstrip("/")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()


settings = Settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Daily Menu Ordering API")

Base.metadata.create_all(bind=engine)


# -------------------
# Schemas
# -------------------
class PreviewIn(BaseModel):
    raw_text: str = ""


class MenuIn(BaseModel):
    raw_text: str
    menu_date: date
    is_closed: bool = False


class MenuPatch(BaseModel):
    is_closed: bool


class OrderIn(BaseModel):
    customer_name: str
    quantities: Dict[int, int]
    is_delivery: bool = False
    delivery_address: str | None = None
    phone_number: str | None = None
    remarks: str | None = None


class PaidIn(BaseModel):
    is_paid: bool


# -------------------
# Helpers
# -------------------
def _get_menu(db: Session, menu_id: int) -> Menu:
    menu = db.get(Menu, menu_id)
    if not menu:
        raise HTTPException(status_code=404, detail="Menu not found")
    return menu


def _get_order(db: Session, order_id: int) -> Order:
    order = db.get(Order, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


def _clean(s: str | None) -> str:
    return (s or "").strip()


def _order_out(order: Order) -> Dict[str, Any]:
    return {"id": order.id, **order_to_record(order)}


def order_link(menu_id: int) -> str:
    return f"{settings.public_base_url}/order/{menu_id}"


# -------------------
# Health
# -------------------
@app.get("/")
def root():
    return {"ok": True, "service": "menuchat-api"}


# -------------------
# Menus
# -------------------
@app.post("/menus/preview")
def preview_menu(payload: PreviewIn):
    categories = parse_menu_text(payload.raw_text)
    return {
        "categories": [c.to_dict() for c in categories],
        "item_count": count_items(categories),
    }


@app.post("/menus")
def create_menu(payload: MenuIn, db: Session = Depends(get_db)):
    categories = parse_menu_text(payload.raw_text)
    if not categories:
        raise HTTPException(status_code=400, detail="Please enter a menu first")

    menu = Menu(menu_date=payload.menu_date, is_closed=payload.is_closed)
    menu.items = [MenuItem(**row) for row in flatten_categories(categories)]
    db.add(menu)
    db.commit()
    db.refresh(menu)

    logger.info("menu %s created for %s with %d items", menu.id, menu.menu_date, len(menu.items))
    return {
        "id": menu.id,
        "menu_date": menu.menu_date.isoformat(),
        "is_closed": menu.is_closed,
        "item_count": len(menu.items),
    }


@app.get("/menus/{menu_id}")
def get_menu(menu_id: int, db: Session = Depends(get_db)):
    menu = _get_menu(db, menu_id)
    return {
        "id": menu.id,
        "menu_date": menu.menu_date.isoformat(),
        "is_closed": menu.is_closed,
        "categories": [
            {
                "name": name,
                "items": [{"id": it.id, "item_name": it.item_name, "price": it.price} for it in items],
            }
            for name, items in group_menu_items(menu.items)
        ],
    }


@app.patch("/menus/{menu_id}")
def update_menu(menu_id: int, payload: MenuPatch, db: Session = Depends(get_db)):
    menu = _get_menu(db, menu_id)
    menu.is_closed = payload.is_closed
    db.commit()
    logger.info("menu %s %s", menu.id, "closed" if menu.is_closed else "reopened")
    return {"ok": True, "id": menu.id, "is_closed": menu.is_closed}


@app.get("/menus/{menu_id}/qr.png")
def menu_qr_code(menu_id: int, db: Session = Depends(get_db)):
    menu = _get_menu(db, menu_id)
    img = qrcode.make(order_link(menu.id))
    buf = io.BytesIO()
    img.save(buf)
    return Response(content=buf.getvalue(), media_type="image/png")


# -------------------
# Orders
# -------------------
@app.post("/menus/{menu_id}/orders")
def submit_order(menu_id: int, payload: OrderIn, db: Session = Depends(get_db)):
    menu = _get_menu(db, menu_id)
    if menu.is_closed:
        raise HTTPException(status_code=409, detail="Orders are already closed")

    name = _clean(payload.customer_name)
    if not name:
        raise HTTPException(status_code=400, detail="Please enter your name")

    address = _clean(payload.delivery_address)
    phone = _clean(payload.phone_number)
    if payload.is_delivery:
        if not address:
            raise HTTPException(status_code=400, detail="Please enter delivery address")
        if not phone:
            raise HTTPException(status_code=400, detail="Please enter phone number")

    by_id = {it.id: it for it in menu.items}
    unknown = sorted(set(payload.quantities) - set(by_id))
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown menu items: {unknown}")

    lines: List[Dict[str, Any]] = [
        {"item_name": by_id[iid].item_name, "price": by_id[iid].price, "quantity": qty}
        for iid, qty in payload.quantities.items()
        if qty > 0
    ]
    if not lines:
        raise HTTPException(status_code=400, detail="Please select at least one item")

    order = Order(
        menu_id=menu.id,
        customer_name=name,
        remarks=_clean(payload.remarks) or None,
        is_paid=False,
        is_delivery=payload.is_delivery,
        delivery_address=address if payload.is_delivery else None,
        phone_number=phone if payload.is_delivery else None,
        total_amount=grand_total(lines, payload.is_delivery, settings.delivery_fee),
    )
    order.details = [OrderDetail(**line) for line in lines]
    db.add(order)
    db.commit()
    db.refresh(order)

    logger.info("order %s for menu %s: %s RM %.2f", order.id, menu.id, name, order.total_amount)
    return {"ok": True, "order_id": order.id, "total_amount": order.total_amount}


@app.get("/menus/{menu_id}/orders")
def list_orders(menu_id: int, db: Session = Depends(get_db)):
    menu = _get_menu(db, menu_id)
    return [_order_out(o) for o in menu.orders]


@app.get("/menus/{menu_id}/summary", response_class=PlainTextResponse)
def orders_summary(menu_id: int, db: Session = Depends(get_db)):
    """Chat-ready order list for the 'copy summary' action."""
    menu = _get_menu(db, menu_id)
    records = [order_to_record(o) for o in menu.orders]
    return format_orders_for_chat(records, menu.menu_date, locale=settings.summary_locale)


@app.patch("/orders/{order_id}/paid")
def set_paid(order_id: int, payload: PaidIn, db: Session = Depends(get_db)):
    order = _get_order(db, order_id)
    order.is_paid = payload.is_paid
    db.commit()
    return {"ok": True, "id": order.id, "is_paid": order.is_paid}


@app.delete("/orders/{order_id}")
def delete_order(order_id: int, db: Session = Depends(get_db)):
    order = _get_order(db, order_id)
    db.delete(order)
    db.commit()
    logger.info("order %s deleted", order_id)
    return {"ok": True}
