# menuchat/models.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from .db import Base


class Menu(Base):
    __tablename__ = "menus"
    id = Column(Integer, primary_key=True)
    menu_date = Column(Date, nullable=False)
    is_closed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # id order == parse order
    items = relationship("MenuItem", order_by="MenuItem.id", cascade="all, delete-orphan")
    orders = relationship("Order", order_by="Order.id", cascade="all, delete-orphan")


class MenuItem(Base):
    __tablename__ = "menu_items"
    id = Column(Integer, primary_key=True)
    menu_id = Column(Integer, ForeignKey("menus.id"), nullable=False, index=True)
    item_name = Column(String, nullable=False)
    price = Column(Float, default=0.0)
    category = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class Order(Base):
    __tablename__ = "orders"
    id = Column(Integer, primary_key=True)
    menu_id = Column(Integer, ForeignKey("menus.id"), nullable=False, index=True)
    customer_name = Column(String, nullable=False)
    remarks = Column(Text, nullable=True)
    is_paid = Column(Boolean, default=False, nullable=False)
    is_delivery = Column(Boolean, default=False, nullable=False)
    delivery_address = Column(Text, nullable=True)
    phone_number = Column(String, nullable=True)
    total_amount = Column(Float, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)

    details = relationship("OrderDetail", order_by="OrderDetail.id", cascade="all, delete-orphan")


class OrderDetail(Base):
    __tablename__ = "order_details"
    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    item_name = Column(String, nullable=False)
    price = Column(Float, default=0.0)
    quantity = Column(Integer, default=1)
