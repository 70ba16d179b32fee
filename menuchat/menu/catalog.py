# menuchat/menu/catalog.py
from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from .parser import Category
from .prices import price_to_float

UNCATEGORISED = "General Menu"


def flatten_categories(categories: Sequence[Category]) -> List[Dict[str, Any]]:
    """One storage row per parsed item, in parse order, tagged with its category."""
    rows: List[Dict[str, Any]] = []
    for cat in categories:
        for it in cat.items:
            rows.append(
                {
                    "item_name": it.name,
                    "price": price_to_float(it.price),
                    "category": cat.name,
                }
            )
    return rows


def count_items(categories: Sequence[Category]) -> int:
    return sum(len(c.items) for c in categories)


def group_menu_items(rows: Sequence[Any]) -> List[Tuple[str, List[Any]]]:
    """
    Regroup stored menu rows by category.
    Categories keep the order in which they are first seen; rows work as
    dicts or ORM objects.
    """
    groups: Dict[str, List[Any]] = {}
    for row in rows:
        cat = row.get("category") if isinstance(row, dict) else getattr(row, "category", None)
        groups.setdefault(cat or UNCATEGORISED, []).append(row)
    return list(groups.items())
