# menuchat/menu/parser.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .prices import CURRENCY, quantize_amount

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"

# ----------------------------
# Regex helpers
# ----------------------------
# Decorative divider under a header: """"""""", =====, -----, ____
_SEPARATOR_RE = re.compile(r'^["\'=\-_]{3,}$')

# Zero-width space/non-joiner/joiner, BOM, word joiner (copy-paste noise from chat apps)
_INVISIBLE_RE = re.compile("[\u200b-\u200d\ufeff\u2060]")

# "RM 8.50", "RM8", "Rm 4"
_PRICE_RE = re.compile(r"RM\s*(\d+(?:\.\d{1,2})?)", re.IGNORECASE)

# Numbered list without a price: "1. Nasi", "2) Teh", "3 Kopi"
_NUMBERED_RE = re.compile(r"^\d+[.)\s]")

_ID_RE = re.compile(r"^(\d+)\.")

# Cleanup for the item name
_PRICE_TOKEN_RE = re.compile(r"\(?\bRM\s*[\d.]+\)?", re.IGNORECASE)
_LEADING_NUMBER_RE = re.compile(r"^\d+\s*[.)]\s*")
_QUOTES_RE = re.compile(r"[\"']+")

# Announcement text that precedes the real menu body
MARKETING_KEYWORDS = (
    "menu daily",
    "vendor",
    "est dolce",
    "delivery",
    "order",
    "close",
    "open",
    "today",
)


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    price: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "price": self.price}


@dataclass
class Category:
    name: str = DEFAULT_CATEGORY
    items: List[Item] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "items": [it.to_dict() for it in self.items]}


def _clean_line(raw: str) -> str:
    return _INVISIBLE_RE.sub("", (raw or "").strip()).strip()


def _header_name(raw: str) -> str:
    name = _QUOTES_RE.sub("", _clean_line(raw)).strip()
    return name or DEFAULT_CATEGORY


def _is_marketing(line: str) -> bool:
    lower = line.lower()
    return any(k in lower for k in MARKETING_KEYWORDS)


def parse_item_line(line: str) -> Optional[Item]:
    """
    Classify one cleaned line.
    Returns an Item if the line carries a price or starts like a numbered entry,
    None otherwise (including candidates whose cleaned name is too short).
    """
    price_match = _PRICE_RE.search(line)
    if not price_match and not _NUMBERED_RE.match(line):
        return None

    amount = quantize_amount(price_match.group(1)) if price_match else "0.00"

    id_match = _ID_RE.match(line)
    item_id = id_match.group(1) if id_match else ""

    name = _PRICE_TOKEN_RE.sub("", line)
    name = _LEADING_NUMBER_RE.sub("", name)
    name = _QUOTES_RE.sub("", name).strip()
    if name.endswith("."):
        name = name[:-1]

    if len(name) <= 2:
        return None
    return Item(id=item_id, name=name, price=f"{CURRENCY} {amount}")


def parse_menu_text(raw_text: Any) -> List[Category]:
    """
    Parse a pasted chat menu into categories.

    Headers are only recognised after the fact: a separator line makes the
    line just before it the name of a new category. Marketing text is dropped
    until the first header or item has been captured.
    """
    if not raw_text or not isinstance(raw_text, str):
        return []

    menu: List[Category] = []
    current = Category()
    capturing = False
    prev_raw: Optional[str] = None

    def flush(next_name: str) -> Category:
        if current.items:
            menu.append(current)
        return Category(name=next_name)

    for raw in raw_text.split("\n"):
        last, prev_raw = prev_raw, raw

        line = _clean_line(raw)
        if not line:
            continue

        if _SEPARATOR_RE.match(line):
            if last is not None:
                current = flush(_header_name(last))
                capturing = True
            continue

        if not capturing and _is_marketing(line):
            continue

        item = parse_item_line(line)
        if item is not None:
            current.items.append(item)
            capturing = True

    flush(DEFAULT_CATEGORY)

    logger.debug(
        "parsed menu: %d categories, %d items",
        len(menu),
        sum(len(c.items) for c in menu),
    )
    return menu
