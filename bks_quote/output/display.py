from __future__ import annotations

import math
from decimal import Decimal
from typing import Dict, List, Sequence

from ..models import QuoteItem
from ..utils import money, to_decimal

# Work-stage order used on offers; Kantsten is kept for manually added curb stages
CATEGORY_ORDER = (
    "Maskinflytt",
    "Schakt",
    "Underarbete",
    "Stenläggning",
    "Kantsten",
    "Fogning",
    "Bortforsling",
)

CATEGORY_DISPLAY_NAMES: Dict[str, str] = {
    "Maskinflytt": "Maskinflytt och etablering",
    "Schakt": "Schakt",
    "Underarbete": "Underarbete",
    "Stenläggning": "Stenläggning",
    "Kantsten": "Kantsten",
    "Fogning": "Fogning",
    "Bortforsling": "Bortforsling av byggavfall och städning",
}


def _label(category) -> str:
    return getattr(category, "value", category)


def category_order_index(category) -> int:
    try:
        return CATEGORY_ORDER.index(_label(category))
    except ValueError:
        return 999


def category_display_name(category) -> str:
    label = _label(category)
    return CATEGORY_DISPLAY_NAMES.get(label, label)


def sort_items_by_category(items: Sequence[QuoteItem]) -> List[QuoteItem]:
    # sorted() is stable, so tree order is kept within a category
    return sorted(items, key=lambda i: category_order_index(i.category))


def group_items_by_category(items: Sequence[QuoteItem]) -> Dict[str, List[QuoteItem]]:
    grouped: Dict[str, List[QuoteItem]] = {}
    for item in sort_items_by_category(items):
        grouped.setdefault(_label(item.category), []).append(item)
    return grouped


def format_currency(amount, symbol: str = "kr") -> str:
    return money(amount, symbol)


def format_quantity(quantity, unit: str) -> str:
    q = to_decimal(quantity)
    if q == q.to_integral_value():
        text = str(int(q))
    else:
        text = f"{q.quantize(Decimal('0.1'))}"
    return f"{text} {unit}"


def work_timeline(days: int) -> str:
    if days <= 1:
        return "1 dag"
    if days <= 3:
        return f"{days} dagar"
    if days <= 5:
        return f"{days} dagar (1 vecka)"
    weeks = math.ceil(days / 5)
    return f"{days} dagar ({weeks} {'vecka' if weeks == 1 else 'veckor'})"
