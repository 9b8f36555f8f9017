from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable

from ..models import Category, QuoteItem
from ..utils import round_half_up


def subtotal(items: Iterable[QuoteItem]) -> int:
    return round_half_up(sum((i.line_total for i in items), Decimal(0)))


def total_with_tax(subtotal_amount: int, vat_percent: Decimal) -> int:
    return round_half_up(Decimal(subtotal_amount) * (1 + vat_percent / Decimal(100)))


def category_summary(items: Iterable[QuoteItem]) -> Dict[Category, Decimal]:
    """Sum of line totals per category, in the order categories first appear."""
    summary: Dict[Category, Decimal] = {}
    for item in items:
        summary[item.category] = summary.get(item.category, Decimal(0)) + item.line_total
    return summary
