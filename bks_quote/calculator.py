from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from .calculators import duration, totals
from .calculators.decision_tree import requested_lines
from .calculators.lines import index_by_name, price_lines
from .models import (
    FormAnswers,
    LineResult,
    PolicyConfig,
    PricedLine,
    PricingComponent,
    Quote,
    UnpricedLine,
)
from .names import ComponentNames


def generate_quote_id(now: datetime, prefix: str = "BKS") -> str:
    """Readable id such as BKS-20251018-1432. Quotes made in the same minute share it."""
    return f"{prefix}-{now:%Y%m%d}-{now:%H%M}"


def valid_until(now: datetime, days: int = 30) -> date:
    return (now + timedelta(days=days)).date()


class BKSCalculator:
    """Prices form answers against a fixed snapshot of the pricing catalog.

    The catalog is expected to be pre-filtered to components used by the
    automatic calculator. Components the decision tree asks for but the
    catalog lacks are left out of the quote and listed in
    ``Quote.missing_components``.
    """

    def __init__(
        self,
        pricing: Iterable[PricingComponent],
        names: Optional[ComponentNames] = None,
        policy: Optional[PolicyConfig] = None,
    ) -> None:
        self.pricing = tuple(pricing)
        self.names = names or ComponentNames()
        self.policy = policy or PolicyConfig()
        self._index = index_by_name(self.pricing)

    def evaluate(self, answers: FormAnswers) -> List[LineResult]:
        return price_lines(requested_lines(answers, self.names), self._index)

    def calculate_quote(self, answers: FormAnswers, now: Optional[datetime] = None) -> Quote:
        now = now or datetime.now()
        results = self.evaluate(answers)
        items = [r.item for r in results if isinstance(r, PricedLine)]
        missing = [r.name for r in results if isinstance(r, UnpricedLine)]

        sub = totals.subtotal(items)
        return Quote(
            id=generate_quote_id(now, self.policy.quote_id_prefix),
            items=items,
            category_summary=totals.category_summary(items),
            subtotal=sub,
            total_with_tax=totals.total_with_tax(sub, self.policy.vat_percent),
            estimated_days=duration.estimate_days(items, self.policy),
            valid_until=valid_until(now, self.policy.validity_days),
            missing_components=missing,
        )

    def missing_names(self) -> List[str]:
        """Names the decision tree can ask for that the catalog does not have."""
        return [n for n in self.names.referenced_names() if n not in self._index]
