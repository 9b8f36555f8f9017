from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Sequence

from ..models import PolicyConfig, QuoteItem
from .decision_tree import M2

logger = logging.getLogger(__name__)


def _clamp(days: int, policy: PolicyConfig) -> int:
    return max(policy.min_days, min(policy.max_days, days))


def labor_days(items: Sequence[QuoteItem]) -> Decimal:
    return sum(
        (i.labor_max * i.quantity for i in items if i.labor_max is not None and i.labor_max > 0),
        Decimal(0),
    )


def estimate_days(items: Sequence[QuoteItem], policy: PolicyConfig) -> int:
    """Estimate working days from per-unit labor figures.

    When no item carries labor data, fall back to a rough one day per
    ``fallback_m2_per_day`` of area-based work. The fallback is approximate.
    """
    total = labor_days(items)
    if total > 0:
        return _clamp(math.ceil(total), policy)

    area = sum((i.quantity for i in items if i.unit == M2), Decimal(0))
    logger.debug("No labor data on %d items, estimating from %s m²", len(items), area)
    return _clamp(math.ceil(area / policy.fallback_m2_per_day), policy)
