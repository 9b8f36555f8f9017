from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping

from ..models import LineRequest, LineResult, PricedLine, PricingComponent, QuoteItem, UnpricedLine

logger = logging.getLogger(__name__)


def index_by_name(pricing: Iterable[PricingComponent]) -> Dict[str, PricingComponent]:
    """Map component name to component; the first entry wins on duplicate names."""
    index: Dict[str, PricingComponent] = {}
    for comp in pricing:
        index.setdefault(comp.name, comp)
    return index


def price_line(req: LineRequest, catalog: Mapping[str, PricingComponent]) -> LineResult:
    comp = catalog.get(req.name)
    if comp is None:
        logger.warning("Pricing component not found: %s", req.name)
        return UnpricedLine(request=req)
    item = QuoteItem(
        name=req.name,
        category=req.category,
        quantity=req.quantity,
        unit=comp.unit or req.unit,
        unit_price=comp.unit_price,
        line_total=comp.unit_price * req.quantity,
        labor_max=comp.labor_max,
        component_id=comp.id,
    )
    return PricedLine(item=item)


def price_lines(requests: Iterable[LineRequest], catalog: Mapping[str, PricingComponent]) -> List[LineResult]:
    return [price_line(r, catalog) for r in requests]
