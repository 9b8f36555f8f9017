from __future__ import annotations

from typing import Any, Dict, Iterator, List, Sequence

from ..models import Category, Quote

# Work-stage labels of the estimate-items table
WORK_STAGES: Dict[Category, str] = {
    Category.MACHINE_MOBILIZATION: "10 - Maskinflytt och etablering",
    Category.EXCAVATION: "20 - Schakt",
    Category.SUB_BASE: "30 - Underarbete",
    Category.PAVING: "50 - Stenläggning",
    Category.JOINTING: "70 - Fogning",
    Category.WASTE_REMOVAL: "99 - Bortforsling av byggavfall och städning",
}

BATCH_SIZE = 10


def work_stage(category: Category) -> str:
    return WORK_STAGES.get(category, category.value)


def estimate_item_rows(quote: Quote, estimate_id: str) -> List[Dict[str, Any]]:
    """Rows for the estimate-items table, one per quote item, in quote order."""
    rows: List[Dict[str, Any]] = []
    for item in quote.items:
        rows.append(
            {
                "fields": {
                    "Estimate": [estimate_id],
                    "Pricing Component": [item.component_id] if item.component_id else [],
                    "Quantity": float(item.quantity),
                    "Unit Price": float(item.unit_price),
                    "Unit": item.unit,
                    "Arbetsmoment": work_stage(item.category),
                }
            }
        )
    return rows


def batched(rows: Sequence[Dict[str, Any]], size: int = BATCH_SIZE) -> Iterator[List[Dict[str, Any]]]:
    """Split rows into create-requests of at most ``size`` records."""
    if size <= 0:
        raise ValueError("batch size must be positive")
    for start in range(0, len(rows), size):
        yield list(rows[start : start + size])
