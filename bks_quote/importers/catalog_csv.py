from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..models import PricingComponent

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "1", "yes", "ja", "checked", "x"}


def _to_float(x: Optional[str], column: str = "", row: int = 0) -> float:
    raw = (x or "").strip()
    if not raw:
        return 0.0
    try:
        return float(raw.replace(" ", "").replace(",", "."))
    except ValueError:
        logger.warning("Row %d: unreadable %s %r, using 0", row, column or "number", raw)
        return 0.0


def _to_optional_float(x: Optional[str], column: str = "", row: int = 0) -> Optional[float]:
    if not (x or "").strip():
        return None
    return _to_float(x, column, row)


def _to_bool(x: Optional[str]) -> bool:
    return (x or "").strip().lower() in TRUE_VALUES


def _row_to_component(row: Dict[str, str], index: int) -> Optional[PricingComponent]:
    name = (row.get("Component Name") or "").strip()
    if not name:
        return None
    return PricingComponent(
        id=(row.get("id") or row.get("Record ID") or f"row{index}").strip(),
        name=name,
        unit=(row.get("Unit") or "").strip(),
        unit_price=_to_float(row.get("Unit Price"), "Unit Price", index),
        labor_max=_to_optional_float(row.get("labor_max"), "labor_max", index),
        labor_rate=_to_optional_float(row.get("labor_rate"), "labor_rate", index),
        stage=(row.get("Stage") or "").strip() or None,
        active_in_calculator=_to_bool(row.get("Used in Automatic Calculator")),
    )


def parse(path: Optional[Path], only_active: bool = True) -> List[PricingComponent]:
    """Read a pricing catalog exported from the spreadsheet database as CSV.

    Headers follow the export: Component Name, Unit, Unit Price,
    Used in Automatic Calculator, Stage, labor_rate, labor_max and an
    optional id / Record ID column. Decimal commas are accepted.
    """
    if not path:
        return []
    components: List[PricingComponent] = []
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        for i, row in enumerate(reader, start=1):
            comp = _row_to_component(row, i)
            if comp is None:
                continue
            if only_active and not comp.active_in_calculator:
                continue
            components.append(comp)
    return components
