from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml

from ..models import PricingComponent


def parse(path: Optional[Path], only_active: bool = True) -> List[PricingComponent]:
    """Read a catalog YAML: a top-level ``components`` list of PricingComponent fields."""
    if not path:
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    rows = data.get("components", []) if isinstance(data, dict) else data
    components = [PricingComponent(**row) for row in rows or [] if row.get("name")]
    if only_active:
        components = [c for c in components if c.active_in_calculator]
    return components
