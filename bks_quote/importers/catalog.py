from __future__ import annotations

from pathlib import Path
from typing import List

from ..models import PricingComponent
from . import catalog_csv, catalog_yaml


def load_catalog(path: Path, only_active: bool = True) -> List[PricingComponent]:
    """Load a catalog export, picking the reader by file suffix."""
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")
    if path.suffix.lower() == ".csv":
        return catalog_csv.parse(path, only_active)
    return catalog_yaml.parse(path, only_active)
