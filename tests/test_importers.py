from __future__ import annotations

from decimal import Decimal

import pytest

from bks_quote.calculator import BKSCalculator
from bks_quote.importers import catalog_csv
from bks_quote.importers.catalog import load_catalog
from conftest import ROOT

CSV = """Component Name,Unit,Unit Price,Used in Automatic Calculator,Stage,labor_rate,labor_max,Record ID
Asfaltering,m²,"420,50",checked,50 - Stenläggning,,0.01,recA
Manuell ytjustering,tim,650,,,,,recB
,st,100,checked,,,,recC
Utmättning,,2500,TRUE,,,,
"""


def test_csv_export(tmp_path):
    path = tmp_path / "catalog.csv"
    path.write_text(CSV, encoding="utf-8")
    comps = catalog_csv.parse(path)
    assert [c.name for c in comps] == ["Asfaltering", "Utmättning"]
    asphalt, measurement = comps
    assert asphalt.id == "recA"
    assert asphalt.unit_price == Decimal("420.5")
    assert asphalt.labor_max == Decimal("0.01")
    assert asphalt.stage == "50 - Stenläggning"
    assert measurement.unit == ""
    assert measurement.labor_max is None
    assert measurement.id == "row4"


def test_csv_keeps_inactive_when_asked(tmp_path):
    path = tmp_path / "catalog.csv"
    path.write_text(CSV, encoding="utf-8")
    names = [c.name for c in catalog_csv.parse(path, only_active=False)]
    assert "Manuell ytjustering" in names


def test_csv_none_path():
    assert catalog_csv.parse(None) == []


def test_sample_yaml_catalog_is_complete():
    comps = load_catalog(ROOT / "configs" / "catalog.yaml")
    assert len(comps) == 25
    assert all(c.active_in_calculator for c in comps)
    assert BKSCalculator(comps).missing_names() == []


def test_load_catalog_dispatches_on_suffix(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(CSV, encoding="utf-8")
    assert len(load_catalog(path)) == 2


def test_missing_catalog_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "missing.yaml")


def test_csv_unreadable_price_is_logged(tmp_path, caplog):
    path = tmp_path / "catalog.csv"
    path.write_text(
        "Component Name,Unit,Unit Price,Used in Automatic Calculator\n"
        'Asfaltering,m²,"1,234.50",checked\n'
        "Utmättning,st,,checked\n",
        encoding="utf-8",
    )
    with caplog.at_level("WARNING", logger="bks_quote.importers.catalog_csv"):
        asphalt, measurement = catalog_csv.parse(path)
    assert asphalt.unit_price == 0
    assert measurement.unit_price == 0
    warnings = [r.getMessage() for r in caplog.records if r.levelname == "WARNING"]
    assert warnings == ["Row 1: unreadable Unit Price '1,234.50', using 0"]
