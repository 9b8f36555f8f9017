from __future__ import annotations

import json

from typer.testing import CliRunner

from bks_quote.cli import app
from conftest import ROOT

runner = CliRunner()
CONFIGS = str(ROOT / "configs")
CATALOG = str(ROOT / "configs" / "catalog.yaml")


def test_price_json():
    result = runner.invoke(
        app,
        ["price", str(ROOT / "samples" / "uppfart_marksten.yaml"), "--catalog", CATALOG, "--configs", CONFIGS, "--json"],
    )
    assert result.exit_code == 0, result.output
    quote = json.loads(result.output)
    assert len(quote["items"]) == 13
    assert quote["missing_components"] == []
    assert quote["total_with_tax"] == (quote["subtotal"] * 125 + 50) // 100
    assert quote["id"].startswith("BKS-")


def test_price_text():
    result = runner.invoke(
        app,
        ["price", str(ROOT / "samples" / "gangyta_asfalt.yaml"), "--catalog", CATALOG, "--configs", CONFIGS],
    )
    assert result.exit_code == 0, result.output
    assert "Maskinflytt och etablering" in result.output
    assert "Asfaltering" in result.output
    assert "Summa inkl. moms" in result.output


def test_price_rejects_out_of_range_area(tmp_path):
    answers = tmp_path / "answers.yaml"
    answers.write_text(
        "material: Asfalt\narea: 5\npreparation: Området kräver lätt nivellering\n"
        "usage: Gångyta\ngrout: Flexibel hårdfog\ncurb_needed: Nej\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["price", str(answers), "--catalog", CATALOG, "--configs", CONFIGS])
    assert result.exit_code == 2
    assert "Minsta område" in result.output


def test_price_rejects_unknown_material(tmp_path):
    answers = tmp_path / "answers.json"
    answers.write_text(
        json.dumps(
            {
                "material": "Trä",
                "area": 40,
                "preparation": "Området kräver lätt nivellering",
                "usage": "Gångyta",
                "grout": "Flexibel hårdfog",
            }
        ),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["price", str(answers), "--catalog", CATALOG, "--configs", CONFIGS])
    assert result.exit_code == 2
    assert "Invalid answers" in result.output


def test_price_strict_fails_on_incomplete_catalog(tmp_path):
    catalog = tmp_path / "catalog.yaml"
    catalog.write_text("components:\n  - {id: a, name: Asfaltering, unit: m², unit_price: 400}\n", encoding="utf-8")
    result = runner.invoke(
        app,
        ["price", str(ROOT / "samples" / "gangyta_asfalt.yaml"), "--catalog", str(catalog), "--configs", CONFIGS, "--strict"],
    )
    assert result.exit_code == 3
    assert "Saknas i prislistan" in result.output


def test_check_catalog_ok():
    result = runner.invoke(app, ["check-catalog", CATALOG, "--configs", CONFIGS])
    assert result.exit_code == 0
    assert result.output.startswith("OK")


def test_check_catalog_reports_missing(tmp_path):
    catalog = tmp_path / "catalog.yaml"
    catalog.write_text("components:\n  - {id: a, name: Utmättning, unit: st, unit_price: 2500}\n", encoding="utf-8")
    result = runner.invoke(app, ["check-catalog", str(catalog), "--configs", CONFIGS])
    assert result.exit_code == 2
    assert "Asfaltering" in result.output


def test_names_lists_lookup_names():
    result = runner.invoke(app, ["names", "--configs", CONFIGS])
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "Flytt av maskiner och verktyg"


def test_estimate_rows_in_batches():
    result = runner.invoke(
        app,
        [
            "estimate-rows",
            str(ROOT / "samples" / "uppfart_marksten.yaml"),
            "--estimate-id",
            "recEST",
            "--catalog",
            CATALOG,
            "--configs",
            CONFIGS,
        ],
    )
    assert result.exit_code == 0, result.output
    requests = json.loads(result.output)
    assert [len(r["records"]) for r in requests] == [10, 3]
    first = requests[0]["records"][0]["fields"]
    assert first["Estimate"] == ["recEST"]
    assert first["Arbetsmoment"] == "10 - Maskinflytt och etablering"
    assert first["Quantity"] == 2.0


def test_estimate_rows_requires_estimate_id():
    result = runner.invoke(app, ["estimate-rows", str(ROOT / "samples" / "uppfart_marksten.yaml")])
    assert result.exit_code == 2
