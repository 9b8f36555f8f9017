from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from .calculator import BKSCalculator
from .importers.catalog import load_catalog
from .models import FormAnswers, PolicyConfig, Quote
from .names import ComponentNames, load_component_names
from .output.display import (
    category_display_name,
    format_currency,
    format_quantity,
    group_items_by_category,
    work_timeline,
)
from .output.records import BATCH_SIZE, batched, estimate_item_rows
from .validation import AnswersError, check_answers

app = typer.Typer(help="BKS paving quote calculator")


def _load_yaml(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_policy(cfg_dir: Path) -> PolicyConfig:
    path = cfg_dir / "policy.yaml"
    return PolicyConfig(**_load_yaml(path)) if path.exists() else PolicyConfig()


def _load_names(cfg_dir: Path) -> ComponentNames:
    return load_component_names(cfg_dir / "components.yaml")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _render_text(quote: Quote, policy: PolicyConfig) -> str:
    sym = policy.currency_symbol
    lines = [f"Offert {quote.id} (giltig till {quote.valid_until.isoformat()})", ""]
    for category, items in group_items_by_category(quote.items).items():
        lines.append(category_display_name(category))
        for it in items:
            lines.append(
                f"  {it.name:<60} {format_quantity(it.quantity, it.unit):>12} "
                f"{format_currency(it.unit_price, sym):>12} {format_currency(it.line_total, sym):>14}"
            )
    lines += [
        "",
        f"Summa exkl. moms: {format_currency(quote.subtotal, sym)}",
        f"Moms ({policy.vat_percent}%): {format_currency(quote.vat_amount, sym)}",
        f"Summa inkl. moms: {format_currency(quote.total_with_tax, sym)}",
        f"Beräknad arbetstid: {work_timeline(quote.estimated_days)}",
    ]
    if quote.missing_components:
        lines.append("")
        lines.append("Saknas i prislistan: " + ", ".join(quote.missing_components))
    return "\n".join(lines)


def _read_answers(path: Path) -> FormAnswers:
    try:
        return check_answers(FormAnswers(**_load_yaml(path)))
    except ValidationError as e:
        typer.echo(f"Invalid answers:\n{e}")
        raise typer.Exit(code=2)
    except AnswersError as e:
        for msg in e.errors:
            typer.echo(f"Invalid answers: {msg}")
        raise typer.Exit(code=2)


@app.command()
def price(
    answers: str = typer.Argument(..., help="Form answers file (YAML or JSON)"),
    catalog: str = typer.Option("configs/catalog.yaml", help="Pricing catalog export (.yaml or .csv)"),
    configs: str = typer.Option("configs", help="Config folder (policy.yaml, components.yaml)"),
    as_json: bool = typer.Option(False, "--json", help="Print the quote as JSON"),
    strict: bool = typer.Option(False, help="Fail when a referenced component is missing from the catalog"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Validate form answers and price them against the catalog."""
    _setup_logging(verbose)
    cfg_dir = Path(configs)
    form = _read_answers(Path(answers))

    policy = _load_policy(cfg_dir)
    calc = BKSCalculator(load_catalog(Path(catalog)), _load_names(cfg_dir), policy)
    quote = calc.calculate_quote(form)

    if as_json:
        typer.echo(json.dumps(quote.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        typer.echo(_render_text(quote, policy))

    if strict and not quote.is_complete:
        raise typer.Exit(code=3)


@app.command("estimate-rows")
def estimate_rows(
    answers: str = typer.Argument(..., help="Form answers file (YAML or JSON)"),
    estimate_id: str = typer.Option(..., "--estimate-id", help="Record id of the estimate the items belong to"),
    catalog: str = typer.Option("configs/catalog.yaml", help="Pricing catalog export (.yaml or .csv)"),
    configs: str = typer.Option("configs", help="Config folder (policy.yaml, components.yaml)"),
    batch_size: int = typer.Option(BATCH_SIZE, min=1, help="Records per create request"),
):
    """Print the quote's estimate-item records as JSON create requests."""
    _setup_logging(False)
    cfg_dir = Path(configs)
    form = _read_answers(Path(answers))
    calc = BKSCalculator(load_catalog(Path(catalog)), _load_names(cfg_dir), _load_policy(cfg_dir))
    quote = calc.calculate_quote(form)
    requests = [{"records": batch} for batch in batched(estimate_item_rows(quote, estimate_id), batch_size)]
    typer.echo(json.dumps(requests, indent=2, ensure_ascii=False))


@app.command("check-catalog")
def check_catalog(
    catalog: str = typer.Argument(..., help="Pricing catalog export (.yaml or .csv)"),
    configs: str = typer.Option("configs", help="Config folder (components.yaml)"),
):
    """Report component names the calculator uses that the catalog lacks."""
    calc = BKSCalculator(load_catalog(Path(catalog)), _load_names(Path(configs)))
    missing = calc.missing_names()
    if missing:
        typer.echo("Missing components:")
        for name in missing:
            typer.echo(f"  - {name}")
        raise typer.Exit(code=2)
    typer.echo(f"OK: all {len(calc.names.referenced_names())} components present.")


@app.command()
def names(configs: str = typer.Option("configs", help="Config folder (components.yaml)")):
    """List the catalog names the calculator looks up, in evaluation order."""
    for name in _load_names(Path(configs)).referenced_names():
        typer.echo(name)


if __name__ == "__main__":  # pragma: no cover
    app()
