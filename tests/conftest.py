from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from bks_quote.models import FormAnswers, PricingComponent
from bks_quote.names import ComponentNames

ROOT = Path(__file__).resolve().parents[1]


def build_catalog(price=100, labor_max=None, unit="", skip=()):
    """One component per name the tree can reference, all at the same price."""
    return [
        PricingComponent(
            id=f"rec{i:03d}",
            name=name,
            unit=unit,
            unit_price=Decimal(str(price)),
            labor_max=None if labor_max is None else Decimal(str(labor_max)),
        )
        for i, name in enumerate(ComponentNames().referenced_names())
        if name not in skip
    ]


@pytest.fixture
def names() -> ComponentNames:
    return ComponentNames()


@pytest.fixture
def catalog():
    return build_catalog()


@pytest.fixture
def asphalt_walkway() -> FormAnswers:
    return FormAnswers(
        material="Asfalt",
        area=100,
        preparation="Området är utgrävt och klart för stenläggning",
        usage="Gångyta",
        grout="Ögreshämande fogsand",
        curb_needed="Nej",
    )


@pytest.fixture
def marksten_driveway() -> FormAnswers:
    return FormAnswers(
        material="Marksten",
        area=50,
        preparation="Området har inte förberetts än",
        usage="Trafikyta",
        grout="Flexibel hårdfog",
        curb_needed="Ja",
        curb_length=20,
        curb_material="Granitkantsten",
    )
