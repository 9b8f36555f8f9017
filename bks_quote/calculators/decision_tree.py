from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterator, List, Tuple

from ..models import (
    LIGHT_LEVELING,
    NOT_PREPARED,
    PEDESTRIAN,
    TRAFFIC,
    Category,
    FormAnswers,
    LineRequest,
)
from ..names import ComponentNames
from ..utils import round_half_up


M2 = "m²"
M3 = "m³"
LPM = "lpm"
PCS = "st"

# Excavation depth in metres per usage, and the share of excavated volume removed
EXCAVATION_DEPTH_M = {TRAFFIC: Decimal("0.4"), PEDESTRIAN: Decimal("0.2")}
WASTE_FACTOR = Decimal("0.1")

STONE_BLOCK_MATERIALS = ("Marksten", "Betongplattor", "Smågatsten", "Storgatsten")
SLAB_MATERIALS = ("Skiffer", "Granithällar")

LineGenerator = Callable[[FormAnswers, ComponentNames], Iterator[LineRequest]]
Predicate = Callable[[FormAnswers], bool]


@dataclass(frozen=True)
class Branch:
    name: str
    applies: Predicate
    lines: LineGenerator


def waste_volume_m3(area: Decimal, usage: str) -> int:
    """Excavated volume times the waste factor, at least 1 m³."""
    return max(1, round_half_up(area * EXCAVATION_DEPTH_M[usage] * WASTE_FACTOR))


def fixed_lines(answers: FormAnswers, names: ComponentNames) -> Iterator[LineRequest]:
    cat = Category.MACHINE_MOBILIZATION
    yield LineRequest(name=names.fixed.machine_move, category=cat, quantity=Decimal(2), unit=PCS)
    yield LineRequest(name=names.fixed.measurement, category=cat, quantity=Decimal(1), unit=PCS)
    yield LineRequest(name=names.fixed.transport, category=cat, quantity=Decimal(1), unit=PCS)


def has_curb(answers: FormAnswers) -> bool:
    # Incomplete curb answers (including a zero length) skip the branch instead of failing
    return answers.wants_curb and bool(answers.curb_length) and answers.curb_material is not None


def curb_lines(answers: FormAnswers, names: ComponentNames) -> Iterator[LineRequest]:
    yield LineRequest(
        name=names.curb[answers.curb_material],
        category=Category.PAVING,
        quantity=answers.curb_length,
        unit=LPM,
    )


def preparation_lines(answers: FormAnswers, names: ComponentNames) -> Iterator[LineRequest]:
    area = answers.area
    if answers.preparation == LIGHT_LEVELING:
        yield LineRequest(name=names.light_leveling, category=Category.EXCAVATION, quantity=area, unit=M2)
    elif answers.preparation == NOT_PREPARED:
        prep = names.traffic_prep if answers.usage == TRAFFIC else names.pedestrian_prep
        yield LineRequest(name=prep.excavation, category=Category.EXCAVATION, quantity=area, unit=M2)
        yield LineRequest(name=prep.sub_base, category=Category.SUB_BASE, quantity=area, unit=M2)
        yield LineRequest(name=prep.compaction, category=Category.SUB_BASE, quantity=area, unit=M2)
        yield LineRequest(
            name=names.waste_removal,
            category=Category.WASTE_REMOVAL,
            quantity=Decimal(waste_volume_m3(area, answers.usage)),
            unit=M3,
        )


def material_lines(answers: FormAnswers, names: ComponentNames) -> Iterator[LineRequest]:
    area = answers.area
    installation = names.material[answers.material]
    if answers.material == "Asfalt":
        yield LineRequest(name=installation, category=Category.PAVING, quantity=area, unit=M2)
    elif answers.material in STONE_BLOCK_MATERIALS:
        yield LineRequest(name=names.stone_fill, category=Category.SUB_BASE, quantity=area, unit=M2)
        yield LineRequest(name=installation, category=Category.PAVING, quantity=area, unit=M2)
        yield LineRequest(name=names.stone_compaction, category=Category.PAVING, quantity=area, unit=M2)
    elif answers.material in SLAB_MATERIALS:
        # Slabs are laid without a separate compaction pass
        yield LineRequest(name=names.stone_fill, category=Category.SUB_BASE, quantity=area, unit=M2)
        yield LineRequest(name=installation, category=Category.PAVING, quantity=area, unit=M2)


def grouting_lines(answers: FormAnswers, names: ComponentNames) -> Iterator[LineRequest]:
    yield LineRequest(name=names.grout[answers.grout], category=Category.JOINTING, quantity=answers.area, unit=M2)


def cleanup_lines(answers: FormAnswers, names: ComponentNames) -> Iterator[LineRequest]:
    yield LineRequest(name=names.cleanup, category=Category.WASTE_REMOVAL, quantity=Decimal(1), unit=PCS)


def _always(answers: FormAnswers) -> bool:
    return True


DECISION_TREE: Tuple[Branch, ...] = (
    Branch("fixed", _always, fixed_lines),
    Branch("curb", has_curb, curb_lines),
    Branch("preparation", _always, preparation_lines),
    Branch("material", _always, material_lines),
    Branch("grouting", _always, grouting_lines),
    Branch("cleanup", _always, cleanup_lines),
)


def requested_lines(answers: FormAnswers, names: ComponentNames) -> List[LineRequest]:
    """Walk the tree in order and collect every line it asks for."""
    out: List[LineRequest] = []
    for branch in DECISION_TREE:
        if branch.applies(answers):
            out.extend(branch.lines(answers, names))
    return out
