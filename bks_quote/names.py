from __future__ import annotations

from pathlib import Path
from typing import Dict, List, get_args

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import CurbMaterial, Grout, Material


class FixedNames(BaseModel):
    machine_move: str = "Flytt av maskiner och verktyg"
    measurement: str = "Utmättning"
    transport: str = "Fraktkostnader"


class PrepNames(BaseModel):
    excavation: str
    sub_base: str
    compaction: str


def _traffic_prep() -> PrepNames:
    return PrepNames(
        excavation="Schakt 400mm djup",
        sub_base="Anläggning och justering av bärlager vid trafikyta",
        compaction="Packning av bärlager vid uppfart",
    )


def _pedestrian_prep() -> PrepNames:
    return PrepNames(
        excavation="Borttagning av markvegetation och jordmån inom område för stenläggning ≤ 100mm",
        sub_base="Anläggning och justering av bärlager vid gångar",
        compaction="Packning av bärlager vid gångar",
    )


DEFAULT_MATERIAL_MAP: Dict[str, str] = {
    "Asfalt": "Asfaltering",
    "Marksten": "Beläggning av marksten",
    "Betongplattor": "Beläggning av betongplattor",
    "Smågatsten": "Beläggning av smågatsten",
    "Storgatsten": "Beläggning av storgatsten",
    "Skiffer": "Beläggning av skiffer",
    "Granithällar": "Beläggning granithällar",
}

DEFAULT_GROUT_MAP: Dict[str, str] = {
    "Flexibel hårdfog": "Fogning med flexibel hårdfog",
    "Ögreshämande fogsand": "Fogning med ogreshämande fogsand",
}

DEFAULT_CURB_MAP: Dict[str, str] = {
    "Betongkantsten": "Kantstöd betong - mõtstöd betong - rak sten",
    "Granitkantsten": "Kantstöd granit - mõtstöd betong - rak sten",
}


class ComponentNames(BaseModel):
    """Catalog names the decision tree asks for.

    Names are matched against the pricing catalog by exact string equality,
    so they must be spelled exactly as in the catalog export.
    """

    model_config = ConfigDict(frozen=True)

    fixed: FixedNames = Field(default_factory=FixedNames)
    curb: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CURB_MAP))
    light_leveling: str = "Schakt för lätt nivellering"
    traffic_prep: PrepNames = Field(default_factory=_traffic_prep)
    pedestrian_prep: PrepNames = Field(default_factory=_pedestrian_prep)
    waste_removal: str = "Bortforsling av schaktmassor"
    stone_fill: str = "Fyllning och justering av stenflis"
    stone_compaction: str = "Packning av sten"
    material: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_MATERIAL_MAP))
    grout: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_GROUT_MAP))
    cleanup: str = "Städning och bortforsling av byggavfall"

    @model_validator(mode="after")
    def _maps_cover_enums(self) -> "ComponentNames":
        for label, mapping, choices in (
            ("material", self.material, get_args(Material)),
            ("grout", self.grout, get_args(Grout)),
            ("curb", self.curb, get_args(CurbMaterial)),
        ):
            missing = [c for c in choices if not mapping.get(c)]
            if missing:
                raise ValueError(f"{label} map is missing entries for: {', '.join(missing)}")
            extra = sorted(set(mapping) - set(choices))
            if extra:
                raise ValueError(f"{label} map has unknown keys: {', '.join(extra)}")
        return self

    def referenced_names(self) -> List[str]:
        """Every catalog name the tree can ask for, in evaluation order, no duplicates."""
        names = [
            self.fixed.machine_move,
            self.fixed.measurement,
            self.fixed.transport,
            *self.curb.values(),
            self.light_leveling,
            self.traffic_prep.excavation,
            self.traffic_prep.sub_base,
            self.traffic_prep.compaction,
            self.pedestrian_prep.excavation,
            self.pedestrian_prep.sub_base,
            self.pedestrian_prep.compaction,
            self.waste_removal,
            self.stone_fill,
            *self.material.values(),
            self.stone_compaction,
            *self.grout.values(),
            self.cleanup,
        ]
        return list(dict.fromkeys(names))


def _merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_component_names(path: Path | None) -> ComponentNames:
    """Load lookup names from YAML, merged over the defaults.

    A missing file yields the defaults. Incomplete maps fail here, not at
    calculation time.
    """
    if path is None or not path.exists():
        return ComponentNames()
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return ComponentNames(**_merge(ComponentNames().model_dump(), data))
