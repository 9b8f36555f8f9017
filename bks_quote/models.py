from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


Material = Literal[
    "Asfalt",
    "Marksten",
    "Betongplattor",
    "Smågatsten",
    "Storgatsten",
    "Granithällar",
    "Skiffer",
]
Preparation = Literal[
    "Området har inte förberetts än",
    "Området kräver lätt nivellering",
    "Området är utgrävt och klart för stenläggning",
]
Usage = Literal["Trafikyta", "Gångyta"]
Grout = Literal["Ögreshämande fogsand", "Flexibel hårdfog"]
YesNo = Literal["Ja", "Nej"]
CurbMaterial = Literal["Betongkantsten", "Granitkantsten"]
MachineAccess = Literal[
    "Plats för att köra in med 1,5 ton maskin ca 1 m bredd",
    "Plats för att köra in med 3 ton maskin ca 1,5 m bredd",
    "Plats för att köra in med 6 ton maskin ca 2 m bredd",
]

NOT_PREPARED: Preparation = "Området har inte förberetts än"
LIGHT_LEVELING: Preparation = "Området kräver lätt nivellering"
READY: Preparation = "Området är utgrävt och klart för stenläggning"
TRAFFIC: Usage = "Trafikyta"
PEDESTRIAN: Usage = "Gångyta"


class Category(str, Enum):
    MACHINE_MOBILIZATION = "Maskinflytt"
    EXCAVATION = "Schakt"
    SUB_BASE = "Underarbete"
    PAVING = "Stenläggning"
    JOINTING = "Fogning"
    WASTE_REMOVAL = "Bortforsling"


class PricingComponent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    unit: str = ""
    unit_price: Decimal = Field(default=Decimal(0), ge=0)
    labor_max: Optional[Decimal] = None
    labor_rate: Optional[Decimal] = None
    stage: Optional[str] = None
    active_in_calculator: bool = True


class FormAnswers(BaseModel):
    model_config = ConfigDict(frozen=True)

    material: Material
    area: Decimal = Field(ge=0)  # m²
    preparation: Preparation
    usage: Usage
    grout: Grout
    curb_needed: YesNo = "Nej"
    curb_length: Optional[Decimal] = Field(default=None, ge=0)  # lpm
    curb_material: Optional[CurbMaterial] = None

    # Site access, collected by the form and stored with the lead
    machine_access: Optional[MachineAccess] = None
    crane_access: Optional[YesNo] = None

    @property
    def wants_curb(self) -> bool:
        return self.curb_needed == "Ja"


class LineRequest(BaseModel):
    """A line the decision tree asks for, before catalog lookup."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: Category
    quantity: Decimal
    unit: str


class QuoteItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: Category
    quantity: Decimal
    unit: str
    unit_price: Decimal
    line_total: Decimal
    labor_max: Optional[Decimal] = None
    component_id: Optional[str] = None


class PricedLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["priced"] = "priced"
    item: QuoteItem


class UnpricedLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["unpriced"] = "unpriced"
    request: LineRequest

    @property
    def name(self) -> str:
        return self.request.name


LineResult = Union[PricedLine, UnpricedLine]


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    items: List[QuoteItem] = Field(default_factory=list)
    category_summary: Dict[Category, Decimal] = Field(default_factory=dict)
    subtotal: int = 0
    total_with_tax: int = 0
    estimated_days: int = 1
    valid_until: date
    missing_components: List[str] = Field(default_factory=list)

    @property
    def vat_amount(self) -> int:
        return self.total_with_tax - self.subtotal

    @property
    def is_complete(self) -> bool:
        return not self.missing_components


class PolicyConfig(BaseModel):
    currency: str = "SEK"
    currency_symbol: str = "kr"
    vat_percent: Decimal = Decimal(25)
    validity_days: int = 30
    quote_id_prefix: str = "BKS"
    min_days: int = 1
    max_days: int = 10
    fallback_m2_per_day: Decimal = Decimal(50)
