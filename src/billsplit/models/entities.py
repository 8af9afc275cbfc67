from enum import Enum
from typing import Dict, List
from uuid import uuid4
from pydantic import BaseModel, Field


def new_id() -> str:
    return str(uuid4())


class TaxKind(str, Enum):
    """How a tax value is read."""
    PERCENTAGE = "percentage"  # percent of the subtotal
    FIXED = "fixed"  # absolute amount


class Person(BaseModel):
    """Someone taking part in the bill."""
    id: str = Field(default_factory=new_id)
    name: str


class Dish(BaseModel):
    """Priced dish shared by a subset of people."""
    id: str = Field(default_factory=new_id)
    name: str
    price: float
    shared_by: List[str] = Field(default_factory=list)  # person ids, no duplicates


class Tax(BaseModel):
    """Tax or surcharge applied to the whole bill."""
    id: str = Field(default_factory=new_id)
    name: str
    kind: TaxKind = TaxKind.PERCENTAGE
    value: float


class Bill(BaseModel):
    """People, dishes and taxes of one bill, keyed by id in insertion order."""
    people: Dict[str, Person] = Field(default_factory=dict)
    dishes: Dict[str, Dish] = Field(default_factory=dict)
    taxes: Dict[str, Tax] = Field(default_factory=dict)


class TaxBreakdown(BaseModel):
    """Contribution of every tax and their sum."""
    per_tax: Dict[str, float]  # tax id -> amount
    total: float


class PersonShare(BaseModel):
    name: str
    amount: float


class BillSummary(BaseModel):
    """Derived totals and the per-person split of a bill."""
    subtotal: float
    total_tax: float
    grand_total: float
    per_tax: Dict[str, float]
    split: Dict[str, PersonShare]  # person id -> share
    unassigned_amount: float = 0.0  # part of the grand total charged to nobody
