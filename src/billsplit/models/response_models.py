from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, List, Optional

from .entities import BillSummary, Dish, Person, Tax, TaxKind
from ..services.form_input import clean_name, parse_amount, parse_edited_amount


def _require_name(value: Any) -> str:
    name = clean_name(value)
    if name is None:
        raise ValueError("Name must not be empty")
    return name


def _require_amount(value: Any) -> float:
    amount = parse_amount(value)
    if amount is None:
        raise ValueError("Amount must be a number greater than or equal to 0")
    return amount


def _require_edited_amount(value: Any) -> float:
    amount = parse_edited_amount(value)
    if amount is None:
        raise ValueError("Amount must be a number greater than or equal to 0")
    return amount


class AddPersonRequest(BaseModel):
    name: str

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        return _require_name(value)


class EditPersonRequest(AddPersonRequest):
    pass


class AddDishRequest(BaseModel):
    name: str
    price: float

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        return _require_name(value)

    @field_validator("price", mode="before")
    @classmethod
    def check_price(cls, value):
        return _require_amount(value)


class EditDishRequest(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        return None if value is None else _require_name(value)

    @field_validator("price", mode="before")
    @classmethod
    def check_price(cls, value):
        return None if value is None else _require_edited_amount(value)


class AddTaxRequest(BaseModel):
    name: str
    kind: TaxKind = TaxKind.PERCENTAGE
    value: float

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        return _require_name(value)

    @field_validator("value", mode="before")
    @classmethod
    def check_value(cls, value):
        return _require_amount(value)


class EditTaxRequest(BaseModel):
    name: Optional[str] = None
    kind: Optional[TaxKind] = None
    value: Optional[float] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        return None if value is None else _require_name(value)

    @field_validator("value", mode="before")
    @classmethod
    def check_value(cls, value):
        return None if value is None else _require_edited_amount(value)


class BillState(BaseModel):
    people: List[Person] = Field(default_factory=list)
    dishes: List[Dish] = Field(default_factory=list)
    taxes: List[Tax] = Field(default_factory=list)


class BillResponse(BaseModel):
    success: bool
    message: str
    bill: BillState
    summary: BillSummary


class CalculateSplitRequest(BillState):
    """Complete bill sent in one go, validated like the add forms."""

    @field_validator("people")
    @classmethod
    def check_people(cls, people: List[Person]) -> List[Person]:
        for person in people:
            person.name = _require_name(person.name)
        return people

    @field_validator("dishes")
    @classmethod
    def check_dishes(cls, dishes: List[Dish]) -> List[Dish]:
        for dish in dishes:
            dish.name = _require_name(dish.name)
            dish.price = _require_amount(dish.price)
        return dishes

    @field_validator("taxes")
    @classmethod
    def check_taxes(cls, taxes: List[Tax]) -> List[Tax]:
        for tax in taxes:
            tax.name = _require_name(tax.name)
            tax.value = _require_amount(tax.value)
        return taxes

    @model_validator(mode="after")
    def check_ids(self):
        for label, entities in (("person", self.people), ("dish", self.dishes), ("tax", self.taxes)):
            ids = [entity.id for entity in entities]
            if len(ids) != len(set(ids)):
                raise ValueError(f"Duplicate {label} ids")

        person_ids = {person.id for person in self.people}
        for dish in self.dishes:
            unknown = [pid for pid in dish.shared_by if pid not in person_ids]
            if unknown:
                raise ValueError(f"Dish '{dish.name}' is shared by unknown people: {', '.join(unknown)}")
            if len(set(dish.shared_by)) != len(dish.shared_by):
                raise ValueError(f"Dish '{dish.name}' lists the same person twice")
        return self


class CalculateSplitResponse(BaseModel):
    success: bool
    message: str
    summary: Optional[BillSummary] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    message: str
    version: str
