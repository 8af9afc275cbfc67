"""
Add, edit and delete operations on a bill

Every operation takes the bill it works on and mutates it in place. Names and
amounts are expected to be validated by the caller (see form_input).
"""
from typing import Dict, TypeVar
from loguru import logger

from ..core.exceptions import DanglingReferenceError, EntityNotFoundError
from ..models.entities import Bill, BillSummary, Dish, Person, Tax, TaxKind
from .bill_splitter import bill_splitter_service

T = TypeVar("T")


def _get(collection: Dict[str, T], entity_id: str, kind: str) -> T:
    try:
        return collection[entity_id]
    except KeyError:
        raise EntityNotFoundError(kind, entity_id) from None


def get_person(bill: Bill, person_id: str) -> Person:
    return _get(bill.people, person_id, "Person")


def get_dish(bill: Bill, dish_id: str) -> Dish:
    return _get(bill.dishes, dish_id, "Dish")


def get_tax(bill: Bill, tax_id: str) -> Tax:
    return _get(bill.taxes, tax_id, "Tax")


def check_references(bill: Bill) -> None:
    """Raise DanglingReferenceError if a dish is shared by someone not in the bill."""
    for dish in bill.dishes.values():
        missing = [person_id for person_id in dish.shared_by if person_id not in bill.people]
        if missing:
            raise DanglingReferenceError(dish.id, missing)


# --- People ---

def add_person(bill: Bill, name: str) -> Person:
    person = Person(name=name)
    bill.people[person.id] = person
    logger.info(f"Added person '{name}' ({person.id})")
    return person


def rename_person(bill: Bill, person_id: str, name: str) -> Person:
    person = _get(bill.people, person_id, "Person")
    person.name = name
    return person


def delete_person(bill: Bill, person_id: str) -> Person:
    """Remove a person and take them off every dish they shared."""
    person = _get(bill.people, person_id, "Person")
    del bill.people[person_id]
    for dish in bill.dishes.values():
        dish.shared_by = [pid for pid in dish.shared_by if pid != person_id]
    check_references(bill)
    logger.info(f"Deleted person '{person.name}' ({person_id})")
    return person


# --- Dishes ---

def add_dish(bill: Bill, name: str, price: float) -> Dish:
    dish = Dish(name=name, price=price)
    bill.dishes[dish.id] = dish
    logger.info(f"Added dish '{name}' at {price:.2f} ({dish.id})")
    return dish


def rename_dish(bill: Bill, dish_id: str, name: str) -> Dish:
    dish = _get(bill.dishes, dish_id, "Dish")
    dish.name = name
    return dish


def reprice_dish(bill: Bill, dish_id: str, price: float) -> Dish:
    dish = _get(bill.dishes, dish_id, "Dish")
    dish.price = price
    return dish


def toggle_dish_person(bill: Bill, dish_id: str, person_id: str) -> Dish:
    """Add the person to the dish's sharers, or remove them if already there."""
    dish = _get(bill.dishes, dish_id, "Dish")
    _get(bill.people, person_id, "Person")
    if person_id in dish.shared_by:
        dish.shared_by = [pid for pid in dish.shared_by if pid != person_id]
    else:
        dish.shared_by = dish.shared_by + [person_id]
    check_references(bill)
    return dish


def delete_dish(bill: Bill, dish_id: str) -> Dish:
    dish = _get(bill.dishes, dish_id, "Dish")
    del bill.dishes[dish_id]
    logger.info(f"Deleted dish '{dish.name}' ({dish_id})")
    return dish


# --- Taxes ---

def add_tax(bill: Bill, name: str, kind: TaxKind, value: float) -> Tax:
    tax = Tax(name=name, kind=kind, value=value)
    bill.taxes[tax.id] = tax
    logger.info(f"Added {tax.kind.value} tax '{name}' of {value} ({tax.id})")
    return tax


def rename_tax(bill: Bill, tax_id: str, name: str) -> Tax:
    tax = _get(bill.taxes, tax_id, "Tax")
    tax.name = name
    return tax


def set_tax_kind(bill: Bill, tax_id: str, kind: TaxKind) -> Tax:
    tax = _get(bill.taxes, tax_id, "Tax")
    tax.kind = TaxKind(kind)
    return tax


def set_tax_value(bill: Bill, tax_id: str, value: float) -> Tax:
    tax = _get(bill.taxes, tax_id, "Tax")
    tax.value = value
    return tax


def delete_tax(bill: Bill, tax_id: str) -> Tax:
    tax = _get(bill.taxes, tax_id, "Tax")
    del bill.taxes[tax_id]
    logger.info(f"Deleted tax '{tax.name}' ({tax_id})")
    return tax


# --- Whole bill ---

def reset_bill(bill: Bill) -> None:
    bill.people.clear()
    bill.dishes.clear()
    bill.taxes.clear()
    logger.info("Bill reset")


def summarize(bill: Bill) -> BillSummary:
    return bill_splitter_service.summarize_bill(
        list(bill.people.values()),
        list(bill.dishes.values()),
        list(bill.taxes.values()),
    )
