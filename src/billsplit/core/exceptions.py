"""Errors raised by the bill lifecycle layer"""


class BillSplitError(Exception):
    """Base class for bill errors."""


class EntityNotFoundError(BillSplitError):
    """Raised when an id names no person, dish or tax in the bill."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} '{entity_id}' not found")


class DanglingReferenceError(BillSplitError):
    """Raised when a dish is shared by a person that is no longer in the bill."""

    def __init__(self, dish_id: str, person_ids: list):
        self.dish_id = dish_id
        self.person_ids = person_ids
        super().__init__(
            f"Dish '{dish_id}' references unknown people: {', '.join(person_ids)}"
        )
