from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from ....core.config import settings
from ....core.exceptions import DanglingReferenceError, EntityNotFoundError
from ....models.entities import Bill
from ....models.response_models import (
    AddDishRequest,
    AddPersonRequest,
    AddTaxRequest,
    BillResponse,
    BillState,
    CalculateSplitRequest,
    CalculateSplitResponse,
    EditDishRequest,
    EditPersonRequest,
    EditTaxRequest,
    HealthResponse,
)
from ....services import ledger
from ....services.bill_splitter import bill_splitter_service

router = APIRouter()

# The bill edited through the API; one per process
current_bill = Bill()


def get_bill() -> Bill:
    return current_bill


def _bill_response(bill: Bill, message: str) -> BillResponse:
    return BillResponse(
        success=True,
        message=message,
        bill=BillState(
            people=list(bill.people.values()),
            dishes=list(bill.dishes.values()),
            taxes=list(bill.taxes.values()),
        ),
        summary=ledger.summarize(bill),
    )


def _apply(operation, *args):
    """Run a ledger operation, turning bill errors into HTTP errors"""
    try:
        return operation(*args)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DanglingReferenceError as e:
        logger.error(f"Bill references are inconsistent: {e}")
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/", response_model=BillResponse)
async def get_current_bill(bill: Bill = Depends(get_bill)):
    """Current people, dishes, taxes and split"""
    return _bill_response(bill, "Bill loaded")


@router.delete("/", response_model=BillResponse)
async def reset_current_bill(bill: Bill = Depends(get_bill)):
    ledger.reset_bill(bill)
    return _bill_response(bill, "Bill reset")


# --- People ---

@router.post("/people", response_model=BillResponse)
async def add_person(request: AddPersonRequest, bill: Bill = Depends(get_bill)):
    person = ledger.add_person(bill, request.name)
    return _bill_response(bill, f"Added {person.name}")


@router.patch("/people/{person_id}", response_model=BillResponse)
async def edit_person(person_id: str, request: EditPersonRequest, bill: Bill = Depends(get_bill)):
    person = _apply(ledger.rename_person, bill, person_id, request.name)
    return _bill_response(bill, f"Renamed person to {person.name}")


@router.delete("/people/{person_id}", response_model=BillResponse)
async def delete_person(person_id: str, bill: Bill = Depends(get_bill)):
    person = _apply(ledger.delete_person, bill, person_id)
    return _bill_response(bill, f"Deleted {person.name}")


# --- Dishes ---

@router.post("/dishes", response_model=BillResponse)
async def add_dish(request: AddDishRequest, bill: Bill = Depends(get_bill)):
    dish = ledger.add_dish(bill, request.name, request.price)
    return _bill_response(bill, f"Added {dish.name}")


@router.patch("/dishes/{dish_id}", response_model=BillResponse)
async def edit_dish(dish_id: str, request: EditDishRequest, bill: Bill = Depends(get_bill)):
    dish = _apply(ledger.get_dish, bill, dish_id)
    if request.name is not None:
        ledger.rename_dish(bill, dish_id, request.name)
    if request.price is not None:
        ledger.reprice_dish(bill, dish_id, request.price)
    return _bill_response(bill, f"Updated {dish.name}")


@router.post("/dishes/{dish_id}/sharers/{person_id}", response_model=BillResponse)
async def toggle_dish_person(dish_id: str, person_id: str, bill: Bill = Depends(get_bill)):
    dish = _apply(ledger.toggle_dish_person, bill, dish_id, person_id)
    return _bill_response(bill, f"Updated sharing of {dish.name}")


@router.delete("/dishes/{dish_id}", response_model=BillResponse)
async def delete_dish(dish_id: str, bill: Bill = Depends(get_bill)):
    dish = _apply(ledger.delete_dish, bill, dish_id)
    return _bill_response(bill, f"Deleted {dish.name}")


# --- Taxes ---

@router.post("/taxes", response_model=BillResponse)
async def add_tax(request: AddTaxRequest, bill: Bill = Depends(get_bill)):
    tax = ledger.add_tax(bill, request.name, request.kind, request.value)
    return _bill_response(bill, f"Added {tax.name}")


@router.patch("/taxes/{tax_id}", response_model=BillResponse)
async def edit_tax(tax_id: str, request: EditTaxRequest, bill: Bill = Depends(get_bill)):
    tax = _apply(ledger.get_tax, bill, tax_id)
    if request.name is not None:
        ledger.rename_tax(bill, tax_id, request.name)
    if request.kind is not None:
        ledger.set_tax_kind(bill, tax_id, request.kind)
    if request.value is not None:
        ledger.set_tax_value(bill, tax_id, request.value)
    return _bill_response(bill, f"Updated {tax.name}")


@router.delete("/taxes/{tax_id}", response_model=BillResponse)
async def delete_tax(tax_id: str, bill: Bill = Depends(get_bill)):
    tax = _apply(ledger.delete_tax, bill, tax_id)
    return _bill_response(bill, f"Deleted {tax.name}")


# --- Stateless ---

@router.post("/calculate-split", response_model=CalculateSplitResponse)
async def calculate_split(request: CalculateSplitRequest):
    """
    Calculate the split of a complete bill sent in the request
    """
    try:
        summary = bill_splitter_service.summarize_bill(
            people=request.people,
            dishes=request.dishes,
            taxes=request.taxes
        )

        return CalculateSplitResponse(
            success=True,
            message="Split calculated successfully",
            summary=summary
        )

    except Exception as e:
        logger.error(f"Error calculating split: {e}")
        return CalculateSplitResponse(
            success=False,
            message="Failed to calculate split",
            error=str(e)
        )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        message="Bill Splitter API is running",
        version=settings.app_version
    )
