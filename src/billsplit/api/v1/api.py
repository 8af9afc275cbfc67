from fastapi import APIRouter
from .endpoints import bill

api_router = APIRouter()
api_router.include_router(bill.router, prefix="/bill", tags=["bill"])
