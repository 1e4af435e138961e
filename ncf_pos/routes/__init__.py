from fastapi import APIRouter

from .invoice_sequences import router as invoice_sequences_router
from .sales import router as sales_router
from .stores import router as stores_router

api_router = APIRouter()
api_router.include_router(stores_router, tags=["stores"])
api_router.include_router(invoice_sequences_router, tags=["invoice-sequences"])
api_router.include_router(sales_router, tags=["sales"])
