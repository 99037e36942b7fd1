"""
API v1 Router
"""

from fastapi import APIRouter
from sms_extractor.api.v1.endpoints import transactions, ml

api_router = APIRouter()

api_router.include_router(
    transactions.router,
    prefix="/transactions",
    tags=["transactions"]
)

api_router.include_router(
    ml.router,
    prefix="/ml",
    tags=["machine-learning"]
)
