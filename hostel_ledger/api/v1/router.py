"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hostel income ledger
"""
from fastapi import APIRouter

from hostel_ledger.api.v1 import income_reports

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
        502: {"description": "Hostel backend error"},
    }
)

router.include_router(income_reports.router)
