# hostel_ledger/api/deps.py
"""
FastAPI dependencies.

Example usage in a router:

    @router.get("/reports/income")
    async def income(service = Depends(deps.get_income_report_service)):
        ...
"""

from typing import Optional

from fastapi import Depends, Query, Request

from hostel_ledger.config.settings import Settings, get_settings
from hostel_ledger.services.integrations.hostel_api_client import HostelApiClient
from hostel_ledger.services.report.floor_loader import FloorRoomsLoader
from hostel_ledger.services.report.income_report_service import IncomeReportService
from hostel_ledger.services.report.occupancy_summary_service import OccupancySummaryService
from hostel_ledger.services.report.report_export_service import ReportExportService


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_api_client(
    request: Request,
    config: Settings = Depends(get_app_settings),
) -> HostelApiClient:
    client = getattr(request.app.state, "hostel_api_client", None)
    if client is None:
        client = HostelApiClient(config=config)
        request.app.state.hostel_api_client = client
    return client


def get_owner_id(
    owner_id: Optional[str] = Query(None, alias="ownerId", description="Hostel owner id"),
    config: Settings = Depends(get_app_settings),
) -> Optional[str]:
    """Owner id from the request, falling back to DEFAULT_OWNER_ID."""
    if owner_id and owner_id.strip():
        return owner_id.strip()
    return config.DEFAULT_OWNER_ID


def get_income_report_service(
    client: HostelApiClient = Depends(get_api_client),
    config: Settings = Depends(get_app_settings),
) -> IncomeReportService:
    """Fresh service and floor loader for every request."""
    return IncomeReportService(client, loader=FloorRoomsLoader(client, config=config))


def get_occupancy_summary_service(
    report_service: IncomeReportService = Depends(get_income_report_service),
) -> OccupancySummaryService:
    return OccupancySummaryService(report_service)


def get_export_service() -> ReportExportService:
    return ReportExportService()
