"""
Income report endpoints.
"""
from datetime import date
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from hostel_ledger.api import deps
from hostel_ledger.config.settings import Settings
from hostel_ledger.schemas.occupancy import HostelOccupancy
from hostel_ledger.schemas.report import HostelIncomeReport, OccupancyEntry
from hostel_ledger.services.base import ServiceResult
from hostel_ledger.services.report.income_report_service import IncomeReportService
from hostel_ledger.services.report.occupancy_summary_service import OccupancySummaryService
from hostel_ledger.services.report.report_export_service import EXPORT_MEDIA_TYPE, ReportExportService
from hostel_ledger.utils.date_utils import default_report_range, format_input_date
from hostel_ledger.utils.formatters import CurrencyFormatter, phone_link, view_bed_url

router = APIRouter(tags=["Income Reports"])


def failure_response(result: ServiceResult) -> JSONResponse:
    error = result.error
    return JSONResponse(status_code=error.status_code, content={"error": error.to_dict()})


def resolve_range(start: Optional[str], end: Optional[str], today: Optional[date] = None) -> Tuple[str, str]:
    """Blank bounds fall back to the default report range."""
    default_start, default_end = default_report_range(today)
    start = start if start and start.strip() else format_input_date(default_start)
    end = end if end and end.strip() else format_input_date(default_end)
    return start, end


def display_amount(amount: Any, currency: str) -> str:
    return CurrencyFormatter.format_amount(amount, currency=currency)


def pending_card(entry: OccupancyEntry, owner_id: Optional[str], currency: str = "INR") -> Dict[str, Any]:
    return {
        "entry": entry.model_dump(mode="json", by_alias=True),
        "display": {
            "actualAmount": display_amount(entry.actual_amount, currency),
            "amountPaid": display_amount(entry.amount_paid, currency),
            "pending": display_amount(entry.pending, currency),
        },
        "viewBedUrl": view_bed_url(owner_id, entry.floor_id, entry.room_id),
        "callLink": phone_link(entry.person_number),
    }


@router.get("/reports/income/default-range")
async def get_default_range() -> Dict[str, str]:
    start, end = resolve_range(None, None)
    return {"start": start, "end": end}


@router.get("/reports/income", response_model=HostelIncomeReport)
async def get_income_report(
    start: Optional[str] = Query(None, description="Range start (YYYY-MM-DD)"),
    end: Optional[str] = Query(None, description="Range end (YYYY-MM-DD)"),
    owner_id: Optional[str] = Depends(deps.get_owner_id),
    service: IncomeReportService = Depends(deps.get_income_report_service),
):
    start, end = resolve_range(start, end)
    result = await service.generate(owner_id, start, end)
    if not result:
        return failure_response(result)
    return result.data


@router.get("/reports/income/cards")
async def get_income_report_cards(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    owner_id: Optional[str] = Depends(deps.get_owner_id),
    service: IncomeReportService = Depends(deps.get_income_report_service),
    config: Settings = Depends(deps.get_app_settings),
):
    """Pending-only cards with display amounts, call and view-bed links."""
    start, end = resolve_range(start, end)
    result = await service.generate(owner_id, start, end)
    if not result:
        return failure_response(result)

    totals = result.data.report.totals
    return {
        "totals": {
            "expected": display_amount(totals.expected, config.CURRENCY),
            "received": display_amount(totals.received, config.CURRENCY),
            "pending": display_amount(totals.pending, config.CURRENCY),
            "countAll": totals.count_all,
            "countPending": totals.count_pending,
        },
        "cards": [pending_card(entry, owner_id, config.CURRENCY) for entry in result.data.report.pending_entries],
        "notes": result.data.notes,
    }


@router.get("/reports/income/export")
async def export_income_report(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    owner_id: Optional[str] = Depends(deps.get_owner_id),
    service: IncomeReportService = Depends(deps.get_income_report_service),
    exporter: ReportExportService = Depends(deps.get_export_service),
):
    start, end = resolve_range(start, end)
    result = await service.generate(owner_id, start, end)
    if not result:
        return failure_response(result)

    export = exporter.from_hostel_report(result.data)
    return Response(
        content=exporter.to_json(export),
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{exporter.filename(export)}"'},
    )


@router.get("/hostels/occupancy", response_model=HostelOccupancy, tags=["Occupancy"])
async def get_hostel_occupancy(
    owner_id: Optional[str] = Depends(deps.get_owner_id),
    service: OccupancySummaryService = Depends(deps.get_occupancy_summary_service),
):
    result = await service.for_owner(owner_id)
    if not result:
        return failure_response(result)
    return result.data
