"""
Income report service.

Builds the income report for an owner's hostel:

1. fetch the hostel document (owner id is an explicit argument)
2. load rooms and beds per floor through `FloorRoomsLoader`
3. select occupancy entries overlapping the query range
4. aggregate totals and the pending-only list

Failures are returned as `ServiceResult` values. Per-floor load failures
do not fail the report; they come back as notes. Nothing is retried.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from hostel_ledger.core.exceptions import (
    BaseAppException,
    ExternalServiceError,
    InvalidDateRangeError,
    MissingConfigurationError,
)
from hostel_ledger.schemas.hostel import FloorRooms, HostelDoc
from hostel_ledger.schemas.report import HostelIncomeReport, QueryRange, ReportMeta, ReportResult
from hostel_ledger.services.base import ErrorCode, ServiceResult
from hostel_ledger.services.integrations.hostel_api_client import HostelApiClient
from hostel_ledger.services.report.aggregator import ReportAggregator
from hostel_ledger.services.report.extractor import OccupancyExtractor
from hostel_ledger.services.report.floor_loader import FloorRoomsLoader
from hostel_ledger.services.report.normalization import normalize_hostel

logger = logging.getLogger(__name__)


class IncomeReportService:

    def __init__(
        self,
        client: HostelApiClient,
        loader: Optional[FloorRoomsLoader] = None,
        extractor: Optional[OccupancyExtractor] = None,
        aggregator: Optional[ReportAggregator] = None,
    ):
        self.client = client
        self.loader = loader or FloorRoomsLoader(client)
        self.extractor = extractor or OccupancyExtractor()
        self.aggregator = aggregator or ReportAggregator()

    # -------------------------------------------------------------------------
    # Pure computation
    # -------------------------------------------------------------------------

    def build_report(
        self,
        floors: Iterable[FloorRooms],
        start: Any,
        end: Any,
    ) -> ServiceResult[ReportResult]:
        """Compute a report over already-loaded floors."""
        try:
            query = QueryRange.from_inputs(start, end)
        except InvalidDateRangeError as e:
            logger.info(f"Rejected report range {start!r}..{end!r}")
            return ServiceResult.validation_failure(
                e.message,
                field="range",
                details=e.details,
                code=ErrorCode.INVALID_DATE_RANGE,
            )
        return ServiceResult.success(self.compute(floors, query))

    def compute(self, floors: Iterable[FloorRooms], query: QueryRange) -> ReportResult:
        entries = self.extractor.extract(floors, query)
        result = self.aggregator.aggregate(entries)
        logger.info(
            f"Income report {query.start}..{query.end}: "
            f"{result.totals.count_all} entries, {result.totals.count_pending} pending"
        )
        return result

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def fetch_hostel(self, owner_id: Optional[str]) -> HostelDoc:
        """
        Raises:
            MissingConfigurationError: no owner id
            ExternalServiceError: backend failure or empty response
        """
        if not owner_id or not str(owner_id).strip():
            raise MissingConfigurationError("Owner id is required to load a hostel", config_key="ownerId")

        body = await self.client.get_hostel(owner_id)
        hostel = normalize_hostel(body)
        if hostel is None:
            raise ExternalServiceError("No hostel data returned.", service_name="hostel-backend")
        return hostel

    async def load_floors(self, hostel: HostelDoc) -> List[FloorRooms]:
        if not hostel.floors:
            return []
        return await self.loader.load(hostel.floors)

    async def generate(
        self,
        owner_id: Optional[str],
        start: Any,
        end: Any,
    ) -> ServiceResult[HostelIncomeReport]:
        """Fetch the owner's hostel and build its income report."""
        try:
            query = QueryRange.from_inputs(start, end)
        except InvalidDateRangeError as e:
            return ServiceResult.validation_failure(
                e.message,
                field="range",
                details=e.details,
                code=ErrorCode.INVALID_DATE_RANGE,
            )

        try:
            hostel = await self.fetch_hostel(owner_id)
            floors = await self.load_floors(hostel)
        except BaseAppException as e:
            logger.error(f"Failed to load hostel for owner {owner_id!r}: {e}")
            return ServiceResult.from_app_exception(e)

        report = self.compute(floors, query)
        notes = [
            f"{floor.floor_name or floor.floor_id}: {floor.error}"
            for floor in floors
            if floor.error
        ]
        return ServiceResult.success(
            HostelIncomeReport(
                meta=ReportMeta.for_range(hostel.name, query, datetime.now(timezone.utc)),
                report=report,
                notes=notes,
            ),
            metadata={"owner_id": owner_id, "floors": len(floors)},
        )


__all__ = ["IncomeReportService"]
