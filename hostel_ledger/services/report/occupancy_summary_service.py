"""
Bed availability per floor and room, as shown on the owner dashboard.

A bed counts as available when it has neither an occupant name nor an
occupant email.
"""

import logging
from typing import Iterable, Optional

from hostel_ledger.core.exceptions import BaseAppException
from hostel_ledger.schemas.hostel import FloorRooms, RoomDoc
from hostel_ledger.schemas.occupancy import FloorOccupancy, HostelOccupancy, RoomOccupancy
from hostel_ledger.services.base import ServiceResult
from hostel_ledger.services.report.income_report_service import IncomeReportService

logger = logging.getLogger(__name__)


class OccupancySummaryService:

    def __init__(self, report_service: IncomeReportService):
        self.report_service = report_service

    @staticmethod
    def summarize_room(room: RoomDoc) -> RoomOccupancy:
        return RoomOccupancy(
            room_id=room.room_id,
            room_name=room.room_name,
            total_beds=len(room.beds),
            available_beds=sum(1 for bed in room.beds if bed.is_available()),
        )

    def summarize(self, floors: Iterable[FloorRooms], hostel_name: Optional[str] = None) -> HostelOccupancy:
        return HostelOccupancy(
            hostel=hostel_name,
            floors=[
                FloorOccupancy(
                    floor_id=floor.floor_id,
                    floor_name=floor.floor_name,
                    rooms=[self.summarize_room(room) for room in floor.rooms],
                    error=floor.error,
                )
                for floor in floors
            ],
        )

    async def for_owner(self, owner_id: Optional[str]) -> ServiceResult[HostelOccupancy]:
        try:
            hostel = await self.report_service.fetch_hostel(owner_id)
            floors = await self.report_service.load_floors(hostel)
        except BaseAppException as e:
            logger.error(f"Failed to load occupancy for owner {owner_id!r}: {e}")
            return ServiceResult.from_app_exception(e)
        return ServiceResult.success(self.summarize(floors, hostel.name))
