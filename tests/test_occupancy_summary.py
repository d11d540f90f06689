import asyncio

from hostel_ledger.core.exceptions import ErrorCode
from hostel_ledger.services.report.income_report_service import IncomeReportService
from hostel_ledger.services.report.occupancy_summary_service import OccupancySummaryService


def test_summarize_counts_available_beds(hostel_backend, make_bed, make_floor):
    service = OccupancySummaryService(IncomeReportService(hostel_backend({})))
    floor = make_floor([
        make_bed(bed_id="b1", occupantName="Asha"),
        make_bed(bed_id="b2", occupantEmail="x@example.com"),
        make_bed(bed_id="b3", actualAmount=500),
    ])

    summary = service.summarize([floor], "Sunrise")

    room = summary.floors[0].rooms[0]
    assert (room.total_beds, room.available_beds, room.is_full) == (3, 1, False)
    assert summary.total_beds == 3
    assert summary.available_beds == 1


def test_for_owner_reports_full_rooms_and_floor_errors(hostel_backend, make_bed):
    client = hostel_backend(
        hostels={"o1": {"data": {"name": "Sunrise", "floors": [
            {"floorId": "f1", "floorName": "Ground"},
            {"floorId": "f2", "floorName": "First"},
        ]}}},
        rooms_by_floor={"f1": [{"roomId": "r1", "beds": [make_bed(occupantName="Asha")]}]},
        failing_floors={"f2"},
    )
    service = OccupancySummaryService(IncomeReportService(client))

    result = asyncio.run(service.for_owner("o1"))

    assert result.is_success
    payload = result.data.model_dump(mode="json", by_alias=True)
    assert payload["hostel"] == "Sunrise"
    assert payload["totalBeds"] == 1
    assert payload["availableBeds"] == 0
    assert payload["floors"][0]["rooms"][0]["isFull"] is True
    assert payload["floors"][1]["error"] == "Failed to load rooms for this floor (status 500)"


def test_for_owner_without_owner(hostel_backend):
    service = OccupancySummaryService(IncomeReportService(hostel_backend({})))
    result = asyncio.run(service.for_owner(""))
    assert not result.is_success
    assert result.error.code is ErrorCode.MISSING_CONFIGURATION
