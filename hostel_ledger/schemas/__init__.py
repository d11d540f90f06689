"""
Pydantic schemas for hostel documents and income reports.
"""

from hostel_ledger.schemas.hostel import (
    BedDoc,
    FloorRef,
    FloorRooms,
    HistorySnapshot,
    HostelDoc,
    RoomDoc,
)
from hostel_ledger.schemas.occupancy import FloorOccupancy, HostelOccupancy, RoomOccupancy
from hostel_ledger.schemas.report import (
    HostelIncomeReport,
    IncomeReportExport,
    OccupancyEntry,
    QueryRange,
    ReportMeta,
    ReportResult,
    ReportTotals,
    SourceKind,
)

__all__ = [
    "BedDoc",
    "FloorRef",
    "FloorRooms",
    "HistorySnapshot",
    "HostelDoc",
    "RoomDoc",
    "FloorOccupancy",
    "HostelOccupancy",
    "RoomOccupancy",
    "HostelIncomeReport",
    "IncomeReportExport",
    "OccupancyEntry",
    "QueryRange",
    "ReportMeta",
    "ReportResult",
    "ReportTotals",
    "SourceKind",
]
