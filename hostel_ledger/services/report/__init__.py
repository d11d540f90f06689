"""
Income report services: loading, extraction, aggregation and export.
"""

from hostel_ledger.services.report.aggregator import ReportAggregator
from hostel_ledger.services.report.extractor import OccupancyExtractor
from hostel_ledger.services.report.floor_loader import FloorRoomsLoader
from hostel_ledger.services.report.income_report_service import IncomeReportService
from hostel_ledger.services.report.occupancy_summary_service import OccupancySummaryService
from hostel_ledger.services.report.report_export_service import ReportExportService

__all__ = [
    "ReportAggregator",
    "OccupancyExtractor",
    "FloorRoomsLoader",
    "IncomeReportService",
    "OccupancySummaryService",
    "ReportExportService",
]
