"""
Income report export.

Produces the downloadable JSON document: report metadata followed by the
`ReportResult` fields (``allEntries``, ``pendingEntries``, ``totals``) under
the same names downstream tooling reads.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from hostel_ledger.schemas.report import (
    HostelIncomeReport,
    IncomeReportExport,
    QueryRange,
    ReportMeta,
    ReportResult,
)

logger = logging.getLogger(__name__)

EXPORT_MEDIA_TYPE = "application/json"


class ReportExportService:

    def build_export(
        self,
        report: ReportResult,
        query: QueryRange,
        hostel_name: Optional[str] = None,
        generated_at: Optional[datetime] = None,
    ) -> IncomeReportExport:
        meta = ReportMeta.for_range(hostel_name, query, generated_at or datetime.now(timezone.utc))
        return self._export(meta, report)

    def from_hostel_report(self, hostel_report: HostelIncomeReport) -> IncomeReportExport:
        return self._export(hostel_report.meta, hostel_report.report)

    @staticmethod
    def _export(meta: ReportMeta, report: ReportResult) -> IncomeReportExport:
        return IncomeReportExport(
            meta=meta,
            all_entries=report.all_entries,
            pending_entries=report.pending_entries,
            totals=report.totals,
        )

    @staticmethod
    def to_payload(export: IncomeReportExport) -> Dict[str, Any]:
        return export.model_dump(mode="json", by_alias=True)

    def to_json(self, export: IncomeReportExport) -> str:
        return json.dumps(self.to_payload(export), indent=2, ensure_ascii=False)

    @staticmethod
    def filename(export: IncomeReportExport) -> str:
        return f"income-report-{export.meta.start}_to_{export.meta.end}.json"
