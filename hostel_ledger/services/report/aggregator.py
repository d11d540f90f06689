"""
Report aggregation.

Totals answer "how much money moved in this period" and are summed over
every matched entry. The pending list answers "who still owes money": only
entries with pending > 0, largest pending first, then largest amount paid.
"""

from decimal import Decimal
from typing import List, Sequence

from hostel_ledger.schemas.report import OccupancyEntry, ReportResult, ReportTotals


class ReportAggregator:

    def aggregate(self, entries: Sequence[OccupancyEntry]) -> ReportResult:
        all_entries = list(entries)
        pending_entries = self.pending_only(all_entries)
        return ReportResult(
            all_entries=all_entries,
            pending_entries=pending_entries,
            totals=self.totals(all_entries),
        )

    @staticmethod
    def totals(entries: Sequence[OccupancyEntry]) -> ReportTotals:
        expected = received = pending = Decimal("0")
        count_pending = 0
        for entry in entries:
            expected += entry.actual_amount
            received += entry.amount_paid
            pending += entry.pending
            if entry.pending > 0:
                count_pending += 1
        return ReportTotals(
            expected=expected,
            received=received,
            pending=pending,
            count_all=len(entries),
            count_pending=count_pending,
        )

    @staticmethod
    def pending_only(entries: Sequence[OccupancyEntry]) -> List[OccupancyEntry]:
        owing = [entry for entry in entries if entry.pending > 0]
        owing.sort(key=lambda entry: (entry.pending, entry.amount_paid), reverse=True)
        return owing
