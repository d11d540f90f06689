# --- File: hostel_ledger/schemas/report.py ---
"""
Income report schemas.

An income report reconciles every occupancy (current occupant or archived
history snapshot) active during a date range:
- totals cover every matched entry, settled or not
- the pending list covers only entries that still owe money
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, List, Optional, Union

from pydantic import Field, PlainSerializer, computed_field

from hostel_ledger.core.exceptions import InvalidDateRangeError
from hostel_ledger.schemas.common.base import BaseSchema, FrozenSchema
from hostel_ledger.utils.date_utils import (
    end_of_day,
    format_input_date,
    parse_date_safe,
    start_of_day,
)

__all__ = [
    "Amount",
    "SourceKind",
    "OccupancyEntry",
    "QueryRange",
    "ReportTotals",
    "ReportResult",
    "ReportMeta",
    "IncomeReportExport",
    "HostelIncomeReport",
]


def _amount_to_json(value: Decimal) -> Union[int, float]:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


# Amounts stay Decimal in Python and are plain JSON numbers on the wire
Amount = Annotated[
    Decimal,
    PlainSerializer(_amount_to_json, return_type=Union[int, float], when_used="json"),
]


class SourceKind(str, Enum):
    """Where an occupancy entry came from."""

    CURRENT = "current"
    HISTORY = "history"


class OccupancyEntry(FrozenSchema):
    """One person's stay on one bed, with what was charged and received."""

    source_kind: SourceKind = Field(..., alias="sourceKind")

    # Location
    floor_id: Optional[str] = Field(None, alias="floorId")
    floor_name: str = Field("", alias="floorName")
    room_id: Optional[str] = Field(None, alias="roomId")
    room_name: str = Field("", alias="roomName")
    bed_id: Optional[str] = Field(None, alias="bedId")
    bed_name: str = Field("", alias="bedName")

    # Identity (display and contact only)
    occupant_name: str = Field("", alias="occupantName")
    occupant_email: str = Field("", alias="occupantEmail")
    person_number: str = Field("", alias="personNumber")

    # Raw date strings as stored by the backend
    join_date: Optional[str] = Field(None, alias="joinDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    next_due_date: Optional[str] = Field(None, alias="nextDueDate")
    archived_at: Optional[str] = Field(None, alias="archivedAt")

    actual_amount: Amount = Field(Decimal("0"), alias="actualAmount", ge=0)
    amount_paid: Amount = Field(Decimal("0"), alias="amountPaid", ge=0)

    @computed_field
    @property
    def contact(self) -> str:
        """Email if known, otherwise the phone number."""
        return self.occupant_email or self.person_number

    @computed_field
    @property
    def pending(self) -> Amount:
        """Expected amount not yet received; never negative."""
        return max(Decimal("0"), self.actual_amount - self.amount_paid)


class QueryRange(FrozenSchema):
    """Inclusive calendar-day range a report is run over."""

    start: date
    end: date

    @classmethod
    def from_inputs(cls, start: Any, end: Any) -> "QueryRange":
        """
        Build a range from user input.

        Raises:
            InvalidDateRangeError: a bound is unparseable or start > end
        """
        start_day = parse_date_safe(start).date_or_none()
        end_day = parse_date_safe(end).date_or_none()
        if start_day is None or end_day is None or start_day > end_day:
            raise InvalidDateRangeError(
                start=None if start is None else str(start),
                end=None if end is None else str(end),
            )
        return cls(start=start_day, end=end_day)

    @property
    def start_at(self) -> datetime:
        return start_of_day(self.start)

    @property
    def end_at(self) -> datetime:
        return end_of_day(self.end)

    def contains_day(self, day: date) -> bool:
        return self.start <= day <= self.end


class ReportTotals(BaseSchema):
    expected: Amount = Decimal("0")
    received: Amount = Decimal("0")
    pending: Amount = Decimal("0")
    count_all: int = Field(0, alias="countAll")
    count_pending: int = Field(0, alias="countPending")


class ReportResult(BaseSchema):
    """Matched entries, the pending-only subset and their totals."""

    all_entries: List[OccupancyEntry] = Field(default_factory=list, alias="allEntries")
    pending_entries: List[OccupancyEntry] = Field(default_factory=list, alias="pendingEntries")
    totals: ReportTotals = Field(default_factory=ReportTotals)


class ReportMeta(BaseSchema):
    hostel: Optional[str] = None
    start: str
    end: str
    generated_at: datetime = Field(..., alias="generatedAt")

    @classmethod
    def for_range(cls, hostel: Optional[str], query: QueryRange, generated_at: datetime) -> "ReportMeta":
        return cls(
            hostel=hostel,
            start=format_input_date(query.start),
            end=format_input_date(query.end),
            generated_at=generated_at,
        )


class IncomeReportExport(BaseSchema):
    """Downloadable report document: metadata plus the full ReportResult."""

    meta: ReportMeta
    all_entries: List[OccupancyEntry] = Field(default_factory=list, alias="allEntries")
    pending_entries: List[OccupancyEntry] = Field(default_factory=list, alias="pendingEntries")
    totals: ReportTotals = Field(default_factory=ReportTotals)


class HostelIncomeReport(BaseSchema):
    """Report for an owner's hostel together with any per-floor load notes."""

    meta: ReportMeta
    report: ReportResult
    notes: List[str] = Field(default_factory=list)
