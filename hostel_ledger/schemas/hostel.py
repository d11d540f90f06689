# --- File: hostel_ledger/schemas/hostel.py ---
"""
Hostel backend documents: hostel -> floors -> rooms -> beds -> history.

These mirror what ``GET /api/hostels/{ownerId}`` and
``GET /api/addroomandbeds?floorId=`` return. Validation is deliberately
lenient: missing arrays become empty lists, unusable amounts become 0 and
unset text fields become empty strings, so one bad bed never blocks a
report on the rest of the hostel.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from pydantic import Field, field_validator

from hostel_ledger.schemas.common.base import BaseSchema

__all__ = [
    "coerce_amount",
    "OccupancyFields",
    "HistorySnapshot",
    "BedDoc",
    "RoomDoc",
    "FloorRef",
    "FloorRooms",
    "HostelDoc",
]

ZERO = Decimal("0")


def coerce_amount(value: Any) -> Decimal:
    """
    Read a monetary value, falling back to 0.

    Booleans, non-numeric strings, NaN/infinity and negative numbers all
    read as 0.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return ZERO
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return ZERO
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not amount.is_finite() or amount < 0:
        return ZERO
    return amount


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _coerce_raw_date(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    text = _coerce_text(value).strip()
    return text or None


def _coerce_identifier(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


class OccupancyFields(BaseSchema):
    """Occupant and money fields shared by beds and history snapshots."""

    occupant_name: str = Field("", alias="occupantName")
    occupant_email: str = Field("", alias="occupantEmail")
    person_number: str = Field("", alias="personNumber")
    join_date: Optional[str] = Field(None, alias="joinDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    next_due_date: Optional[str] = Field(None, alias="nextDueDate")
    actual_amount: Decimal = Field(ZERO, alias="actualAmount")
    amount_paid: Decimal = Field(ZERO, alias="amountPaid")

    @field_validator("occupant_name", "occupant_email", "person_number", mode="before")
    @classmethod
    def text_or_empty(cls, v: Any) -> str:
        return _coerce_text(v)

    @field_validator("join_date", "end_date", "next_due_date", mode="before")
    @classmethod
    def raw_date(cls, v: Any) -> Optional[str]:
        return _coerce_raw_date(v)

    @field_validator("actual_amount", "amount_paid", mode="before")
    @classmethod
    def amount(cls, v: Any) -> Decimal:
        return coerce_amount(v)


class HistorySnapshot(OccupancyFields):
    """An archived prior occupant kept on a bed."""

    archived_at: Optional[str] = Field(None, alias="archivedAt")

    @field_validator("archived_at", mode="before")
    @classmethod
    def raw_archived_at(cls, v: Any) -> Optional[str]:
        return _coerce_raw_date(v)


class BedDoc(OccupancyFields):
    """A bed: its (possibly empty) current occupancy plus append-only history."""

    bed_id: Optional[str] = Field(None, alias="bedId")
    bed_name: str = Field("", alias="bedName")
    history: List[HistorySnapshot] = Field(default_factory=list)

    @field_validator("bed_id", mode="before")
    @classmethod
    def identifier(cls, v: Any) -> Optional[str]:
        return _coerce_identifier(v)

    @field_validator("bed_name", mode="before")
    @classmethod
    def name(cls, v: Any) -> str:
        return _coerce_text(v)

    @field_validator("history", mode="before")
    @classmethod
    def history_list(cls, v: Any) -> list:
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, (dict, HistorySnapshot))]

    def has_current_occupancy(self) -> bool:
        """True when the bed shows any sign of a current occupant."""
        return bool(
            self.occupant_name
            or self.occupant_email
            or self.join_date
            or self.end_date
            or self.actual_amount != 0
            or self.amount_paid != 0
        )

    def is_available(self) -> bool:
        """A bed is free when it has neither occupant name nor email."""
        return not (self.occupant_name or self.occupant_email)


class RoomDoc(BaseSchema):
    room_id: Optional[str] = Field(None, alias="roomId")
    room_name: str = Field("", alias="roomName")
    beds: List[BedDoc] = Field(default_factory=list)

    @field_validator("room_id", mode="before")
    @classmethod
    def identifier(cls, v: Any) -> Optional[str]:
        return _coerce_identifier(v)

    @field_validator("room_name", mode="before")
    @classmethod
    def name(cls, v: Any) -> str:
        return _coerce_text(v)


class FloorRef(BaseSchema):
    """A floor as listed on the hostel document."""

    floor_id: Optional[str] = Field(None, alias="floorId")
    floor_name: str = Field("", alias="floorName")

    @field_validator("floor_id", mode="before")
    @classmethod
    def identifier(cls, v: Any) -> Optional[str]:
        return _coerce_identifier(v)

    @field_validator("floor_name", mode="before")
    @classmethod
    def name(cls, v: Any) -> str:
        return _coerce_text(v)


class FloorRooms(FloorRef):
    """A floor with its loaded rooms, or the reason loading failed."""

    rooms: List[RoomDoc] = Field(default_factory=list)
    error: Optional[str] = None


class HostelDoc(BaseSchema):
    hostel_id: Optional[str] = Field(None, alias="id")
    name: Optional[str] = None
    floors: List[FloorRef] = Field(default_factory=list)

    @field_validator("hostel_id", mode="before")
    @classmethod
    def identifier(cls, v: Any) -> Optional[str]:
        return _coerce_identifier(v)

    @field_validator("name", mode="before")
    @classmethod
    def display_name(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return _coerce_text(v) or None
