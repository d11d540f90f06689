# --- File: hostel_ledger/schemas/occupancy.py ---
"""
Bed availability summaries for the owner dashboard.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, computed_field

from hostel_ledger.schemas.common.base import BaseSchema

__all__ = [
    "RoomOccupancy",
    "FloorOccupancy",
    "HostelOccupancy",
]


class RoomOccupancy(BaseSchema):
    room_id: Optional[str] = Field(None, alias="roomId")
    room_name: str = Field("", alias="roomName")
    total_beds: int = Field(0, alias="totalBeds", ge=0)
    available_beds: int = Field(0, alias="availableBeds", ge=0)

    @computed_field(alias="isFull")
    @property
    def is_full(self) -> bool:
        """Shown red on the dashboard when no bed is free."""
        return self.available_beds == 0


class FloorOccupancy(BaseSchema):
    floor_id: Optional[str] = Field(None, alias="floorId")
    floor_name: str = Field("", alias="floorName")
    rooms: List[RoomOccupancy] = Field(default_factory=list)
    error: Optional[str] = None

    @computed_field(alias="totalBeds")
    @property
    def total_beds(self) -> int:
        return sum(room.total_beds for room in self.rooms)

    @computed_field(alias="availableBeds")
    @property
    def available_beds(self) -> int:
        return sum(room.available_beds for room in self.rooms)


class HostelOccupancy(BaseSchema):
    hostel: Optional[str] = None
    floors: List[FloorOccupancy] = Field(default_factory=list)

    @computed_field(alias="totalBeds")
    @property
    def total_beds(self) -> int:
        return sum(floor.total_beds for floor in self.floors)

    @computed_field(alias="availableBeds")
    @property
    def available_beds(self) -> int:
        return sum(floor.available_beds for floor in self.floors)
