"""
Normalization of hostel backend payloads.

The backend has returned several shapes over time. Each field is read with
an explicit priority order (first non-empty value wins):

    floor id     floorId -> _id -> id
    floor name   floorName -> name -> "Floor <first 6 chars of id>"
    room id      roomId -> _id -> id
    room name    roomName -> name
    bed id       bedId -> _id -> id
    bed name     bedName -> name
    hostel id    id -> _id
    hostel name  name -> hostelName
    hostel body  body["data"] -> body
    rooms body   body["rooms"] (list) -> body (list) -> []
    floors       floors (non-empty list) -> legacy floorNames -> []

Legacy ``floorNames`` entries are either plain strings or objects; entries
without an id get ``floor_<n>`` (1-based position).
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from hostel_ledger.schemas.hostel import BedDoc, FloorRef, HostelDoc, RoomDoc

logger = logging.getLogger(__name__)

FLOOR_ID_KEYS = ("floorId", "_id", "id")
FLOOR_NAME_KEYS = ("floorName", "name")
ROOM_ID_KEYS = ("roomId", "_id", "id")
ROOM_NAME_KEYS = ("roomName", "name")
BED_ID_KEYS = ("bedId", "_id", "id")
BED_NAME_KEYS = ("bedName", "name")
HOSTEL_ID_KEYS = ("id", "_id")
HOSTEL_NAME_KEYS = ("name", "hostelName")


def first_present(doc: Mapping, keys: Sequence[str]) -> Any:
    """Return the first non-empty value among ``keys`` (None if none)."""
    for key in keys:
        value = doc.get(key)
        if value is None or isinstance(value, bool):
            continue
        if isinstance(value, str) and not value.strip():
            continue
        if isinstance(value, (int, float)) and value == 0:
            continue
        return value
    return None


def fallback_floor_name(floor_id: Any) -> str:
    return f"Floor {str(floor_id or '')[:6]}".strip()


def unwrap_hostel_body(body: Any) -> Optional[Mapping]:
    """Return the hostel document from a ``{data: {...}}`` envelope or bare body."""
    if not isinstance(body, Mapping):
        return None
    data = body.get("data")
    if isinstance(data, Mapping) and data:
        return data
    return body or None


def unwrap_rooms_body(body: Any) -> List[Any]:
    if isinstance(body, Mapping) and isinstance(body.get("rooms"), list):
        return body["rooms"]
    if isinstance(body, list):
        return body
    return []


def normalize_floor(raw: Any) -> FloorRef:
    if isinstance(raw, str):
        return FloorRef(floor_id=None, floor_name=raw.strip() or fallback_floor_name(None))
    if not isinstance(raw, Mapping):
        return FloorRef(floor_id=None, floor_name=fallback_floor_name(None))

    floor_id = first_present(raw, FLOOR_ID_KEYS)
    floor_name = first_present(raw, FLOOR_NAME_KEYS) or fallback_floor_name(floor_id)
    return FloorRef(floor_id=floor_id, floor_name=floor_name)


def normalize_legacy_floor_names(floor_names: Sequence[Any]) -> List[FloorRef]:
    floors = []
    for index, entry in enumerate(floor_names, start=1):
        if isinstance(entry, Mapping):
            name = entry.get("floorName") or f"Floor {index}"
            floor_id = entry.get("floorId") or entry.get("id") or f"floor_{index}"
        else:
            name = str(entry) if entry else f"Floor {index}"
            floor_id = f"floor_{index}"
        floors.append(FloorRef(floor_id=floor_id, floor_name=name))
    return floors


def normalize_floors(doc: Mapping) -> List[FloorRef]:
    floors = doc.get("floors")
    if isinstance(floors, list) and floors:
        return [normalize_floor(f) for f in floors]

    legacy = doc.get("floorNames")
    if isinstance(legacy, list) and legacy:
        logger.info("Hostel document uses legacy floorNames; generated floor ids may not match backend")
        return normalize_legacy_floor_names(legacy)
    return []


def normalize_hostel(body: Any) -> Optional[HostelDoc]:
    """Normalize a ``GET /api/hostels/{ownerId}`` response body."""
    doc = unwrap_hostel_body(body)
    if doc is None:
        return None
    return HostelDoc(
        hostel_id=first_present(doc, HOSTEL_ID_KEYS),
        name=first_present(doc, HOSTEL_NAME_KEYS),
        floors=normalize_floors(doc),
    )


def normalize_bed(raw: Any) -> Optional[BedDoc]:
    """Normalize one bed; returns None when the bed cannot be read at all."""
    if not isinstance(raw, Mapping):
        logger.warning(f"Skipping bed with unexpected shape: {type(raw).__name__}")
        return None

    data = dict(raw)
    data["bedId"] = first_present(raw, BED_ID_KEYS)
    data["bedName"] = first_present(raw, BED_NAME_KEYS) or ""
    try:
        return BedDoc.model_validate(data)
    except PydanticValidationError as e:
        logger.warning(f"Skipping malformed bed {data['bedId']!r}: {e.error_count()} validation error(s)")
        return None


def normalize_room(raw: Any) -> Optional[RoomDoc]:
    if not isinstance(raw, Mapping):
        logger.warning(f"Skipping room with unexpected shape: {type(raw).__name__}")
        return None

    beds_raw = raw.get("beds")
    beds = []
    for bed_raw in beds_raw if isinstance(beds_raw, list) else []:
        bed = normalize_bed(bed_raw)
        if bed is not None:
            beds.append(bed)

    return RoomDoc(
        room_id=first_present(raw, ROOM_ID_KEYS),
        room_name=first_present(raw, ROOM_NAME_KEYS) or "",
        beds=beds,
    )


def normalize_rooms(body: Any) -> List[RoomDoc]:
    """Normalize a ``GET /api/addroomandbeds?floorId=`` response body."""
    rooms = []
    for raw in unwrap_rooms_body(body):
        room = normalize_room(raw)
        if room is not None:
            rooms.append(room)
    return rooms


__all__ = [
    "first_present",
    "fallback_floor_name",
    "unwrap_hostel_body",
    "unwrap_rooms_body",
    "normalize_floor",
    "normalize_legacy_floor_names",
    "normalize_floors",
    "normalize_hostel",
    "normalize_bed",
    "normalize_room",
    "normalize_rooms",
]
