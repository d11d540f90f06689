"""
Occupancy extraction.

Flattens floors -> rooms -> beds (current occupant plus history snapshots)
into `OccupancyEntry` records whose active period overlaps a report range.

Inclusion rules per bed:

History snapshot
    start = join date, else archived-at; end = end date, else archived-at.
    A snapshot with neither bound cannot be placed in time and is skipped.
    A single missing side takes the query bound. Included on overlap.

Current occupant (only when the bed shows any sign of occupancy)
    a. join or end date parseable -> overlap test, missing side takes the
       query bound (undated sides always count as "in range")
    b. next due date inside the range -> include
    c. any amount above zero -> include
    d. otherwise exclude
"""

import logging
from datetime import datetime
from typing import Iterable, Iterator, List, Optional

from hostel_ledger.schemas.hostel import BedDoc, FloorRooms, HistorySnapshot, OccupancyFields, RoomDoc
from hostel_ledger.schemas.report import OccupancyEntry, QueryRange, SourceKind
from hostel_ledger.utils.date_utils import (
    end_of_day,
    parse_date_or_none,
    ranges_overlap,
    start_of_day,
)

logger = logging.getLogger(__name__)


class OccupancyExtractor:
    """Walks a loaded hostel tree and selects entries for a query range."""

    def extract(self, floors: Iterable[FloorRooms], query: QueryRange) -> List[OccupancyEntry]:
        entries: List[OccupancyEntry] = []
        for floor in floors:
            for room in floor.rooms:
                for bed in room.beds:
                    try:
                        bed_entries = list(self.extract_bed(floor, room, bed, query))
                    except (ArithmeticError, TypeError, ValueError) as e:
                        logger.warning(
                            f"Skipping bed {bed.bed_id!r} in room {room.room_id!r}: {e}",
                            exc_info=True,
                        )
                        continue
                    entries.extend(bed_entries)
        logger.debug(f"Extracted {len(entries)} occupancy entries for {query.start}..{query.end}")
        return entries

    def extract_bed(
        self,
        floor: FloorRooms,
        room: RoomDoc,
        bed: BedDoc,
        query: QueryRange,
    ) -> Iterator[OccupancyEntry]:
        for snapshot in bed.history:
            if self.history_matches(snapshot, query):
                yield self._entry(SourceKind.HISTORY, floor, room, bed, snapshot, snapshot.archived_at)

        if bed.has_current_occupancy() and self.current_matches(bed, query):
            yield self._entry(SourceKind.CURRENT, floor, room, bed, bed, None)

    # ------------------------------------------------------------------
    # Inclusion policy
    # ------------------------------------------------------------------

    def history_matches(self, snapshot: HistorySnapshot, query: QueryRange) -> bool:
        archived = parse_date_or_none(snapshot.archived_at)
        entry_start = parse_date_or_none(snapshot.join_date) or archived
        entry_end = parse_date_or_none(snapshot.end_date) or archived
        if entry_start is None and entry_end is None:
            return False
        return self._overlaps(start_of_day(entry_start), end_of_day(entry_end), query)

    def current_matches(self, bed: BedDoc, query: QueryRange) -> bool:
        entry_start = parse_date_or_none(bed.join_date)
        entry_end = parse_date_or_none(bed.end_date)
        if entry_start is not None or entry_end is not None:
            return self._overlaps(start_of_day(entry_start), end_of_day(entry_end), query)

        next_due = parse_date_or_none(bed.next_due_date)
        if next_due is not None and query.contains_day(next_due):
            return True

        return bed.actual_amount > 0 or bed.amount_paid > 0

    @staticmethod
    def _overlaps(entry_start: Optional[datetime], entry_end: Optional[datetime], query: QueryRange) -> bool:
        # Unknown sides default to the query's own bounds
        return ranges_overlap(
            entry_start or query.start_at,
            entry_end or query.end_at,
            query.start_at,
            query.end_at,
        )

    @staticmethod
    def _entry(
        kind: SourceKind,
        floor: FloorRooms,
        room: RoomDoc,
        bed: BedDoc,
        record: OccupancyFields,
        archived_at: Optional[str],
    ) -> OccupancyEntry:
        return OccupancyEntry(
            source_kind=kind,
            floor_id=floor.floor_id,
            floor_name=floor.floor_name,
            room_id=room.room_id,
            room_name=room.room_name,
            bed_id=bed.bed_id,
            bed_name=bed.bed_name,
            occupant_name=record.occupant_name,
            occupant_email=record.occupant_email,
            person_number=record.person_number,
            join_date=record.join_date,
            end_date=record.end_date,
            next_due_date=record.next_due_date,
            archived_at=archived_at,
            actual_amount=record.actual_amount,
            amount_paid=record.amount_paid,
        )
