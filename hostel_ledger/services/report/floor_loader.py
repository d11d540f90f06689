"""
Per-floor room loading with bounded concurrency.

Each floor needs its own ``/api/addroomandbeds`` request. Requests go out
through a semaphore (default size 1, i.e. one floor at a time) and results
keep the hostel's floor order. A failing floor is annotated, not fatal.

Every `load` call takes a new generation number. When a newer load starts
(or `cancel` is called) the older one stops issuing requests, cancels the
ones in flight and raises `SupersededLoadError`, so a slow earlier response
can never replace a newer snapshot.

A loader is owned by a single report run; HTTP requests each build their
own, so concurrent requests never supersede one another.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from hostel_ledger.config.settings import Settings, settings as default_settings
from hostel_ledger.core.exceptions import ExternalServiceError, SupersededLoadError
from hostel_ledger.schemas.hostel import FloorRef, FloorRooms
from hostel_ledger.services.integrations.hostel_api_client import HostelApiClient
from hostel_ledger.services.report.normalization import normalize_rooms

logger = logging.getLogger(__name__)

MISSING_FLOOR_ID = "Missing floorId"


def floor_error_message(error: ExternalServiceError) -> str:
    message = "Failed to load rooms for this floor"
    if error.status:
        message += f" (status {error.status})"
    return message


class FloorRoomsLoader:

    def __init__(
        self,
        client: HostelApiClient,
        max_concurrency: Optional[int] = None,
        config: Optional[Settings] = None,
    ):
        config = config or default_settings
        self.client = client
        self.max_concurrency = max(1, max_concurrency or config.FLOOR_FETCH_CONCURRENCY)
        self.latest: Optional[List[FloorRooms]] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def cancel(self) -> None:
        """Invalidate any load currently in flight."""
        self._generation += 1

    async def load(self, floors: Sequence[FloorRef]) -> List[FloorRooms]:
        self._generation += 1
        generation = self._generation
        semaphore = asyncio.Semaphore(self.max_concurrency)

        tasks = [
            asyncio.create_task(self._load_floor(floor, semaphore, generation))
            for floor in floors
        ]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        self._ensure_current(generation)
        self.latest = list(results)

        failed = sum(1 for floor in self.latest if floor.error)
        logger.info(f"Loaded rooms for {len(self.latest)} floor(s), {failed} with errors")
        return self.latest

    async def _load_floor(
        self,
        floor: FloorRef,
        semaphore: asyncio.Semaphore,
        generation: int,
    ) -> FloorRooms:
        if not floor.floor_id:
            return FloorRooms(floor_id=None, floor_name=floor.floor_name, error=MISSING_FLOOR_ID)

        async with semaphore:
            self._ensure_current(generation)
            try:
                body = await self.client.get_floor_rooms(floor.floor_id)
            except ExternalServiceError as e:
                logger.error(f"Error loading rooms for floor {floor.floor_id}: {e}")
                return FloorRooms(
                    floor_id=floor.floor_id,
                    floor_name=floor.floor_name,
                    error=floor_error_message(e),
                )

        self._ensure_current(generation)
        return FloorRooms(
            floor_id=floor.floor_id,
            floor_name=floor.floor_name,
            rooms=normalize_rooms(body),
        )

    def _ensure_current(self, generation: int) -> None:
        if generation != self._generation:
            raise SupersededLoadError(generation=generation, current_generation=self._generation)

