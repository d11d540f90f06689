import httpx
import pytest

from hostel_ledger.schemas.hostel import FloorRooms
from hostel_ledger.services.integrations.hostel_api_client import HostelApiClient
from hostel_ledger.services.report.normalization import normalize_rooms


@pytest.fixture
def make_bed():
    def _make_bed(bed_id="b1", bed_name="Bed 1", history=None, **fields):
        bed = {"bedId": bed_id, "bedName": bed_name, "history": history or []}
        bed.update(fields)
        return bed

    return _make_bed


@pytest.fixture
def make_floor():
    def _make_floor(beds, floor_id="f1", floor_name="Ground", room_id="r1", room_name="101"):
        rooms = normalize_rooms({"rooms": [{"roomId": room_id, "roomName": room_name, "beds": beds}]})
        return FloorRooms(floor_id=floor_id, floor_name=floor_name, rooms=rooms)

    return _make_floor


@pytest.fixture
def hostel_backend():
    """Build a fake hostel backend served through httpx.MockTransport."""

    def _backend(hostels, rooms_by_floor=None, failing_floors=(), calls=None):
        rooms_by_floor = rooms_by_floor or {}

        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(str(request.url))
            path = request.url.path
            if path.startswith("/api/hostels/"):
                owner_id = path.rsplit("/", 1)[-1]
                if owner_id in hostels:
                    return httpx.Response(200, json=hostels[owner_id])
                return httpx.Response(404, json={"message": "Hostel not found"})
            if path == "/api/addroomandbeds":
                floor_id = request.url.params.get("floorId")
                if floor_id in failing_floors:
                    return httpx.Response(500, json={"message": "database unavailable"})
                return httpx.Response(200, json={"rooms": rooms_by_floor.get(floor_id, [])})
            return httpx.Response(404)

        return HostelApiClient(
            base_url="http://backend.test",
            timeout_seconds=5,
            transport=httpx.MockTransport(handler),
        )

    return _backend
