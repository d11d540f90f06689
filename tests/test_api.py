import asyncio
from datetime import date

import httpx
import pytest
from fastapi.testclient import TestClient

from hostel_ledger.api import deps
from hostel_ledger.api.v1.income_reports import resolve_range
from hostel_ledger.config.settings import Settings
from hostel_ledger.main import create_app
from hostel_ledger.services.integrations.hostel_api_client import HostelApiClient

OWNER = "owner-1"


@pytest.fixture
def backend_client(hostel_backend, make_bed):
    return hostel_backend(
        hostels={OWNER: {"data": {"name": "Sunrise PG", "floors": [
            {"floorId": "f1", "floorName": "Ground"},
            {"floorName": "Attic"},
        ]}}},
        rooms_by_floor={"f1": [{"roomId": "r1", "roomName": "101", "beds": [
            make_bed(bed_id="b1", occupantName="Asha", personNumber="9876543210",
                     joinDate="2024-03-01", actualAmount=123456, amountPaid=6000),
            make_bed(bed_id="b2", occupantName="Ravi", joinDate="2024-03-01",
                     actualAmount=5000, amountPaid=5000),
            make_bed(bed_id="b3"),
        ]}]},
    )


@pytest.fixture
def client(backend_client):
    app = create_app(Settings(DEFAULT_OWNER_ID=OWNER, LOG_DIR=None))
    app.state.hostel_api_client = backend_client
    return TestClient(app)


def test_income_report(client):
    response = client.get("/api/v1/reports/income", params={"start": "2024-03-01", "end": "2024-03-31"})

    assert response.status_code == 200
    body = response.json()
    assert body["meta"]["hostel"] == "Sunrise PG"
    assert body["report"]["totals"] == {
        "expected": 128456,
        "received": 11000,
        "pending": 117456,
        "countAll": 2,
        "countPending": 1,
    }
    assert [e["occupantName"] for e in body["report"]["pendingEntries"]] == ["Asha"]
    assert body["notes"] == ["Attic: Missing floorId"]
    assert "X-Request-ID" in response.headers


def test_income_cards(client):
    response = client.get(
        "/api/v1/reports/income/cards",
        params={"start": "2024-03-01", "end": "2024-03-31", "ownerId": OWNER},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["totals"]["pending"] == "₹1,17,456"
    card = body["cards"][0]
    assert card["display"]["actualAmount"] == "₹1,23,456"
    assert card["viewBedUrl"] == "/addroomswithbeds?ownerId=owner-1&floorId=f1&roomId=r1"
    assert card["callLink"] == "tel:9876543210"


def test_export_download(client):
    response = client.get("/api/v1/reports/income/export", params={"start": "2024-03-01", "end": "2024-03-31"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert 'filename="income-report-2024-03-01_to_2024-03-31.json"' in response.headers["content-disposition"]
    assert list(response.json()) == ["meta", "allEntries", "pendingEntries", "totals"]


def test_invalid_range_is_rejected(client):
    response = client.get("/api/v1/reports/income", params={"start": "2024-03-31", "end": "2024-03-01"})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"


def test_unknown_owner(client):
    response = client.get("/api/v1/reports/income", params={"ownerId": "nobody", "start": "2024-03-01", "end": "2024-03-31"})

    assert response.status_code == 502
    assert response.json()["error"]["message"] == "Hostel not found"


def test_missing_owner_configuration(backend_client):
    app = create_app(Settings(DEFAULT_OWNER_ID=None, LOG_DIR=None))
    app.state.hostel_api_client = backend_client

    response = TestClient(app).get("/api/v1/reports/income", params={"start": "2024-03-01", "end": "2024-03-31"})

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "MISSING_CONFIGURATION"


def test_occupancy(client):
    response = client.get("/api/v1/hostels/occupancy")

    assert response.status_code == 200
    body = response.json()
    assert body["totalBeds"] == 3
    assert body["availableBeds"] == 1
    assert body["floors"][1]["error"] == "Missing floorId"


def test_default_range(client):
    body = client.get("/api/v1/reports/income/default-range").json()
    assert body["start"] < body["end"]
    assert body["start"].endswith("-01")


def test_resolve_range_fills_blank_bounds():
    assert resolve_range(None, " ", today=date(2024, 3, 15)) == ("2024-02-01", "2024-03-31")
    assert resolve_range("2024-01-01", None, today=date(2024, 3, 15)) == ("2024-01-01", "2024-03-31")


def test_cards_use_configured_currency(backend_client):
    app = create_app(Settings(DEFAULT_OWNER_ID=OWNER, LOG_DIR=None, CURRENCY="USD"))
    app.state.hostel_api_client = backend_client

    body = TestClient(app).get(
        "/api/v1/reports/income/cards", params={"start": "2024-03-01", "end": "2024-03-31"}
    ).json()

    assert body["totals"]["pending"] == "$1,17,456"
    assert body["cards"][0]["display"]["amountPaid"] == "$6,000"


def slow_backend(make_bed):
    """Backend whose floor responses take long enough for requests to overlap."""

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.startswith("/api/hostels/"):
            return httpx.Response(200, json={"data": {"name": "Sunrise PG", "floors": [
                {"floorId": "f1", "floorName": "Ground"},
                {"floorId": "f2", "floorName": "First"},
            ]}})
        await asyncio.sleep(0.05)
        return httpx.Response(200, json={"rooms": [{"roomId": "r1", "beds": [
            make_bed(occupantName="Asha", joinDate="2024-03-01", actualAmount=5000, amountPaid=1000),
        ]}]})

    return HostelApiClient(base_url="http://backend.test", transport=httpx.MockTransport(handler))


def test_concurrent_requests_for_same_owner_all_succeed(make_bed):
    app = create_app(Settings(DEFAULT_OWNER_ID=OWNER, LOG_DIR=None))
    app.state.hostel_api_client = slow_backend(make_bed)
    params = {"start": "2024-03-01", "end": "2024-03-31"}

    async def fire():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
            return await asyncio.gather(
                http.get("/api/v1/reports/income", params=params),
                http.get("/api/v1/reports/income/cards", params=params),
                http.get("/api/v1/reports/income/export", params=params),
                http.get("/api/v1/hostels/occupancy"),
            )

    responses = asyncio.run(fire())

    assert [r.status_code for r in responses] == [200, 200, 200, 200]
    assert responses[0].json()["report"]["totals"]["pending"] == 8000
    assert responses[1].json()["totals"]["countPending"] == 2


def test_each_request_gets_its_own_floor_loader(backend_client):
    config = Settings(DEFAULT_OWNER_ID=OWNER, LOG_DIR=None)
    first = deps.get_income_report_service(client=backend_client, config=config)
    second = deps.get_income_report_service(client=backend_client, config=config)

    assert first.loader is not second.loader
    assert first.loader.client is backend_client
