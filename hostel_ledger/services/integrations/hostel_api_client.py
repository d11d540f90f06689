"""
HTTP client for the hostel backend.

Only the two read endpoints the income report needs are wrapped:

    GET {base}/api/hostels/{ownerId}          -> {data: HostelDoc}
    GET {base}/api/addroomandbeds?floorId=..  -> {rooms: [...]}

Responses are returned as decoded JSON; shape normalization happens in
`hostel_ledger.services.report.normalization`.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from hostel_ledger.config.settings import Settings, settings as default_settings
from hostel_ledger.core.exceptions import ExternalServiceError, TimeoutError

logger = logging.getLogger(__name__)

SERVICE_NAME = "hostel-backend"


class HostelApiClient:
    """Thin async wrapper around ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        config: Optional[Settings] = None,
    ):
        config = config or default_settings
        self.base_url = (base_url or config.HOSTEL_API_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else config.HOSTEL_API_TIMEOUT_SECONDS
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "HostelApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_hostel(self, owner_id: str) -> Any:
        return await self._get_json(f"/api/hostels/{quote(str(owner_id), safe='')}")

    async def get_floor_rooms(self, floor_id: str) -> Any:
        return await self._get_json("/api/addroomandbeds", params={"floorId": floor_id})

    async def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling {path}: {e}")
            raise TimeoutError(
                f"Hostel backend timed out on {path}",
                timeout_seconds=self.timeout_seconds,
                service_name=SERVICE_NAME,
            ) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"Hostel backend returned {status} for {path}")
            raise ExternalServiceError(
                _error_message(e.response) or f"Hostel backend returned status {status}",
                service_name=SERVICE_NAME,
                status=status,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise ExternalServiceError(
                f"Failed to contact hostel backend: {e}",
                service_name=SERVICE_NAME,
            ) from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {path}: {e}")
            raise ExternalServiceError(
                "Hostel backend returned invalid JSON",
                service_name=SERVICE_NAME,
            ) from e


def _error_message(response: httpx.Response) -> Optional[str]:
    """Backend error bodies look like ``{"message": "..."}``."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
