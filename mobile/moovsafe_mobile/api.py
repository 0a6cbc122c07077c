"""
MoovSafe API client

Async wrappers around the MoovSafe REST API used by the mobile app:
vehicles, inspections and maintenance history.
"""
import logging
import os
from datetime import date, datetime
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, Tuple, Union
from uuid import UUID

import httpx

logger = logging.getLogger(__name__)

# MoovSafe API base URL (configurable via environment)
API_URL_ENV = "MOOVSAFE_API_URL"

# (filename, content, content type), as accepted by httpx
FileInput = Tuple[str, Union[bytes, BinaryIO], str]


class ApiConfigError(RuntimeError):
    """Raised when no API URL is configured."""


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str, details: Optional[list] = None):
        self.status_code = status_code
        self.message = message
        self.details = details or []
        super().__init__(f"HTTP {status_code}: {message}")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            return cls(response.status_code, response.text or response.reason_phrase)
        if isinstance(body, dict):
            return cls(response.status_code, body.get("error", response.reason_phrase), body.get("details"))
        return cls(response.status_code, response.reason_phrase)


def _form_value(value: Any) -> Union[str, List[str]]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _json_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


class MoovSafeClient:
    """Client for the MoovSafe REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        base_url = base_url or os.getenv(API_URL_ENV)
        if not base_url:
            raise ApiConfigError("API URL is not configured")
        self.client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "MoovSafeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling MoovSafe API: {e}")
            raise
        if response.is_error:
            error = ApiError.from_response(response)
            logger.warning(f"{method} {path} failed: {error}")
            raise error
        return response.json()

    async def _submit(self, path: str, data: Dict[str, Any], files: List[Tuple[str, FileInput]]) -> Any:
        """POST as JSON, or as multipart form data when files are attached."""
        fields = {k: v for k, v in data.items() if v is not None}
        if not files:
            return await self._request("POST", path, json={k: _json_value(v) for k, v in fields.items()})
        return await self._request(
            "POST",
            path,
            data={k: _form_value(v) for k, v in fields.items()},
            files=files,
        )

    # Vehicles

    async def list_vehicles(self) -> List[dict]:
        return await self._request("GET", "/api/vehicles")

    async def get_vehicle(self, vehicle_id: str) -> dict:
        return await self._request("GET", f"/api/vehicles/{vehicle_id}")

    async def get_vehicle_by_license(self, license_plate: str) -> dict:
        return await self._request("GET", f"/api/vehicles/license/{license_plate}")

    async def create_vehicle(self, vehicle: Dict[str, Any]) -> dict:
        return await self._request("POST", "/api/vehicles", json=vehicle)

    async def update_vehicle(self, vehicle_id: str, changes: Dict[str, Any]) -> dict:
        return await self._request("PUT", f"/api/vehicles/{vehicle_id}", json=changes)

    async def delete_vehicle(self, vehicle_id: str) -> dict:
        return await self._request("DELETE", f"/api/vehicles/{vehicle_id}")

    # Inspections

    async def list_inspections(self) -> List[dict]:
        return await self._request("GET", "/api/inspections")

    async def get_inspection(self, inspection_id: str) -> dict:
        return await self._request("GET", f"/api/inspections/{inspection_id}")

    async def list_inspections_by_date(self, day: Union[str, date]) -> List[dict]:
        if isinstance(day, date):
            day = day.strftime("%Y-%m-%d")
        return await self._request("GET", "/api/inspections/date", params={"date": day})

    async def create_inspection(
        self,
        inspection: Dict[str, Any],
        faults_images: Sequence[FileInput] = (),
        odometer_image: Optional[FileInput] = None,
    ) -> dict:
        files = [("faultsImages", f) for f in faults_images]
        if odometer_image:
            files.append(("odometerImage", odometer_image))
        return await self._submit("/api/inspections", inspection, files)

    async def delete_inspection(self, inspection_id: str) -> dict:
        return await self._request("DELETE", f"/api/inspections/{inspection_id}")

    # Maintenance history

    async def list_maintenance(self) -> List[dict]:
        return await self._request("GET", "/api/maintenance")

    async def get_maintenance(self, record_id: str) -> dict:
        return await self._request("GET", f"/api/maintenance/{record_id}")

    async def list_maintenance_for_vehicle(self, license_plate: str) -> List[dict]:
        return await self._request("GET", f"/api/maintenance/vehicle/{license_plate}")

    async def create_maintenance(
        self,
        record: Dict[str, Any],
        odometer_image: Optional[FileInput] = None,
        invoices: Sequence[FileInput] = (),
        photos: Sequence[FileInput] = (),
    ) -> dict:
        files = []
        if odometer_image:
            files.append(("odometerImage", odometer_image))
        files.extend(("invoices", f) for f in invoices)
        files.extend(("photos", f) for f in photos)
        return await self._submit("/api/maintenance", record, files)

    async def update_maintenance(self, record_id: str, changes: Dict[str, Any]) -> dict:
        return await self._request("PUT", f"/api/maintenance/{record_id}", json=changes)

    async def delete_maintenance(self, record_id: str) -> dict:
        return await self._request("DELETE", f"/api/maintenance/{record_id}")
