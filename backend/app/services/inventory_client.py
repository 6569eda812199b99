"""HTTP client and in-memory record state for the filament inventory API.

The browser UI drives the API through these classes; scripts can use them
against a running server the same way.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

import httpx

logger = logging.getLogger(__name__)


class InventoryClientError(Exception):
    """An API call failed (transport error or non-2xx response)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


@dataclass
class FilamentRecord:
    """A filament spool as returned by the API."""

    id: int
    brand: str
    type: str
    color_name: str
    color_hex: str
    quantity: float
    notes: str | None = None
    last_used: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "FilamentRecord":
        last_used = data.get("lastUsed")
        return cls(
            id=data["id"],
            brand=data["brand"],
            type=data["type"],
            color_name=data["colorName"],
            color_hex=data["colorHex"],
            quantity=float(data["quantity"]),
            notes=data.get("notes"),
            last_used=datetime.fromisoformat(last_used) if last_used else None,
        )

    def to_payload(self) -> dict:
        """The writable fields, keyed the way the API expects them."""
        return {
            "brand": self.brand,
            "type": self.type,
            "colorName": self.color_name,
            "colorHex": self.color_hex,
            "quantity": self.quantity,
            "notes": self.notes,
        }


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, list):
        # FastAPI validation errors: [{"loc": [...], "msg": "..."}]
        return "; ".join(f"{'.'.join(str(p) for p in err.get('loc', [])[1:])}: {err.get('msg')}" for err in detail)
    return detail or f"HTTP {response.status_code}"


class InventoryClient:
    """Client for the filament inventory REST API."""

    def __init__(
        self,
        base_url: str,
        api_prefix: str = "/api/v1",
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        """Initialize the client.

        Args:
            base_url: Server root, e.g. http://localhost:3000
            api_prefix: Path prefix the API routes are mounted under
            transport: Optional httpx transport (ASGITransport for in-process calls)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}{api_prefix}/filaments"
        self._transport = transport
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(transport=self._transport, timeout=self._timeout)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "InventoryClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def _request(self, method: str, url: str, **kwargs) -> dict | list:
        try:
            response = await self._get_client().request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise InventoryClientError(f"{method} {url} failed: {e}") from e
        if response.is_error:
            raise InventoryClientError(_error_detail(response), status_code=response.status_code)
        return response.json()

    async def list_filaments(self) -> list[FilamentRecord]:
        data = await self._request("GET", f"{self.api_url}/")
        return [FilamentRecord.from_dict(item) for item in data]

    async def create_filament(self, payload: dict) -> FilamentRecord:
        data = await self._request("POST", f"{self.api_url}/", json=payload)
        return FilamentRecord.from_dict(data)

    async def update_filament(self, filament_id: int, payload: dict) -> FilamentRecord:
        data = await self._request("PUT", f"{self.api_url}/{filament_id}", json=payload)
        return FilamentRecord.from_dict(data)

    async def delete_filament(self, filament_id: int) -> None:
        await self._request("DELETE", f"{self.api_url}/{filament_id}")


class InventoryState:
    """The full record set as last fetched from the API.

    Every mutation is one round trip followed by a full refetch, so ``records``
    only ever holds what the server returned. A failed call leaves ``records``
    as it was and stores the message in ``last_error``.
    """

    def __init__(self, client: InventoryClient):
        self.client = client
        self.records: list[FilamentRecord] = []
        self.last_error: str | None = None

    def get(self, filament_id: int) -> FilamentRecord | None:
        return next((r for r in self.records if r.id == filament_id), None)

    async def refresh(self) -> bool:
        try:
            records = await self.client.list_filaments()
        except InventoryClientError as e:
            logger.error("Failed to load filaments: %s", e)
            self.last_error = f"Could not load filaments: {e}"
            return False
        self.records = records
        return True

    async def create(self, payload: dict) -> bool:
        return await self._mutate("save filament", self.client.create_filament(payload))

    async def update(self, filament_id: int, payload: dict) -> bool:
        return await self._mutate("save filament", self.client.update_filament(filament_id, payload))

    async def delete(self, filament_id: int) -> bool:
        return await self._mutate("delete filament", self.client.delete_filament(filament_id))

    async def increment_quantity(self, record: FilamentRecord) -> bool:
        """Add one spool by re-sending the whole record with quantity + 1."""
        payload = record.to_payload()
        payload["quantity"] = record.quantity + 1
        return await self._mutate("increase stock", self.client.update_filament(record.id, payload))

    async def _mutate(self, action: str, call) -> bool:
        try:
            await call
        except InventoryClientError as e:
            logger.warning("Failed to %s: %s", action, e)
            self.last_error = f"Could not {action}: {e}"
            return False
        self.last_error = None
        return await self.refresh()
