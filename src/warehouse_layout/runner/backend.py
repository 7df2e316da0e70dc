"""Async client for the warehouse backend.

Fetches the records the real-data mapper consumes:
- the floors of a storage unit (``GET /api/Floor``)
- the containers of a floor (``GET /api/Container``)

Container fetches run concurrently, one request per floor. A floor whose
request fails yields the exception in place of its records, so one bad
floor never aborts the whole unit. No retry logic.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Sequence

import httpx
from pydantic import ValidationError

from warehouse_layout.core.records import ContainerRecord, FloorRecord

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.environ.get("WAREHOUSE_API_BASE_URL", "")
DEFAULT_TIMEOUT = 15.0


class BackendError(RuntimeError):
    """A backend request failed or returned an unreadable body."""


def _rows(body: Any) -> list[dict]:
    # Endpoints answer either {"data": [...]} or a bare list.
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("data"), list):
        return body["data"]
    return []


class WarehouseApiClient:
    """
    Thin wrapper over ``httpx.AsyncClient``.

    Args:
        base_url:    API root. Defaults to WAREHOUSE_API_BASE_URL env var.
        token:       Bearer token. Defaults to WAREHOUSE_API_TOKEN env var.
        timeout:     Per-request timeout in seconds.
        concurrency: Maximum container requests in flight.
        transport:   Optional httpx transport (tests use httpx.MockTransport).

    Usage:
        async with WarehouseApiClient() as api:
            floors = await api.get_floors("SH001")
            containers = await api.fetch_containers_by_floor(floors)
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        concurrency: int = 8,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        token = token or os.environ.get("WAREHOUSE_API_TOKEN", "")
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.concurrency = max(1, concurrency)
        self._client = httpx.AsyncClient(
            base_url=base_url if base_url is not None else DEFAULT_BASE_URL,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> WarehouseApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_rows(self, path: str, params: dict[str, Any]) -> list[dict]:
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            return _rows(resp.json())
        except (httpx.HTTPError, ValueError) as exc:
            raise BackendError(f"GET {path} {params} failed: {exc}") from exc

    async def get_floors(self, shelf_code: str, page_size: int = 100) -> list[FloorRecord]:
        """
        List the floors of a storage unit.

        Raises:
            BackendError: On transport, HTTP or validation errors.
        """
        rows = await self._get_rows(
            "/api/Floor", {"shelfCode": shelf_code, "pageNumber": 1, "pageSize": page_size}
        )
        try:
            return [FloorRecord.model_validate(r) for r in rows]
        except ValidationError as exc:
            raise BackendError(f"Invalid floor record for {shelf_code}: {exc}") from exc

    async def get_containers(self, floor_code: str, page_size: int = 1000) -> list[ContainerRecord]:
        """
        List the containers of one floor.

        Raises:
            BackendError: On transport, HTTP or validation errors.
        """
        rows = await self._get_rows(
            "/api/Container", {"floorCode": floor_code, "pageNumber": 1, "pageSize": page_size}
        )
        try:
            return [ContainerRecord.model_validate(r) for r in rows]
        except ValidationError as exc:
            raise BackendError(f"Invalid container record on {floor_code}: {exc}") from exc

    async def fetch_containers_by_floor(
        self, floors: Sequence[FloorRecord]
    ) -> dict[str, list[ContainerRecord] | BaseException]:
        """
        Fetch containers for every floor concurrently.

        Returns:
            Floor code -> records, or the BackendError that floor's fetch raised.
        """
        sem = asyncio.Semaphore(self.concurrency)

        async def one(code: str) -> list[ContainerRecord]:
            async with sem:
                return await self.get_containers(code)

        # A floor listed twice is fetched once.
        codes = list(dict.fromkeys(f.floor_code for f in floors))
        results = await asyncio.gather(*(one(c) for c in codes), return_exceptions=True)
        for code, result in zip(codes, results):
            if isinstance(result, BaseException):
                logger.warning("Container fetch failed for floor %s: %s", code, result)
        return dict(zip(codes, results))
