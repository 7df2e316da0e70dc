"""
Tests for the backend client and the layout runner.

The backend is faked with ``httpx.MockTransport``; no network access.
"""

import json

import httpx
import pytest

from warehouse_layout.runner.backend import BackendError, WarehouseApiClient
from warehouse_layout.runner.layout import LayoutRunner, main


FLOORS = [
    {"floorCode": "SH001-F1", "shelfCode": "SH001", "floorNumber": 1, "maxWeight": 500},
    {"floorCode": "SH001-F2", "shelfCode": "SH001", "floorNumber": 2},
    {"floorCode": "SH001-F3", "shelfCode": "SH001"},
]

CONTAINERS = {
    "SH001-F1": {"success": True, "data": [
        {"containerCode": "C1", "type": "A", "status": "Stored",
         "positionX": 0.1, "positionY": 0.6, "positionZ": -0.4},
        {"containerCode": "C2", "type": "B", "status": "Pending"},
    ]},
    # bare list body
    "SH001-F3": [{"containerCode": "C3", "type": "C", "status": "Stored"}],
}


def backend(requests=None):
    """Fake API: floor F2's container request fails with HTTP 500."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if request.url.path == "/api/Floor":
            return httpx.Response(200, json={"data": FLOORS})
        if request.url.path == "/api/Container":
            code = request.url.params["floorCode"]
            if code in CONTAINERS:
                return httpx.Response(200, json=CONTAINERS[code])
            return httpx.Response(500, json={"message": "boom"})
        return httpx.Response(404)

    return httpx.MockTransport(handler)


@pytest.fixture
def client():
    return WarehouseApiClient(base_url="http://backend.test", token="secret", transport=backend())


# ---------------------------------------------------------------------------
# 1. Client
# ---------------------------------------------------------------------------

class TestWarehouseApiClient:
    @pytest.mark.asyncio
    async def test_get_floors(self, client):
        async with client:
            floors = await client.get_floors("SH001")
        assert [f.floor_code for f in floors] == ["SH001-F1", "SH001-F2", "SH001-F3"]
        assert floors[2].floor_number is None

    @pytest.mark.asyncio
    async def test_request_params_and_auth(self):
        seen = []
        async with WarehouseApiClient(
            base_url="http://backend.test", token="secret", transport=backend(seen)
        ) as api:
            await api.get_containers("SH001-F1")
        request = seen[0]
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.url.params["pageSize"] == "1000"
        assert request.url.params["floorCode"] == "SH001-F1"

    @pytest.mark.asyncio
    async def test_no_token_no_auth_header(self, monkeypatch):
        monkeypatch.delenv("WAREHOUSE_API_TOKEN", raising=False)
        seen = []
        async with WarehouseApiClient(base_url="http://backend.test", transport=backend(seen)) as api:
            await api.get_floors("SH001")
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_http_error_raises(self, client):
        async with client:
            with pytest.raises(BackendError, match="SH001-F2"):
                await client.get_containers("SH001-F2")

    @pytest.mark.asyncio
    async def test_fetch_isolates_failures(self, client):
        async with client:
            floors = await client.get_floors("SH001")
            result = await client.fetch_containers_by_floor(floors)
        assert [c.container_code for c in result["SH001-F1"]] == ["C1", "C2"]
        assert isinstance(result["SH001-F2"], BackendError)
        assert [c.container_code for c in result["SH001-F3"]] == ["C3"]

    @pytest.mark.asyncio
    async def test_repeated_floor_fetched_once(self):
        seen = []
        async with WarehouseApiClient(
            base_url="http://backend.test", transport=backend(seen)
        ) as api:
            floors = await api.get_floors("SH001")
            result = await api.fetch_containers_by_floor(floors + floors[:1])
        container_calls = [r for r in seen if r.url.path == "/api/Container"]
        assert sorted(r.url.params["floorCode"] for r in container_calls) == [
            "SH001-F1", "SH001-F2", "SH001-F3",
        ]
        assert list(result) == ["SH001-F1", "SH001-F2", "SH001-F3"]

    @pytest.mark.asyncio
    async def test_invalid_record_raises(self):
        def handler(request):
            return httpx.Response(200, json={"data": [{"floorCode": "X", "floorNumber": "top"}]})

        async with WarehouseApiClient(
            base_url="http://backend.test", transport=httpx.MockTransport(handler)
        ) as api:
            with pytest.raises(BackendError, match="Invalid floor record"):
                await api.get_floors("SH001")


# ---------------------------------------------------------------------------
# 2. Runner
# ---------------------------------------------------------------------------

class TestLayoutRunner:
    @pytest.mark.asyncio
    async def test_real_layout_partial_failure(self, client):
        async with client:
            layout = await LayoutRunner().real_layout("SH001", client)
        assert layout.failed_floors == ("SH001-F2",)
        assert layout.levels[2] == []
        assert layout.levels[1][0].position == (0.1, 0.6, -0.4)
        assert layout.levels[3][0].id == "C3"

    @pytest.mark.asyncio
    async def test_floor_listing_failure_propagates(self):
        def handler(request):
            return httpx.Response(503)

        async with WarehouseApiClient(
            base_url="http://backend.test", transport=httpx.MockTransport(handler)
        ) as api:
            with pytest.raises(BackendError):
                await LayoutRunner().real_layout("SH001", api)

    def test_mock_layout(self):
        result = LayoutRunner().mock_layout(7, seed=4)
        assert len(result["units"]) == 4
        assert sorted(result["levels"]) == ["1", "2", "3", "4"]
        total = sum(len(items) for items in result["levels"].values())
        assert result["summary"]["total_items"] == total

    def test_mock_layout_seeded(self):
        a = LayoutRunner().mock_layout(3, seed=9)
        b = LayoutRunner().mock_layout(3, seed=9)
        assert a["levels"] == b["levels"]

    @pytest.mark.asyncio
    async def test_cli_mock(self, capsys):
        code = await main(["mock", "--units", "5", "--seed", "1", "--offset", "1,0,-2"])
        out = json.loads(capsys.readouterr().out)
        assert code == 0
        assert sum(2 if u["type"] == "double" else 1 for u in out["units"]) == 5
        assert out["units"][0]["position"][0] == pytest.approx(-5.13 + 1.0)
