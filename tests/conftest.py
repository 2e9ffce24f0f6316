from __future__ import annotations

from typing import Any, Callable

import pytest
import pytest_asyncio
import structlog
from aiohttp import web
from aiohttp.test_utils import TestServer
from structlog.testing import capture_logs

from lifxctl.lifx import LifxCloud

TOKEN = "c87c73a896b554367fac61f71dd3656af8d93a525a4e87df5952c6078a89d192"


@pytest.fixture(autouse=True)
def log_output():
    structlog.reset_defaults()
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def token() -> str:
    return TOKEN


@pytest.fixture
def make_light() -> Callable[..., dict[str, Any]]:
    counter = iter(range(1, 1000))

    def factory(
        label: str,
        group: str,
        power: str = "on",
        brightness: float = 1.0,
        kelvin: int = 3500,
        id: str | None = None,
    ) -> dict[str, Any]:
        n = next(counter)
        return {
            "id": id or f"d073d5{n:06x}",
            "uuid": f"02ea5835-9dc2-4323-84f3-3b825419{n:04x}",
            "label": label,
            "connected": True,
            "power": power,
            "color": {"hue": 250.0, "saturation": 0.0, "kelvin": kelvin},
            "brightness": brightness,
            "effect": "OFF",
            "group": {"id": f"1c8de82b81f445e7cfaafae49b259c{n:02x}", "name": group},
            "location": {"id": "1d6fe8ef0fde4c6d77b0012dc736662c", "name": "Home"},
            "product": {
                "name": "LIFX A19",
                "identifier": "lifx_a19",
                "company": "LIFX",
                "vendor_id": 1,
                "product_id": 43,
                "capabilities": {"has_color": True, "has_variable_color_temp": True},
            },
            "last_seen": "2024-01-25T00:37:19Z",
            "seconds_since_seen": 0,
        }

    return factory


class FakeLifxApi:
    """Minimal LIFX HTTP API that records every request it gets."""

    def __init__(self) -> None:
        self.lights: list[dict[str, Any]] = []
        self.requests: list[dict[str, Any]] = []
        # light id (or "all") -> response body for PUTs
        self.state_responses: dict[str, Any] = {}
        self.state_statuses: dict[str, int] = {}
        self.lights_status = 200
        self.url = ""

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/v1/lights/all", self._get_lights)
        app.router.add_put("/v1/lights/all", self._put_all)
        app.router.add_put("/v1/lights/{selector}/state", self._put_state)
        return app

    def puts(self) -> list[dict[str, Any]]:
        return [r for r in self.requests if r["method"] == "PUT"]

    async def _record(self, request: web.Request) -> None:
        body = await request.json() if request.can_read_body else None
        self.requests.append(
            {
                "method": request.method,
                "path": request.path,
                "authorization": request.headers.get("Authorization"),
                "body": body,
            }
        )

    async def _get_lights(self, request: web.Request) -> web.Response:
        await self._record(request)
        if self.lights_status != 200:
            return web.json_response({"error": "Server error"}, status=self.lights_status)
        return web.json_response(self.lights)

    async def _put_all(self, request: web.Request) -> web.Response:
        await self._record(request)
        if "all" in self.state_responses:
            return web.json_response(self.state_responses["all"], status=self.state_statuses.get("all", 207))
        results = [{"id": light["id"], "label": light["label"], "status": "ok"} for light in self.lights]
        return web.json_response({"results": results}, status=207)

    async def _put_state(self, request: web.Request) -> web.Response:
        await self._record(request)
        light_id = request.match_info["selector"].removeprefix("id:")
        if light_id in self.state_responses:
            return web.json_response(self.state_responses[light_id], status=self.state_statuses.get(light_id, 207))
        label = next((light["label"] for light in self.lights if light["id"] == light_id), "")
        return web.json_response({"results": [{"id": light_id, "label": label, "status": "ok"}]}, status=207)


@pytest_asyncio.fixture
async def fake_api():
    api = FakeLifxApi()
    server = TestServer(api.make_app())
    await server.start_server()
    api.url = str(server.make_url("/v1"))
    yield api
    await server.close()


@pytest_asyncio.fixture
async def cloud(fake_api):
    async with LifxCloud(TOKEN, api_url=fake_api.url) as client:
        yield client
