from __future__ import annotations

import aiohttp
import structlog
import yarl

from lifxctl.errors import NotConnectedError

from .models import DesiredState, Light, StateChangeResponse

logger = structlog.getLogger(__name__)

DEFAULT_API_URL = "https://api.lifx.com/v1"


class LifxCloud:
    def __init__(self, access_token: str, api_url: str = DEFAULT_API_URL, timeout: float | None = None) -> None:
        self.api_url: yarl.URL = yarl.URL(api_url.rstrip("/"))
        self.access_token = access_token
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    def _new_session(self, **kwargs) -> aiohttp.ClientSession:
        if self.timeout is not None:
            kwargs.setdefault("timeout", aiohttp.ClientTimeout(total=self.timeout))
        return aiohttp.ClientSession(
            headers={"Authorization": f"Bearer {self.access_token}"},
            **kwargs,
        )

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise NotConnectedError("Not connected")
        return self._session

    async def __aenter__(self) -> LifxCloud:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def connect(self):
        self._session = self._new_session()

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def get_lights(self) -> list[Light]:
        resp = await self.session.get(self.api_url / "lights" / "all")
        resp.raise_for_status()
        data = await resp.json()
        lights = [Light.model_validate(item) for item in data]
        logger.debug("Lights fetched", count=len(lights))
        return lights

    async def set_light_state(self, light_id: str, state: DesiredState) -> StateChangeResponse:
        return await self._put_state(self.api_url / "lights" / f"id:{light_id}" / "state", state)

    async def set_all_state(self, state: DesiredState) -> StateChangeResponse:
        return await self._put_state(self.api_url / "lights" / "all", state)

    async def _put_state(self, url: yarl.URL, state: DesiredState) -> StateChangeResponse:
        payload = state.to_payload()
        logger.debug("Sending state change", url=str(url), payload=payload)
        resp = await self.session.put(url, json=payload)
        # LIFX reports per-light failures as 4xx with a JSON error body
        if not resp.ok:
            logger.debug("State change rejected", url=str(url), status=resp.status)
        data = await resp.json()
        return StateChangeResponse.model_validate(data)
