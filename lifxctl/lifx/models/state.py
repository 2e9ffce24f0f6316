from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from .general import Power


class DesiredState(BaseModel):
    """Partial state change for one or more lights.

    Fields left as ``None`` are not sent, so the device keeps its current value
    for them. ``color`` is a LIFX colour expression ("red", "kelvin:4000",
    "hue:120 saturation:1.0", ...) and is validated by the API, not here.
    """

    power: Power | None = None
    brightness: float | None = None
    color: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class StateChangeResult(BaseModel):
    id: str
    label: str
    status: str


class StateChangeResponse(BaseModel):
    # Extra keys are preserved for the raw diagnostic dump
    model_config = ConfigDict(extra="allow")

    results: list[StateChangeResult] | None = None
    error: str | None = None
