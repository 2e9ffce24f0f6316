from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from .general import Brightness, Color, Group, Location, Power, Product


class Light(BaseModel):
    id: str
    uuid: str
    label: str
    connected: bool
    power: Power
    color: Color
    brightness: Brightness
    group: Group
    location: Location
    product: Product
    last_seen: datetime
    seconds_since_seen: float
