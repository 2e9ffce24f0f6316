from __future__ import annotations

from enum import Enum
from typing import Any

from annotated_types import Ge, Le
from pydantic import BaseModel
from typing_extensions import Annotated


class Power(str, Enum):
    ON = "on"
    OFF = "off"

    def __str__(self) -> str:
        return self.value


Brightness = Annotated[float, Ge(0), Le(1)]
Hue = Annotated[float, Ge(0), Le(360)]
Saturation = Annotated[float, Ge(0), Le(1)]


class Color(BaseModel):
    hue: Hue
    saturation: Saturation
    kelvin: int


class Group(BaseModel):
    id: str
    name: str


# Same shape as a group, kept apart so the two references can't be mixed up
class Location(BaseModel):
    id: str
    name: str


class Product(BaseModel):
    name: str
    identifier: str
    company: str
    vendor_id: int
    product_id: int
    capabilities: dict[str, Any] | None = None
