from __future__ import annotations

from typing import Iterable

from lifxctl.lifx.models import Light


def matches(light: Light, selector: str) -> bool:
    needle = selector.casefold()
    return needle in light.label.casefold() or needle in light.group.name.casefold()


def filter_lights(lights: Iterable[Light], selector: str) -> list[Light]:
    """Lights whose label or group name contains ``selector``, ignoring case.

    Input order is kept. An empty result is not an error.
    """
    return [light for light in lights if matches(light, selector)]
