from __future__ import annotations

import json
from typing import Sequence

import structlog

from lifxctl.errors import InvalidInputError
from lifxctl.lifx import LifxCloud
from lifxctl.lifx.models import DesiredState, Light, Power, StateChangeResponse
from lifxctl.selector import filter_lights

logger = structlog.getLogger(__name__)


def build_desired_state(
    on: bool = False,
    off: bool = False,
    brightness: str | None = None,
    colour: str | None = None,
) -> DesiredState:
    """Turn the ``set`` flags into a state change.

    ``on`` takes precedence over ``off`` when both are given. ``brightness`` is
    the raw command line value; anything ``float()`` rejects is an error for
    the whole invocation.
    """
    power: Power | None = None
    if on:
        if off:
            logger.debug("Both --on and --off given, --on wins")
        power = Power.ON
    elif off:
        power = Power.OFF

    level: float | None = None
    if brightness is not None:
        try:
            level = float(brightness)
        except ValueError:
            raise InvalidInputError(f"Invalid brightness value: {brightness!r}") from None

    return DesiredState(power=power, brightness=level, color=colour)


def format_light(light: Light) -> str:
    return (
        f"{light.label} - {light.group.name} - power:{light.power.name.title()}, "
        f"brightness:{light.brightness}, temperature:{light.color.kelvin}k"
    )


def list_lights(lights: Sequence[Light]) -> None:
    for light in lights:
        print(format_light(light))


def format_raw_response(response: StateChangeResponse) -> str:
    return json.dumps(response.model_dump(mode="json", exclude_unset=True), indent=2)


async def apply_state(cloud: LifxCloud, target: Light | None, state: DesiredState) -> StateChangeResponse:
    # No target means every light on the account, in one request
    if target is None:
        return await cloud.set_all_state(state)
    return await cloud.set_light_state(target.id, state)


async def set_lights(
    cloud: LifxCloud,
    lights: Sequence[Light],
    state: DesiredState,
    selector: str | None = None,
) -> None:
    if selector is None:
        print("Setting all lights")
        response = await apply_state(cloud, None, state)
        if response.results is not None:
            for result in response.results:
                print(f" - {result.status}")
        else:
            logger.info("State change returned no results", error=response.error)
            print(f"Something went wrong - {format_raw_response(response)}")
        print()
        return

    targets = filter_lights(lights, selector)
    if not targets:
        logger.info("No lights matched selector", selector=selector)

    for light in targets:
        print(f"Updating {light.label} in {light.group.name}", end="")
        response = await apply_state(cloud, light, state)
        if response.results is not None:
            for result in response.results:
                print(f" - {result.status}", end="")
        else:
            logger.info("State change returned no results", light=light.label, error=response.error)
            print(f" Something went wrong - {format_raw_response(response)}")
        print()
