from .general import Color, Group, Location, Power, Product
from .light import Light
from .state import DesiredState, StateChangeResponse, StateChangeResult

__all__ = [
    "Color",
    "DesiredState",
    "Group",
    "Light",
    "Location",
    "Power",
    "Product",
    "StateChangeResponse",
    "StateChangeResult",
]
