"""Command line control for LIFX lights through the LIFX cloud API."""

__version__ = "1.0.0"
