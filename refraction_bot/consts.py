"""Colour constants used by the bot's embeds."""

from __future__ import annotations

from enum import IntEnum


class Colors(IntEnum):
    """Named embed colours; the value is the 24-bit RGB integer."""

    BLUE = 0x60A5FA
    GREEN = 0x22C55E
    ORANGE = 0xFB923C
    RED = 0xEF4444
    YELLOW = 0xFDE047


def parse_color(name: str) -> Colors:
    """Return the colour named by ``name``, ignoring case.

    Raises ValueError when the name is not a known colour.
    """
    try:
        return Colors[name.upper()]
    except KeyError:
        raise ValueError(f"unknown colour: {name!r}") from None


def default_color() -> Colors:
    """Return the default colour."""
    return Colors.GREEN