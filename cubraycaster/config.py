"""Shared constants, key codes, colours and the error type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

WIN_WIDTH = 800
WIN_HEIGHT = 600
MOVE_SPEED = 0.1
ROT_SPEED = 0.05


class CubError(Exception):
    """Raised when a scene file or the game state is invalid."""


class Key(IntEnum):
    """Key codes understood by the game."""

    W = 119
    A = 97
    S = 115
    D = 100
    LEFT = 65361
    RIGHT = 65363
    ESC = 65307


def create_rgb(r: int, g: int, b: int) -> int:
    """Pack three channels into a 0xRRGGBB integer."""
    return (r << 16) | (g << 8) | b


@dataclass(frozen=True)
class Color:
    """An RGB colour as read from a scene file."""

    r: int
    g: int
    b: int

    def to_int(self) -> int:
        """Return the colour packed as 0xRRGGBB."""
        return create_rgb(self.r, self.g, self.b)