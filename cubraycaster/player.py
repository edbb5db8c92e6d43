"""Player position, view direction and movement."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .config import MOVE_SPEED, ROT_SPEED, Key
from .mapcheck import GridMap, Spawn

_ORIENTATIONS = {
    "N": (0.0, -1.0, 0.8, 0.0),
    "S": (0.0, 1.0, -0.8, 0.0),
    "W": (-1.0, 0.0, 0.1, -0.8),
    "E": (1.0, 0.0, 0.1, 0.8),
}


def check_collision(grid: GridMap, x: float, y: float) -> bool:
    """Return True when the cell holding (x, y) can be walked into."""
    return not grid.is_wall(int(x), int(y))


@dataclass
class Player:
    """The camera: position, direction vector and camera plane."""

    x: float = 0.0
    y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    @classmethod
    def from_spawn(cls, spawn: Optional[Spawn]) -> "Player":
        """Place a player on a spawn point, facing the spawn's direction."""
        if spawn is None:
            return cls()
        dir_x, dir_y, plane_x, plane_y = _ORIENTATIONS.get(
            spawn.direction, (0.0, 0.0, 0.0, 0.0)
        )
        return cls(spawn.x, spawn.y, dir_x, dir_y, plane_x, plane_y)

    def rotate(self, key: int) -> None:
        """Turn the view for the left or right arrow; other keys do nothing."""
        if key == Key.RIGHT:
            rot = ROT_SPEED
        elif key == Key.LEFT:
            rot = -ROT_SPEED
        else:
            return
        cos_r, sin_r = math.cos(rot), math.sin(rot)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_r - self.dir_y * sin_r,
            self.dir_x * sin_r + self.dir_y * cos_r,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_r - self.plane_y * sin_r,
            self.plane_x * sin_r + self.plane_y * cos_r,
        )

    def target(self, key: int) -> tuple[float, float]:
        """Return the position a movement key would take the player to."""
        if key == Key.W:
            return self.x + self.dir_x * MOVE_SPEED, self.y + self.dir_y * MOVE_SPEED
        if key == Key.S:
            return self.x - self.dir_x * MOVE_SPEED, self.y - self.dir_y * MOVE_SPEED
        if key == Key.A:
            return self.x - self.plane_x * MOVE_SPEED, self.y - self.plane_y * MOVE_SPEED
        if key == Key.D:
            return self.x + self.plane_x * MOVE_SPEED, self.y + self.plane_y * MOVE_SPEED
        return self.x, self.y

    def update(self, key: int, grid: GridMap) -> None:
        """Apply a key press: move unless blocked by a wall, and rotate."""
        new_x, new_y = self.target(key)
        self.rotate(key)
        if check_collision(grid, new_x, new_y):
            self.x, self.y = new_x, new_y