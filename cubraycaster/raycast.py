"""Casting rays through the grid and turning them into screen columns."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .config import WIN_HEIGHT, WIN_WIDTH
from .mapcheck import GridMap
from .player import Player

_FAR = 1e30
_MAX_LINE_HEIGHT = 2**31 - 1
_HIT_CELLS = frozenset("1D")


def _cdiv(a: int, b: int) -> int:
    """Integer division that truncates toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _inverse(value: float) -> float:
    return _FAR if value == 0 else abs(1 / value)


@dataclass(frozen=True)
class Texture:
    """A wall image stored row by row as 0xRRGGBB integers."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture must have a positive size")
        if len(self.pixels) != self.width * self.height:
            raise ValueError("pixel count does not match texture size")

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("texture coordinate out of range")
        return self.pixels[y * self.width + x]


@dataclass
class Ray:
    """State of one ray while it is cast and when it has hit a wall."""

    map_x: int = 0
    map_y: int = 0
    side_dist_x: float = 0.0
    side_dist_y: float = 0.0
    delta_dist_x: float = 0.0
    delta_dist_y: float = 0.0
    step_x: int = 0
    step_y: int = 0
    side: int = 0
    cam: float = 0.0
    rd_x: float = 0.0
    rd_y: float = 0.0
    perp: float = 0.0
    lh: int = 0
    ds: int = 0
    de: int = 0
    wall_x: float = 0.0
    tex_x: int = 0


def camera_ray(player: Player, column: int) -> Ray:
    """Build the ray for a screen column, with its starting cell and step distances."""
    cam = 2 * column / WIN_WIDTH - 1
    rd_x = player.dir_x + player.plane_x * cam
    rd_y = player.dir_y + player.plane_y * cam
    map_x = int(player.x)
    map_y = int(player.y)
    delta_x = _inverse(rd_x)
    delta_y = _inverse(rd_y)
    if rd_x < 0:
        step_x, side_x = -1, (player.x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.x) * delta_x
    if rd_y < 0:
        step_y, side_y = -1, (player.y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.y) * delta_y
    return Ray(
        map_x=map_x,
        map_y=map_y,
        side_dist_x=side_x,
        side_dist_y=side_y,
        delta_dist_x=delta_x,
        delta_dist_y=delta_y,
        step_x=step_x,
        step_y=step_y,
        cam=cam,
        rd_x=rd_x,
        rd_y=rd_y,
    )


def _is_hit(grid: GridMap, row: int, col: int) -> bool:
    if row < 0 or col < 0 or row >= grid.height or col >= grid.width:
        return False
    line = grid.rows[row]
    return col < len(line) and line[col] in _HIT_CELLS


def perform_dda(ray: Ray, grid: GridMap) -> bool:
    """Step the ray cell by cell until it hits a wall; return whether it did."""
    for _ in range(grid.width * grid.height):
        if ray.side_dist_x < ray.side_dist_y:
            ray.side_dist_x += ray.delta_dist_x
            ray.map_x += ray.step_x
            ray.side = 0
        else:
            ray.side_dist_y += ray.delta_dist_y
            ray.map_y += ray.step_y
            ray.side = 1
        if _is_hit(grid, ray.map_x, ray.map_y):
            return True
    return False


def compute_wall(ray: Ray, player: Player) -> None:
    """Work out the wall distance and the span of the column it covers."""
    if ray.side == 0:
        ray.perp = (ray.map_x - player.x + (1 - ray.step_x) / 2.0) / ray.rd_x
    else:
        ray.perp = (ray.map_y - player.y + (1 - ray.step_y) / 2.0) / ray.rd_y
    try:
        ray.lh = int(WIN_HEIGHT / ray.perp)
    except (ZeroDivisionError, ValueError, OverflowError):
        ray.lh = _MAX_LINE_HEIGHT
    ray.ds = max(_cdiv(-ray.lh, 2) + WIN_HEIGHT // 2, 0)
    ray.de = min(_cdiv(ray.lh, 2) + WIN_HEIGHT // 2, WIN_HEIGHT - 1)


def select_texture(ray: Ray, textures: Sequence):
    """Pick the texture (north, south, west, east order) for the face the ray hit."""
    if ray.side == 0:
        return textures[3] if ray.rd_x > 0 else textures[2]
    return textures[1] if ray.rd_y > 0 else textures[0]


def texture_x(ray: Ray, player: Player, texture: Texture) -> int:
    """Return the texture column where the ray meets the wall."""
    if ray.side == 0:
        wall_x = player.y + ray.perp * ray.rd_y
    else:
        wall_x = player.x + ray.perp * ray.rd_x
    wall_x = wall_x - math.floor(wall_x) if math.isfinite(wall_x) else 0.0
    tex_x = int(wall_x * texture.width)
    if (ray.side == 0 and ray.rd_x > 0) or (ray.side == 1 and ray.rd_y < 0):
        tex_x = texture.width - tex_x - 1
    ray.wall_x = wall_x
    ray.tex_x = tex_x
    return tex_x


def render_column(
    player: Player,
    grid: GridMap,
    textures: Sequence[Texture],
    column: int,
    ceiling: int,
    floor: int,
) -> list[int]:
    """Return the WIN_HEIGHT colours of one screen column, top to bottom."""
    ray = camera_ray(player, column)
    perform_dda(ray, grid)
    compute_wall(ray, player)
    texture = select_texture(ray, textures)
    tex_x = min(max(texture_x(ray, player, texture), 0), texture.width - 1)

    pixels = [0] * WIN_HEIGHT
    for y in range(1, min(ray.ds, WIN_HEIGHT - 1) + 1):
        pixels[y] = ceiling
    if ray.lh:
        for y in range(ray.ds, ray.de):
            d = y * 256 - WIN_HEIGHT * 128 + ray.lh * 128
            tex_y = _cdiv(_cdiv(d * texture.height, ray.lh), 256)
            tex_y = min(max(tex_y, 0), texture.height - 1)
            pixels[y] = texture.pixel(tex_x, tex_y)
    for y in range(max(ray.de, 0), WIN_HEIGHT):
        pixels[y] = floor
    return pixels


def render_frame(
    player: Player,
    grid: GridMap,
    textures: Sequence[Texture],
    ceiling: int,
    floor: int,
) -> list[list[int]]:
    """Return every screen column, left to right."""
    return [
        render_column(player, grid, textures, column, ceiling, floor)
        for column in range(WIN_WIDTH)
    ]