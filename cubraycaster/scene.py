"""Reading a scene file and parsing its texture and colour header."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from .config import Color, CubError

_ATOI_RE = re.compile(r"[\t\n\v\f\r ]*([+-]?)([0-9]*)")

_DIRECTIONS = {"NO ": "north", "SO ": "south", "WE ": "west", "EA ": "east"}


@dataclass(frozen=True)
class Scene:
    """The header of a scene file together with all of its lines."""

    lines: tuple[str, ...]
    north: Optional[str]
    south: Optional[str]
    west: Optional[str]
    east: Optional[str]
    floor: Color
    ceiling: Color
    last_info_line: int

    @property
    def textures(self) -> tuple[Optional[str], ...]:
        """Texture paths in the order north, south, west, east."""
        return (self.north, self.south, self.west, self.east)


def atoi(text: str) -> int:
    """Parse a leading integer the way the C library does; 0 when there is none."""
    match = _ATOI_RE.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def read_lines(path: Union[str, os.PathLike]) -> list[str]:
    """Return the file's lines, each keeping its trailing newline."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError("Error opening the file(map)") from exc
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def extract_path(line: str) -> str:
    """Return the value that follows a two-character identifier on a header line."""
    rest = line[2:].lstrip(" ")
    if rest.startswith("."):
        rest = rest[1:]
        if rest.startswith("/"):
            rest = rest[1:]
    return rest.split("\n", 1)[0].split("\0", 1)[0]


def parse_color(info: Optional[str]) -> Color:
    """Parse an "R,G,B" value into a Color."""
    if not info:
        raise CubError("Invalid Map(Color error)")
    tail = info[2:]
    if ",," in tail:
        raise CubError("Invalid Map(Color range)")
    if tail.count(",") != 2:
        raise CubError("Invalid Map(Color error)")
    parts = [piece for piece in info.split(",") if piece]
    if len(parts) < 3:
        raise CubError("Invalid Map(Color error)")
    return Color(atoi(parts[0]), atoi(parts[1]), atoi(parts[2]))


def _identify(line: str) -> Optional[str]:
    if len(line) <= 5:
        return None
    head = line[0]
    if head in "NSEW":
        return _DIRECTIONS.get(line[:3])
    if head == "C":
        return "ceiling"
    if head == "F" and line[1] == " ":
        return "floor"
    return None


def _in_range(color: Color) -> bool:
    return all(0 <= channel <= 255 for channel in (color.r, color.g, color.b))


def parse_header(lines: Sequence[str]) -> Scene:
    """Find the six identifiers, parse the colours and return the scene."""
    found: dict[str, Optional[str]] = {}
    counted = 0
    last_info = 0
    for index, line in enumerate(lines):
        key = _identify(line)
        if key is not None:
            if found.get(key) is None:
                counted += 1
                found[key] = extract_path(line) or None
            last_info = max(last_info, index)
        if 0 < len(line) < 6 and line[0] != "\n":
            raise CubError("Invalid Coords")
    if counted != 6:
        raise CubError("Invalid Coords")
    floor = parse_color(found.get("floor"))
    ceiling = parse_color(found.get("ceiling"))
    if not (_in_range(ceiling) and _in_range(floor)):
        raise CubError("Invalid info for Coords")
    return Scene(
        lines=tuple(lines),
        north=found.get("north"),
        south=found.get("south"),
        west=found.get("west"),
        east=found.get("east"),
        floor=floor,
        ceiling=ceiling,
        last_info_line=last_info,
    )


def check_textures_readable(scene: Scene) -> None:
    """Raise CubError unless every texture path is present and exists."""
    for texture in scene.textures:
        if not texture:
            raise CubError("Invalid Map(Texture missing)")
        if not os.access(texture, os.F_OK) and not os.access(texture, os.R_OK):
            raise CubError("Invalid Map(Texture path/access error)")


def parse_scene(path: Union[str, os.PathLike]) -> Scene:
    """Read a scene file and validate its header."""
    lines = read_lines(Path(path))
    if not lines:
        raise CubError("Empty Map")
    scene = parse_header(lines)
    check_textures_readable(scene)
    return scene