"""Extracting the grid from a scene file and checking that it is closed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .config import CubError

_ALLOWED = frozenset("\n01NSWE ")
_SPAWN_CHARS = frozenset("NSWE")
_WHITESPACE = frozenset(" \n\t\v\f\r")
_WALKABLE = frozenset("0NSEW")
_MAX_SPAWNS = 4


@dataclass(frozen=True)
class Spawn:
    """Where the player starts: facing letter and position (row, column) centred in its cell."""

    direction: str
    x: float
    y: float


@dataclass(frozen=True)
class GridMap:
    """A checked map whose rows are all padded to the same width."""

    rows: tuple[str, ...]
    spawn: Optional[Spawn] = None

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    @property
    def width(self) -> int:
        """Length of the longest row."""
        return max((len(row) for row in self.rows), default=0)

    def is_wall(self, row: int, col: int) -> bool:
        """Return True when the cell is a wall; cells outside the grid count as walls."""
        if row < 0 or col < 0 or row >= len(self.rows):
            return True
        line = self.rows[row]
        if col >= len(line):
            return True
        return line[col] == "1"


def extract_map(lines: Sequence[str], last_info_line: int) -> list[str]:
    """Return the map rows that follow the header line at ``last_info_line``."""
    start = last_info_line
    candidate = last_info_line + 1
    if candidate >= len(lines):
        raise CubError("Invalid Map")
    if lines[candidate].startswith("\n"):
        candidate += 1
    if candidate >= len(lines):
        raise CubError("Invalid Map")
    if len(lines[candidate]) > 1:
        start = candidate
    return list(lines[start:])


def check_chars(rows: Sequence[str]) -> None:
    """Raise CubError if any row holds a character that is not allowed in a map."""
    if any(ch not in _ALLOWED for row in rows for ch in row):
        raise CubError("Invalid Map(strange char)")


def check_no_empty_lines(rows: Sequence[str]) -> None:
    """Raise CubError if a row is made only of spaces and newlines."""
    for row in rows:
        if all(ch in " \n" for ch in row):
            raise CubError("Invalid Map(Empty space/line in map)")


def find_spawn(rows: Sequence[str]) -> Optional[Spawn]:
    """Return the last spawn point found, or None; too many spawn points is an error."""
    spawn: Optional[Spawn] = None
    count = 0
    for row_index, row in enumerate(rows):
        for col_index, ch in enumerate(row):
            if ch in _SPAWN_CHARS:
                spawn = Spawn(ch, row_index + 0.5, col_index + 0.5)
                count += 1
    if count > _MAX_SPAWNS:
        raise CubError("Invalid Map(wrong number of coords)")
    return spawn


def check_begin_wall(line: str) -> bool:
    """Check that the first floor cell of a line has a wall right before it."""
    for prev, ch in zip(line, line[1:]):
        if ch == "0":
            return prev == "1"
    return True


def check_end_wall(line: str) -> bool:
    """Check that a line does not end in an open floor cell."""
    return not (len(line) >= 2 and line[-1] == "0")


def pad_map(rows: Sequence[str]) -> list[str]:
    """Turn whitespace into walls and pad every row with walls to the widest row."""
    cols = max((len(row) for row in rows), default=0)
    fixed = []
    for row in rows:
        filled = "".join("1" if ch in _WHITESPACE else ch for ch in row)
        fixed.append(filled.ljust(cols, "1"))
    return fixed


def _check_wall_integrity(rows: Sequence[str]) -> None:
    for row in rows:
        if not check_begin_wall(row) or not check_end_wall(row):
            raise CubError("Invalid Map(walls with holes)")


def _borders_closed(fixed: Sequence[str], cols: int) -> bool:
    if any(ch != "1" for ch in fixed[0][: max(cols - 1, 0)]):
        return False
    if any(ch != "1" for ch in fixed[-1]):
        return False
    return all(row and row[0] == "1" and row[-1] == "1" for row in fixed)


def _interior_closed(fixed: Sequence[str], cols: int) -> bool:
    for i in range(1, len(fixed) - 1):
        for j in range(1, cols - 1):
            if fixed[i][j] not in _WALKABLE:
                continue
            neighbours = (fixed[i - 1][j], fixed[i + 1][j], fixed[i][j - 1], fixed[i][j + 1])
            if " " in neighbours:
                return False
    return True


def check_walls(rows: Sequence[str]) -> list[str]:
    """Check that the map is enclosed by walls and return its padded rows."""
    if not rows:
        raise CubError("Invalid Map")
    _check_wall_integrity(rows)
    cols = max(len(row) for row in rows)
    fixed = pad_map(rows)
    if not (_borders_closed(fixed, cols) and _interior_closed(fixed, cols)):
        raise CubError("Invalid Map(walls)")
    return fixed


def analyze_map(rows: Sequence[str]) -> GridMap:
    """Run every map check and return the padded grid with its spawn point."""
    check_chars(rows)
    check_no_empty_lines(rows)
    spawn = find_spawn(rows)
    fixed = check_walls(rows)
    return GridMap(rows=tuple(fixed), spawn=spawn)