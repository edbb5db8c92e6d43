import pytest

from cubraycaster.config import CubError
from cubraycaster.mapcheck import (
    GridMap,
    Spawn,
    analyze_map,
    check_begin_wall,
    check_chars,
    check_end_wall,
    check_no_empty_lines,
    check_walls,
    extract_map,
    find_spawn,
    pad_map,
)

HEADER = [
    "NO ./north.xpm\n",
    "SO ./south.xpm\n",
    "WE ./west.xpm\n",
    "EA ./east.xpm\n",
    "F 10,20,30\n",
    "C 40,50,60\n",
]
MAP = ["1111\n", "1N01\n", "1111"]


def test_extract_map_skips_one_blank_line():
    lines = HEADER + ["\n"] + MAP
    assert extract_map(lines, 5) == MAP


def test_extract_map_without_blank_line():
    lines = HEADER + MAP
    assert extract_map(lines, 5) == MAP


def test_extract_map_nothing_after_header():
    with pytest.raises(CubError, match="Invalid Map"):
        extract_map(HEADER, 5)


def test_check_chars_rejects_strange_char():
    with pytest.raises(CubError, match=r"strange char"):
        check_chars(["1111\n", "1X01\n"])


def test_check_no_empty_lines_rejects_blank_row():
    with pytest.raises(CubError, match=r"Empty space/line in map"):
        check_no_empty_lines(["1111\n", "   \n", "1111"])


def test_find_spawn_position():
    spawn = find_spawn(MAP)
    assert spawn == Spawn("N", 1.5, 1.5)


def test_find_spawn_none():
    assert find_spawn(["111\n", "101\n", "111"]) is None


def test_find_spawn_too_many():
    with pytest.raises(CubError, match=r"wrong number of coords"):
        find_spawn(["1NSWEN1\n"])


@pytest.mark.parametrize(
    "line, expected",
    [("1 0", False), ("110", True), ("0", True), ("1111\n", True)],
)
def test_check_begin_wall(line, expected):
    assert check_begin_wall(line) is expected


@pytest.mark.parametrize(
    "line, expected",
    [("110", False), ("110\n", True), ("0", True), ("1111", True)],
)
def test_check_end_wall(line, expected):
    assert check_end_wall(line) is expected


def test_pad_map_invariants():
    rows = ["11\n", "1 N0 1\n", "1"]
    fixed = pad_map(rows)
    width = max(len(r) for r in rows)
    assert len(fixed) == len(rows)
    assert all(len(row) == width for row in fixed)
    assert not any(ch.isspace() for row in fixed for ch in row)
    assert fixed[1].startswith("11N0")


def test_check_walls_returns_padded_rows():
    fixed = check_walls(MAP)
    assert fixed == pad_map(MAP)


def test_check_walls_open_top():
    with pytest.raises(CubError, match=r"Invalid Map\(walls\)"):
        check_walls(["101\n", "101\n", "111"])


def test_check_walls_hole():
    with pytest.raises(CubError, match=r"walls with holes"):
        check_walls(["1111\n", "1 01\n", "1111"])


def test_analyze_map_builds_grid():
    grid = analyze_map(MAP)
    assert grid.height == len(MAP)
    assert grid.width == max(len(r) for r in MAP)
    assert grid.spawn == find_spawn(MAP)
    assert grid.rows[1].startswith("1N01")
    assert grid.is_wall(0, 0) is True
    assert grid.is_wall(1, 2) is False
    assert grid.is_wall(-1, 0) is True
    assert grid.is_wall(0, grid.width) is True


def test_analyze_map_strange_char():
    with pytest.raises(CubError, match=r"strange char"):
        analyze_map(["1111\n", "1N21\n", "1111"])


def test_grid_map_direct():
    grid = GridMap(rows=("111", "101", "111"))
    assert grid.spawn is None
    assert grid.is_wall(1, 1) is False