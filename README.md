# cubraycaster

A small first-person raycasting engine. It reads a `.cub` scene file that
names four wall textures, gives the floor and ceiling colours and draws a
grid map, checks the scene, and lets you walk around the maze in an
800×600 window titled "Cub3D".

## Installation

```
pip install .
```

The only runtime dependency is `pygame`. For the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cubraycaster maps/level.cub
```

Exactly one argument is expected, and it must be a path at least seven
characters long that ends in `.cub`. If the arguments or the scene are
invalid, the program prints `Error!` followed by a reason and exits with
status 1.

### Controls

| Key          | Action            |
|--------------|-------------------|
| `W` / `S`    | move forward/back |
| `A` / `D`    | strafe left/right |
| `←` / `→`    | turn              |
| `Esc`        | quit              |

Held keys repeat. Closing the window also quits. A move that would end
inside a wall cell is not made.

## The `.cub` format

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0

111111
100101
101001
1100N1
111111
```

* `NO`, `SO`, `WE`, `EA` name the texture for each wall face. Spaces after
  the identifier and a leading `.` or `./` are dropped from the path. Each
  texture file must exist and must be an image that pygame can load.
* `F` and `C` give the floor and ceiling colour as three comma separated
  values, each from 0 to 255. Exactly two commas are allowed and they may
  not be next to each other.
* All six entries must be present. Where an entry appears more than once,
  the first one counts.
* Every non-blank line of the file, map rows included, must be at least
  six characters long counting its newline; shorter ones are rejected.
* The map starts after the last header line (one blank line between them
  is skipped). It may only hold `0` (floor), `1` (wall), spaces and `N`,
  `S`, `E` or `W` for the starting cell and the direction the player
  faces. With several start letters the last one found is used; more than
  four is an error. The map must be closed by walls and must not contain
  blank lines.

## Using it as a library

```python
from cubraycaster.scene import parse_scene
from cubraycaster.mapcheck import analyze_map, extract_map
from cubraycaster.player import Player
from cubraycaster.raycast import Texture, render_frame

scene = parse_scene("maps/level.cub")          # header, colours, texture paths
rows = extract_map(scene.lines, scene.last_info_line)
grid = analyze_map(rows)                        # GridMap, padded, with its Spawn
player = Player.from_spawn(grid.spawn)

wall = Texture(1, 1, (0xFFFFFF,))
frame = render_frame(player, grid, [wall] * 4,
                     scene.ceiling.to_int(), scene.floor.to_int())
# frame: 800 columns, each a list of 600 0xRRGGBB integers, top to bottom
```

* `cubraycaster.config` holds the window size, move and turn speeds, the
  `Key` codes, `Color`, `create_rgb` and the `CubError` exception that
  every validation failure raises.
* `cubraycaster.scene` reads the file (`read_lines`, `parse_header`,
  `parse_color`, `check_textures_readable`, `parse_scene`).
* `cubraycaster.mapcheck` checks the grid (`check_chars`,
  `check_no_empty_lines`, `find_spawn`, `check_walls`, `analyze_map`).
* `cubraycaster.player.Player` moves and turns with `update(key, grid)`.
* `cubraycaster.raycast` casts the rays: `camera_ray`, `perform_dda`,
  `compute_wall`, `select_texture`, `texture_x`, `render_column` and
  `render_frame`. Textures are given in north, south, west, east order.
* `cubraycaster.app.load_game(path)` does the whole parse, check and
  texture load and returns a `Game`, whose `run()` opens the window and
  `draw(surface)` renders one frame onto a pygame surface.

## What it does not do

Only walls, a flat ceiling and a flat floor are drawn: there are no
sprites, no doors, no minimap, no mouse look and no sound. The view has
no collision margin, so the player can walk right up to a wall.