"""Loading a scene into a playable game and running its window."""

from __future__ import annotations

import os
import sys
from array import array
from dataclasses import dataclass
from typing import Optional, Sequence, Union

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .config import WIN_HEIGHT, WIN_WIDTH, CubError, Key, create_rgb  # noqa: E402
from .mapcheck import GridMap, analyze_map, extract_map  # noqa: E402
from .player import Player  # noqa: E402
from .raycast import Texture, render_frame  # noqa: E402
from .scene import parse_scene  # noqa: E402

_REPEAT_DELAY_MS = 150
_REPEAT_INTERVAL_MS = 30
_FPS = 60


def validate_cub_path(path: Union[str, os.PathLike]) -> bool:
    """Return True when the name is at least 7 characters and ends in ".cub"."""
    name = os.fspath(path)
    return len(name) >= 7 and name.endswith(".cub")


def load_texture(path: Union[str, os.PathLike]) -> Texture:
    """Load an image file into a Texture."""
    try:
        surface = pygame.image.load(os.fspath(path))
    except (pygame.error, OSError) as exc:
        raise CubError("Invalid Map(Texture load error)") from exc
    width, height = surface.get_size()
    pixels = []
    for y in range(height):
        for x in range(width):
            colour = surface.get_at((x, y))
            pixels.append(create_rgb(colour.r, colour.g, colour.b))
    try:
        return Texture(width, height, tuple(pixels))
    except ValueError as exc:
        raise CubError("Invalid Map(Texture load error)") from exc


def _key_map() -> dict[int, Key]:
    return {
        pygame.K_w: Key.W,
        pygame.K_a: Key.A,
        pygame.K_s: Key.S,
        pygame.K_d: Key.D,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_ESCAPE: Key.ESC,
    }


@dataclass
class Game:
    """A loaded level: grid, player, wall textures and plane colours."""

    grid: GridMap
    player: Player
    textures: Sequence[Texture]
    ceiling: int
    floor: int

    def handle_key(self, key: int) -> bool:
        """Apply a key press; return False when the key asks to quit."""
        if key == Key.ESC:
            return False
        self.player.update(key, self.grid)
        return True

    def draw(self, surface: "pygame.Surface") -> None:
        """Render the current view onto a surface at its top-left corner."""
        frame = render_frame(self.player, self.grid, self.textures, self.ceiling, self.floor)
        values = array(
            "I",
            (((colour & 0xFFFFFF) << 8) | 0xFF for row in zip(*frame) for colour in row),
        )
        if sys.byteorder == "little":
            values.byteswap()
        image = pygame.image.frombuffer(values.tobytes(), (WIN_WIDTH, WIN_HEIGHT), "RGBA")
        surface.blit(image, (0, 0))

    def run(self) -> None:
        """Open the window and play until it is closed or Escape is pressed."""
        keys = _key_map()
        pygame.init()
        try:
            screen = pygame.display.set_mode((WIN_WIDTH, WIN_HEIGHT))
            pygame.display.set_caption("Cub3D")
            pygame.key.set_repeat(_REPEAT_DELAY_MS, _REPEAT_INTERVAL_MS)
            clock = pygame.time.Clock()
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        key = keys.get(event.key)
                        if key is not None and not self.handle_key(key):
                            running = False
                self.draw(screen)
                pygame.display.flip()
                clock.tick(_FPS)
        finally:
            pygame.quit()


def load_game(path: Union[str, os.PathLike]) -> Game:
    """Parse and check a scene file, then load its textures into a Game."""
    scene = parse_scene(path)
    rows = extract_map(scene.lines, scene.last_info_line)
    grid = analyze_map(rows)
    player = Player.from_spawn(grid.spawn)
    textures = tuple(load_texture(texture) for texture in scene.textures)
    return Game(
        grid=grid,
        player=player,
        textures=textures,
        ceiling=scene.ceiling.to_int(),
        floor=scene.floor.to_int(),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game on the scene file given on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Error!\nOnly 1 map as argument")
        return 1
    if not validate_cub_path(args[0]):
        print("Error!\nNot a Cub file")
        return 1
    try:
        game = load_game(args[0])
    except CubError as exc:
        print("Error!")
        print(exc)
        return 1
    game.run()
    return 0