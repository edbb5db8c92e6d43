import pytest

from cubraycaster.config import WIN_HEIGHT, WIN_WIDTH
from cubraycaster.mapcheck import analyze_map
from cubraycaster.player import Player
from cubraycaster.raycast import (
    Ray,
    Texture,
    camera_ray,
    compute_wall,
    perform_dda,
    render_column,
    render_frame,
    select_texture,
    texture_x,
)

ROWS = ["11111\n", "10001\n", "10N01\n", "10001\n", "11111\n"]
CEILING = 0x0000FF
FLOOR = 0x00FF00


@pytest.fixture
def grid():
    return analyze_map(ROWS)


@pytest.fixture
def player(grid):
    return Player.from_spawn(grid.spawn)


@pytest.fixture
def textures():
    return tuple(Texture(4, 4, (colour,) * 16) for colour in (0x111111, 0x222222, 0x333333, 0x444444))


def _cast(player, grid, column):
    ray = camera_ray(player, column)
    hit = perform_dda(ray, grid)
    compute_wall(ray, player)
    return ray, hit


def test_texture_pixel_is_row_major():
    tex = Texture(2, 2, (1, 2, 3, 4))
    assert tex.pixel(1, 0) == 2
    assert tex.pixel(0, 1) == 3


def test_texture_rejects_wrong_pixel_count():
    with pytest.raises(ValueError):
        Texture(2, 2, (1, 2, 3))


def test_texture_pixel_out_of_range():
    with pytest.raises(IndexError):
        Texture(1, 1, (5,)).pixel(1, 0)


def test_centre_ray_follows_view_direction(player):
    ray = camera_ray(player, WIN_WIDTH // 2)
    assert ray.cam == 0.0
    assert (ray.rd_x, ray.rd_y) == (player.dir_x, player.dir_y)
    assert (ray.map_x, ray.map_y) == (int(player.x), int(player.y))
    assert ray.step_y == -1
    assert ray.step_x == 1
    assert ray.delta_dist_x == 1e30


def test_leftmost_ray_uses_negative_plane(player):
    ray = camera_ray(player, 0)
    assert ray.cam == -1.0
    assert ray.rd_x == pytest.approx(player.dir_x - player.plane_x)
    assert ray.rd_y == pytest.approx(player.dir_y - player.plane_y)


def test_dda_hits_wall(player, grid):
    ray = camera_ray(player, WIN_WIDTH // 2)
    assert perform_dda(ray, grid) is True
    assert grid.is_wall(ray.map_x, ray.map_y)
    assert ray.side == 1
    assert ray.map_x == int(player.x)


@pytest.mark.parametrize("column", [0, 250, 400, 799])
def test_every_ray_hits_inside_closed_map(player, grid, column):
    ray, hit = _cast(player, grid, column)
    assert hit
    assert grid.rows[ray.map_x][ray.map_y] == "1"


def test_wall_span_matches_distance(player, grid):
    ray, _ = _cast(player, grid, WIN_WIDTH // 2)
    assert ray.perp > 0
    assert ray.lh == int(WIN_HEIGHT / ray.perp)
    assert ray.ds == WIN_HEIGHT // 2 - ray.lh // 2
    assert ray.de == WIN_HEIGHT // 2 + ray.lh // 2


def test_wall_span_is_clamped_when_close(grid):
    close = Player(1.5, 1.5, 0.0, -1.0, 0.8, 0.0)
    ray, _ = _cast(close, grid, WIN_WIDTH // 2)
    assert ray.ds == 0
    assert ray.de == WIN_HEIGHT - 1


@pytest.mark.parametrize(
    "side, rd_x, rd_y, expected",
    [
        (0, 1.0, 0.0, "east"),
        (0, -1.0, 0.0, "west"),
        (1, 0.0, 1.0, "south"),
        (1, 0.0, -1.0, "north"),
    ],
)
def test_select_texture(side, rd_x, rd_y, expected):
    ray = Ray(side=side, rd_x=rd_x, rd_y=rd_y)
    assert select_texture(ray, ("north", "south", "west", "east")) == expected


@pytest.mark.parametrize("column", [0, 200, 400, 799])
def test_texture_x_in_range(player, grid, textures, column):
    ray, _ = _cast(player, grid, column)
    tex = select_texture(ray, textures)
    tx = texture_x(ray, player, tex)
    assert 0 <= tx < tex.width
    assert 0.0 <= ray.wall_x < 1.0


def test_render_column_layers(player, grid, textures):
    column = WIN_WIDTH // 2
    ray, _ = _cast(player, grid, column)
    pixels = render_column(player, grid, textures, column, CEILING, FLOOR)
    assert len(pixels) == WIN_HEIGHT
    assert pixels[0] == 0
    assert set(pixels[1 : ray.ds]) == {CEILING}
    assert set(pixels[ray.ds : ray.de]) == {textures[0].pixel(0, 0)}
    assert set(pixels[ray.de :]) == {FLOOR}


def test_render_column_samples_texture(player, grid):
    striped = Texture(2, 2, (7, 8, 9, 10))
    pixels = render_column(player, grid, (striped,) * 4, 300, CEILING, FLOOR)
    ray, _ = _cast(player, grid, 300)
    assert set(pixels[ray.ds : ray.de]) <= set(striped.pixels)


def test_render_frame(player, grid, textures):
    frame = render_frame(player, grid, textures, CEILING, FLOOR)
    assert len(frame) == WIN_WIDTH
    assert all(len(column) == WIN_HEIGHT for column in frame)
    assert all(column[-1] == FLOOR for column in frame)
    assert frame[123] == render_column(player, grid, textures, 123, CEILING, FLOOR)