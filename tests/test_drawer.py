import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from coletarun.drawer import PygameDrawer, SpriteManager
from coletarun.entities import Player, TrashBag, TrashCan
from coletarun.level import Hallway, Map, Room
from coletarun.timer import Timer
from coletarun.types import Area, Category, Point

RED = (255, 0, 0)
GREEN = (0, 255, 0)
WHITE = (255, 255, 255)


def _sprite_file(tmp_path, name, color):
    image = pygame.Surface((4, 4))
    image.fill(color)
    path = tmp_path / f"{name}.png"
    pygame.image.save(image, str(path))
    return str(path)


def _surface(width, height):
    surface = pygame.Surface((width, height))
    surface.fill(WHITE)
    return surface


def _rgb(surface, x, y):
    return tuple(surface.get_at((x, y)))[:3]


@pytest.fixture
def manager(tmp_path):
    sprites = SpriteManager(_surface(64, 64))
    assert sprites.load("red", _sprite_file(tmp_path, "red", RED))
    return sprites


def test_load_missing_file_reports_and_skips(tmp_path, capsys):
    sprites = SpriteManager()
    assert sprites.load("ghost", str(tmp_path / "missing.png")) is False
    assert "ghost" not in sprites.sprites
    assert "ghost" in capsys.readouterr().err


def test_draw_uses_y_up_coordinates(manager):
    manager.draw("red", 0, 0, 10, 10)
    assert _rgb(manager.surface, 0, 63) == RED
    assert _rgb(manager.surface, 9, 54) == RED
    assert _rgb(manager.surface, 0, 0) == WHITE
    assert _rgb(manager.surface, 10, 63) == WHITE


def test_draw_unknown_name_changes_nothing(manager):
    before = pygame.image.tostring(manager.surface, "RGB")
    manager.draw("absent", 0, 0, 64, 64)
    assert pygame.image.tostring(manager.surface, "RGB") == before


def test_world_size_scales_into_region(manager):
    manager.screen_rect = pygame.Rect(0, 32, 64, 32)
    manager.world_size = (32, 16)
    rect = manager.to_screen_rect(0, 0, 32, 16)
    assert rect == pygame.Rect(0, 32, 64, 32)


def test_unload_forgets_sprites(manager):
    manager.unload()
    assert manager.sprites == {}


def _drawer(tmp_path, names, size=64):
    sprites = SpriteManager(_surface(size, size))
    for name in names:
        sprites.load(name, _sprite_file(tmp_path, name, GREEN))
    return PygameDrawer(sprites)


def test_draw_room_tiles_its_area(tmp_path):
    drawer = _drawer(tmp_path, ["walkable"])
    Room(Point(0, 0), 20, 20).draw(drawer)
    surface = drawer.sprite_manager.surface
    assert _rgb(surface, 19, 63 - 19) == GREEN
    assert _rgb(surface, 20, 63) == WHITE
    assert _rgb(surface, 0, 63 - 20) == WHITE


def test_draw_hallway_tiles_its_area(tmp_path):
    drawer = _drawer(tmp_path, ["walkable"])
    Hallway(Point(10, 10), 5, 30, 5).draw(drawer)
    surface = drawer.sprite_manager.surface
    assert _rgb(surface, 12, 63 - 35) == GREEN
    assert _rgb(surface, 16, 63 - 12) == WHITE


def test_draw_map_draws_rooms(tmp_path):
    drawer = _drawer(tmp_path, ["walkable"])
    level = Map(Area(Point(), 50, 50), 180, 150, 5, 10)
    level.draw(drawer)
    room = level.rooms[0]
    surface = drawer.sprite_manager.surface
    assert _rgb(surface, room.center.x, 63 - room.center.y) == GREEN
    assert _rgb(surface, 0, 63) == WHITE


def test_draw_trash_can_uses_category_sprite(tmp_path):
    drawer = _drawer(tmp_path, ["trash_can_metal"])
    TrashCan(Point(2, 2), 32, 32, Category.METAL).draw(drawer)
    TrashCan(Point(40, 40), 32, 32, Category.PAPER).draw(drawer)
    surface = drawer.sprite_manager.surface
    assert _rgb(surface, 2, 61) == GREEN
    assert _rgb(surface, 50, 10) == WHITE


def test_draw_trash_bag_scales_by_tile_size(tmp_path):
    drawer = _drawer(tmp_path, ["trash_bag_glass"])
    drawer.set_tile_size(2)
    TrashBag(Point(5, 5), 24, 24, Category.GLASS).draw(drawer)
    surface = drawer.sprite_manager.surface
    assert _rgb(surface, 10, 63 - 10) == GREEN
    assert _rgb(surface, 9, 63 - 10) == WHITE


def test_draw_player_uses_id_sprite(tmp_path):
    drawer = _drawer(tmp_path, ["player_2"])
    grid = [[True] * 64 for _ in range(64)]
    Player(Point(0, 0), 30, 30, 2, grid).draw(drawer)
    Player(Point(40, 40), 30, 30, 1, grid).draw(drawer)
    surface = drawer.sprite_manager.surface
    assert _rgb(surface, 0, 63) == GREEN
    assert _rgb(surface, 50, 10) == WHITE


def _dark_columns(surface):
    width, height = surface.get_size()
    return [
        x for x in range(width) for y in range(height) if max(_rgb(surface, x, y)) < 128
    ]


def _mean(values):
    return sum(values) / len(values)


def test_draw_timer_writes_centered_text():
    drawer = PygameDrawer(SpriteManager(_surface(120, 40)))
    timer = Timer(Point(0, 0), 120, 10, 90, clock=lambda: 0.0)
    assert _dark_columns(drawer.sprite_manager.surface) == []
    timer.draw(drawer)
    columns = _dark_columns(drawer.sprite_manager.surface)
    assert len(columns) > 0
    assert abs(_mean(columns) - 60) <= 15


def test_draw_player_score_writes_centered_text():
    drawer = PygameDrawer(SpriteManager(_surface(120, 40)))
    player = Player(Point(), 30, 30, 1, [[True]])
    drawer.draw_player_score(player, Point(0, 0), 120, 40)
    columns = _dark_columns(drawer.sprite_manager.surface)
    assert len(columns) > 0
    assert abs(_mean(columns) - 60) <= 15