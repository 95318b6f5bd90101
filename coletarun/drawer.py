"""Sprite handling and the pygame rendering back end."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import pygame

from coletarun.types import Drawer, Point

if TYPE_CHECKING:
    from coletarun.entities import Player, TrashBag, TrashCan
    from coletarun.level import Hallway, Map, Room
    from coletarun.timer import Timer

GRASS_SPRITE_SIZE = 16
PLAYER_SPRITE_SIZE = 32
TRASH_CAN_SPRITE_SIZE = 32
TRASH_BAG_SPRITE_SIZE = 16

TIMER_FONT_SIZE = 24
SCORE_FONT_SIZE = 13
TEXT_COLOR = (0, 0, 0)


class SpriteManager:
    """Named images drawn into a region of a surface using y-up world coordinates.

    ``screen_rect`` is the part of ``surface`` being drawn into (the whole
    surface when None) and ``world_size`` the world extent it shows (the
    size of ``screen_rect`` when None).
    """

    def __init__(self, surface: pygame.Surface | None = None) -> None:
        self.surface = surface
        self.screen_rect: pygame.Rect | None = None
        self.world_size: tuple[int, int] | None = None
        self.sprites: dict[str, pygame.Surface] = {}

    def load(self, name: str, filename: str) -> bool:
        """Load an image under a name; report and return False if it cannot be read."""
        try:
            image = pygame.image.load(filename)
        except (pygame.error, OSError):
            print(f"Error loading sprite {name} ({filename})", file=sys.stderr)
            return False
        try:
            image = image.convert_alpha()
        except pygame.error:
            pass
        self.sprites[name] = image
        return True

    def _region(self) -> pygame.Rect:
        assert self.surface is not None
        return self.screen_rect if self.screen_rect is not None else self.surface.get_rect()

    def to_screen_rect(self, x: float, y: float, width: float, height: float) -> pygame.Rect:
        """Map a y-up world rectangle onto surface pixels."""
        region = self._region()
        world_width, world_height = self.world_size or region.size
        scale_x = region.width / world_width
        scale_y = region.height / world_height
        left = region.x + round(x * scale_x)
        right = region.x + round((x + width) * scale_x)
        top = region.bottom - round((y + height) * scale_y)
        bottom = region.bottom - round(y * scale_y)
        return pygame.Rect(left, top, right - left, bottom - top)

    def draw(self, name: str, x: float, y: float, width: float, height: float) -> None:
        """Stretch the named sprite over a world rectangle; unknown names draw nothing."""
        sprite = self.sprites.get(name)
        if sprite is None or self.surface is None:
            return
        target = self.to_screen_rect(x, y, width, height)
        if target.width <= 0 or target.height <= 0:
            return
        self.surface.blit(pygame.transform.scale(sprite, target.size), target.topleft)

    def unload(self) -> None:
        """Forget every loaded sprite."""
        self.sprites.clear()


class PygameDrawer(Drawer):
    """Draws game objects with sprites and text onto a pygame surface."""

    def __init__(self, sprite_manager: SpriteManager | None = None) -> None:
        self.sprite_manager = sprite_manager if sprite_manager is not None else SpriteManager()
        self.tile_size = 1
        self._fonts: dict[int, pygame.font.Font] = {}

    def set_tile_size(self, tile_size: int) -> None:
        self.tile_size = tile_size

    def _tile(self, name: str, coordinate: Point, width: int, height: int) -> None:
        for y in range(0, height, GRASS_SPRITE_SIZE):
            for x in range(0, width, GRASS_SPRITE_SIZE):
                self.sprite_manager.draw(
                    name,
                    coordinate.x + x,
                    coordinate.y + y,
                    min(GRASS_SPRITE_SIZE, width - x),
                    min(GRASS_SPRITE_SIZE, height - y),
                )

    def draw_room(self, room: Room) -> None:
        self._tile("walkable", room.coordinate, room.width, room.height)

    def draw_hallway(self, hallway: Hallway) -> None:
        self._tile("walkable", hallway.coordinate, hallway.width, hallway.height)

    def draw_map(self, level_map: Map) -> None:
        for room in level_map.rooms:
            room.draw(self)
        for hallway in level_map.hallways:
            hallway.draw(self)

    def draw_player(self, player: Player) -> None:
        self.sprite_manager.draw(
            f"player_{player.id}",
            player.coordinate.x,
            player.coordinate.y,
            PLAYER_SPRITE_SIZE,
            PLAYER_SPRITE_SIZE,
        )

    def draw_trash_can(self, trash_can: TrashCan) -> None:
        self.sprite_manager.draw(
            f"trash_can_{trash_can.category.name.lower()}",
            trash_can.coordinate.x,
            trash_can.coordinate.y,
            TRASH_CAN_SPRITE_SIZE,
            TRASH_CAN_SPRITE_SIZE,
        )

    def draw_trash_bag(self, trash_bag: TrashBag) -> None:
        self.sprite_manager.draw(
            f"trash_bag_{trash_bag.category.name.lower()}",
            trash_bag.coordinate.x * self.tile_size,
            trash_bag.coordinate.y * self.tile_size,
            TRASH_BAG_SPRITE_SIZE,
            TRASH_BAG_SPRITE_SIZE,
        )

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = self._fonts[size] = pygame.font.Font(None, size)
        return font

    def _draw_centered_text(self, text: str, size: int, left: int, width: int) -> None:
        """Draw text centred in [left, left + width] with its bottom on world y = 0."""
        surface = self.sprite_manager.surface
        if surface is None:
            return
        rendered = self._font(size).render(text, True, TEXT_COLOR)
        x = left + (width - rendered.get_width()) // 2
        anchor = self.sprite_manager.to_screen_rect(x, 0, 0, 0)
        surface.blit(rendered, (anchor.x, anchor.bottom - rendered.get_height()))

    def draw_timer(self, timer: Timer) -> None:
        self._draw_centered_text(
            timer.formatted_time, TIMER_FONT_SIZE, timer.coordinate.x, timer.width
        )

    def draw_player_score(self, player: Player, position: Point, width: int, height: int) -> None:
        """Draw a player's score centred in a box starting at the given position."""
        self._draw_centered_text(
            f"P{player.id} SCORE: {player.score}", SCORE_FONT_SIZE, position.x, width
        )