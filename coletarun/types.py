"""Value types, game states and the drawing interfaces shared by the game."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coletarun.entities import Player, TrashBag, TrashCan
    from coletarun.level import Hallway, Map, Room
    from coletarun.timer import Timer


class Category(enum.IntEnum):
    """Kind of waste carried by a bag or accepted by a can."""

    PAPER = 0
    PLASTIC = 1
    GLASS = 2
    METAL = 3
    ORGANIC = 4


class GameState(enum.Enum):
    """Screen the application is currently showing."""

    SPLASH = enum.auto()
    MENU = enum.auto()
    PAUSE = enum.auto()
    INSTRUCTIONS = enum.auto()
    PLAYING = enum.auto()
    END = enum.auto()
    EXIT = enum.auto()


class GameResult(enum.Enum):
    """Outcome of a match."""

    PLAYER1_WIN = enum.auto()
    PLAYER2_WIN = enum.auto()
    TIE = enum.auto()
    ONGOING = enum.auto()


@dataclass(frozen=True)
class Point:
    """An integer position in world coordinates."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Area:
    """An axis-aligned rectangle anchored at its lower-left corner."""

    coordinate: Point = field(default_factory=Point)
    width: int = 0
    height: int = 0


class Drawable(ABC):
    """Something with a position and a size that a drawer can render."""

    def __init__(self, coordinate: Point, width: int, height: int) -> None:
        self.coordinate = coordinate
        self.width = width
        self.height = height

    @abstractmethod
    def draw(self, drawer: Drawer) -> None:
        """Render this object with the given drawer."""


class Drawer(ABC):
    """Rendering back end used by every drawable game object."""

    tile_size: int = 1

    @abstractmethod
    def set_tile_size(self, tile_size: int) -> None:
        """Set the scale applied to tile coordinates."""

    @abstractmethod
    def draw_room(self, room: Room) -> None:
        """Render a room."""

    @abstractmethod
    def draw_hallway(self, hallway: Hallway) -> None:
        """Render a hallway."""

    @abstractmethod
    def draw_map(self, level_map: Map) -> None:
        """Render a whole map."""

    @abstractmethod
    def draw_player(self, player: Player) -> None:
        """Render a player."""

    @abstractmethod
    def draw_trash_can(self, trash_can: TrashCan) -> None:
        """Render a trash can."""

    @abstractmethod
    def draw_trash_bag(self, trash_bag: TrashBag) -> None:
        """Render a trash bag."""

    @abstractmethod
    def draw_timer(self, timer: Timer) -> None:
        """Render the match timer."""