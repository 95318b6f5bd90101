"""Game objects: trash bags, trash cans and the players that carry bags."""

from __future__ import annotations

import copy

from coletarun.controls import Controllable, Direction
from coletarun.level import WalkableMap
from coletarun.types import Category, Drawable, Drawer, Point


class TrashBag(Drawable):
    """A bag of waste of one category, lying on the map or carried."""

    def __init__(self, coordinate: Point, width: int, height: int, category: Category) -> None:
        super().__init__(coordinate, width, height)
        self.category = category

    def draw(self, drawer: Drawer) -> None:
        drawer.draw_trash_bag(self)


class TrashCan(Drawable):
    """A can that accepts bags of one category."""

    def __init__(self, coordinate: Point, width: int, height: int, category: Category) -> None:
        super().__init__(coordinate, width, height)
        self.category = category

    def draw(self, drawer: Drawer) -> None:
        drawer.draw_trash_can(self)


_OFFSETS = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class Player(Drawable, Controllable):
    """A player that walks on the walkable grid and carries at most one bag."""

    def __init__(
        self,
        coordinate: Point,
        width: int,
        height: int,
        player_id: int,
        walkable_map: WalkableMap,
    ) -> None:
        super().__init__(coordinate, width, height)
        self.id = player_id
        self.walkable_map = walkable_map
        self.step_size = 2
        self.carried_bag: TrashBag | None = None
        self.score = 0

    def draw(self, drawer: Drawer) -> None:
        drawer.draw_player(self)
        if self.carried_bag is not None:
            drawer.draw_trash_bag(self.carried_bag)

    def set_step_size(self, step_size: int) -> None:
        self.step_size = step_size

    def _area_is_walkable(self, x: int, y: int) -> bool:
        map_height = len(self.walkable_map)
        map_width = len(self.walkable_map[0]) if map_height else 0
        if x < 0 or y < 0 or x + self.width > map_width or y + self.height > map_height:
            return False
        return all(all(row[x:x + self.width]) for row in self.walkable_map[y:y + self.height])

    def move(self, direction: Direction) -> None:
        """Step in a direction if the whole target area is walkable."""
        dx, dy = _OFFSETS[direction]
        target = Point(
            self.coordinate.x + dx * self.step_size,
            self.coordinate.y + dy * self.step_size,
        )
        if not self._area_is_walkable(target.x, target.y):
            return
        self.coordinate = target
        if self.carried_bag is not None:
            self.carried_bag.coordinate = target

    def attach_bag(self, bag: TrashBag) -> None:
        """Carry a copy of the bag, placed at the player's position."""
        self.carried_bag = copy.copy(bag)
        self.carried_bag.coordinate = self.coordinate

    def detach_bag(self) -> None:
        """Drop the carried bag, if any."""
        self.carried_bag = None

    def increase_score(self, points: int) -> None:
        """Add points to the player's score."""
        self.score += points