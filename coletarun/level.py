"""Level generation: binary space partitioning into rooms joined by hallways."""

from __future__ import annotations

import enum
import random
from collections.abc import Iterator
from dataclasses import dataclass, field

from coletarun.types import Area, Drawable, Drawer, Point

WalkableMap = list[list[bool]]


class SplitDirection(enum.Enum):
    """Orientation of the cut dividing a partition."""

    VERTICAL = enum.auto()
    HORIZONTAL = enum.auto()


class Room(Drawable):
    """A rectangular walkable room with a precomputed centre."""

    def __init__(self, coordinate: Point = Point(), width: int = 0, height: int = 0) -> None:
        super().__init__(coordinate, width, height)
        self.center = Point(coordinate.x + width // 2, coordinate.y + height // 2)

    def draw(self, drawer: Drawer) -> None:
        drawer.draw_room(self)


class Hallway(Drawable):
    """A rectangular walkable corridor between rooms."""

    def __init__(self, coordinate: Point, width: int, height: int, size: int) -> None:
        super().__init__(coordinate, width, height)
        self.size = size

    def draw(self, drawer: Drawer) -> None:
        drawer.draw_hallway(self)


@dataclass
class Node:
    """A partition in the BSP tree."""

    area: Area = field(default_factory=Area)
    left: Node | None = None
    right: Node | None = None
    room: Room = field(default_factory=Room)

    def is_leaf(self) -> bool:
        """True when the partition was not split further."""
        return self.left is None and self.right is None

    def leaves(self) -> Iterator[Node]:
        """Yield the leaf partitions below this node, left to right."""
        if self.is_leaf():
            yield self
            return
        for child in (self.left, self.right):
            if child is not None:
                yield from child.leaves()


def _span(a: int, b: int, fallback: int) -> int:
    distance = abs(a - b)
    return distance if distance else fallback


class BSP:
    """Splits an area into partitions, places rooms and connects them."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.root: Node | None = None

    def execute(
        self,
        initial_area: Area,
        partition_width: int,
        partition_height: int,
        room_margin: int,
        hallway_size: int,
    ) -> tuple[list[Room], list[Hallway]]:
        """Generate the rooms and hallways for an area."""
        self.root = Node(initial_area)
        self._split(self.root, partition_width, partition_height)
        rooms = list(self._rooms(self.root, room_margin))
        hallways: list[Hallway] = []
        self._connect(self.root, hallways, hallway_size)
        return rooms, hallways

    def _choose_direction(self, width: int, height: int, can_v: bool, can_h: bool) -> SplitDirection:
        if width > height:
            return SplitDirection.VERTICAL if can_v else SplitDirection.HORIZONTAL
        if height > width:
            return SplitDirection.HORIZONTAL if can_h else SplitDirection.VERTICAL
        if can_v and can_h:
            return SplitDirection.VERTICAL if self._rng.randint(0, 1) == 0 else SplitDirection.HORIZONTAL
        return SplitDirection.VERTICAL if can_v else SplitDirection.HORIZONTAL

    def _split(self, node: Node, partition_width: int, partition_height: int) -> None:
        width, height = node.area.width, node.area.height
        can_v = width > 2 * partition_width
        can_h = height > 2 * partition_height
        if not (can_v or can_h):
            return

        origin = node.area.coordinate
        if self._choose_direction(width, height, can_v, can_h) is SplitDirection.VERTICAL:
            position = self._rng.randint(partition_width, width - partition_width)
            node.left = Node(Area(origin, position, height))
            node.right = Node(Area(Point(origin.x + position, origin.y), width - position, height))
        else:
            position = self._rng.randint(partition_height, height - partition_height)
            node.left = Node(Area(Point(origin.x, origin.y + position), width, height - position))
            node.right = Node(Area(origin, width, position))

        self._split(node.left, partition_width, partition_height)
        self._split(node.right, partition_width, partition_height)

    def _rooms(self, node: Node, margin: int) -> Iterator[Room]:
        if node.is_leaf():
            width = node.area.width - 2 * margin
            height = node.area.height - 2 * margin
            if width > 0 and height > 0:
                origin = node.area.coordinate
                node.room = Room(Point(origin.x + margin, origin.y + margin), width, height)
                yield node.room
            return
        for child in (node.left, node.right):
            if child is not None:
                yield from self._rooms(child, margin)

    def _connect(self, node: Node, hallways: list[Hallway], size: int) -> None:
        if node.left is None or node.right is None:
            return
        self._connect(node.left, hallways, size)
        self._connect(node.right, hallways, size)

        first = self._rng.choice(list(node.left.leaves())).room.center
        second = self._rng.choice(list(node.right.leaves())).room.center
        half = size // 2
        across = _span(first.x, second.x, size)
        along = _span(first.y, second.y, size)
        low_x = min(first.x, second.x)
        low_y = min(first.y, second.y)

        if self._rng.randrange(2) == 0:
            hallways.append(Hallway(Point(low_x, first.y - half), across, size, size))
            hallways.append(Hallway(Point(second.x - half, low_y), size, along, size))
        else:
            hallways.append(Hallway(Point(first.x - half, low_y), size, along, size))
            hallways.append(Hallway(Point(low_x, second.y - half), across, size, size))


class Map(Drawable):
    """A generated level with its rooms, hallways and walkable grid."""

    def __init__(
        self,
        area: Area,
        partition_width: int,
        partition_height: int,
        room_margin: int,
        hallway_size: int,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(Point(), area.width, area.height)
        self.rooms, self.hallways = BSP(rng).execute(
            area, partition_width, partition_height, room_margin, hallway_size
        )
        self.walkable_map: WalkableMap = self._build_walkable_map()

    def _build_walkable_map(self) -> WalkableMap:
        grid = [[False] * self.width for _ in range(self.height)]
        for shape in (*self.rooms, *self.hallways):
            x0 = max(shape.coordinate.x, 0)
            x1 = min(shape.coordinate.x + shape.width, self.width)
            if x0 >= x1:
                continue
            y0 = max(shape.coordinate.y, 0)
            y1 = min(shape.coordinate.y + shape.height, self.height)
            for row in grid[y0:y1]:
                row[x0:x1] = [True] * (x1 - x0)
        return grid

    def draw(self, drawer: Drawer) -> None:
        drawer.draw_map(self)