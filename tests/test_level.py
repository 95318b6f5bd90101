import random

import pytest

from coletarun.level import BSP, Hallway, Map, Node, Room, SplitDirection
from coletarun.types import Area, Drawer, Point


class RecordingDrawer(Drawer):
    def __init__(self):
        self.calls = []

    def set_tile_size(self, tile_size):
        self.tile_size = tile_size

    def draw_room(self, room):
        self.calls.append(("room", room))

    def draw_hallway(self, hallway):
        self.calls.append(("hallway", hallway))

    def draw_map(self, level_map):
        self.calls.append(("map", level_map))

    def draw_player(self, player):
        self.calls.append(("player", player))

    def draw_trash_can(self, trash_can):
        self.calls.append(("trash_can", trash_can))

    def draw_trash_bag(self, trash_bag):
        self.calls.append(("trash_bag", trash_bag))

    def draw_timer(self, timer):
        self.calls.append(("timer", timer))


def shape_key(shape):
    return (shape.coordinate, shape.width, shape.height)


def test_room_center():
    room = Room(Point(10, 20), 30, 40)
    assert room.center == Point(25, 40)


def test_default_room_is_empty_at_origin():
    room = Room()
    assert shape_key(room) == (Point(), 0, 0)
    assert room.center == Point()


def test_room_and_hallway_draw_dispatch():
    drawer = RecordingDrawer()
    room = Room(Point(1, 1), 4, 4)
    hallway = Hallway(Point(0, 0), 5, 2, 2)
    room.draw(drawer)
    hallway.draw(drawer)
    assert drawer.calls == [("room", room), ("hallway", hallway)]
    assert hallway.size == 2


def test_node_is_leaf():
    node = Node(Area(Point(), 10, 10))
    assert node.is_leaf()
    node.left = Node()
    node.right = Node()
    assert not node.is_leaf()


def test_split_direction_members():
    assert {d.name for d in SplitDirection} == {"VERTICAL", "HORIZONTAL"}
    assert SplitDirection(SplitDirection.VERTICAL.value) is SplitDirection.VERTICAL


def test_small_area_gives_single_room_and_no_hallways():
    rooms, hallways = BSP(random.Random(1)).execute(Area(Point(0, 0), 100, 100), 60, 60, 10, 10)
    assert hallways == []
    assert len(rooms) == 1
    assert rooms[0].coordinate == Point(10, 10)
    assert rooms[0].width == 80 and rooms[0].height == 80


def test_margin_too_large_gives_no_room():
    rooms, hallways = BSP(random.Random(1)).execute(Area(Point(0, 0), 20, 20), 15, 15, 10, 4)
    assert rooms == []
    assert hallways == []


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 42])
def test_rooms_stay_inside_area_and_respect_partition_bounds(seed):
    area = Area(Point(0, 0), 600, 600)
    rooms, _ = BSP(random.Random(seed)).execute(area, 180, 150, 25, 80)
    assert rooms
    for room in rooms:
        assert room.coordinate.x >= 25 and room.coordinate.y >= 25
        assert room.coordinate.x + room.width <= 600 - 25
        assert room.coordinate.y + room.height <= 600 - 25
        assert 180 - 2 * 25 <= room.width <= 2 * 180 - 2 * 25
        assert 150 - 2 * 25 <= room.height <= 2 * 150 - 2 * 25


@pytest.mark.parametrize("seed", [0, 5, 9])
def test_two_hallways_per_split(seed):
    rooms, hallways = BSP(random.Random(seed)).execute(Area(Point(), 600, 600), 180, 150, 25, 80)
    assert len(hallways) == 2 * (len(rooms) - 1)
    assert all(h.size == 80 for h in hallways)
    assert all(h.width > 0 and h.height > 0 for h in hallways)


def test_rooms_do_not_overlap():
    rooms, _ = BSP(random.Random(7)).execute(Area(Point(), 600, 600), 180, 150, 25, 80)
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            separated = (
                a.coordinate.x + a.width <= b.coordinate.x
                or b.coordinate.x + b.width <= a.coordinate.x
                or a.coordinate.y + a.height <= b.coordinate.y
                or b.coordinate.y + b.height <= a.coordinate.y
            )
            assert separated


def test_generation_is_deterministic_for_a_seed():
    first = BSP(random.Random(123)).execute(Area(Point(), 600, 600), 180, 150, 25, 80)
    second = BSP(random.Random(123)).execute(Area(Point(), 600, 600), 180, 150, 25, 80)
    assert [shape_key(r) for r in first[0]] == [shape_key(r) for r in second[0]]
    assert [shape_key(h) for h in first[1]] == [shape_key(h) for h in second[1]]


def test_bsp_keeps_tree_root():
    bsp = BSP(random.Random(3))
    rooms, _ = bsp.execute(Area(Point(), 600, 600), 180, 150, 25, 80)
    assert bsp.root is not None
    assert len(list(bsp.root.leaves())) == len(rooms)


@pytest.mark.parametrize("seed", [0, 11])
def test_walkable_map_matches_rooms_and_hallways(seed):
    level = Map(Area(Point(), 100, 90), 20, 20, 3, 6, rng=random.Random(seed))
    assert len(level.walkable_map) == 90
    assert all(len(row) == 100 for row in level.walkable_map)
    shapes = [*level.rooms, *level.hallways]
    for y, row in enumerate(level.walkable_map):
        for x, walkable in enumerate(row):
            inside = any(
                s.coordinate.x <= x < s.coordinate.x + s.width
                and s.coordinate.y <= y < s.coordinate.y + s.height
                for s in shapes
            )
            assert walkable == inside


def test_map_geometry_and_draw():
    level = Map(Area(Point(5, 5), 600, 600), 180, 150, 25, 80, rng=random.Random(2))
    assert level.coordinate == Point()
    assert (level.width, level.height) == (600, 600)
    drawer = RecordingDrawer()
    level.draw(drawer)
    assert drawer.calls == [("map", level)]