"""The match: players, bins, bags, spawning, collisions and scoring."""

from __future__ import annotations

import random
import time
import warnings
from collections.abc import Callable

from coletarun.controls import Controller
from coletarun.entities import Player, TrashBag, TrashCan
from coletarun.level import Map
from coletarun.timer import Timer
from coletarun.types import Area, Category, Drawable, Drawer, GameResult, GameState, Point

PARTITION_WIDTH = 180
PARTITION_HEIGHT = 150
ROOM_MARGIN = 25
HALLWAY_SIZE = 80

MAP_WIDTH = 600
MAP_HEIGHT = 600

PLAYER_SIZE = 30
TRASH_CAN_SIZE = 32
TRASH_BAG_SIZE = 24

TIME_IN_SECONDS = 120

MAX_SPAWN_ATTEMPTS = 100
ACTION_COOLDOWN_MS = 200
DEPOSIT_POINTS = 2
INITIAL_TRASH_BAGS = 5


def is_colliding(first: Drawable, second: Drawable) -> bool:
    """True when the two rectangles overlap; touching edges do not count."""
    a, b = first.coordinate, second.coordinate
    return (
        a.x < b.x + second.width
        and a.x + first.width > b.x
        and a.y < b.y + second.height
        and a.y + first.height > b.y
    )


class Game:
    """One match between two players on a generated map."""

    def __init__(
        self,
        drawer: Drawer,
        controller: Controller,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.drawer = drawer
        self.controller = controller
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock

        self.trash_cans = [
            TrashCan(Point(), TRASH_CAN_SIZE, TRASH_CAN_SIZE, category)
            for category in (
                Category.METAL,
                Category.PAPER,
                Category.GLASS,
                Category.PLASTIC,
                Category.ORGANIC,
            )
        ]
        self.map = Map(
            Area(Point(), MAP_WIDTH, MAP_HEIGHT),
            PARTITION_WIDTH,
            PARTITION_HEIGHT,
            ROOM_MARGIN,
            HALLWAY_SIZE,
            rng=self._rng,
        )
        self.player_1 = Player(Point(), PLAYER_SIZE, PLAYER_SIZE, 1, self.map.walkable_map)
        self.player_2 = Player(Point(), PLAYER_SIZE, PLAYER_SIZE, 2, self.map.walkable_map)

        self.trash_bags: list[TrashBag] = []
        self.max_trash_bags = 30
        self.spawn_interval_ms = 8000
        self._last_spawn_time = clock()
        self._last_action_time: float | None = None

        self.timer = Timer(Point(), 10, 10, TIME_IN_SECONDS, clock=clock)

        self.state: GameState | None = None
        self.result = GameResult.ONGOING

    def _elapsed_ms(self, since: float) -> int:
        return int((self._clock() - since) * 1000)

    def _random_bag(self) -> TrashBag:
        category = Category(self._rng.randrange(len(Category)))
        return TrashBag(Point(), TRASH_BAG_SIZE, TRASH_BAG_SIZE, category)

    def spawn_element(self, element: Drawable) -> bool:
        """Place an element on a random fully walkable spot; False if none was found."""
        grid = self.map.walkable_map
        for _ in range(MAX_SPAWN_ATTEMPTS):
            x = self._rng.randint(0, self.map.width - element.width)
            y = self._rng.randint(0, self.map.height - element.height)
            if x < 0 or y < 0:
                continue
            rows = grid[y:y + element.height]
            if len(rows) == element.height and all(
                len(row) >= x + element.width and all(row[x:x + element.width]) for row in rows
            ):
                element.coordinate = Point(x, y)
                return True
        warnings.warn(
            f"Could not find a walkable area for element after {MAX_SPAWN_ATTEMPTS} attempts.",
            RuntimeWarning,
            stacklevel=2,
        )
        return False

    def init(self) -> None:
        """Register the players for input and place every object on the map."""
        self.controller.add_element(self.player_1)
        self.controller.add_element(self.player_2)

        for trash_can in self.trash_cans:
            self.spawn_element(trash_can)

        self.spawn_element(self.player_1)
        self.spawn_element(self.player_2)

        for _ in range(INITIAL_TRASH_BAGS):
            bag = self._random_bag()
            self.spawn_element(bag)
            self.trash_bags.append(bag)

    def draw(self) -> None:
        """Render the map, cans, players and loose bags in that order."""
        self.map.draw(self.drawer)
        for trash_can in self.trash_cans:
            trash_can.draw(self.drawer)
        self.player_1.draw(self.drawer)
        self.player_2.draw(self.drawer)
        for bag in self.trash_bags:
            bag.draw(self.drawer)

    def spawn_trash_bags(self) -> None:
        """Add a random bag once the spawn interval has passed, up to the limit."""
        if len(self.trash_bags) >= self.max_trash_bags:
            return
        now = self._clock()
        if int((now - self._last_spawn_time) * 1000) < self.spawn_interval_ms:
            return
        bag = self._random_bag()
        self.spawn_element(bag)
        self.trash_bags.append(bag)
        self._last_spawn_time = now

    def update(self) -> None:
        """Advance the match by one frame while it is being played."""
        if self.state is not GameState.PLAYING:
            return
        self.timer.update()

        if self.timer.is_finished():
            first, second = self.player_1.score, self.player_2.score
            if first > second:
                self.result = GameResult.PLAYER1_WIN
            elif second > first:
                self.result = GameResult.PLAYER2_WIN
            else:
                self.result = GameResult.TIE
            self.state = GameState.END
            return

        self.spawn_trash_bags()
        self.handle_collisions()

    def handle_collisions(self) -> None:
        """Let players deposit carried bags in matching cans and pick up loose bags."""
        if self._last_action_time is None:
            self._last_action_time = self._clock()

        for player in (self.player_1, self.player_2):
            on_cooldown = self._elapsed_ms(self._last_action_time) < ACTION_COOLDOWN_MS
            if on_cooldown:
                continue

            if player.carried_bag is not None:
                for trash_can in self.trash_cans:
                    if (
                        is_colliding(player, trash_can)
                        and player.carried_bag.category == trash_can.category
                    ):
                        player.detach_bag()
                        player.increase_score(DEPOSIT_POINTS)
                        self._last_action_time = self._clock()
                        break

            if player.carried_bag is None:
                for bag in self.trash_bags:
                    if is_colliding(player, bag):
                        player.attach_bag(bag)
                        self.trash_bags.remove(bag)
                        self._last_action_time = self._clock()
                        break