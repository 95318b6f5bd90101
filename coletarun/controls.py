"""Key bindings and the objects that react to them."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import partial


class Direction(enum.Enum):
    """A movement direction."""

    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()


@dataclass(frozen=True)
class Control:
    """Binds a key code to a movement direction."""

    key: int
    direction: Direction
    special_key: bool


@dataclass(frozen=True)
class ActionPair:
    """A key code together with the action it triggers."""

    key: int
    callback: Callable[[], None]
    special_key: bool


class Controllable(ABC):
    """An object that moves in response to bound keys."""

    @property
    def actions(self) -> list[ActionPair]:
        """Actions registered through bind_keys, in binding order."""
        try:
            return self._actions
        except AttributeError:
            self._actions: list[ActionPair] = []
            return self._actions

    @abstractmethod
    def set_step_size(self, step_size: int) -> None:
        """Set the distance covered by one move."""

    @abstractmethod
    def move(self, direction: Direction) -> None:
        """Move one step in the given direction."""

    def bind_keys(self, controls: Iterable[Control]) -> None:
        """Register an action for each control that moves in its direction."""
        self.actions.extend(
            ActionPair(control.key, partial(self.move, control.direction), control.special_key)
            for control in controls
        )


class Controller:
    """Holds the controllable elements whose actions input drives."""

    def __init__(self) -> None:
        self.elements: list[Controllable] = []

    def add_element(self, element: Controllable) -> None:
        """Register an element to receive input."""
        self.elements.append(element)