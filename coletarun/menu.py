"""A vertical list of options with a movable selection."""

from __future__ import annotations

from collections.abc import Iterable


class Menu:
    """Menu whose selection moves between its options without wrapping."""

    def __init__(self, options: Iterable[str]) -> None:
        self.options: tuple[str, ...] = tuple(options)
        self.selected_option = 0

    def move_up(self) -> None:
        """Select the previous option, staying on the first one."""
        if self.selected_option > 0:
            self.selected_option -= 1

    def move_down(self) -> None:
        """Select the next option, staying on the last one."""
        if self.selected_option < len(self.options) - 1:
            self.selected_option += 1