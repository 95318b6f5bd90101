import pytest

from coletarun.controls import Control, Direction
from coletarun.entities import Player
from coletarun.keyboard import KeyboardController, SpecialKey
from coletarun.types import Point


def _player():
    grid = [[True] * 20 for _ in range(20)]
    return Player(Point(8, 8), 2, 2, 1, grid)


def _controller_with(controls):
    player = _player()
    player.bind_keys(controls)
    controller = KeyboardController()
    controller.add_element(player)
    return controller, player


def test_special_key_codes():
    assert SpecialKey(0x65) is SpecialKey.UP
    assert SpecialKey(0x6B) is SpecialKey.END


def test_character_key_moves_player():
    controller, player = _controller_with([Control(ord("w"), Direction.UP, False)])
    controller.key_down(ord("w"))
    controller.process_input()
    assert player.coordinate == Point(8, 8 + player.step_size)


def test_uppercase_key_counts_as_lowercase():
    controller, player = _controller_with([Control(ord("d"), Direction.RIGHT, False)])
    controller.key_down("D")
    controller.process_input()
    assert player.coordinate == Point(8 + player.step_size, 8)


def test_released_key_does_not_move():
    controller, player = _controller_with([Control(ord("a"), Direction.LEFT, False)])
    controller.key_down("a")
    controller.key_up("A")
    controller.process_input()
    assert player.coordinate == Point(8, 8)


def test_nothing_pressed_nothing_moves():
    controller, player = _controller_with([Control(ord("s"), Direction.DOWN, False)])
    controller.process_input()
    assert player.coordinate == Point(8, 8)


def test_special_key_moves_player():
    controller, player = _controller_with([Control(SpecialKey.DOWN, Direction.DOWN, True)])
    controller.special_key_down(SpecialKey.DOWN)
    controller.process_input()
    assert player.coordinate == Point(8, 8 - player.step_size)
    controller.special_key_up(SpecialKey.DOWN)
    controller.process_input()
    assert player.coordinate == Point(8, 8 - player.step_size)


def test_special_and_character_states_are_separate():
    controller, player = _controller_with([Control(SpecialKey.UP, Direction.UP, True)])
    controller.key_down(int(SpecialKey.UP))
    controller.process_input()
    assert player.coordinate == Point(8, 8)


def test_special_key_outside_handled_range_is_ignored():
    controller, player = _controller_with([Control(SpecialKey.INSERT, Direction.UP, True)])
    controller.special_key_down(SpecialKey.INSERT)
    controller.process_input()
    assert player.coordinate == Point(8, 8)


def test_each_held_key_fires_once_per_frame():
    controller, player = _controller_with(
        [Control(ord("w"), Direction.UP, False), Control(ord("d"), Direction.RIGHT, False)]
    )
    controller.key_down("w")
    controller.key_down("d")
    controller.process_input()
    controller.process_input()
    step = player.step_size
    assert player.coordinate == Point(8 + 2 * step, 8 + 2 * step)


@pytest.mark.parametrize("key", [-1, 256, "ab"])
def test_invalid_key_codes_rejected(key):
    controller = KeyboardController()
    with pytest.raises(ValueError):
        controller.key_down(key)