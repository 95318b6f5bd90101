"""Keyboard state tracking that drives the bound actions of controllable elements."""

from __future__ import annotations

import enum

from coletarun.controls import Controller

KEY_CODE_LIMIT = 256


class SpecialKey(enum.IntEnum):
    """Codes of the non-character keys: function keys, arrows and navigation."""

    F1 = 0x01
    F2 = 0x02
    F3 = 0x03
    F4 = 0x04
    F5 = 0x05
    F6 = 0x06
    F7 = 0x07
    F8 = 0x08
    F9 = 0x09
    F10 = 0x0A
    F11 = 0x0B
    F12 = 0x0C
    LEFT = 0x64
    UP = 0x65
    RIGHT = 0x66
    DOWN = 0x67
    PAGE_UP = 0x68
    PAGE_DOWN = 0x69
    HOME = 0x6A
    END = 0x6B
    INSERT = 0x6C


def _code(key: int | str) -> int:
    if isinstance(key, str):
        if len(key) != 1:
            raise ValueError(f"expected a single character, got {key!r}")
        key = ord(key)
    code = int(key)
    if not 0 <= code < KEY_CODE_LIMIT:
        raise ValueError(f"key code out of range: {code}")
    return code


def _lower(code: int) -> int:
    return code + 32 if ord("A") <= code <= ord("Z") else code


class KeyboardController(Controller):
    """Remembers which keys are held and fires the matching actions each frame."""

    def __init__(self) -> None:
        super().__init__()
        self._keys: set[int] = set()
        self._special_keys: set[int] = set()

    def key_down(self, key: int | str) -> None:
        """Mark a character key as held; letters are case-insensitive."""
        self._keys.add(_lower(_code(key)))

    def key_up(self, key: int | str) -> None:
        """Mark a character key as released."""
        self._keys.discard(_lower(_code(key)))

    def special_key_down(self, key: int) -> None:
        """Mark a special key as held."""
        self._special_keys.add(_code(key))

    def special_key_up(self, key: int) -> None:
        """Mark a special key as released."""
        self._special_keys.discard(_code(key))

    def _is_pressed(self, key: int, special: bool) -> bool:
        if 0 <= key < KEY_CODE_LIMIT and not special:
            return _lower(key) in self._keys
        if SpecialKey.F1 <= key <= SpecialKey.END:
            return key in self._special_keys
        return False

    def process_input(self) -> None:
        """Run the action of every bound key that is currently held."""
        for element in self.elements:
            for action in list(element.actions):
                if self._is_pressed(action.key, action.special_key):
                    action.callback()