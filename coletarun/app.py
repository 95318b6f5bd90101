"""The application: screens, menus, input routing and the main loop."""

from __future__ import annotations

import argparse
import random
import time
from collections.abc import Callable, Sequence
from pathlib import Path

import pygame

from coletarun.controls import Control, Direction
from coletarun.core import Game
from coletarun.drawer import PygameDrawer, SpriteManager
from coletarun.keyboard import KeyboardController, SpecialKey
from coletarun.menu import Menu
from coletarun.types import GameResult, GameState, Point

WINDOW_WIDTH = 1366
WINDOW_HEIGHT = 768
WINDOW_FRACTION = 0.97
FLOOR_SPRITE_SIZE = 16
SPLASH_DURATION_MS = 2000
FRAMES_PER_SECOND = 60
TITLE = "ColetaRun"

ENTER = 13
ESCAPE = 27
SPACE = ord(" ")
RESTART = ord("r")

SCORE_BOX_WIDTH = 100
SCORE_BOX_HEIGHT = 60

MAIN_MENU_OPTIONS = ("Iniciar", "Instruções", "Sair")
PAUSE_MENU_OPTIONS = ("Continuar", "Reiniciar", "Instruções", "Sair")
MAIN_MENU_LABELS = ("Iniciar", "Instrucoes", "Sair")
PAUSE_MENU_LABELS = ("Continuar", "Instrucoes", "Sair")

MENU_TEXT_SIZE = 40
MENU_SPACING = -80
MENU_BOX_LEFT = -10
MENU_BOX_RIGHT = 400
MENU_BOX_BOTTOM = -5
MENU_BOX_TOP = 50
MENU_LINE_WIDTH = 3
END_TEXT_SIZE = 24

BACKGROUND = (255, 255, 255)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
YELLOW = (255, 255, 0)

SPRITES = {
    "player_1": "player_1.png",
    "player_2": "player_2.png",
    "splash": "splash.png",
    "menu": "menu.png",
    "instructions": "instructions.png",
    "end": "end.png",
    "trash_can_paper": "trash_can_paper.png",
    "trash_can_metal": "trash_can_metal.png",
    "trash_can_organic": "trash_can_organic.png",
    "trash_can_glass": "trash_can_glass.png",
    "trash_can_plastic": "trash_can_plastic.png",
    "trash_bag_paper": "trash_bag_paper.png",
    "trash_bag_metal": "trash_bag_metal.png",
    "trash_bag_organic": "trash_bag_organic.png",
    "trash_bag_glass": "trash_bag_glass.png",
    "trash_bag_plastic": "trash_bag_plastic.png",
    "walkable": "floor.png",
    "not_walkable": "grass.png",
}

END_MESSAGES = {
    GameResult.PLAYER1_WIN: ("Parabéns! Player 1 ganhou!", -100),
    GameResult.PLAYER2_WIN: ("Parabéns! Player 2 ganhou!", -100),
    GameResult.TIE: ("Empate!", -50),
}
DEFAULT_END_MESSAGE = ("Fim do jogo", -50)


def _key_code(key: int | str) -> int:
    code = ord(key) if isinstance(key, str) else int(key)
    return code + 32 if ord("A") <= code <= ord("Z") else code


class App:
    """Owns the match and moves between the splash, menu, play, pause and end screens."""

    def __init__(
        self,
        surface: pygame.Surface | None = None,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.width = width
        self.height = height
        self.drawer = PygameDrawer(SpriteManager(surface))
        self.controller = KeyboardController()
        self.game = Game(self.drawer, self.controller, rng=rng, clock=clock)
        self.main_menu = Menu(MAIN_MENU_OPTIONS)
        self.pause_menu = Menu(PAUSE_MENU_OPTIONS)
        self.running = True
        self.splash_start_ms: int | None = None
        self._fonts: dict[int, pygame.font.Font] = {}

        self.game.init()
        self.game.state = GameState.SPLASH

        self.game.player_1.bind_keys(
            [
                Control(ord("w"), Direction.UP, False),
                Control(ord("s"), Direction.DOWN, False),
                Control(ord("a"), Direction.LEFT, False),
                Control(ord("d"), Direction.RIGHT, False),
            ]
        )
        self.game.player_2.bind_keys(
            [
                Control(SpecialKey.UP, Direction.UP, True),
                Control(SpecialKey.DOWN, Direction.DOWN, True),
                Control(SpecialKey.LEFT, Direction.LEFT, True),
                Control(SpecialKey.RIGHT, Direction.RIGHT, True),
            ]
        )

        upper_height = height - int(height * WINDOW_FRACTION)
        self.game.timer.coordinate = Point(width // 2, upper_height // 2)

    @property
    def state(self) -> GameState:
        """The current screen, shared with the match."""
        return self.game.state

    @state.setter
    def state(self, value: GameState) -> None:
        self.game.state = value

    @property
    def surface(self) -> pygame.Surface | None:
        """The surface every screen is drawn onto."""
        return self.drawer.sprite_manager.surface

    @surface.setter
    def surface(self, value: pygame.Surface | None) -> None:
        self.drawer.sprite_manager.surface = value

    def load_sprites(self, directory: str | Path) -> None:
        """Load every game sprite from a directory."""
        folder = Path(directory)
        for name, filename in SPRITES.items():
            self.drawer.sprite_manager.load(name, str(folder / filename))

    # Input

    def key_down(self, key: int | str) -> None:
        """Handle a character key press according to the current screen."""
        code = _key_code(key)
        state = self.state

        if state is GameState.SPLASH:
            return
        if state is GameState.MENU:
            if code == ENTER:
                selected = self.main_menu.selected_option
                if selected == 0:
                    self.state = GameState.PLAYING
                elif selected == 1:
                    self.state = GameState.INSTRUCTIONS
                elif selected == 2:
                    self.state = GameState.EXIT
        elif state is GameState.INSTRUCTIONS:
            if code == ESCAPE:
                self.state = GameState.MENU
        elif state is GameState.PLAYING:
            if code == SPACE:
                self.state = GameState.PAUSE
            else:
                self.controller.key_down(code)
        elif state is GameState.PAUSE:
            if code == ENTER:
                selected = self.pause_menu.selected_option
                if selected == 0:
                    self.state = GameState.PLAYING
                elif selected == 1:
                    self.state = GameState.INSTRUCTIONS
                elif selected == 2:
                    self.state = GameState.MENU
            elif code == ESCAPE:
                self.state = GameState.PLAYING
        elif state is GameState.END:
            if code == RESTART:
                self.state = GameState.PLAYING
            elif code == ESCAPE:
                self.state = GameState.MENU
        elif state is GameState.EXIT:
            self.running = False

    def special_key_down(self, key: int) -> None:
        """Handle a special key press: menu navigation or player movement."""
        state = self.state
        if state is GameState.MENU:
            self._navigate(self.main_menu, key)
        elif state is GameState.PLAYING:
            self.controller.special_key_down(key)
        elif state is GameState.PAUSE:
            self._navigate(self.pause_menu, key)

    @staticmethod
    def _navigate(menu: Menu, key: int) -> None:
        if key == SpecialKey.UP:
            menu.move_up()
        elif key == SpecialKey.DOWN:
            menu.move_down()

    # Frame logic

    def update(self, now_ms: int) -> None:
        """Advance one frame; now_ms is the time since start-up in milliseconds."""
        self.game.timer.update()

        if self.state is GameState.SPLASH:
            if self.splash_start_ms is None:
                self.splash_start_ms = now_ms
            if now_ms - self.splash_start_ms > SPLASH_DURATION_MS:
                self.state = GameState.MENU
            return

        self.controller.process_input()
        self.game.update()

    def reshape(self, width: int, height: int) -> None:
        """Record a new window size."""
        self.width = width
        self.height = height

    # Drawing

    def display(self) -> None:
        """Draw the current screen; on the exit screen, stop running instead."""
        state = self.state
        if state is GameState.EXIT:
            self.running = False
            return
        if self.surface is None:
            return
        screens = {
            GameState.SPLASH: self._draw_splash,
            GameState.MENU: self._draw_menu,
            GameState.INSTRUCTIONS: self._draw_instructions,
            GameState.PLAYING: self._draw_play,
            GameState.PAUSE: self._draw_pause_menu,
            GameState.END: self._draw_end,
        }
        screens[state]()

    def _begin_full_screen(self) -> None:
        manager = self.drawer.sprite_manager
        assert manager.surface is not None
        manager.surface.fill(BACKGROUND)
        manager.screen_rect = None
        manager.world_size = (self.width, self.height)

    def _draw_backdrop(self, name: str) -> None:
        self._begin_full_screen()
        self.drawer.sprite_manager.draw(name, 0, 0, self.width, self.height)

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = self._fonts[size] = pygame.font.Font(None, size)
        return font

    def _draw_text(self, text: str, x: float, y: float, size: int, color: tuple[int, int, int]) -> None:
        """Draw text whose lower-left corner sits at a y-up point."""
        manager = self.drawer.sprite_manager
        assert manager.surface is not None
        rendered = self._font(size).render(text, True, color)
        anchor = manager.to_screen_rect(x, y, 0, 0)
        manager.surface.blit(rendered, (anchor.x, anchor.bottom - rendered.get_height()))

    def _draw_menu_options(self, labels: Sequence[str], selected: int) -> None:
        manager = self.drawer.sprite_manager
        assert manager.surface is not None
        start_x = self.width / 2 + 60
        start_y = self.height / 2 - 80
        for index, label in enumerate(labels):
            x = start_x
            y = start_y + index * MENU_SPACING
            if index == selected:
                box = manager.to_screen_rect(
                    x + MENU_BOX_LEFT,
                    y + MENU_BOX_BOTTOM,
                    MENU_BOX_RIGHT - MENU_BOX_LEFT,
                    MENU_BOX_TOP - MENU_BOX_BOTTOM,
                )
                pygame.draw.rect(manager.surface, YELLOW, box, MENU_LINE_WIDTH)
            self._draw_text(label, x, y, MENU_TEXT_SIZE, WHITE)

    def _draw_splash(self) -> None:
        self._draw_backdrop("splash")

    def _draw_instructions(self) -> None:
        self._draw_backdrop("instructions")

    def _draw_menu(self) -> None:
        self._draw_backdrop("menu")
        self._draw_menu_options(MAIN_MENU_LABELS, self.main_menu.selected_option)

    def _draw_pause_menu(self) -> None:
        self._draw_backdrop("menu")
        self._draw_menu_options(PAUSE_MENU_LABELS, self.pause_menu.selected_option)

    def _draw_end(self) -> None:
        self._draw_backdrop("end")
        text, offset = END_MESSAGES.get(self.game.result, DEFAULT_END_MESSAGE)
        self._draw_text(text, self.width // 2 + offset, self.height // 2, END_TEXT_SIZE, BLACK)

    def _draw_play(self) -> None:
        self._begin_full_screen()
        manager = self.drawer.sprite_manager
        for y in range(0, self.height, FLOOR_SPRITE_SIZE):
            for x in range(0, self.width, FLOOR_SPRITE_SIZE):
                manager.draw(
                    "not_walkable",
                    x,
                    y,
                    min(FLOOR_SPRITE_SIZE, self.width - x),
                    min(FLOOR_SPRITE_SIZE, self.height - y),
                )

        lower_height = int(self.height * WINDOW_FRACTION)
        upper_height = self.height - lower_height

        if upper_height > 0:
            manager.screen_rect = pygame.Rect(0, 0, self.width, upper_height)
            manager.world_size = (self.width, upper_height)
            self.game.timer.draw(self.drawer)
            self.drawer.draw_player_score(
                self.game.player_1, Point(0, 0), SCORE_BOX_WIDTH, SCORE_BOX_HEIGHT
            )
            self.drawer.draw_player_score(
                self.game.player_2,
                Point(self.width - SCORE_BOX_WIDTH, 0),
                SCORE_BOX_WIDTH,
                SCORE_BOX_HEIGHT,
            )

        if lower_height > 0:
            manager.screen_rect = pygame.Rect(0, upper_height, self.width, lower_height)
            manager.world_size = (self.game.map.width, self.game.map.height)
            self.game.draw()


_SPECIAL_KEYS: dict[int, SpecialKey] = {}


def _special_keys() -> dict[int, SpecialKey]:
    if not _SPECIAL_KEYS:
        function_keys = (
            pygame.K_F1, pygame.K_F2, pygame.K_F3, pygame.K_F4, pygame.K_F5, pygame.K_F6,
            pygame.K_F7, pygame.K_F8, pygame.K_F9, pygame.K_F10, pygame.K_F11, pygame.K_F12,
        )
        names = ("F1", "F2", "F3", "F4", "F5", "F6", "F7", "F8", "F9", "F10", "F11", "F12")
        _SPECIAL_KEYS.update(
            {code: SpecialKey[name] for code, name in zip(function_keys, names)}
        )
        _SPECIAL_KEYS.update(
            {
                pygame.K_LEFT: SpecialKey.LEFT,
                pygame.K_UP: SpecialKey.UP,
                pygame.K_RIGHT: SpecialKey.RIGHT,
                pygame.K_DOWN: SpecialKey.DOWN,
                pygame.K_PAGEUP: SpecialKey.PAGE_UP,
                pygame.K_PAGEDOWN: SpecialKey.PAGE_DOWN,
                pygame.K_HOME: SpecialKey.HOME,
                pygame.K_END: SpecialKey.END,
                pygame.K_INSERT: SpecialKey.INSERT,
            }
        )
    return _SPECIAL_KEYS


def _handle_event(app: App, event: pygame.event.Event) -> None:
    if event.type == pygame.QUIT:
        app.running = False
    elif event.type == pygame.VIDEORESIZE:
        app.surface = pygame.display.set_mode(event.size, pygame.RESIZABLE)
        app.reshape(*event.size)
    elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
        special = _special_keys().get(event.key)
        pressed = event.type == pygame.KEYDOWN
        if special is not None:
            if pressed:
                app.special_key_down(special)
            else:
                app.controller.special_key_up(special)
        elif 0 <= event.key < 256:
            if pressed:
                app.key_down(event.key)
            else:
                app.controller.key_up(_key_code(event.key))


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and run until the player quits."""
    parser = argparse.ArgumentParser(prog="coletarun", description="Two-player trash collecting game.")
    parser.add_argument("--sprites", default="sprites", help="directory holding the sprite images")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        surface = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        app = App(surface)
        app.load_sprites(args.sprites)
        frame_clock = pygame.time.Clock()

        while app.running:
            for event in pygame.event.get():
                _handle_event(app, event)
            if not app.running:
                break
            app.update(pygame.time.get_ticks())
            app.display()
            pygame.display.flip()
            frame_clock.tick(FRAMES_PER_SECOND)
    finally:
        pygame.quit()
    return 0