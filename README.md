# coletarun

A two-player arcade game for a single keyboard. At start-up the game builds
a map of rooms and hallways by binary space partitioning. Five trash bags
are placed on it, and one more appears every eight seconds, up to thirty
loose bags. Pick a bag up by walking into it, then carry it to the bin of the
same category: paper, plastic, glass, metal or organic. Each bag dropped in
the right bin scores two points. When the two-minute timer runs out, the
player with the higher score wins. Equal scores end the round in a tie.

## Installation

```
pip install .
```

This also installs pygame, which the game uses for its window, graphics and
input.

## Playing

```
coletarun
coletarun --sprites path/to/sprites
```

`--sprites` names the directory the images are read from. It defaults to
`sprites`, relative to the current working directory. The expected files are
`player_1.png`, `player_2.png`, `splash.png`, `menu.png`,
`instructions.png`, `end.png`, `floor.png`, `grass.png`, and
`trash_can_<category>.png` and `trash_bag_<category>.png` for each of
`paper`, `plastic`, `glass`, `metal` and `organic`. If an image cannot be
loaded, the game prints a message to standard error and leaves that sprite
out when drawing.

A splash screen shows for two seconds, then the main menu. The window can be
resized. Closing it quits the game.

### Menus

| Key              | Action                                     |
|------------------|--------------------------------------------|
| Up / Down arrows | Move the selection                         |
| Enter            | Choose the selected option                 |
| Esc              | Leave the instructions for the main menu   |

The main menu offers *Iniciar* (play), *Instrucoes* (instructions) and
*Sair* (quit). The pause menu offers *Continuar* (resume), *Instrucoes* and
*Sair*, which returns to the main menu. Esc in the pause menu also resumes.

### In the game

| Player 1 | Player 2    | Action     |
|----------|-------------|------------|
| W        | Up arrow    | Move up    |
| S        | Down arrow  | Move down  |
| A        | Left arrow  | Move left  |
| D        | Right arrow | Move right |

Letter keys work in either case. Press Space to pause. On the end screen,
R goes back to the playing screen and Esc goes back to the main menu.

## What the game does not do

- It ships no images. Without a sprite directory only the white background,
  the menu text, the timer and the scores are drawn.
- A round is set up once, when the program starts, and the timer counts from
  that moment, time spent on the splash screen and in the menus included.
  Nothing starts a fresh round. After the timer has run out, going back to
  the playing screen ends the round again straight away.

## Using the pieces

Most of the package works without a window:

- `coletarun.level.Map` builds a map with `BSP`. It holds `rooms`,
  `hallways` and `walkable_map`, a grid of booleans indexed as
  `[y][x]`. An optional `rng` (a `random.Random`) makes the map
  reproducible.
- `coletarun.menu.Menu` keeps the selected option of a list of choices.
  `move_up` and `move_down` stop at the ends.
- `coletarun.timer.Timer` counts down whole seconds. `update` refreshes
  `remaining_seconds` and `formatted_time` (`MM:SS`), and `is_finished`
  reports when no time is left. A `clock` function can be passed in.
- `coletarun.entities` has `Player`, `TrashBag` and `TrashCan`.
- `coletarun.keyboard.KeyboardController` records held keys and, in
  `process_input`, runs the actions bound with `Controllable.bind_keys`.
- `coletarun.core.Game` runs the rules of a round: `init`, `update`,
  `spawn_element`, `spawn_trash_bags` and `handle_collisions`. The module
  also has `is_colliding` for rectangle overlap.
- `coletarun.drawer.PygameDrawer` and `SpriteManager` draw onto a pygame
  surface, and `coletarun.app.App` ties the screens together.

```python
import random

from coletarun.level import Map
from coletarun.types import Area, Point

level_map = Map(Area(Point(0, 0), 600, 600), 180, 150, 25, 80, rng=random.Random(1))
print(len(level_map.rooms), "rooms,", len(level_map.hallways), "hallways")
```

## Running the tests

```
pip install ".[test]"
pytest
```