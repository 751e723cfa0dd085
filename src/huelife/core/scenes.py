"""Named starting layouts for a grid.

Each scene clears the grid and seeds it. Coordinates are laid out for grids
of roughly 100x75 cells or more; stamps that do not fit a smaller grid are
skipped.
"""

import logging
from typing import Callable, Dict, List

from .grid import Grid
from .hue import Hue, cell_hash
from .stamps import (
    BOTTLE,
    BUTTERFLY,
    FLOWER3,
    add_beacon,
    add_blinker,
    add_glider,
    add_lwss,
    add_sprite,
    add_toad,
    stamp,
)

logger = logging.getLogger(__name__)

Scene = Callable[[Grid], None]

# Red, yellow, green, cyan, blue, magenta
WHEEL = (0.0, 0.17, 0.33, 0.5, 0.66, 0.83)


def gliders(grid: Grid) -> None:
    """Five gliders, each in its own hue."""
    grid.clear()
    add_glider(grid, 20, 20, Hue(0.0))
    add_glider(grid, 5, 5, Hue(0.33))
    add_glider(grid, 70, 50, Hue(0.66))
    add_glider(grid, 10, 40, Hue(0.17))
    add_glider(grid, 80, 15, Hue(0.83))


def combination(grid: Grid) -> None:
    """A glider, a blinker, a toad and a beacon."""
    grid.clear()
    add_glider(grid, 30, 30)
    add_blinker(grid, 10, 10)
    add_toad(grid, 70, 60)
    add_beacon(grid, 15, 40)


def dense(grid: Grid) -> None:
    """An arithmetic dense block with two gliders."""
    grid.clear()
    for x in range(20, 60):
        for y in range(20, 50):
            if (x + y) % 3 == 0 or (x * y) % 7 == 0:
                grid.set_cell(x, y, True)

    add_glider(grid, 70, 10)
    add_glider(grid, 10, 60)


def corners(grid: Grid) -> None:
    """One pattern in each corner and a glider in the middle."""
    grid.clear()
    add_blinker(grid, 5, 5)
    add_glider(grid, 85, 5)
    add_toad(grid, 5, 65)
    add_beacon(grid, 80, 65)
    add_glider(grid, 45, 35)


def flowers(grid: Grid) -> None:
    """Tile bottles, butterflies and flower3 sprites, with LWSS in the corners."""
    grid.clear()

    sprites = (BOTTLE, BUTTERFLY, FLOWER3)
    separation = 8
    pitch = 15 + separation

    placed = 0
    for y in range(0, grid.height - 5, pitch):
        for x in range(0, grid.width - 5, pitch):
            sprite = sprites[placed % len(sprites)]
            if stamp(grid, x, y, sprite, Hue(WHEEL[placed % len(WHEEL)])):
                placed += 1

    top, bottom = 0, grid.height - 4
    right, right_inner = grid.width - 5, grid.width - 20
    add_lwss(grid, right, top, Hue(0.1))
    add_lwss(grid, right_inner, top, Hue(0.3))
    add_lwss(grid, 0, top, Hue(0.5))
    add_lwss(grid, 15, top, Hue(0.7))
    add_lwss(grid, right, bottom, Hue(0.9))
    add_lwss(grid, right_inner, bottom, Hue(0.2))
    add_lwss(grid, 0, bottom, Hue(0.8))
    add_lwss(grid, 15, bottom, Hue(0.4))

    logger.debug("Placed %d flower sprites", placed)


def garden(grid: Grid) -> None:
    """Flowers of every size around a giant one, plus a heart."""
    grid.clear()
    add_sprite(grid, "giant_flower", 50, 25)

    for x, y in ((10, 10), (85, 10), (10, 55), (85, 55)):
        add_sprite(grid, "large_flower", x, y)

    for i in range(4):
        add_sprite(grid, "flower", 20 + i * 20, 15)
        add_sprite(grid, "flower", 20 + i * 20, 60)

    for i in range(6):
        add_sprite(grid, "small_flower", 15 + i * 15, 30)
        add_sprite(grid, "small_flower", 15 + i * 15, 45)

    add_sprite(grid, "heart", 70, 35)


def _color_region(grid: Grid, x1: int, y1: int, x2: int, y2: int, hue: Hue) -> None:
    for x in range(x1, x2):
        for y in range(y1, y2):
            if (x + y) % 3 == 0:
                grid.set_cell_with_color(x, y, True, hue)


def colorful(grid: Grid) -> None:
    """Four single-hue regions, three gliders and scattered random cells."""
    grid.clear()
    _color_region(grid, 20, 20, 40, 40, Hue(0.0))
    _color_region(grid, 80, 20, 100, 40, Hue(0.33))
    _color_region(grid, 20, 60, 40, 80, Hue(0.66))
    _color_region(grid, 80, 60, 100, 80, Hue(0.17))

    add_glider(grid, 50, 10, Hue(0.83))
    add_glider(grid, 10, 50, Hue(0.5))
    add_glider(grid, 120, 50, Hue(0.08))

    rng = grid.rng
    for _ in range(50):
        x = int(rng.random() * grid.width)
        y = int(rng.random() * grid.height)
        grid.set_cell_with_color(x, y, True, Hue.random(rng))


def random_fill(grid: Grid) -> None:
    """Roughly a third of all cells, chosen by a fixed hash of the coordinate."""
    grid.clear()
    for x in range(grid.width):
        for y in range(grid.height):
            if cell_hash(x, y) % 3 == 0:
                grid.set_cell(x, y, True)


def advanced(grid: Grid) -> None:
    """Gliders, oscillators, a dense block and a hashed region together."""
    grid.clear()
    for i in range(8):
        add_glider(grid, 10 + i * 12, 5)

    for x in range(40, 60):
        for y in range(30, 50):
            if (x + y) % 3 == 0 or (x * y) % 5 == 0:
                grid.set_cell(x, y, True)

    for x, y in ((5, 5), (140, 5), (5, 90), (140, 90)):
        add_blinker(grid, x, y)

    for i in range(5):
        add_beacon(grid, 120, 15 + i * 15)

    for i in range(4):
        add_toad(grid, 10, 20 + i * 18)

    for x in range(20, 130):
        for y in range(70, 95):
            if cell_hash(x, y) % 4 == 0:
                grid.set_cell(x, y, True)

    add_glider(grid, 80, 10)
    add_glider(grid, 20, 60)
    add_glider(grid, 100, 70)


SCENES: Dict[str, Scene] = {
    "gliders": gliders,
    "combination": combination,
    "dense": dense,
    "corners": corners,
    "flowers": flowers,
    "garden": garden,
    "colorful": colorful,
    "random": random_fill,
    "advanced": advanced,
}


def get_scene(name: str) -> Scene:
    """Look up a scene by name.

    Raises:
        KeyError: If no scene has that name
    """
    try:
        return SCENES[name]
    except KeyError:
        raise KeyError(f"Unknown scene '{name}'. Available: {', '.join(SCENES)}") from None


def list_scenes() -> List[str]:
    """Get the names of all scenes."""
    return list(SCENES)


def apply_scene(grid: Grid, name: str) -> None:
    """Clear the grid and seed it with the named scene."""
    get_scene(name)(grid)
    logger.debug("Applied scene '%s': %d live cells", name, grid.population)
