"""Stamp bitmaps and the catalog of named patterns and sprites."""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .grid import Grid
from .hue import Hue

logger = logging.getLogger(__name__)

_ALIVE_CHARS = "1#*O"


class Stamp:
    """A constant rectangular bitmap placed by its top-left corner.

    Bits are kept as a flat row-major byte string of ``width * height``
    entries, each 0 or 1.
    """

    __slots__ = ("name", "width", "height", "bits")

    def __init__(self, name: str, width: int, height: int, bits: bytes) -> None:
        """Initialize a stamp.

        Args:
            name: Stamp name
            width: Bitmap width
            height: Bitmap height
            bits: Row-major 0/1 bytes

        Raises:
            ValueError: If the bit count doesn't match the dimensions
        """
        if len(bits) != width * height:
            raise ValueError(f"Stamp '{name}' has {len(bits)} bits, expected {width}x{height}")

        self.name = name
        self.width = width
        self.height = height
        self.bits = bytes(bits)

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[str]) -> "Stamp":
        """Build a stamp from strings, one per row (y), left to right (x).

        Any of ``1 # * O`` marks a live cell; everything else is dead.
        """
        width = max(len(row) for row in rows)
        bits = bytearray()
        for row in rows:
            bits.extend(1 if ch in _ALIVE_CHARS else 0 for ch in row.ljust(width, "."))
        return cls(name, width, len(rows), bytes(bits))

    @classmethod
    def from_columns(cls, name: str, columns: Sequence[str]) -> "Stamp":
        """Build a stamp from strings, one per column (x), top to bottom (y)."""
        height = max(len(column) for column in columns)
        padded = [column.ljust(height, ".") for column in columns]
        rows = ["".join(column[y] for column in padded) for y in range(height)]
        return cls.from_rows(name, rows)

    def get(self, i: int, j: int) -> bool:
        """Get the bit at column i, row j."""
        return self.bits[j * self.width + i] == 1

    def cells(self) -> List[Tuple[int, int]]:
        """Get (i, j) offsets of every live bit."""
        return [(i, j) for j in range(self.height) for i in range(self.width) if self.bits[j * self.width + i]]

    def get_size(self) -> Tuple[int, int]:
        """Get stamp size as (width, height)."""
        return (self.width, self.height)

    @property
    def population(self) -> int:
        """Number of live bits."""
        return sum(self.bits)

    def fits(self, grid: Grid, x: int, y: int) -> bool:
        """Check whether the whole stamp fits inside the grid at (x, y)."""
        return x >= 0 and y >= 0 and x + self.width <= grid.width and y + self.height <= grid.height

    def __repr__(self) -> str:
        return f"Stamp({self.name!r}, {self.width}x{self.height})"

    def __str__(self) -> str:
        return "\n".join(
            "".join("*" if self.get(i, j) else "." for i in range(self.width)) for j in range(self.height)
        )


def stamp(grid: Grid, x: int, y: int, bitmap: Stamp, hue: Optional[Hue] = None) -> bool:
    """Stamp a bitmap into the grid with its top-left corner at (x, y).

    Every live bit sets the matching cell alive with ``hue`` (no hue when
    None). Dead bits leave cells untouched. A stamp that does not fit
    entirely inside the grid is rejected as a whole.

    Args:
        grid: Target grid
        x: Column of the top-left corner
        y: Row of the top-left corner
        bitmap: Stamp to place
        hue: Hue given to every stamped cell

    Returns:
        True if the stamp was placed, False if it was rejected
    """
    if not bitmap.fits(grid, x, y):
        logger.debug(
            "Rejected %s at (%d, %d): does not fit %dx%d grid", bitmap.name, x, y, grid.width, grid.height
        )
        return False

    for i, j in bitmap.cells():
        grid.set_cell_with_color(x + i, y + j, True, hue)
    return True


GLIDER = Stamp.from_rows("glider", ["1..", ".11", "11."])

BLINKER = Stamp.from_rows("blinker", ["111"])

TOAD = Stamp.from_rows("toad", [".111", "111."])

BEACON = Stamp.from_rows("beacon", ["11..", "11..", "..11", "..11"])

LWSS = Stamp.from_rows("lwss", [".1111", "1...1", "....1", "1..1."])

SMALL_FLOWER = Stamp.from_rows("small_flower", [".1.", "111", ".1."])

FLOWER = Stamp.from_rows(
    "flower",
    [
        "..1..",
        ".1.1.",
        "1.1.1",
        ".1.1.",
        "..1..",
    ],
)

LARGE_FLOWER = Stamp.from_rows(
    "large_flower",
    [
        "...1...",
        ".1...1.",
        "..1.1..",
        "1..1..1",
        "..1.1..",
        ".1...1.",
        "...1...",
    ],
)

GIANT_FLOWER = Stamp.from_rows(
    "giant_flower",
    [
        "....1....",
        ".1.....1.",
        "..1...1..",
        "...1.1...",
        "1...1...1",
        "...1.1...",
        "..1...1..",
        ".1.....1.",
        "....1....",
    ],
)

HEART = Stamp.from_rows(
    "heart",
    [
        ".......",
        "...1...",
        "..1.1..",
        ".1.1.1.",
        "..1.1..",
        "...1...",
        ".......",
    ],
)

RING = Stamp.from_columns(
    "ring",
    [
        ".1111.",
        "1....1",
        "1.11.1",
        "1.11.1",
        "1....1",
        ".1111.",
    ],
)

FLOWER2 = Stamp.from_columns(
    "flower2",
    [
        "..11..",
        ".1..1.",
        "1.11.1",
        "1.11.1",
        ".1..1.",
        "..11..",
    ],
)

BUTTERFLY = Stamp.from_columns(
    "butterfly",
    [
        "......",
        ".1....",
        ".11...",
        ".1.1..",
        "..111.",
        "......",
    ],
)

# Four small clusters around an empty center, kept as one stamp
FLOWER3 = Stamp.from_columns(
    "flower3",
    [
        "...............",
        ".......1.......",
        "......1.1......",
        "......1.1......",
        ".......1.......",
        "...............",
        "..11.......11..",
        ".1..1.....1..1.",
        "..11.......11..",
        "...............",
        ".......1.......",
        "......1.1......",
        "......1.1......",
        ".......1.......",
        "...............",
    ],
)

BOTTLE = Stamp.from_columns(
    "bottle",
    [
        "...............",
        "........11.....",
        "........1.1....",
        "...1....1.11...",
        "..11.....1.....",
        ".1..1..........",
        ".111...........",
        "...............",
        "...........111.",
        "..........1..1.",
        ".....1.....11..",
        "...11.1....1...",
        "....1.1........",
        ".....11........",
        "...............",
    ],
)

STAMPS: Dict[str, Stamp] = {
    s.name: s
    for s in (
        GLIDER,
        BLINKER,
        TOAD,
        BEACON,
        LWSS,
        SMALL_FLOWER,
        FLOWER,
        LARGE_FLOWER,
        GIANT_FLOWER,
        HEART,
        RING,
        FLOWER2,
        BUTTERFLY,
        FLOWER3,
        BOTTLE,
    )
}

CATEGORIES: Dict[str, List[str]] = {
    "Oscillators": ["blinker", "toad", "beacon"],
    "Spaceships": ["glider", "lwss"],
    "Sprites": [
        "small_flower",
        "flower",
        "large_flower",
        "giant_flower",
        "heart",
        "ring",
        "flower2",
        "butterfly",
        "flower3",
        "bottle",
    ],
}


def get_stamp(name: str) -> Stamp:
    """Look up a catalog stamp by name.

    Raises:
        KeyError: If no stamp has that name
    """
    try:
        return STAMPS[name]
    except KeyError:
        raise KeyError(f"Unknown stamp '{name}'. Available: {', '.join(STAMPS)}") from None


def list_stamps() -> List[str]:
    """Get the names of all catalog stamps."""
    return list(STAMPS)


def add_sprite(grid: Grid, name: str, x: int, y: int, hue: Optional[Hue] = None) -> bool:
    """Stamp a catalog entry by name. See :func:`stamp`."""
    return stamp(grid, x, y, get_stamp(name), hue)


def add_glider(grid: Grid, x: int, y: int, hue: Optional[Hue] = None) -> bool:
    return stamp(grid, x, y, GLIDER, hue)


def add_blinker(grid: Grid, x: int, y: int, hue: Optional[Hue] = None) -> bool:
    return stamp(grid, x, y, BLINKER, hue)


def add_toad(grid: Grid, x: int, y: int, hue: Optional[Hue] = None) -> bool:
    return stamp(grid, x, y, TOAD, hue)


def add_beacon(grid: Grid, x: int, y: int, hue: Optional[Hue] = None) -> bool:
    return stamp(grid, x, y, BEACON, hue)


def add_lwss(grid: Grid, x: int, y: int, hue: Optional[Hue] = None) -> bool:
    return stamp(grid, x, y, LWSS, hue)
