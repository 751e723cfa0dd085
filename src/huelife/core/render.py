"""Drawing a grid onto a pixel surface."""

from typing import Optional, Protocol, TYPE_CHECKING

import numpy as np

from .hue import RGBA, hues_to_rgba

if TYPE_CHECKING:
    from .grid import Grid


class Surface(Protocol):
    """Pixel sink the renderer draws on.

    ``set_pixel`` must silently drop coordinates outside the surface.
    """

    def set_current_color(self, color: RGBA) -> None: ...

    def set_pixel(self, x: int, y: int) -> None: ...


def cell_colors(grid: "Grid") -> np.ndarray:
    """Compute the display color of every cell.

    Live cells with a hue use its color, live cells without one use
    ``grid.alive_color`` and dead cells use ``grid.dead_color``.

    Returns:
        uint8 array of shape (width, height, 4)
    """
    colors = np.empty((grid.width, grid.height, 4), dtype=np.uint8)
    colors[:] = grid.dead_color

    alive = grid.cells
    colored = alive & grid.hue_mask
    colors[alive] = grid.alive_color
    colors[colored] = hues_to_rgba(grid.hues[colored])
    return colors


def render(grid: "Grid", surface: Surface, offset_x: int = 0, offset_y: int = 0, scale: int = 1) -> None:
    """Draw every cell of the grid as a scale x scale block.

    Cell (x, y) covers surface pixels starting at
    (offset_x + x * scale, offset_y + y * scale). The whole grid is redrawn on
    every call; pixels falling off the surface are dropped by the surface.

    Args:
        grid: Grid to draw
        surface: Target surface
        offset_x: Horizontal pixel offset of the grid's top-left corner
        offset_y: Vertical pixel offset of the grid's top-left corner
        scale: Pixels per cell side
    """
    if scale < 1:
        return

    colors = cell_colors(grid)
    block = range(scale)
    for x in range(grid.width):
        base_x = offset_x + x * scale
        for y in range(grid.height):
            base_y = offset_y + y * scale
            surface.set_current_color(tuple(colors[x, y].tolist()))
            for sx in block:
                for sy in block:
                    surface.set_pixel(base_x + sx, base_y + sy)


class PixelBuffer:
    """In-memory RGBA pixel surface.

    Pixels are stored row-major as a (height, width, 4) uint8 array.
    """

    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 255)) -> None:
        """Initialize a buffer filled with the background color.

        Args:
            width: Width in pixels
            height: Height in pixels
            background: Color used by ``clear``
        """
        self.width = width
        self.height = height
        self.background_color: RGBA = tuple(background)
        self.current_color: RGBA = (255, 255, 255, 255)
        self._pixels = np.empty((height, width, 4), dtype=np.uint8)
        self.clear()

    @property
    def pixels(self) -> np.ndarray:
        """The pixel array, indexed [y, x]."""
        return self._pixels

    def clear(self) -> None:
        """Fill the whole buffer with the background color."""
        self._pixels[:] = self.background_color

    def set_background_color(self, color: RGBA) -> None:
        self.background_color = tuple(color)

    def set_current_color(self, color: RGBA) -> None:
        self.current_color = tuple(color)

    def set_pixel(self, x: int, y: int) -> None:
        """Paint one pixel with the current color, ignoring out-of-range pixels."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self._pixels[y, x] = self.current_color

    def get_pixel(self, x: int, y: int) -> Optional[RGBA]:
        """Get the color of a pixel, or None outside the buffer."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return tuple(self._pixels[y, x].tolist())
        return None

    def to_ansi(self, cell: str = "  ") -> str:
        """Format the buffer as 24-bit ANSI background-colored text."""
        lines = []
        for row in self._pixels:
            parts = [f"\x1b[48;2;{r};{g};{b}m{cell}" for r, g, b, _ in row.tolist()]
            lines.append("".join(parts) + "\x1b[0m")
        return "\n".join(lines)
