"""Bounded Game of Life grid with a per-cell hue channel."""

import logging
import math
from typing import List, Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F

from .hue import Hue, RGBA, jitter_field, wrap_unit_array
from .render import Surface, render

logger = logging.getLogger(__name__)

# Channels of the fused neighbourhood pass
_ALIVE, _COLORED, _COS, _SIN = range(4)

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)


class Grid:
    """Represents a bounded 2D grid of cells that carry an optional hue.

    Aliveness and hue are each double-buffered: ``step`` reads the current
    layers, writes the next ones and swaps them. Hues are stored as a dense
    float array with a parallel presence mask. Cells outside the grid are
    always dead.
    """

    def __init__(self, width: int, height: int, seed: Optional[int] = None) -> None:
        """Initialize a new grid with every cell dead and uncolored.

        Args:
            width: Number of columns
            height: Number of rows
            seed: Seed for the generator that supplies fresh random hues

        Raises:
            ValueError: If width or height is smaller than 1
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.color_variation = 0.05
        self.alive_color: RGBA = WHITE
        self.dead_color: RGBA = BLACK

        self._rng = np.random.default_rng(seed)

        self._cells = np.zeros((width, height), dtype=bool)
        self._next_cells = np.zeros((width, height), dtype=bool)
        self._hues = np.zeros((width, height), dtype=np.float64)
        self._next_hues = np.zeros((width, height), dtype=np.float64)
        self._has_hue = np.zeros((width, height), dtype=bool)
        self._next_has_hue = np.zeros((width, height), dtype=bool)

        # Perturbation depends only on the coordinate, so it is computed once
        self._jitter = jitter_field(width, height)

        torch.set_num_threads(1)

        # One input channel per neighbourhood quantity, reused every step.
        # The kernel is symmetric, so the [x, y] layout needs no transpose.
        self._torch_input = torch.zeros(1, 4, width, height, dtype=torch.float64)
        kernel = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float64)
        self._torch_kernel = kernel.expand(4, 1, 3, 3).contiguous()

        logger.debug("Created %dx%d grid (seed=%s)", width, height, seed)

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the current aliveness layer, indexed [x, y]."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def hues(self) -> np.ndarray:
        """Read-only view of the current hue values (meaningful where ``hue_mask``)."""
        view = self._hues.view()
        view.flags.writeable = False
        return view

    @property
    def hue_mask(self) -> np.ndarray:
        """Read-only view of the current hue presence mask."""
        view = self._has_hue.view()
        view.flags.writeable = False
        return view

    @property
    def rng(self) -> np.random.Generator:
        """Generator used for fresh random hues."""
        return self._rng

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def clear(self) -> None:
        """Kill every cell and drop every hue."""
        self._cells.fill(False)
        self._has_hue.fill(False)
        self._hues.fill(0.0)

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the state of a cell.

        A cell made alive gets a fresh random hue; a cell made dead loses its
        hue. Coordinates outside the grid are ignored.

        Args:
            x: Column coordinate
            y: Row coordinate
            alive: Whether the cell should be alive
        """
        if alive:
            self.set_cell_with_color(x, y, True, Hue.random(self._rng))
        else:
            self.set_cell_with_color(x, y, False, None)

    def set_cell_with_color(self, x: int, y: int, alive: bool, hue: Optional[Hue]) -> None:
        """Set the state and hue of a cell exactly as given.

        Args:
            x: Column coordinate
            y: Row coordinate
            alive: Whether the cell should be alive
            hue: Hue to store, or None for no hue
        """
        if not self.in_bounds(x, y):
            return

        self._cells[x, y] = alive
        if hue is None:
            self._has_hue[x, y] = False
            self._hues[x, y] = 0.0
        else:
            if not isinstance(hue, Hue):
                hue = Hue(hue)
            self._has_hue[x, y] = True
            self._hues[x, y] = hue.value

    def get_cell(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Returns:
            True if the cell is alive, False if dead or out of bounds
        """
        if not self.in_bounds(x, y):
            return False
        return bool(self._cells[x, y])

    def get_cell_color(self, x: int, y: int) -> Optional[Hue]:
        """Get the hue of a cell.

        Returns:
            The stored Hue, or None if the cell has none or is out of bounds
        """
        if not self.in_bounds(x, y) or not self._has_hue[x, y]:
            return None
        return Hue(self._hues[x, y])

    def set_color_variation(self, variation: float) -> None:
        """Set how far inherited hues are perturbed, clamped to [0, 1]."""
        self.color_variation = min(max(float(variation), 0.0), 1.0)

    def neighborhood(self, x: int, y: int) -> Tuple[int, List[Hue]]:
        """Scan the Moore neighbourhood of a single cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Tuple of (live neighbour count, hues of the live neighbours that
            have one)
        """
        count = 0
        hues: List[Hue] = []
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue

                nx, ny = x + dx, y + dy
                if self.in_bounds(nx, ny) and self._cells[nx, ny]:
                    count += 1
                    if self._has_hue[nx, ny]:
                        hues.append(Hue(self._hues[nx, ny]))

        return count, hues

    def _scan_neighborhoods(self) -> np.ndarray:
        """Sum every neighbourhood quantity for all cells in one convolution.

        Returns:
            Array of shape (4, width, height) holding, per cell, the live
            neighbour count, the colored live neighbour count and the sums of
            cos and sin of their hue angles
        """
        colored = self._cells & self._has_hue
        angles = self._hues * (2.0 * math.pi)

        channels = self._torch_input[0]
        channels[_ALIVE] = torch.from_numpy(self._cells.astype(np.float64))
        channels[_COLORED] = torch.from_numpy(colored.astype(np.float64))
        channels[_COS] = torch.from_numpy(np.where(colored, np.cos(angles), 0.0))
        channels[_SIN] = torch.from_numpy(np.where(colored, np.sin(angles), 0.0))

        # Zero padding keeps the borders dead
        sums = F.conv2d(self._torch_input, self._torch_kernel, padding=1, groups=4)
        return sums[0].numpy()

    def step(self) -> None:
        """Advance the grid by one generation.

        Conway's rules decide aliveness. Survivors keep their hue, dead cells
        lose theirs, and newborn cells take the circular mean of their colored
        live neighbours, perturbed by ``color_variation``. A newborn with no
        colored neighbour gets a fresh random hue.
        """
        sums = self._scan_neighborhoods()
        counts = np.rint(sums[_ALIVE]).astype(np.int8)
        colored_counts = np.rint(sums[_COLORED]).astype(np.int8)

        alive = self._cells
        survive = alive & ((counts == 2) | (counts == 3))
        born = ~alive & (counts == 3)

        next_cells = self._next_cells
        next_hues = self._next_hues
        next_has_hue = self._next_has_hue

        np.logical_or(survive, born, out=next_cells)
        np.logical_and(survive, self._has_hue, out=next_has_hue)
        next_hues.fill(0.0)
        next_hues[next_has_hue] = self._hues[next_has_hue]

        inherit = born & (colored_counts > 0)
        if inherit.any():
            n = colored_counts[inherit].astype(np.float64)
            mean_cos = sums[_COS][inherit] / n
            mean_sin = sums[_SIN][inherit] / n
            mean = wrap_unit_array(np.arctan2(mean_sin, mean_cos) / (2.0 * math.pi))
            if self.color_variation > 0.0:
                mean = wrap_unit_array(mean + self._jitter[inherit] * self.color_variation)
            next_hues[inherit] = mean
            next_has_hue[inherit] = True

        fresh = born & (colored_counts == 0)
        fresh_count = int(np.count_nonzero(fresh))
        if fresh_count:
            next_hues[fresh] = self._rng.random(fresh_count)
            next_has_hue[fresh] = True

        self._cells, self._next_cells = next_cells, self._cells
        self._hues, self._next_hues = next_hues, self._hues
        self._has_hue, self._next_has_hue = next_has_hue, self._has_hue

    def stats(self) -> Tuple[int, int]:
        """Get (alive cell count, total cell count)."""
        return (self.population, self.width * self.height)

    def render(self, surface: Surface, offset_x: int = 0, offset_y: int = 0, scale: int = 1) -> None:
        """Draw the current generation onto a surface.

        See :func:`huelife.core.render.render`.
        """
        render(self, surface, offset_x, offset_y, scale)

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        xs, ys = np.nonzero(self._cells)
        if len(xs) == 0:
            return None

        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def __eq__(self, other: object) -> bool:
        """Check if two grids hold the same cells and hues."""
        if not isinstance(other, Grid):
            return False
        return (
            self.shape == other.shape
            and np.array_equal(self._cells, other._cells)
            and np.array_equal(self._has_hue, other._has_hue)
            and np.array_equal(self._hues[self._has_hue], other._hues[other._has_hue])
        )

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        result = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                row.append("*" if self._cells[x, y] else ".")
            result.append("".join(row))
        return "\n".join(result)
