"""Generation bookkeeping around a colored Game of Life grid."""

import logging
import math
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple

import numpy as np

from .grid import Grid
from .hue import Hue

logger = logging.getLogger(__name__)

# Oldest aliveness layers are forgotten past this many
MAX_TRACKED_STATES = 1000


class HueLife:
    """Simulation engine driving a :class:`Grid` one generation at a time.

    On top of ``Grid.step`` it tracks:
    - the generation counter
    - recent population history
    - repeats of the aliveness layer; hues are not part of the state, so a
      pattern that cycles while its colors drift still counts as a cycle
    """

    def __init__(self, grid: Grid) -> None:
        """Initialize the simulation with a grid.

        Args:
            grid: The grid to simulate
        """
        self.grid = grid
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle: Optional[Tuple[int, int]] = None

        self._record_population()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        return self.grid.population

    @property
    def population_history(self) -> List[int]:
        """Live cell counts of the last 100 generations."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        return self._cycle is not None

    @property
    def cycle_length(self) -> int:
        """Period of the detected cycle, 0 if none."""
        return self._cycle[1] if self._cycle else 0

    @property
    def cycle_start_generation(self) -> int:
        """First generation of the detected cycle, 0 if none."""
        return self._cycle[0] if self._cycle else 0

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self._remember_state()
        self.grid.step()
        self._generation += 1
        self._record_population()

    def run(self, generations: int) -> None:
        """Advance a fixed number of generations."""
        for _ in range(generations):
            self.step()

    def _record_population(self) -> None:
        self._population_history.append(self.population)

    def _remember_state(self) -> None:
        if self._cycle is not None:
            return

        key = self.grid.cells.tobytes()
        first_seen = self._seen_states.get(key)
        if first_seen is not None:
            self._cycle = (first_seen, self._generation - first_seen)
            logger.debug("Aliveness repeats generation %d at generation %d", first_seen, self._generation)
            return

        self._seen_states[key] = self._generation
        if len(self._seen_states) > MAX_TRACKED_STATES:
            del self._seen_states[next(iter(self._seen_states))]

    def reset(self, clear_grid: bool = True) -> None:
        """Start counting generations again from 0.

        Args:
            clear_grid: Also kill every cell and drop every hue
        """
        if clear_grid:
            self.grid.clear()

        self._generation = 0
        self._population_history.clear()
        self.clear_cycle_detection()
        self._record_population()

    def clear_cycle_detection(self) -> None:
        """Forget seen states, e.g. after the grid was edited by hand."""
        self._seen_states.clear()
        self._cycle = None

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Step until the aliveness layer repeats or every cell is dead.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle is not None:
                return self._generation, "cycle"

            if self.population == 0:
                return self._generation, "extinction"

        return self._generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Average population change per generation over the recent window."""
        recent = list(self._population_history)[-window_size:]
        if len(recent) < 2:
            return 0.0

        return float(np.mean(np.diff(recent)))

    def mean_hue(self) -> Optional[Hue]:
        """Circular mean of the hues of all live colored cells, or None."""
        colored = self.grid.cells & self.grid.hue_mask
        if not colored.any():
            return None

        angles = self.grid.hues[colored] * (2.0 * math.pi)
        angle = math.atan2(float(np.mean(np.sin(angles))), float(np.mean(np.cos(angles))))
        return Hue(angle / (2.0 * math.pi))

    def get_statistics(self) -> Dict[str, Any]:
        """Get population, hue, cycle and bounding box statistics."""
        alive, total = self.grid.stats()
        mean_hue = self.mean_hue()
        bbox = self.grid.get_bounding_box()

        stats: Dict[str, Any] = {
            "generation": self._generation,
            "population": alive,
            "total_cells": total,
            "population_density": alive / total,
            "colored_cells": int(np.count_nonzero(self.grid.cells & self.grid.hue_mask)),
            "mean_hue": mean_hue.value if mean_hue is not None else None,
            "color_variation": self.grid.color_variation,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": self.population_history,
            "cycle_detected": self.cycle_detected,
            "cycle_length": self.cycle_length,
            "cycle_start_generation": self.cycle_start_generation,
            "grid_size": self.grid.shape,
            "bounding_box": bbox,
        }

        if bbox is None:
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0
        else:
            min_x, min_y, max_x, max_y = bbox
            size = (max_x - min_x + 1, max_y - min_y + 1)
            stats["bounding_box_size"] = size
            stats["bounding_box_area"] = size[0] * size[1]

        return stats
