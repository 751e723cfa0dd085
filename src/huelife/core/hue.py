"""Hue values on the color wheel and their conversion to RGBA."""

import time
from typing import Optional, Tuple

import numpy as np

MASK64 = 0xFFFFFFFFFFFFFFFF
TWO_POW_64 = float(2**64)

# Fixed seed mixed into every per-cell perturbation hash
JITTER_SEED = 0x5DEECE66D1F3A9B7

RGBA = Tuple[int, int, int, int]


def mix64(value: int) -> int:
    """Splitmix64 finalizer for a single 64-bit integer."""
    z = (value + 0x9E3779B97F4A7C15) & MASK64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
    return z ^ (z >> 31)


def mix64_array(values: np.ndarray) -> np.ndarray:
    """Vectorized :func:`mix64` over a uint64 array."""
    z = values.astype(np.uint64)
    with np.errstate(over="ignore"):
        z = z + np.uint64(0x9E3779B97F4A7C15)
        z = (z ^ (z >> np.uint64(30))) * np.uint64(0xBF58476D1CE4E5B9)
        z = (z ^ (z >> np.uint64(27))) * np.uint64(0x94D049BB133111EB)
    return z ^ (z >> np.uint64(31))


def cell_hash(x: int, y: int) -> int:
    """Deterministic 64-bit hash of a cell coordinate."""
    return mix64(((x << 32) ^ y ^ JITTER_SEED) & MASK64)


def cell_jitter(x: int, y: int) -> float:
    """Perturbation factor for cell (x, y), in [-1, +1]."""
    return (cell_hash(x, y) / 2**64) * 2.0 - 1.0


def jitter_field(width: int, height: int) -> np.ndarray:
    """Compute :func:`cell_jitter` for every cell of a width x height grid.

    Returns:
        float64 array indexed [x, y]
    """
    xs = np.arange(width, dtype=np.uint64)[:, None]
    ys = np.arange(height, dtype=np.uint64)[None, :]
    keys = (xs << np.uint64(32)) ^ ys ^ np.uint64(JITTER_SEED)
    hashes = mix64_array(keys)
    return (hashes.astype(np.float64) / TWO_POW_64) * 2.0 - 1.0


def wrap_unit(value: float) -> float:
    """Euclidean remainder of value by 1, always strictly below 1."""
    wrapped = value % 1.0
    # Tiny negatives round up to exactly 1.0
    if wrapped >= 1.0:
        return 0.0
    return wrapped


def wrap_unit_array(values: np.ndarray) -> np.ndarray:
    """Vectorized :func:`wrap_unit`."""
    wrapped = np.mod(values, 1.0)
    wrapped[wrapped >= 1.0] = 0.0
    return wrapped


def hues_to_rgba(values: np.ndarray) -> np.ndarray:
    """Convert an array of hue values to RGBA8 with full saturation and value.

    Args:
        values: Array of hue values in [0, 1)

    Returns:
        uint8 array with a trailing axis of length 4
    """
    h = np.asarray(values, dtype=np.float64) * 6.0
    x = 1.0 - np.abs(np.mod(h, 2.0) - 1.0)
    sector = np.clip(np.floor(h).astype(np.int64), 0, 5)

    one = np.ones_like(h)
    zero = np.zeros_like(h)
    r = np.choose(sector, [one, x, zero, zero, x, one])
    g = np.choose(sector, [x, one, one, x, zero, zero])
    b = np.choose(sector, [zero, zero, x, one, one, x])

    rgba = np.empty(h.shape + (4,), dtype=np.uint8)
    rgba[..., 0] = (r * 255.0).astype(np.uint8)
    rgba[..., 1] = (g * 255.0).astype(np.uint8)
    rgba[..., 2] = (b * 255.0).astype(np.uint8)
    rgba[..., 3] = 255
    return rgba


class Hue:
    """A position on the color wheel, stored as a value in [0, 1)."""

    __slots__ = ("value",)

    def __init__(self, value: float) -> None:
        """Create a hue, wrapping any real value into [0, 1).

        Args:
            value: Hue value; negatives and values >= 1 wrap around
        """
        self.value = wrap_unit(float(value))

    @classmethod
    def random(cls, rng: Optional[np.random.Generator] = None) -> "Hue":
        """Create a random hue.

        Args:
            rng: Generator to draw from. Without one the hue is derived from
                the current time and is not reproducible.

        Returns:
            New Hue instance
        """
        if rng is not None:
            return cls(rng.random())
        return cls(mix64(time.time_ns() & MASK64) / 2**64)

    def to_color(self) -> RGBA:
        """Convert to an RGBA8 tuple using HSV with S = V = 1."""
        h = self.value * 6.0
        x = 1.0 - abs((h % 2.0) - 1.0)

        if h < 1.0:
            r, g, b = 1.0, x, 0.0
        elif h < 2.0:
            r, g, b = x, 1.0, 0.0
        elif h < 3.0:
            r, g, b = 0.0, 1.0, x
        elif h < 4.0:
            r, g, b = 0.0, x, 1.0
        elif h < 5.0:
            r, g, b = x, 0.0, 1.0
        else:
            r, g, b = 1.0, 0.0, x

        return (int(r * 255.0), int(g * 255.0), int(b * 255.0), 255)

    def __add__(self, other: object) -> "Hue":
        if not isinstance(other, Hue):
            return NotImplemented
        return Hue(self.value + other.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hue):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"Hue({self.value!r})"
