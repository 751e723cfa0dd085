"""Colored cellular automata: Conway's Game of Life with inherited hues."""

__version__ = "0.1.0"

from .core.hue import Hue
from .core.grid import Grid
from .core.game import HueLife
from .core.render import PixelBuffer, render
from .core.stamps import Stamp, stamp

__all__ = ["Hue", "Grid", "HueLife", "PixelBuffer", "render", "Stamp", "stamp"]
