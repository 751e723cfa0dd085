"""Core colored cellular automata logic."""

from .hue import Hue
from .grid import Grid
from .game import HueLife
from .render import PixelBuffer, Surface, cell_colors, render
from .stamps import STAMPS, Stamp, get_stamp, list_stamps, stamp
from .scenes import SCENES, apply_scene, get_scene, list_scenes

__all__ = [
    "Hue",
    "Grid",
    "HueLife",
    "PixelBuffer",
    "Surface",
    "cell_colors",
    "render",
    "STAMPS",
    "Stamp",
    "get_stamp",
    "list_stamps",
    "stamp",
    "SCENES",
    "apply_scene",
    "get_scene",
    "list_scenes",
]
