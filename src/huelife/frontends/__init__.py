"""Frontend interfaces for colored cellular automata."""

from .cli import CLIHueLife

__all__ = ["CLIHueLife"]
