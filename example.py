#!/usr/bin/env python3
"""
Example usage of the huelife package.
"""

from huelife import Grid, Hue, HueLife, PixelBuffer
from huelife.core.stamps import add_glider, add_sprite


def main():
    """Demonstrate programmatic usage of the huelife package."""
    # Create a grid and game
    grid = Grid(30, 20, seed=1)
    grid.set_color_variation(0.1)
    game = HueLife(grid)

    # Two gliders in different hues and a flower without one
    add_glider(grid, 2, 2, Hue(0.0))
    add_glider(grid, 2, 10, Hue(0.66))
    add_sprite(grid, "small_flower", 20, 8)

    print("Initial state:")
    print(grid)
    print(f"Population: {game.population}")
    print()

    # Run simulation for 10 generations
    for _ in range(10):
        game.step()
        if game.cycle_detected:
            print(f"Cycle detected! Length: {game.cycle_length}")
            break

    print(f"Generation {game.generation}:")
    print(grid)
    print()

    # Draw the colored cells into a terminal
    buffer = PixelBuffer(grid.width, grid.height)
    grid.render(buffer)
    print(buffer.to_ansi())

    # Show statistics
    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        if key != "population_history":
            print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
