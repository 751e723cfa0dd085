"""Command-line interface for the colored Game of Life."""

import argparse
import logging
import sys
import time
from typing import Any, Dict, Optional, Tuple

from ..core.game import HueLife
from ..core.grid import Grid
from ..core.hue import Hue
from ..core.render import PixelBuffer
from ..core.scenes import SCENES, apply_scene, list_scenes
from ..core.stamps import CATEGORIES, get_stamp, stamp


class CLIHueLife:
    """Command-line interface for running colored Game of Life simulations."""

    def run_simulation(
        self,
        width: int,
        height: int,
        max_generations: int,
        scene: Optional[str] = "flowers",
        stamp_name: Optional[str] = None,
        stamp_x: int = 0,
        stamp_y: int = 0,
        hue: Optional[float] = None,
        color_variation: float = 0.05,
        seed: Optional[int] = None,
        until_stable: bool = False,
        interval_ms: int = 0,
        report_every: int = 0,
        verbose: bool = False,
        show_grid: bool = False,
        render_frame: bool = False,
        scale: int = 1,
    ) -> Tuple[int, str, Dict[str, Any]]:
        """Run a colored Game of Life simulation.

        Args:
            width: Grid width
            height: Grid height
            max_generations: Maximum generations to run
            scene: Scene used to seed the grid when no stamp is given
            stamp_name: Catalog stamp to place instead of a scene
            stamp_x: X position of the stamp
            stamp_y: Y position of the stamp
            hue: Hue of the stamped cells (None leaves them uncolored)
            color_variation: Perturbation applied to inherited hues
            seed: Seed for the grid's random hues
            until_stable: Stop early on a cycle or extinction
            interval_ms: Minimum time between generations in milliseconds
            report_every: Print live cell counts every N generations (0 = never)
            verbose: Print progress updates
            show_grid: Show initial and final grid states
            render_frame: Print the final generation as ANSI colors
            scale: Pixels per cell when rendering

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        grid = Grid(width, height, seed=seed)
        grid.set_color_variation(color_variation)

        if verbose:
            print(f"Initializing {width}x{height} grid (color variation: {grid.color_variation:.2f})")

        if stamp_name:
            stamp_hue = Hue(hue) if hue is not None else None
            if verbose:
                print(f"Stamping '{stamp_name}' at ({stamp_x}, {stamp_y})")
            if not stamp(grid, stamp_x, stamp_y, get_stamp(stamp_name), stamp_hue):
                print(f"Warning: Stamp '{stamp_name}' does not fit at ({stamp_x}, {stamp_y}), grid left empty")
        elif scene:
            if verbose:
                print(f"Seeding scene '{scene}'")
            apply_scene(grid, scene)

        game = HueLife(grid)
        initial_population = game.population

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(grid))

        if verbose:
            print(f"\nRunning simulation (max {max_generations} generations)...")

        reason = "max_generations"
        interval = interval_ms / 1000.0
        start_time = time.time()
        next_tick = time.monotonic()

        for _ in range(max_generations):
            if interval > 0:
                delay = next_tick - time.monotonic()
                if delay > 0:
                    time.sleep(delay)
                next_tick += interval

            game.step()

            if report_every and game.generation % report_every == 0:
                print(self._format_report(game))

            if until_stable:
                if game.cycle_detected:
                    reason = "cycle"
                    break
                if game.population == 0:
                    reason = "extinction"
                    break

        duration = time.time() - start_time
        final_generation = game.generation

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid:
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_grid(grid))

        if render_frame:
            print(self._render_frame(grid, scale))

        return final_generation, reason, stats

    def _format_report(self, game: HueLife) -> str:
        """One line with the live cell count of the current generation."""
        alive, total = game.grid.stats()
        return f"Generation {game.generation}: {alive} live cells of {total} ({alive / total:.1%})"

    def _format_grid(self, grid: Grid, max_size: int = 100) -> str:
        """Format grid for display, truncating if too large."""
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.width}x{grid.height})"

        return str(grid)

    def _render_frame(self, grid: Grid, scale: int = 1) -> str:
        """Render the grid into a pixel buffer and format it for a terminal."""
        buffer = PixelBuffer(grid.width * scale, grid.height * scale, grid.dead_color)
        grid.render(buffer, 0, 0, scale)
        return buffer.to_ansi()

    def list_stamps(self) -> None:
        """List catalog stamps by category."""
        print("Available stamps:")
        for category, names in CATEGORIES.items():
            print(f"\n{category}:")
            for name in names:
                bitmap = get_stamp(name)
                width, height = bitmap.get_size()
                print(f"  {name}: {width}x{height}, {bitmap.population} cells")

    def list_scenes(self) -> None:
        """List scenes with their descriptions."""
        print("Available scenes:")
        for name in list_scenes():
            doc = (SCENES[name].__doc__ or "").strip()
            print(f"  {name}: {doc}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run the colored Game of Life from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the flower scene for 200 generations
  huelife-cli --scene flowers

  # Watch a colored glider on a small grid, one generation every 100 ms
  huelife-cli -W 20 -H 20 --stamp glider --hue 0.33 --interval 100 --show-grid

  # Stop as soon as the population cycles or dies out
  huelife-cli --scene random --until-stable --max-generations 5000

  # Print live cell counts every 50 generations and render the last frame
  huelife-cli --scene colorful --report-every 50 --render

  # List available stamps and scenes
  huelife-cli --list-stamps
  huelife-cli --list-scenes
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, default=100, help="Grid width (default: 100)")

    parser.add_argument("-H", "--height", type=int, default=75, help="Grid height (default: 75)")

    parser.add_argument(
        "--color-variation",
        type=float,
        default=0.05,
        help="Perturbation of inherited hues, 0.0-1.0 (default: 0.05)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible hues",
    )

    # Seed configuration
    parser.add_argument(
        "--scene",
        type=str,
        default="flowers",
        help="Scene used to seed the grid (default: flowers)",
    )

    parser.add_argument(
        "--stamp",
        type=str,
        help="Place a single catalog stamp instead of a scene",
    )

    parser.add_argument(
        "--stamp-x",
        type=int,
        help="X position for the stamp (default: centered)",
    )

    parser.add_argument(
        "--stamp-y",
        type=int,
        help="Y position for the stamp (default: centered)",
    )

    parser.add_argument(
        "--hue",
        type=float,
        help="Hue of the stamped cells, 0.0-1.0 (default: uncolored)",
    )

    # Simulation configuration
    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=200,
        help="Maximum generations to simulate (default: 200)",
    )

    parser.add_argument(
        "--until-stable",
        action="store_true",
        help="Stop early when the population cycles or dies out",
    )

    parser.add_argument(
        "--interval",
        type=int,
        default=0,
        help="Milliseconds between generations, 0 for no pacing (default: 0)",
    )

    # Output configuration
    parser.add_argument(
        "--report-every",
        type=int,
        default=0,
        help="Print live cell counts every N generations (default: off)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states",
    )

    parser.add_argument(
        "--render",
        action="store_true",
        help="Print the final generation in 24-bit terminal colors",
    )

    parser.add_argument(
        "--scale",
        type=int,
        default=1,
        help="Pixels per cell when rendering (default: 1)",
    )

    parser.add_argument(
        "--list-stamps",
        action="store_true",
        help="List all catalog stamps and exit",
    )

    parser.add_argument(
        "--list-scenes",
        action="store_true",
        help="List all scenes and exit",
    )

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display."""
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Colored cells: {stats['colored_cells']}")
        if stats["mean_hue"] is not None:
            print(f"  Mean hue: {stats['mean_hue']:.3f}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(
                f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) " f"[{bbox_size[0]}x{bbox_size[1]}]"
            )
    else:
        initial_pop = stats["initial_population"]
        final_pop = stats["population"]
        duration = stats.get("duration_seconds", 0)
        speed = stats.get("generations_per_second", 0)

        print(f"Population: {initial_pop} → {final_pop}, Duration: {duration:.3f}s, Speed: {speed:.0f} gen/s")


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if not 0.0 <= args.color_variation <= 1.0:
        errors.append("Color variation must be between 0.0 and 1.0")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.interval < 0:
        errors.append("Interval must be non-negative")

    if args.report_every < 0:
        errors.append("Report interval must be non-negative")

    if args.scale <= 0:
        errors.append("Scale must be positive")

    if args.hue is not None and not 0.0 <= args.hue <= 1.0:
        errors.append("Hue must be between 0.0 and 1.0")

    if args.stamp is None and args.scene not in SCENES:
        errors.append(f"Unknown scene '{args.scene}'. Available: {', '.join(SCENES)}")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    cli = CLIHueLife()

    if args.list_stamps:
        cli.list_stamps()
        return 0

    if args.list_scenes:
        cli.list_scenes()
        return 0

    if not validate_args(args):
        return 1

    if args.stamp:
        try:
            bitmap = get_stamp(args.stamp)
        except KeyError as e:
            print(f"Error: {e.args[0]}")
            print("Use --list-stamps to see detailed information")
            return 1

        # Center the stamp unless a position was given
        if args.stamp_x is None:
            args.stamp_x = max(0, (args.width - bitmap.width) // 2)
        if args.stamp_y is None:
            args.stamp_y = max(0, (args.height - bitmap.height) // 2)
        if args.verbose:
            print(f"Stamp position: ({args.stamp_x}, {args.stamp_y})")

    try:
        final_generation, reason, stats = cli.run_simulation(
            width=args.width,
            height=args.height,
            max_generations=args.max_generations,
            scene=args.scene,
            stamp_name=args.stamp,
            stamp_x=args.stamp_x or 0,
            stamp_y=args.stamp_y or 0,
            hue=args.hue,
            color_variation=args.color_variation,
            seed=args.seed,
            until_stable=args.until_stable,
            interval_ms=args.interval,
            report_every=args.report_every,
            verbose=args.verbose,
            show_grid=args.show_grid,
            render_frame=args.render,
            scale=args.scale,
        )

        print_results(final_generation, reason, stats, args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
