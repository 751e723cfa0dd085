"""Tests for the CLI frontend."""

import argparse
from unittest.mock import Mock, patch
from io import StringIO

from huelife.core.grid import Grid
from huelife.core.hue import Hue
from huelife.frontends.cli import (
    CLIHueLife,
    create_parser,
    format_finish_reason,
    print_results,
    validate_args,
    main,
)


def make_args(**overrides):
    """Parse default arguments and override some of them."""
    args = create_parser().parse_args([])
    for key, value in overrides.items():
        setattr(args, key, value)
    return args


class TestCLIHueLife:
    """Test cases for the CLI colored Game of Life."""

    def test_run_simulation_scene(self):
        """Test running simulation from a scene."""
        cli = CLIHueLife()

        final_gen, reason, stats = cli.run_simulation(
            width=100,
            height=75,
            max_generations=20,
            scene="gliders",
            seed=1,
        )

        assert final_gen == 20
        assert reason == "max_generations"
        assert isinstance(stats, dict)
        assert "generation" in stats
        assert "population" in stats
        assert "duration_seconds" in stats
        assert stats["initial_population"] == 25

    def test_run_simulation_with_stamp(self):
        """Test running simulation with a single stamp."""
        cli = CLIHueLife()

        final_gen, reason, stats = cli.run_simulation(
            width=20,
            height=20,
            max_generations=50,
            stamp_name="blinker",
            stamp_x=10,
            stamp_y=10,
            hue=0.5,
            until_stable=True,
        )

        assert stats["initial_population"] == 3
        assert reason == "cycle"
        assert final_gen == 3
        assert stats["colored_cells"] == 3
        assert stats["mean_hue"] is not None

    def test_run_simulation_extinction(self):
        """Test a blinker on the border dies out."""
        cli = CLIHueLife()

        final_gen, reason, stats = cli.run_simulation(
            width=10,
            height=10,
            max_generations=50,
            stamp_name="blinker",
            stamp_x=0,
            stamp_y=0,
            until_stable=True,
        )

        assert reason == "extinction"
        assert final_gen == 2
        assert stats["population"] == 0

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_stamp_does_not_fit(self, mock_stdout):
        """Test a stamp that does not fit leaves the grid empty with a warning."""
        cli = CLIHueLife()

        _, _, stats = cli.run_simulation(
            width=10,
            height=10,
            max_generations=5,
            stamp_name="bottle",
        )

        assert stats["initial_population"] == 0
        assert "does not fit" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_reports(self, mock_stdout):
        """Test periodic live cell reports."""
        cli = CLIHueLife()

        cli.run_simulation(
            width=20,
            height=20,
            max_generations=4,
            stamp_name="blinker",
            stamp_x=5,
            stamp_y=5,
            report_every=2,
        )

        output = mock_stdout.getvalue()
        assert "Generation 2: 3 live cells of 400" in output
        assert "Generation 4: 3 live cells of 400" in output
        assert "Generation 3:" not in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_render(self, mock_stdout):
        """Test the final frame is printed in terminal colors."""
        cli = CLIHueLife()

        cli.run_simulation(
            width=4,
            height=3,
            max_generations=1,
            scene=None,
            render_frame=True,
            scale=2,
        )

        lines = mock_stdout.getvalue().strip().split("\n")
        assert len(lines) == 6
        assert all(line.endswith("\x1b[0m") for line in lines)

    @patch("time.sleep")
    def test_run_simulation_interval(self, mock_sleep):
        """Test pacing sleeps between generations."""
        cli = CLIHueLife()

        cli.run_simulation(width=10, height=10, max_generations=3, scene=None, interval_ms=1000)

        # No wait before the first generation
        assert mock_sleep.call_count == 2
        for call in mock_sleep.call_args_list:
            assert 0 < call.args[0] <= 2.0

    def test_format_grid_small(self):
        """Test grid formatting for small grids."""
        cli = CLIHueLife()

        grid = Grid(5, 5)
        grid.set_cell(2, 2, True)

        formatted = cli._format_grid(grid)
        assert "*" in formatted
        assert "....." in formatted

    def test_format_grid_large(self):
        """Test grid formatting for large grids."""
        cli = CLIHueLife()

        grid = Grid(100, 100)
        formatted = cli._format_grid(grid, max_size=50)
        assert "too large to display" in formatted

    def test_render_frame(self):
        """Test a frame uses the cell colors."""
        cli = CLIHueLife()

        grid = Grid(2, 1)
        grid.set_cell_with_color(0, 0, True, Hue(0.0))

        frame = cli._render_frame(grid)
        assert frame == "\x1b[48;2;255;0;0m  \x1b[48;2;0;0;0m  \x1b[0m"

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_stamps(self, mock_stdout):
        """Test stamp listing."""
        cli = CLIHueLife()
        cli.list_stamps()

        output = mock_stdout.getvalue()
        assert "Available stamps:" in output
        assert "glider: 3x3, 5 cells" in output
        assert "bottle" in output
        assert "Oscillators:" in output
        assert "Sprites:" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_scenes(self, mock_stdout):
        """Test scene listing."""
        cli = CLIHueLife()
        cli.list_scenes()

        output = mock_stdout.getvalue()
        assert "Available scenes:" in output
        assert "flowers:" in output
        assert "random:" in output


class TestArgumentParsing:
    """Test command-line argument parsing."""

    def test_create_parser(self):
        """Test parser creation."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)

        # Test default values
        args = parser.parse_args([])
        assert args.width == 100
        assert args.height == 75
        assert args.color_variation == 0.05
        assert args.scene == "flowers"
        assert args.stamp is None
        assert args.hue is None
        assert args.seed is None
        assert args.max_generations == 200
        assert args.interval == 0
        assert args.until_stable is False

    def test_parse_basic_args(self):
        """Test parsing basic arguments."""
        parser = create_parser()

        args = parser.parse_args(
            ["--width", "30", "--height", "40", "--color-variation", "0.2", "--seed", "7"]
        )

        assert args.width == 30
        assert args.height == 40
        assert args.color_variation == 0.2
        assert args.seed == 7

    def test_parse_stamp_args(self):
        """Test parsing stamp-related arguments."""
        parser = create_parser()

        args = parser.parse_args(
            ["--stamp", "glider", "--stamp-x", "10", "--stamp-y", "15", "--hue", "0.33"]
        )

        assert args.stamp == "glider"
        assert args.stamp_x == 10
        assert args.stamp_y == 15
        assert args.hue == 0.33

    def test_parse_output_args(self):
        """Test parsing output-related arguments."""
        parser = create_parser()

        args = parser.parse_args(
            ["--verbose", "--show-grid", "--max-generations", "5000", "--render", "--scale", "3"]
        )

        assert args.verbose is True
        assert args.show_grid is True
        assert args.max_generations == 5000
        assert args.render is True
        assert args.scale == 3

    def test_parse_short_args(self):
        """Test parsing short argument forms."""
        parser = create_parser()

        args = parser.parse_args(["-W", "25", "-H", "35", "-m", "1000", "-v", "-g"])

        assert args.width == 25
        assert args.height == 35
        assert args.max_generations == 1000
        assert args.verbose is True
        assert args.show_grid is True


class TestValidation:
    """Test argument validation."""

    def test_validate_args_valid(self):
        """Test validation with valid arguments."""
        assert validate_args(make_args()) is True
        assert validate_args(make_args(stamp="glider", hue=1.0)) is True

    def test_validate_args_invalid_width(self):
        """Test validation with invalid width."""
        assert validate_args(make_args(width=-5)) is False

    def test_validate_args_invalid_color_variation(self):
        """Test validation with out-of-range color variation."""
        assert validate_args(make_args(color_variation=1.5)) is False

    def test_validate_args_invalid_hue(self):
        """Test validation with out-of-range hue."""
        assert validate_args(make_args(hue=-0.1)) is False

    def test_validate_args_negative_interval(self):
        """Test validation with negative pacing interval."""
        assert validate_args(make_args(interval=-10)) is False

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_args_unknown_scene(self, mock_stdout):
        """Test validation with an unknown scene."""
        assert validate_args(make_args(scene="nowhere")) is False
        assert "Unknown scene 'nowhere'" in mock_stdout.getvalue()

    def test_validate_args_scene_ignored_with_stamp(self):
        """Test the scene is not checked when a stamp replaces it."""
        assert validate_args(make_args(scene="nowhere", stamp="glider")) is True


class TestFormatting:
    """Test output formatting functions."""

    def test_format_finish_reason_extinction(self):
        """Test formatting extinction reason."""
        reason = format_finish_reason("extinction", {})
        assert "Extinction" in reason
        assert "died" in reason

    def test_format_finish_reason_cycle(self):
        """Test formatting cycle detection reason."""
        stats = {"cycle_length": 3, "cycle_start_generation": 15}
        reason = format_finish_reason("cycle", stats)
        assert "Cycle detected" in reason
        assert "length 3" in reason
        assert "generation 15" in reason

    def test_format_finish_reason_max_generations(self):
        """Test formatting max generations reason."""
        stats = {"generation": 10000}
        reason = format_finish_reason("max_generations", stats)
        assert "Maximum generations" in reason
        assert "10000" in reason

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_results_verbose(self, mock_stdout):
        """Test printing results in verbose mode."""
        stats = {
            "grid_size": (50, 50),
            "initial_population": 250,
            "population": 100,
            "population_density": 0.04,
            "colored_cells": 90,
            "mean_hue": 0.25,
            "population_change_rate": -1.5,
            "duration_seconds": 2.5,
            "generations_per_second": 400.0,
            "bounding_box": (10, 10, 40, 40),
            "bounding_box_size": (31, 31),
        }

        print_results(1000, "cycle", stats, verbose=True)

        output = mock_stdout.getvalue()
        assert "1000 generations" in output
        assert "Cycle detected" in output
        assert "Grid size: 50x50" in output
        assert "Initial population: 250" in output
        assert "Colored cells: 90" in output
        assert "Mean hue: 0.250" in output
        assert "2.500 seconds" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_results_compact(self, mock_stdout):
        """Test printing results in compact mode."""
        stats = {
            "initial_population": 250,
            "population": 100,
            "duration_seconds": 2.5,
            "generations_per_second": 400.0,
        }

        print_results(1000, "extinction", stats, verbose=False)

        output = mock_stdout.getvalue()
        assert "1000 generations" in output
        assert "250 → 100" in output  # Population change
        assert "2.500s" in output
        assert "400 gen/s" in output


class TestMainFunction:
    """Test the main CLI function."""

    @patch("huelife.frontends.cli.CLIHueLife")
    def test_main_list_stamps(self, mock_cli_class):
        """Test main function with --list-stamps."""
        mock_cli = Mock()
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["huelife-cli", "--list-stamps"]):
            result = main()

        assert result == 0
        mock_cli.list_stamps.assert_called_once()

    @patch("huelife.frontends.cli.CLIHueLife")
    def test_main_list_scenes(self, mock_cli_class):
        """Test main function with --list-scenes."""
        mock_cli = Mock()
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["huelife-cli", "--list-scenes"]):
            result = main()

        assert result == 0
        mock_cli.list_scenes.assert_called_once()

    @patch("huelife.frontends.cli.CLIHueLife")
    def test_main_invalid_args(self, mock_cli_class):
        """Test main function with invalid arguments."""
        with patch("sys.argv", ["huelife-cli", "--width", "-5"]):
            result = main()

        assert result == 1

    @patch("huelife.frontends.cli.CLIHueLife")
    def test_main_invalid_stamp(self, mock_cli_class):
        """Test main function with an unknown stamp."""
        mock_cli = Mock()
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["huelife-cli", "--stamp", "InvalidStamp"]):
            result = main()

        assert result == 1
        mock_cli.run_simulation.assert_not_called()

    @patch("huelife.frontends.cli.CLIHueLife")
    def test_main_successful_run(self, mock_cli_class):
        """Test successful simulation run."""
        mock_cli = Mock()
        mock_cli.run_simulation.return_value = (
            100,
            "cycle",
            {
                "grid_size": (20, 20),
                "initial_population": 10,
                "population": 8,
                "population_density": 0.02,
                "population_change_rate": 0.0,
                "duration_seconds": 0.5,
                "generations_per_second": 200.0,
                "bounding_box": None,
            },
        )
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["huelife-cli"]):
            result = main()

        assert result == 0
        mock_cli.run_simulation.assert_called_once()
        assert mock_cli.run_simulation.call_args[1]["scene"] == "flowers"

    @patch("huelife.frontends.cli.CLIHueLife")
    def test_main_stamp_auto_center(self, mock_cli_class):
        """Test automatic stamp centering."""
        mock_cli = Mock()
        mock_cli.run_simulation.return_value = (
            50,
            "extinction",
            {
                "initial_population": 5,
                "population": 0,
                "duration_seconds": 0.1,
                "generations_per_second": 500.0,
            },
        )
        mock_cli_class.return_value = mock_cli

        with patch(
            "sys.argv",
            [
                "huelife-cli",
                "--stamp",
                "lwss",
                "--width",
                "30",
                "--height",
                "20",
            ],
        ):
            result = main()

        assert result == 0

        # Check that run_simulation was called with centered coordinates
        call_args = mock_cli.run_simulation.call_args
        assert call_args[1]["stamp_name"] == "lwss"
        assert call_args[1]["stamp_x"] == 12  # (30 - 5) // 2
        assert call_args[1]["stamp_y"] == 8  # (20 - 4) // 2

    @patch("huelife.frontends.cli.CLIHueLife")
    def test_main_keyboard_interrupt(self, mock_cli_class):
        """Test handling of keyboard interrupt."""
        mock_cli = Mock()
        mock_cli.run_simulation.side_effect = KeyboardInterrupt()
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["huelife-cli"]):
            result = main()

        assert result == 1

    @patch("huelife.frontends.cli.CLIHueLife")
    def test_main_exception(self, mock_cli_class):
        """Test handling of general exceptions."""
        mock_cli = Mock()
        mock_cli.run_simulation.side_effect = Exception("Test error")
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["huelife-cli"]):
            result = main()

        assert result == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_end_to_end(self, mock_stdout):
        """Test a real run through main."""
        with patch(
            "sys.argv",
            ["huelife-cli", "-W", "20", "-H", "20", "--stamp", "blinker", "--until-stable", "-m", "10"],
        ):
            result = main()

        assert result == 0
        output = mock_stdout.getvalue()
        assert "Simulation completed after 3 generations" in output
        assert "Cycle detected - length 2" in output
        assert "Population: 3 → 3" in output
