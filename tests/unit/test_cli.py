"""
Unit tests for the maze-lab command-line interface.
"""

import pytest

from click.testing import CliRunner

from maze_lab.cli import main


@pytest.fixture
def runner():
    return CliRunner()


class TestGenerateCommand:
    """Test `maze-lab generate`."""

    def test_generate_prints_maze_and_summary(self, runner):
        result = runner.invoke(main, ["generate", "--size", "11", "--algorithm", "wilsons", "--seed", "7"])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "#" * 11
        assert lines[1][1] == "S"
        assert lines[9][9] == "G"
        assert "Wilson's 11x11" in result.output
        assert "Perfect: True" in result.output
        assert "Passages: 24 (expected 24)" in result.output
        assert "Steps:" not in result.output

    def test_generate_is_reproducible(self, runner):
        args = ["generate", "-n", "15", "-a", "prims", "--seed", "5"]

        assert runner.invoke(main, args).output == runner.invoke(main, args).output

    def test_steps_flag(self, runner):
        result = runner.invoke(main, ["generate", "-n", "21", "-a", "binary_tree", "--seed", "1", "--steps"])

        assert result.exit_code == 0
        assert "Steps: 100" in result.output

    def test_extra_openings_break_perfection(self, runner):
        result = runner.invoke(main, ["generate", "-n", "21", "--seed", "3", "--extra-openings", "6"])

        assert result.exit_code == 0
        assert "Perfect: False" in result.output

    def test_even_size_fails(self, runner):
        result = runner.invoke(main, ["generate", "--size", "20"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_unknown_algorithm_rejected_by_click(self, runner):
        result = runner.invoke(main, ["generate", "--algorithm", "ellers"])

        assert result.exit_code == 2


class TestSolveCommand:
    """Test `maze-lab solve`."""

    def test_race_table(self, runner):
        result = runner.invoke(main, ["solve", "-n", "15", "--seed", "2", "-s", "bfs,astar,tremaux"])

        assert result.exit_code == 0, result.output
        assert "Race on 15x15 recursive_backtracker maze (seed=2)" in result.output
        rows = [line.split() for line in result.output.splitlines()]
        rows = [row for row in rows if row[:1] in (["bfs"], ["astar"], ["tremaux"])]
        assert [row[0] for row in rows] == ["bfs", "astar", "tremaux"]
        assert all(row[1] == "success" for row in rows)
        # BFS and A* find the same shortest path
        assert rows[0][3] == rows[1][3]

    def test_render_marks_path(self, runner):
        result = runner.invoke(main, ["solve", "-n", "11", "--seed", "4", "-s", "bfs", "--render"])

        assert result.exit_code == 0
        assert result.output.splitlines()[1][1] == "S"

    def test_unknown_solver_fails(self, runner):
        result = runner.invoke(main, ["solve", "-s", "bfs,wall_hugger"])

        assert result.exit_code == 1
        assert "unknown solvers" in result.output

    def test_budget_factor_reaches_robots(self, runner):
        result = runner.invoke(main, ["solve", "-n", "21", "--seed", "1", "-s", "random_walk", "--budget-factor", "1"])

        assert result.exit_code == 0
        row = next(line.split() for line in result.output.splitlines() if line.startswith("random_walk"))
        assert int(row[2]) <= 21 * 21 + 1

    def test_config_file(self, runner, tmp_path):
        path = tmp_path / "lab.yaml"
        path.write_text(
            "maze:\n  size: 13\n  algorithm: kruskals\n  seed: 9\n"
            "solvers:\n  algorithms: [dfs, pledge]\n"
            "logging:\n  level: WARNING\n  use_colors: false\n"
        )

        result = runner.invoke(main, ["solve", "--config", str(path)])

        assert result.exit_code == 0, result.output
        assert "Race on 13x13 kruskals maze (seed=9)" in result.output
        assert "dfs" in result.output and "pledge" in result.output
        assert "astar" not in result.output

    def test_command_line_overrides_config_file(self, runner, tmp_path):
        path = tmp_path / "lab.yaml"
        path.write_text("maze:\n  size: 13\n  seed: 9\nlogging:\n  level: WARNING\n  use_colors: false\n")

        result = runner.invoke(main, ["solve", "--config", str(path), "--size", "17", "-s", "bfs"])

        assert result.exit_code == 0, result.output
        assert "Race on 17x17" in result.output

    def test_invalid_config_file(self, runner, tmp_path):
        path = tmp_path / "lab.yaml"
        path.write_text("maze:\n  size: 12\n")

        result = runner.invoke(main, ["solve", "--config", str(path)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    @pytest.mark.parametrize("command", ["generate", "solve"])
    def test_malformed_yaml_config(self, runner, tmp_path, command):
        path = tmp_path / "lab.yaml"
        path.write_text("maze: [unclosed\n")

        result = runner.invoke(main, [command, "--config", str(path)])

        assert result.exit_code == 1
        assert "Error: Invalid YAML syntax" in result.output


class TestAlgorithmsCommand:
    """Test `maze-lab algorithms`."""

    def test_lists_everything(self, runner):
        result = runner.invoke(main, ["algorithms"])

        assert result.exit_code == 0
        for name in ["recursive_backtracker", "prims", "kruskals", "wilsons", "binary_tree"]:
            assert name in result.output
        for name in ["bfs", "dfs", "astar", "pledge", "tremaux", "random_walk"]:
            assert name in result.output
        assert "[robot]" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "maze-lab" in result.output
