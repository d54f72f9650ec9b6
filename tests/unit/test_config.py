"""
Unit tests for lab configuration models and YAML I/O.
"""

import pytest

import yaml
from pydantic import ValidationError

from maze_lab.config import (
    DriverConfig,
    LabConfig,
    LoggingConfig,
    MazeConfig,
    SolverConfig,
    apply_overrides,
    load_lab_config,
    save_lab_config,
)


class TestMazeConfig:
    """Test maze generation settings."""

    def test_defaults(self):
        config = MazeConfig()

        assert config.size == 21
        assert config.algorithm == "recursive_backtracker"
        assert config.seed is None
        assert config.extra_openings == 0

    @pytest.mark.parametrize("size", [4, 22, 3, 203])
    def test_invalid_size(self, size):
        with pytest.raises(ValidationError):
            MazeConfig(size=size)

    def test_unknown_algorithm(self):
        with pytest.raises(ValidationError, match="unknown generation algorithm"):
            MazeConfig(algorithm="ellers")

    def test_negative_openings(self):
        with pytest.raises(ValidationError):
            MazeConfig(extra_openings=-1)

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            MazeConfig(width=21)


class TestSolverConfig:
    """Test solver selection."""

    def test_defaults_select_every_solver(self):
        config = SolverConfig()

        assert config.algorithms == ["bfs", "dfs", "astar", "pledge", "tremaux", "random_walk"]
        assert config.start is None
        assert config.step_budget_factor is None

    @pytest.mark.parametrize(
        ("algorithms", "message"),
        [
            ([], "at least one solver"),
            (["bfs", "wall_follower"], "unknown solvers"),
            (["bfs", "bfs"], "unique"),
        ],
    )
    def test_invalid_algorithms(self, algorithms, message):
        with pytest.raises(ValidationError, match=message):
            SolverConfig(algorithms=algorithms)

    def test_endpoints_coerced_to_tuples(self):
        config = SolverConfig(start=[1, 3], goal=[5, 5])

        assert config.start == (1, 3)
        assert config.goal == (5, 5)

    def test_budget_factor_positive(self):
        with pytest.raises(ValidationError):
            SolverConfig(step_budget_factor=0)


class TestDriverConfig:
    """Test playback settings."""

    def test_interval(self):
        assert DriverConfig().interval == pytest.approx(0.051)
        assert DriverConfig(speed=100).interval == pytest.approx(0.001)

    @pytest.mark.parametrize("speed", [0, 101])
    def test_speed_range(self, speed):
        with pytest.raises(ValidationError):
            DriverConfig(speed=speed)


class TestLabConfig:
    """Test the complete session configuration."""

    def test_defaults(self):
        config = LabConfig()

        assert config.maze == MazeConfig()
        assert config.driver.speed == 50
        assert config.logging.level == "INFO"

    def test_nested_from_dict(self):
        config = LabConfig.model_validate(
            {"maze": {"size": 31, "algorithm": "wilsons"}, "solvers": {"algorithms": ["astar"]}}
        )

        assert config.maze.size == 31
        assert config.solvers.algorithms == ["astar"]

    @pytest.mark.parametrize(("start", "goal"), [((0, 1), None), (None, (1, 21)), ((1, 1), (19, 20))])
    def test_endpoints_must_be_interior(self, start, goal):
        with pytest.raises(ValidationError, match="interior"):
            LabConfig(solvers=SolverConfig(start=start, goal=goal))

    def test_endpoints_inside_accepted(self):
        config = LabConfig(maze=MazeConfig(size=11), solvers=SolverConfig(start=(1, 1), goal=(9, 9)))

        assert config.solvers.goal == (9, 9)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")


class TestYamlIO:
    """Test YAML round trip and load errors."""

    def test_round_trip(self, tmp_path):
        config = LabConfig(
            maze=MazeConfig(size=15, algorithm="kruskals", seed=3, extra_openings=4),
            solvers=SolverConfig(algorithms=["bfs", "pledge"], start=(1, 1), goal=(13, 13), step_budget_factor=16),
            driver=DriverConfig(speed=80),
        )
        path = tmp_path / "sessions" / "lab.yaml"

        config.to_yaml(path)
        loaded = LabConfig.from_yaml(path)

        assert path.exists()
        assert loaded == config

    def test_none_values_not_written(self, tmp_path):
        path = tmp_path / "lab.yaml"
        save_lab_config(LabConfig(), path)

        data = yaml.safe_load(path.read_text())

        assert "seed" not in data["maze"]
        assert "start" not in data["solvers"]
        assert list(data) == ["maze", "solvers", "driver", "logging"]

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "lab.yaml"
        path.write_text("maze:\n  size: 11\ndriver:\n  speed: 10\n")

        config = load_lab_config(path)

        assert config.maze.size == 11
        assert config.maze.algorithm == "recursive_backtracker"
        assert config.driver.speed == 10

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_lab_config(path) == LabConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_lab_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("maze: [size: 11\n")

        with pytest.raises(yaml.YAMLError):
            load_lab_config(path)

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("maze:\n  size: 12\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_lab_config(path)


class TestApplyOverrides:
    """Test merging command-line values over a loaded configuration."""

    def test_none_keeps_existing_values(self):
        base = LabConfig(maze=MazeConfig(size=15, seed=4))

        config = apply_overrides(base, maze={"size": None, "seed": None, "algorithm": "prims"})

        assert config.maze.size == 15
        assert config.maze.seed == 4
        assert config.maze.algorithm == "prims"
        assert base.maze.algorithm == "recursive_backtracker"

    def test_overrides_are_validated(self):
        base = LabConfig(maze=MazeConfig(size=21), solvers=SolverConfig(goal=(19, 19)))

        with pytest.raises(ValueError, match="Invalid configuration overrides"):
            apply_overrides(base, maze={"size": 11})

    def test_unknown_section(self):
        with pytest.raises(ValueError, match="Unknown configuration section"):
            apply_overrides(LabConfig(), renderer={"fps": 60})
