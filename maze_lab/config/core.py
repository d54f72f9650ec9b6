"""
Lab configuration classes.

Configurations describe WHICH maze to carve and WHICH solvers to race, with
which seeds and at what playback speed. They hold no algorithm state: the
engine builds generators, solvers and steppers from them.

Key Principle
-------------
- Algorithms (Python code): how a maze is carved or solved, step by step
- LabConfig (YAML/Python): the choices for one session (size, names, seeds)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from maze_lab.driver import speed_to_interval
from maze_lab.generation import MazeAlgorithm
from maze_lab.solvers import SolverName
from maze_lab.utils.lab_logging import configure_logging

if TYPE_CHECKING:
    from pathlib import Path

MIN_CONFIG_SIZE = 5
MAX_CONFIG_SIZE = 201


class MazeConfig(BaseModel):
    """
    Configuration for maze generation.

    Attributes
    ----------
    size : int
        Odd side length of the grid, 5..201 (default: 21)
    algorithm : str
        Generator name (default: recursive_backtracker)
    seed : int | None
        Random seed for reproducibility (default: None)
    extra_openings : int
        Walls punched after carving to create loops (default: 0)
    """

    model_config = ConfigDict(extra="forbid")

    size: int = Field(default=21, ge=MIN_CONFIG_SIZE, le=MAX_CONFIG_SIZE)
    algorithm: str = MazeAlgorithm.RECURSIVE_BACKTRACKER.value
    seed: int | None = None
    extra_openings: int = Field(default=0, ge=0)

    @field_validator("size")
    @classmethod
    def validate_odd_size(cls, v: int) -> int:
        if v % 2 == 0:
            raise ValueError(f"size must be odd, got {v}")
        return v

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        available = [a.value for a in MazeAlgorithm]
        if v not in available:
            raise ValueError(f"unknown generation algorithm '{v}', choose from {available}")
        return v


class SolverConfig(BaseModel):
    """
    Configuration for the solvers raced on a maze.

    Attributes
    ----------
    algorithms : list[str]
        Solver names, in display order (default: all six)
    start : tuple[int, int] | None
        Start cell (row, col); None means (1, 1)
    goal : tuple[int, int] | None
        Goal cell (row, col); None means (N-2, N-2)
    seed : int | None
        Seed shared by every randomised solver (default: None)
    step_budget_factor : int | None
        Robot budget multiplier of N * N; None keeps each robot's default
    """

    model_config = ConfigDict(extra="forbid")

    algorithms: list[str] = Field(default_factory=lambda: [s.value for s in SolverName])
    start: tuple[int, int] | None = None
    goal: tuple[int, int] | None = None
    seed: int | None = None
    step_budget_factor: int | None = Field(default=None, ge=1)

    @field_validator("algorithms")
    @classmethod
    def validate_algorithms(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one solver must be selected")
        available = [s.value for s in SolverName]
        unknown = [name for name in v if name not in available]
        if unknown:
            raise ValueError(f"unknown solvers {unknown}, choose from {available}")
        if len(set(v)) != len(v):
            raise ValueError("solver names must be unique")
        return v


class DriverConfig(BaseModel):
    """
    Configuration for timed playback.

    Attributes
    ----------
    speed : int
        Playback speed 1..100; higher is faster (default: 50)
    max_steps : int | None
        Hard cap on steps per run (default: None)
    """

    model_config = ConfigDict(extra="forbid")

    speed: int = Field(default=50, ge=1, le=100)
    max_steps: int | None = Field(default=None, ge=1)

    @property
    def interval(self) -> float:
        """Delay between steps in seconds."""
        return speed_to_interval(self.speed)


class LoggingConfig(BaseModel):
    """
    Configuration for logging.

    Attributes
    ----------
    level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
        Logging level (default: INFO)
    use_colors : bool
        Colour terminal output (default: True)
    log_file : str | None
        Also write logs to this file (default: None)
    """

    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    use_colors: bool = True
    log_file: str | None = None

    def apply(self) -> None:
        """Configure the global maze_lab loggers from this section."""
        configure_logging(
            level=self.level,
            use_colors=self.use_colors,
            log_to_file=self.log_file is not None,
            log_file_path=self.log_file,
        )


class LabConfig(BaseModel):
    """
    Complete configuration for one maze lab session.

    Attributes
    ----------
    maze : MazeConfig
        Maze generation settings
    solvers : SolverConfig
        Solver selection and endpoints
    driver : DriverConfig
        Playback settings
    logging : LoggingConfig
        Logging settings

    Examples
    --------
    >>> config = LabConfig(maze=MazeConfig(size=31, algorithm="wilsons", seed=7))
    >>> config.maze.size
    31
    """

    model_config = ConfigDict(extra="forbid")

    maze: MazeConfig = Field(default_factory=MazeConfig)
    solvers: SolverConfig = Field(default_factory=SolverConfig)
    driver: DriverConfig = Field(default_factory=DriverConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def validate_endpoints_inside(self) -> LabConfig:
        """Endpoints must lie strictly inside the border of the configured maze."""
        for label, cell in (("start", self.solvers.start), ("goal", self.solvers.goal)):
            if cell is not None and not all(1 <= c <= self.maze.size - 2 for c in cell):
                raise ValueError(f"{label} {cell} lies outside the interior of a {self.maze.size}x{self.maze.size} maze")
        return self

    def to_yaml(self, path: str | Path) -> None:
        """
        Save configuration to YAML file.

        Parameters
        ----------
        path : str | Path
            Output file path
        """
        from .io import save_lab_config

        save_lab_config(self, path)

    @classmethod
    def from_yaml(cls, path: str | Path) -> LabConfig:
        """
        Load configuration from YAML file.

        Parameters
        ----------
        path : str | Path
            Path to YAML configuration file

        Returns
        -------
        LabConfig
            Validated configuration
        """
        from .io import load_lab_config

        return load_lab_config(path)
