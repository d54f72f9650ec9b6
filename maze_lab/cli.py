"""
Command-line interface for maze_lab.

Provides tools for carving mazes, racing solvers on them and listing the
available algorithms.
"""

from __future__ import annotations

import sys
from typing import Any

import click
import yaml

from maze_lab import __version__
from maze_lab.config import LabConfig, apply_overrides, load_lab_config
from maze_lab.core.grid import MazeGrid, default_endpoints, punch_loops, verify_perfect_maze
from maze_lab.driver import Race, Stepper
from maze_lab.generation import GENERATORS, MazeAlgorithm, create_generator
from maze_lab.solvers import SOLVERS
from maze_lab.utils.exceptions import MazeGenerationError, MazeLabError

RULE = "=" * 50


def _build_config(config_path: str | None, maze: dict[str, Any], solvers: dict[str, Any]) -> LabConfig:
    """Load ``config_path`` (or defaults) and apply explicitly given options on top."""
    config = load_lab_config(config_path) if config_path else LabConfig()
    return apply_overrides(config, maze=maze, solvers=solvers)


def _carve(config: LabConfig) -> tuple[MazeGrid, int]:
    """Generate the configured maze through a stepper; returns the grid and steps taken."""
    generator = create_generator(config.maze.algorithm)
    stepper = Stepper(generator, generator.init(config.maze.size, seed=config.maze.seed))
    state = stepper.run_to_completion()

    verification = verify_perfect_maze(state.grid)
    if not verification["is_perfect"]:
        raise MazeGenerationError(generator.name, verification)

    grid = state.grid
    if config.maze.extra_openings > 0:
        grid = punch_loops(grid, count=config.maze.extra_openings, seed=config.maze.seed)
    return grid, state.step_count


def _fail(error: Exception) -> None:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="maze-lab")
def main():
    """
    maze-lab: Steppable Maze Generation and Solving

    Carve perfect mazes with five classic generators and race shortest-path
    searches against local-sensing robots on them.
    """


@main.command()
@click.option("--size", "-n", type=int, default=None, help="Odd side length of the grid (default 21)")
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice([a.value for a in MazeAlgorithm]),
    default=None,
    help="Generation algorithm",
)
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option("--extra-openings", type=int, default=None, help="Walls to punch after carving (creates loops)")
@click.option("--steps", is_flag=True, help="Also print how many steps generation took")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None)
def generate(size, algorithm, seed, extra_openings, steps, config_path):
    """
    Generate a maze and print it.

    Examples:
        maze-lab generate --size 21 --algorithm wilsons --seed 7
        maze-lab generate -n 31 -a kruskals --extra-openings 6 --steps
    """
    try:
        config = _build_config(
            config_path,
            {"size": size, "algorithm": algorithm, "seed": seed, "extra_openings": extra_openings},
            {},
        )
        if config_path:
            config.logging.apply()
        grid, step_count = _carve(config)
    except (MazeLabError, ValueError, FileNotFoundError, yaml.YAMLError) as e:
        _fail(e)
        return

    start, goal = default_endpoints(grid.size)
    click.echo(grid.to_text(markers={start: "S", goal: "G"}))

    verification = verify_perfect_maze(grid)
    click.echo(f"\n{RULE}")
    click.echo(f"{GENERATORS[MazeAlgorithm(config.maze.algorithm)].display_name} {grid.size}x{grid.size}")
    click.echo(RULE)
    click.echo(f"Perfect: {verification['is_perfect']}")
    click.echo(f"Rooms: {verification['room_count']}")
    click.echo(f"Passages: {verification['passage_count']} (expected {verification['expected_passages']})")
    click.echo(f"Open cells: {verification['open_cells']}")
    if steps:
        click.echo(f"Steps: {step_count}")


@main.command()
@click.option("--size", "-n", type=int, default=None, help="Odd side length of the grid (default 21)")
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice([a.value for a in MazeAlgorithm]),
    default=None,
    help="Generation algorithm",
)
@click.option("--seed", type=int, default=None, help="Random seed shared by generator and solvers")
@click.option("--extra-openings", type=int, default=None, help="Walls to punch after carving (creates loops)")
@click.option("--solvers", "-s", type=str, default=None, help="Comma-separated solver names (default all)")
@click.option("--budget-factor", type=int, default=None, help="Robot step budget as a multiple of N*N")
@click.option("--render", is_flag=True, help="Print the maze with the first solver's path")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def solve(size, algorithm, seed, extra_openings, solvers, budget_factor, render, config_path, verbose):
    """
    Race solvers on one generated maze.

    Examples:
        maze-lab solve --size 21 --seed 3
        maze-lab solve -n 31 --extra-openings 6 -s bfs,astar,pledge,tremaux
    """
    try:
        names = [name.strip() for name in solvers.split(",") if name.strip()] if solvers else None
        config = _build_config(
            config_path,
            {"size": size, "algorithm": algorithm, "seed": seed, "extra_openings": extra_openings},
            {"algorithms": names, "seed": seed, "step_budget_factor": budget_factor},
        )
        if verbose:
            config.logging.level = "DEBUG"
        if verbose or config_path:
            config.logging.apply()

        grid, _ = _carve(config)
        robot_kwargs = {}
        if config.solvers.step_budget_factor is not None:
            robot_kwargs["step_budget_factor"] = config.solvers.step_budget_factor
        race = Race.for_solvers(
            grid,
            config.solvers.algorithms,
            start=config.solvers.start,
            goal=config.solvers.goal,
            seed=config.solvers.seed,
            **robot_kwargs,
        )
        results = race.run(max_ticks=config.driver.max_steps)
    except (MazeLabError, ValueError, FileNotFoundError, yaml.YAMLError) as e:
        _fail(e)
        return

    if render:
        first = next(iter(race.steppers.values())).state
        markers = {cell: "." for cell in first.path or ()}
        markers[first.start] = "S"
        markers[first.goal] = "G"
        click.echo(grid.to_text(markers=markers))

    click.echo(f"\n{RULE}")
    click.echo(f"Race on {grid.size}x{grid.size} {config.maze.algorithm} maze (seed={config.maze.seed})")
    click.echo(RULE)
    click.echo(f"{'solver':<14}{'outcome':<11}{'steps':>7}{'path':>7}")
    for name, stats in results.items():
        click.echo(f"{name:<14}{stats.outcome.value:<11}{stats.steps:>7}{stats.path_length:>7}")


@main.command()
def algorithms():
    """List available generators and solvers."""
    click.echo("Generators:")
    for key, cls in GENERATORS.items():
        click.echo(f"  {key.value:<22}{cls.description}")
    click.echo("\nSolvers:")
    for key, cls in SOLVERS.items():
        click.echo(f"  {key.value:<14}[{cls.family}] {cls.description}")


if __name__ == "__main__":
    main()
