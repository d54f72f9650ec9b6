"""
Unit tests for the robot solver family (Pledge, Tremaux, Random Walk).

Robots sense only their four neighbours, so the interesting properties are
termination: success on connected grids, loop escape for Pledge, and a clean
STUCK outcome when the goal is unreachable.
"""

import pytest

from maze_lab.core.grid import Direction, MazeGrid, manhattan
from maze_lab.core.stepping import Outcome
from maze_lab.generation import MazeAlgorithm, generate_maze
from maze_lab.solvers import Pledge, RandomWalk, Tremaux, create_solver, goalward_direction
from maze_lab.utils.exceptions import ConfigurationError

ROBOTS = [Pledge, Tremaux, RandomWalk]


def assert_valid_trail(grid, state):
    """Trail is a walk of adjacent open cells consistent with the visit counts."""
    trail = state.path
    assert trail[0] == state.start
    assert trail[-1] == state.current
    assert all(grid.is_open(cell) for cell in trail)
    assert all(manhattan(a, b) == 1 for a, b in zip(trail, trail[1:]))
    assert sum(state.visit_counts.values()) == len(trail)


class TestRobotCommon:
    """Behaviour shared by every robot."""

    @pytest.mark.parametrize("solver_cls", ROBOTS)
    def test_corridor(self, solver_cls, corridor):
        state = solver_cls().solve(corridor, start=(1, 1), goal=(1, 5), seed=0)

        assert state.outcome is Outcome.SUCCESS
        assert state.current == (1, 5)
        assert_valid_trail(corridor, state)

    @pytest.mark.parametrize("solver_cls", ROBOTS)
    def test_start_equals_goal_completes_on_first_step(self, solver_cls, corridor):
        solver = solver_cls()
        state = solver.step(solver.init(corridor, start=(1, 2), goal=(1, 2)))

        assert state.is_complete
        assert state.step_count == 1
        assert state.path == ((1, 2),)

    @pytest.mark.parametrize("solver_cls", ROBOTS)
    def test_unreachable_goal_gets_stuck(self, solver_cls, walled_goal):
        state = solver_cls().solve(walled_goal, seed=1)

        assert state.stuck
        assert not state.is_complete
        assert state.outcome is Outcome.STUCK
        assert state.current[0] <= 2 and state.current[1] <= 3

    @pytest.mark.parametrize("solver_cls", ROBOTS)
    def test_walled_in_robot_is_stuck_immediately(self, solver_cls):
        grid = MazeGrid.from_text(["#####", "#.#.#", "#####", "#####", "#####"])
        solver = solver_cls()
        state = solver.step(solver.init(grid, start=(1, 1), goal=(1, 3)))

        assert state.stuck
        assert state.path == ((1, 1),)

    @pytest.mark.parametrize("solver_cls", ROBOTS)
    def test_budget(self, solver_cls, walled_goal):
        factor = solver_cls.default_budget_factor
        state = solver_cls().init(walled_goal)

        assert state.step_budget == factor * 7 * 7
        assert solver_cls(step_budget_factor=1).init(walled_goal).step_budget == 49

    @pytest.mark.parametrize("factor", [0, -3, 2.5, True])
    def test_invalid_budget_factor(self, factor):
        with pytest.raises(ConfigurationError):
            Tremaux(step_budget_factor=factor)

    @pytest.mark.parametrize("solver_cls", ROBOTS)
    def test_terminal_state_is_idempotent(self, solver_cls, walled_goal):
        solver = solver_cls()
        final = solver.solve(walled_goal, seed=2)

        assert solver.step(final) is final

    @pytest.mark.parametrize("solver_cls", ROBOTS)
    def test_step_is_pure_and_replayable(self, solver_cls, looped_maze):
        solver = solver_cls()
        state = solver.init(looped_maze, seed=4)
        for _ in range(15):
            state = solver.step(state)

        first = [s.current for s in solver.iter_states(state, max_steps=30)]
        second = [s.current for s in solver.iter_states(state, max_steps=30)]

        assert first == second
        assert state.step_count == 15

    def test_initial_heading_is_east(self, corridor):
        assert Pledge().init(corridor, start=(1, 1), goal=(1, 5)).heading is Direction.EAST


class TestTremaux:
    """Test Tremaux exploration."""

    @pytest.mark.parametrize("algorithm", list(MazeAlgorithm))
    def test_succeeds_on_perfect_mazes(self, algorithm, seed):
        grid = generate_maze(21, algorithm=algorithm, seed=seed)
        state = Tremaux().solve(grid, seed=seed)

        assert state.outcome is Outcome.SUCCESS
        assert_valid_trail(grid, state)

    @pytest.mark.parametrize("extra", [3, 6, 20])
    def test_succeeds_on_looped_mazes(self, extra, seed):
        grid = generate_maze(21, algorithm="kruskals", seed=seed, extra_openings=extra)
        state = Tremaux().solve(grid, seed=seed)

        assert state.outcome is Outcome.SUCCESS

    def test_succeeds_in_open_room(self, open_room):
        """Dense cycles everywhere: every cell is part of a 2x2 block."""
        state = Tremaux().solve(open_room, seed=0)

        assert state.outcome is Outcome.SUCCESS

    def test_prefers_unvisited_neighbour(self, corridor):
        solver = Tremaux()
        state = solver.step(solver.init(corridor, start=(1, 3), goal=(1, 5)))
        state = solver.step(state)

        # having come from one side, the robot never turns straight back
        assert state.visits((1, 3)) == 1
        assert state.previous in ((1, 2), (1, 4))


class TestPledge:
    """Test Pledge goal seeking and loop escape."""

    @pytest.mark.parametrize("algorithm", list(MazeAlgorithm))
    @pytest.mark.parametrize("size", [13, 21, 31])
    def test_succeeds_on_perfect_mazes(self, algorithm, size):
        grid = generate_maze(size, algorithm=algorithm, seed=size + 1)
        state = Pledge().solve(grid)

        assert state.outcome is Outcome.SUCCESS
        assert_valid_trail(grid, state)

    def test_escapes_small_loop(self, small_loop):
        """With the loop escape the robot leaves the 2x2 block and reaches the goal."""
        state = Pledge().solve(small_loop, start=(1, 1), goal=(1, 5))

        assert state.outcome is Outcome.SUCCESS
        assert state.step_count <= 60
        assert state.angle == 0

    def test_circles_forever_without_loop_escape(self, small_loop):
        state = Pledge(loop_turn_threshold=None).solve(small_loop, start=(1, 1), goal=(1, 5))

        assert state.outcome is Outcome.STUCK
        assert state.current in {(1, 1), (1, 2), (2, 1), (2, 2)}
        assert state.angle >= 720

    def test_angle_zero_heads_for_goal(self, corridor):
        solver = Pledge()
        state = solver.step(solver.init(corridor, start=(1, 1), goal=(1, 5)))

        assert state.current == (1, 2)
        assert state.heading is Direction.EAST
        assert state.angle == 0

    def test_goalward_move_and_vertical_tie_break(self):
        grid = MazeGrid.from_text(
            [
                "#####",
                "#...#",
                "#.#.#",
                "#...#",
                "#####",
            ]
        )
        solver = Pledge()
        # at (1, 3) heading east the goal (3, 3) is south and open: goal-ward move
        state = solver.step(solver.init(grid, start=(1, 3), goal=(3, 3)))
        assert state.current == (2, 3)
        assert state.angle == 0

        # at (1, 1) the goal (3, 3) ties on both axes: vertical wins
        state = solver.step(solver.init(grid, start=(1, 1), goal=(3, 3)))
        assert state.current == (2, 1)
        assert state.heading is Direction.SOUTH

    def test_wall_following_counts_turns(self):
        grid = MazeGrid.from_text(
            [
                "#####",
                "#.#.#",
                "#.#.#",
                "#...#",
                "#####",
            ]
        )
        solver = Pledge()
        # the goal-ward cell east of the start is a wall, so the robot turns right
        state = solver.step(solver.init(grid, start=(1, 1), goal=(1, 3)))

        assert state.current == (2, 1)
        assert state.heading is Direction.SOUTH
        assert state.angle == 90

    @pytest.mark.parametrize(
        ("cell", "goal", "expected"),
        [
            ((5, 5), (5, 9), Direction.EAST),
            ((5, 5), (1, 5), Direction.NORTH),
            ((5, 5), (7, 2), Direction.WEST),
            ((5, 5), (8, 8), Direction.SOUTH),
            ((5, 5), (2, 2), Direction.NORTH),
        ],
    )
    def test_goalward_direction(self, cell, goal, expected):
        assert goalward_direction(cell, goal) is expected

    def test_invalid_thresholds(self):
        with pytest.raises(ConfigurationError):
            Pledge(loop_turn_threshold=0)
        with pytest.raises(ConfigurationError):
            Pledge(max_goalward_visits=0)


class TestRandomWalk:
    """Test the random walk baseline."""

    @pytest.mark.parametrize("walk_seed", range(50))
    def test_succeeds_quickly_next_to_goal(self, walk_seed):
        """Every other step is a fair coin toss onto the goal, so 40 steps fail with odds 2**-20."""
        grid = MazeGrid.from_text(["#####", "#...#", "#####", "#####", "#####"])

        state = RandomWalk().solve(grid, start=(1, 2), goal=(1, 3), seed=walk_seed)

        assert state.outcome is Outcome.SUCCESS
        assert state.step_count <= 40
        assert state.step_count % 2 == 1

    def test_reproducible_with_seed(self, open_room):
        a = RandomWalk().solve(open_room, seed=8)
        b = RandomWalk().solve(open_room, seed=8)

        assert a.path == b.path

    def test_registry_creates_robot(self):
        solver = create_solver("random_walk", step_budget_factor=2)

        assert isinstance(solver, RandomWalk)
        assert solver.step_budget_factor == 2
