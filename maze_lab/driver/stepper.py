"""
Stepping driver: history, step-back, run-to-completion, timed play, racing.

A ``Stepper`` owns one algorithm run. Every state it produces is kept in a
``History``, so stepping backward is just discarding the newest entry; since
each state carries its own RNG state, stepping forward again replays exactly
the same moves.

A ``Race`` ticks several steppers in lockstep on one shared grid until all of
them are terminal.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from maze_lab.core.grid import Coord, MazeGrid
from maze_lab.core.stepping import AlgorithmState, Outcome, SteppableAlgorithm
from maze_lab.solvers import create_solver, solver_family
from maze_lab.utils.exceptions import ConfigurationError
from maze_lab.utils.lab_logging import get_logger

logger = get_logger(__name__)

MIN_SPEED = 1
MAX_SPEED = 100


def speed_to_interval(speed: int) -> float:
    """
    Convert a 1..100 speed setting to a delay in seconds between steps.

    Speed 100 waits 1 ms per step, speed 1 waits 100 ms.
    """
    if isinstance(speed, bool) or not isinstance(speed, int) or not MIN_SPEED <= speed <= MAX_SPEED:
        raise ConfigurationError("speed", speed, expected_type=int, valid_range=(MIN_SPEED, MAX_SPEED))
    return (MAX_SPEED + 1 - speed) / 1000.0


@dataclass
class RunStatistics:
    """
    Summary of one run.

    Attributes:
        name: Label of the run
        steps: Steps taken
        outcome: Terminal classification, RUNNING if unfinished
        path_length: Cells on the found path or walked trail, 0 if none
        elapsed: Seconds between the first and the latest timed step, None before any step
    """

    name: str
    steps: int
    outcome: Outcome
    path_length: int
    elapsed: float | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "steps": self.steps,
            "outcome": self.outcome.value,
            "path_length": self.path_length,
            "elapsed": self.elapsed,
        }


class History:
    """Sequence of states, newest last; never shrinks below the initial state."""

    def __init__(self, initial_state: AlgorithmState):
        self._states: list[AlgorithmState] = [initial_state]

    def push(self, state: AlgorithmState) -> None:
        self._states.append(state)

    def pop(self) -> AlgorithmState | None:
        """Drop and return the newest state, or None if only the initial state is left."""
        if len(self._states) == 1:
            return None
        return self._states.pop()

    def truncate(self, length: int) -> None:
        """Keep only the first ``length`` states (at least one)."""
        del self._states[max(length, 1) :]

    @property
    def initial(self) -> AlgorithmState:
        return self._states[0]

    @property
    def latest(self) -> AlgorithmState:
        return self._states[-1]

    def __len__(self) -> int:
        return len(self._states)

    def __getitem__(self, index: int) -> AlgorithmState:
        return self._states[index]

    def __iter__(self) -> Iterator[AlgorithmState]:
        return iter(self._states)


class Stepper:
    """
    Drives a single algorithm run one step at a time.

    Args:
        algorithm: Generator or solver to drive
        initial_state: State returned by the algorithm's ``init``
        name: Label for statistics, defaults to the algorithm name
        clock: Monotonic clock in seconds
    """

    def __init__(
        self,
        algorithm: SteppableAlgorithm,
        initial_state: AlgorithmState,
        name: str | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.algorithm = algorithm
        self.name = name or algorithm.name
        self.history = History(initial_state)
        self._clock = clock
        self._started_at: float | None = None
        self._last_at: float | None = None

    @property
    def state(self) -> AlgorithmState:
        return self.history.latest

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    def step_forward(self) -> AlgorithmState:
        """Advance one step; a terminal run is left as is."""
        state = self.state
        if state.is_terminal:
            return state

        if self._started_at is None:
            self._started_at = self._clock()
        new_state = self.algorithm.step(state)
        self.history.push(new_state)
        if new_state.is_terminal:
            self._last_at = self._clock()
            logger.info(
                "%s finished: %s after %d steps", self.name, new_state.outcome.value, new_state.step_count
            )
        return new_state

    def step_back(self) -> AlgorithmState:
        """Return to the previous state; no-op at the initial state."""
        self.history.pop()
        return self.state

    def run_to_completion(self, max_steps: int | None = None) -> AlgorithmState:
        """Step until terminal or until ``max_steps`` further steps were taken."""
        taken = 0
        while not self.is_terminal and (max_steps is None or taken < max_steps):
            self.step_forward()
            taken += 1
        return self.state

    def play(
        self,
        interval: float,
        on_step: Callable[[AlgorithmState], bool | None] | None = None,
        sleep: Callable[[float], Any] = time.sleep,
        max_steps: int | None = None,
    ) -> AlgorithmState:
        """
        Step on a timer until terminal.

        Args:
            interval: Seconds to wait between steps
            on_step: Called with each new state; returning False stops playback
            sleep: Delay function, replaceable for tests or event loops
            max_steps: Stop after this many steps even if not terminal

        Returns:
            State when playback stopped
        """
        taken = 0
        while not self.is_terminal and (max_steps is None or taken < max_steps):
            state = self.step_forward()
            taken += 1
            if on_step is not None and on_step(state) is False:
                break
            if not state.is_terminal:
                sleep(interval)
        return self.state

    def reset(self, initial_state: AlgorithmState | None = None) -> AlgorithmState:
        """Discard the run and start over from ``initial_state`` or the original one."""
        self.history = History(initial_state if initial_state is not None else self.history.initial)
        self._started_at = None
        self._last_at = None
        return self.state

    def statistics(self) -> RunStatistics:
        state = self.state
        path = getattr(state, "path", None)

        elapsed = None
        if self._started_at is not None:
            end = self._last_at if self._last_at is not None and state.is_terminal else self._clock()
            elapsed = end - self._started_at

        return RunStatistics(
            name=self.name,
            steps=state.step_count,
            outcome=state.outcome,
            path_length=len(path) if path else 0,
            elapsed=elapsed,
        )

    def __repr__(self) -> str:
        return f"Stepper(name={self.name!r}, steps={self.state.step_count}, outcome={self.state.outcome.value})"


class Race:
    """
    Several steppers advanced in lockstep.

    All runs share the same grid by reference; solvers only read it.
    """

    def __init__(self, steppers: Mapping[str, Stepper] | list[Stepper]):
        if isinstance(steppers, Mapping):
            self.steppers = dict(steppers)
        else:
            self.steppers = {}
            for stepper in steppers:
                if stepper.name in self.steppers:
                    raise ConfigurationError("steppers", stepper.name, reason="duplicate stepper name")
                self.steppers[stepper.name] = stepper
        # names of the steppers advanced by each tick, oldest first
        self._moves: list[tuple[str, ...]] = []

    @property
    def ticks(self) -> int:
        return len(self._moves)

    @classmethod
    def for_solvers(
        cls,
        grid: MazeGrid,
        names: list[str],
        start: Coord | None = None,
        goal: Coord | None = None,
        seed: int | None = None,
        **solver_kwargs: Any,
    ) -> Race:
        """
        Build a race of named solvers on one grid.

        ``solver_kwargs`` go only to robot solvers (e.g. ``step_budget_factor``).
        """
        steppers = []
        for name in names:
            kwargs = solver_kwargs if solver_family(name) == "robot" else {}
            solver = create_solver(name, **kwargs)
            steppers.append(Stepper(solver, solver.init(grid, start, goal, seed=seed)))
        return cls(steppers)

    @property
    def finished(self) -> bool:
        return all(stepper.is_terminal for stepper in self.steppers.values())

    def tick(self) -> bool:
        """Advance every unfinished stepper once; False if none could move."""
        moved = tuple(name for name, stepper in self.steppers.items() if not stepper.is_terminal)
        for name in moved:
            self.steppers[name].step_forward()
        if moved:
            self._moves.append(moved)
        return bool(moved)

    def step_back(self) -> None:
        """Undo the latest tick; racers that did not move in it keep their state."""
        if not self._moves:
            return
        for name in self._moves.pop():
            self.steppers[name].step_back()

    def run(self, max_ticks: int | None = None) -> dict[str, RunStatistics]:
        """Tick until every stepper is terminal or ``max_ticks`` is reached."""
        taken = 0
        while not self.finished and (max_ticks is None or taken < max_ticks):
            self.tick()
            taken += 1

        results = self.statistics()
        logger.info(
            "Race after %d ticks: %s",
            self.ticks,
            ", ".join(f"{name}={stats.outcome.value}" for name, stats in results.items()),
        )
        return results

    def statistics(self) -> dict[str, RunStatistics]:
        return {name: stepper.statistics() for name, stepper in self.steppers.items()}
