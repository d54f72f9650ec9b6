"""
Steppable algorithm protocol.

Every generator and solver is a pure state transformer: ``step(state)``
returns a new state and never mutates its input. States are frozen
dataclasses, so the driver can keep every intermediate state in its history
and step backward by simply discarding the latest one.

Randomised algorithms carry the full ``random.Random`` state inside their
algorithm state. Each step restores it, draws, and stores the advanced state,
so stepping the same state twice always yields the same successor.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from .grid import Coord, MazeGrid

if TYPE_CHECKING:
    from collections.abc import Iterator


class Outcome(str, Enum):
    """Terminal classification of a run."""

    RUNNING = "running"
    SUCCESS = "success"
    STUCK = "stuck"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True, kw_only=True)
class AlgorithmState:
    """
    Fields common to every algorithm state.

    Attributes:
        grid: Current maze grid
        current: Cell the algorithm is working on, if any
        step_count: Number of steps taken since initialisation
        is_complete: True once the algorithm has finished
    """

    grid: MazeGrid
    current: Coord | None = None
    step_count: int = 0
    is_complete: bool = False

    @property
    def is_terminal(self) -> bool:
        """True when further steps cannot change the state."""
        return self.is_complete

    @property
    def outcome(self) -> Outcome:
        return Outcome.SUCCESS if self.is_complete else Outcome.RUNNING


S = TypeVar("S", bound=AlgorithmState)


class SteppableAlgorithm(ABC, Generic[S]):
    """Base class for algorithms that advance one observable step at a time."""

    name: ClassVar[str] = ""
    display_name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    @abstractmethod
    def step(self, state: S) -> S:
        """
        Advance by one step.

        Stepping a terminal state returns it unchanged.
        """

    def iter_states(self, state: S, max_steps: int | None = None) -> Iterator[S]:
        """Yield successive states until terminal or ``max_steps`` were taken."""
        taken = 0
        while not state.is_terminal and (max_steps is None or taken < max_steps):
            state = self.step(state)
            taken += 1
            yield state

    def run_to_completion(self, state: S, max_steps: int | None = None) -> S:
        """Step repeatedly and return the last state reached."""
        last = state
        for last in self.iter_states(state, max_steps):
            pass
        return last

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def restore_rng(rng_state: tuple[Any, ...]) -> random.Random:
    """Recreate a generator positioned exactly where ``rng_state`` left it."""
    rng = random.Random(0)
    rng.setstate(rng_state)
    return rng
