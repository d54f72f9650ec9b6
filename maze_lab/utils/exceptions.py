"""
Exception classes for maze_lab with helpful error messages and user guidance.

Errors are only raised while an algorithm run is being set up (bad sizes,
endpoints on walls, malformed grids, unknown algorithm names). Once a run is
initialised, ``step()`` never raises: terminal outcomes live in the state.
"""

from __future__ import annotations

from typing import Any


class MazeLabError(Exception):
    """
    Base exception for maze_lab errors.

    The rendered message names the algorithm in brackets, then adds a
    suggestion, an error code and one line per diagnostic entry when given.
    """

    def __init__(
        self,
        message: str,
        algorithm_name: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.algorithm_name = algorithm_name or "maze_lab"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        lines = [f"[{self.algorithm_name}] {message}"]
        if suggested_action:
            lines.append(f"Suggestion: {suggested_action}")
        if error_code:
            lines.append(f"Error Code: {error_code}")
        if self.diagnostic_data:
            lines.append("Diagnostic Information:")
            lines.extend(f"   - {key}: {value}" for key, value in self.diagnostic_data.items())
        super().__init__("\n".join(lines))


class ConfigurationError(MazeLabError, ValueError):
    """Exception raised when an algorithm parameter is invalid."""

    def __init__(
        self,
        parameter_name: str,
        provided_value: Any,
        expected_type: type | None = None,
        valid_range: tuple | None = None,
        algorithm_name: str | None = None,
        reason: str | None = None,
    ):
        diagnostic_data = {
            "parameter": parameter_name,
            "provided_value": str(provided_value),
            "provided_type": type(provided_value).__name__,
        }

        if expected_type:
            diagnostic_data["expected_type"] = expected_type.__name__

        if valid_range:
            diagnostic_data["valid_range"] = f"[{valid_range[0]}, {valid_range[1]}]"

        if reason:
            diagnostic_data["reason"] = reason

        suggested_action = _configuration_hint(
            parameter_name, provided_value, expected_type, valid_range
        )

        message = f"Invalid configuration for parameter '{parameter_name}'"

        super().__init__(
            message=message,
            algorithm_name=algorithm_name,
            suggested_action=suggested_action,
            error_code="INVALID_CONFIGURATION",
            diagnostic_data=diagnostic_data,
        )
        self.parameter_name = parameter_name
        self.provided_value = provided_value


class InvalidGridError(MazeLabError, ValueError):
    """Exception raised when cell data cannot form a square wall/passage grid."""

    def __init__(self, problem: str, shape: tuple | None = None):
        diagnostic_data: dict[str, Any] = {"problem": problem}
        if shape is not None:
            diagnostic_data["shape"] = str(shape)

        super().__init__(
            message=f"Invalid maze grid: {problem}",
            algorithm_name="MazeGrid",
            suggested_action="Provide a square 2-D array (side >= 3) containing only 0 (passage) and 1 (wall)",
            error_code="INVALID_GRID",
            diagnostic_data=diagnostic_data,
        )


class UnknownAlgorithmError(MazeLabError, ValueError):
    """Exception raised when an algorithm name is not registered."""

    def __init__(self, name: str, family: str, available: list[str]):
        super().__init__(
            message=f"Unknown {family} algorithm: '{name}'",
            suggested_action=f"Choose one of: {', '.join(available)}",
            error_code="UNKNOWN_ALGORITHM",
            diagnostic_data={"family": family, "requested": name},
        )
        self.name = name
        self.available = available


class MazeGenerationError(MazeLabError, RuntimeError):
    """Exception raised when a completed generation run is not a perfect maze."""

    def __init__(self, algorithm_name: str, verification: dict[str, Any]):
        super().__init__(
            message="Generated maze is not perfect",
            algorithm_name=algorithm_name,
            suggested_action="Report the seed and size; every generator must carve a spanning tree",
            error_code="IMPERFECT_MAZE",
            diagnostic_data=verification,
        )
        self.verification = verification


def _configuration_hint(
    parameter_name: str,
    provided_value: Any,
    expected_type: type | None,
    valid_range: tuple | None,
) -> str:
    hints = []
    is_number = isinstance(provided_value, (int, float)) and not isinstance(provided_value, bool)

    if expected_type is not None and (not isinstance(provided_value, expected_type) or isinstance(provided_value, bool)):
        hints.append(f"Pass {parameter_name} as {expected_type.__name__}")
    if valid_range is not None and is_number:
        low, high = valid_range
        if provided_value < low:
            hints.append(f"Use {parameter_name} >= {low}")
        elif provided_value > high:
            hints.append(f"Use {parameter_name} <= {high}")
    if parameter_name == "size" and is_number and provided_value % 2 == 0:
        hints.append("Maze side length must be odd so rooms sit on odd coordinates")
    if parameter_name in ("start", "goal"):
        hints.append(f"Place {parameter_name} on an open in-bounds cell, e.g. a room cell (odd, odd)")

    return " | ".join(hints) if hints else f"Check the value of {parameter_name}"
