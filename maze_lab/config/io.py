"""
YAML I/O for lab configurations.

Sessions are stored as plain YAML mirroring the ``LabConfig`` sections.
Loading validates through pydantic and reports problems as ``ValueError``;
command-line options are merged on top with ``apply_overrides``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

if TYPE_CHECKING:
    from .core import LabConfig


def load_lab_config(path: str | Path) -> LabConfig:
    """
    Load lab configuration from YAML file.

    Parameters
    ----------
    path : str | Path
        Path to YAML configuration file

    Returns
    -------
    LabConfig
        Validated lab configuration

    Raises
    ------
    FileNotFoundError
        If configuration file doesn't exist
    ValueError
        If configuration is invalid
    yaml.YAMLError
        If YAML syntax is invalid

    Examples
    --------
    >>> config = load_lab_config("sessions/race.yaml")

    YAML Format
    -----------
    maze:
      size: 31
      algorithm: wilsons
      seed: 7
      extra_openings: 6
    solvers:
      algorithms: [bfs, astar, pledge, tremaux]
    driver:
      speed: 80
    """
    from .core import LabConfig

    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Invalid YAML syntax in {path}: {e}") from e

    if data is None:
        data = {}

    try:
        return LabConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {path}:\n{e}") from e


def save_lab_config(config: LabConfig, path: str | Path) -> None:
    """
    Save lab configuration to YAML file.

    Parameters
    ----------
    config : LabConfig
        Configuration to save
    path : str | Path
        Output file path

    Examples
    --------
    >>> save_lab_config(LabConfig(), "sessions/default.yaml")

    >>> # Or use method
    >>> config.to_yaml("sessions/default.yaml")
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # None values are dropped so defaults apply on reload
    config_dict = config.model_dump(exclude_none=True, mode="json")

    with open(path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True)


def apply_overrides(config: LabConfig, **sections: dict[str, Any]) -> LabConfig:
    """
    Return a copy of ``config`` with per-section values replaced.

    ``None`` values are ignored, so unset command-line options keep what the
    file (or the defaults) chose. The result is validated again, so an
    override can still be rejected, e.g. a goal outside a smaller maze.

    Parameters
    ----------
    config : LabConfig
        Base configuration
    **sections : dict
        Section name (``maze``, ``solvers``, ``driver``, ``logging``) to field values

    Returns
    -------
    LabConfig
        Validated configuration with the overrides applied

    Raises
    ------
    ValueError
        If a section name is unknown or the merged configuration is invalid

    Examples
    --------
    >>> config = apply_overrides(LabConfig(), maze={"size": 31, "seed": None})
    >>> config.maze.size, config.maze.seed
    (31, None)
    """
    from .core import LabConfig

    data = config.model_dump()
    for section, values in sections.items():
        if section not in data:
            raise ValueError(f"Unknown configuration section: {section!r}")
        data[section].update({key: value for key, value in values.items() if value is not None})

    try:
        return LabConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration overrides:\n{e}") from e
