# MIT License (see LICENSE)
"""
JSON configuration files for springs and spring systems.

A configuration file describes how to construct a system, never its live
state: loading always yields springs at rest (F = 0, x = 0) with their
initial spring constants.

JSON Schema Overview:
---------------------
{
  "type": "single" | "series" | "parallel",
  "spring": { ... },               # If single
  "top_spring": { ... },           # If series/parallel
  "bottom_spring": { ... }         # If series/parallel
}

Spring objects:
{
  "name": string,                        # Default: "spring" / "top" / "bottom"
  "equilibrium_position": float,         # m, default: 1.5
  "spring_constant": float,              # N/m, default: 200
  "spring_constant_range": [min, max],   # N/m, default: [100, 1000]
  "applied_force_range": [min, max],     # N, default: [-100, 100]
  "displacement_range": [min, max],      # m, optional (derived from the above)
  "holds": "applied_force" | "displacement"   # Default: "applied_force"
}

The equivalent spring of a series/parallel system is derived from the
components and is not part of the file.
"""
from __future__ import annotations
import json
from typing import Any

from ..constants import (
    DEFAULT_APPLIED_FORCE_RANGE,
    DEFAULT_EQUILIBRIUM_POSITION,
    DEFAULT_SPRING_CONSTANT,
    DEFAULT_SPRING_CONSTANT_RANGE,
)
from ..errors import ConfigurationError
from ..model.spring import APPLIED_FORCE, Spring
from ..model.systems import ParallelSystem, SeriesSystem, SingleSpringSystem, SpringSystem

SYSTEM_TYPES = {
    "single": SingleSpringSystem,
    "series": SeriesSystem,
    "parallel": ParallelSystem,
}


def load_config_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a configuration file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.

    Raises:
        FileNotFoundError: If the file cannot be found.
        ConfigurationError: If the file is not valid JSON or not an object.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object at top level")
    return data


def spring_from_json(data: dict[str, Any], name: str = "spring") -> Spring:
    """
    Construct a Spring at rest from its JSON object.

    Raises:
        ConfigurationError: If a field has the wrong type or an invalid value.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"spring {name!r}: expected an object, got {type(data).__name__}")
    try:
        return Spring(
            equilibrium_position=data.get("equilibrium_position", DEFAULT_EQUILIBRIUM_POSITION),
            spring_constant=data.get("spring_constant", DEFAULT_SPRING_CONSTANT),
            spring_constant_range=data.get("spring_constant_range", DEFAULT_SPRING_CONSTANT_RANGE),
            applied_force_range=data.get("applied_force_range", DEFAULT_APPLIED_FORCE_RANGE),
            displacement_range=data.get("displacement_range"),
            holds=data.get("holds", APPLIED_FORCE),
            name=str(data.get("name", name)),
        )
    except TypeError as e:
        raise ConfigurationError(f"spring {name!r}: {e}") from e


def spring_to_json(spring: Spring) -> dict[str, Any]:
    """
    Serialize a spring's construction parameters.

    The initial spring constant is written, not the current one.
    """
    return {
        "name": spring.name,
        "equilibrium_position": spring.equilibrium_position,
        "spring_constant": spring.spring_constant_property.initial_value,
        "spring_constant_range": spring.spring_constant_range.to_list(),
        "applied_force_range": spring.applied_force_range.to_list(),
        "displacement_range": spring.displacement_range.to_list(),
        "holds": spring.holds,
    }


def system_from_json(data: dict[str, Any]) -> SpringSystem:
    """
    Construct a spring system from its JSON object.

    Raises:
        ConfigurationError: If the type is unknown or a spring is missing/invalid.
    """
    kind = data.get("type", "single")
    if kind not in SYSTEM_TYPES:
        raise ConfigurationError(f"unknown system type {kind!r}, expected one of {sorted(SYSTEM_TYPES)}")
    if kind == "single":
        return SingleSpringSystem(spring_from_json(data.get("spring", {}), "spring"))
    springs = []
    for key, default_name in (("top_spring", "top"), ("bottom_spring", "bottom")):
        if key not in data:
            raise ConfigurationError(f"{kind} system requires {key!r}")
        springs.append(spring_from_json(data[key], default_name))
    return SYSTEM_TYPES[kind](*springs)


def system_to_json(system: SpringSystem) -> dict[str, Any]:
    """Serialize a system's construction parameters."""
    if isinstance(system, SingleSpringSystem):
        return {"type": "single", "spring": spring_to_json(system.spring)}
    if isinstance(system, SeriesSystem):
        kind = "series"
    elif isinstance(system, ParallelSystem):
        kind = "parallel"
    else:
        raise TypeError(f"Unknown system type: {type(system).__name__}")
    return {
        "type": kind,
        "top_spring": spring_to_json(system.top_spring),
        "bottom_spring": spring_to_json(system.bottom_spring),
    }


def load_system(path: str) -> SpringSystem:
    """
    Load and construct a spring system from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        ConfigurationError: If the file or any parameter is invalid.
    """
    return system_from_json(load_config_raw(path))


def save_system(system: SpringSystem, path: str, indent: int = 2) -> None:
    """
    Save a system's construction parameters to a JSON file.

    Args:
        system: The system to describe.
        path: Output file path.
        indent: JSON indentation level (default: 2 for readability).
    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump(system_to_json(system), f, indent=indent)
