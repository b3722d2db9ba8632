# MIT License (see LICENSE)
"""
Input/Output utilities for spring systems.

This subpackage provides:
    - JSON configuration: Describe how to construct a spring or system.
    - Round-trip support: A saved configuration loads back into an
      identical system at rest.

Typical usage:
    from hookes_law.io import load_system, save_system

    system = load_system("series.json")
    save_system(system, "copy.json")
"""
from .json_io import (
    load_config_raw,
    load_system,
    save_system,
    system_from_json,
    system_to_json,
    spring_from_json,
    spring_to_json,
)

__all__ = [
    # Loading
    "load_config_raw",
    "load_system",
    # Saving
    "save_system",
    # Serialization
    "system_from_json",
    "system_to_json",
    "spring_from_json",
    "spring_to_json",
]
