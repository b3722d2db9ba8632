# MIT License (see LICENSE)
"""
Model defaults and display constants.

All physical values use SI units: newtons (N), meters (m), N/m, joules (J).
"""
from __future__ import annotations

# Single spring (Intro screen)
DEFAULT_EQUILIBRIUM_POSITION: float = 1.5   # m, equilibrium x of the free end
DEFAULT_SPRING_CONSTANT: float = 200.0      # N/m
DEFAULT_SPRING_CONSTANT_RANGE: tuple[float, float] = (100.0, 1000.0)
DEFAULT_APPLIED_FORCE_RANGE: tuple[float, float] = (-100.0, 100.0)

# Component springs in the Systems screen
SYSTEM_SPRING_CONSTANT: float = 200.0
SYSTEM_SPRING_CONSTANT_RANGE: tuple[float, float] = (200.0, 600.0)
SYSTEM_APPLIED_FORCE_RANGE: tuple[float, float] = (-100.0, 100.0)

# Energy screen
ENERGY_SPRING_CONSTANT: float = 100.0
ENERGY_SPRING_CONSTANT_RANGE: tuple[float, float] = (100.0, 400.0)
ENERGY_DISPLACEMENT_RANGE: tuple[float, float] = (-1.0, 1.0)
# wide enough for any displacement at any stiffness
ENERGY_APPLIED_FORCE_RANGE: tuple[float, float] = (-400.0, 400.0)

# Tolerance used when comparing settled quantities (F = kx, sums, ...)
INVARIANT_TOLERANCE: float = 1e-9

# Display precision for numeric readouts
APPLIED_FORCE_DECIMAL_PLACES: int = 0
SPRING_CONSTANT_DECIMAL_PLACES: int = 0
SPRING_FORCE_DECIMAL_PLACES: int = 0
DISPLACEMENT_DECIMAL_PLACES: int = 3
ENERGY_DECIMAL_PLACES: int = 1
