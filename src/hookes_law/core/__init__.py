# MIT License (see LICENSE)
"""
Reactive value cells and invariant checks.

This subpackage provides:
    - Value cells: ObservableValue, DerivedValue and the atomic commit().
    - Invariants: Hooke's law residual, spring/system checks, stored energy.

Typical usage:
    from hookes_law.core import ObservableValue, DerivedValue

    x = ObservableValue(0.0, name="x")
    length = DerivedValue([x], lambda v: 1.5 + v, name="length")
    length.subscribe(lambda new, old: print(new))
    x.set(0.25)   # prints 1.75
"""
from .properties import ReadOnlyValue, ObservableValue, DerivedValue, commit
from .invariants import hookes_law_residual, check_spring, check_system, potential_energy

__all__ = [
    # Value cells
    "ReadOnlyValue",
    "ObservableValue",
    "DerivedValue",
    "commit",
    # Invariants
    "hookes_law_residual",
    "check_spring",
    "check_system",
    "potential_energy",
]
