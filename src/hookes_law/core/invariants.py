# MIT License (see LICENSE)
"""
Checks of the physical invariants and conserved quantities.

Used by tests and benchmarks to verify that every settled state satisfies
Hooke's law and the series/parallel combination rules. All comparisons
use a combined absolute/relative tolerance (see util.approx_equal).
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Iterable

import numpy as np

from ..constants import INVARIANT_TOLERANCE
from ..util import approx_equal

if TYPE_CHECKING:
    from ..model.spring import Spring
    from ..model.systems import SpringSystem


def hookes_law_residual(spring: "Spring") -> float:
    """
    Residual of Hooke's law, F - k x, in newtons.

    Zero (up to rounding) for every settled spring.
    """
    return spring.applied_force - spring.spring_constant * spring.displacement


def check_spring(spring: "Spring", tol: float = INVARIANT_TOLERANCE) -> bool:
    """
    True if the spring satisfies F = k x and its derived values are current.

    Checks:
        F = k x
        length = equilibrium_position + x
        spring_force = -F
    """
    return (
        approx_equal(spring.applied_force, spring.spring_constant * spring.displacement, tol)
        and approx_equal(spring.length, spring.equilibrium_position + spring.displacement, tol)
        and approx_equal(spring.spring_force, -spring.applied_force, tol)
    )


def check_system(system: "SpringSystem", tol: float = INVARIANT_TOLERANCE) -> bool:
    """
    True if every spring obeys Hooke's law and the combination rule holds.

    Series:   1/k_eq = 1/k_top + 1/k_bottom, equal forces, displacements add.
    Parallel: k_eq = k_top + k_bottom, equal displacements, forces add.
    """
    # Import locally to avoid circular import (model imports core)
    from ..model.systems import ParallelSystem, SeriesSystem

    if not all(check_spring(s, tol) for s in system.all_springs()):
        return False
    if isinstance(system, SeriesSystem):
        top, bottom, eq = system.top_spring, system.bottom_spring, system.equivalent_spring
        return (
            approx_equal(1.0 / eq.spring_constant, 1.0 / top.spring_constant + 1.0 / bottom.spring_constant, tol)
            and approx_equal(top.applied_force, eq.applied_force, tol)
            and approx_equal(bottom.applied_force, eq.applied_force, tol)
            and approx_equal(top.displacement + bottom.displacement, eq.displacement, tol)
        )
    if isinstance(system, ParallelSystem):
        top, bottom, eq = system.top_spring, system.bottom_spring, system.equivalent_spring
        return (
            approx_equal(eq.spring_constant, top.spring_constant + bottom.spring_constant, tol)
            and approx_equal(top.displacement, eq.displacement, tol)
            and approx_equal(bottom.displacement, eq.displacement, tol)
            and approx_equal(top.applied_force + bottom.applied_force, eq.applied_force, tol)
        )
    return True


def potential_energy(springs: Iterable["Spring"]) -> float:
    """
    Total elastic potential energy stored in a set of springs.

    E = sum(1/2 k x^2), in joules.
    """
    springs = list(springs)
    if not springs:
        return 0.0
    k = np.array([s.spring_constant for s in springs], dtype=np.float64)
    x = np.array([s.displacement for s in springs], dtype=np.float64)
    return float(0.5 * np.sum(k * x * x))
