# MIT License (see LICENSE)
"""
Model of a single ideal linear spring.

Hooke's law, F = k x, where:

    F = applied force, N
    k = spring constant, N/m
    x = displacement from the equilibrium position, m

Each of the three quantities is an ObservableValue and can be set by a UI
collaborator. A setter treats its argument as the driver, computes the one
dependent quantity from F = k x and writes both in a single commit. The
dependent quantity is written as a plain value, never through another
setter, so a change cannot bounce back and re-drive the equation:

    set_applied_force(F)    ->  x = F / k
    set_displacement(x)     ->  F = k x
    set_spring_constant(k)  ->  x = F / k   (holds="applied_force", default)
                                F = k x     (holds="displacement")

length = equilibrium_position + x, spring_force = -F and
potential_energy = 1/2 k x^2 are DerivedValues.

A spring owned by a system (see systems.py) hands every setter call to the
system, which resolves it for all of its springs in one commit.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any

from ..constants import (
    DEFAULT_APPLIED_FORCE_RANGE,
    DEFAULT_EQUILIBRIUM_POSITION,
    DEFAULT_SPRING_CONSTANT,
    DEFAULT_SPRING_CONSTANT_RANGE,
    INVARIANT_TOLERANCE,
)
from ..core.properties import DerivedValue, ObservableValue, commit
from ..errors import ConfigurationError
from ..types import Range
from ..util import f64, is_finite

if TYPE_CHECKING:
    from .systems import SpringSystem

logger = logging.getLogger(__name__)

APPLIED_FORCE = "applied_force"
SPRING_CONSTANT = "spring_constant"
DISPLACEMENT = "displacement"
QUANTITIES = (APPLIED_FORCE, SPRING_CONSTANT, DISPLACEMENT)

Assignments = list[tuple[ObservableValue, Any]]


def settle(cell: ObservableValue, value: float) -> float:
    """
    Snap a recomputed value onto its cell's range when it overshoots a bound
    only by floating-point rounding. Driver values are never settled.
    """
    if cell.valid_range is None:
        return value
    return cell.valid_range.snap(value, INVARIANT_TOLERANCE)


class Spring:
    """
    An ideal spring obeying F = k x.

    Args:
        equilibrium_position: Position of the free end when x = 0, in m.
        spring_constant: Initial k in N/m. Must lie in spring_constant_range.
        spring_constant_range: Valid k, both bounds > 0.
        applied_force_range: Valid F in N. Must contain 0 (the initial force).
        displacement_range: Valid x in m. Defaults to
            [F.min / k.min, F.max / k.min], the widest displacement reachable
            at minimum stiffness.
        holds: Quantity kept fixed when k changes, "applied_force" or "displacement".
        name: Prefix for value names in messages and logs.

    Raises:
        ConfigurationError: If any parameter is invalid.
    """

    def __init__(
        self,
        *,
        equilibrium_position: float = DEFAULT_EQUILIBRIUM_POSITION,
        spring_constant: float = DEFAULT_SPRING_CONSTANT,
        spring_constant_range: Range | tuple[float, float] = DEFAULT_SPRING_CONSTANT_RANGE,
        applied_force_range: Range | tuple[float, float] = DEFAULT_APPLIED_FORCE_RANGE,
        displacement_range: Range | tuple[float, float] | None = None,
        holds: str = APPLIED_FORCE,
        name: str = "spring",
    ) -> None:
        self.name = name
        self.spring_constant_range = Range.coerce(spring_constant_range)
        self.applied_force_range = Range.coerce(applied_force_range)
        if self.spring_constant_range.min <= 0:
            raise ConfigurationError(
                f"{name}: spring constant range must be positive, got {self.spring_constant_range}"
            )
        if holds not in (APPLIED_FORCE, DISPLACEMENT):
            raise ConfigurationError(f"{name}: holds must be 'applied_force' or 'displacement', got {holds!r}")
        self.holds = holds

        try:
            self.equilibrium_position = f64(equilibrium_position)
        except TypeError as e:
            raise ConfigurationError(f"{name}: invalid equilibrium position: {e}") from e
        if not is_finite(self.equilibrium_position):
            raise ConfigurationError(f"{name}: equilibrium position must be finite")

        if displacement_range is None:
            k_min = self.spring_constant_range.min
            displacement_range = Range(self.applied_force_range.min / k_min, self.applied_force_range.max / k_min)
        self.displacement_range = Range.coerce(displacement_range)

        try:
            spring_constant = f64(spring_constant)
        except TypeError as e:
            raise ConfigurationError(f"{name}: invalid spring constant: {e}") from e

        self.spring_constant_property = ObservableValue(
            spring_constant,
            valid_range=self.spring_constant_range,
            name=f"{name}.spring_constant",
        )
        self.applied_force_property = ObservableValue(
            0.0, valid_range=self.applied_force_range, name=f"{name}.applied_force"
        )
        self.displacement_property = ObservableValue(
            0.0, valid_range=self.displacement_range, name=f"{name}.displacement"
        )

        equilibrium = self.equilibrium_position
        self.length_property = DerivedValue(
            [self.displacement_property], lambda x: equilibrium + x, name=f"{name}.length"
        )
        # Newton's third law; 0.0 - F keeps the resting value at +0.0
        self.spring_force_property = DerivedValue(
            [self.applied_force_property], lambda f: 0.0 - f, name=f"{name}.spring_force"
        )
        self.potential_energy_property = DerivedValue(
            [self.spring_constant_property, self.displacement_property],
            lambda k, x: 0.5 * k * x * x,
            name=f"{name}.potential_energy",
        )

        self._cells = {
            APPLIED_FORCE: self.applied_force_property,
            SPRING_CONSTANT: self.spring_constant_property,
            DISPLACEMENT: self.displacement_property,
        }
        self._owner: SpringSystem | None = None
        logger.debug("created %r", self)

    # -- current values -----------------------------------------------------

    @property
    def applied_force(self) -> float:
        return self.applied_force_property.value

    @property
    def spring_constant(self) -> float:
        return self.spring_constant_property.value

    @property
    def displacement(self) -> float:
        return self.displacement_property.value

    @property
    def length(self) -> float:
        return self.length_property.value

    @property
    def spring_force(self) -> float:
        return self.spring_force_property.value

    @property
    def potential_energy(self) -> float:
        return self.potential_energy_property.value

    @property
    def owner(self) -> "SpringSystem | None":
        """The system coordinating this spring, if any."""
        return self._owner

    def cell(self, quantity: str) -> ObservableValue:
        """The ObservableValue holding one of the three controllable quantities."""
        try:
            return self._cells[quantity]
        except KeyError:
            raise ValueError(f"unknown quantity {quantity!r}, expected one of {QUANTITIES}") from None

    # -- setters ------------------------------------------------------------

    def set_applied_force(self, applied_force: float) -> None:
        """
        Apply a force and stretch/compress the spring accordingly (x = F / k).

        Raises:
            RangeError: If F is outside applied_force_range, or the resulting x
                        is outside displacement_range. The spring is unchanged.
        """
        self._update(APPLIED_FORCE, applied_force)

    def set_spring_constant(self, spring_constant: float) -> None:
        """
        Change the stiffness, keeping the quantity named by `holds` fixed.

        Raises:
            RangeError: If k is outside spring_constant_range, or the recomputed
                        quantity leaves its own range. The spring is unchanged.
        """
        self._update(SPRING_CONSTANT, spring_constant)

    def set_displacement(self, displacement: float) -> None:
        """
        Pull the spring to a displacement; the force follows (F = k x).

        Raises:
            RangeError: If x is outside displacement_range, or k x is outside
                        applied_force_range. The spring is unchanged.
        """
        self._update(DISPLACEMENT, displacement)

    def set(self, quantity: str, value: float) -> None:
        """Set a controllable quantity by name."""
        self._update(quantity, value)

    def _update(self, quantity: str, value: float) -> None:
        if self._owner is not None:
            assignments = self._owner.plan(self, quantity, value)
        else:
            assignments = self.plan(quantity, value)
        commit(assignments)

    def validated(self, quantity: str, value: Any) -> float:
        """
        Coerce and validate a driver value for one of the quantities.

        Raises:
            RangeError: If the value is out of range or not finite.
            TypeError: If the value is not a number.
        """
        cell = self.cell(quantity)
        value = f64(value)
        cell.validate(value)
        return value

    def plan(self, quantity: str, value: Any) -> Assignments:
        """
        Compute the assignments that settle this spring for a driver value.

        The driver comes first, followed by the single dependent quantity,
        settled onto its range if it overshoots only by rounding (so a drag
        clamped with get_max_displacement() is accepted). Nothing is written.
        """
        value = self.validated(quantity, value)
        f_cell, k_cell, x_cell = self.applied_force_property, self.spring_constant_property, self.displacement_property
        if quantity == APPLIED_FORCE:
            return [(f_cell, value), (x_cell, settle(x_cell, value / self.spring_constant))]
        if quantity == DISPLACEMENT:
            return [(x_cell, value), (f_cell, settle(f_cell, self.spring_constant * value))]
        if self.holds == DISPLACEMENT:
            return [(k_cell, value), (f_cell, settle(f_cell, value * self.displacement))]
        return [(k_cell, value), (x_cell, settle(x_cell, self.applied_force / value))]

    # -- range queries ------------------------------------------------------

    def get_min_displacement(self) -> float:
        """Smallest displacement reachable at the current k (x = F.min / k). Used to constrain dragging."""
        return self.applied_force_range.min / self.spring_constant

    def get_max_displacement(self) -> float:
        """Largest displacement reachable at the current k (x = F.max / k). Used to constrain dragging."""
        return self.applied_force_range.max / self.spring_constant

    # -- reset --------------------------------------------------------------

    def reset_assignments(self) -> Assignments:
        """Assignments restoring the construction-time values."""
        return [(cell, cell.initial_value) for cell in self._cells.values()]

    def reset(self) -> None:
        """
        Restore k, F and x to their construction-time values.

        A spring owned by a system cannot be reset alone without breaking the
        system's invariants, so the whole owning system is reset instead.
        """
        if self._owner is not None:
            self._owner.reset()
        else:
            commit(self.reset_assignments())

    def __repr__(self) -> str:
        return (
            f"Spring({self.name!r}, k={self.spring_constant:g}, "
            f"F={self.applied_force:g}, x={self.displacement:g})"
        )
