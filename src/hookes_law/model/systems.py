# MIT License (see LICENSE)
"""
Spring systems: one spring, two springs in series, two springs in parallel.

Every system exposes the same contract:
    - springs: the component springs
    - equivalent_spring: a single spring with the combined behavior
    - spring_constant_range / applied_force_range / displacement_range of
      the equivalent spring
    - set_applied_force / set_displacement on the equivalent spring
    - reset()

A system owns its springs. Any setter called on a component or on the
equivalent spring is passed to the system's plan(), which computes the new
value of every cell in the system. The whole system is then written in one
commit, so either every spring is updated or none is.

Combination rules:

    Series   (shared force):        1/k_eq = 1/k_top + 1/k_bottom
                                    F_top = F_bottom = F_eq
                                    x_eq = x_top + x_bottom

    Parallel (shared displacement): k_eq = k_top + k_bottom
                                    x_top = x_bottom = x_eq
                                    F_eq = F_top + F_bottom,  F_i = k_i x

When a component's spring constant changes, the shared quantity (force for
series, displacement for parallel) is held and everything else is
recomputed. The driver value is always written exactly as given.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any

from ..constants import (
    SYSTEM_APPLIED_FORCE_RANGE,
    SYSTEM_SPRING_CONSTANT,
    SYSTEM_SPRING_CONSTANT_RANGE,
)
from ..core.properties import commit
from ..errors import ConfigurationError
from ..types import Range
from .spring import (
    APPLIED_FORCE,
    DISPLACEMENT,
    SPRING_CONSTANT,
    Assignments,
    Spring,
    settle,
)

logger = logging.getLogger(__name__)


class SpringSystem(ABC):
    """
    Base class for a set of springs coordinated as one system.

    Subclasses set `springs` and `equivalent_spring`, call _adopt() and
    implement plan().
    """

    springs: tuple[Spring, ...]
    equivalent_spring: Spring

    def _adopt(self, springs: tuple[Spring, ...]) -> None:
        """Take exclusive ownership of springs."""
        for spring in springs:
            if spring.owner is not None:
                raise ConfigurationError(f"{spring.name} already belongs to another system")
            if spring.applied_force != 0.0 or spring.displacement != 0.0:
                raise ConfigurationError(f"{spring.name} must be at rest when added to a system")
        for spring in springs:
            spring._owner = self

    @property
    def spring_constant_range(self) -> Range:
        return self.equivalent_spring.spring_constant_range

    @property
    def applied_force_range(self) -> Range:
        """
        Outer bound on the equivalent force. Which part of it is reachable
        depends on the current stiffnesses, see get_min/max_applied_force().
        """
        return self.equivalent_spring.applied_force_range

    @property
    def displacement_range(self) -> Range:
        """Outer bound on the equivalent displacement, see get_min/max_displacement()."""
        return self.equivalent_spring.displacement_range

    # Live bounds: the widest driver values the equivalent spring accepts at
    # the current spring constants. Each is inside the matching static range.

    @abstractmethod
    def get_min_applied_force(self) -> float:
        ...

    @abstractmethod
    def get_max_applied_force(self) -> float:
        ...

    @abstractmethod
    def get_min_displacement(self) -> float:
        ...

    @abstractmethod
    def get_max_displacement(self) -> float:
        ...

    def set_applied_force(self, applied_force: float) -> None:
        """Apply a force to the equivalent spring."""
        self.equivalent_spring.set_applied_force(applied_force)

    def set_displacement(self, displacement: float) -> None:
        """Displace the equivalent spring."""
        self.equivalent_spring.set_displacement(displacement)

    @abstractmethod
    def plan(self, spring: Spring, quantity: str, value: Any) -> Assignments:
        """
        Compute the assignments that settle the whole system after `spring`'s
        `quantity` is set to `value`. The driver assignment comes first.

        Raises:
            RangeError: If the driver value is out of range.
            TypeError: If the request is not supported by this system.
        """
        ...

    def all_springs(self) -> tuple[Spring, ...]:
        """Components plus the equivalent spring (each spring once)."""
        if self.equivalent_spring in self.springs:
            return self.springs
        return self.springs + (self.equivalent_spring,)

    def reset(self) -> None:
        """Restore every spring in the system to its construction-time values."""
        assignments: Assignments = []
        for spring in self.all_springs():
            assignments.extend(spring.reset_assignments())
        commit(assignments)
        logger.info("reset %s", type(self).__name__)


class SingleSpringSystem(SpringSystem):
    """
    One spring exposed through the system contract; it is its own equivalent.

    Args:
        spring: An existing spring at rest. If omitted, one is built from
                spring_options (see Spring for the keywords).
    """

    def __init__(self, spring: Spring | None = None, **spring_options: Any) -> None:
        if spring is None:
            spring_options.setdefault("name", "spring")
            spring = Spring(**spring_options)
        elif spring_options:
            raise ConfigurationError("pass either a spring or spring options, not both")
        self.spring = spring
        self.springs = (spring,)
        self.equivalent_spring = spring
        self._adopt(self.springs)
        logger.info("created SingleSpringSystem k=%g", spring.spring_constant)

    def plan(self, spring: Spring, quantity: str, value: Any) -> Assignments:
        return spring.plan(quantity, value)

    def get_min_applied_force(self) -> float:
        s = self.spring
        return s.applied_force_range.clamp(s.displacement_range.min * s.spring_constant)

    def get_max_applied_force(self) -> float:
        s = self.spring
        return s.applied_force_range.clamp(s.displacement_range.max * s.spring_constant)

    def get_min_displacement(self) -> float:
        s = self.spring
        return s.displacement_range.clamp(s.get_min_displacement())

    def get_max_displacement(self) -> float:
        s = self.spring
        return s.displacement_range.clamp(s.get_max_displacement())


class _TwoSpringSystem(SpringSystem):
    """Shared construction and bookkeeping for series and parallel pairs."""

    component_holds = APPLIED_FORCE

    def __init__(
        self,
        top_spring: Spring | None,
        bottom_spring: Spring | None,
        spring_constant: float,
        spring_constant_range: Range | tuple[float, float],
        applied_force_range: Range | tuple[float, float],
        equilibrium_position: float,
    ) -> None:
        if top_spring is None:
            top_spring = self._component("top", spring_constant, spring_constant_range,
                                         applied_force_range, equilibrium_position)
        if bottom_spring is None:
            bottom_spring = self._component("bottom", spring_constant, spring_constant_range,
                                            applied_force_range, equilibrium_position)
        if top_spring is bottom_spring:
            raise ConfigurationError("top and bottom springs must be distinct")
        self.top_spring = top_spring
        self.bottom_spring = bottom_spring
        self.springs = (top_spring, bottom_spring)
        self.equivalent_spring = self._build_equivalent()
        self._adopt(self.springs + (self.equivalent_spring,))
        logger.info(
            "created %s k_top=%g k_bottom=%g k_eq=%g",
            type(self).__name__,
            top_spring.spring_constant,
            bottom_spring.spring_constant,
            self.equivalent_spring.spring_constant,
        )

    def _component(self, name, spring_constant, spring_constant_range, applied_force_range, equilibrium_position):
        return Spring(
            equilibrium_position=equilibrium_position,
            spring_constant=spring_constant,
            spring_constant_range=spring_constant_range,
            applied_force_range=applied_force_range,
            holds=self.component_holds,
            name=name,
        )

    @abstractmethod
    def _build_equivalent(self) -> Spring:
        ...

    def _resolve(self, spring: Spring, quantity: str, value: Any) -> float:
        """Validate the driver and reject requests no system supports."""
        if spring not in self.all_springs():
            raise ValueError(f"{spring.name} does not belong to this system")
        if spring is self.equivalent_spring and quantity == SPRING_CONSTANT:
            raise TypeError("the equivalent spring constant is derived from the component springs")
        return spring.validated(quantity, value)

    def _ordered(self, driver: Any, values: dict) -> Assignments:
        """Driver first, then every other cell of the system, settled onto its range."""
        first = [(driver, values.pop(driver))]
        return first + [(cell, settle(cell, value)) for cell, value in values.items()]


class SeriesSystem(_TwoSpringSystem):
    """
    Two springs connected end to end. Both carry the same force; the
    displacements add.

    Args:
        top_spring, bottom_spring: Existing springs at rest. Built from the
            remaining keywords when omitted.
        spring_constant: Initial k of built components, N/m.
        spring_constant_range: k range of built components.
        applied_force_range: F range of built components.
        equilibrium_position: Equilibrium length of each built component, m.

    Raises:
        ConfigurationError: If a given spring is not at rest, already belongs
            to a system, or both arguments are the same spring.
    """

    component_holds = APPLIED_FORCE

    def __init__(
        self,
        top_spring: Spring | None = None,
        bottom_spring: Spring | None = None,
        *,
        spring_constant: float = SYSTEM_SPRING_CONSTANT,
        spring_constant_range: Range | tuple[float, float] = SYSTEM_SPRING_CONSTANT_RANGE,
        applied_force_range: Range | tuple[float, float] = SYSTEM_APPLIED_FORCE_RANGE,
        equilibrium_position: float = 0.75,
    ) -> None:
        super().__init__(top_spring, bottom_spring, spring_constant, spring_constant_range,
                         applied_force_range, equilibrium_position)

    @staticmethod
    def combine(k_top: float, k_bottom: float) -> float:
        """Equivalent stiffness of two springs in series."""
        return 1.0 / (1.0 / k_top + 1.0 / k_bottom)

    def get_min_applied_force(self) -> float:
        """Most negative shared force every spring can carry at its current k."""
        bound = max(s.displacement_range.min * s.spring_constant for s in self.all_springs())
        return self.applied_force_range.clamp(bound)

    def get_max_applied_force(self) -> float:
        bound = min(s.displacement_range.max * s.spring_constant for s in self.all_springs())
        return self.applied_force_range.clamp(bound)

    def get_min_displacement(self) -> float:
        eq = self.equivalent_spring
        return self.displacement_range.clamp(self.get_min_applied_force() / eq.spring_constant)

    def get_max_displacement(self) -> float:
        eq = self.equivalent_spring
        return self.displacement_range.clamp(self.get_max_applied_force() / eq.spring_constant)

    def _build_equivalent(self) -> Spring:
        top, bottom = self.top_spring, self.bottom_spring
        # both ranges contain 0 (springs start at rest), so the overlap is never empty
        force_range = top.applied_force_range.intersection(bottom.applied_force_range)
        k_top, k_bottom = top.spring_constant_range, bottom.spring_constant_range
        return Spring(
            equilibrium_position=top.equilibrium_position + bottom.equilibrium_position,
            spring_constant=self.combine(top.spring_constant, bottom.spring_constant),
            spring_constant_range=Range(self.combine(k_top.min, k_bottom.min), self.combine(k_top.max, k_bottom.max)),
            applied_force_range=force_range,
            displacement_range=Range(
                top.displacement_range.min + bottom.displacement_range.min,
                top.displacement_range.max + bottom.displacement_range.max,
            ),
            holds=APPLIED_FORCE,
            name="equivalent",
        )

    def _state(self, k_top: float, k_bottom: float, force: float) -> dict:
        top, bottom, eq = self.top_spring, self.bottom_spring, self.equivalent_spring
        x_top = force / k_top
        x_bottom = force / k_bottom
        return {
            top.spring_constant_property: k_top,
            bottom.spring_constant_property: k_bottom,
            eq.spring_constant_property: self.combine(k_top, k_bottom),
            top.applied_force_property: force,
            bottom.applied_force_property: force,
            eq.applied_force_property: force,
            top.displacement_property: x_top,
            bottom.displacement_property: x_bottom,
            eq.displacement_property: x_top + x_bottom,
        }

    def plan(self, spring: Spring, quantity: str, value: Any) -> Assignments:
        value = self._resolve(spring, quantity, value)
        top, bottom, eq = self.top_spring, self.bottom_spring, self.equivalent_spring
        k_top, k_bottom = top.spring_constant, bottom.spring_constant
        driver = spring.cell(quantity)

        if quantity == APPLIED_FORCE:
            values = self._state(k_top, k_bottom, value)
        elif quantity == SPRING_CONSTANT:
            if spring is top:
                k_top = value
            else:
                k_bottom = value
            values = self._state(k_top, k_bottom, eq.applied_force)
        elif spring is eq:
            values = self._state(k_top, k_bottom, eq.spring_constant * value)
            values[driver] = value
        else:
            values = self._state(k_top, k_bottom, spring.spring_constant * value)
            values[driver] = value
            values[eq.displacement_property] = (
                values[top.displacement_property] + values[bottom.displacement_property]
            )
        return self._ordered(driver, values)


class ParallelSystem(_TwoSpringSystem):
    """
    Two springs sharing both endpoints. Both have the same displacement;
    the forces add, each spring taking F_i = k_i x.

    Args:
        top_spring, bottom_spring: Existing springs at rest with equal
            equilibrium positions. Built from the remaining keywords when omitted.
        spring_constant: Initial k of built components, N/m.
        spring_constant_range: k range of built components.
        applied_force_range: F range of built components. The equivalent
            spring accepts the sum of the component ranges.
        equilibrium_position: Shared equilibrium position, m.

    Raises:
        ConfigurationError: If the components do not share an equilibrium
            position, or a given spring is not at rest or already owned.
    """

    component_holds = DISPLACEMENT

    def __init__(
        self,
        top_spring: Spring | None = None,
        bottom_spring: Spring | None = None,
        *,
        spring_constant: float = SYSTEM_SPRING_CONSTANT,
        spring_constant_range: Range | tuple[float, float] = SYSTEM_SPRING_CONSTANT_RANGE,
        applied_force_range: Range | tuple[float, float] = SYSTEM_APPLIED_FORCE_RANGE,
        equilibrium_position: float = 1.5,
    ) -> None:
        super().__init__(top_spring, bottom_spring, spring_constant, spring_constant_range,
                         applied_force_range, equilibrium_position)

    @staticmethod
    def combine(k_top: float, k_bottom: float) -> float:
        """Equivalent stiffness of two springs in parallel."""
        return k_top + k_bottom

    def get_min_displacement(self) -> float:
        """
        Most negative shared displacement at the current stiffnesses.

        The stiffer spring reaches its force limit first, so the bound is
        the tightest F_i.min / k_i over all springs.
        """
        bound = max(s.applied_force_range.min / s.spring_constant for s in self.all_springs())
        return self.displacement_range.clamp(bound)

    def get_max_displacement(self) -> float:
        bound = min(s.applied_force_range.max / s.spring_constant for s in self.all_springs())
        return self.displacement_range.clamp(bound)

    def get_min_applied_force(self) -> float:
        eq = self.equivalent_spring
        return self.applied_force_range.clamp(self.get_min_displacement() * eq.spring_constant)

    def get_max_applied_force(self) -> float:
        eq = self.equivalent_spring
        return self.applied_force_range.clamp(self.get_max_displacement() * eq.spring_constant)

    def _build_equivalent(self) -> Spring:
        top, bottom = self.top_spring, self.bottom_spring
        if top.equilibrium_position != bottom.equilibrium_position:
            raise ConfigurationError(
                f"parallel springs must share endpoints, got equilibrium positions "
                f"{top.equilibrium_position:g} and {bottom.equilibrium_position:g}"
            )
        displacement_range = top.displacement_range.intersection(bottom.displacement_range)
        k_top, k_bottom = top.spring_constant_range, bottom.spring_constant_range
        f_top, f_bottom = top.applied_force_range, bottom.applied_force_range
        return Spring(
            equilibrium_position=top.equilibrium_position,
            spring_constant=self.combine(top.spring_constant, bottom.spring_constant),
            spring_constant_range=Range(k_top.min + k_bottom.min, k_top.max + k_bottom.max),
            applied_force_range=Range(f_top.min + f_bottom.min, f_top.max + f_bottom.max),
            displacement_range=displacement_range,
            holds=DISPLACEMENT,
            name="equivalent",
        )

    def _state(self, k_top: float, k_bottom: float, displacement: float) -> dict:
        top, bottom, eq = self.top_spring, self.bottom_spring, self.equivalent_spring
        f_top = k_top * displacement
        f_bottom = k_bottom * displacement
        return {
            top.spring_constant_property: k_top,
            bottom.spring_constant_property: k_bottom,
            eq.spring_constant_property: self.combine(k_top, k_bottom),
            top.displacement_property: displacement,
            bottom.displacement_property: displacement,
            eq.displacement_property: displacement,
            top.applied_force_property: f_top,
            bottom.applied_force_property: f_bottom,
            eq.applied_force_property: f_top + f_bottom,
        }

    def plan(self, spring: Spring, quantity: str, value: Any) -> Assignments:
        value = self._resolve(spring, quantity, value)
        top, bottom, eq = self.top_spring, self.bottom_spring, self.equivalent_spring
        k_top, k_bottom = top.spring_constant, bottom.spring_constant
        driver = spring.cell(quantity)

        if quantity == DISPLACEMENT:
            values = self._state(k_top, k_bottom, value)
        elif quantity == SPRING_CONSTANT:
            if spring is top:
                k_top = value
            else:
                k_bottom = value
            values = self._state(k_top, k_bottom, eq.displacement)
        elif spring is eq:
            values = self._state(k_top, k_bottom, value / eq.spring_constant)
            values[driver] = value
        else:
            values = self._state(k_top, k_bottom, value / spring.spring_constant)
            values[driver] = value
            values[eq.applied_force_property] = (
                values[top.applied_force_property] + values[bottom.applied_force_property]
            )
        return self._ordered(driver, values)
