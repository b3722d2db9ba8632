# MIT License (see LICENSE)
"""
Per-screen models.

Each screen owns fresh systems, built when the screen is instantiated and
restored by reset(). Screens combine systems by composition; there is no
shared base class.
"""
from __future__ import annotations
import logging

from ..constants import (
    ENERGY_APPLIED_FORCE_RANGE,
    ENERGY_DISPLACEMENT_RANGE,
    ENERGY_SPRING_CONSTANT,
    ENERGY_SPRING_CONSTANT_RANGE,
)
from ..core.properties import ObservableValue
from .spring import DISPLACEMENT
from .systems import ParallelSystem, SeriesSystem, SingleSpringSystem

logger = logging.getLogger(__name__)


class IntroductionModel:
    """Two independent single springs; the view shows one or both of them."""

    def __init__(self) -> None:
        self.system1 = SingleSpringSystem(name="spring1")
        self.system2 = SingleSpringSystem(name="spring2")
        self.number_of_systems_property = ObservableValue(1, valid_values=(1, 2), name="number_of_systems")

    @property
    def spring1(self):
        return self.system1.spring

    @property
    def spring2(self):
        return self.system2.spring

    @property
    def number_of_systems(self) -> int:
        return self.number_of_systems_property.value

    def set_number_of_systems(self, n: int) -> None:
        """Show 1 or 2 springs. Raises RangeError for any other value."""
        self.number_of_systems_property.set(n)

    def reset(self) -> None:
        self.system1.reset()
        self.system2.reset()
        self.number_of_systems_property.reset()
        logger.info("reset IntroductionModel")


class SystemsModel:
    """Unrelated series and parallel systems, shown one at a time."""

    def __init__(self) -> None:
        self.series_system = SeriesSystem()
        self.parallel_system = ParallelSystem()

    def reset(self) -> None:
        self.series_system.reset()
        self.parallel_system.reset()


class EnergyModel:
    """
    A single spring driven by displacement, used to show stored energy.

    Changing k holds the displacement, so the energy bar responds to
    stiffness directly (E = 1/2 k x^2).
    """

    def __init__(self) -> None:
        self.system = SingleSpringSystem(
            spring_constant=ENERGY_SPRING_CONSTANT,
            spring_constant_range=ENERGY_SPRING_CONSTANT_RANGE,
            applied_force_range=ENERGY_APPLIED_FORCE_RANGE,
            displacement_range=ENERGY_DISPLACEMENT_RANGE,
            holds=DISPLACEMENT,
            name="energy_spring",
        )

    @property
    def spring(self):
        return self.system.spring

    def reset(self) -> None:
        self.system.reset()
