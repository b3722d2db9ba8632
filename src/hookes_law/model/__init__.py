# MIT License (see LICENSE)
"""
Spring model: a single spring, spring systems and per-screen models.

This subpackage provides:
    - Spring: F = k x for one ideal spring.
    - SingleSpringSystem, SeriesSystem, ParallelSystem: spring systems with
      an equivalent spring.
    - IntroductionModel, SystemsModel, EnergyModel: models of the screens.

Typical usage:
    from hookes_law.model import SeriesSystem

    system = SeriesSystem()
    system.equivalent_spring.set_applied_force(50)
    system.top_spring.displacement   # 0.25
"""
from .spring import Spring, APPLIED_FORCE, SPRING_CONSTANT, DISPLACEMENT, QUANTITIES
from .systems import SpringSystem, SingleSpringSystem, SeriesSystem, ParallelSystem
from .screens import IntroductionModel, SystemsModel, EnergyModel

__all__ = [
    # Springs
    "Spring",
    "APPLIED_FORCE",
    "SPRING_CONSTANT",
    "DISPLACEMENT",
    "QUANTITIES",
    # Systems
    "SpringSystem",
    "SingleSpringSystem",
    "SeriesSystem",
    "ParallelSystem",
    # Screens
    "IntroductionModel",
    "SystemsModel",
    "EnergyModel",
]
