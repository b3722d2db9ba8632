# MIT License (see LICENSE)
"""
hookes_law - A reactive model of Hooke's law (F = k x) for teaching tools.

This package keeps applied force, spring constant and displacement
consistent for a single spring and for two springs in series or in
parallel. UI code reads observable values and range metadata, subscribes
to changes and writes back through the setters.

Main entry points:
    - Spring: One ideal spring with observable F, k, x, length, spring force.
    - SingleSpringSystem, SeriesSystem, ParallelSystem: Spring systems.
    - Range: Valid interval of a quantity.
    - ConfigurationError, RangeError: The two error kinds.

Submodules:
    - core: Observable/derived value cells and invariant checks.
    - model: Springs, systems and screen models.
    - io: JSON configuration files.
    - renderer: Optional visualization adapters.

Example:
    from hookes_law import Spring

    spring = Spring(spring_constant=200, applied_force_range=(-100, 100))
    spring.displacement_property.subscribe(lambda new, old: print(new))
    spring.set_applied_force(50)    # prints 0.25
"""
from .errors import HookesLawError, ConfigurationError, RangeError
from .types import Range
from .model import (
    Spring,
    SingleSpringSystem,
    SeriesSystem,
    ParallelSystem,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "Spring",
    "SingleSpringSystem",
    "SeriesSystem",
    "ParallelSystem",
    # Types
    "Range",
    # Errors
    "HookesLawError",
    "ConfigurationError",
    "RangeError",
]
