# MIT License (see LICENSE)
"""
Renderer adapters for spring system visualization.

This module provides an abstract base class for rendering and a few
concrete implementations. The model has no rendering dependency; these
adapters only read observable values.

SystemWatcher connects a system to a renderer: it subscribes to every
value in the system, marks itself dirty on change and redraws on flush(),
typically once per animation frame.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TextIO
import sys

import numpy as np

from ..constants import (
    APPLIED_FORCE_DECIMAL_PLACES,
    DISPLACEMENT_DECIMAL_PLACES,
    ENERGY_DECIMAL_PLACES,
    SPRING_CONSTANT_DECIMAL_PLACES,
    SPRING_FORCE_DECIMAL_PLACES,
)
from ..model.spring import Spring
from ..model.systems import SpringSystem

# Quantities recorded by BufferedRenderer, in column order
FIELDS = ("spring_constant", "applied_force", "displacement", "length", "spring_force", "potential_energy")


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses should implement the drawing methods to integrate with
    various graphics backends (matplotlib, Qt, web frontend, etc.).

    Usage:
        renderer = MyRenderer()
        renderer.begin_frame("series")
        for spring in system.all_springs():
            renderer.draw_spring(spring)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_system(system)
    """

    @abstractmethod
    def begin_frame(self, label: str) -> None:
        """
        Begin a new frame for rendering.

        Args:
            label: Name of the system being drawn.
        """
        ...

    @abstractmethod
    def draw_spring(self, spring: Spring) -> None:
        """
        Draw a single spring.

        Args:
            spring: The spring to draw.
        """
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """
        Finalize the current frame.

        Called after all springs have been drawn for this frame.
        """
        ...

    def render_system(self, system: SpringSystem) -> None:
        """
        Convenience method to render every spring of a system.

        Args:
            system: The system to render.
        """
        self.begin_frame(type(system).__name__)
        for spring in system.all_springs():
            self.draw_spring(spring)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text debug renderer for development and testing.

    Writes one line per spring, with values rounded the way numeric
    readouts display them.

    Output:
        === SeriesSystem ===
        [top] k=200 N/m F=50 N x=0.250 m length=1.000 m
        [bottom] k=200 N/m F=50 N x=0.250 m length=1.000 m
        [equivalent] k=100 N/m F=50 N x=0.500 m length=2.000 m
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = False):
        """
        Initialize the debug renderer.

        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, include spring force and potential energy.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, label: str) -> None:
        self.output.write(f"=== {label} ===\n")

    def draw_spring(self, spring: Spring) -> None:
        line = (
            f"[{spring.name}] "
            f"k={spring.spring_constant:.{SPRING_CONSTANT_DECIMAL_PLACES}f} N/m "
            f"F={spring.applied_force:.{APPLIED_FORCE_DECIMAL_PLACES}f} N "
            f"x={spring.displacement:.{DISPLACEMENT_DECIMAL_PLACES}f} m "
            f"length={spring.length:.{DISPLACEMENT_DECIMAL_PLACES}f} m"
        )
        if self.verbose:
            line += (
                f" spring_force={spring.spring_force:.{SPRING_FORCE_DECIMAL_PLACES}f} N"
                f" E={spring.potential_energy:.{ENERGY_DECIMAL_PLACES}f} J"
            )
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """
    No-op renderer that does nothing.

    Useful as a placeholder or for performance testing without rendering overhead.
    """

    def begin_frame(self, label: str) -> None:
        pass

    def draw_spring(self, spring: Spring) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that buffers frame data for later retrieval.

    Example:
        renderer = BufferedRenderer()
        for force in np.linspace(-100, 100, 21):
            system.set_applied_force(force)
            renderer.render_system(system)

        arrays = renderer.as_arrays()
        arrays["equivalent"]["displacement"]   # shape (21,)
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, label: str) -> None:
        self._current_frame = {"label": label, "springs": {}}

    def draw_spring(self, spring: Spring) -> None:
        if self._current_frame is None:
            return
        self._current_frame["springs"][spring.name] = {f: getattr(spring, f) for f in FIELDS}

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def as_arrays(self) -> dict[str, dict[str, np.ndarray]]:
        """
        Recorded values per spring name and field, one entry per frame.

        Springs missing from a frame contribute NaN for that frame.
        """
        names: list[str] = []
        for frame in self.frames:
            for name in frame["springs"]:
                if name not in names:
                    names.append(name)
        out: dict[str, dict[str, np.ndarray]] = {}
        for name in names:
            table = np.full((len(self.frames), len(FIELDS)), np.nan, dtype=np.float64)
            for i, frame in enumerate(self.frames):
                values = frame["springs"].get(name)
                if values is not None:
                    table[i] = [values[f] for f in FIELDS]
            out[name] = {f: table[:, j] for j, f in enumerate(FIELDS)}
        return out

    def clear(self) -> None:
        """Clear all buffered frames."""
        self.frames.clear()


class SystemWatcher:
    """
    Redraws a system through a renderer whenever one of its values changed.

    Usage:
        watcher = SystemWatcher(system, DebugRenderer())
        system.set_applied_force(50)
        watcher.flush()     # draws once
        watcher.flush()     # nothing changed, draws nothing
        watcher.dispose()
    """

    def __init__(self, system: SpringSystem, renderer: RendererAdapter):
        self.system = system
        self.renderer = renderer
        self.dirty = True
        self._cells = []
        for spring in system.all_springs():
            for cell in (
                spring.spring_constant_property,
                spring.applied_force_property,
                spring.displacement_property,
            ):
                cell.subscribe(self._on_change)
                self._cells.append(cell)

    def _on_change(self, new, old) -> None:
        self.dirty = True

    def flush(self) -> bool:
        """Render if anything changed since the last flush. Returns True if a frame was drawn."""
        if not self.dirty:
            return False
        self.renderer.render_system(self.system)
        self.dirty = False
        return True

    def dispose(self) -> None:
        """Unsubscribe from the system."""
        for cell in self._cells:
            cell.unsubscribe(self._on_change)
        self._cells.clear()
