# MIT License (see LICENSE)
"""
Rendering adapters for visualization.

This subpackage provides abstract and concrete renderer implementations:
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text/console output for debugging.
    - NullRenderer: No-op renderer for performance testing.
    - BufferedRenderer: Records frames for playback or plotting.
    - SystemWatcher: Redraws a system when its values change.

The model has no rendering dependency; these adapters are optional.

Typical usage:
    from hookes_law.renderer import DebugRenderer

    renderer = DebugRenderer()
    renderer.render_system(system)
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
    SystemWatcher,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
    "SystemWatcher",
]
