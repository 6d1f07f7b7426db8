# -*- coding: utf-8 -*-
"""Map viewport abstraction consumed by the synchronization core.

Usage::

    from dualmap_lib.viewport import InMemoryViewport

    viewport = InMemoryViewport()
    viewport.on(ViewportEvent.MOVE, handler)
    viewport.set_view((35.68, 139.76), 15)

Available implementations:

- :class:`InMemoryViewport` -- headless viewport holding camera state in
  memory, emitting events synchronously

To plug in a real map widget, subclass :class:`MapViewport` and
:class:`FeatureLayer`.
"""

from dualmap_lib.viewport.base import EventHandler
from dualmap_lib.viewport.base import FeatureLayer
from dualmap_lib.viewport.base import MapViewport
from dualmap_lib.viewport.memory import InMemoryFeatureLayer
from dualmap_lib.viewport.memory import InMemoryViewport

__all__ = [
    "EventHandler",
    "FeatureLayer",
    "InMemoryFeatureLayer",
    "InMemoryViewport",
    "MapViewport",
]
