# -*- coding: utf-8 -*-
"""Abstract contract of a map viewport and its feature layer.

A viewport is owned by the map-rendering component. The core only:

* reads the camera through :meth:`MapViewport.get_center` /
  :meth:`MapViewport.get_zoom`,
* writes it through :meth:`MapViewport.set_view` /
  :meth:`MapViewport.fit_bounds`,
* listens to ``move`` / ``zoomend`` camera events,
* fills the read-only :class:`FeatureLayer` with the loaded dataset.

To implement a new viewport:

1. Subclass ``MapViewport`` (and ``FeatureLayer``).
2. Implement the abstract methods.
3. Emit ``ViewportEvent.MOVE`` on every camera move and
   ``ViewportEvent.ZOOMEND`` once a zoom change settles, including
   changes made through ``set_view``.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from typing import TYPE_CHECKING
from typing import Any
from typing import Protocol

from dualmap_lib.models import ViewState

if TYPE_CHECKING:
    from dualmap_lib.dataset import GeoDataset
    from dualmap_lib.enums import ViewportEvent
    from dualmap_lib.models import LatLng
    from dualmap_lib.models import LatLngBounds


class EventHandler(Protocol):
    """Protocol for camera event listeners."""

    def __call__(self, event: ViewportEvent, source: MapViewport) -> None:
        """Handle a camera event emitted by ``source``."""
        ...


class FeatureLayer(ABC):
    """Read-only layer rendering the loaded geometry dataset."""

    @abstractmethod
    def clear_layers(self) -> None:
        """Remove every rendered dataset."""
        ...

    @abstractmethod
    def add_layer(self, dataset: GeoDataset) -> None:
        """Render ``dataset`` on top of the current content."""
        ...

    @abstractmethod
    def get_bounds(self) -> LatLngBounds:
        """Return the bounds of everything rendered.

        Returns an empty (invalid) bounds when nothing is rendered.
        """
        ...


class MapViewport(ABC):
    """One map camera shown to the user."""

    @property
    def name(self) -> str:
        """Human-readable name of the viewport (for logging)."""
        return self.__class__.__name__

    @property
    @abstractmethod
    def feature_layer(self) -> FeatureLayer | None:
        """Dataset layer of this viewport, ``None`` until initialized."""
        ...

    @property
    @abstractmethod
    def base_layer_id(self) -> str:
        """Identifier of the base imagery currently displayed."""
        ...

    @abstractmethod
    def set_base_layer(self, layer_id: str) -> None:
        """Switch the base imagery of this viewport only."""
        ...

    @abstractmethod
    def get_center(self) -> LatLng:
        ...

    @abstractmethod
    def get_zoom(self) -> float:
        ...

    @abstractmethod
    def set_view(self, center: Any, zoom: float, *, animate: bool = False) -> None:
        """Move the camera.

        Args:
            center: A :class:`LatLng` or ``(lat, lng)`` pair
            zoom: Target zoom level
            animate: Whether the renderer may animate the transition
        """
        ...

    @abstractmethod
    def fit_bounds(self, bounds: LatLngBounds) -> None:
        """Move the camera so that ``bounds`` fills the viewport."""
        ...

    @abstractmethod
    def on(self, event: ViewportEvent, handler: EventHandler) -> None:
        ...

    @abstractmethod
    def off(self, event: ViewportEvent, handler: EventHandler) -> None:
        ...

    def get_view(self) -> ViewState:
        return ViewState(center=self.get_center(), zoom=self.get_zoom())

    def set_zoom(self, zoom: float) -> None:
        """Change the zoom level, keeping the current center."""
        self.set_view(self.get_center(), zoom, animate=False)
