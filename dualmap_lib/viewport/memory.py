# -*- coding: utf-8 -*-
"""Headless, in-memory implementation of the viewport contract.

The camera behaves like a web map: zoom levels are clamped and snapped,
``set_view`` emits ``move`` (and ``zoomend`` when the zoom changed)
synchronously before returning, and ``fit_bounds`` picks the largest
snapped zoom at which the bounds fit the viewport's pixel size in
Web-Mercator.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import TYPE_CHECKING
from typing import Any

from pyproj import Transformer

from dualmap_lib.constants import DEFAULT_CENTER
from dualmap_lib.constants import DEFAULT_PRIMARY_BASE_LAYER
from dualmap_lib.constants import DEFAULT_VIEWPORT_SIZE
from dualmap_lib.constants import DEFAULT_ZOOM
from dualmap_lib.constants import EARTH_RADIUS_M
from dualmap_lib.constants import MAX_ZOOM
from dualmap_lib.constants import MIN_ZOOM
from dualmap_lib.constants import TILE_SIZE
from dualmap_lib.constants import ZOOM_SNAP
from dualmap_lib.enums import ViewportEvent
from dualmap_lib.layers import get_base_layer
from dualmap_lib.models import LatLng
from dualmap_lib.models import LatLngBounds
from dualmap_lib.viewport.base import FeatureLayer
from dualmap_lib.viewport.base import MapViewport

if TYPE_CHECKING:
    from dualmap_lib.dataset import GeoDataset
    from dualmap_lib.viewport.base import EventHandler

logger = logging.getLogger(__name__)

#: Web-Mercator cannot represent the poles
MERCATOR_MAX_LATITUDE: float = 85.0511287798

_TO_MERCATOR = Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)
_FROM_MERCATOR = Transformer.from_crs("EPSG:3857", "EPSG:4326", always_xy=True)

#: Width of the Web-Mercator world in meters
_WORLD_WIDTH_M = 2 * math.pi * EARTH_RADIUS_M


def _project(point: LatLng) -> tuple[float, float]:
    lat = max(-MERCATOR_MAX_LATITUDE, min(MERCATOR_MAX_LATITUDE, point.lat))
    return _TO_MERCATOR.transform(point.lng, lat)


def _unproject(x: float, y: float) -> LatLng:
    lng, lat = _FROM_MERCATOR.transform(x, y)
    return LatLng(lat=lat, lng=lng)


class InMemoryFeatureLayer(FeatureLayer):
    """Feature layer keeping rendered datasets in a list."""

    def __init__(self) -> None:
        self._datasets: list[GeoDataset] = []

    @property
    def datasets(self) -> list[GeoDataset]:
        return list(self._datasets)

    def clear_layers(self) -> None:
        self._datasets.clear()

    def add_layer(self, dataset: GeoDataset) -> None:
        self._datasets.append(dataset)

    def get_bounds(self) -> LatLngBounds:
        bounds = LatLngBounds()
        for dataset in self._datasets:
            bounds = bounds.union(dataset.bounds())
        return bounds

    def __len__(self) -> int:
        return len(self._datasets)


class InMemoryViewport(MapViewport):
    """Viewport holding its camera in memory.

    Attributes:
        size: Pixel size ``(width, height)`` used by :meth:`fit_bounds`
        set_view_calls: Number of camera writes received, for diagnostics
    """

    def __init__(
        self,
        center: Any = DEFAULT_CENTER,
        zoom: float = DEFAULT_ZOOM,
        *,
        name: str = "viewport",
        base_layer_id: str = DEFAULT_PRIMARY_BASE_LAYER,
        size: tuple[int, int] = DEFAULT_VIEWPORT_SIZE,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
        zoom_snap: float = ZOOM_SNAP,
        with_feature_layer: bool = True,
    ) -> None:
        self._name = name
        self.size = size
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.zoom_snap = zoom_snap
        self.set_view_calls = 0

        self._base_layer_id = get_base_layer(base_layer_id).name
        self._feature_layer = InMemoryFeatureLayer() if with_feature_layer else None
        self._listeners: dict[ViewportEvent, list[EventHandler]] = defaultdict(list)

        self._center = LatLng.from_value(center)
        self._zoom = self._limit_zoom(zoom)

    def __repr__(self) -> str:
        return f"InMemoryViewport(name={self._name!r}, center={self._center}, zoom={self._zoom})"  # noqa: E501

    # -------------------------------------------------------------------------
    # Layers
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def feature_layer(self) -> InMemoryFeatureLayer | None:
        return self._feature_layer

    @property
    def base_layer_id(self) -> str:
        return self._base_layer_id

    def set_base_layer(self, layer_id: str) -> None:
        self._base_layer_id = get_base_layer(layer_id).name

    # -------------------------------------------------------------------------
    # Camera
    # -------------------------------------------------------------------------

    def get_center(self) -> LatLng:
        return self._center

    def get_zoom(self) -> float:
        return self._zoom

    def _snap(self, zoom: float) -> float:
        if not self.zoom_snap:
            return zoom
        return round(round(zoom / self.zoom_snap) * self.zoom_snap, 10)

    def _limit_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, self._snap(zoom)))

    def set_view(self, center: Any, zoom: float, *, animate: bool = False) -> None:
        # Transitions are always instant in memory, ``animate`` is accepted
        # for interface compatibility.
        self.set_view_calls += 1
        new_zoom = self._limit_zoom(zoom)
        zoom_changed = new_zoom != self._zoom

        self._center = LatLng.from_value(center)
        self._zoom = new_zoom

        self._fire(ViewportEvent.MOVE)
        if zoom_changed:
            self._fire(ViewportEvent.ZOOMEND)

    def get_bounds_zoom(self, bounds: LatLngBounds) -> float:
        """Return the largest snapped zoom at which ``bounds`` fits."""
        sw_x, sw_y = _project(bounds.south_west)
        ne_x, ne_y = _project(bounds.north_east)

        width, height = self.size
        scales = []
        if (dx := abs(ne_x - sw_x)) > 0:
            scales.append(width * _WORLD_WIDTH_M / (dx * TILE_SIZE))
        if (dy := abs(ne_y - sw_y)) > 0:
            scales.append(height * _WORLD_WIDTH_M / (dy * TILE_SIZE))
        if not scales:
            return self.max_zoom

        zoom = math.log2(min(scales))
        if self.zoom_snap:
            # Round down so the bounds are never cropped.
            zoom = math.floor(zoom / self.zoom_snap + 1e-9) * self.zoom_snap
            zoom = round(zoom, 10)
        return max(self.min_zoom, min(self.max_zoom, zoom))

    def fit_bounds(self, bounds: LatLngBounds) -> None:
        if not bounds.is_valid():
            logger.warning("%s: ignoring fit_bounds on invalid bounds", self._name)
            return

        sw_x, sw_y = _project(bounds.south_west)
        ne_x, ne_y = _project(bounds.north_east)
        center = _unproject((sw_x + ne_x) / 2.0, (sw_y + ne_y) / 2.0)

        self.set_view(center, self.get_bounds_zoom(bounds), animate=False)

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def on(self, event: ViewportEvent, handler: EventHandler) -> None:
        event = ViewportEvent(event)
        if handler not in self._listeners[event]:
            self._listeners[event].append(handler)

    def off(self, event: ViewportEvent, handler: EventHandler) -> None:
        event = ViewportEvent(event)
        if handler in self._listeners[event]:
            self._listeners[event].remove(handler)

    def listener_count(self, event: ViewportEvent) -> int:
        return len(self._listeners[ViewportEvent(event)])

    def _fire(self, event: ViewportEvent) -> None:
        for handler in list(self._listeners[event]):
            handler(event, self)
