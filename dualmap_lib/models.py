# -*- coding: utf-8 -*-
"""Core data models for the dual map viewer.

This module contains the Pydantic models shared by the synchronization,
annotation and dataset components.
"""

from __future__ import annotations

import math
import uuid
from typing import Annotated
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic_extra_types.coordinate import Latitude  # noqa: TC002
from pydantic_extra_types.coordinate import Longitude  # noqa: TC002

from dualmap_lib.constants import DEFAULT_CENTER
from dualmap_lib.constants import DEFAULT_PRIMARY_BASE_LAYER
from dualmap_lib.constants import DEFAULT_SECONDARY_BASE_LAYER
from dualmap_lib.constants import DEFAULT_ZOOM
from dualmap_lib.constants import FLOAT_TOLERANCE
from dualmap_lib.constants import GEOJSON_COORDINATE_PRECISION
from dualmap_lib.constants import LOCATE_ZOOM
from dualmap_lib.enums import ShapeType
from dualmap_lib.enums import ViewportRole
from dualmap_lib.errors import UnknownBaseLayerError
from dualmap_lib.layers import get_base_layer
from dualmap_lib.scale import DEFAULT_SCALES
from dualmap_lib.scale import ScaleTable


class LatLng(BaseModel):
    """A WGS84 geographic position.

    Attributes:
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees
    """

    model_config = ConfigDict(frozen=True)

    lat: Latitude
    lng: Longitude

    @classmethod
    def from_value(cls, value: Any) -> LatLng:
        """Build a LatLng from a LatLng, a mapping or a ``(lat, lng)`` pair."""
        if isinstance(value, LatLng):
            return value
        if isinstance(value, dict):
            return cls.model_validate(value)
        lat, lng = value
        return cls(lat=lat, lng=lng)

    def as_tuple(self) -> tuple[float, float]:
        """Return the position as ``(lat, lng)``."""
        return (float(self.lat), float(self.lng))

    def as_geojson(self) -> tuple[float, float]:
        """Return the position as an RFC 7946 ``(lng, lat)`` coordinate."""
        return (
            round(self.lng, GEOJSON_COORDINATE_PRECISION),
            round(self.lat, GEOJSON_COORDINATE_PRECISION),
        )

    def is_close(self, other: LatLng, tolerance: float = FLOAT_TOLERANCE) -> bool:
        return math.isclose(
            self.lat, other.lat, abs_tol=tolerance
        ) and math.isclose(self.lng, other.lng, abs_tol=tolerance)

    def __str__(self) -> str:
        return f"LatLng(lat={self.lat:.6f}, lng={self.lng:.6f})"


class LatLngBounds(BaseModel):
    """Rectangular geographic bounds.

    An empty bounds has no corners. Bounds are only *valid* when they have
    corners and a non-zero extent along at least one axis, so a bounds
    collapsed onto a single point is invalid.

    Attributes:
        south_west: Lower-left corner
        north_east: Upper-right corner
    """

    model_config = ConfigDict(frozen=True)

    south_west: LatLng | None = None
    north_east: LatLng | None = None

    @classmethod
    def from_points(cls, points: list[Any]) -> LatLngBounds:
        """Return the smallest bounds containing every ``(lat, lng)`` point."""
        bounds = cls()
        for point in points:
            bounds = bounds.extend(LatLng.from_value(point))
        return bounds

    @classmethod
    def from_bbox(
        cls, min_lng: float, min_lat: float, max_lng: float, max_lat: float
    ) -> LatLngBounds:
        """Build bounds from a GeoJSON / shapely style ``(minx, miny, maxx, maxy)``."""
        return cls(
            south_west=LatLng(lat=min_lat, lng=min_lng),
            north_east=LatLng(lat=max_lat, lng=max_lng),
        )

    @property
    def is_empty(self) -> bool:
        return self.south_west is None or self.north_east is None

    def extend(self, point: LatLng) -> LatLngBounds:
        """Return a new bounds grown to include ``point``."""
        if self.is_empty:
            return LatLngBounds(south_west=point, north_east=point)
        return LatLngBounds(
            south_west=LatLng(
                lat=min(self.south_west.lat, point.lat),
                lng=min(self.south_west.lng, point.lng),
            ),
            north_east=LatLng(
                lat=max(self.north_east.lat, point.lat),
                lng=max(self.north_east.lng, point.lng),
            ),
        )

    def union(self, other: LatLngBounds) -> LatLngBounds:
        if other.is_empty:
            return self
        return self.extend(other.south_west).extend(other.north_east)

    def is_valid(self) -> bool:
        if self.is_empty:
            return False
        return (self.north_east.lat - self.south_west.lat) > 0 or (
            self.north_east.lng - self.south_west.lng
        ) > 0

    @property
    def center(self) -> LatLng | None:
        if self.is_empty:
            return None
        return LatLng(
            lat=(self.south_west.lat + self.north_east.lat) / 2.0,
            lng=(self.south_west.lng + self.north_east.lng) / 2.0,
        )

    def contains(self, point: LatLng) -> bool:
        if self.is_empty:
            return False
        return (
            self.south_west.lat <= point.lat <= self.north_east.lat
            and self.south_west.lng <= point.lng <= self.north_east.lng
        )

    def overlaps(self, other: LatLngBounds) -> bool:
        if self.is_empty or other.is_empty:
            return False
        return (
            self.south_west.lat <= other.north_east.lat
            and other.south_west.lat <= self.north_east.lat
            and self.south_west.lng <= other.north_east.lng
            and other.south_west.lng <= self.north_east.lng
        )


class ViewState(BaseModel):
    """Camera state of a single viewport."""

    center: LatLng
    zoom: float

    def is_close(self, other: ViewState, tolerance: float = FLOAT_TOLERANCE) -> bool:
        return self.center.is_close(other.center, tolerance) and math.isclose(
            self.zoom, other.zoom, abs_tol=tolerance
        )


class SyncState(BaseModel):
    """Read-only snapshot of a viewport pair, for hosts and debugging.

    ``center`` and ``zoom`` are read from the primary viewport.
    """

    model_config = ConfigDict(frozen=True)

    initialized: bool
    syncing: bool
    center: LatLng | None = None
    zoom: float | None = None

    def describe(self) -> dict[str, Any]:
        """Return a flat, display-ready dictionary."""
        if not self.initialized:
            return {"initialized": False}
        return {
            "initialized": True,
            "syncing": self.syncing,
            "center": f"lat: {self.center.lat:.4f}, lng: {self.center.lng:.4f}",
            "zoom": self.zoom,
        }


class AnnotationShape(BaseModel):
    """A user-drawn measurement shape owned by one viewport.

    Attributes:
        id: Unique shape identifier
        shape_type: Point, LineString or Polygon
        vertices: Ordered vertices; polygon rings are stored open (the
            closing vertex is implied)
        viewport: Role of the viewport that owns the shape
        label: Formatted measurement text, ``None`` until measured
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    shape_type: ShapeType
    vertices: list[LatLng] = Field(default_factory=list)
    viewport: ViewportRole = ViewportRole.PRIMARY
    label: str | None = None

    @field_validator("vertices", mode="before")
    @classmethod
    def normalize_vertices(cls, value: Any) -> list[LatLng]:
        """Accept ``(lat, lng)`` pairs as well as LatLng objects / mappings."""
        return [LatLng.from_value(v) for v in value]

    @classmethod
    def from_geometry(
        cls,
        geometry: dict[str, Any],
        viewport: ViewportRole = ViewportRole.PRIMARY,
    ) -> AnnotationShape:
        """Build a shape from a GeoJSON geometry emitted by a draw tool.

        GeoJSON coordinates are ``(lng, lat)``. Only the exterior ring of a
        polygon is kept, and a repeated closing vertex is dropped.
        """
        shape_type = ShapeType(geometry["type"])
        coordinates = geometry["coordinates"]

        match shape_type:
            case ShapeType.POINT:
                coords = [coordinates]
            case ShapeType.LINESTRING:
                coords = list(coordinates)
            case ShapeType.POLYGON:
                coords = list(coordinates[0]) if coordinates else []
                if len(coords) > 1 and list(coords[0]) == list(coords[-1]):
                    coords = coords[:-1]

        return cls(
            shape_type=shape_type,
            vertices=[(c[1], c[0]) for c in coords],
            viewport=viewport,
        )

    @property
    def points(self) -> list[tuple[float, float]]:
        """Vertices as ``(lat, lng)`` tuples."""
        return [v.as_tuple() for v in self.vertices]


class ViewerConfig(BaseModel):
    """Configuration of a dual map viewer.

    Attributes:
        default_center: Center used at start-up and after clearing a dataset
        default_zoom: Zoom used at start-up and after clearing a dataset
        locate_zoom: Zoom applied when centering on the user's location
        scales: Ordered scale label -> zoom mapping
        primary_base_layer: Initial imagery of the primary viewport
        secondary_base_layer: Initial imagery of the secondary viewport
    """

    default_center: LatLng = Field(
        default_factory=lambda: LatLng.from_value(DEFAULT_CENTER)
    )
    default_zoom: Annotated[float, Field(default=DEFAULT_ZOOM, ge=0, le=24)]
    locate_zoom: Annotated[float, Field(default=LOCATE_ZOOM, ge=0, le=24)]
    scales: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_SCALES))
    primary_base_layer: str = DEFAULT_PRIMARY_BASE_LAYER
    secondary_base_layer: str = DEFAULT_SECONDARY_BASE_LAYER

    @field_validator("default_center", mode="before")
    @classmethod
    def normalize_center(cls, value: Any) -> LatLng:
        return LatLng.from_value(value)

    @field_validator("scales")
    @classmethod
    def validate_scales(cls, value: dict[str, float]) -> dict[str, float]:
        if not value:
            raise ValueError("At least one map scale must be configured.")
        return value

    @field_validator("primary_base_layer", "secondary_base_layer")
    @classmethod
    def validate_base_layer(cls, value: str) -> str:
        try:
            return get_base_layer(value).name
        except UnknownBaseLayerError as e:
            raise ValueError(str(e)) from e

    def scale_table(self) -> ScaleTable:
        return ScaleTable(self.scales.items())
