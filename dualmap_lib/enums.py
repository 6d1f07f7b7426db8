# -*- coding: utf-8 -*-
"""Enumerations for the dual map viewer core."""

from enum import Enum


class ViewportRole(str, Enum):
    """Position of a viewport inside a viewport pair.

    Attributes:
        PRIMARY: Left / first viewport
        SECONDARY: Right / second viewport
    """

    PRIMARY = "primary"
    SECONDARY = "secondary"

    @property
    def sibling(self) -> "ViewportRole":
        """Return the role of the other viewport of the pair."""
        if self is ViewportRole.PRIMARY:
            return ViewportRole.SECONDARY
        return ViewportRole.PRIMARY


class ViewportEvent(str, Enum):
    """Camera events emitted by a map viewport."""

    MOVE = "move"
    ZOOMEND = "zoomend"


class ShapeType(str, Enum):
    """Geometry kinds a user can draw as an annotation."""

    POINT = "Point"
    LINESTRING = "LineString"
    POLYGON = "Polygon"

    @property
    def is_measurable(self) -> bool:
        return self is not ShapeType.POINT

    @property
    def is_closed(self) -> bool:
        return self is ShapeType.POLYGON


class MeasurementKind(str, Enum):
    """Label headings used when formatting a measurement."""

    DISTANCE = "Distance"
    PERIMETER = "Perimeter"
    AREA = "Area"


class NotificationLevel(str, Enum):
    """Severity forwarded to the host's notification side channel."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
