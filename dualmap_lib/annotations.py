# -*- coding: utf-8 -*-
"""Per-viewport measurement annotations.

Each viewport owns one :class:`AnnotationCoordinator` wrapping an
:class:`AnnotationLayer`. Shapes drawn on one viewport are never copied
to the other one. Whenever a shape is created or edited its measurement is
recomputed and the formatted label is handed to a display callback (the
popup of the map widget, typically).

Label layout::

    Measurement:
    Perimeter: 400.00 m
    Area: 1.00 ha
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol

from dualmap_lib import geo_utils
from dualmap_lib.enums import MeasurementKind
from dualmap_lib.enums import ShapeType
from dualmap_lib.enums import ViewportRole
from dualmap_lib.models import AnnotationShape

logger = logging.getLogger(__name__)

LABEL_HEADER = "Measurement:"


class LabelDisplay(Protocol):
    """Protocol for showing a measurement label next to a shape."""

    def __call__(self, shape: AnnotationShape, label: str) -> None:
        ...


def _log_label(shape: AnnotationShape, label: str) -> None:
    logger.info("[%s] %s %s: %r", shape.viewport.value, shape.shape_type.value, shape.id, label)  # noqa: E501


@dataclass(frozen=True)
class ShapeMeasurement:
    """Measured length and area of a shape.

    Attributes:
        shape_type: LineString or Polygon
        length: Path length, or perimeter for polygons (meters)
        area: Enclosed area for polygons (square meters), else None
    """

    shape_type: ShapeType
    length: float
    area: float | None = None

    @property
    def length_kind(self) -> MeasurementKind:
        if self.shape_type.is_closed:
            return MeasurementKind.PERIMETER
        return MeasurementKind.DISTANCE

    def to_label(self) -> str:
        lines = [
            LABEL_HEADER,
            f"{self.length_kind.value}: {geo_utils.format_distance(self.length)}",
        ]
        if self.area is not None:
            lines.append(
                f"{MeasurementKind.AREA.value}: {geo_utils.format_area(self.area)}"
            )
        return "\n".join(lines)


def measure_shape(shape: AnnotationShape) -> ShapeMeasurement | None:
    """Measure a shape. Points (and failures) yield no measurement."""
    if not shape.shape_type.is_measurable:
        return None

    try:
        points = shape.points
        if shape.shape_type.is_closed:
            return ShapeMeasurement(
                shape_type=shape.shape_type,
                length=geo_utils.perimeter(points),
                area=geo_utils.area(points),
            )
        return ShapeMeasurement(
            shape_type=shape.shape_type,
            length=geo_utils.distance(points),
        )
    except Exception:
        logger.exception("Failed to measure shape %s", shape.id)
        return None


class AnnotationLayer:
    """Ordered collection of the shapes drawn on one viewport."""

    def __init__(self, role: ViewportRole) -> None:
        self.role = role
        self._shapes: dict[str, AnnotationShape] = {}

    def add(self, shape: AnnotationShape) -> None:
        self._shapes[shape.id] = shape

    def remove(self, shape_id: str) -> AnnotationShape | None:
        return self._shapes.pop(shape_id, None)

    def get(self, shape_id: str) -> AnnotationShape | None:
        return self._shapes.get(shape_id)

    def clear(self) -> None:
        self._shapes.clear()

    def __contains__(self, shape_id: object) -> bool:
        return shape_id in self._shapes

    def __iter__(self) -> Iterator[AnnotationShape]:
        return iter(list(self._shapes.values()))

    def __len__(self) -> int:
        return len(self._shapes)


class AnnotationCoordinator:
    """Keeps the measurement labels of one viewport's shapes current."""

    def __init__(
        self,
        role: ViewportRole,
        display: LabelDisplay | None = None,
    ) -> None:
        self.role = ViewportRole(role)
        self.layer = AnnotationLayer(self.role)
        self.display = display or _log_label

    def _label(self, shape: AnnotationShape) -> None:
        measurement = measure_shape(shape)
        if measurement is None:
            shape.label = None
            return

        shape.label = measurement.to_label()
        try:
            self.display(shape, shape.label)
        except Exception:
            logger.exception("Failed to display label of shape %s", shape.id)

    def on_shape_created(self, shape: AnnotationShape) -> AnnotationShape:
        """Adopt a freshly drawn shape and label it."""
        shape.viewport = self.role
        self.layer.add(shape)
        self._label(shape)
        return shape

    def on_shape_edited(self, shape: AnnotationShape) -> AnnotationShape:
        """Recompute the label of an edited shape."""
        if shape.id not in self.layer:
            logger.warning(
                "Edited shape %s is unknown to the %s layer, adopting it",
                shape.id,
                self.role.value,
            )
        shape.viewport = self.role
        self.layer.add(shape)
        self._label(shape)
        return shape

    def on_shape_removed(self, shape_id: str) -> AnnotationShape | None:
        return self.layer.remove(shape_id)
