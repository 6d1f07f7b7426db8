# -*- coding: utf-8 -*-
"""Geodesic measurement of distances and areas.

All functions take ordered ``(lat, lng)`` sequences in decimal degrees and
model the Earth as a sphere of radius :data:`EARTH_RADIUS_M`. They are pure
and never raise on degenerate input: fewer than 2 points measure a distance
of 0, fewer than 3 points an area of 0.

The area formula is the spherical-excess approximation
``|R² / 2 · Σ (λ[i+1] − λ[i]) · (2 + sin φ[i] + sin φ[i+1])|`` summed
cyclically over the ring. It is accurate to a few percent for shapes up to
tens of kilometers across and is NOT valid for rings crossing the
antimeridian (the longitude jump at ±180° is not unwrapped).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from pyproj import Geod

from dualmap_lib.constants import AREA_HECTARE_THRESHOLD_M2
from dualmap_lib.constants import DISTANCE_KM_THRESHOLD_M
from dualmap_lib.constants import EARTH_RADIUS_M
from dualmap_lib.constants import MEASUREMENT_PRECISION

logger = logging.getLogger(__name__)

Coordinate = tuple[float, float]

#: Spherical earth used for great-circle distances
SPHERE = Geod(a=EARTH_RADIUS_M, b=EARTH_RADIUS_M)


def _is_finite(points: Sequence[Coordinate]) -> bool:
    return all(math.isfinite(lat) and math.isfinite(lng) for lat, lng in points)


def distance(points: Sequence[Coordinate], *, closed: bool = False) -> float:
    """Return the great-circle length of a path in meters.

    Args:
        points: Ordered ``(lat, lng)`` vertices
        closed: Also count the segment from the last vertex back to the first

    Returns:
        Total length in meters, ``0.0`` for fewer than 2 points
    """
    if len(points) < 2:
        return 0.0

    if not _is_finite(points):
        logger.warning("Skipping distance: non-finite coordinates in %s", points)
        return 0.0

    lats = [lat for lat, _ in points]
    lngs = [lng for _, lng in points]
    if closed:
        lats.append(lats[0])
        lngs.append(lngs[0])

    return float(SPHERE.line_length(lngs, lats))


def perimeter(ring: Sequence[Coordinate]) -> float:
    """Return the perimeter of a closed ring in meters."""
    return distance(ring, closed=True)


def area(ring: Sequence[Coordinate]) -> float:
    """Return the approximate area enclosed by a ring in square meters.

    The ring is assumed closed; it must not repeat its first vertex.
    """
    n = len(ring)
    if n < 3:
        return 0.0

    if not _is_finite(ring):
        logger.warning("Skipping area: non-finite coordinates in %s", ring)
        return 0.0

    total = 0.0
    for i in range(n):
        lat1, lng1 = ring[i]
        lat2, lng2 = ring[(i + 1) % n]
        total += math.radians(lng2 - lng1) * (
            2 + math.sin(math.radians(lat1)) + math.sin(math.radians(lat2))
        )

    return abs(total * EARTH_RADIUS_M * EARTH_RADIUS_M / 2.0)


def format_distance(meters: float) -> str:
    """Format a distance as meters below 1 km, kilometers otherwise."""
    if meters < DISTANCE_KM_THRESHOLD_M:
        return f"{meters:.{MEASUREMENT_PRECISION}f} m"
    return f"{meters / 1000:.{MEASUREMENT_PRECISION}f} km"


def format_area(square_meters: float) -> str:
    """Format an area as m² below one hectare, hectares otherwise."""
    if square_meters < AREA_HECTARE_THRESHOLD_M2:
        return f"{square_meters:.{MEASUREMENT_PRECISION}f} m²"
    return f"{square_meters / 10000:.{MEASUREMENT_PRECISION}f} ha"
