# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

Provides headless viewport pairs and small GeoJSON datasets shared by the
test modules.
"""

from __future__ import annotations

import logging
import math

import pytest

from dualmap_lib.constants import EARTH_RADIUS_M
from dualmap_lib.dataset import GeoDataset
from dualmap_lib.interface import DualMapInterface
from dualmap_lib.sync import ViewportPair
from dualmap_lib.sync import ViewportSyncController
from dualmap_lib.viewport.memory import InMemoryViewport

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Geometry Helpers
# =============================================================================

#: Length of one degree of arc on the measurement sphere, in meters
METERS_PER_DEGREE = EARTH_RADIUS_M * math.pi / 180.0


def square_ring(lat: float, lng: float, side_m: float) -> list[tuple[float, float]]:
    """Return an open ``(lat, lng)`` ring of a square with its SW corner at
    ``(lat, lng)`` and sides of roughly ``side_m`` meters."""
    dlat = side_m / METERS_PER_DEGREE
    dlng = dlat / math.cos(math.radians(lat + dlat / 2))
    return [
        (lat, lng),
        (lat, lng + dlng),
        (lat + dlat, lng + dlng),
        (lat + dlat, lng),
    ]


def polygon_feature(
    min_lng: float, min_lat: float, max_lng: float, max_lat: float
) -> dict:
    return {
        "type": "Feature",
        "properties": {"name": "box"},
        "geometry": {
            "type": "Polygon",
            "coordinates": [
                [
                    [min_lng, min_lat],
                    [max_lng, min_lat],
                    [max_lng, max_lat],
                    [min_lng, max_lat],
                    [min_lng, min_lat],
                ]
            ],
        },
    }


# =============================================================================
# Dataset Fixtures
# =============================================================================


@pytest.fixture
def box_geojson() -> dict:
    """FeatureCollection with one polygon spanning a known bounding box."""
    return {
        "type": "FeatureCollection",
        "features": [polygon_feature(139.70, 35.60, 139.80, 35.70)],
    }


@pytest.fixture
def box_dataset(box_geojson) -> GeoDataset:
    return GeoDataset.from_mapping(box_geojson, name="box")


@pytest.fixture
def empty_dataset() -> GeoDataset:
    return GeoDataset.from_mapping({"type": "FeatureCollection", "features": []})


@pytest.fixture
def point_dataset() -> GeoDataset:
    return GeoDataset.from_mapping(
        {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {},
                    "geometry": {"type": "Point", "coordinates": [139.75, 35.65]},
                }
            ],
        }
    )


# =============================================================================
# Viewport Fixtures
# =============================================================================


@pytest.fixture
def primary() -> InMemoryViewport:
    return InMemoryViewport(name="primary")


@pytest.fixture
def secondary() -> InMemoryViewport:
    return InMemoryViewport(name="secondary", base_layer_id="Google Maps")


@pytest.fixture
def pair(primary, secondary) -> ViewportPair:
    return ViewportPair(primary=primary, secondary=secondary)


@pytest.fixture
def controller(pair) -> ViewportSyncController:
    controller = ViewportSyncController(pair)
    controller.bind()
    return controller


@pytest.fixture
def notifications() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def viewer(notifications) -> DualMapInterface:
    def notifier(message, level="info"):
        notifications.append((message, level))

    return DualMapInterface.create_headless(notifier=notifier)
