# -*- coding: utf-8 -*-
"""Dual Map Viewer Core.

A Python library keeping two map viewports synchronized, mapping map scales
to zoom levels, measuring user-drawn shapes and loading GeoJSON datasets
into both viewports at once.

Usage:
    from dualmap_lib import DualMapInterface

    viewer = DualMapInterface.create_headless()
    viewer.load_dataset(geojson_text)

    # Camera moves on one viewport are mirrored on the other
    viewer.pair.primary.set_view((35.68, 139.76), 15)
    assert viewer.pair.secondary.get_zoom() == 15

    # Measurements
    from dualmap_lib import geo_utils
    meters = geo_utils.distance([(35.0, 139.0), (35.01, 139.0)])
    print(geo_utils.format_distance(meters))
"""

__version__ = "0.1.0"

# Constants
from dualmap_lib.constants import DEFAULT_CENTER
from dualmap_lib.constants import DEFAULT_ZOOM
from dualmap_lib.constants import EARTH_RADIUS_M

# Enums
from dualmap_lib.enums import MeasurementKind
from dualmap_lib.enums import NotificationLevel
from dualmap_lib.enums import ShapeType
from dualmap_lib.enums import ViewportEvent
from dualmap_lib.enums import ViewportRole

# Errors
from dualmap_lib.errors import DualMapError
from dualmap_lib.errors import InvalidDatasetError
from dualmap_lib.errors import UnknownBaseLayerError
from dualmap_lib.errors import UnknownScaleError
from dualmap_lib.errors import ViewportsNotInitializedError

# Components
from dualmap_lib.annotations import AnnotationCoordinator
from dualmap_lib.annotations import AnnotationLayer
from dualmap_lib.annotations import ShapeMeasurement
from dualmap_lib.annotations import measure_shape
from dualmap_lib.dataset import DataLoadCoordinator
from dualmap_lib.dataset import GeoDataset
from dualmap_lib.interface import DualMapInterface
from dualmap_lib.interface import Notifier
from dualmap_lib.layers import BASE_LAYERS
from dualmap_lib.layers import BaseLayerConfig
from dualmap_lib.models import AnnotationShape
from dualmap_lib.models import LatLng
from dualmap_lib.models import LatLngBounds
from dualmap_lib.models import SyncState
from dualmap_lib.models import ViewerConfig
from dualmap_lib.models import ViewState
from dualmap_lib.scale import DEFAULT_SCALES
from dualmap_lib.scale import ScaleTable
from dualmap_lib.sync import ViewportPair
from dualmap_lib.sync import ViewportSyncController
from dualmap_lib.viewport import FeatureLayer
from dualmap_lib.viewport import InMemoryFeatureLayer
from dualmap_lib.viewport import InMemoryViewport
from dualmap_lib.viewport import MapViewport

__all__ = [
    "BASE_LAYERS",
    # Constants
    "DEFAULT_CENTER",
    "DEFAULT_SCALES",
    "DEFAULT_ZOOM",
    "EARTH_RADIUS_M",
    # Components
    "AnnotationCoordinator",
    "AnnotationLayer",
    # Models
    "AnnotationShape",
    "BaseLayerConfig",
    "DataLoadCoordinator",
    # Errors
    "DualMapError",
    "DualMapInterface",
    "FeatureLayer",
    "GeoDataset",
    "InMemoryFeatureLayer",
    "InMemoryViewport",
    "InvalidDatasetError",
    "LatLng",
    "LatLngBounds",
    "MapViewport",
    # Enums
    "MeasurementKind",
    "NotificationLevel",
    "Notifier",
    "ScaleTable",
    "ShapeMeasurement",
    "ShapeType",
    "SyncState",
    "UnknownBaseLayerError",
    "UnknownScaleError",
    "ViewState",
    "ViewerConfig",
    "ViewportEvent",
    "ViewportPair",
    "ViewportRole",
    "ViewportSyncController",
    "ViewportsNotInitializedError",
    "measure_shape",
]
