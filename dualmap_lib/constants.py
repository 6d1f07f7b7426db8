# -*- coding: utf-8 -*-
"""Constants used throughout the dualmap_lib library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers scattered across the codebase.
"""

# -----------------------------------------------------------------------------
# Earth Model
# -----------------------------------------------------------------------------

#: Spherical Earth radius in meters (WGS84 semi-major axis)
EARTH_RADIUS_M: float = 6_378_137.0

# -----------------------------------------------------------------------------
# Measurement Formatting
# -----------------------------------------------------------------------------

#: Distances at or above this value (meters) are reported in kilometers
DISTANCE_KM_THRESHOLD_M: float = 1_000.0

#: Areas at or above this value (square meters) are reported in hectares
AREA_HECTARE_THRESHOLD_M2: float = 10_000.0

#: Number of decimals used when formatting measurements
MEASUREMENT_PRECISION: int = 2

# -----------------------------------------------------------------------------
# Camera Defaults
# -----------------------------------------------------------------------------

#: Default center (lat, lng) used at start-up and when a dataset is cleared
DEFAULT_CENTER: tuple[float, float] = (35.703640, 139.747635)

#: Default zoom level used at start-up and when a dataset is cleared
DEFAULT_ZOOM: float = 11.0

#: Zoom level applied when centering on a resolved user location
LOCATE_ZOOM: float = 16.0

#: Zoom levels are snapped to multiples of this value
ZOOM_SNAP: float = 0.1

MIN_ZOOM: float = 0.0
MAX_ZOOM: float = 21.0

#: Web-Mercator tile edge length in pixels
TILE_SIZE: int = 256

#: Default pixel size (width, height) of a headless viewport
DEFAULT_VIEWPORT_SIZE: tuple[int, int] = (800, 600)

# -----------------------------------------------------------------------------
# Numeric Tolerances
# -----------------------------------------------------------------------------

#: Tolerance used when comparing camera centers / zoom levels
FLOAT_TOLERANCE: float = 1e-9

#: Decimal precision for GeoJSON coordinates (WGS84)
GEOJSON_COORDINATE_PRECISION: int = 7

# -----------------------------------------------------------------------------
# Base Layers
# -----------------------------------------------------------------------------

DEFAULT_PRIMARY_BASE_LAYER: str = "GSI Seamless Photo"
DEFAULT_SECONDARY_BASE_LAYER: str = "Google Maps"
