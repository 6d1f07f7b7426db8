# -*- coding: utf-8 -*-
"""Error classes for the dual map viewer core.

Configuration errors (unknown scale, unknown base layer, uninitialized
viewports) fail fast. Data errors are raised only while parsing a dataset;
empty or degenerate bounds are not errors.
"""


class DualMapError(Exception):
    """Base class for every error raised by dualmap_lib."""


class UnknownScaleError(DualMapError, KeyError):
    """Raised when a scale label is not part of the scale table."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(label)

    def __str__(self) -> str:
        return f"Unknown map scale: `{self.label}`"


class UnknownBaseLayerError(DualMapError, KeyError):
    """Raised when a base layer id is not part of the layer catalogue."""

    def __init__(self, layer_id: str):
        self.layer_id = layer_id
        super().__init__(layer_id)

    def __str__(self) -> str:
        return f"Unknown base layer: `{self.layer_id}`"


class ViewportsNotInitializedError(DualMapError):
    """Raised when a pair-level operation runs before both viewports exist."""

    def __init__(self, message: str = "Viewports are not initialized."):
        self.message = message
        super().__init__(message)


class InvalidDatasetError(DualMapError, ValueError):
    """Raised when a dataset is not valid GeoJSON."""
