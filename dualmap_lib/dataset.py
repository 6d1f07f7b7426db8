# -*- coding: utf-8 -*-
"""Loading and clearing the geometry dataset shown in both viewports.

The dataset is rendered identically into the read-only feature layer of
each viewport. While a dataset is loaded or cleared, synchronization is
suspended so the two explicit camera writes do not echo into each other,
and the previous ``syncing`` value is always restored, even on failure.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

import geojson
import orjson
from geojson import Feature
from geojson import FeatureCollection
from geojson.geometry import Geometry
from shapely.geometry import shape

from dualmap_lib.constants import DEFAULT_CENTER
from dualmap_lib.constants import DEFAULT_ZOOM
from dualmap_lib.errors import InvalidDatasetError
from dualmap_lib.errors import ViewportsNotInitializedError
from dualmap_lib.models import LatLng
from dualmap_lib.models import LatLngBounds
from dualmap_lib.models import ViewState

if TYPE_CHECKING:
    from dualmap_lib.sync import ViewportPair

logger = logging.getLogger(__name__)


def _to_geojson(data: Any) -> Any:
    """Convert a mapping to geojson objects, features included."""
    if isinstance(data, dict) and data.get("type") == "FeatureCollection":
        features = [
            geojson.GeoJSON.to_instance(item, strict=True)
            for item in data.get("features") or []
        ]
        for item in features:
            if not isinstance(item, Feature):
                raise ValueError(f"Not a GeoJSON Feature: {item!r}")
        extra = {k: v for k, v in data.items() if k not in ("type", "features")}
        return FeatureCollection(features, **extra)
    return geojson.GeoJSON.to_instance(data, strict=True)


class GeoDataset:
    """A GeoJSON feature collection ready to be rendered.

    Any GeoJSON object is accepted on input: a single Feature or a bare
    geometry is wrapped into a FeatureCollection.
    """

    def __init__(self, collection: FeatureCollection, name: str = "") -> None:
        self.collection = collection
        self.name = name

    @classmethod
    def from_mapping(cls, data: Any, name: str = "") -> GeoDataset:
        """Validate a GeoJSON mapping and normalize it to a collection.

        Raises:
            InvalidDatasetError: If ``data`` is not valid GeoJSON
        """
        try:
            obj = _to_geojson(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise InvalidDatasetError(f"Invalid GeoJSON: {e}") from e

        if isinstance(obj, FeatureCollection):
            collection = obj
        elif isinstance(obj, Feature):
            collection = FeatureCollection([obj])
        elif isinstance(obj, Geometry):
            collection = FeatureCollection([Feature(geometry=obj)])
        else:
            raise InvalidDatasetError(
                f"Unsupported GeoJSON object: `{type(obj).__name__}`"
            )

        if not collection.is_valid:
            raise InvalidDatasetError(f"Invalid GeoJSON: {collection.errors()}")

        return cls(collection, name=name)

    @classmethod
    def from_json(cls, content: str | bytes, name: str = "") -> GeoDataset:
        """Parse GeoJSON text.

        Raises:
            InvalidDatasetError: If the text is not JSON or not valid GeoJSON
        """
        try:
            data = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            raise InvalidDatasetError(f"Malformed JSON: {e}") from e
        return cls.from_mapping(data, name=name)

    @classmethod
    def coerce(cls, value: Any) -> GeoDataset:
        if isinstance(value, GeoDataset):
            return value
        if isinstance(value, (str, bytes)):
            return cls.from_json(value)
        return cls.from_mapping(value)

    @property
    def features(self) -> list[Feature]:
        return list(self.collection["features"])

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def bounds(self) -> LatLngBounds:
        """Return the bounds of every non-empty geometry.

        Features without geometry are ignored. An empty dataset has empty
        (invalid) bounds.
        """
        bounds = LatLngBounds()
        for feature in self.features:
            if not feature.get("geometry"):
                continue
            geom = shape(feature["geometry"])
            if geom.is_empty:
                continue
            bounds = bounds.union(LatLngBounds.from_bbox(*geom.bounds))
        return bounds

    def to_dict(self) -> dict[str, Any]:
        return orjson.loads(self.to_json())

    def to_json(self) -> bytes:
        return orjson.dumps(self.collection)

    def __len__(self) -> int:
        return len(self.collection["features"])

    def __repr__(self) -> str:
        return f"GeoDataset(name={self.name!r}, features={len(self)})"


class DataLoadCoordinator:
    """Replaces or clears the dataset of both viewports of a pair."""

    def __init__(
        self,
        pair: ViewportPair,
        default_view: ViewState | None = None,
    ) -> None:
        self.pair = pair
        self.default_view = default_view or ViewState(
            center=LatLng.from_value(DEFAULT_CENTER), zoom=DEFAULT_ZOOM
        )
        self._dataset: GeoDataset | None = None

    @property
    def dataset(self) -> GeoDataset | None:
        """The dataset currently rendered, ``None`` when cleared."""
        return self._dataset

    def _require_viewports(self) -> None:
        pair = self.pair
        if not pair.is_initialized:
            raise ViewportsNotInitializedError("Viewports are not initialized.")
        if pair.primary.feature_layer is None or pair.secondary.feature_layer is None:
            raise ViewportsNotInitializedError(
                "Feature layers are not initialized."
            )

    def load(self, dataset: GeoDataset) -> bool:
        """Render ``dataset`` in both viewports and fit both cameras on it.

        When the dataset bounds are invalid (empty dataset, single point)
        the cameras are left unchanged and the load still succeeds.

        Returns:
            True once the dataset is rendered

        Raises:
            ViewportsNotInitializedError: If a viewport or feature layer is
                missing; nothing is mutated in that case
        """
        self._require_viewports()
        primary = self.pair.primary
        secondary = self.pair.secondary

        with self.pair.sync_suspended():
            primary.feature_layer.clear_layers()
            secondary.feature_layer.clear_layers()
            self._dataset = None

            try:
                primary.feature_layer.add_layer(dataset)
                secondary.feature_layer.add_layer(dataset)
            except Exception:
                # Both layers stay empty rather than diverging.
                primary.feature_layer.clear_layers()
                secondary.feature_layer.clear_layers()
                raise
            self._dataset = dataset

            bounds = primary.feature_layer.get_bounds()
            if bounds.is_valid():
                primary.fit_bounds(bounds)
                secondary.fit_bounds(bounds)
            else:
                logger.warning(
                    "Dataset %r loaded, but bounds are not valid. Skipping fit.",
                    dataset,
                )

        logger.info("Loaded %r into both viewports", dataset)
        return True

    def clear(self) -> None:
        """Empty both feature layers and reset both cameras to the default view.

        Raises:
            ViewportsNotInitializedError: If a viewport or feature layer is
                missing
        """
        self._require_viewports()
        view = self.default_view

        with self.pair.sync_suspended():
            for viewport in (self.pair.primary, self.pair.secondary):
                viewport.feature_layer.clear_layers()
                viewport.set_view(view.center, view.zoom, animate=False)
            self._dataset = None

        logger.info("Dataset cleared")
