# -*- coding: utf-8 -*-
"""Tests for the host-facing DualMapInterface."""

import orjson
import pytest

from dualmap_lib.enums import NotificationLevel
from dualmap_lib.enums import ViewportRole
from dualmap_lib.errors import UnknownBaseLayerError
from dualmap_lib.errors import UnknownScaleError
from dualmap_lib.errors import ViewportsNotInitializedError
from dualmap_lib.interface import DualMapInterface
from dualmap_lib.models import LatLng
from dualmap_lib.models import ViewerConfig
from dualmap_lib.viewport.memory import InMemoryFeatureLayer
from dualmap_lib.viewport.memory import InMemoryViewport

from .test_dataset import BrokenLayerViewport


class FailingClearLayer(InMemoryFeatureLayer):
    """Feature layer whose renderer is gone."""

    def clear_layers(self):
        raise RuntimeError("renderer gone")


class TestConstruction:
    """Tests for building the interface."""

    def test_create_headless(self, viewer):
        assert viewer.pair.is_initialized
        assert viewer.pair.primary.base_layer_id == "GSI Seamless Photo"
        assert viewer.pair.secondary.base_layer_id == "Google Maps"
        assert viewer.get_sync_state().syncing is True

    def test_custom_config(self):
        config = ViewerConfig(default_center=(0.0, 0.0), default_zoom=5)
        viewer = DualMapInterface.create_headless(config=config)
        assert viewer.pair.secondary.get_center() == LatLng(lat=0.0, lng=0.0)
        assert viewer.pair.secondary.get_zoom() == 5

    def test_uninitialized(self):
        viewer = DualMapInterface()
        assert viewer.get_sync_state().initialized is False
        assert viewer.debug_info() == {"initialized": False}
        assert viewer.current_scale_label() is None
        viewer.set_zoom(12)
        with pytest.raises(ViewportsNotInitializedError):
            viewer.viewport(ViewportRole.PRIMARY)

    def test_attach_later(self, box_geojson):
        viewer = DualMapInterface()
        assert viewer.load_dataset(box_geojson) is False

        primary, secondary = InMemoryViewport(), InMemoryViewport()
        viewer.attach(primary, secondary)
        primary.set_view((1.0, 1.0), 9)
        assert secondary.get_zoom() == 9
        assert viewer.load_dataset(box_geojson) is True

    def test_close_stops_sync(self, viewer):
        viewer.close()
        viewer.pair.primary.set_view((1.0, 1.0), 9)
        assert viewer.pair.secondary.get_zoom() == 11


class TestCamera:
    """Tests for sync, zoom and scale control."""

    def test_user_move_is_mirrored(self, viewer):
        viewer.pair.secondary.set_view((34.69, 135.5), 16.3)
        state = viewer.get_sync_state()
        assert state.center == LatLng(lat=34.69, lng=135.5)
        assert state.zoom == pytest.approx(16.3)

    def test_toggle_sync(self, viewer, notifications):
        assert viewer.toggle_sync() is False
        assert viewer.toggle_sync() is True
        assert notifications == [
            ("Sync disabled", NotificationLevel.INFO),
            ("Sync enabled", NotificationLevel.INFO),
        ]

    def test_set_zoom_applies_to_both(self, viewer):
        viewer.set_zoom(17)
        assert viewer.pair.primary.get_zoom() == 17
        assert viewer.pair.secondary.get_zoom() == 17
        assert viewer.pair.syncing is True

    def test_set_zoom_while_not_syncing(self, viewer):
        viewer.toggle_sync()
        viewer.pair.primary.set_view((1.0, 1.0), 8)
        viewer.set_zoom(14)
        assert viewer.pair.primary.get_zoom() == 14
        assert viewer.pair.secondary.get_zoom() == 14
        assert viewer.pair.primary.get_center() == LatLng(lat=1.0, lng=1.0)
        assert viewer.pair.syncing is False

    @pytest.mark.parametrize(
        ("label", "zoom"), [("1:500", 19.5), ("1:2,000", 18.5), ("1:200,000", 12)]
    )
    def test_set_scale(self, viewer, label, zoom):
        assert viewer.set_scale(label) == zoom
        for role in ViewportRole:
            assert viewer.viewport(role).get_zoom() == pytest.approx(zoom)
            assert viewer.current_scale_label(role) == label

    def test_set_scale_converges_drifted_pair(self, viewer):
        """A scale change after re-enabling sync re-aligns both cameras."""
        viewer.toggle_sync()
        viewer.pair.primary.set_view((35.0, 139.0), 13)
        viewer.toggle_sync()

        viewer.set_scale("1:1,000")

        primary_view = viewer.pair.primary.get_view()
        assert primary_view.center == LatLng(lat=35.0, lng=139.0)
        assert primary_view.zoom == 19
        assert primary_view.is_close(viewer.pair.secondary.get_view())
        assert viewer.pair.syncing is True

    def test_unknown_scale(self, viewer):
        with pytest.raises(UnknownScaleError):
            viewer.set_scale("1:7")
        assert viewer.pair.primary.get_zoom() == 11
        assert viewer.pair.syncing is True

    def test_scale_label_follows_live_zoom(self, viewer):
        viewer.pair.primary.set_view(viewer.pair.primary.get_center(), 18.9)
        assert viewer.current_scale_label() == "1:1,000"
        viewer.pair.primary.set_view(viewer.pair.primary.get_center(), 14.2)
        assert viewer.current_scale_label(ViewportRole.SECONDARY) == "1:25,000"

    def test_center_on_location(self, viewer):
        center = viewer.center_on_location(43.06, 141.35)
        for role in ViewportRole:
            assert viewer.viewport(role).get_center() == center
            assert viewer.viewport(role).get_zoom() == 16

    def test_center_on_location_uninitialized(self):
        with pytest.raises(ViewportsNotInitializedError):
            DualMapInterface().center_on_location(0.0, 0.0)

    def test_debug_info(self, viewer):
        info = viewer.debug_info()
        assert info["initialized"] is True
        assert info["syncing"] is True
        assert info["center"] == "lat: 35.7036, lng: 139.7476"
        assert info["zoom"] == 11


class TestBaseLayer:
    """Tests for independent base imagery."""

    def test_switch_one_viewport(self, viewer):
        viewer.set_base_layer(ViewportRole.SECONDARY, "GSI Relief")
        assert viewer.pair.secondary.base_layer_id == "GSI Relief"
        assert viewer.pair.primary.base_layer_id == "GSI Seamless Photo"

    def test_unknown_layer(self, viewer):
        with pytest.raises(UnknownBaseLayerError):
            viewer.set_base_layer(ViewportRole.PRIMARY, "Bing")


class TestDataset:
    """Tests for loading and clearing datasets."""

    def test_load_mapping(self, viewer, box_geojson, notifications):
        assert viewer.load_dataset(box_geojson) is True
        assert len(viewer.dataset) == 1
        assert viewer.pair.primary.get_view().is_close(viewer.pair.secondary.get_view())
        assert notifications[-1] == ("Dataset loaded", NotificationLevel.SUCCESS)

    def test_load_text(self, viewer, box_geojson):
        assert viewer.load_dataset(orjson.dumps(box_geojson).decode()) is True
        assert viewer.pair.primary.get_zoom() == pytest.approx(12.7)

    def test_load_empty_collection(self, viewer):
        before = viewer.get_sync_state()
        assert viewer.load_dataset({"type": "FeatureCollection", "features": []})
        assert viewer.get_sync_state() == before

    def test_load_invalid(self, viewer, notifications):
        assert viewer.load_dataset("{broken") is False
        assert viewer.dataset is None
        assert notifications[-1][1] is NotificationLevel.ERROR

    def test_load_failure_restores_sync(self, box_geojson, notifications):
        viewer = DualMapInterface(
            InMemoryViewport(),
            BrokenLayerViewport(),
            notifier=lambda message, level: notifications.append((message, level)),
        )
        assert viewer.load_dataset(box_geojson) is False
        assert viewer.pair.syncing is True
        assert notifications == [
            ("Failed to load the dataset.", NotificationLevel.ERROR)
        ]

    def test_clear(self, viewer, box_geojson):
        viewer.load_dataset(box_geojson)
        assert viewer.clear_dataset() is True
        assert viewer.dataset is None
        assert viewer.pair.primary.get_zoom() == 11
        assert len(viewer.pair.secondary.feature_layer) == 0

    def test_clear_renderer_failure(self, notifications):
        secondary = InMemoryViewport()
        secondary._feature_layer = FailingClearLayer()
        viewer = DualMapInterface(
            InMemoryViewport(),
            secondary,
            notifier=lambda message, level: notifications.append((message, level)),
        )
        assert viewer.clear_dataset() is False
        assert viewer.pair.syncing is True
        assert notifications == [
            ("Failed to clear the dataset.", NotificationLevel.ERROR)
        ]

    def test_clear_uninitialized(self, notifications):
        viewer = DualMapInterface(
            notifier=lambda message, level: notifications.append((message, level))
        )
        assert viewer.clear_dataset() is False
        assert notifications[-1][1] is NotificationLevel.ERROR


class TestAnnotations:
    """Tests for annotation routing."""

    def test_shapes_are_not_mirrored(self, viewer):
        shape = viewer.on_shape_created(
            ViewportRole.PRIMARY,
            {"type": "LineString", "coordinates": [[0.0, 0.0], [1.0, 0.0]]},
        )
        assert shape.label.endswith("111.32 km")
        assert shape.id in viewer.annotations[ViewportRole.PRIMARY].layer
        assert len(viewer.annotations[ViewportRole.SECONDARY].layer) == 0

    def test_edit_and_remove(self, viewer):
        shape = viewer.on_shape_created(
            ViewportRole.SECONDARY,
            {"type": "Polygon", "coordinates": [[[0, 0], [0.01, 0], [0.01, 0.01], [0, 0]]]},  # noqa: E501
        )
        first_label = shape.label
        shape.vertices = [*shape.vertices[:2], LatLng(lat=0.02, lng=0.01)]
        viewer.on_shape_edited(ViewportRole.SECONDARY, shape)
        assert shape.label != first_label
        assert viewer.on_shape_removed(ViewportRole.SECONDARY, shape.id) is shape

    def test_camera_untouched_by_annotations(self, viewer):
        before = viewer.get_sync_state()
        viewer.on_shape_created(
            ViewportRole.PRIMARY, {"type": "Point", "coordinates": [139.0, 35.0]}
        )
        assert viewer.get_sync_state() == before
