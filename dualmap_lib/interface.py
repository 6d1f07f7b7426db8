# -*- coding: utf-8 -*-
"""Host-facing entry point of the dual map viewer core.

This module wires the components together:

1. A :class:`ViewportPair` shares one ``syncing`` flag between two viewports
2. A :class:`ViewportSyncController` mirrors camera moves between them
3. A :class:`DataLoadCoordinator` loads / clears the dataset in both
4. One :class:`AnnotationCoordinator` per viewport labels drawn shapes
5. A :class:`ScaleTable` maps scale labels to zoom levels

User-facing messages go to an injected :class:`Notifier`; the core holds no
global error or notification state.
"""

from __future__ import annotations

import logging
from typing import Any
from typing import Protocol

from dualmap_lib.annotations import AnnotationCoordinator
from dualmap_lib.annotations import LabelDisplay
from dualmap_lib.dataset import DataLoadCoordinator
from dualmap_lib.dataset import GeoDataset
from dualmap_lib.enums import NotificationLevel
from dualmap_lib.enums import ViewportRole
from dualmap_lib.errors import DualMapError
from dualmap_lib.errors import ViewportsNotInitializedError
from dualmap_lib.models import AnnotationShape
from dualmap_lib.models import LatLng
from dualmap_lib.models import SyncState
from dualmap_lib.models import ViewerConfig
from dualmap_lib.models import ViewState
from dualmap_lib.sync import ViewportPair
from dualmap_lib.sync import ViewportSyncController
from dualmap_lib.viewport.base import MapViewport
from dualmap_lib.viewport.memory import InMemoryViewport

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Protocol for user-facing notifications (toasts, status bar, ...)."""

    def __call__(
        self,
        message: str,
        level: NotificationLevel = NotificationLevel.INFO,
    ) -> None:
        """Report a message."""
        ...


def _silent(message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
    pass


class DualMapInterface:
    """Dual map viewer core exposed to the host application.

    Example:
        viewer = DualMapInterface.create_headless()

        viewer.load_dataset({"type": "FeatureCollection", "features": [...]})
        viewer.set_scale("1:25,000")
        viewer.toggle_sync()

        print(viewer.debug_info())
    """

    def __init__(
        self,
        primary: MapViewport | None = None,
        secondary: MapViewport | None = None,
        *,
        config: ViewerConfig | None = None,
        notifier: Notifier | None = None,
        label_display: LabelDisplay | None = None,
    ) -> None:
        self.config = config or ViewerConfig()
        self.scales = self.config.scale_table()
        self.notifier = notifier or _silent

        self.pair = ViewportPair(primary=primary, secondary=secondary)
        self.sync = ViewportSyncController(self.pair)
        self.data = DataLoadCoordinator(
            self.pair,
            default_view=ViewState(
                center=self.config.default_center, zoom=self.config.default_zoom
            ),
        )
        self.annotations: dict[ViewportRole, AnnotationCoordinator] = {
            role: AnnotationCoordinator(role, display=label_display)
            for role in ViewportRole
        }

        self.sync.bind()

    @classmethod
    def create_headless(
        cls,
        *,
        config: ViewerConfig | None = None,
        **kwargs: Any,
    ) -> DualMapInterface:
        """Build a viewer backed by two :class:`InMemoryViewport` objects."""
        config = config or ViewerConfig()
        primary = InMemoryViewport(
            config.default_center,
            config.default_zoom,
            name=ViewportRole.PRIMARY.value,
            base_layer_id=config.primary_base_layer,
        )
        secondary = InMemoryViewport(
            config.default_center,
            config.default_zoom,
            name=ViewportRole.SECONDARY.value,
            base_layer_id=config.secondary_base_layer,
        )
        return cls(primary, secondary, config=config, **kwargs)

    # -------------------------------------------------------------------------
    # Viewports
    # -------------------------------------------------------------------------

    def attach(self, primary: MapViewport, secondary: MapViewport) -> None:
        """Install viewports constructed after the interface."""
        self.sync.unbind()
        self.pair.primary = primary
        self.pair.secondary = secondary
        self.sync.bind()

    def close(self) -> None:
        self.sync.unbind()

    def viewport(self, role: ViewportRole) -> MapViewport:
        """Return the viewport for ``role``.

        Raises:
            ViewportsNotInitializedError: If it does not exist yet
        """
        if (viewport := self.pair.get(role)) is None:
            raise ViewportsNotInitializedError(
                f"The {ViewportRole(role).value} viewport is not initialized."
            )
        return viewport

    def set_base_layer(self, role: ViewportRole, layer_id: str) -> None:
        """Switch the imagery of one viewport; the other is unaffected."""
        self.viewport(role).set_base_layer(layer_id)
        logger.info("%s base layer set to %s", ViewportRole(role).value, layer_id)

    # -------------------------------------------------------------------------
    # Camera
    # -------------------------------------------------------------------------

    def toggle_sync(self) -> bool:
        syncing = self.sync.toggle_sync()
        self.notifier(
            "Sync enabled" if syncing else "Sync disabled", NotificationLevel.INFO
        )
        return syncing

    def set_zoom(self, zoom: float) -> None:
        """Apply ``zoom`` to both viewports at once.

        While syncing, the secondary also takes the primary's center so the
        pair converges. Otherwise each viewport keeps its own center.
        """
        if not self.pair.is_initialized:
            logger.warning("Ignoring set_zoom(%s): viewports not initialized", zoom)
            return
        primary = self.pair.primary
        secondary = self.pair.secondary
        with self.pair.sync_suspended() as was_syncing:
            primary.set_zoom(zoom)
            if was_syncing:
                secondary.set_view(
                    primary.get_center(), primary.get_zoom(), animate=False
                )
            else:
                secondary.set_zoom(zoom)

    def set_scale(self, label: str) -> float:
        """Zoom both viewports to the level of a scale label.

        Raises:
            UnknownScaleError: If the label is not part of the scale table
        """
        zoom = self.scales.zoom_for_scale(label)
        self.set_zoom(zoom)
        return zoom

    def current_scale_label(
        self, role: ViewportRole = ViewportRole.PRIMARY
    ) -> str | None:
        """Scale label closest to the live zoom of a viewport."""
        if (viewport := self.pair.get(role)) is None:
            return None
        return self.scales.label_for_zoom(viewport.get_zoom())

    def center_on_location(
        self, lat: float, lng: float, zoom: float | None = None
    ) -> LatLng:
        """Center both viewports on a resolved position (e.g. the user's)."""
        if not self.pair.is_initialized:
            raise ViewportsNotInitializedError()

        center = LatLng(lat=lat, lng=lng)
        zoom = self.config.locate_zoom if zoom is None else zoom
        with self.pair.sync_suspended():
            self.pair.primary.set_view(center, zoom, animate=False)
            self.pair.secondary.set_view(center, zoom, animate=False)
        return center

    def get_sync_state(self) -> SyncState:
        if (primary := self.pair.primary) is None:
            return SyncState(initialized=False, syncing=self.pair.syncing)
        return SyncState(
            initialized=True,
            syncing=self.pair.syncing,
            center=primary.get_center(),
            zoom=primary.get_zoom(),
        )

    def debug_info(self) -> dict[str, Any]:
        return self.get_sync_state().describe()

    # -------------------------------------------------------------------------
    # Dataset
    # -------------------------------------------------------------------------

    @property
    def dataset(self) -> GeoDataset | None:
        return self.data.dataset

    def load_dataset(self, dataset: Any) -> bool:
        """Load a dataset into both viewports.

        Args:
            dataset: A :class:`GeoDataset`, a GeoJSON mapping or GeoJSON text

        Returns:
            True on success, False if the dataset is invalid, the viewports
            are not ready, or loading failed
        """
        try:
            self.data.load(GeoDataset.coerce(dataset))
        except DualMapError as e:
            logger.warning("Failed to load dataset: %s", e)
            self.notifier(str(e), NotificationLevel.ERROR)
            return False
        except Exception:
            logger.exception("Failed to load dataset")
            self.notifier("Failed to load the dataset.", NotificationLevel.ERROR)
            return False

        self.notifier("Dataset loaded", NotificationLevel.SUCCESS)
        return True

    def clear_dataset(self) -> bool:
        try:
            self.data.clear()
        except DualMapError as e:
            logger.warning("Failed to clear dataset: %s", e)
            self.notifier(str(e), NotificationLevel.ERROR)
            return False
        except Exception:
            logger.exception("Failed to clear dataset")
            self.notifier("Failed to clear the dataset.", NotificationLevel.ERROR)
            return False

        self.notifier("Dataset cleared", NotificationLevel.INFO)
        return True

    # -------------------------------------------------------------------------
    # Annotations
    # -------------------------------------------------------------------------

    def on_shape_created(
        self, role: ViewportRole, shape: AnnotationShape | dict[str, Any]
    ) -> AnnotationShape:
        """Handle a draw event; ``shape`` may be a raw GeoJSON geometry."""
        if not isinstance(shape, AnnotationShape):
            shape = AnnotationShape.from_geometry(shape, viewport=role)
        return self.annotations[ViewportRole(role)].on_shape_created(shape)

    def on_shape_edited(
        self, role: ViewportRole, shape: AnnotationShape
    ) -> AnnotationShape:
        return self.annotations[ViewportRole(role)].on_shape_edited(shape)

    def on_shape_removed(
        self, role: ViewportRole, shape_id: str
    ) -> AnnotationShape | None:
        return self.annotations[ViewportRole(role)].on_shape_removed(shape_id)
