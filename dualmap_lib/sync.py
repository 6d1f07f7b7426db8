# -*- coding: utf-8 -*-
"""Camera synchronization between the two viewports of a pair.

Each viewport emits ``move`` / ``zoomend`` events, including for camera
changes the controller itself writes. The controller copies the source
camera onto the sibling behind a "propagation in progress" guard, so the
echo emitted by the sibling is ignored and every external event causes
exactly one corrective write.

Only camera state (center + zoom) is synchronized. Annotations, feature
layers and base imagery stay per-viewport.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dualmap_lib.enums import ViewportEvent
from dualmap_lib.enums import ViewportRole

if TYPE_CHECKING:
    from dualmap_lib.viewport.base import MapViewport

logger = logging.getLogger(__name__)

SYNC_EVENTS: tuple[ViewportEvent, ...] = (ViewportEvent.MOVE, ViewportEvent.ZOOMEND)


@dataclass
class ViewportPair:
    """Two viewports sharing one ``syncing`` flag.

    Either viewport may be ``None`` until the rendering component has
    constructed it.
    """

    primary: MapViewport | None = None
    secondary: MapViewport | None = None
    syncing: bool = True

    @property
    def is_initialized(self) -> bool:
        return self.primary is not None and self.secondary is not None

    def get(self, role: ViewportRole) -> MapViewport | None:
        if ViewportRole(role) is ViewportRole.PRIMARY:
            return self.primary
        return self.secondary

    def role_of(self, viewport: MapViewport) -> ViewportRole | None:
        if viewport is self.primary:
            return ViewportRole.PRIMARY
        if viewport is self.secondary:
            return ViewportRole.SECONDARY
        return None

    def sibling_of(self, viewport: MapViewport) -> MapViewport | None:
        if (role := self.role_of(viewport)) is None:
            return None
        return self.get(role.sibling)

    def viewports(self) -> list[MapViewport]:
        return [vp for vp in (self.primary, self.secondary) if vp is not None]

    @contextmanager
    def sync_suspended(self) -> Iterator[bool]:
        """Disable syncing for the block, restoring the previous value after.

        The previous value is restored even when the block raises.

        Yields:
            The ``syncing`` value in effect before the block
        """
        was_syncing = self.syncing
        self.syncing = False
        try:
            yield was_syncing
        finally:
            self.syncing = was_syncing


class ViewportSyncController:
    """Propagates camera changes from one viewport of a pair to the other."""

    def __init__(self, pair: ViewportPair) -> None:
        self.pair = pair
        self._target: MapViewport | None = None
        self._bound: list[MapViewport] = []

    @property
    def syncing(self) -> bool:
        return self.pair.syncing

    @property
    def is_propagating(self) -> bool:
        """True while a corrective write to a sibling is in progress."""
        return self._target is not None

    # -------------------------------------------------------------------------
    # Event wiring
    # -------------------------------------------------------------------------

    def bind(self) -> None:
        """Listen to camera events of both viewports. Idempotent."""
        for viewport in self.pair.viewports():
            if viewport in self._bound:
                continue
            for event in SYNC_EVENTS:
                viewport.on(event, self._handle_event)
            self._bound.append(viewport)

    def unbind(self) -> None:
        for viewport in self._bound:
            for event in SYNC_EVENTS:
                viewport.off(event, self._handle_event)
        self._bound.clear()

    def _handle_event(self, event: ViewportEvent, source: MapViewport) -> None:
        self.on_viewport_changed(source, self.pair.sibling_of(source))

    # -------------------------------------------------------------------------
    # Propagation
    # -------------------------------------------------------------------------

    def on_viewport_changed(
        self, source: MapViewport | None, sibling: MapViewport | None
    ) -> None:
        """Copy the camera of ``source`` onto ``sibling``.

        No-op when syncing is off, when either viewport does not exist yet,
        or when the call is the echo of a write made by this controller.
        Never raises.
        """
        if not self.pair.syncing or source is None or sibling is None:
            return

        if self._target is not None:
            return

        self._target = sibling
        try:
            center = source.get_center()
            zoom = source.get_zoom()
            logger.debug(
                "Sync %s -> %s: center=%s zoom=%s",
                source.name,
                sibling.name,
                center,
                zoom,
            )
            sibling.set_view(center, zoom, animate=False)
        except Exception:
            logger.exception("Failed to propagate camera from %s", source.name)
        finally:
            self._target = None

    def toggle_sync(self) -> bool:
        """Flip the ``syncing`` flag and return its new value.

        Cameras are left untouched; they converge on the next move.
        """
        self.pair.syncing = not self.pair.syncing
        logger.info("Viewport sync %s", "enabled" if self.pair.syncing else "disabled")
        return self.pair.syncing
