# -*- coding: utf-8 -*-
"""Mapping between human-readable map scales and zoom levels.

Zoom levels are continuous (fractional zoom is allowed) while the scale
table is a small discrete set, so the label matching a live zoom level is
always recomputed by nearest match and never cached.

Usage::

    table = ScaleTable(DEFAULT_SCALES.items())
    table.zoom_for_scale("1:1,000")  # 19.0
    table.label_for_zoom(18.8)       # "1:1,000"
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator

from dualmap_lib.errors import UnknownScaleError

#: Scales offered by the viewer, in display order
DEFAULT_SCALES: dict[str, float] = {
    "1:500": 19.5,
    "1:1,000": 19.0,
    "1:2,000": 18.5,
    "1:3,000": 18.0,
    "1:25,000": 15.0,
    "1:200,000": 12.0,
}


class ScaleTable:
    """Immutable, ordered ``label -> zoom`` table."""

    __slots__ = ("_entries", "_index")

    def __init__(self, entries: Iterable[tuple[str, float]]) -> None:
        items = tuple((str(label), float(zoom)) for label, zoom in entries)
        if not items:
            raise ValueError("A scale table needs at least one entry.")

        index: dict[str, float] = {}
        for label, zoom in items:
            if label in index:
                raise ValueError(f"Duplicate scale label: `{label}`")
            index[label] = zoom

        self._entries = items
        self._index = index

    @classmethod
    def default(cls) -> ScaleTable:
        return cls(DEFAULT_SCALES.items())

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(label for label, _ in self._entries)

    @property
    def entries(self) -> tuple[tuple[str, float], ...]:
        return self._entries

    def zoom_for_scale(self, label: str) -> float:
        """Return the zoom level stored for ``label``.

        Raises:
            UnknownScaleError: If the label is not part of the table
        """
        try:
            return self._index[label]
        except KeyError:
            raise UnknownScaleError(label) from None

    def label_for_zoom(self, zoom: float) -> str:
        """Return the label whose zoom level is closest to ``zoom``.

        Ties are resolved in table order (first match wins).
        """
        best_label, best_zoom = self._entries[0]
        smallest_diff = abs(zoom - best_zoom)
        for label, stored_zoom in self._entries[1:]:
            diff = abs(zoom - stored_zoom)
            if diff < smallest_diff:
                smallest_diff = diff
                best_label = label
        return best_label

    def __contains__(self, label: object) -> bool:
        return label in self._index

    def __iter__(self) -> Iterator[tuple[str, float]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ScaleTable({list(self._entries)!r})"
