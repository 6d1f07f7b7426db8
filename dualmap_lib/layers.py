# -*- coding: utf-8 -*-
"""Catalogue of base imagery layers selectable per viewport.

Tile URLs follow the usual ``{z}/{x}/{y}`` template convention; fetching and
rendering tiles is left to the map-rendering component.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from dualmap_lib.errors import UnknownBaseLayerError

GSI_ATTRIBUTION = (
    "<a href='https://maps.gsi.go.jp/development/ichiran.html' "
    "target='_blank'>GSI Tiles</a>"
)


class BaseLayerConfig(BaseModel):
    """Tile source of a base imagery layer."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    attribution: str
    max_zoom: Annotated[int, Field(default=21, ge=0, le=24)]
    max_native_zoom: Annotated[int, Field(default=18, ge=0, le=24)]


def _gsi(name: str, layer: str, ext: str) -> BaseLayerConfig:
    return BaseLayerConfig(
        name=name,
        url=f"https://cyberjapandata.gsi.go.jp/xyz/{layer}/{{z}}/{{x}}/{{y}}.{ext}",
        attribution=GSI_ATTRIBUTION,
    )


BASE_LAYERS: dict[str, BaseLayerConfig] = {
    layer.name: layer
    for layer in (
        _gsi("GSI Standard", "std", "png"),
        _gsi("GSI Seamless Photo", "seamlessphoto", "jpg"),
        _gsi("GSI Pale", "pale", "png"),
        _gsi("GSI Relief", "relief", "png"),
        _gsi("GSI Land Use", "lcm25k_2012", "png"),
        _gsi("GSI 1987-1990", "gazo4", "jpg"),
        _gsi("GSI 1984-1986", "gazo3", "jpg"),
        _gsi("GSI 1979-1983", "gazo2", "jpg"),
        _gsi("GSI 1974-1978", "gazo1", "jpg"),
        _gsi("GSI 1961-1969", "ort_old10", "png"),
        _gsi("GSI 1945-1950", "ort_USA10", "png"),
        _gsi("GSI 1936-1942", "ort_riku10", "png"),
        _gsi("GSI 1928 (Osaka)", "ort_1928", "png"),
        BaseLayerConfig(
            name="CartoDB Positron",
            url="https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}{r}.png",
            attribution='&copy; <a href="https://carto.com/">CARTO</a>',
        ),
        BaseLayerConfig(
            name="OpenStreetMap",
            url="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
            attribution=(
                '&copy; <a href="https://www.openstreetmap.org/copyright">'
                "OpenStreetMap</a>"
            ),
        ),
        BaseLayerConfig(
            name="Google Maps",
            url="https://mt1.google.com/vt/lyrs=m&x={x}&y={y}&z={z}",
            attribution='&copy; <a href="https://www.google.com/">Google</a>',
        ),
    )
}


def get_base_layer(layer_id: str) -> BaseLayerConfig:
    """Return the catalogue entry for ``layer_id``.

    Raises:
        UnknownBaseLayerError: If the layer is not in the catalogue
    """
    try:
        return BASE_LAYERS[layer_id]
    except KeyError:
        raise UnknownBaseLayerError(layer_id) from None
