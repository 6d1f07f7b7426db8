# -*- coding: utf-8 -*-
"""Tests for errors module."""

import pytest

from dualmap_lib.errors import DualMapError
from dualmap_lib.errors import InvalidDatasetError
from dualmap_lib.errors import UnknownBaseLayerError
from dualmap_lib.errors import UnknownScaleError
from dualmap_lib.errors import ViewportsNotInitializedError


class TestHierarchy:
    """Every error derives from DualMapError."""

    @pytest.mark.parametrize(
        "error",
        [
            UnknownScaleError("1:7"),
            UnknownBaseLayerError("Bing"),
            ViewportsNotInitializedError(),
            InvalidDatasetError("bad"),
        ],
    )
    def test_base_class(self, error):
        assert isinstance(error, DualMapError)

    def test_lookup_errors_are_key_errors(self):
        """Unknown identifiers can be caught as KeyError."""
        with pytest.raises(KeyError):
            raise UnknownScaleError("1:7")
        with pytest.raises(KeyError):
            raise UnknownBaseLayerError("Bing")

    def test_invalid_dataset_is_value_error(self):
        with pytest.raises(ValueError, match="bad"):
            raise InvalidDatasetError("bad")


class TestMessages:
    """Tests for error messages."""

    def test_unknown_scale(self):
        error = UnknownScaleError("1:7")
        assert error.label == "1:7"
        assert str(error) == "Unknown map scale: `1:7`"

    def test_unknown_base_layer(self):
        error = UnknownBaseLayerError("Bing")
        assert error.layer_id == "Bing"
        assert str(error) == "Unknown base layer: `Bing`"

    def test_not_initialized_default(self):
        assert str(ViewportsNotInitializedError()) == "Viewports are not initialized."
