"""
Tests for imagez.colours.
"""

import pytest

from imagez.colours import argb, components, greyscale, heatmap, rgb, to_colour, wheel
from imagez.errors import InvalidParameterError


def test_packing():
    assert argb(0x80, 1, 2, 3) == 0x80010203
    assert rgb(255, 0, 0) == 0xFFFF0000
    assert rgb(1.0, 0.0, 0.5) == 0xFFFF0080
    assert components(0x80010203) == (0x80, 1, 2, 3)


def test_components_are_clamped():
    assert rgb(300, -5, 10) == 0xFFFF000A


def test_to_colour():
    assert to_colour(0x12345678) == 0x12345678
    assert to_colour((255, 255, 255)) == 0xFFFFFFFF
    assert to_colour((255, 0, 0, 0)) == 0x00FF0000

    with pytest.raises(InvalidParameterError):
        to_colour('red')


def test_spectrum_functions():
    assert greyscale(0) == 0xFF000000
    assert greyscale(1) == 0xFFFFFFFF
    assert heatmap(0.0) == 0xFF000000
    assert heatmap(1.0) == 0xFFFFFFFF
    assert wheel(0.0) == 0xFFFF0000
