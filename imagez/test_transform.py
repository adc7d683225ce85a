"""
Tests for imagez.transform.
"""

import numpy as np
import pytest
from PIL import Image

from imagez.errors import InvalidParameterError
from imagez.pixels import get_pixels
from imagez.transform import flip, new_image, resize, rotate, scale, scale_image, sub_image, zoom


def make_image(width=4, height=3):
    """Small RGBA image where every pixel is different."""
    rng = np.random.default_rng(0)
    arr = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return Image.fromarray(arr)


def test_new_image_modes():
    """new_image creates RGBA by default and RGB without alpha."""
    assert new_image(5, 4).mode == 'RGBA'
    assert new_image(5, 4).size == (5, 4)
    assert new_image(5, 4, alpha=False).mode == 'RGB'

    with pytest.raises(InvalidParameterError):
        new_image(0, 4)


def test_resize_keeps_aspect_ratio():
    """Only a width given: height follows the original aspect ratio."""
    img = make_image(40, 30)
    assert resize(img, 20).size == (20, 15)

    img = make_image(33, 17)
    assert resize(img, 10).size == (10, round(10 * 17 / 33))


def test_resize_exact():
    """Width and height given: exact target size."""
    assert resize(make_image(40, 30), 7, 9).size == (7, 9)

    with pytest.raises(InvalidParameterError):
        resize(make_image(40, 30), 0, 9)


def test_scale_and_zoom():
    """Scaling by one or two factors."""
    img = make_image(10, 6)
    assert scale(img, 2).size == (20, 12)
    assert scale(img, 2, 0.5).size == (20, 3)
    assert zoom(img, 0.5).size == (5, 3)

    with pytest.raises(InvalidParameterError):
        zoom(img, 0)


def test_scale_image_is_deprecated():
    """scale_image still works but warns."""
    with pytest.warns(DeprecationWarning):
        result = scale_image(make_image(10, 6), 5, 3)
    assert result.size == (5, 3)


def test_rotate_clockwise():
    """Rotating by 90 degrees moves the top-left pixel to the top-right."""
    img = Image.new('RGB', (3, 2), (0, 0, 0))
    img.putpixel((0, 0), (255, 0, 0))

    rotated = rotate(img, 90)
    assert rotated.size == (2, 3)
    assert rotated.getpixel((1, 0)) == (255, 0, 0)

    assert rotate(img, -90).getpixel((0, 2)) == (255, 0, 0)
    assert rotate(img, 180).getpixel((2, 1)) == (255, 0, 0)


def test_rotate_four_times_restores_pixels():
    """Four quarter turns give back the original pixel buffer."""
    img = make_image(5, 3)
    result = img
    for _ in range(4):
        result = rotate(result, 90)

    assert result.size == img.size
    assert np.array_equal(get_pixels(result), get_pixels(img))


def test_rotate_full_turn_returns_same_image():
    img = make_image()
    assert rotate(img, 0) is img
    assert rotate(img, 360) is img
    assert rotate(img, -720) is img


def test_rotate_rejects_other_angles():
    """Angles that are not a multiple of 90 are rejected, naming the value."""
    with pytest.raises(InvalidParameterError, match='45'):
        rotate(make_image(), 45)

    with pytest.raises(InvalidParameterError):
        rotate(make_image(), 90.5)


def test_flip():
    """Horizontal and vertical flips mirror the image."""
    img = Image.new('RGB', (3, 2), (0, 0, 0))
    img.putpixel((0, 0), (0, 255, 0))

    assert flip(img, 'horizontal').getpixel((2, 0)) == (0, 255, 0)
    assert flip(img, 'vertical').getpixel((0, 1)) == (0, 255, 0)

    with pytest.raises(InvalidParameterError, match='diagonal'):
        flip(img, 'diagonal')

    with pytest.raises(InvalidParameterError):
        flip(img, None)


def test_flip_leaves_source_untouched():
    img = make_image()
    before = get_pixels(img).copy()
    flip(img, 'horizontal')
    assert np.array_equal(get_pixels(img), before)


def test_sub_image():
    """Cropping a region and rejecting regions outside the image."""
    img = make_image(6, 5)
    region = sub_image(img, 1, 2, 3, 2)

    assert region.size == (3, 2)
    assert region.getpixel((0, 0)) == img.getpixel((1, 2))

    with pytest.raises(InvalidParameterError):
        sub_image(img, 4, 0, 3, 2)
