"""
Tests for imagez.filters.
"""

import numpy as np
import pytest
from PIL import Image, ImageFilter

from imagez.errors import InvalidParameterError
from imagez.filters import (
    ArrayFilter,
    PillowFilter,
    blur,
    brightness,
    contrast,
    filter_image,
    grayscale,
    invert,
    noise,
    posterize,
    to_filter,
)


def make_image(mode='RGB'):
    rng = np.random.default_rng(2)
    channels = 4 if mode == 'RGBA' else 3
    return Image.fromarray(rng.integers(0, 256, size=(8, 10, channels), dtype=np.uint8))


def test_invert():
    img = Image.new('RGB', (2, 2), (10, 20, 30))
    result = filter_image(img, invert())

    assert result.getpixel((0, 0)) == (245, 235, 225)
    assert img.getpixel((0, 0)) == (10, 20, 30)


def test_alpha_is_preserved():
    """Array filters only touch the colour channels."""
    img = Image.new('RGBA', (2, 2), (10, 20, 30, 77))
    result = filter_image(img, invert())

    assert result.mode == 'RGBA'
    assert result.getpixel((1, 1)) == (245, 235, 225, 77)


def test_grayscale_channels_equal():
    result = np.asarray(filter_image(make_image(), grayscale()))
    assert np.array_equal(result[:, :, 0], result[:, :, 1])
    assert np.array_equal(result[:, :, 1], result[:, :, 2])


def test_greyscale_mode_image():
    """Single channel images keep their mode."""
    img = Image.new('L', (3, 3), 100)
    result = filter_image(img, invert())
    assert result.mode == 'L'
    assert result.getpixel((0, 0)) == 155


def test_brightness_and_contrast():
    img = Image.new('RGB', (1, 1), (100, 128, 200))
    assert filter_image(img, brightness(2.0)).getpixel((0, 0)) == (200, 255, 255)
    assert filter_image(img, contrast(0.0)).getpixel((0, 0)) == (128, 128, 128)


def test_blur_uniform_image():
    """Blurring a flat colour changes nothing."""
    img = Image.new('RGB', (6, 6), (50, 100, 150))
    result = filter_image(img, blur(2.0))
    assert np.array_equal(np.asarray(result), np.asarray(img))


def test_blur_smooths_noise():
    img = make_image()
    result = filter_image(img, blur(1.5))
    assert np.asarray(result, dtype=np.float32).std() < np.asarray(img, dtype=np.float32).std()


def test_posterize():
    result = np.asarray(filter_image(make_image(), posterize(2)))
    assert set(np.unique(result)) <= {0, 255}

    with pytest.raises(InvalidParameterError):
        posterize(1)


def test_noise_with_seed_is_repeatable():
    img = make_image()
    first = filter_image(img, noise(0.2, seed=7))
    second = filter_image(img, noise(0.2, seed=7))
    assert np.array_equal(np.asarray(first), np.asarray(second))


def test_pillow_filters():
    """Pillow filter classes and instances are both accepted."""
    img = make_image('RGBA')

    by_class = filter_image(img, ImageFilter.BLUR)
    by_instance = filter_image(img, ImageFilter.GaussianBlur(2))

    assert by_class.size == img.size
    assert by_instance.size == img.size
    assert isinstance(to_filter(ImageFilter.BLUR), PillowFilter)


def test_to_filter_passes_filters_through():
    f = invert()
    assert to_filter(f) is f


def test_to_filter_rejects_other_values():
    with pytest.raises(InvalidParameterError):
        to_filter('blur')

    with pytest.raises(InvalidParameterError):
        filter_image(make_image(), 42)


def test_array_filter_must_keep_shape():
    bad = ArrayFilter(lambda arr: arr[:, :, :1], 'drop_channels')
    with pytest.raises(ValueError, match='drop_channels'):
        filter_image(make_image(), bad)
