"""
Bulk access to an image's pixels as packed ARGB integers.

Working on a flat numpy array is far faster than calling getpixel /
putpixel for every pixel.
"""

import numpy as np
from PIL import Image

from .errors import InvalidParameterError


SUPPORTED_MODES = ('RGB', 'RGBA')


def _check_mode(image):
    if image.mode not in SUPPORTED_MODES:
        raise InvalidParameterError(
            f"Pixel access needs an RGB or RGBA image, got mode {image.mode!r}"
        )


def get_pixels(image):
    """
    Get the pixels of an image as a flat array of packed ints.

    Args:
        image: PIL image in RGB or RGBA mode

    Returns:
        numpy uint32 array of length width * height, row-major,
        each element 0xAARRGGBB (alpha is 0 for RGB images)
    """
    _check_mode(image)
    arr = np.asarray(image, dtype=np.uint32)
    
    packed = (arr[:, :, 0] << 16) | (arr[:, :, 1] << 8) | arr[:, :, 2]
    if image.mode == 'RGBA':
        packed |= arr[:, :, 3] << 24
    
    return packed.reshape(-1)


def set_pixels(image, pixels):
    """
    Replace all pixels of an image in place.

    Args:
        image: PIL image in RGB or RGBA mode (modified)
        pixels: Sequence of width * height packed ints, as from get_pixels
    """
    _check_mode(image)
    width, height = image.size
    
    packed = (np.asarray(pixels, dtype=np.int64) & 0xFFFFFFFF).astype(np.uint32)
    if packed.size != width * height:
        raise InvalidParameterError(
            f"Expected {width * height} pixels for a {width}x{height} image, got {packed.size}"
        )
    packed = packed.reshape(height, width)
    
    channels = [(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF]
    if image.mode == 'RGBA':
        channels.append((packed >> 24) & 0xFF)
    arr = np.stack(channels, axis=2).astype(np.uint8)
    
    # paste writes into the existing image object
    image.paste(Image.fromarray(arr), (0, 0))
    return image
