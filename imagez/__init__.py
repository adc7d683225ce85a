"""
Imagez: image loading, transformation and saving built on Pillow.

Main components:
- Loading from paths, URLs, bytes and package resources
- Resizing, scaling, rotation and flipping
- Bulk pixel access as packed ARGB integers
- Filters (Pillow ImageFilter operators or NumPy / SciPy filters)
- Gradient images from spectrum functions
- Saving with quality, progressive and JPEG subsampling options

Example usage:
    from imagez import load_image, resize, save, SUBSAMPLING_420

    image = load_image('photo.png')
    thumb = resize(image, 320)
    save(thumb, 'thumb.jpg', quality=0.9, subsampling=SUBSAMPLING_420)

The display window lives in imagez.viewer (requires tkinter).
"""

__version__ = '1.0.0'

from .errors import (
    ImagezError,
    UnsupportedFormatError,
    DecodeError,
    InvalidParameterError,
    SaveFailedError,
)
from .transform import new_image, resize, scale, scale_image, zoom, flip, rotate, sub_image
from .pixels import get_pixels, set_pixels
from .filters import filter_image
from .gradient import gradient_image
from .image_io import load_image, load_image_resource, load_images, save
from .jpeg_metadata import (
    SUBSAMPLING_444,
    SUBSAMPLING_422,
    SUBSAMPLING_420,
    SUBSAMPLING_411,
)

__all__ = [
    'ImagezError',
    'UnsupportedFormatError',
    'DecodeError',
    'InvalidParameterError',
    'SaveFailedError',
    'new_image',
    'resize',
    'scale',
    'scale_image',
    'zoom',
    'flip',
    'rotate',
    'sub_image',
    'get_pixels',
    'set_pixels',
    'filter_image',
    'gradient_image',
    'load_image',
    'load_image_resource',
    'load_images',
    'save',
    'SUBSAMPLING_444',
    'SUBSAMPLING_422',
    'SUBSAMPLING_420',
    'SUBSAMPLING_411',
]
