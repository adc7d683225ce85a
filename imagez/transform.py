"""
Geometric transforms: creation, resizing, scaling, flipping, rotation
and cropping.

All functions return a new image and leave the source untouched, except
rotate by a multiple of 360 degrees which returns the source itself.
"""

import warnings

from PIL import Image

from .errors import InvalidParameterError


RESAMPLE = Image.LANCZOS

FLIP_DIRECTIONS = {
    'horizontal': Image.Transpose.FLIP_LEFT_RIGHT,
    'vertical': Image.Transpose.FLIP_TOP_BOTTOM,
}

# Pillow rotates counter-clockwise, imagez rotates clockwise
ROTATIONS = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def new_image(width, height, alpha=True):
    """
    Create a new blank image.

    Args:
        width: Width in pixels
        height: Height in pixels
        alpha: RGBA (fully transparent) if True, otherwise RGB (black)

    Returns:
        New PIL image
    """
    width, height = int(width), int(height)
    if width < 1 or height < 1:
        raise InvalidParameterError(f"Image size must be positive, got {width}x{height}")
    
    if alpha:
        return Image.new('RGBA', (width, height), (0, 0, 0, 0))
    return Image.new('RGB', (width, height), (0, 0, 0))


def resize(image, new_width, new_height=None):
    """
    Resize an image to an exact size.

    Args:
        image: Input image
        new_width: Target width
        new_height: Target height; if omitted the aspect ratio is kept

    Returns:
        Resized image
    """
    if new_height is None:
        width, height = image.size
        new_height = round(new_width * height / width)
    
    size = (int(round(new_width)), int(round(new_height)))
    if size[0] < 1 or size[1] < 1:
        raise InvalidParameterError(f"Resize target must be at least 1x1, got {size[0]}x{size[1]}")
    
    return image.resize(size, RESAMPLE)


def scale_image(image, new_width, new_height):
    """Deprecated: use resize instead."""
    warnings.warn("scale_image is deprecated, use resize", DeprecationWarning, stacklevel=2)
    return resize(image, new_width, new_height)


def scale(image, factor, height_factor=None):
    """
    Scale an image by a factor.

    Args:
        image: Input image
        factor: Width factor (also used for height if height_factor is omitted)
        height_factor: Optional separate height factor

    Returns:
        Scaled image
    """
    if height_factor is None:
        height_factor = factor
    
    width, height = image.size
    return resize(image, width * factor, height * height_factor)


def zoom(image, factor):
    """Zoom into an image by a given factor."""
    if factor <= 0:
        raise InvalidParameterError(f"Zoom factor must be positive: {factor}")
    return scale(image, factor)


def flip(image, direction):
    """
    Flip an image.

    Args:
        image: Input image
        direction: 'horizontal' or 'vertical'

    Returns:
        Flipped image
    """
    method = FLIP_DIRECTIONS.get(direction) if isinstance(direction, str) else None
    if method is None:
        raise InvalidParameterError(f"Flip direction not valid: {direction!r}")
    return image.transpose(method)


def rotate(image, degrees):
    """
    Rotate an image clockwise.

    Args:
        image: Input image
        degrees: Rotation in degrees, must be a multiple of 90

    Returns:
        Rotated image (the input itself for multiples of 360)
    """
    rot = degrees % 360
    if rot == 0:
        return image
    
    method = ROTATIONS.get(rot)
    if method is None:
        raise InvalidParameterError(
            f"Rotation amount not valid: {degrees}, supported values must be a multiple of 90"
        )
    return image.transpose(method)


def sub_image(image, x, y, w, h):
    """
    Get a rectangular region of an image.

    Args:
        image: Input image
        x, y: Top-left corner
        w, h: Size of the region

    Returns:
        Cropped copy of the region
    """
    x, y, w, h = int(x), int(y), int(w), int(h)
    width, height = image.size
    
    if x < 0 or y < 0 or w < 1 or h < 1 or x + w > width or y + h > height:
        raise InvalidParameterError(
            f"Region ({x}, {y}, {w}, {h}) is outside the {width}x{height} image"
        )
    
    return image.crop((x, y, x + w, y + h))
