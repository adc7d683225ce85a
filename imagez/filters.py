"""
Image filters.

A filter is anything with an apply(image) -> image method. Two kinds are
provided:

- PillowFilter wraps one of Pillow's native ImageFilter operators
- ArrayFilter wraps a function over a float32 numpy array (H x W x C),
  used for the imagez library filters below (NumPy / SciPy based)

filter_image() accepts either kind, or a bare Pillow filter, and always
returns a new image.
"""

import numpy as np
from PIL import Image, ImageFilter
from scipy.ndimage import gaussian_filter

from .errors import InvalidParameterError


class Filter:
    """Base class for imagez filters."""
    
    def apply(self, image):
        """
        Apply the filter.
        
        Args:
            image: Source PIL image (not modified)
            
        Returns:
            New filtered image
        """
        raise NotImplementedError


class PillowFilter(Filter):
    """Adapter for a native Pillow ImageFilter (instance or class)."""
    
    def __init__(self, image_filter):
        self.image_filter = image_filter
    
    def apply(self, image):
        if image.mode not in ('L', 'RGB', 'RGBA'):
            image = image.convert('RGBA')
        return image.filter(self.image_filter)
    
    def __repr__(self):
        return f"PillowFilter({self.image_filter!r})"


class ArrayFilter(Filter):
    """
    Filter defined by a function on pixel values.
    
    The function receives the colour channels as float32 (H x W x C) in
    the range [0, 255] and returns an array of the same shape. Alpha is
    kept as it was.
    """
    
    def __init__(self, fn, name=None):
        """
        Initialize array filter.
        
        Args:
            fn: Callable mapping a float32 array to a new array
            name: Optional name used in repr
        """
        self.fn = fn
        self.name = name or getattr(fn, '__name__', 'array_filter')
    
    def apply(self, image):
        if image.mode not in ('L', 'RGB', 'RGBA'):
            image = image.convert('RGBA')
        
        arr = np.asarray(image, dtype=np.float32)
        if arr.ndim == 2:
            arr = arr[:, :, np.newaxis]
        
        alpha = None
        if image.mode == 'RGBA':
            alpha = arr[:, :, 3:4]
            arr = arr[:, :, :3]
        
        result = np.asarray(self.fn(arr), dtype=np.float32)
        if result.shape != arr.shape:
            raise ValueError(
                f"Filter {self.name} changed the pixel array shape from {arr.shape} to {result.shape}"
            )
        
        if alpha is not None:
            result = np.concatenate([result, alpha], axis=2)
        
        result = np.clip(np.rint(result), 0, 255).astype(np.uint8)
        if image.mode == 'L':
            result = result[:, :, 0]
        
        return Image.fromarray(result)
    
    def __repr__(self):
        return f"ArrayFilter({self.name})"


def _is_pillow_filter(obj):
    if isinstance(obj, ImageFilter.Filter):
        return True
    return isinstance(obj, type) and issubclass(obj, ImageFilter.Filter)


def to_filter(obj):
    """
    Coerce a filter-like value to an imagez Filter.
    
    Args:
        obj: A Filter, or a Pillow ImageFilter instance or class
        
    Returns:
        Filter instance
    """
    if isinstance(obj, Filter):
        return obj
    if _is_pillow_filter(obj):
        return PillowFilter(obj)
    raise InvalidParameterError(f"Not a valid image filter: {obj!r}")


def filter_image(image, image_filter):
    """
    Apply a filter to a source image.
    
    Args:
        image: Source image (not modified)
        image_filter: Filter, or a Pillow ImageFilter
        
    Returns:
        New filtered image
    """
    return to_filter(image_filter).apply(image)


# Library filters

def grayscale():
    """Luminance greyscale, keeping the image's channel layout."""
    weights = np.array([0.299, 0.587, 0.114], dtype=np.float32)
    
    def _grayscale(arr):
        if arr.shape[2] == 1:
            return arr
        lum = arr @ weights
        return np.repeat(lum[:, :, np.newaxis], arr.shape[2], axis=2)
    
    return ArrayFilter(_grayscale, 'grayscale')


def invert():
    """Negative image."""
    return ArrayFilter(lambda arr: 255.0 - arr, 'invert')


def brightness(factor):
    """Multiply all colour values by factor."""
    return ArrayFilter(lambda arr: arr * float(factor), f'brightness({factor})')


def contrast(factor):
    """Stretch colour values around mid-grey by factor."""
    return ArrayFilter(lambda arr: (arr - 128.0) * float(factor) + 128.0, f'contrast({factor})')


def blur(radius=2.0):
    """Gaussian blur with standard deviation radius (pixels)."""
    if radius < 0:
        raise InvalidParameterError(f"Blur radius must not be negative: {radius}")
    
    def _blur(arr):
        return gaussian_filter(arr, sigma=(radius, radius, 0), mode='nearest')
    
    return ArrayFilter(_blur, f'blur({radius})')


def sharpen(amount=1.0, radius=1.0):
    """Unsharp mask."""
    def _sharpen(arr):
        smoothed = gaussian_filter(arr, sigma=(radius, radius, 0), mode='nearest')
        return arr + float(amount) * (arr - smoothed)
    
    return ArrayFilter(_sharpen, f'sharpen({amount})')


def posterize(levels=4):
    """Reduce each channel to a fixed number of levels."""
    levels = int(levels)
    if levels < 2:
        raise InvalidParameterError(f"Posterize needs at least 2 levels: {levels}")
    
    step = 255.0 / (levels - 1)
    return ArrayFilter(lambda arr: np.round(arr / step) * step, f'posterize({levels})')


def noise(amount=0.1, seed=None):
    """Add Gaussian noise with standard deviation amount * 255."""
    rng = np.random.default_rng(seed)
    
    def _noise(arr):
        return arr + rng.normal(0.0, float(amount) * 255.0, size=arr.shape)
    
    return ArrayFilter(_noise, f'noise({amount})')


NAMED_FILTERS = {
    'grayscale': grayscale,
    'invert': invert,
    'blur': blur,
    'sharpen': sharpen,
    'posterize': posterize,
    'noise': noise,
    'edges': lambda: PillowFilter(ImageFilter.FIND_EDGES),
    'emboss': lambda: PillowFilter(ImageFilter.EMBOSS),
    'smooth': lambda: PillowFilter(ImageFilter.SMOOTH),
}
