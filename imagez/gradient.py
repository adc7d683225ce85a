"""
Gradient images generated from spectrum functions.
"""

from PIL import ImageDraw

from .colours import to_colour, to_rgba_tuple
from .transform import new_image


DEFAULT_GRADIENT_SIZE = (200, 60)


def gradient_image(spectrum_fn, width=None, height=None):
    """
    Create an image filled with a horizontal gradient.
    
    Column i is filled with spectrum_fn(i / width), so the left edge is
    spectrum_fn(0) and the right edge approaches spectrum_fn(1).
    
    Args:
        spectrum_fn: Function of t in [0, 1] returning a colour (packed
            ARGB int or an RGB / RGBA tuple), e.g. imagez.colours.heatmap
        width: Image width (default 200)
        height: Image height (default 60)
        
    Returns:
        New RGBA image
    """
    default_width, default_height = DEFAULT_GRADIENT_SIZE
    width = int(width if width is not None else default_width)
    height = int(height if height is not None else default_height)
    
    image = new_image(width, height, alpha=True)
    draw = ImageDraw.Draw(image)
    
    for i in range(width):
        colour = to_colour(spectrum_fn(i / float(width)))
        draw.rectangle([i, 0, i, height - 1], fill=to_rgba_tuple(colour))
    
    return image
