"""
Colour helpers for packed ARGB integers.

Colours are plain Python ints laid out as 0xAARRGGBB, the same layout
used by the pixel buffers in imagez.pixels. Spectrum functions map a
position t in [0, 1] to a colour and drive imagez.gradient.
"""

import colorsys

import numpy as np

from .errors import InvalidParameterError


def _component(value):
    """Convert a 0..255 int or a 0.0..1.0 float into a clamped 0..255 int."""
    if isinstance(value, (float, np.floating)):
        value = int(round(float(value) * 255.0))
    return max(0, min(255, int(value)))


def argb(a, r, g, b):
    """
    Pack alpha, red, green and blue into a single ARGB int.

    Args:
        a, r, g, b: Components as ints (0-255) or floats (0.0-1.0)

    Returns:
        Packed colour 0xAARRGGBB
    """
    return (_component(a) << 24) | (_component(r) << 16) | (_component(g) << 8) | _component(b)


def rgb(r, g, b):
    """Pack an opaque colour."""
    return argb(255, r, g, b)


def components(colour):
    """Split a packed colour into an (a, r, g, b) tuple of ints."""
    colour = int(colour) & 0xFFFFFFFF
    return (colour >> 24) & 0xFF, (colour >> 16) & 0xFF, (colour >> 8) & 0xFF, colour & 0xFF


def to_colour(value):
    """
    Coerce a colour-like value to a packed ARGB int.

    Accepts a packed int, an (r, g, b) tuple or an (r, g, b, a) tuple.
    """
    if isinstance(value, (int, np.integer)):
        return int(value) & 0xFFFFFFFF
    if isinstance(value, (tuple, list, np.ndarray)):
        if len(value) == 3:
            return rgb(*value)
        if len(value) == 4:
            r, g, b, a = value
            return argb(a, r, g, b)
    raise InvalidParameterError(f"Not a valid colour: {value!r}")


def to_rgba_tuple(colour):
    """Packed ARGB int to the (r, g, b, a) tuple Pillow expects."""
    a, r, g, b = components(colour)
    return r, g, b, a


# Spectrum functions

def greyscale(t):
    """Black at 0, white at 1."""
    t = min(1.0, max(0.0, float(t)))
    return rgb(t, t, t)


def heatmap(t):
    """Black through red and yellow to white."""
    t = min(1.0, max(0.0, float(t)))
    r = min(1.0, t * 3.0)
    g = min(1.0, max(0.0, t * 3.0 - 1.0))
    b = min(1.0, max(0.0, t * 3.0 - 2.0))
    return rgb(r, g, b)


def wheel(t):
    """Full saturation hue wheel, red at both ends."""
    r, g, b = colorsys.hsv_to_rgb(float(t) % 1.0, 1.0, 1.0)
    return rgb(r, g, b)
