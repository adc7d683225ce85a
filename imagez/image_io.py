"""
Image I/O using Pillow.

Loading accepts paths, URLs, raw bytes, file objects and package
resources. Saving picks a writer from the file extension and applies
quality, progressive and JPEG subsampling options where the format
supports them.
"""

import io
import logging
import os
import urllib.request
from importlib import resources

from PIL import Image

from .errors import DecodeError, InvalidParameterError, SaveFailedError
from .jpeg_metadata import SUBSAMPLING_444, generate_metadata_with_subsampling, to_subsampling_code
from .writers import (
    MODE_DEFAULT,
    MODE_DISABLED,
    MODE_EXPLICIT,
    get_writer_by_extension,
)


logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 0.8
DEFAULT_SUBSAMPLING = SUBSAMPLING_444

URL_SCHEMES = ('http://', 'https://', 'file://', 'ftp://')


def _is_url(source):
    return isinstance(source, str) and source.lower().startswith(URL_SCHEMES)


def _read_url(url):
    with urllib.request.urlopen(url) as response:
        return response.read()


def load_image(source, mode=None):
    """
    Load an image.

    Args:
        source: File path (str or PathLike), URL string, bytes, binary
            file object, or an already loaded PIL image
        mode: Optional Pillow mode to convert to, e.g. 'RGBA'

    Returns:
        Decoded PIL image
    """
    if isinstance(source, Image.Image):
        image = source
    else:
        try:
            if isinstance(source, (bytes, bytearray)):
                fp = io.BytesIO(source)
            elif _is_url(source):
                fp = io.BytesIO(_read_url(source))
            elif hasattr(source, 'read'):
                fp = source
            else:
                fp = os.fspath(source)
        except TypeError as e:
            raise DecodeError(source, "unsupported source type") from e
        except (OSError, ValueError) as e:
            raise DecodeError(source, str(e)) from e

        try:
            image = Image.open(fp)
            # Force decoding now so broken files fail here, not on first use
            image.load()
        except (OSError, ValueError, SyntaxError) as e:
            raise DecodeError(source, str(e)) from e

    if mode is not None and image.mode != mode:
        image = image.convert(mode)

    return image


def load_image_resource(package, resource, mode=None):
    """
    Load an image shipped as package data.

    Args:
        package: Package name or module, e.g. 'mypackage.images'
        resource: Resource path relative to the package
        mode: Optional Pillow mode to convert to

    Returns:
        Decoded PIL image
    """
    try:
        data = resources.files(package).joinpath(resource).read_bytes()
    except (OSError, ModuleNotFoundError, TypeError) as e:
        raise DecodeError(f"{package}:{resource}", str(e)) from e

    return load_image(data, mode=mode)


def load_images(sources, mode=None):
    """
    Load multiple images.

    Args:
        sources: Iterable of anything load_image accepts

    Returns:
        List of PIL images
    """
    images = []

    for source in sources:
        img = load_image(source, mode=mode)
        images.append(img)

    return images


def apply_compression(write_param, quality, ext):
    """Set explicit compression on the write parameters, if the writer supports it."""
    if write_param.can_write_compressed:
        write_param.set_compression_mode(MODE_EXPLICIT)
        if ext == 'gif':
            write_param.set_compression_type('LZW')
        else:
            write_param.set_compression_quality(quality)
    return write_param


def apply_progressive(write_param, progressive):
    """
    Set progressive encoding, if the writer supports it.

    True turns progressive encoding on and False turns it off. None leaves
    the writer copying the setting from the image metadata.
    """
    if write_param.can_write_progressive and progressive is not None:
        write_param.set_progressive_mode(MODE_DEFAULT if progressive else MODE_DISABLED)
    return write_param


def save(image, path, quality=DEFAULT_QUALITY, progressive=None, subsampling=DEFAULT_SUBSAMPLING):
    """
    Write an image to disk.

    The format is chosen from the lower-cased file extension.

    Args:
        image: PIL image
        path: Destination path
        quality: 0.0 to 1.0, default 0.8 (ignored by formats without
            quality control; GIF always uses LZW)
        progressive: True / False to force progressive encoding on or off,
            None to keep the default taken from the image metadata
        subsampling: JPEG chroma subsampling code or name, default 4:4:4

    Returns:
        path, once the file has been written and closed

    Examples:
        save(image, 'out.jpg', quality=1.0)
        save(image, 'out.jpg', progressive=False)
        save(image, 'out.jpg', quality=0.7, progressive=True, subsampling=SUBSAMPLING_420)
    """
    filename = os.fspath(path)
    ext = os.path.splitext(filename)[1].lower().lstrip('.')
    writer = get_writer_by_extension(ext)

    if not 0.0 <= quality <= 1.0:
        raise InvalidParameterError(f"Quality must be between 0.0 and 1.0, got {quality}")
    subsampling = to_subsampling_code(subsampling)

    with writer:
        write_param = writer.default_write_param()
        apply_compression(write_param, quality, ext)
        apply_progressive(write_param, progressive)

        try:
            metadata = generate_metadata_with_subsampling(writer, subsampling, image)
            with open(filename, 'wb') as outstream:
                writer.set_output(outstream)
                writer.write(image, write_param, metadata)
        except (OSError, ValueError) as e:
            raise SaveFailedError(filename, str(e)) from e

    logger.debug("Saved %s image to %s", writer.format_name, filename)
    return path
