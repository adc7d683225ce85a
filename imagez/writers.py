"""
Image writers on top of Pillow's encoder registry.

Each writer knows which options its format supports (compression,
progressive encoding, metadata) and translates a WriteParam into the
keyword arguments Pillow's Image.save() expects.
"""

import io
import logging
from collections import namedtuple

from PIL import Image

from .errors import InvalidParameterError, UnsupportedFormatError
from .jpeg_metadata import JpegMetadata


logger = logging.getLogger(__name__)

# Mode values for compression and progressive settings
MODE_DISABLED = 0
MODE_DEFAULT = 1
MODE_EXPLICIT = 2
MODE_COPY_FROM_METADATA = 3


class ImageType(namedtuple('ImageType', ['mode', 'bands'])):
    """Colour layout of an image, used to request default metadata."""

    @classmethod
    def from_image(cls, image):
        return cls(image.mode, image.getbands())


class WriteParam:
    """
    Encoding options for a single write.

    Capability flags are fixed by the writer; the settings start out at
    the writer's defaults and are changed through the setters.
    """

    def __init__(self, can_write_compressed=False, can_write_progressive=False,
                 compression_types=()):
        """
        Initialize write parameters.

        Args:
            can_write_compressed: Whether compression can be controlled
            can_write_progressive: Whether progressive / interlaced output is possible
            compression_types: Names of the supported compression types
        """
        self.can_write_compressed = can_write_compressed
        self.can_write_progressive = can_write_progressive
        self.compression_types = tuple(compression_types)

        self.compression_mode = MODE_COPY_FROM_METADATA
        self.compression_type = None
        self.compression_quality = None
        self.progressive_mode = MODE_COPY_FROM_METADATA

    def _require_compression(self):
        if not self.can_write_compressed:
            raise InvalidParameterError("Compression is not supported by this writer")

    def set_compression_mode(self, mode):
        self._require_compression()
        self.compression_mode = mode

    def set_compression_type(self, compression_type):
        self._require_compression()
        if compression_type not in self.compression_types:
            raise InvalidParameterError(
                f"Unsupported compression type {compression_type!r}, "
                f"expected one of {self.compression_types}"
            )
        self.compression_type = compression_type

    def set_compression_quality(self, quality):
        self._require_compression()
        if not 0.0 <= quality <= 1.0:
            raise InvalidParameterError(f"Compression quality must be between 0.0 and 1.0, got {quality}")
        self.compression_quality = float(quality)

    def set_progressive_mode(self, mode):
        if not self.can_write_progressive:
            raise InvalidParameterError("Progressive encoding is not supported by this writer")
        self.progressive_mode = mode

    @property
    def explicit_quality(self):
        """Quality to encode with, or None to keep the encoder default."""
        if self.compression_mode == MODE_EXPLICIT:
            return self.compression_quality
        return None

    def progressive(self, metadata=None):
        """
        Resolve the progressive setting to True / False / None (encoder default).
        """
        if self.progressive_mode == MODE_DEFAULT:
            return True
        if self.progressive_mode == MODE_DISABLED:
            return False
        if metadata is not None:
            return metadata.is_progressive()
        return None

    def __repr__(self):
        return (
            f"WriteParam(compression_mode={self.compression_mode}, "
            f"compression_type={self.compression_type!r}, "
            f"compression_quality={self.compression_quality}, "
            f"progressive_mode={self.progressive_mode})"
        )


class ImageWriter:
    """
    Base image writer for one Pillow format.

    Usable as a context manager; the writer is disposed on exit.
    """

    format_name = None

    def __init__(self, format_name=None):
        if format_name is not None:
            self.format_name = format_name
        self.output = None
        self.disposed = False

    def default_write_param(self):
        return WriteParam()

    def default_image_metadata(self, image_type):
        """Default metadata for an image of the given type, None if the format has none."""
        return None

    def prepare(self, image):
        """Convert an image to a mode this format can store."""
        return image

    def save_options(self, param, metadata=None):
        return {}

    def set_output(self, output):
        self.output = output

    def write(self, image, param=None, metadata=None):
        """
        Encode an image to the current output.

        Args:
            image: PIL image
            param: WriteParam (defaults to default_write_param())
            metadata: Optional metadata from default_image_metadata()
        """
        if self.disposed:
            raise ValueError(f"{type(self).__name__} has been disposed")
        if self.output is None:
            raise ValueError("No output set for image writer")
        if param is None:
            param = self.default_write_param()

        options = self.save_options(param, metadata)
        logger.debug("Writing %s image with options %s", self.format_name, options)
        self.prepare(image).save(self.output, format=self.format_name, **options)

    def dispose(self):
        self.output = None
        self.disposed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.dispose()
        return False

    def __repr__(self):
        return f"{type(self).__name__}({self.format_name!r})"


class GenericImageWriter(ImageWriter):
    """Writer for formats without configurable options (BMP, TIFF, ...)."""


class JpegImageWriter(ImageWriter):
    """JPEG writer: quality, progressive encoding and subsampling metadata."""

    format_name = 'JPEG'

    WRITABLE_MODES = ('L', 'RGB', 'CMYK')

    def default_write_param(self):
        return WriteParam(
            can_write_compressed=True,
            can_write_progressive=True,
            compression_types=('JPEG',),
        )

    def prepare(self, image):
        if image.mode in self.WRITABLE_MODES:
            return image
        if image.mode in ('LA', 'I', 'I;16', 'F', '1'):
            return image.convert('L')
        # JPEG has no alpha channel; it is dropped
        return image.convert('RGB')

    def default_image_metadata(self, image_type):
        """
        Metadata of the stream the encoder writes by default for this image type.
        """
        buffer = io.BytesIO()
        Image.new(image_type.mode, (8, 8)).save(buffer, format=self.format_name)
        return JpegMetadata.from_bytes(buffer.getvalue())

    def save_options(self, param, metadata=None):
        options = {}

        quality = param.explicit_quality
        if quality is not None:
            options['quality'] = int(round(quality * 100))

        progressive = param.progressive(metadata)
        if progressive is not None:
            options['progressive'] = progressive

        if metadata is not None:
            options.update(metadata.to_save_options())

        return options


class PngImageWriter(ImageWriter):
    """PNG writer: quality controls the deflate level (lossless either way)."""

    format_name = 'PNG'

    def default_write_param(self):
        return WriteParam(can_write_compressed=True, compression_types=('Deflate',))

    def save_options(self, param, metadata=None):
        quality = param.explicit_quality
        if quality is None:
            return {}
        # Higher quality means less compression effort
        return {'compress_level': int(round((1.0 - quality) * 9))}


class GifImageWriter(ImageWriter):
    """GIF writer: LZW compression, interlacing as progressive mode."""

    format_name = 'GIF'

    def default_write_param(self):
        return WriteParam(
            can_write_compressed=True,
            can_write_progressive=True,
            compression_types=('LZW',),
        )

    def save_options(self, param, metadata=None):
        progressive = param.progressive(metadata)
        if progressive is None:
            return {}
        return {'interlace': progressive}


class WebpImageWriter(ImageWriter):
    """WebP writer: lossy quality or lossless."""

    format_name = 'WEBP'

    def default_write_param(self):
        return WriteParam(can_write_compressed=True, compression_types=('Lossy', 'Lossless'))

    def save_options(self, param, metadata=None):
        options = {}
        if param.compression_type == 'Lossless':
            options['lossless'] = True
        quality = param.explicit_quality
        if quality is not None:
            options['quality'] = int(round(quality * 100))
        return options


WRITER_CLASSES = {
    cls.format_name: cls
    for cls in (JpegImageWriter, PngImageWriter, GifImageWriter, WebpImageWriter)
}


def get_writer_by_format(format_name):
    """
    Create a writer for a Pillow format name.

    Args:
        format_name: Pillow format, e.g. 'JPEG' or 'PNG'

    Returns:
        New ImageWriter
    """
    format_name = format_name.upper()
    Image.init()

    if format_name not in Image.SAVE:
        raise UnsupportedFormatError(format_name)

    writer_cls = WRITER_CLASSES.get(format_name)
    if writer_cls is None:
        return GenericImageWriter(format_name)
    return writer_cls()


def get_writer_by_extension(extension):
    """
    Create a writer for a file extension.

    Args:
        extension: Extension with or without the leading dot, any case

    Returns:
        New ImageWriter
    """
    ext = '.' + extension.lower().lstrip('.')
    format_name = Image.registered_extensions().get(ext)

    if format_name is None or format_name not in Image.SAVE:
        raise UnsupportedFormatError(extension)

    logger.debug("Using %s writer for extension %s", format_name, ext)
    return get_writer_by_format(format_name)
