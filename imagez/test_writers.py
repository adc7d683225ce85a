"""
Tests for imagez.writers.
"""

import io

import pytest
from PIL import Image

from imagez.errors import InvalidParameterError, UnsupportedFormatError
from imagez.writers import (
    MODE_DEFAULT,
    MODE_DISABLED,
    MODE_EXPLICIT,
    GenericImageWriter,
    GifImageWriter,
    JpegImageWriter,
    PngImageWriter,
    WriteParam,
    get_writer_by_extension,
    get_writer_by_format,
)


def test_writer_lookup():
    assert isinstance(get_writer_by_extension('jpg'), JpegImageWriter)
    assert isinstance(get_writer_by_extension('.JPEG'), JpegImageWriter)
    assert isinstance(get_writer_by_extension('png'), PngImageWriter)
    assert isinstance(get_writer_by_extension('gif'), GifImageWriter)

    writer = get_writer_by_extension('bmp')
    assert isinstance(writer, GenericImageWriter)
    assert writer.format_name == 'BMP'

    assert isinstance(get_writer_by_format('jpeg'), JpegImageWriter)


def test_unknown_formats():
    with pytest.raises(UnsupportedFormatError, match='xyz'):
        get_writer_by_extension('xyz')

    # Pillow reads PSD but cannot write it
    with pytest.raises(UnsupportedFormatError):
        get_writer_by_extension('psd')

    with pytest.raises(UnsupportedFormatError):
        get_writer_by_format('NOPE')


def test_write_param_capabilities():
    param = WriteParam()
    with pytest.raises(InvalidParameterError):
        param.set_compression_mode(MODE_EXPLICIT)
    with pytest.raises(InvalidParameterError):
        param.set_progressive_mode(MODE_DEFAULT)

    param = JpegImageWriter().default_write_param()
    with pytest.raises(InvalidParameterError):
        param.set_compression_quality(-0.1)
    with pytest.raises(InvalidParameterError):
        param.set_compression_type('LZW')


def test_jpeg_save_options():
    writer = JpegImageWriter()
    param = writer.default_write_param()
    assert writer.save_options(param) == {}

    param.set_compression_mode(MODE_EXPLICIT)
    param.set_compression_quality(0.8)
    param.set_progressive_mode(MODE_DISABLED)
    assert writer.save_options(param) == {'quality': 80, 'progressive': False}


def test_png_compress_level():
    writer = PngImageWriter()
    param = writer.default_write_param()
    param.set_compression_mode(MODE_EXPLICIT)
    param.set_compression_quality(1.0)
    assert writer.save_options(param) == {'compress_level': 0}

    param.set_compression_quality(0.0)
    assert writer.save_options(param) == {'compress_level': 9}


def test_gif_interlace():
    writer = GifImageWriter()
    param = writer.default_write_param()
    assert writer.save_options(param) == {}

    param.set_progressive_mode(MODE_DEFAULT)
    assert writer.save_options(param) == {'interlace': True}


def test_jpeg_prepare_drops_alpha():
    writer = JpegImageWriter()
    assert writer.prepare(Image.new('RGBA', (2, 2))).mode == 'RGB'
    assert writer.prepare(Image.new('LA', (2, 2))).mode == 'L'

    rgb = Image.new('RGB', (2, 2))
    assert writer.prepare(rgb) is rgb


def test_writer_context_disposes():
    buffer = io.BytesIO()
    with PngImageWriter() as writer:
        writer.set_output(buffer)
        writer.write(Image.new('RGB', (2, 2)))

    assert writer.disposed
    assert buffer.getvalue().startswith(b'\x89PNG')

    with pytest.raises(ValueError):
        writer.write(Image.new('RGB', (2, 2)))


def test_write_without_output():
    with pytest.raises(ValueError):
        JpegImageWriter().write(Image.new('RGB', (2, 2)))
