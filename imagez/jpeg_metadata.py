"""
JPEG image metadata and chroma subsampling control.

The JPEG writer describes its output as a metadata tree built from the
header of the stream it would produce, as read by Pillow's JPEG plugin:

    jpeg
    ├── JPEGvariety
    │   └── app0JFIF
    └── markerSequence
        ├── app14Adobe / dqt
        ├── sof
        │   ├── componentSpec (componentId, HsamplingFactor, VsamplingFactor, QtableSelector)
        │   └── ...
        └── com

Forcing a subsampling mode means finding the SOF marker of a YCbCr image
(three components) and rewriting the sampling factors of its first
(luma) component. The patched tree is then turned back into encoder
options by JpegMetadata.to_save_options().
"""

import copy
import io
import logging
import xml.etree.ElementTree as ET

from PIL import Image

from .errors import DecodeError, InvalidParameterError


logger = logging.getLogger(__name__)

NATIVE_FORMAT_NAME = 'imagez_jpeg_image_1.0'

# Subsampling codes: horizontal factor in the high nibble, vertical in the low nibble
SUBSAMPLING_444 = 0x11
SUBSAMPLING_422 = 0x21
SUBSAMPLING_420 = 0x22
SUBSAMPLING_411 = 0x41

SUBSAMPLING_NAMES = {
    '4:4:4': SUBSAMPLING_444,
    '4:2:2': SUBSAMPLING_422,
    '4:2:0': SUBSAMPLING_420,
    '4:1:1': SUBSAMPLING_411,
}

# Luma sampling factors -> Pillow 'subsampling' option
PILLOW_SUBSAMPLING = {
    (1, 1): 0,
    (2, 1): 1,
    (2, 2): 2,
}

# Pillow cannot encode 4:1:1; it maps '4:1:1' to 4:2:0 itself
PILLOW_FALLBACKS = {
    (4, 1): 2,
}

# Metadata tree construction

def _attrs(**values):
    return {key: str(value) for key, value in values.items()}


def _open_jpeg(data):
    try:
        im = Image.open(io.BytesIO(data), formats=['JPEG'])
    except (OSError, SyntaxError, ValueError) as e:
        raise DecodeError('<jpeg stream>', str(e)) from e
    if not getattr(im, 'layer', None):
        raise DecodeError('<jpeg stream>', "no frame header found")
    return im


def parse_markers(data):
    """
    Build a metadata tree from the header of a JPEG stream.

    The header is read by Pillow's JPEG plugin; entropy-coded data is not
    decoded.

    Args:
        data: JPEG bytes

    Returns:
        Root Element of the native metadata tree
    """
    im = _open_jpeg(data)
    info = im.info

    root = ET.Element('jpeg')
    variety = ET.SubElement(root, 'JPEGvariety')
    sequence = ET.SubElement(root, 'markerSequence')

    if 'jfif' in info:
        major, minor = info.get('jfif_version', (1, 1))
        xdensity, ydensity = info.get('jfif_density', (1, 1))
        ET.SubElement(variety, 'app0JFIF', _attrs(
            majorVersion=major, minorVersion=minor, resUnits=info.get('jfif_unit', 0),
            Xdensity=xdensity, Ydensity=ydensity,
        ))

    if 'adobe' in info:
        ET.SubElement(sequence, 'app14Adobe', _attrs(
            version=info['adobe'], transform=info.get('adobe_transform', 0),
        ))

    quantization = getattr(im, 'quantization', None) or {}
    if quantization:
        dqt = ET.SubElement(sequence, 'dqt')
        for table_id, table in sorted(quantization.items()):
            precision = 1 if getattr(table, 'typecode', 'B') == 'H' else 0
            ET.SubElement(dqt, 'dqtable', _attrs(elementPrecision=precision, qtableId=table_id))

    width, height = im.size
    sof = ET.SubElement(sequence, 'sof', _attrs(
        process=2 if info.get('progressive') else 0,
        samplePrecision=getattr(im, 'bits', 8),
        numLines=height, samplesPerLine=width, numFrameComponents=len(im.layer),
    ))
    for component_id, horizontal, vertical, qtable in im.layer:
        ET.SubElement(sof, 'componentSpec', _attrs(
            componentId=component_id if isinstance(component_id, int) else ord(component_id),
            HsamplingFactor=horizontal,
            VsamplingFactor=vertical,
            QtableSelector=qtable,
        ))

    if 'comment' in info:
        comment = info['comment']
        if isinstance(comment, bytes):
            comment = comment.decode('latin-1')
        ET.SubElement(sequence, 'com', {'comment': comment})

    return root


# Typed view over tree nodes

class MarkerNode:
    """
    Narrow accessor over one node of a metadata tree.

    The subsampling logic only ever needs a node's name, its children and
    its attributes, so it is written against this interface rather than
    against the tree implementation.
    """

    @property
    def name(self):
        raise NotImplementedError

    @property
    def child_count(self):
        raise NotImplementedError

    def children(self):
        raise NotImplementedError

    def first_child(self):
        children = self.children()
        return children[0] if children else None

    def get_attribute(self, name):
        raise NotImplementedError

    def set_attribute(self, name, value):
        raise NotImplementedError


class ElementMarkerNode(MarkerNode):
    """MarkerNode backed by an xml.etree.ElementTree Element."""

    def __init__(self, element):
        self.element = element

    @property
    def name(self):
        return self.element.tag

    @property
    def child_count(self):
        return len(self.element)

    def children(self):
        return [ElementMarkerNode(child) for child in self.element]

    def get_attribute(self, name):
        return self.element.get(name)

    def set_attribute(self, name, value):
        self.element.set(name, str(value))

    def __repr__(self):
        return f"ElementMarkerNode({self.name!r}, children={self.child_count})"


class JpegMetadata:
    """
    Metadata for one JPEG image, held as a native-format tree.

    Trees handed out by as_tree() are copies; changes only take effect
    once written back with set_from_tree().
    """

    def __init__(self, root):
        self._root = root

    @classmethod
    def from_bytes(cls, data):
        """Build metadata from an encoded JPEG stream."""
        return cls(parse_markers(data))

    def _check_format(self, format_name):
        if format_name != NATIVE_FORMAT_NAME:
            raise InvalidParameterError(f"Unsupported metadata format: {format_name!r}")

    def as_tree(self, format_name=NATIVE_FORMAT_NAME):
        self._check_format(format_name)
        return copy.deepcopy(self._root)

    def set_from_tree(self, format_name, root):
        self._check_format(format_name)
        if root.tag != 'jpeg':
            raise InvalidParameterError(f"Root node must be 'jpeg', got {root.tag!r}")
        self._root = copy.deepcopy(root)

    def _sof(self):
        return self._root.find('markerSequence/sof')

    def component_sampling(self):
        """
        Sampling factors of the frame components.

        Returns:
            List of (horizontal, vertical) int tuples, one per component
        """
        sof = self._sof()
        if sof is None:
            return []
        return [
            (int(spec.get('HsamplingFactor')), int(spec.get('VsamplingFactor')))
            for spec in sof.findall('componentSpec')
        ]

    def is_progressive(self):
        sof = self._sof()
        return sof is not None and sof.get('process') == '2'

    def to_save_options(self):
        """
        Translate the metadata into Pillow JPEG save options.

        Returns:
            Dict of keyword arguments for Image.save
        """
        sampling = self.component_sampling()
        if len(sampling) != 3:
            return {}

        luma = sampling[0]
        if luma in PILLOW_SUBSAMPLING:
            return {'subsampling': PILLOW_SUBSAMPLING[luma]}
        if luma in PILLOW_FALLBACKS:
            logger.warning(
                "JPEG encoder cannot write %dx%d subsampling, using 4:2:0 instead", *luma
            )
            return {'subsampling': PILLOW_FALLBACKS[luma]}

        logger.warning("Unsupported JPEG sampling factors %s, using encoder default", luma)
        return {}

    def __repr__(self):
        return f"JpegMetadata(sampling={self.component_sampling()})"


def valid_sof_marker(marker):
    """
    Check whether a marker is a SOF marker for YCbCr data.

    An SOF marker has 1 child for greyscale, 3 for YCbCr and 4 for CMYK /
    YCCK. Subsampling only applies to YCbCr.
    """
    return marker.name.lower() == 'sof' and marker.child_count == 3


def set_subsampling(sof_marker, subsampling):
    """
    Overwrite the luma sampling factors of a SOF marker.

    Args:
        sof_marker: MarkerNode for the SOF marker (modified)
        subsampling: Subsampling code or name
    """
    horizontal, vertical = subsampling_factors(subsampling)
    component = sof_marker.first_child()

    for attribute in ('HsamplingFactor', 'VsamplingFactor'):
        if component.get_attribute(attribute) is None:
            raise ValueError(f"SOF component has no {attribute} attribute")

    component.set_attribute('VsamplingFactor', str(vertical))
    component.set_attribute('HsamplingFactor', str(horizontal))


def find_sof_marker(markers):
    """First marker that passes valid_sof_marker, or None."""
    for marker in markers:
        if valid_sof_marker(marker):
            return marker
    return None


def generate_metadata_with_subsampling(writer, subsampling, image):
    """
    Create JPEG metadata that forces a chroma subsampling mode.

    Args:
        writer: Image writer that will encode the image
        subsampling: Subsampling code (e.g. SUBSAMPLING_444) or name
        image: Image about to be written

    Returns:
        JpegMetadata with the requested sampling factors, or None when the
        writer is not a JPEG writer or the image is not YCbCr (the writer
        then uses its own defaults)
    """
    from .writers import ImageType, JpegImageWriter

    if not isinstance(writer, JpegImageWriter):
        return None

    code = to_subsampling_code(subsampling)
    image_type = ImageType.from_image(writer.prepare(image))
    metadata = writer.default_image_metadata(image_type)
    root = metadata.as_tree(NATIVE_FORMAT_NAME)

    # The root has two children; the second one holds the marker segments
    top_level = ElementMarkerNode(root).children()
    if len(top_level) < 2:
        logger.debug("No marker sequence in default JPEG metadata")
        return None

    sof_marker = find_sof_marker(top_level[1].children())
    if sof_marker is None:
        logger.debug("No YCbCr SOF marker for %s image, keeping encoder defaults", image_type.mode)
        return None

    set_subsampling(sof_marker, code)
    metadata.set_from_tree(NATIVE_FORMAT_NAME, root)
    logger.debug("Set JPEG subsampling to 0x%02X", code)
    return metadata
