"""EXIF orientation lookup for JPEG photos.

Only the orientation tag is of interest. The reader walks the JPEG marker
segments, finds the APP1/Exif block and scans its first image file
directory. Every irregularity (truncation, bogus lengths, unknown byte
order) resolves to orientation 1 instead of raising, so a photo with broken
metadata is still accepted.
"""

from __future__ import annotations

import logging
import struct

from PIL import Image

logger = logging.getLogger(__name__)

ORIENTATION_TAG = 0x0112
DEFAULT_ORIENTATION = 1
SCAN_LIMIT = 64 * 1024

_SOI = 0xFFD8
_EOI = 0xFFD9
_APP1 = 0xFFE1
_EXIF_IDENTIFIER = b"Exif"
# "Exif" followed by two padding bytes, then the TIFF header.
_EXIF_HEADER_SIZE = 6
_LITTLE_ENDIAN = b"II"
_BIG_ENDIAN = b"MM"
_IFD_ENTRY_SIZE = 12

_TRANSPOSES = {
    2: Image.Transpose.FLIP_LEFT_RIGHT,
    3: Image.Transpose.ROTATE_180,
    4: Image.Transpose.FLIP_TOP_BOTTOM,
    5: Image.Transpose.TRANSPOSE,
    6: Image.Transpose.ROTATE_270,
    7: Image.Transpose.TRANSVERSE,
    8: Image.Transpose.ROTATE_90,
}


def read_orientation(data: bytes) -> int:
    """Return the EXIF orientation (1-8) of a JPEG buffer, or 1 when unknown."""

    view = memoryview(data)[:SCAN_LIMIT]
    length = len(view)

    if length < 2 or struct.unpack_from(">H", view, 0)[0] != _SOI:
        return DEFAULT_ORIENTATION

    offset = 2
    while offset + 4 <= length:
        marker = struct.unpack_from(">H", view, offset)[0]
        if marker & 0xFF00 != 0xFF00:
            break
        offset += 2

        if marker in (_EOI, _SOI):
            break

        segment_length = struct.unpack_from(">H", view, offset)[0]
        if segment_length < 2 or offset + segment_length > length:
            break

        if marker == _APP1:
            payload = bytes(view[offset + 2 : offset + segment_length])
            if payload[:4] == _EXIF_IDENTIFIER:
                return _orientation_from_tiff(payload[_EXIF_HEADER_SIZE:])

        offset += segment_length

    return DEFAULT_ORIENTATION


def _orientation_from_tiff(tiff: bytes) -> int:
    """Scan the first IFD of a TIFF block for the orientation entry."""

    if len(tiff) < 8:
        return DEFAULT_ORIENTATION

    byte_order = tiff[:2]
    if byte_order == _LITTLE_ENDIAN:
        prefix = "<"
    elif byte_order == _BIG_ENDIAN:
        prefix = ">"
    else:
        logger.debug("Unknown TIFF byte order %r; assuming upright photo.", byte_order)
        return DEFAULT_ORIENTATION

    ifd_offset = struct.unpack_from(prefix + "I", tiff, 4)[0]
    if ifd_offset + 2 > len(tiff):
        return DEFAULT_ORIENTATION

    entry_count = struct.unpack_from(prefix + "H", tiff, ifd_offset)[0]
    for index in range(entry_count):
        entry_offset = ifd_offset + 2 + index * _IFD_ENTRY_SIZE
        if entry_offset + _IFD_ENTRY_SIZE > len(tiff):
            break
        tag = struct.unpack_from(prefix + "H", tiff, entry_offset)[0]
        if tag == ORIENTATION_TAG:
            value = struct.unpack_from(prefix + "H", tiff, entry_offset + 8)[0]
            if 1 <= value <= 8:
                return value
            return DEFAULT_ORIENTATION

    return DEFAULT_ORIENTATION


def apply_orientation(image: Image.Image, orientation: int) -> Image.Image:
    """Return ``image`` turned upright according to its EXIF orientation."""

    method = _TRANSPOSES.get(orientation)
    if method is None:
        return image
    return image.transpose(method)
