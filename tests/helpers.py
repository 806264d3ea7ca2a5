"""Builders for synthetic photos and EXIF blocks used across the tests."""

from __future__ import annotations

import struct
from io import BytesIO

from PIL import Image

VERDICT_PAYLOAD = {
    "admissible": True,
    "score": 7,
    "verdict": {
        "crime": "Scheefhangende Zitting",
        "sentence": "Twee weken rechtop staan.",
        "reasoning": "Artikel 12 van het Meubelwetboek.",
        "observation": "Een stoel die naar links helt.",
        "verdictType": "waarschuwing",
    },
    "requestId": "req-123",
    "timestamp": "2026-02-01T15:30:45Z",
}


def exif_segment(orientation: int, *, little_endian: bool = True) -> bytes:
    """Build an APP1 segment whose first IFD holds a make and an orientation entry."""

    prefix = "<" if little_endian else ">"
    tiff = (b"II" if little_endian else b"MM") + struct.pack(prefix + "HI", 42, 8)
    ifd = struct.pack(prefix + "H", 2)
    ifd += struct.pack(prefix + "HHII", 0x010F, 2, 4, 0)
    ifd += struct.pack(prefix + "HHIHH", 0x0112, 3, 1, orientation, 0)
    ifd += struct.pack(prefix + "I", 0)
    payload = b"Exif\x00\x00" + tiff + ifd
    return b"\xff\xe1" + struct.pack(">H", len(payload) + 2) + payload


def raw_segment(marker: int, payload: bytes) -> bytes:
    return struct.pack(">HH", marker, len(payload) + 2) + payload


def jpeg_container(*segments: bytes) -> bytes:
    return b"\xff\xd8" + b"".join(segments) + b"\xff\xd9"


def make_image(
    width: int,
    height: int,
    *,
    fmt: str = "JPEG",
    mode: str = "RGB",
    color: tuple[int, ...] = (120, 80, 40),
    orientation: int | None = None,
) -> bytes:
    """Encode a solid-colour raster, optionally tagged with an EXIF orientation."""

    image = Image.new(mode, (width, height), color)
    buffer = BytesIO()
    kwargs = {}
    if orientation is not None:
        exif = Image.Exif()
        exif[0x0112] = orientation
        kwargs["exif"] = exif
    image.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


def make_split_image(width: int = 40, height: int = 20) -> bytes:
    """PNG whose left half is red and right half is blue."""

    image = Image.new("RGB", (width, height), (0, 0, 255))
    image.paste((255, 0, 0), (0, 0, width // 2, height))
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def decode(data: bytes) -> Image.Image:
    image = Image.open(BytesIO(data))
    image.load()
    return image

