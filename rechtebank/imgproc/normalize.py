"""Image normalisation: upright orientation, user rotation and JPEG encoding."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Protocol

from PIL import Image, UnidentifiedImageError

from rechtebank.errors import ImageDecodeError, ImageEncodeError
from rechtebank.imgproc.exif import apply_orientation, read_orientation
from rechtebank.imgproc.rotation import VALID_ANGLES

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 0.9


class RasterTransform(Protocol):
    """Rotates a decoded raster around its centre."""

    def rotate(self, image: Image.Image, angle: int) -> Image.Image:
        ...


class PillowRasterTransform:
    """Centre rotation on an expanded canvas, clockwise for positive angles."""

    def rotate(self, image: Image.Image, angle: int) -> Image.Image:
        # Pillow rotates counter-clockwise; the canvas grows to hold the result.
        return image.rotate(-angle, expand=True)


def canvas_size(width: int, height: int, angle: int) -> tuple[int, int]:
    """Return the output canvas for a ``width`` x ``height`` raster turned by ``angle``."""

    if _checked_angle(angle) in (90, 270):
        return height, width
    return width, height


def _checked_angle(angle: int) -> int:
    normalized = angle % 360
    if normalized not in VALID_ANGLES:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {angle}.")
    return normalized


class ImageNormalizer:
    """Ensures consistent orientation and format before upload."""

    def __init__(
        self,
        quality: float = DEFAULT_JPEG_QUALITY,
        transform: RasterTransform | None = None,
    ) -> None:
        self._quality = max(1, min(95, round(quality * 100)))
        self._transform = transform or PillowRasterTransform()

    def normalize(self, image_bytes: bytes, angle: int = 0) -> bytes:
        """Return upright JPEG bytes rotated clockwise by ``angle`` degrees."""

        angle = _checked_angle(angle)
        image = self._decode(image_bytes)
        image = apply_orientation(image, read_orientation(image_bytes))

        width, height = image.size
        if angle:
            try:
                image = self._transform.rotate(image, angle)
            except (OSError, ValueError) as exc:
                raise ImageDecodeError("Failed to draw the photo for rotation.") from exc

        expected = canvas_size(width, height, angle)
        if image.size != expected:
            logger.error("Rotated canvas is %s, expected %s.", image.size, expected)
            raise ImageDecodeError("Rotation produced an unexpected canvas size.")

        return self._encode(image)

    def to_jpeg(self, image_bytes: bytes) -> bytes:
        """Re-encode any supported photo as JPEG without rotating it."""

        return self.normalize(image_bytes, 0)

    def _decode(self, image_bytes: bytes) -> Image.Image:
        if not image_bytes:
            raise ImageDecodeError("Failed to load image: no data.")
        try:
            image = Image.open(BytesIO(image_bytes))
            image.load()
        except Image.DecompressionBombError as exc:
            raise ImageDecodeError("Image dimensions too large.") from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise ImageDecodeError("Failed to load image for conversion.") from exc
        return image

    def _encode(self, image: Image.Image) -> bytes:
        image = _flatten(image)
        buffer = BytesIO()
        try:
            image.save(buffer, format="JPEG", quality=self._quality)
        except (OSError, ValueError) as exc:
            raise ImageEncodeError("Failed to convert image to JPEG.") from exc

        data = buffer.getvalue()
        if not data:
            raise ImageEncodeError("Failed to convert image to JPEG.")
        return data


def _flatten(image: Image.Image) -> Image.Image:
    """Composite transparent rasters onto white; JPEG has no alpha channel."""

    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("RGBA")
    if image.mode in ("RGBA", "LA"):
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.split()[-1])
        return background
    if image.mode not in ("RGB", "L"):
        return image.convert("RGB")
    return image
