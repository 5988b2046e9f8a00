"""Loading of user-selected food photos into raw bytes for the AI service."""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from PIL import Image, UnidentifiedImageError

from nutriscan.config import settings
from nutriscan.models.nutrition import ImageInput
from nutriscan.services.errors import InvalidImageError

logger = logging.getLogger(__name__)

# Pillow format name -> media type
ALLOWED_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
}

ImageSource = Union[str, Path, bytes, bytearray, BinaryIO]


def _read_source(source: ImageSource) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        try:
            return Path(source).read_bytes()
        except OSError as e:
            raise InvalidImageError(f"Could not read image file {source}: {e}") from e
    return source.read()


def load_image(source: ImageSource, max_width: Optional[int] = None) -> ImageInput:
    """
    Read a PNG or JPEG image and return its bytes and media type.

    Args:
        source: File path, raw bytes, or a binary stream
        max_width: Wider images are downscaled to this width (default from settings)

    Returns:
        ImageInput ready to be sent inline

    Raises:
        InvalidImageError: Unreadable data or a format other than PNG/JPEG
    """
    max_width = max_width or settings.max_image_width
    data = _read_source(source)
    if not data:
        raise InvalidImageError("Image file is empty")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError(f"Not a readable image: {e}") from e

    if image_format not in ALLOWED_FORMATS:
        raise InvalidImageError(
            f"Invalid image type: {image_format}. Allowed: {sorted(ALLOWED_FORMATS)}"
        )

    data = _downscale(data, image_format, max_width)
    return ImageInput(data=data, media_type=ALLOWED_FORMATS[image_format])


def _downscale(data: bytes, image_format: str, max_width: int) -> bytes:
    """Shrink images wider than max_width, keeping aspect ratio and format."""
    # verify() leaves the image unusable, so reopen
    with Image.open(io.BytesIO(data)) as img:
        if img.width <= max_width:
            return data

        ratio = max_width / img.width
        new_height = max(1, int(img.height * ratio))
        logger.debug(
            "Downscaling %s image from %dx%d to %dx%d",
            image_format,
            img.width,
            img.height,
            max_width,
            new_height,
        )
        resized = img.resize((max_width, new_height), Image.Resampling.LANCZOS)

        # JPEG has no alpha channel
        if image_format == "JPEG" and resized.mode not in ("RGB", "L"):
            resized = resized.convert("RGB")

        out = io.BytesIO()
        if image_format == "JPEG":
            resized.save(out, format="JPEG", optimize=True, quality=85)
        else:
            resized.save(out, format="PNG", optimize=True)
        return out.getvalue()
