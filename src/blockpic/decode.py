"""Decode image files into :class:`~blockpic.image.Image` using Pillow."""

import io
import logging
from pathlib import Path
from typing import BinaryIO

from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from blockpic.errors import DecodeError
from blockpic.image import Image

logger = logging.getLogger(__name__)


def decode_bytes(data: bytes) -> Image:
    """Decode an in-memory encoded image. The format is detected from the content.

    Only the first frame of an animated image is used.
    """
    # Bytes are already in memory, so any failure below is a data problem
    try:
        with PILImage.open(io.BytesIO(data)) as im:
            im.load()
            logger.debug("Decoded %s image %dx%d in mode %s", im.format, im.width, im.height, im.mode)
            return Image.from_pil(im)
    except PILImage.DecompressionBombError as exc:
        raise DecodeError(f"Image exceeds size limits: {exc}") from exc
    except UnidentifiedImageError as exc:
        raise DecodeError("Unrecognised image format") from exc
    except (OSError, ValueError, SyntaxError, EOFError) as exc:
        raise DecodeError(f"Malformed image data: {exc}") from exc


def load_image(stream: BinaryIO) -> Image:
    """Decode an image read from a binary stream. Read errors propagate unchanged."""
    return decode_bytes(stream.read())


def open_image(path: str | Path) -> Image:
    """Decode an image file. Errors opening or reading the file propagate unchanged."""
    path = Path(path)
    logger.debug("Opening %s", path)
    with path.open("rb") as f:
        return load_image(f)
