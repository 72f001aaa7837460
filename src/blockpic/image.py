import enum
import logging

import numpy as np
from PIL import Image as PILImage

from blockpic.errors import UnsupportedFormatError
from blockpic.pixel import Pixel
from blockpic.view import ImageView

logger = logging.getLogger(__name__)


class PixelLayout(enum.Enum):
    """Channel layouts that can be normalised to 8-bit RGBA."""

    GRAY8 = "gray8"
    GRAYA8 = "graya8"
    RGB8 = "rgb8"
    RGBA8 = "rgba8"
    GRAY16 = "gray16"
    GRAYA16 = "graya16"
    RGB16 = "rgb16"
    RGBA16 = "rgba16"
    GRAY32F = "gray32f"
    RGB32F = "rgb32f"
    RGBA32F = "rgba32f"


def _u8_to_u8(samples: np.ndarray) -> np.ndarray:
    return samples.astype(np.uint8)


def _u16_to_u8(samples: np.ndarray) -> np.ndarray:
    """Keep the high byte of each 16-bit sample."""
    return (samples.astype(np.uint16) >> 8).astype(np.uint8)


def _f32_to_u8(samples: np.ndarray) -> np.ndarray:
    """Scale [0, 1] floats to [0, 255], clamping and truncating. NaN becomes 0."""
    scaled = np.nan_to_num(samples.astype(np.float32), nan=0.0) * np.float32(255.0)
    return np.clip(scaled, 0.0, 255.0).astype(np.uint8)


# layout -> (channels, sample dtype, converter to uint8)
_LAYOUTS = {
    PixelLayout.GRAY8: (1, np.uint8, _u8_to_u8),
    PixelLayout.GRAYA8: (2, np.uint8, _u8_to_u8),
    PixelLayout.RGB8: (3, np.uint8, _u8_to_u8),
    PixelLayout.RGBA8: (4, np.uint8, _u8_to_u8),
    PixelLayout.GRAY16: (1, np.uint16, _u16_to_u8),
    PixelLayout.GRAYA16: (2, np.uint16, _u16_to_u8),
    PixelLayout.RGB16: (3, np.uint16, _u16_to_u8),
    PixelLayout.RGBA16: (4, np.uint16, _u16_to_u8),
    PixelLayout.GRAY32F: (1, np.float32, _f32_to_u8),
    PixelLayout.RGB32F: (3, np.float32, _f32_to_u8),
    PixelLayout.RGBA32F: (4, np.float32, _f32_to_u8),
}

# (channels, dtype kind) -> layout, for numpy arrays
_ARRAY_LAYOUTS = {
    (1, "u8"): PixelLayout.GRAY8,
    (2, "u8"): PixelLayout.GRAYA8,
    (3, "u8"): PixelLayout.RGB8,
    (4, "u8"): PixelLayout.RGBA8,
    (1, "u16"): PixelLayout.GRAY16,
    (2, "u16"): PixelLayout.GRAYA16,
    (3, "u16"): PixelLayout.RGB16,
    (4, "u16"): PixelLayout.RGBA16,
    (1, "f"): PixelLayout.GRAY32F,
    (3, "f"): PixelLayout.RGB32F,
    (4, "f"): PixelLayout.RGBA32F,
}

# Pillow mode -> layout
_PIL_LAYOUTS = {
    "L": PixelLayout.GRAY8,
    "LA": PixelLayout.GRAYA8,
    "RGB": PixelLayout.RGB8,
    "RGBA": PixelLayout.RGBA8,
    "I;16": PixelLayout.GRAY16,
    "I;16L": PixelLayout.GRAY16,
    "I;16B": PixelLayout.GRAY16,
    "I;16N": PixelLayout.GRAY16,
    "I": PixelLayout.GRAY16,
    "F": PixelLayout.GRAY32F,
}

# Pillow modes that are expanded by Pillow itself before normalising
_PIL_EXPAND = {
    "1": "L",
    "P": "RGBA",
    "PA": "RGBA",
}


def _to_rgba(samples: np.ndarray) -> np.ndarray:
    """Expand (h, w, channels) uint8 samples to (h, w, 4)."""
    height, width, channels = samples.shape
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    if channels in (1, 2):
        rgba[..., :3] = samples[..., :1]
    else:
        rgba[..., :3] = samples[..., :3]
    if channels in (2, 4):
        rgba[..., 3] = samples[..., -1]
    else:
        rgba[..., 3] = 255
    return rgba


def _array_kind(dtype: np.dtype) -> str | None:
    if dtype == np.uint8:
        return "u8"
    if dtype == np.uint16:
        return "u16"
    if dtype.kind == "f":
        return "f"
    return None


class Image:
    """A single-frame image held as a row-major buffer of RGBA pixels.

    The buffer is a ``(height, width, 4)`` uint8 array. Pixel ``(x, y)`` is
    entry ``y * width + x`` of the flattened buffer. The constructor copies
    its input, so later writes to the caller's array do not reach the image.

    Every call to :meth:`pixels_mut` or :meth:`pixel_mut` advances the
    image's generation; views created before that raise
    :class:`~blockpic.errors.StaleViewError` when read.
    """

    def __init__(self, data: np.ndarray):
        data = np.asarray(data)
        if data.ndim != 3 or data.shape[2] != 4 or data.dtype != np.uint8:
            raise ValueError(f"Expected a (height, width, 4) uint8 array, got {data.shape} {data.dtype}")
        self._data = np.array(data, order="C")
        self._generation = 0

    @classmethod
    def with_size(cls, width: int, height: int) -> "Image":
        """Create an image of solid black, opaque pixels."""
        data = np.zeros((height, width, 4), dtype=np.uint8)
        data[..., 3] = 255
        return cls(data)

    @classmethod
    def from_raw(cls, data, width: int, height: int, layout: PixelLayout) -> "Image":
        """Normalise a raw sample buffer in the given layout to RGBA.

        ``data`` may be a bytes-like object in native byte order or anything
        numpy can turn into an array of samples.
        """
        if layout not in _LAYOUTS:
            raise UnsupportedFormatError(f"Unsupported pixel layout: {layout!r}")
        channels, dtype, to_u8 = _LAYOUTS[layout]
        if isinstance(data, (bytes, bytearray, memoryview)):
            samples = np.frombuffer(data, dtype=dtype)
        else:
            samples = np.asarray(data)
        expected = width * height * channels
        if samples.size != expected:
            raise ValueError(f"Expected {expected} samples for {width}x{height} {layout.value}, got {samples.size}")
        samples = to_u8(samples.reshape(height, width, channels))
        return cls(_to_rgba(samples))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Image":
        """Normalise a (height, width) or (height, width, channels) array."""
        array = np.asarray(array)
        if array.ndim == 2:
            array = array[:, :, None]
        if array.ndim != 3:
            raise ValueError(f"Expected a 2 or 3 dimensional array, got shape {array.shape}")
        height, width, channels = array.shape
        layout = _ARRAY_LAYOUTS.get((channels, _array_kind(array.dtype)))
        if layout is None:
            raise UnsupportedFormatError(f"Unsupported pixel layout: {channels} channel(s) of {array.dtype}")
        return cls.from_raw(array, width, height, layout)

    @classmethod
    def from_pil(cls, im: PILImage.Image) -> "Image":
        """Normalise a Pillow image according to its mode."""
        if im.mode in _PIL_EXPAND:
            logger.debug("Expanding Pillow mode %s to %s", im.mode, _PIL_EXPAND[im.mode])
            im = im.convert(_PIL_EXPAND[im.mode])
        layout = _PIL_LAYOUTS.get(im.mode)
        if layout is None:
            raise UnsupportedFormatError(f"Unsupported image mode: {im.mode}")
        logger.debug("Normalising Pillow mode %s as %s", im.mode, layout.value)
        samples = np.asarray(im)
        if im.mode == "I":
            # 32-bit integer mode carries 16-bit samples
            samples = np.clip(samples, 0, 65535).astype(np.uint16)
        width, height = im.size
        return cls.from_raw(samples, width, height, layout)

    @property
    def width(self) -> int:
        """Width in pixels."""
        return self._data.shape[1]

    @property
    def height(self) -> int:
        """Height in pixels."""
        return self._data.shape[0]

    @property
    def cell_width(self) -> int:
        """Width in terminal cells."""
        return self.width

    @property
    def cell_height(self) -> int:
        """Height in terminal cells, rounded up."""
        return -(-self.height // 2)

    @property
    def generation(self) -> int:
        return self._generation

    def pixels(self) -> np.ndarray:
        """Read-only ``(width * height, 4)`` view of the pixels, row by row."""
        flat = self._data.reshape(-1, 4)
        flat.flags.writeable = False
        return flat

    def pixels_mut(self) -> np.ndarray:
        """Writable ``(width * height, 4)`` view of the pixels, row by row."""
        self._generation += 1
        return self._data.reshape(-1, 4)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel(self, x: int, y: int) -> Pixel | None:
        """The pixel at ``(x, y)``, or None if out of bounds."""
        if not self._in_bounds(x, y):
            return None
        r, g, b, a = (int(c) for c in self._data[y, x])
        return Pixel(r, g, b, a)

    def pixel_mut(self, x: int, y: int) -> np.ndarray | None:
        """Writable RGBA view of the pixel at ``(x, y)``, or None if out of bounds."""
        if not self._in_bounds(x, y):
            return None
        self._generation += 1
        return self._data[y, x]

    def region_array(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        """Read-only ``(height, width, 4)`` view of a sub-rectangle."""
        sub = self._data[y : y + height, x : x + width]
        sub.flags.writeable = False
        return sub

    def view(self) -> ImageView:
        """A view of the entire image, zoomed to fit on a black background."""
        return ImageView(self)

    def __eq__(self, other):
        if not isinstance(other, Image):
            return NotImplemented
        return self._data.shape == other._data.shape and np.array_equal(self._data, other._data)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"
