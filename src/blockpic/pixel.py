from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class Color(NamedTuple):
    """An opaque display colour. ``None`` stands for the terminal's reset colour."""

    r: int
    g: int
    b: int


def _check_channels(value) -> None:
    if any(not 0 <= channel <= 255 for channel in vars(value).values()):
        raise ValueError(f"Channels must be in 0..255: {value}")


@dataclass(frozen=True)
class Pixel:
    """An RGBA pixel, 8 bits per channel. Defaults to fully transparent black."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self):
        _check_channels(self)

    def on(self, bg: "BgColor") -> Color:
        """Blend with a background colour according to the alpha channel."""
        return Color(
            blend(self.r, bg.r, self.a),
            blend(self.g, bg.g, self.a),
            blend(self.b, bg.b, self.a),
        )


@dataclass(frozen=True)
class BgColor:
    """Background that translucent pixels are composited against.

    Alpha 0 shows exactly this colour, alpha 255 shows the unmodified pixel,
    anything in between is a linear mix.
    """

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self):
        _check_channels(self)

    @classmethod
    def from_hex(cls, value: str) -> "BgColor":
        text = value.removeprefix("#")
        if len(text) != 6:
            raise ValueError(f"Expected a colour as RRGGBB, got {value!r}")
        try:
            r, g, b = (int(text[i : i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise ValueError(f"Expected a colour as RRGGBB, got {value!r}") from None
        return cls(r, g, b)

    @property
    def color(self) -> Color:
        return Color(self.r, self.g, self.b)


def blend(value: int, bg: int, alpha: int) -> int:
    """Integer alpha blend of one channel, rounding down."""
    return (value * alpha + bg * (255 - alpha)) // 255


def composite(rgba: np.ndarray, bg: BgColor) -> np.ndarray:
    """Blend an array of RGBA pixels (..., 4) against ``bg``, returning (..., 3) uint8."""
    rgba = np.asarray(rgba, dtype=np.uint16)
    alpha = rgba[..., 3:4]
    back = np.array([bg.r, bg.g, bg.b], dtype=np.uint16)
    # 255 * 255 is the largest intermediate, well inside uint16
    mixed = (rgba[..., :3] * alpha + back * (255 - alpha)) // 255
    return mixed.astype(np.uint8)
