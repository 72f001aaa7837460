from __future__ import annotations

import copy
import enum
import sys
from typing import TYPE_CHECKING

import numpy as np

from blockpic.errors import StaleViewError
from blockpic.pixel import BgColor, Pixel
from blockpic.region import Region

if TYPE_CHECKING:
    from blockpic.image import Image

_EXHAUSTED = sys.maxsize


class Fit(enum.Enum):
    """How an ImageView fills a render area.

    ZOOM scales both axes by the same factor and centres the image, leaving
    the unused part of the area blank. STRETCH scales each axis to fill the
    whole area, distorting the image if the aspect ratios differ.
    """

    ZOOM = "zoom"
    STRETCH = "stretch"


class ViewPixels:
    """Iterator over the pixels of a view's region, row by row.

    Raises StaleViewError if the image is handed out for mutation mid-iteration.
    """

    def __init__(self, image: Image, region: Region, generation: int):
        self._image = image
        self._generation = generation
        self._pixels = image.pixels()
        self._region = region
        self._real_width = image.width
        if region.width == 0 or region.height == 0:
            self.x = self.y = _EXHAUSTED
        else:
            self.x = region.x
            self.y = region.y

    def __iter__(self):
        return self

    def __next__(self) -> Pixel:
        if self.x == _EXHAUSTED:
            raise StopIteration
        if self._image.generation != self._generation:
            raise StaleViewError("Image was modified during iteration")

        x, y = self.x, self.y
        self.x += 1
        if self.x >= self._region.x + self._region.width:
            self.x = self._region.x
            self.y += 1
            if self.y >= self._region.y + self._region.height:
                self.x = self.y = _EXHAUSTED

        r, g, b, a = (int(c) for c in self._pixels[y * self._real_width + x])
        return Pixel(r, g, b, a)


class ImageView:
    """A renderable view of an image.

    The view borrows its image: it never copies the pixel buffer, and it
    becomes stale as soon as the image is handed out for mutation. It may
    show just a :class:`Region` of the image, and carries the :class:`Fit`
    mode and the background used for translucent pixels.
    """

    def __init__(
        self,
        image: Image,
        fit: Fit = Fit.ZOOM,
        region: Region | None = None,
        bg: BgColor = BgColor(),
    ):
        self._image = image
        self._generation = image.generation
        self._fit = fit
        self._bg = bg
        self._region = Region(0, 0, image.width, image.height)
        if region is not None:
            self.set_region(region)

    def with_fit(self, fit: Fit) -> ImageView:
        view = copy.copy(self)
        view.set_fit(fit)
        return view

    def with_region(self, region: Region) -> ImageView:
        view = copy.copy(self)
        view.set_region(region)
        return view

    def with_bg_color(self, color: BgColor) -> ImageView:
        view = copy.copy(self)
        view.set_bg_color(color)
        return view

    def set_fit(self, fit: Fit) -> None:
        self._fit = fit

    def set_region(self, region: Region) -> None:
        """Select a region, clamped to the image bounds."""
        self._region = region.clamped(self._image.width, self._image.height)

    def set_bg_color(self, color: BgColor) -> None:
        self._bg = color

    @property
    def image(self) -> Image:
        return self._image

    @property
    def fit(self) -> Fit:
        return self._fit

    @property
    def region(self) -> Region:
        return self._region

    @property
    def bg(self) -> BgColor:
        return self._bg

    def _check(self) -> None:
        if self._image.generation != self._generation:
            raise StaleViewError("Image was modified after this view was created")

    def pixels(self) -> ViewPixels:
        self._check()
        return ViewPixels(self._image, self._region, self._generation)

    def pixel(self, x: int, y: int) -> Pixel | None:
        """The pixel at ``(x, y)`` relative to the region, or None if outside it."""
        self._check()
        if not (0 <= x < self._region.width and 0 <= y < self._region.height):
            return None
        return self._image.pixel(x + self._region.x, y + self._region.y)

    def array(self) -> np.ndarray:
        """Read-only ``(height, width, 4)`` array of the region's pixels."""
        self._check()
        r = self._region
        return self._image.region_array(r.x, r.y, r.width, r.height)

    def __eq__(self, other):
        if not isinstance(other, ImageView):
            return NotImplemented
        return (
            self._image is other._image
            and self._fit == other._fit
            and self._region == other._region
            and self._bg == other._bg
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"ImageView({self._image!r}, fit={self._fit}, region={self._region}, bg={self._bg})"
