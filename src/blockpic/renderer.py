"""Render an ImageView onto a grid of half-block terminal cells.

Each cell shows two pixels stacked vertically: the glyph's foreground is the
top pixel and its background the bottom one. Sampling is nearest-neighbour,
computed by mapping every target cell back into the view's region, so no
scaled copy of the image is ever built.
"""

import logging

import numpy as np

from blockpic.grid import BG, BLANK_CHAR, FG, PIXEL_CHAR, CellGrid
from blockpic.pixel import composite
from blockpic.region import Rect
from blockpic.view import Fit, ImageView

logger = logging.getLogger(__name__)


def render(view: ImageView, width: int, height: int) -> CellGrid:
    """Render a view into a new grid of ``width`` x ``height`` cells."""
    grid = CellGrid.blank(width, height)
    render_into(view, grid, grid.area)
    return grid


def render_into(view: ImageView, grid: CellGrid, area: Rect) -> None:
    """Render a view into ``area`` of an existing grid.

    The area is clipped to the grid. Cells outside it are left alone.
    """
    area = area.intersection(grid.area)
    region = view.region
    if area.area == 0:
        return
    if region.width == 0 or region.height == 0:
        logger.debug("Empty region, blanking %dx%d cells", area.width, area.height)
        _blank(grid, area)
    elif area.width == region.width and area.height * 2 == region.height:
        logger.debug("Exact fit of %dx%d cells", area.width, area.height)
        render_exact(view, grid, area)
    else:
        render_scaled(view, grid, area)


def _cells(area: Rect) -> tuple[slice, slice]:
    return slice(area.y, area.y + area.height), slice(area.x, area.x + area.width)


def _blank(grid: CellGrid, area: Rect) -> None:
    rows, cols = _cells(area)
    grid.glyphs[rows, cols] = BLANK_CHAR
    grid.filled[rows, cols, BG] = False


def scale_factors(view: ImageView, width: int, height: int) -> tuple[np.float32, np.float32, int, int]:
    """Return ``(zoom_x, zoom_y, x_pos, y_pos)`` for rendering into ``width`` x ``height`` cells.

    Zoom factors are cells (x) and pixel rows (y) per source pixel, in single
    precision. Offsets are in cells; with Fit.ZOOM one of them centres the
    image along the axis that has room to spare.
    """
    region = view.region
    zoom_x = np.float32(width) / np.float32(region.width)
    zoom_y = np.float32(height * 2) / np.float32(region.height)
    x_pos = y_pos = 0
    if view.fit is Fit.ZOOM:
        if zoom_x < zoom_y:
            y_pos = max(0, (height * 2 - int(np.float32(region.height) * zoom_x)) // 4)
            zoom_y = zoom_x
        else:
            x_pos = max(0, (width - int(np.float32(region.width) * zoom_y)) // 2)
            zoom_x = zoom_y
    return zoom_x, zoom_y, x_pos, y_pos


def render_exact(view: ImageView, grid: CellGrid, area: Rect) -> None:
    """Copy pixels one to one. The area must match the region's cell size."""
    pixels = view.array()
    rows, cols = _cells(area)
    grid.glyphs[rows, cols] = PIXEL_CHAR
    grid.colours[rows, cols, FG] = composite(pixels[0::2], view.bg)
    grid.colours[rows, cols, BG] = composite(pixels[1::2], view.bg)
    grid.filled[rows, cols] = True


def render_scaled(view: ImageView, grid: CellGrid, area: Rect) -> None:
    """Nearest-neighbour resample the region into the area according to the view's fit."""
    zoom_x, zoom_y, x_pos, y_pos = scale_factors(view, area.width, area.height)
    logger.debug(
        "Scaling %s into %dx%d cells: zoom=(%s, %s) offset=(%d, %d)",
        view.region,
        area.width,
        area.height,
        zoom_x,
        zoom_y,
        x_pos,
        y_pos,
    )
    pixels = view.array()
    region_h, region_w = pixels.shape[:2]

    xs = np.arange(area.width) - x_pos
    ys = np.arange(area.height) - y_pos
    pix_x = (xs.astype(np.float32) / zoom_x).astype(np.int64)
    top_y = ys * 2
    pix_y1 = (top_y.astype(np.float32) / zoom_y).astype(np.int64)
    pix_y2 = ((top_y + 1).astype(np.float32) / zoom_y).astype(np.int64)

    # Cells left of / above the offset are margin; samples past the region are gaps
    col_ok = (xs >= 0) & (pix_x < region_w)
    top_ok = (ys >= 0) & (pix_y1 < region_h)
    bottom_ok = (ys >= 0) & (pix_y2 < region_h)
    top_present = top_ok[:, None] & col_ok[None, :]
    bottom_present = bottom_ok[:, None] & col_ok[None, :]
    filled = top_present | bottom_present

    sx = np.clip(pix_x, 0, region_w - 1)[None, :]
    top = composite(pixels[np.clip(pix_y1, 0, region_h - 1)[:, None], sx], view.bg)
    bottom = composite(pixels[np.clip(pix_y2, 0, region_h - 1)[:, None], sx], view.bg)

    rows, cols = _cells(area)
    glyphs = grid.glyphs[rows, cols]
    colours = grid.colours[rows, cols]
    present = grid.filled[rows, cols]

    glyphs[...] = np.where(filled, PIXEL_CHAR, BLANK_CHAR)
    np.copyto(colours[:, :, FG], top, where=top_present[..., None])
    np.copyto(colours[:, :, BG], bottom, where=bottom_present[..., None])
    # Blank cells reset only their background
    np.copyto(present[:, :, FG], top_present, where=filled)
    present[:, :, BG] = bottom_present
