import logging
from pathlib import Path

from PIL import Image as PILImage

from blockpic.decode import open_image
from blockpic.image import Image
from blockpic.pixel import BgColor
from blockpic.region import Region
from blockpic.renderer import render
from blockpic.terminal import to_ansi
from blockpic.view import Fit

logger = logging.getLogger(__name__)


def image_to_ansi(
    image: Image | PILImage.Image | str | Path,
    width: int | None = None,
    height: int | None = None,
    fit: Fit = Fit.ZOOM,
    bg: BgColor = BgColor(),
    region: Region | None = None,
) -> str:
    """Render an image as half-block ANSI art.

    Width and height are in cells and default to the native cell size of the
    (clamped) region.
    """
    if isinstance(image, PILImage.Image):
        image = Image.from_pil(image)
    elif not isinstance(image, Image):
        image = open_image(image)

    view = image.view().with_fit(fit).with_bg_color(bg)
    if region is not None:
        view = view.with_region(region)

    if width is None:
        width = view.region.cell_width
    if height is None:
        height = view.region.cell_height
    logger.debug("Rendering %r into %dx%d cells", view, width, height)
    return to_ansi(render(view, width, height))
