import pytest

from blockpic.errors import StaleViewError
from blockpic.image import Image
from blockpic.pixel import BgColor, Pixel
from blockpic.region import Region
from blockpic.view import Fit, ImageView


def test_new_view_defaults(gradient):
    view = ImageView(gradient)
    assert view.fit is Fit.ZOOM
    assert view.region == Region(0, 0, 4, 4)
    assert view.bg == BgColor(0, 0, 0)
    assert view == gradient.view()


def test_setters(gradient):
    view = gradient.view()
    view.set_fit(Fit.STRETCH)
    view.set_bg_color(BgColor(1, 2, 3))
    view.set_region(Region(1, 1, 10, 10))
    assert view.fit is Fit.STRETCH
    assert view.bg == BgColor(1, 2, 3)
    assert view.region == Region(1, 1, 3, 3)


def test_set_region_out_of_bounds_collapses(gradient):
    view = gradient.view()
    view.set_region(Region(5, 0, 2, 2))
    assert view.region == Region(0, 0, 0, 0)


def test_builders_return_copies(gradient):
    base = gradient.view()
    view = base.with_fit(Fit.STRETCH).with_region(Region(2, 0, 9, 1)).with_bg_color(BgColor(9, 9, 9))
    assert base.fit is Fit.ZOOM
    assert base.region == Region(0, 0, 4, 4)
    assert base.bg == BgColor()
    assert view.fit is Fit.STRETCH
    assert view.region == Region(2, 0, 2, 1)
    assert view.bg == BgColor(9, 9, 9)
    assert view.image is gradient


def test_constructor_clamps_region(gradient):
    view = ImageView(gradient, region=Region(3, 3, 5, 5))
    assert view.region == Region(3, 3, 1, 1)


def test_pixel_is_region_relative(gradient):
    view = gradient.view().with_region(Region(1, 2, 2, 2))
    assert view.pixel(0, 0) == Pixel(1, 2, 9, 255)
    assert view.pixel(1, 1) == Pixel(2, 3, 14, 255)
    assert view.pixel(2, 0) is None
    assert view.pixel(0, 2) is None
    assert view.pixel(-1, 0) is None


def test_view_pixels_row_major(gradient):
    view = gradient.view().with_region(Region(1, 1, 3, 2))
    pixels = list(view.pixels())
    assert len(pixels) == 6
    assert [(p.r, p.g) for p in pixels] == [(1, 1), (2, 1), (3, 1), (1, 2), (2, 2), (3, 2)]


def test_view_pixels_full_image(make_image):
    image = make_image(5, 3)
    pixels = list(image.view().pixels())
    assert [p.b for p in pixels] == list(range(15))


def test_view_pixels_restart(gradient):
    view = gradient.view().with_region(Region(0, 1, 2, 3))
    first = list(view.pixels())
    assert list(view.pixels()) == first
    assert len(first) == 6


def test_view_pixels_exhausted_stays_exhausted(gradient):
    it = gradient.view().with_region(Region(0, 0, 1, 1)).pixels()
    assert next(it) == Pixel(0, 0, 0, 255)
    assert next(it, None) is None
    assert next(it, None) is None


@pytest.mark.parametrize("region", [Region(0, 0, 0, 0), Region(4, 0, 2, 2), Region(0, 4, 2, 2), Region(1, 1, 0, 3)])
def test_view_pixels_empty_region(gradient, region):
    assert list(gradient.view().with_region(region).pixels()) == []


def test_array_matches_region(gradient):
    array = gradient.view().with_region(Region(1, 0, 2, 3)).array()
    assert array.shape == (3, 2, 4)
    assert array[2, 1].tolist() == [2, 2, 10, 255]


def test_view_is_stale_after_mutation():
    image = Image.with_size(2, 2)
    view = image.view()
    image.pixel_mut(0, 0)[:] = (255, 255, 255, 255)
    with pytest.raises(StaleViewError):
        view.pixel(0, 0)
    with pytest.raises(StaleViewError):
        view.pixels()
    assert image.view().pixel(0, 0) == Pixel(255, 255, 255, 255)


def test_view_pixels_stale_mid_iteration(gradient):
    it = gradient.view().pixels()
    assert next(it) == Pixel(0, 0, 0, 255)
    gradient.pixel_mut(1, 0)[:] = (9, 9, 9, 9)
    with pytest.raises(StaleViewError):
        next(it)
