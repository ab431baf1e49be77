import logging

import numpy as np
import pytest

from collage_tools.api.canvas import Canvas
from collage_tools.api.pixel import Pixel
from collage_tools.exceptions import IndexOutOfRange, InvalidDimensions

from ..utils import solid

logger = logging.getLogger(__name__)


def test_blank_is_opaque_black() -> None:
    canvas = Canvas.blank(2, 3)
    assert canvas.shape == (2, 3)
    assert canvas.height == 2
    assert canvas.width == 3
    assert all(pixel == Pixel(0, 0, 0, 255) for pixel in canvas.pixels())


def test_blank_with_pixel() -> None:
    canvas = Canvas.blank(1, 1, Pixel(1, 2, 3, 4))
    assert canvas.get_pixel(0, 0) == Pixel(1, 2, 3, 4)


def test_blank_empty() -> None:
    canvas = Canvas.blank(0, 0)
    assert canvas.shape == (0, 0)
    assert list(canvas.pixels()) == []


@pytest.mark.parametrize("size", [(-1, 2), (2, -1)])
def test_blank_invalid(size) -> None:
    with pytest.raises(InvalidDimensions):
        Canvas.blank(*size)


def test_constructor_checks_array() -> None:
    with pytest.raises(ValueError):
        Canvas(np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(TypeError):
        Canvas(np.zeros((2, 2, 4), dtype=np.float32))


def test_fromarray_adds_alpha_and_clips() -> None:
    canvas = Canvas.fromarray(np.array([[[300, -1, 7]]]))
    assert canvas.get_pixel(0, 0) == Pixel(255, 0, 7, 255)


def test_fromrows() -> None:
    rows = [[Pixel(1, 1, 1), Pixel(2, 2, 2)], [Pixel(3, 3, 3), Pixel(4, 4, 4)]]
    canvas = Canvas.fromrows(rows)
    assert canvas.shape == (2, 2)
    assert list(canvas.pixels()) == [pixel for row in rows for pixel in row]
    with pytest.raises(ValueError):
        Canvas.fromrows([[Pixel()], [Pixel(), Pixel()]])


def test_get_set_pixel() -> None:
    canvas = Canvas.blank(2, 3)
    canvas.set_pixel(1, 2, Pixel(9, 8, 7, 6))
    assert canvas.get_pixel(1, 2) == Pixel(9, 8, 7, 6)
    assert canvas.numpy()[1, 2].tolist() == [9, 8, 7, 6]


@pytest.mark.parametrize("index", [(-1, 0), (0, -1), (2, 0), (0, 3)])
def test_pixel_index_out_of_range(index) -> None:
    canvas = Canvas.blank(2, 3)
    with pytest.raises(IndexOutOfRange):
        canvas.get_pixel(*index)
    with pytest.raises(IndexOutOfRange):
        canvas.set_pixel(*index, Pixel())


def test_numpy_and_copy_are_independent() -> None:
    canvas = solid(2, 2, (5, 5, 5))
    array = canvas.numpy()
    array[:] = 0
    clone = canvas.copy()
    clone.set_pixel(0, 0, Pixel(1, 1, 1))
    assert canvas.get_pixel(0, 0) == Pixel(5, 5, 5)
    assert canvas != clone


def test_paste_inside() -> None:
    canvas = Canvas.blank(4, 4)
    written = canvas.paste(solid(2, 2, (255, 0, 0)), 1, 2)
    assert written == 4
    array = canvas.numpy()
    assert (array[2:4, 1:3, 0] == 255).all()
    assert array[:2, :, 0].sum() == 0
    assert array[:, 0, 0].sum() == 0
    assert array[:, 3, 0].sum() == 0


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (3, 3, 1),
        (-1, -1, 1),
        (4, 0, 0),
        (0, 4, 0),
        (-2, 0, 0),
        (2, -1, 2),
    ],
)
def test_paste_clips(x, y, expected) -> None:
    canvas = Canvas.blank(4, 4)
    assert canvas.paste(solid(2, 2, (255, 255, 255)), x, y) == expected
    assert int((canvas.numpy()[:, :, 0] == 255).sum()) == expected


def test_equality() -> None:
    assert solid(2, 2, (1, 2, 3)) == solid(2, 2, (1, 2, 3))
    assert solid(2, 2, (1, 2, 3)) != solid(2, 2, (1, 2, 4))
    assert solid(2, 2, (1, 2, 3)) != solid(2, 3, (1, 2, 3))
    assert Canvas.blank(1, 1).__eq__(object()) is NotImplemented
