"""
Canvas module.

A :py:class:`Canvas` is an ``H x W`` grid of RGBA pixels stored row-major in a
NumPy ``uint8`` array of shape ``(H, W, 4)``. Layers own canvases, filters
return new ones, and the flattened result of a project is a canvas too.

Example::

    from collage_tools.api.canvas import Canvas
    from collage_tools.api.pixel import Pixel

    canvas = Canvas.blank(2, 3)
    canvas.set_pixel(0, 1, Pixel(255, 0, 0))
    assert canvas.get_pixel(0, 1).red == 255
"""

import logging
from typing import Iterator, Sequence, Union

import numpy as np

from collage_tools.api.pixel import Pixel
from collage_tools.constants import MAX_CHANNEL_VALUE
from collage_tools.exceptions import IndexOutOfRange, InvalidDimensions

logger = logging.getLogger(__name__)

OPAQUE_BLACK = (0, 0, 0, MAX_CHANNEL_VALUE)
TRANSPARENT_BLACK = (0, 0, 0, 0)


class Canvas:
    """
    Rectangular grid of pixels.

    :param data: ``uint8`` array of shape ``(height, width, 4)``. The canvas
        takes ownership of the array.
    """

    def __init__(self, data: np.ndarray):
        if data.ndim != 3 or data.shape[2] != 4:
            raise ValueError("Expected (height, width, 4) array, got %r" % (data.shape,))
        if data.dtype != np.uint8:
            raise TypeError("Expected uint8 array, got %s" % data.dtype)
        self._data = data

    @classmethod
    def blank(
        cls,
        height: int,
        width: int,
        color: Union[Pixel, Sequence[int]] = OPAQUE_BLACK,
    ) -> "Canvas":
        """
        Create a canvas filled with a single color, opaque black by default.

        :raise InvalidDimensions: if height or width is negative.
        """
        if height < 0 or width < 0:
            raise InvalidDimensions(
                "Invalid canvas size: height=%d, width=%d" % (height, width)
            )
        if isinstance(color, Pixel):
            color = color.astuple()
        data = np.empty((height, width, 4), dtype=np.uint8)
        data[:, :] = color
        return cls(data)

    @classmethod
    def fromarray(cls, array: np.ndarray) -> "Canvas":
        """
        Create a canvas from an ``(H, W, 3)`` or ``(H, W, 4)`` array. Values
        are clipped into [0, 255]; a missing alpha channel becomes 255.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError("Expected (height, width, 3 or 4) array, got %r" % (array.shape,))
        data = np.clip(array, 0, MAX_CHANNEL_VALUE).astype(np.uint8)
        if data.shape[2] == 3:
            alpha = np.full(data.shape[:2] + (1,), MAX_CHANNEL_VALUE, dtype=np.uint8)
            data = np.concatenate((data, alpha), axis=2)
        return cls(data)

    @classmethod
    def fromrows(cls, rows: Sequence[Sequence[Pixel]]) -> "Canvas":
        """Create a canvas from nested rows of :py:class:`Pixel`."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        if any(len(row) != width for row in rows):
            raise ValueError("Rows must all have the same length")
        data = np.array(
            [[pixel.astuple() for pixel in row] for row in rows], dtype=np.uint8
        ).reshape((height, width, 4))
        return cls(data)

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width) tuple, as in :py:attr:`numpy.ndarray.shape`."""
        return (self.height, self.width)

    def numpy(self) -> np.ndarray:
        """Copy of the pixel data as an ``(H, W, 4)`` ``uint8`` array."""
        return self._data.copy()

    def copy(self) -> "Canvas":
        return Canvas(self._data.copy())

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexOutOfRange(
                "Pixel (%d, %d) is outside a %dx%d canvas"
                % (row, col, self.height, self.width)
            )

    def get_pixel(self, row: int, col: int) -> Pixel:
        """
        Get the pixel at ``(row, col)``.

        :raise IndexOutOfRange: outside ``[0, height) x [0, width)``.
        """
        self._check_index(row, col)
        return Pixel(*(int(c) for c in self._data[row, col]))

    def set_pixel(self, row: int, col: int, pixel: Pixel) -> None:
        """
        Overwrite the pixel at ``(row, col)``.

        :raise IndexOutOfRange: outside ``[0, height) x [0, width)``.
        """
        self._check_index(row, col)
        self._data[row, col] = pixel.astuple()

    def paste(self, image: "Canvas", x: int, y: int) -> int:
        """
        Overwrite this canvas with ``image`` placed at column ``x``, row
        ``y``. Pixels of ``image`` that fall outside this canvas are dropped.

        :return: number of pixels written.
        """
        top, left = max(y, 0), max(x, 0)
        bottom = min(y + image.height, self.height)
        right = min(x + image.width, self.width)
        if top >= bottom or left >= right:
            return 0
        self._data[top:bottom, left:right] = image._data[
            top - y : bottom - y, left - x : right - x
        ]
        return (bottom - top) * (right - left)

    def pixels(self) -> Iterator[Pixel]:
        """Iterate over pixels in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield Pixel(*(int(c) for c in self._data[row, col]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Canvas):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __repr__(self) -> str:
        return "%s(height=%d, width=%d)" % (
            self.__class__.__name__,
            self.height,
            self.width,
        )
