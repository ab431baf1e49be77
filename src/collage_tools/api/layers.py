"""
Layer module.

A :py:class:`Layer` is a named canvas plus a filter. Layers live in a
:py:class:`~collage_tools.api.project.Project`, which owns their order; the
bottom-most layer is index 0.

A layer keeps two canvases:

- ``canvas``: the source pixels, written by :py:meth:`Layer.add_image` and by
  loading a project file. This is what project files store.
- ``visible``: the result of the latest :py:meth:`Layer.recompute`, i.e. the
  source pixels after the filter. Until the layer is recomputed, the visible
  canvas is the source canvas.

Example usage::

    layer = project.get_layer("background")
    layer.set_filter("brighten-luma")
    layer.add_image(image, 10, 20)
    print(layer.get_pixel(20, 10))
"""

import logging
from typing import TYPE_CHECKING, Optional, Sequence, Union

import numpy as np

from collage_tools.api.canvas import Canvas
from collage_tools.api.pixel import Pixel
from collage_tools.constants import DEFAULT_MAX_VALUE, FilterKind

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)


class Layer:
    """
    Named canvas with a filter. New layers are opaque black.

    :param name: layer name, unique within a project.
    :param height: canvas height.
    :param width: canvas width.
    :param filter: initial filter, :py:attr:`FilterKind.NORMAL` by default.
    """

    def __init__(
        self,
        name: str,
        height: int,
        width: int,
        filter: Union[FilterKind, str] = FilterKind.NORMAL,
    ):
        self._name = name
        self._filter = _as_filter(filter)
        self._canvas = Canvas.blank(height, width)
        self._visible: Optional[Canvas] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def filter(self) -> FilterKind:
        """Current :py:class:`~collage_tools.constants.FilterKind`."""
        return self._filter

    @property
    def canvas(self) -> Canvas:
        """Source canvas."""
        return self._canvas

    @property
    def visible(self) -> Canvas:
        """Canvas computed by the latest :py:meth:`recompute`."""
        return self._canvas if self._visible is None else self._visible

    @property
    def height(self) -> int:
        return self._canvas.height

    @property
    def width(self) -> int:
        return self._canvas.width

    def set_filter(self, filter: Union[FilterKind, str]) -> None:
        """
        Replace the filter.

        :param filter: :py:class:`FilterKind` or its name.
        :raise UnknownFilter: for an unknown name.
        """
        self._filter = _as_filter(filter)
        self._visible = None
        logger.debug("Layer %r filter set to %s", self._name, self._filter.value)

    def set_canvas(self, canvas: Canvas) -> None:
        """Replace the source canvas with one of the same size."""
        if canvas.shape != self._canvas.shape:
            raise ValueError(
                "Canvas size %r does not match layer size %r"
                % (canvas.shape, self._canvas.shape)
            )
        self._canvas = canvas
        self._visible = None

    def add_image(self, image: Canvas, x: int, y: int) -> None:
        """
        Place ``image`` with its top-left corner at column ``x``, row ``y``.
        Pixels that fall outside the layer are dropped.
        """
        written = self._canvas.paste(image, x, y)
        self._visible = None
        clipped = image.height * image.width - written
        if clipped:
            logger.warning(
                "%d pixel(s) clipped placing a %dx%d image at (%d, %d) on %r",
                clipped,
                image.height,
                image.width,
                x,
                y,
                self._name,
            )

    def get_pixel(self, row: int, col: int) -> Pixel:
        """
        Source pixel at ``(row, col)``.

        :raise IndexOutOfRange: outside the canvas.
        """
        return self._canvas.get_pixel(row, col)

    def recompute(
        self, stack: Sequence["Layer"], max_value: int = DEFAULT_MAX_VALUE
    ) -> Canvas:
        """
        Run the filter against ``stack`` and commit the result as the visible
        canvas.

        :param stack: ordered layers of the project, bottom-most first.
        :param max_value: channel maximum of the project.
        :return: the new visible canvas.
        """
        from collage_tools.composite import filters

        self._visible = filters.apply(stack, self, max_value)
        return self._visible

    def numpy(self, visible: bool = False) -> np.ndarray:
        """
        Get the pixels as an ``(H, W, 4)`` ``uint8`` array.

        :param visible: return the filtered pixels instead of the source.
        """
        return (self.visible if visible else self._canvas).numpy()

    def topil(self, visible: bool = False) -> "Image.Image":
        """Get a :py:class:`PIL.Image.Image` of the layer."""
        from collage_tools.api.pil_io import topil

        return topil(self.visible if visible else self._canvas)

    def __repr__(self) -> str:
        return "%s(%r size=%dx%d filter=%s)" % (
            self.__class__.__name__,
            self._name,
            self.width,
            self.height,
            self._filter.value,
        )


def _as_filter(filter: Union[FilterKind, str]) -> FilterKind:
    if isinstance(filter, FilterKind):
        return filter
    return FilterKind.from_name(filter)
