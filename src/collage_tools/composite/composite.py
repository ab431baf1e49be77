"""Flattening pass over a layer stack."""

import logging
from typing import TYPE_CHECKING, Sequence

from collage_tools.api.canvas import Canvas
from collage_tools.constants import DEFAULT_MAX_VALUE

if TYPE_CHECKING:
    from collage_tools.api.layers import Layer

logger = logging.getLogger(__name__)


def composite(
    layers: Sequence["Layer"],
    height: int,
    width: int,
    max_value: int = DEFAULT_MAX_VALUE,
) -> Canvas:
    """
    Recompute every layer bottom to top and return the flattened canvas.

    Each recomputed layer overwrites the whole output, so the result is the
    visible canvas of the top-most layer. This is not alpha compositing: the
    layers below only contribute through the anchored blend filters.

    :param layers: ordered layers, bottom-most first.
    :param height: output height.
    :param width: output width.
    :param max_value: channel maximum of the project.
    :return: new :py:class:`~collage_tools.api.canvas.Canvas`. An empty stack
        yields an opaque black canvas.
    """
    output = Canvas.blank(height, width)
    for index, layer in enumerate(layers):
        visible = layer.recompute(layers, max_value)
        logger.debug("Recomputed layer %d %r (%s)", index, layer.name, layer.filter.value)
        output.paste(visible, 0, 0)
    return output
