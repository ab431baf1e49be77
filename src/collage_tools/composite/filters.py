"""
Filter implementations.

Filters come in two variants (see
:py:class:`~collage_tools.constants.FilterVariant`):

- self-adjust filters compute the output from the recomputed layer alone,
- anchored blends combine the recomputed layer ``Cs`` with the bottom-most
  layer of the stack ``Cb``.

All functions take ``int32`` color arrays of shape ``(H, W, 3)`` and the
project's ``max_value``, and return color arrays of the same shape. Results
are clipped into ``[0, max_value]``; the alpha channel always comes from the
recomputed layer.
"""
import logging
from typing import TYPE_CHECKING, Sequence

import numpy as np

from collage_tools.api.canvas import TRANSPARENT_BLACK, Canvas
from collage_tools.api.pixel import LUMA_WEIGHTS
from collage_tools.constants import (
    DEFAULT_MAX_VALUE,
    FilterKind,
    FilterVariant,
)

if TYPE_CHECKING:
    from collage_tools.api.layers import Layer

logger = logging.getLogger(__name__)


# Per-pixel metrics, shape (H, W, 1).
def _intensity(C):
    return C.sum(axis=2, keepdims=True) // 3


def _value(C):
    return C.max(axis=2, keepdims=True)


def _luma(C):
    wr, wg, wb = LUMA_WEIGHTS
    L = wr * C[:, :, 0:1] + wg * C[:, :, 1:2] + wb * C[:, :, 2:3]
    return np.floor(L + 0.5).astype(np.int32)


def _isolate(index):
    def _filter(Cs, max_value=DEFAULT_MAX_VALUE):
        B = np.zeros_like(Cs)
        B[:, :, index] = Cs[:, :, index]
        return B

    return _filter


def _brighten(metric):
    def _filter(Cs, max_value=DEFAULT_MAX_VALUE):
        return np.minimum(Cs + metric(Cs), max_value)

    return _filter


def _darken(metric):
    def _filter(Cs, max_value=DEFAULT_MAX_VALUE):
        return np.maximum(Cs - metric(Cs), 0)

    return _filter


# Self-adjust filters
def normal(Cs, max_value=DEFAULT_MAX_VALUE):
    return Cs


red = _isolate(0)
green = _isolate(1)
blue = _isolate(2)
brighten_value = _brighten(_value)
brighten_intensity = _brighten(_intensity)
brighten_luma = _brighten(_luma)
darken_value = _darken(_value)
darken_intensity = _darken(_intensity)
darken_luma = _darken(_luma)


# Anchored blends
def multiply(Cb, Cs, max_value=DEFAULT_MAX_VALUE):
    return np.floor(Cs * Cb / max_value + 0.5).astype(np.int32)


def screen(Cb, Cs, max_value=DEFAULT_MAX_VALUE):
    return max_value - ((max_value - Cs) * (max_value - Cb)) // max_value


def difference(Cb, Cs, max_value=DEFAULT_MAX_VALUE):
    return np.abs(Cs - Cb)


"""Self-adjust filter table."""
SELF_ADJUST_FUNC = {
    FilterKind.NORMAL: normal,
    FilterKind.RED: red,
    FilterKind.GREEN: green,
    FilterKind.BLUE: blue,
    FilterKind.BRIGHTEN_VALUE: brighten_value,
    FilterKind.BRIGHTEN_INTENSITY: brighten_intensity,
    FilterKind.BRIGHTEN_LUMA: brighten_luma,
    FilterKind.DARKEN_VALUE: darken_value,
    FilterKind.DARKEN_INTENSITY: darken_intensity,
    FilterKind.DARKEN_LUMA: darken_luma,
}

"""Anchored blend table."""
ANCHORED_BLEND_FUNC = {
    FilterKind.MULTIPLY: multiply,
    FilterKind.SCREEN: screen,
    FilterKind.DIFFERENCE: difference,
}


def get_base(stack: Sequence["Layer"], layer: "Layer") -> Canvas:
    """
    Return the anchor of the blend filters: the visible canvas of the
    bottom-most layer. Without a distinct layer below, the anchor is
    transparent black.
    """
    # The bottom-most layer has nothing below it, even in a taller stack.
    if len(stack) < 2 or stack[0] is layer:
        logger.debug("No base layer below %r, using transparent black", layer.name)
        return Canvas.blank(layer.height, layer.width, TRANSPARENT_BLACK)
    return stack[0].visible


def apply(
    stack: Sequence["Layer"],
    layer: "Layer",
    max_value: int = DEFAULT_MAX_VALUE,
) -> Canvas:
    """
    Compute ``layer``'s visible canvas from its filter.

    Nothing is mutated; the caller commits the returned canvas.

    :param stack: ordered layers, bottom-most first.
    :param layer: layer to recompute.
    :param max_value: channel maximum of the project.
    :return: new :py:class:`~collage_tools.api.canvas.Canvas`.
    """
    kind = layer.filter
    source = layer.canvas.numpy()
    Cs = source[:, :, :3].astype(np.int32)
    if kind.variant == FilterVariant.ANCHORED_BLEND:
        base = get_base(stack, layer)
        if base.shape != layer.canvas.shape:
            raise ValueError(
                "Base canvas %r does not match layer canvas %r"
                % (base.shape, layer.canvas.shape)
            )
        Cb = base.numpy()[:, :, :3].astype(np.int32)
        color = ANCHORED_BLEND_FUNC[kind](Cb, Cs, max_value)
    else:
        color = SELF_ADJUST_FUNC[kind](Cs, max_value)

    result = np.empty_like(source)
    result[:, :, :3] = np.clip(color, 0, max_value)
    result[:, :, 3] = source[:, :, 3]
    return Canvas(result)
