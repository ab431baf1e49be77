import logging

import numpy as np
import pytest

from collage_tools.api.canvas import Canvas
from collage_tools.api.layers import Layer
from collage_tools.api.pixel import Pixel
from collage_tools.composite import filters
from collage_tools.constants import FilterKind, FilterVariant

from ..utils import from_rgb, solid

logger = logging.getLogger(__name__)


def _layer(name, rgb, filter=FilterKind.NORMAL, size=(2, 2), alpha=255):
    layer = Layer(name, size[0], size[1], filter)
    layer.set_canvas(solid(size[0], size[1], rgb, alpha))
    return layer


def _apply_single(kind, rgb, alpha=255):
    layer = _layer("target", rgb, kind, alpha=alpha)
    return filters.apply([layer], layer).get_pixel(0, 0)


def test_every_filter_has_an_implementation() -> None:
    for kind in FilterKind:
        if kind.variant == FilterVariant.ANCHORED_BLEND:
            assert kind in filters.ANCHORED_BLEND_FUNC
        else:
            assert kind in filters.SELF_ADJUST_FUNC


@pytest.mark.parametrize(
    "kind, rgb, expected",
    [
        (FilterKind.NORMAL, (200, 100, 50), (200, 100, 50)),
        (FilterKind.RED, (200, 100, 50), (200, 0, 0)),
        (FilterKind.GREEN, (200, 100, 50), (0, 100, 0)),
        (FilterKind.BLUE, (200, 100, 50), (0, 0, 50)),
        (FilterKind.BRIGHTEN_VALUE, (100, 50, 20), (200, 150, 120)),
        (FilterKind.BRIGHTEN_VALUE, (200, 100, 50), (255, 255, 250)),
        (FilterKind.BRIGHTEN_INTENSITY, (200, 100, 50), (255, 216, 166)),
        (FilterKind.BRIGHTEN_LUMA, (200, 100, 50), (255, 218, 168)),
        (FilterKind.DARKEN_VALUE, (200, 100, 50), (0, 0, 0)),
        (FilterKind.DARKEN_INTENSITY, (200, 100, 50), (84, 0, 0)),
        (FilterKind.DARKEN_LUMA, (200, 100, 50), (82, 0, 0)),
        (FilterKind.DARKEN_LUMA, (10, 20, 31), (0, 1, 12)),
    ],
)
def test_self_adjust(kind, rgb, expected) -> None:
    assert _apply_single(kind, rgb) == Pixel(*expected)


@pytest.mark.parametrize("kind", list(FilterKind))
def test_alpha_is_preserved(kind) -> None:
    assert _apply_single(kind, (200, 100, 50), alpha=77).alpha == 77


def test_metrics_agree_with_pixel() -> None:
    rng = np.random.default_rng(0)
    array = rng.integers(0, 256, size=(8, 8, 3))
    canvas = Canvas.fromarray(array)
    C = canvas.numpy()[:, :, :3].astype(np.int32)
    intensity = filters._intensity(C)
    value = filters._value(C)
    luma = filters._luma(C)
    for row in range(8):
        for col in range(8):
            pixel = canvas.get_pixel(row, col)
            assert intensity[row, col, 0] == pixel.intensity
            assert value[row, col, 0] == pixel.value
            assert luma[row, col, 0] == pixel.luma


@pytest.mark.parametrize(
    "kind",
    [
        FilterKind.BRIGHTEN_VALUE,
        FilterKind.BRIGHTEN_INTENSITY,
        FilterKind.BRIGHTEN_LUMA,
        FilterKind.DARKEN_VALUE,
        FilterKind.DARKEN_INTENSITY,
        FilterKind.DARKEN_LUMA,
    ],
)
def test_brighten_darken_clamp(kind) -> None:
    rng = np.random.default_rng(1)
    layer = Layer("noise", 16, 16, kind)
    layer.set_canvas(Canvas.fromarray(rng.integers(0, 256, size=(16, 16, 3))))
    source = layer.numpy()[:, :, :3].astype(np.int32)
    result = filters.apply([layer], layer).numpy()[:, :, :3].astype(np.int32)
    if kind.name.startswith("BRIGHTEN"):
        assert (result >= source).all()
        assert (result[source == 255] == 255).all()
    else:
        assert (result <= source).all()
        assert (result[source == 0] == 0).all()


@pytest.mark.parametrize(
    "kind, base, top, expected",
    [
        (FilterKind.MULTIPLY, (128, 128, 128), (200, 100, 50), (100, 50, 25)),
        (FilterKind.MULTIPLY, (255, 255, 255), (200, 100, 50), (200, 100, 50)),
        (FilterKind.MULTIPLY, (0, 0, 0), (200, 100, 50), (0, 0, 0)),
        (FilterKind.SCREEN, (128, 128, 128), (200, 100, 50), (228, 178, 153)),
        (FilterKind.SCREEN, (0, 0, 0), (200, 100, 50), (200, 100, 50)),
        (FilterKind.SCREEN, (255, 255, 255), (200, 100, 50), (255, 255, 255)),
        (FilterKind.DIFFERENCE, (128, 128, 128), (200, 100, 50), (72, 28, 78)),
        (FilterKind.DIFFERENCE, (200, 100, 50), (200, 100, 50), (0, 0, 0)),
    ],
)
def test_anchored_blend(kind, base, top, expected) -> None:
    bottom = _layer("bottom", base)
    target = _layer("target", top, kind)
    result = filters.apply([bottom, target], target)
    assert all(pixel == Pixel(*expected) for pixel in result.pixels())


def test_anchored_blend_uses_bottom_layer() -> None:
    bottom = _layer("bottom", (128, 128, 128))
    middle = _layer("middle", (255, 255, 255))
    target = _layer("target", (200, 100, 50), FilterKind.MULTIPLY)
    result = filters.apply([bottom, middle, target], target)
    assert result.get_pixel(0, 0) == Pixel(100, 50, 25)


def test_anchored_blend_reads_visible_base() -> None:
    bottom = _layer("bottom", (100, 200, 50), FilterKind.RED)
    target = _layer("target", (255, 255, 255), FilterKind.MULTIPLY)
    stack = [bottom, target]
    bottom.recompute(stack)
    assert filters.apply(stack, target).get_pixel(0, 0) == Pixel(100, 0, 0)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (FilterKind.MULTIPLY, (0, 0, 0)),
        (FilterKind.SCREEN, (200, 100, 50)),
        (FilterKind.DIFFERENCE, (200, 100, 50)),
    ],
)
def test_anchored_blend_without_base(kind, expected) -> None:
    target = _layer("target", (200, 100, 50), kind)
    assert filters.apply([target], target).get_pixel(0, 0) == Pixel(*expected)
    # The bottom-most layer has nothing below it either.
    above = _layer("above", (1, 1, 1))
    assert filters.apply([target, above], target).get_pixel(0, 0) == Pixel(*expected)


def test_anchored_blend_with_max_value() -> None:
    bottom = _layer("bottom", (50, 50, 50))
    target = _layer("target", (100, 20, 0), FilterKind.MULTIPLY)
    result = filters.apply([bottom, target], target, max_value=100)
    assert result.get_pixel(0, 0) == Pixel(50, 10, 0)


@pytest.mark.parametrize(
    "kind, rgb, expected",
    [
        (FilterKind.BRIGHTEN_VALUE, (90, 90, 90), (100, 100, 100)),
        (FilterKind.BRIGHTEN_INTENSITY, (10, 40, 70), (50, 80, 100)),
        (FilterKind.BRIGHTEN_LUMA, (20, 20, 20), (40, 40, 40)),
        (FilterKind.DARKEN_VALUE, (90, 40, 10), (0, 0, 0)),
        (FilterKind.NORMAL, (200, 50, 0), (100, 50, 0)),
    ],
)
def test_self_adjust_with_max_value(kind, rgb, expected) -> None:
    layer = _layer("target", rgb, kind)
    result = filters.apply([layer], layer, max_value=100)
    assert all(pixel == Pixel(*expected) for pixel in result.pixels())


@pytest.mark.parametrize("max_value", [1, 100, 254])
def test_brighten_never_exceeds_max_value(max_value: int) -> None:
    rng = np.random.default_rng(2)
    layer = Layer("noise", 16, 16)
    layer.set_canvas(Canvas.fromarray(rng.integers(0, max_value + 1, size=(16, 16, 3))))
    for kind in (
        FilterKind.BRIGHTEN_VALUE,
        FilterKind.BRIGHTEN_INTENSITY,
        FilterKind.BRIGHTEN_LUMA,
    ):
        layer.set_filter(kind)
        result = filters.apply([layer], layer, max_value=max_value).numpy()
        assert result[:, :, :3].max() <= max_value


def test_apply_does_not_mutate() -> None:
    bottom = _layer("bottom", (128, 128, 128))
    target = _layer("target", (200, 100, 50), FilterKind.SCREEN)
    before = (bottom.numpy(), target.numpy())
    filters.apply([bottom, target], target)
    assert np.array_equal(bottom.numpy(), before[0])
    assert np.array_equal(target.numpy(), before[1])
    assert target.visible is target.canvas


def test_apply_per_pixel() -> None:
    target = Layer("target", 1, 3, FilterKind.BRIGHTEN_VALUE)
    target.set_canvas(from_rgb([[(0, 0, 0), (10, 0, 0), (250, 5, 5)]]))
    result = filters.apply([target], target)
    assert [p.rgb for p in result.pixels()] == [(0, 0, 0), (20, 10, 10), (255, 255, 255)]
