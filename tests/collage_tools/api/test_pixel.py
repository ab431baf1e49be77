import logging

import attrs
import pytest

from collage_tools.api.pixel import Pixel, clamp, round_half_up

logger = logging.getLogger(__name__)


def test_pixel_defaults() -> None:
    pixel = Pixel()
    assert pixel.astuple() == (0, 0, 0, 255)


@pytest.mark.parametrize(
    "channels",
    [
        (-1, 0, 0, 0),
        (0, 256, 0, 0),
        (0, 0, 1000, 0),
        (0, 0, 0, -5),
    ],
)
def test_pixel_rejects_out_of_range(channels) -> None:
    with pytest.raises(ValueError):
        Pixel(*channels)


def test_pixel_accepts_bounds() -> None:
    assert Pixel(0, 0, 0, 0).astuple() == (0, 0, 0, 0)
    assert Pixel(255, 255, 255, 255).astuple() == (255, 255, 255, 255)


def test_pixel_rejects_non_numbers() -> None:
    with pytest.raises(TypeError):
        Pixel(0, "1", 0, 0)  # type: ignore[arg-type]


def test_pixel_is_immutable() -> None:
    pixel = Pixel(1, 2, 3)
    with pytest.raises(attrs.exceptions.FrozenInstanceError):
        pixel.red = 10  # type: ignore[misc]


def test_pixel_equality() -> None:
    assert Pixel(1, 2, 3, 4) == Pixel(1, 2, 3, 4)
    assert Pixel(1, 2, 3, 4) != Pixel(1, 2, 3, 5)
    assert len({Pixel(1, 2, 3), Pixel(1, 2, 3)}) == 1


@pytest.mark.parametrize(
    "rgb, intensity, value, luma",
    [
        ((0, 0, 0), 0, 0, 0),
        ((255, 255, 255), 255, 255, 255),
        ((200, 100, 50), 116, 200, 118),
        ((10, 20, 31), 20, 31, 19),
        ((255, 0, 0), 85, 255, 54),
        ((0, 0, 255), 85, 255, 18),
    ],
)
def test_pixel_metrics(rgb, intensity, value, luma) -> None:
    pixel = Pixel(*rgb)
    assert pixel.intensity == intensity
    assert pixel.value == value
    assert pixel.luma == luma


def test_pixel_clamped() -> None:
    assert Pixel.clamped(300, -20, 128.9, 999) == Pixel(255, 0, 128, 255)


def test_clamp() -> None:
    assert clamp(-1) == 0
    assert clamp(256) == 255
    assert clamp(12, maximum=10) == 10


def test_round_half_up() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
