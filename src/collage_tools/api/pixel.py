"""
Pixel module.

:py:class:`Pixel` is an immutable RGBA value with 8-bit channels. It is the
per-pixel view onto a :py:class:`~collage_tools.api.canvas.Canvas`; bulk
arithmetic happens on the canvas arrays in
:py:mod:`collage_tools.composite.filters` and uses the same formulas as the
derived metrics here.
"""

import logging
import math

from attrs import astuple, field, frozen
from attrs.validators import ge, le

from collage_tools.constants import MAX_CHANNEL_VALUE

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

_CHANNEL = [ge(0), le(MAX_CHANNEL_VALUE)]


def clamp(value: float, maximum: int = MAX_CHANNEL_VALUE) -> int:
    """Clamp a channel value into [0, maximum]."""
    return int(min(max(value, 0), maximum))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@frozen
class Pixel:
    """
    RGBA color. Channels must be within [0, 255]; use :py:meth:`clamped` to
    build a pixel from arithmetic that may overflow.

    .. py:attribute:: red
    .. py:attribute:: green
    .. py:attribute:: blue
    .. py:attribute:: alpha
    """

    red: int = field(default=0, validator=_CHANNEL)
    green: int = field(default=0, validator=_CHANNEL)
    blue: int = field(default=0, validator=_CHANNEL)
    alpha: int = field(default=MAX_CHANNEL_VALUE, validator=_CHANNEL)

    @classmethod
    def clamped(
        cls,
        red: float,
        green: float,
        blue: float,
        alpha: float = MAX_CHANNEL_VALUE,
    ) -> "Pixel":
        """Create a pixel, clamping every channel into [0, 255]."""
        return cls(clamp(red), clamp(green), clamp(blue), clamp(alpha))

    @property
    def intensity(self) -> int:
        """Average of the color channels, integer division."""
        return (self.red + self.green + self.blue) // 3

    @property
    def value(self) -> int:
        """Largest color channel."""
        return max(self.red, self.green, self.blue)

    @property
    def luma(self) -> int:
        """Rec. 709 luma, rounded half up."""
        wr, wg, wb = LUMA_WEIGHTS
        return round_half_up(wr * self.red + wg * self.green + wb * self.blue)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def astuple(self) -> tuple[int, int, int, int]:
        return astuple(self)
