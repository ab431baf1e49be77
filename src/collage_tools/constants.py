"""
Various constants for collage_tools
"""
from enum import Enum

from collage_tools.exceptions import UnknownFilter

#: Upper bound of an 8-bit channel.
MAX_CHANNEL_VALUE = 255

#: Default ``max_value`` of a new project.
DEFAULT_MAX_VALUE = MAX_CHANNEL_VALUE

#: Name of the layer every new project starts with.
BACKGROUND_LAYER = "background"

#: Magic token of the multi-layer project format.
COLLAGE_MAGIC = "C1"

#: Magic token of the plain single-canvas image format.
PLAIN_MAGIC = "P3"

#: Leading character of comment lines in both text formats.
COMMENT_CHAR = "#"

#: File suffixes the command surface insists on.
COLLAGE_SUFFIX = ".collage"
PLAIN_SUFFIX = ".ppm"


class FilterVariant(Enum):
    """
    How a filter obtains its inputs.

    ``SELF_ADJUST`` filters only read the layer being recomputed.
    ``ANCHORED_BLEND`` filters also read the bottom-most layer of the stack.
    """

    SELF_ADJUST = "self-adjust"
    ANCHORED_BLEND = "anchored-blend"


class FilterKind(Enum):
    """
    Filters a layer can carry. The value is the name used in project files
    and on the command surface.
    """

    NORMAL = "normal"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    BRIGHTEN_VALUE = "brighten-value"
    BRIGHTEN_INTENSITY = "brighten-intensity"
    BRIGHTEN_LUMA = "brighten-luma"
    DARKEN_VALUE = "darken-value"
    DARKEN_INTENSITY = "darken-intensity"
    DARKEN_LUMA = "darken-luma"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    DIFFERENCE = "difference"

    @property
    def variant(self) -> FilterVariant:
        if self in (FilterKind.MULTIPLY, FilterKind.SCREEN, FilterKind.DIFFERENCE):
            return FilterVariant.ANCHORED_BLEND
        return FilterVariant.SELF_ADJUST

    @staticmethod
    def from_name(name: str) -> "FilterKind":
        """
        Resolve a filter by its file-format name.

        :raise UnknownFilter: if no filter carries the name.
        """
        try:
            return FilterKind(name)
        except ValueError:
            raise UnknownFilter("Unknown filter name: %r" % (name,)) from None

    @staticmethod
    def names() -> list[str]:
        return [kind.value for kind in FilterKind]
