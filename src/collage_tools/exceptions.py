"""
Exceptions raised by collage_tools.

Every error derives from :py:class:`Error` and, where one fits, from the
builtin exception a caller would naturally catch.
"""


class Error(Exception):
    """Base class of collage_tools errors."""


class InvalidDimensions(Error, ValueError):
    """Negative height or width, or an unusable max channel value."""


class DuplicateLayer(Error, ValueError):
    """A layer with the same name already exists in the project."""


class UnknownLayer(Error, KeyError):
    """No layer with the given name exists in the project."""

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise.
        return Exception.__str__(self)


class IndexOutOfRange(Error, IndexError):
    """A pixel coordinate or a layer index is out of bounds."""


class OutOfRange(Error, ValueError):
    """An image placement offset is outside the project."""


class NoOpSwap(Error, ValueError):
    """Both layers of a swap already occupy the same position."""


class MalformedFile(Error, ValueError):
    """A project or image file could not be parsed."""


class UnknownFilter(MalformedFile):
    """A filter name does not match any :py:class:`~collage_tools.constants.FilterKind`."""


class FileNotFound(Error, FileNotFoundError):
    """A file to load does not exist."""


class NoProject(Error, RuntimeError):
    """An operation needs a project but none has been created or loaded."""
