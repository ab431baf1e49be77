"""
Collage project format.

A project with all of its layers as text, bottom layer first::

    C1
    <width> <height>
    <max_value>
    <layer name> <filter name>
    <R> <G> <B>      (width * height lines, row-major)
    ...              (repeated per layer)

Alpha is not stored; pixels read back are opaque.

:py:class:`CollageDocument` is the file-level record. Use
:py:meth:`collage_tools.api.project.Project.open` to get a project.
"""

import logging
from typing import IO

from attrs import define, field
from attrs.validators import ge, le

from collage_tools.api.canvas import Canvas
from collage_tools.constants import (
    COLLAGE_MAGIC,
    COMMENT_CHAR,
    DEFAULT_MAX_VALUE,
    MAX_CHANNEL_VALUE,
    FilterKind,
)
from collage_tools.exceptions import MalformedFile, UnknownFilter
from collage_tools.formats.plain import (
    read_canvas,
    read_header,
    write_canvas,
    write_header,
)
from collage_tools.formats.tokens import PathOrFile, Tokens, open_text

logger = logging.getLogger(__name__)


@define(eq=False)
class LayerRecord:
    """
    Layer as stored in a collage file.

    .. py:attribute:: name
    .. py:attribute:: filter
    .. py:attribute:: canvas
    """

    name: str
    filter: FilterKind
    canvas: Canvas

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayerRecord):
            return NotImplemented
        return (self.name, self.filter) == (other.name, other.filter) and (
            self.canvas == other.canvas
        )


@define
class CollageDocument:
    """
    Collage file.

    .. py:attribute:: width
    .. py:attribute:: height
    .. py:attribute:: max_value
    .. py:attribute:: layers

        List of :py:class:`LayerRecord`, bottom-most first.
    """

    width: int = field(default=0, validator=ge(0))
    height: int = field(default=0, validator=ge(0))
    max_value: int = field(
        default=DEFAULT_MAX_VALUE, validator=[ge(1), le(MAX_CHANNEL_VALUE)]
    )
    layers: list[LayerRecord] = field(factory=list)

    @classmethod
    def read(cls, fp: PathOrFile) -> "CollageDocument":
        """
        Read a collage file.

        :param fp: filename or text file object.
        :raise FileNotFound: if the file does not exist.
        :raise MalformedFile: on a wrong magic token, truncated data, an
            unknown filter name, a duplicate layer name or no layers at all.
        """
        with open_text(fp) as f:
            tokens = Tokens(f)
        width, height, max_value = read_header(tokens, COLLAGE_MAGIC)
        layers = []
        names = set()
        while tokens.has_next():
            name = tokens.next()
            filter_name = tokens.next()
            try:
                kind = FilterKind.from_name(filter_name)
            except UnknownFilter as e:
                raise UnknownFilter(
                    "Invalid filter name %r for layer %r" % (filter_name, name)
                ) from e
            if name in names:
                raise MalformedFile("Duplicate layer name %r" % name)
            names.add(name)
            canvas = read_canvas(tokens, height, width, max_value)
            layers.append(LayerRecord(name, kind, canvas))
            logger.debug("Read layer %r (%s)", name, kind.value)
        if not layers:
            raise MalformedFile("Collage file has no layers")
        return cls(width, height, max_value, layers)

    def write(self, fp: PathOrFile) -> None:
        """
        Write a collage file.

        :param fp: filename or text file object.
        :raise ValueError: if a layer name cannot be stored, see
            :py:func:`check_layer_name`. The file is not touched then.
        """
        for layer in self.layers:
            check_layer_name(layer.name)
        with open_text(fp, "w") as f:
            self._write(f)

    def _write(self, f: IO[str]) -> None:
        write_header(f, COLLAGE_MAGIC, self.width, self.height, self.max_value)
        for layer in self.layers:
            f.write("%s %s\n" % (layer.name, layer.filter.value))
            write_canvas(f, layer.canvas, self.max_value)
            logger.debug("Wrote layer %r (%s)", layer.name, layer.filter.value)


def check_layer_name(name: str) -> None:
    """
    Check that ``name`` survives a write/read cycle.

    :raise ValueError: if the name is empty, is not ASCII, contains whitespace
        or starts with the comment character.
    """
    if (
        not name
        or not name.isascii()
        or any(c.isspace() for c in name)
        or name.startswith(COMMENT_CHAR)
    ):
        raise ValueError("Layer name %r cannot be stored" % name)
