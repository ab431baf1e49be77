"""
Plain image format.

A single canvas as text::

    P3
    <width> <height>
    <max_value>
    <R> <G> <B>      (width * height lines, row-major)

Alpha is not stored; pixels read back are opaque.
"""

import logging
from typing import IO

import numpy as np

from collage_tools.api.canvas import Canvas
from collage_tools.constants import DEFAULT_MAX_VALUE, MAX_CHANNEL_VALUE, PLAIN_MAGIC
from collage_tools.exceptions import InvalidDimensions, MalformedFile
from collage_tools.formats.tokens import PathOrFile, Tokens, open_text

logger = logging.getLogger(__name__)


def read_header(tokens: Tokens, magic: str) -> tuple[int, int, int]:
    """
    Read the magic token, the size and the max value.

    :return: (width, height, max_value)
    :raise MalformedFile: on a wrong magic token or a bad size.
    """
    token = tokens.next()
    if token != magic:
        raise MalformedFile("Invalid file: expected %r, got %r" % (magic, token))
    width = tokens.next_int()
    height = tokens.next_int()
    max_value = tokens.next_int()
    if width < 0 or height < 0:
        raise MalformedFile("Invalid size: %dx%d" % (width, height))
    if not 0 < max_value <= MAX_CHANNEL_VALUE:
        raise MalformedFile("Invalid max value: %d" % max_value)
    return width, height, max_value


def read_canvas(tokens: Tokens, height: int, width: int, max_value: int) -> Canvas:
    """Read ``height * width`` RGB triples into an opaque canvas."""
    values = tokens.take_ints(height * width * 3)
    array = np.array(values, dtype=np.int64).reshape((height, width, 3))
    if array.size and (array.min() < 0 or array.max() > max_value):
        raise MalformedFile("Channel value outside [0, %d]" % max_value)
    return Canvas.fromarray(array)


def write_header(f: IO[str], magic: str, width: int, height: int, max_value: int) -> None:
    f.write("%s\n%d %d\n%d\n" % (magic, width, height, max_value))


def write_canvas(f: IO[str], canvas: Canvas, max_value: int) -> None:
    """Write the RGB triples of ``canvas``, clamped to ``max_value``."""
    color = np.minimum(canvas.numpy()[:, :, :3], max_value).reshape((-1, 3))
    f.writelines("%d %d %d\n" % tuple(rgb) for rgb in color.tolist())


def read(fp: PathOrFile) -> Canvas:
    """
    Read a plain image.

    :param fp: filename or text file object.
    :raise FileNotFound: if the file does not exist.
    :raise MalformedFile: on a wrong magic token, truncated or invalid data.
    """
    with open_text(fp) as f:
        tokens = Tokens(f)
    width, height, max_value = read_header(tokens, PLAIN_MAGIC)
    canvas = read_canvas(tokens, height, width, max_value)
    logger.debug("Read %dx%d plain image", width, height)
    return canvas


def write(
    canvas: Canvas, fp: PathOrFile, max_value: int = DEFAULT_MAX_VALUE
) -> None:
    """
    Write a plain image.

    :param fp: filename or text file object.
    """
    if not 0 < max_value <= MAX_CHANNEL_VALUE:
        raise InvalidDimensions("Invalid max value: %d" % max_value)
    with open_text(fp, "w") as f:
        write_header(f, PLAIN_MAGIC, canvas.width, canvas.height, max_value)
        write_canvas(f, canvas, max_value)
    logger.debug("Wrote %dx%d plain image", canvas.width, canvas.height)
