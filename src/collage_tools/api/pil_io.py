"""
PIL IO module.

Conversion between :py:class:`~collage_tools.api.canvas.Canvas` and
:py:class:`PIL.Image.Image`, used for compressed image formats (PNG, JPEG,
BMP, ...). The plain ``P3`` text format is handled by
:py:mod:`collage_tools.formats.plain` instead.
"""
import logging
import os
from typing import Optional, Union

import numpy as np
from PIL import Image

from collage_tools.api.canvas import Canvas
from collage_tools.constants import PLAIN_SUFFIX
from collage_tools.exceptions import FileNotFound, MalformedFile

logger = logging.getLogger(__name__)

#: Pillow formats written without an alpha channel.
_NO_ALPHA_FORMATS = {"JPEG", "BMP", "PPM"}


def topil(canvas: Canvas) -> Image.Image:
    """Convert a canvas to an RGBA image."""
    return Image.fromarray(canvas.numpy(), "RGBA")


def frompil(image: Image.Image) -> Canvas:
    """
    Convert an image to a canvas. Alpha is dropped and every pixel becomes
    opaque, as with the text formats.
    """
    if image.mode != "RGB":
        image = image.convert("RGB")
    return Canvas.fromarray(np.asarray(image, dtype=np.uint8))


def open_image(path: Union[str, os.PathLike]) -> Canvas:
    """
    Read an image file into a canvas. ``.ppm`` files go through the plain
    text format, everything else through Pillow.

    :raise FileNotFound: if the file does not exist.
    :raise MalformedFile: if the file cannot be decoded.
    """
    if os.fspath(path).lower().endswith(PLAIN_SUFFIX):
        from collage_tools.formats import plain

        return plain.read(path)
    if not os.path.exists(path):
        raise FileNotFound("File %s not found!" % os.fspath(path))
    try:
        with Image.open(path) as image:
            canvas = frompil(image)
    except Image.UnidentifiedImageError as e:
        raise MalformedFile("Cannot decode image %s: %s" % (os.fspath(path), e)) from e
    logger.debug("Loaded %dx%d image from %s", canvas.width, canvas.height, path)
    return canvas


def save_image(
    canvas: Canvas,
    path: Union[str, os.PathLike],
    format: Optional[str] = None,
    max_value: int = 255,
) -> None:
    """
    Write a canvas to an image file.

    :param format: file format or extension such as ``"png"``, ``"jpg"`` or
        ``"ppm"``. Taken from the file suffix when omitted.
    :param max_value: channel maximum written to plain images.
    :raise ValueError: for a format Pillow cannot write.
    """
    extension = "." + (format or os.path.splitext(os.fspath(path))[1]).lstrip(".").lower()
    if extension == PLAIN_SUFFIX:
        from collage_tools.formats import plain

        plain.write(canvas, path, max_value=max_value)
        return

    pil_format = Image.registered_extensions().get(extension)
    if pil_format is None:
        raise ValueError("Unsupported image format: %s" % extension.lstrip("."))
    image = topil(canvas)
    if pil_format in _NO_ALPHA_FORMATS:
        image = image.convert("RGB")
    image.save(path, format=pil_format)
    logger.debug(
        "Saved %dx%d %s image to %s", canvas.width, canvas.height, pil_format, path
    )
