"""
Text file formats.

- :py:mod:`collage_tools.formats.collage`: multi-layer project files (``C1``)
- :py:mod:`collage_tools.formats.plain`: single-canvas images (``P3``)
"""

from collage_tools.formats.collage import CollageDocument, LayerRecord

__all__ = ["CollageDocument", "LayerRecord"]
