"""
High-level API.

- :py:class:`~collage_tools.api.project.Project`: ordered layer stack and
  compositor
- :py:class:`~collage_tools.api.layers.Layer`: named canvas with a filter
- :py:class:`~collage_tools.api.canvas.Canvas`: pixel grid
- :py:class:`~collage_tools.api.pixel.Pixel`: RGBA value
"""

from collage_tools.api.canvas import Canvas
from collage_tools.api.layers import Layer
from collage_tools.api.pixel import Pixel
from collage_tools.api.project import Project, ProjectHolder

__all__ = ["Canvas", "Layer", "Pixel", "Project", "ProjectHolder"]
