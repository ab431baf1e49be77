"""
collage-tools: layered image compositor.

A project is an ordered stack of named layers. Each layer holds a canvas and
a filter; rendering runs every filter bottom to top and returns the visible
pixels of the top-most layer.

Basic usage::

    from collage_tools import Project

    project = Project.new(100, 100)
    project.add_layer("overlay", "screen")
    project.save("example.collage")

    project = Project.open("example.collage")
    project.save_image("example.png")

Architecture:

- :py:mod:`collage_tools.api`: pixels, canvases, layers and projects
- :py:mod:`collage_tools.composite`: filters and the flattening pass
- :py:mod:`collage_tools.formats`: collage and plain image text formats
- :py:mod:`collage_tools.session`: interactive command loop
"""

from collage_tools.api.project import Project
from collage_tools.version import __version__

__all__ = ["Project", "__version__"]
