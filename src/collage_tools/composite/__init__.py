"""
Composite module for filter application and flattening.

Key modules:

- :py:mod:`collage_tools.composite.composite`: flattening pass over a stack
- :py:mod:`collage_tools.composite.filters`: filter implementations

Example usage::

    from collage_tools import Project

    project = Project.new(10, 10)
    canvas = project.render()
"""

from collage_tools.composite.composite import composite
from collage_tools.composite.filters import apply

__all__ = [
    "apply",
    "composite",
]
