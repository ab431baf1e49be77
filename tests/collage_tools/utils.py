import logging
import os
from typing import Sequence

import numpy as np

from collage_tools.api.canvas import Canvas

logging.basicConfig(level=logging.DEBUG)

TEST_ROOT = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))


def full_name(filename: str) -> str:
    return os.path.join(TEST_ROOT, "collage_files", filename)


def solid(height: int, width: int, rgb: Sequence[int], alpha: int = 255) -> Canvas:
    """Canvas filled with a single color."""
    return Canvas.blank(height, width, tuple(rgb) + (alpha,))


def from_rgb(rows: Sequence[Sequence[Sequence[int]]]) -> Canvas:
    """Opaque canvas from nested rows of RGB triples."""
    return Canvas.fromarray(np.array(rows, dtype=np.int64).reshape((len(rows), -1, 3)))
