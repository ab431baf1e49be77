"""
Project module.

This module provides the :py:class:`Project` class, the compositor that owns
an ordered stack of :py:class:`~collage_tools.api.layers.Layer` objects and
flattens them into a single canvas.

Key functionality:

- **Creating**: :py:meth:`Project.new` and :py:meth:`Project.new_project`
- **Layer access**: by name, by index, iteration in z-order
- **Editing**: add layers, set filters, place images, swap layers
- **Rendering**: :py:meth:`Project.render` flattens the stack
- **Persistence**: :py:meth:`Project.open`, :py:meth:`Project.save` and
  :py:meth:`Project.save_image`

Example usage::

    from collage_tools import Project

    project = Project.new(100, 200)
    project.add_layer("top", "multiply")
    project.add_image(0, 0, image, "top")
    project.save("project.collage")
    project.save_image("flat.png")

Index 0 is the bottom-most layer. Every layer shares the project's size.
"""

import logging
import os
from typing import Iterator, Optional, Union, overload

from PIL import Image

from collage_tools.api.canvas import Canvas
from collage_tools.api.layers import Layer
from collage_tools.composite import composite
from collage_tools.constants import (
    BACKGROUND_LAYER,
    DEFAULT_MAX_VALUE,
    MAX_CHANNEL_VALUE,
    FilterKind,
)
from collage_tools.exceptions import (
    DuplicateLayer,
    IndexOutOfRange,
    InvalidDimensions,
    NoOpSwap,
    NoProject,
    OutOfRange,
    UnknownLayer,
)
from collage_tools.formats.collage import CollageDocument, LayerRecord
from collage_tools.formats.tokens import PathOrFile

logger = logging.getLogger(__name__)


class Project:
    """
    Ordered stack of layers sharing one size.

    Use :py:meth:`new` for a fresh project with a ``"background"`` layer, or
    :py:meth:`open` to load a collage file.

    :param height: canvas height of every layer.
    :param width: canvas width of every layer.
    :param max_value: channel maximum, written to files.
    :param layers: initial layers, bottom-most first.
    :raise InvalidDimensions: on negative size or a max value outside
        [1, 255].
    :raise DuplicateLayer: if two layers share a name.
    """

    def __init__(
        self,
        height: int,
        width: int,
        max_value: int = DEFAULT_MAX_VALUE,
        layers: Optional[list[Layer]] = None,
    ):
        _check_dimensions(height, width, max_value)
        self._height = height
        self._width = width
        self._max_value = max_value
        self._layers: list[Layer] = []
        self._names: dict[str, Layer] = {}
        for layer in layers or []:
            if layer.name in self._names:
                raise DuplicateLayer("The layer %r already exists." % layer.name)
            if (layer.height, layer.width) != (height, width):
                raise ValueError(
                    "Layer %r is %dx%d, project is %dx%d"
                    % (layer.name, layer.width, layer.height, width, height)
                )
            self._names[layer.name] = layer
            self._layers.append(layer)

    @classmethod
    def new(
        cls, height: int, width: int, max_value: int = DEFAULT_MAX_VALUE
    ) -> "Project":
        """
        Create a project holding a single ``"background"`` layer.

        :raise InvalidDimensions: if height or width is negative.
        """
        self = cls(height, width, max_value)
        self.add_layer(BACKGROUND_LAYER)
        return self

    @classmethod
    def open(cls, fp: PathOrFile) -> "Project":
        """
        Load a collage file.

        :param fp: filename or text file object.
        :raise FileNotFound: if the file does not exist.
        :raise MalformedFile: if the file cannot be parsed.
        """
        document = CollageDocument.read(fp)
        layers = []
        for record in document.layers:
            layer = Layer(record.name, document.height, document.width, record.filter)
            layer.set_canvas(record.canvas)
            layers.append(layer)
        logger.debug(
            "Loaded %dx%d project with %d layer(s)",
            document.width,
            document.height,
            len(layers),
        )
        return cls(document.height, document.width, document.max_value, layers)

    def save(self, fp: PathOrFile) -> None:
        """
        Write the project as a collage file.

        :param fp: filename or text file object.
        """
        document = CollageDocument(
            self._width,
            self._height,
            self._max_value,
            [
                LayerRecord(layer.name, layer.filter, layer.canvas.copy())
                for layer in self._layers
            ],
        )
        document.write(fp)

    def save_image(
        self, path: Union[str, os.PathLike], format: Optional[str] = None
    ) -> None:
        """
        Render the project and write the result as an image.

        :param path: output filename.
        :param format: ``"ppm"`` for the plain text format, or any format
            Pillow writes. Taken from the suffix of ``path`` when omitted.
        """
        from collage_tools.api.pil_io import save_image

        save_image(self.render(), path, format, max_value=self._max_value)

    def new_project(
        self, height: int, width: int, max_value: int = DEFAULT_MAX_VALUE
    ) -> None:
        """
        Reset this project to a single ``"background"`` layer of a new size.

        :raise InvalidDimensions: if height or width is negative. The project
            is unchanged in that case.
        """
        _check_dimensions(height, width, max_value)
        self._height = height
        self._width = width
        self._max_value = max_value
        self._layers = []
        self._names = {}
        self.add_layer(BACKGROUND_LAYER)
        logger.debug("New %dx%d project", width, height)

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return (self._width, self._height)

    @property
    def max_value(self) -> int:
        return self._max_value

    @property
    def layers(self) -> list[Layer]:
        """Layers bottom-most first. The returned list is a copy."""
        return list(self._layers)

    def layer_names(self) -> list[str]:
        """Layer names bottom-most first."""
        return [layer.name for layer in self._layers]

    def add_layer(
        self, name: str, filter: Union[FilterKind, str] = FilterKind.NORMAL
    ) -> Layer:
        """
        Add an opaque black layer on top of the stack.

        :raise DuplicateLayer: if the name is taken. Nothing changes then.
        :raise UnknownFilter: for an unknown filter name.
        """
        if name in self._names:
            raise DuplicateLayer("The layer %r already exists." % name)
        layer = Layer(name, self._height, self._width, filter)
        self._names[name] = layer
        self._layers.append(layer)
        logger.debug("Added layer %r (%s)", name, layer.filter.value)
        return layer

    def set_filter(self, name: str, filter: Union[FilterKind, str]) -> None:
        """
        Set the filter of the named layer.

        :raise UnknownLayer: if there is no such layer.
        :raise UnknownFilter: for an unknown filter name.
        """
        self.get_layer(name).set_filter(filter)

    @overload
    def get_layer(self, key: str) -> Layer: ...

    @overload
    def get_layer(self, key: int) -> Layer: ...

    def get_layer(self, key: Union[str, int]) -> Layer:
        """
        Get a layer by name or by position.

        :raise UnknownLayer: for a missing name.
        :raise IndexOutOfRange: for an index outside ``[0, len(self))``.
        """
        if isinstance(key, str):
            try:
                return self._names[key]
            except KeyError:
                raise UnknownLayer("The layer %r does not exist." % key) from None
        if not 0 <= key < len(self._layers):
            raise IndexOutOfRange(
                "Layer index %d outside [0, %d)" % (key, len(self._layers))
            )
        return self._layers[key]

    def layer_position(self, name: str) -> int:
        """
        Position of the named layer, 0 being the bottom.

        :raise UnknownLayer: if there is no such layer.
        """
        return self._layers.index(self.get_layer(name))

    @overload
    def swap_layers(self, a: int, b: int) -> None: ...

    @overload
    def swap_layers(self, a: str, b: str) -> None: ...

    def swap_layers(self, a: Union[int, str], b: Union[int, str]) -> None:
        """
        Exchange the positions of two layers, given as indices or names.

        Swapping an index with itself does nothing.

        :raise IndexOutOfRange: for an index outside the stack.
        :raise UnknownLayer: for a missing name.
        :raise NoOpSwap: if both names refer to the same position.
        """
        if isinstance(a, str) and isinstance(b, str):
            i, j = self.layer_position(a), self.layer_position(b)
            if i == j:
                raise NoOpSwap(
                    "The layers %r and %r are already in the same position." % (a, b)
                )
        elif isinstance(a, int) and isinstance(b, int):
            i, j = a, b
            self.get_layer(i)
            self.get_layer(j)
        else:
            raise TypeError("Expected two indices or two names, got %r and %r" % (a, b))
        self._layers[i], self._layers[j] = self._layers[j], self._layers[i]
        logger.debug("Swapped layers at %d and %d", i, j)

    def add_image(
        self, x: int, y: int, image: Canvas, layer: Union[Layer, str]
    ) -> None:
        """
        Place ``image`` on a layer with its top-left corner at column ``x``,
        row ``y``. Pixels falling outside the project are dropped.

        Offsets equal to the width or height pass the check and place nothing.

        :param layer: target :py:class:`Layer` or its name.
        :raise OutOfRange: if ``x`` is outside ``[0, width]`` or ``y`` is
            outside ``[0, height]``.
        :raise UnknownLayer: for a missing layer name.
        """
        if x > self._width or x < 0 or y > self._height or y < 0:
            raise OutOfRange(
                "Offset (%d, %d) outside a %dx%d project"
                % (x, y, self._width, self._height)
            )
        if isinstance(layer, str):
            layer = self.get_layer(layer)
        elif self._names.get(layer.name) is not layer:
            raise UnknownLayer("The layer %r is not in this project." % layer.name)
        layer.add_image(image, x, y)

    def render(self) -> Canvas:
        """
        Recompute every layer bottom to top and return the flattened canvas,
        which is the visible canvas of the top-most layer.
        """
        logger.debug("Rendering %d layer(s)", len(self._layers))
        return composite(self._layers, self._height, self._width, self._max_value)

    def compress_image(self) -> Image.Image:
        """Render the project as an RGBA :py:class:`PIL.Image.Image`."""
        from collage_tools.api.pil_io import topil

        return topil(self.render())

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(list(self._layers))

    def __getitem__(self, key: Union[str, int]) -> Layer:
        return self.get_layer(key)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        return "%s(size=%dx%d max_value=%d layers=%r)" % (
            self.__class__.__name__,
            self._width,
            self._height,
            self._max_value,
            self.layer_names(),
        )


class ProjectHolder:
    """
    Slot for the current project of a session.

    The slot starts empty. :py:meth:`replace` swaps in a fully built project,
    so a failed load leaves the previous project in place.
    """

    def __init__(self, project: Optional[Project] = None):
        self._project = project

    @property
    def active(self) -> bool:
        return self._project is not None

    @property
    def project(self) -> Project:
        """
        The current project.

        :raise NoProject: before a project is created or loaded.
        """
        if self._project is None:
            raise NoProject("No project: create or load one first.")
        return self._project

    def replace(self, project: Project) -> None:
        self._project = project
        logger.debug("Current project replaced by %r", project)

    def new_project(
        self, height: int, width: int, max_value: int = DEFAULT_MAX_VALUE
    ) -> Project:
        """:raise InvalidDimensions: leaving the current project in place."""
        project = Project.new(height, width, max_value)
        self.replace(project)
        return project

    def load(self, fp: PathOrFile) -> Project:
        """
        Load a collage file and make it current.

        :raise FileNotFound: leaving the current project in place.
        :raise MalformedFile: leaving the current project in place.
        """
        project = Project.open(fp)
        self.replace(project)
        return project


def _check_dimensions(height: int, width: int, max_value: int) -> None:
    if height < 0 or width < 0:
        raise InvalidDimensions(
            "Invalid height or width: height=%d, width=%d" % (height, width)
        )
    if not 0 < max_value <= MAX_CHANNEL_VALUE:
        raise InvalidDimensions(
            "Invalid max color value %d, expected [1, %d]"
            % (max_value, MAX_CHANNEL_VALUE)
        )
