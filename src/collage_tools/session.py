"""
Interactive command session.

A :py:class:`Session` reads whitespace-separated tokens from a text stream and
drives a :py:class:`~collage_tools.api.project.ProjectHolder`::

    new-project <height> <width> <max-value>
    load-project <path>
    save-project <path>
    save-image <path> <format>
    set-filter <filter-name> <layer-name>
    add-layer <layer-name>
    add-image-to-layer <x> <y> <image-path> <layer-name>
    q

Errors are reported through the view and the session goes on with the next
command. The session ends on ``q``, ``Q`` or the end of the input.

Example::

    import io
    from collage_tools.session import Session

    Session(io.StringIO("new-project 10 10 255 add-layer top q")).run()
"""

import logging
from typing import IO, Callable, Iterator, Optional

from collage_tools.api.pil_io import open_image
from collage_tools.api.project import Project, ProjectHolder
from collage_tools.constants import COLLAGE_SUFFIX, PLAIN_SUFFIX, FilterKind
from collage_tools.exceptions import Error, UnknownFilter
from collage_tools.view import TextView

logger = logging.getLogger(__name__)

QUIT_COMMANDS = ("q", "Q")


class _EndOfInput(Exception):
    pass


class Session:
    """
    Command loop over a text stream.

    :param stream: source of commands.
    :param view: message sink, a :py:class:`~collage_tools.view.TextView` on
        stdout by default.
    :param holder: current project slot, empty by default.
    """

    def __init__(
        self,
        stream: IO[str],
        view: Optional[TextView] = None,
        holder: Optional[ProjectHolder] = None,
    ):
        self._tokens = _tokenize(stream)
        self.view = view if view is not None else TextView()
        self.holder = holder if holder is not None else ProjectHolder()
        self._commands: dict[str, Callable[[], None]] = {
            "new-project": self.new_project,
            "load-project": self.load_project,
            "save-project": self.save_project,
            "save-image": self.save_image,
            "set-filter": self.set_filter,
            "add-layer": self.add_layer,
            "add-image-to-layer": self.add_image_to_layer,
        }

    @property
    def project(self) -> Project:
        return self.holder.project

    def run(self) -> None:
        """Process commands until quit or the end of the input."""
        self.message("Welcome to the Image Processor!")
        self.message("press q to quit!")
        self.message("Possible commands include:")
        for name in self._commands:
            self.message(name)
        while True:
            try:
                command = self._next()
            except _EndOfInput:
                break
            if command in QUIT_COMMANDS:
                break
            handler = self._commands.get(command)
            if handler is None:
                self.message("Invalid command entered. Please try again.")
                continue
            try:
                handler()
            except _EndOfInput:
                self.message("Missing arguments for %s" % command)
                break
            except (Error, OSError, ValueError) as e:
                logger.warning("%s failed: %s", command, e)
                self.message("%s failed: %s" % (command, e))
        logger.debug("Session finished")

    def message(self, text: str) -> None:
        """Render a line through the view; rendering failures are logged."""
        try:
            self.view.render_message(text + "\n")
        except OSError as e:
            logger.error("Error rendering message: %s", e)

    def _next(self) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise _EndOfInput() from None

    def _next_int(self) -> int:
        token = self._next()
        try:
            return int(token)
        except ValueError:
            raise ValueError("Expected an integer, got %r" % token) from None

    def new_project(self) -> None:
        height, width, max_value = self._next_int(), self._next_int(), self._next_int()
        self.holder.new_project(height, width, max_value)
        self.message("new Project created!")

    def load_project(self) -> None:
        path = self._next()
        self.holder.load(path)
        self.message("Project %s loaded!" % path)

    def save_project(self) -> None:
        path = self._next()
        if not path.endswith(COLLAGE_SUFFIX):
            raise ValueError("Project path must end with %s: %s" % (COLLAGE_SUFFIX, path))
        self.project.save(path)
        self.message("Project saved to %s" % path)

    def save_image(self) -> None:
        path, format = self._next(), self._next()
        if format.lower() == PLAIN_SUFFIX.lstrip(".") and not path.endswith(PLAIN_SUFFIX):
            raise ValueError("Image path must end with %s: %s" % (PLAIN_SUFFIX, path))
        self.project.save_image(path, format)
        self.message("Image saved to %s" % path)

    def set_filter(self) -> None:
        filter_name, layer_name = self._next(), self._next()
        try:
            kind = FilterKind.from_name(filter_name)
        except UnknownFilter:
            logger.warning("Unknown filter %r, using normal", filter_name)
            kind = FilterKind.NORMAL
        self.project.set_filter(layer_name, kind)
        self.message("Filter of %s set to %s" % (layer_name, kind.value))

    def add_layer(self) -> None:
        name = self._next()
        self.project.add_layer(name)
        self.message("Layer %s added" % name)

    def add_image_to_layer(self) -> None:
        x, y = self._next_int(), self._next_int()
        path, layer_name = self._next(), self._next()
        project = self.project
        layer = project.get_layer(layer_name)
        image = open_image(path)
        self.message("Image loaded successfully")
        project.add_image(x, y, image, layer)
        self.message("Image added to %s" % layer_name)


def _tokenize(stream: IO[str]) -> Iterator[str]:
    for line in stream:
        yield from line.split()
