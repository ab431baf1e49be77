"""
Tokenizer shared by the text formats.

Lines starting with ``#`` and blank lines are dropped, the rest is split on
whitespace.
"""

import contextlib
import logging
import os
from typing import IO, Iterator, Union

from collage_tools.constants import COMMENT_CHAR
from collage_tools.exceptions import FileNotFound, MalformedFile

logger = logging.getLogger(__name__)

PathOrFile = Union[str, os.PathLike, IO[str]]


@contextlib.contextmanager
def open_text(fp: PathOrFile, mode: str = "r") -> Iterator[IO[str]]:
    """
    Yield a text file object for a path or pass an open file through.

    :raise FileNotFound: if a path to read does not exist.
    :raise MalformedFile: if a path to read is not ASCII text.
    """
    if isinstance(fp, (str, os.PathLike)):
        try:
            f = open(fp, mode, encoding="ascii", newline=None if "r" in mode else "\n")
        except FileNotFoundError as e:
            raise FileNotFound("File %s not found!" % os.fspath(fp)) from e
        with f:
            try:
                yield f
            except UnicodeDecodeError as e:
                raise MalformedFile(
                    "File %s is not ASCII text: %s" % (os.fspath(fp), e)
                ) from e
    else:
        yield fp


def strip_comments(lines: Iterator[str]) -> Iterator[str]:
    for line in lines:
        if line.strip() and not line.startswith(COMMENT_CHAR):
            yield line


class Tokens:
    """Sequential reader over the tokens of a text file."""

    def __init__(self, f: IO[str]):
        self._tokens = [
            token for line in strip_comments(iter(f)) for token in line.split()
        ]
        self._position = 0

    def has_next(self) -> bool:
        return self._position < len(self._tokens)

    def next(self) -> str:
        """:raise MalformedFile: at the end of the data."""
        if not self.has_next():
            raise MalformedFile("Unexpected end of file")
        token = self._tokens[self._position]
        self._position += 1
        return token

    def next_int(self) -> int:
        """:raise MalformedFile: if the token is not an integer."""
        token = self.next()
        try:
            return int(token)
        except ValueError:
            raise MalformedFile("Expected an integer, got %r" % token) from None

    def take_ints(self, count: int) -> list[int]:
        """Read ``count`` integers."""
        end = self._position + count
        if end > len(self._tokens):
            raise MalformedFile(
                "Unexpected end of file: expected %d more values, found %d"
                % (count, len(self._tokens) - self._position)
            )
        try:
            values = [int(token) for token in self._tokens[self._position : end]]
        except ValueError as e:
            raise MalformedFile("Expected integers: %s" % e) from None
        self._position = end
        return values
