"""
Message sink for the command session.
"""

import logging
import sys
from typing import IO, Optional

logger = logging.getLogger(__name__)


class TextView:
    """
    Writes status and error messages to a text stream.

    :param out: destination stream, ``sys.stdout`` by default.
    """

    def __init__(self, out: Optional[IO[str]] = None):
        self._out = out if out is not None else sys.stdout

    def render_message(self, message: str) -> None:
        """
        Write ``message`` to the stream.

        :raise OSError: if the stream cannot be written.
        """
        try:
            self._out.write(message)
            self._out.flush()
        except ValueError as e:
            # Writing to a closed stream.
            raise OSError(str(e)) from e
