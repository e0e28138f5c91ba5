"""
Windowed Character Source
=========================

This module provides WindowedSource, the character-level half of the
streaming lexer. It reads its input through two fixed-width windows so
that arbitrarily long inputs (and arbitrarily long tokens) can be scanned
without holding the whole file in memory and without ever re-reading the
underlying stream.

Buffering
---------
Both windows are filled when the source is constructed. The cursor walks
the active window; when it steps past the end of a full window the other
window becomes active and the window just left is refilled with the next
chunk. The inactive window therefore always holds the text that follows
the active one, which is what makes one-character lookahead exact across
a window boundary:

    active          inactive (read-ahead)
    +-------------+ +-------------+
    |...int cou|nt| |er = 0;\\n... |
    +-------------+ +-------------+
               ^ cursor, peek_next() -> 'n'

A window shorter than the configured width marks the end of the input.
Reading at or past its last valid character yields SENTINEL.

Position Tracking
-----------------
Line and column are 1-indexed and only ever change inside advance():
consuming a newline moves to column 1 of the next line, consuming any
other character moves one column right.

Resource Handling
-----------------
The source owns its stream. close() detaches the handle before closing
it, so it is released exactly once and nothing can read from it
afterwards. Use the source as a context manager to get that guarantee on
every exit path:

    >>> with WindowedSource("main.src", buffer_width=4096) as src:
    ...     while not src.at_end:
    ...         src.advance()
"""

from typing import Optional, TextIO, Union
import io
import logging
import os

from streamlex.config import DEFAULT_BUFFER_WIDTH
from streamlex.errors import (
    ConfigError,
    SourceLocation,
    SourceOpenError,
    SourceReadError,
)

logger = logging.getLogger(__name__)


# Returned by current() and peek_next() past the last valid character
SENTINEL = ""

# Name used when the input has no usable file name
ANONYMOUS_SOURCE = "<input>"


class WindowedSource:
    """
    Double-buffered, position-tracking view over a character stream.

    Attributes:
        name: Path of the input, or "<input>" for handles without a name
        read_error: The SourceReadError that cut the input short, if any
    """

    def __init__(
        self,
        source: Union[str, os.PathLike, TextIO],
        buffer_width: int = DEFAULT_BUFFER_WIDTH,
        encoding: str = "utf-8",
        name: Optional[str] = None,
    ):
        """
        Bind the source to one input stream and prime both windows.

        Args:
            source: Path to a text file, or an open readable text handle.
                A handle is owned by the source from here on.
            buffer_width: Characters per window
            encoding: Encoding used when opening a path
            name: Overrides the name used in locations

        Raises:
            ConfigError: If buffer_width is not a positive integer, or the
                encoding is unknown
            SourceOpenError: If a path cannot be opened
        """
        if not isinstance(buffer_width, int) or buffer_width < 1:
            raise ConfigError(
                f"buffer_width must be a positive integer, got {buffer_width!r}"
            )

        if isinstance(source, (str, os.PathLike)):
            path = os.fspath(source)
            try:
                stream = open(path, "r", encoding=encoding)
            except OSError as e:
                raise SourceOpenError(path, e.strerror or str(e)) from e
            except LookupError as e:
                raise ConfigError(f"unknown encoding {encoding!r}") from e
            logger.info("Opened %s", path)
            self.name = name or path
        elif hasattr(source, "read"):
            stream = source
            handle_name = getattr(source, "name", None)
            self.name = name or (handle_name if isinstance(handle_name, str) else ANONYMOUS_SOURCE)
        else:
            raise TypeError(
                f"expected a path or a readable text handle, got {type(source).__name__}"
            )

        self._stream: Optional[TextIO] = stream
        self._width = buffer_width

        self._buffers = [SENTINEL, SENTINEL]
        self._active = 0
        self._offset = 0
        self._eof = False

        self._line = 1
        self._column = 1

        self.read_error: Optional[SourceReadError] = None

        # Prime both windows before any character is requested
        self._buffers[0] = self._read_chunk()
        self._buffers[1] = self._read_chunk()

    @classmethod
    def from_string(
        cls,
        text: str,
        buffer_width: int = DEFAULT_BUFFER_WIDTH,
        name: str = ANONYMOUS_SOURCE,
    ) -> "WindowedSource":
        """Create a source over in-memory text."""
        return cls(io.StringIO(text), buffer_width=buffer_width, name=name)

    # =========================================================================
    # Context Manager Support
    # =========================================================================

    def __enter__(self) -> "WindowedSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release the underlying stream.

        The handle is detached before it is closed, so a second call finds
        nothing to release. After closing, the source reports end of input.
        """
        stream, self._stream = self._stream, None
        if stream is None:
            return

        self._buffers = [SENTINEL, SENTINEL]
        self._offset = 0
        self._eof = True

        try:
            stream.close()
            logger.debug("Closed %s", self.name)
        except OSError as e:
            logger.warning("Error closing %s: %s", self.name, e)

    @property
    def closed(self) -> bool:
        """True once close() has released the stream."""
        return self._stream is None

    # =========================================================================
    # Character Access
    # =========================================================================

    def current(self) -> str:
        """Return the character under the cursor, or SENTINEL at end of input."""
        buffer = self._buffers[self._active]
        if self._offset < len(buffer):
            return buffer[self._offset]
        return SENTINEL

    def peek_next(self) -> str:
        """
        Return the character after the cursor without advancing.

        Only one character of lookahead is supported. When the cursor sits
        on the last character of a full window, the answer comes from the
        read-ahead window.
        """
        buffer = self._buffers[self._active]
        position = self._offset + 1

        if position < len(buffer):
            return buffer[position]

        if position == len(buffer) == self._width:
            following = self._buffers[1 - self._active]
            if following:
                return following[0]

        return SENTINEL

    def advance(self) -> str:
        """
        Consume the character under the cursor and return it.

        Swaps windows and refills the spent one when the cursor leaves a
        full window. Does nothing (and returns SENTINEL) at end of input.
        """
        char = self.current()
        if char == SENTINEL:
            return SENTINEL

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        self._offset += 1

        if self._offset >= len(self._buffers[self._active]) == self._width:
            spent = self._active
            self._active = 1 - spent
            self._offset = 0
            self._buffers[spent] = self._read_chunk()

        return char

    @property
    def at_end(self) -> bool:
        """True when no characters remain."""
        return self.current() == SENTINEL

    # =========================================================================
    # Position
    # =========================================================================

    @property
    def line(self) -> int:
        """Line of the character under the cursor (1-indexed)."""
        return self._line

    @property
    def column(self) -> int:
        """Column of the character under the cursor (1-indexed)."""
        return self._column

    @property
    def buffer_width(self) -> int:
        return self._width

    def location(self) -> SourceLocation:
        """Return the cursor position as a SourceLocation."""
        return SourceLocation(self.name, self._line, self._column)

    # =========================================================================
    # Refill
    # =========================================================================

    def _read_chunk(self) -> str:
        """
        Read up to one window of characters from the stream.

        Short reads are retried until the window is full or the stream
        returns nothing, so a chunk shorter than the width always means
        the input is exhausted. A failing read ends the input at that
        point; the error is logged and kept in read_error.
        """
        if self._eof or self._stream is None:
            return SENTINEL

        pieces = []
        needed = self._width
        try:
            while needed > 0:
                piece = self._stream.read(needed)
                if not piece:
                    break
                pieces.append(piece)
                needed -= len(piece)
        except (OSError, ValueError) as e:
            self.read_error = SourceReadError(f"{self.name}: {e}")
            logger.warning("Read from %s failed, treating as end of input: %s", self.name, e)
            self._eof = True

        chunk = "".join(pieces)
        if len(chunk) < self._width:
            self._eof = True

        logger.debug("Loaded %d characters from %s", len(chunk), self.name)
        return chunk

