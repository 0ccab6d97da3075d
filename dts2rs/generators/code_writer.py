"""Indentation-aware text writer

RustEmitter writes through a CodeWriter wrapping any text sink
(io.StringIO, an open file, sys.stdout).
"""

from contextlib import contextmanager
from typing import Iterator, TextIO


class CodeWriter:
    """Writes lines to a text sink at the current indentation level"""

    def __init__(self, sink: TextIO, indent: str = "    ") -> None:
        """Initialize code writer

        Args:
            sink: Writable text stream
            indent: Text of one indentation level
        """
        self._sink = sink
        self._indent = indent
        self._level = 0

    @property
    def level(self) -> int:
        return self._level

    def line(self, text: str = "") -> None:
        """Write one line; blank lines carry no indentation"""
        if text:
            self._sink.write(f"{self._indent * self._level}{text}\n")
        else:
            self._sink.write("\n")

    def lines(self, text: str) -> None:
        """Write each line of a multi-line string; empty text writes nothing"""
        if not text:
            return
        for line in text.split("\n"):
            self.line(line)

    @contextmanager
    def block(self, opener: str, closer: str = "}") -> Iterator[None]:
        """Write opener, indent the body, then write closer"""
        self.line(opener)
        self._level += 1
        try:
            yield
        finally:
            self._level -= 1
        self.line(closer)
