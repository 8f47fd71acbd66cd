"""Formatted output through a text sink."""

import threading

from .format import format_chunks


class Logger:
    """Writes formatted text to ``write``, a callable taking a string."""

    def __init__(self, write):
        self._write = write
        self._lock = threading.Lock()

    def puts(self, text):
        """Write ``text`` unchanged."""
        self._write(text)

    def print(self, fmt, *args):
        """Write ``fmt`` formatted with ``args``, with no line ending."""
        for chunk in format_chunks(fmt, *args):
            self._write(chunk)

    def log(self, fmt, *args):
        """Write one formatted line ending in CRLF, atomically."""
        with self._lock:
            self.print(fmt, *args)
            self._write("\r\n")