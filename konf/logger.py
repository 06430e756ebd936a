"""Minimal info and warning logging to configurable streams."""

from __future__ import annotations

import sys
from typing import TextIO


class _Discard:
    """A stream that drops everything written to it."""

    def write(self, text: str) -> int:
        return len(text)


DISCARD = _Discard()


class _Channel:
    def __init__(self, prefix: str, stream: TextIO | None) -> None:
        self.prefix = prefix
        self.stream = stream

    def emit(self, message: str, args: tuple) -> None:
        stream = sys.stderr if self.stream is None else self.stream
        text = message % args if args else message
        if not text.endswith("\n"):
            text += "\n"
        stream.write(self.prefix + text)


_info = _Channel("INFO: ", None)
_warn = _Channel("WARN: ", None)


def init_logger(info_stream: TextIO | None = None, warn_stream: TextIO | None = None) -> None:
    """Direct info and warning output; None means standard error, DISCARD silences."""
    global _info, _warn
    _info = _Channel("INFO: ", info_stream)
    _warn = _Channel("WARN: ", warn_stream)


def info(message: str, *args) -> None:
    """Log an informational message, %-formatted with args."""
    _info.emit(message, args)


def warn(message: str, *args) -> None:
    """Log a warning, %-formatted with args."""
    _warn.emit(message, args)