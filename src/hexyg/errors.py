# hexyg/errors.py

from __future__ import annotations

from typing import Optional


class HexygError(Exception):
    """Base class for every conversion error raised by hexyg.

    I/O failures are not wrapped: ``OSError`` from the underlying streams
    propagates as-is.
    """


def _at_line(line: Optional[int]) -> str:
    return f" on line {line}" if line is not None else ""


class InvalidHexCharError(HexygError, ValueError):
    """A character in the extracted hex payload is not a hex digit.

    ``index`` is the position inside the per-line hex string, ``line`` the
    1-based input line number (``None`` when parsing a bare string).
    """

    def __init__(self, char: str, index: int, line: Optional[int] = None):
        self.char = char
        self.index = index
        self.line = line
        super().__init__(
            f"Invalid hex character {char!r} at position {index}{_at_line(line)}"
        )


class OddHexLengthError(HexygError, ValueError):
    def __init__(self, line: Optional[int] = None):
        self.line = line
        super().__init__(
            f"Invalid hex sequence: odd number of hex digits{_at_line(line)}"
        )


class MalformedUtf8Error(HexygError, ValueError):
    def __init__(self, line: Optional[int] = None, reason: str = ""):
        self.line = line
        msg = f"UTF-8 conversion error{_at_line(line)}"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class ParseError(HexygError, ValueError):
    """Generic parse failure; reserved for stricter decode modes."""


class ConfigError(HexygError, ValueError):
    """An option value could not be turned into configuration."""
