# hexyg/convert.py

"""Streaming conversion between raw bytes and hex text.

Hex text lines look like::

    00000000: 48 65 6C 6C 6F 2C 20 57 6F 72 6C 64 21 [Hello, World!]

``bin_to_hex`` writes exactly that shape; ``hex_to_bin`` accepts it and a lot
more (comments, directives, annotations, free spacing).
"""

from __future__ import annotations

import io
import logging
import string
from typing import BinaryIO, Iterable, Optional, Union

from .config import CheckLevel, Config, address_width
from .errors import InvalidHexCharError, MalformedUtf8Error, OddHexLengthError

logger = logging.getLogger(__name__)

PRINTABLE_MIN = 32
PRINTABLE_MAX = 126
CONTINUATION_INDENT = 10    # width of the blank address column on continuation lines

HEX_DIGITS = frozenset(string.hexdigits)


# ---------------- Encoding ----------------
def format_hex_bytes(chunk: bytes, block_length: int) -> str:
    """Two uppercase digits per byte, a space between blocks of ``block_length``.

    ``block_length == 0`` packs the whole line without spaces.
    """
    digits = [f"{b:02X}" for b in chunk]
    if block_length <= 0:
        return "".join(digits)
    return " ".join(
        "".join(digits[i:i + block_length])
        for i in range(0, len(digits), block_length)
    )

def format_preview(chunk: bytes) -> str:
    return "[" + "".join(
        chr(b) if PRINTABLE_MIN <= b <= PRINTABLE_MAX else "." for b in chunk
    ) + "]"

def format_line(
    chunk: bytes,
    address: int,
    config: Config,
    first: Optional[bool] = None,
) -> str:
    """Render one line (no terminator) for ``chunk`` starting at ``address``.

    ``first`` defaults to ``address == config.start_address`` so that
    address-aligned chunks can be formatted independently of each other.
    """
    if first is None:
        first = address == config.start_address

    width = address_width(address, config.address_size)
    if first or config.repeat_address:
        head = f"{address:0{width}X}: "
    elif config.align_continuation:
        head = " " * (width + 2)
    else:
        head = " " * CONTINUATION_INDENT

    line = head + format_hex_bytes(chunk, config.block_length)
    if config.show_preview:
        line += " " + format_preview(chunk)
    return line

def bin_to_hex(reader: BinaryIO, writer: BinaryIO, config: Optional[Config] = None) -> int:
    """Encode everything ``reader`` yields as hex text lines into ``writer``.

    Reads ``line_length`` bytes at a time and stops at the first empty read.
    Returns the number of input bytes consumed.
    """
    config = config or Config()
    if config.line_length <= 0:
        logger.debug("line_length=%d, nothing to encode", config.line_length)
        return 0

    address = config.start_address
    total = 0
    lines = 0
    while True:
        chunk = reader.read(config.line_length)
        if not chunk:
            break
        line = format_line(chunk, address, config, first=(lines == 0))
        writer.write(line.encode("ascii") + b"\n")
        address += len(chunk)
        total += len(chunk)
        lines += 1

    logger.debug("bin_to_hex: %d bytes -> %d lines", total, lines)
    return total


# ---------------- Decoding ----------------
def is_skipped_line(line: str) -> bool:
    """True for blank, comment and directive lines (``line`` already stripped).

    Block comments are recognised per line only: a line is skipped when it
    opens with ``/*`` or closes with ``*/``.
    """
    return (
        not line
        or line.startswith("//")
        or line.startswith("#")
        or line.startswith("/*")
        or line.endswith("*/")
    )

def extract_hex_from_line(line: str) -> str:
    """Strip comment, address, preview and annotation; keep only hex digits."""
    line = line.split("//", 1)[0]
    if ":" in line:
        line = line.split(":", 1)[1]
    line = line.split("[", 1)[0]
    line = line.split("|", 1)[0]
    return "".join(ch for ch in line if ch in HEX_DIGITS)

def parse_hex_string(hex_str: str, line: Optional[int] = None) -> bytes:
    """Parse contiguous hex digit pairs into bytes.

    Accepts:
      - "48656C6C6F"
      - "deadBEEF" (any case)
    """
    s = hex_str.strip()
    if not s:
        return b""
    if len(s) % 2 != 0:
        raise OddHexLengthError(line)

    out = bytearray()
    for i in range(0, len(s), 2):
        pair = s[i:i + 2]
        for j, ch in enumerate(pair):
            if ch not in HEX_DIGITS:
                raise InvalidHexCharError(ch, i + j, line)
        out.append(int(pair, 16))
    return bytes(out)

def _text_lines(reader: Iterable[Union[bytes, str]]):
    for lineno, raw in enumerate(reader, start=1):
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise MalformedUtf8Error(lineno, exc.reason) from exc
        yield lineno, raw

def hex_to_bin(
    reader: Iterable[Union[bytes, str]],
    writer: BinaryIO,
    check: CheckLevel = CheckLevel.NONE,
) -> int:
    """Decode hex text from ``reader`` line by line into ``writer``.

    Fails on the first bad line; bytes from earlier lines are already
    written by then. Returns the number of bytes written.

    Byte lines that are not valid UTF-8 raise ``MalformedUtf8Error`` with
    the line number, rather than a bare ``UnicodeDecodeError``; this is an
    extension over the plain I/O failure of line reading.
    """
    if check:
        logger.info("consistency checks (%s) are not enforced", check)

    total = 0
    for lineno, text in _text_lines(reader):
        text = text.strip()
        if is_skipped_line(text):
            continue
        data = parse_hex_string(extract_hex_from_line(text), line=lineno)
        if data:
            writer.write(data)
            total += len(data)

    logger.debug("hex_to_bin: %d bytes", total)
    return total


# ---------------- In-memory helpers ----------------
def encode(data: bytes, config: Optional[Config] = None) -> str:
    out = io.BytesIO()
    bin_to_hex(io.BytesIO(data), out, config)
    return out.getvalue().decode("ascii")

def decode(text: Union[str, bytes], check: CheckLevel = CheckLevel.NONE) -> bytes:
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    out = io.BytesIO()
    hex_to_bin(io.BytesIO(raw), out, check)
    return out.getvalue()
