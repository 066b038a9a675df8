# hexyg/cli.py
from __future__ import annotations

import argparse
import contextlib
import io
import logging
import sys
from typing import BinaryIO, Optional, Sequence, Tuple

from .__about__ import APP_TITLE, about_text
from .config import (
    Config,
    CheckLevel,
    parse_address_size,
    parse_check_level,
    parse_int_maybe,
    parse_repeat_address,
)
from .convert import bin_to_hex, hex_to_bin
from .errors import ConfigError, HexygError

logger = logging.getLogger(__name__)

_SKIP_BLOCK = 64 * 1024


# ---------- helpers ----------
def _parse_offset(text: Optional[str], option: str) -> Optional[int]:
    if text is None:
        return None
    try:
        return parse_int_maybe(text)
    except ValueError:
        raise ConfigError(f"Invalid {option}: {text!r}") from None

def _resolve_range(
    stream: BinaryIO, start: Optional[int], end: Optional[int]
) -> Tuple[int, Optional[int]]:
    """Turn --from/--to into absolute offsets; negatives count from the end."""
    negative = (start is not None and start < 0) or (end is not None and end < 0)
    if negative:
        if not stream.seekable():
            raise ConfigError("negative --from/--to need a seekable input")
        here = stream.tell()
        size = stream.seek(0, io.SEEK_END) - here
        stream.seek(here)
        if start is not None and start < 0:
            start = max(0, size + start)
        if end is not None and end < 0:
            end = max(0, size + end)
    return (start or 0), end


class _RangeReader:
    """Read-only window ``[start, end)`` over a binary stream."""

    def __init__(self, stream: BinaryIO, start: int = 0, end: Optional[int] = None):
        self._stream = stream
        self._remaining = None if end is None else max(0, end - start)
        self._skip(start)

    def _skip(self, count: int) -> None:
        if count <= 0:
            return
        if self._stream.seekable():
            self._stream.seek(count, io.SEEK_CUR)
            return
        while count > 0:
            block = self._stream.read(min(count, _SKIP_BLOCK))
            if not block:
                break
            count -= len(block)

    def read(self, size: int = -1) -> bytes:
        if self._remaining is None:
            return self._stream.read(size)
        if size < 0 or size > self._remaining:
            size = self._remaining
        if size == 0:
            return b""
        data = self._stream.read(size)
        self._remaining -= len(data)
        return data


_ENCODER_OPTIONS = (
    ("from_", "--from"),
    ("to", "--to"),
    ("start_address", "--start-address"),
    ("address_size", "--address-size"),
    ("line_length", "--line-length"),
    ("block_length", "--block-length"),
    ("repeat_address", "--repeat-address"),
    ("no_preview", "--no-preview"),
    ("align_continuation", "--align-continuation"),
)
_DECODER_OPTIONS = (
    ("check", "--check"),
)

def _reject_options(args: argparse.Namespace, options, mode: str) -> None:
    given = [
        flag for dest, flag in options
        if getattr(args, dest) is not None and getattr(args, dest) is not False
    ]
    if given:
        verb = "applies" if len(given) == 1 else "apply"
        raise ConfigError(f"{', '.join(given)} only {verb} to {mode}")

def _build_config(args: argparse.Namespace) -> Config:
    config = Config()
    if args.address_size is not None:
        config = config.with_address_size(parse_address_size(args.address_size))
    if args.line_length is not None:
        config = config.with_line_length(args.line_length)
    if args.block_length is not None:
        config = config.with_block_length(args.block_length)
    repeat = parse_repeat_address(args.repeat_address or "every_line")
    return (
        config
        .with_repeat_address(repeat.repeat)
        .with_preview(not args.no_preview)
        .with_align_continuation(args.align_continuation)
    )

@contextlib.contextmanager
def _open_input(path: Optional[str]):
    if not path:
        yield sys.stdin.buffer
        return
    with open(path, "rb") as src:
        yield src

@contextlib.contextmanager
def _open_output(path: Optional[str]):
    # opened last: "wb" truncates, so every option must already be valid
    if not path:
        dst = sys.stdout.buffer
        yield dst
        dst.flush()
        return
    with open(path, "wb") as dst:
        yield dst


# ---------- commands ----------
def cmd_bin_to_hex(args: argparse.Namespace) -> int:
    _reject_options(args, _DECODER_OPTIONS, "--hex-to-bin")
    start = _parse_offset(args.from_, "--from")
    end = _parse_offset(args.to, "--to")
    explicit_start = _parse_offset(args.start_address, "--start-address")
    config = _build_config(args)

    with _open_input(args.input) as src:
        start, end = _resolve_range(src, start, end)
        config = config.with_start_address(
            explicit_start if explicit_start is not None else start
        )
        logger.info("bin-to-hex: range [%d, %s), %s", start, end, config)
        reader = _RangeReader(src, start, end)
        with _open_output(args.output) as dst:
            count = bin_to_hex(reader, dst, config)
    logger.info("encoded %d bytes", count)
    return 0


def cmd_hex_to_bin(args: argparse.Namespace) -> int:
    _reject_options(args, _ENCODER_OPTIONS, "--bin-to-hex")
    check: CheckLevel = parse_check_level(args.check or "none")

    with _open_input(args.input) as src, _open_output(args.output) as dst:
        count = hex_to_bin(src, dst, check)
    logger.info("decoded %d bytes", count)
    return 0


# ---------- parser ----------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hexyg",
        description=f"{APP_TITLE}: bidirectional converter between binary data and hex text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=about_text())
    p.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="log progress to stderr (-vv for debug output)",
    )

    mode = p.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--bin-to-hex", dest="func", action="store_const", const=cmd_bin_to_hex,
        help="convert binary data to hex text",
    )
    mode.add_argument(
        "--hex-to-bin", dest="func", action="store_const", const=cmd_hex_to_bin,
        help="convert hex text to binary data",
    )

    # common
    p.add_argument("-i", "--input", help="input file (default: stdin)")
    p.add_argument("-o", "--output", help="output file (default: stdout)")
    p.add_argument(
        "--from", dest="from_", metavar="OFFSET",
        help="first input byte to encode (dec or 0x…, negative counts from the end)",
    )
    p.add_argument(
        "--to", metavar="OFFSET",
        help="end of the encoded range, exclusive (dec or 0x…, negative counts from the end)",
    )

    # --bin-to-hex
    enc = p.add_argument_group("--bin-to-hex options")
    enc.add_argument(
        "--start-address", metavar="ADDR",
        help="address of the first byte (default: the --from offset, else 0)",
    )
    enc.add_argument(
        "--address-size",
        help="u8, u16, u24, u32, u40, u48, u64 or stretch (default: u32)",
    )
    enc.add_argument("--line-length", type=int, help="bytes per line (default: 16)")
    enc.add_argument(
        "--block-length", type=int,
        help="bytes per space-separated block, 0 for none (default: 1)",
    )
    enc.add_argument(
        "--repeat-address",
        help="never, once or every_line (default: every_line)",
    )
    enc.add_argument(
        "--no-preview", action="store_true", help="omit the [ascii] preview column",
    )
    enc.add_argument(
        "--align-continuation", action="store_true",
        help="indent address-less lines to the address width instead of 10 spaces",
    )

    # --hex-to-bin
    dec = p.add_argument_group("--hex-to-bin options")
    dec.add_argument(
        "--check",
        help="consistency checks: none, text, values, all, text,values (accepted, not enforced)",
    )

    return p


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(name)s: %(levelname)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        return args.func(args)
    except (HexygError, OSError) as exc:
        logger.debug("conversion failed", exc_info=True)
        print(f"hexyg: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
