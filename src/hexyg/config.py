# hexyg/config.py

"""Shape of a hex text document.

Pure data: nothing here validates combinations (``line_length=0`` is
accepted and simply yields no output when encoding).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Optional

from .errors import ConfigError


class Endian(enum.Enum):
    """Byte order. Declared for multi-byte value formatting; not used yet."""
    LITTLE = "little"
    BIG = "big"


class AddressSize(enum.Enum):
    """Address column size in bytes, or ``STRETCH`` for per-line width."""
    U8 = 1
    U16 = 2
    U24 = 3
    U32 = 4
    U40 = 5
    U48 = 6
    U64 = 8
    STRETCH = 0

    @property
    def digits(self) -> Optional[int]:
        if self is AddressSize.STRETCH:
            return None
        return self.value * 2


@dataclass(frozen=True)
class Padding:
    """Gap handling: fill with ``fill`` or refuse gaps (``fill is None``).

    Carried in the config only; a contiguous stream never has gaps.
    """
    fill: Optional[int] = 0x00

    @classmethod
    def value(cls, fill: int) -> "Padding":
        return cls(fill)

    @classmethod
    def forbidden(cls) -> "Padding":
        return cls(None)

    @property
    def is_forbidden(self) -> bool:
        return self.fill is None


class CheckLevel(enum.Flag):
    """Consistency checks requested for decoding. Accepted, not enforced."""
    NONE = 0
    TEXT = 1
    VALUES = 2
    ALL = TEXT | VALUES


class RepeatAddress(enum.Enum):
    NEVER = "never"
    ONCE = "once"
    EVERY_LINE = "every_line"

    @property
    def repeat(self) -> bool:
        return self is RepeatAddress.EVERY_LINE


@dataclass(frozen=True)
class Config:
    endian: Endian = Endian.LITTLE
    address_size: AddressSize = AddressSize.U32
    padding: Padding = field(default_factory=Padding)
    line_length: int = 16           # bytes per output line
    block_length: int = 1           # 0 disables spacing between bytes
    repeat_address: bool = True
    show_preview: bool = True
    start_address: int = 0
    align_continuation: bool = False

    # ---------------- Builders ----------------
    def with_endian(self, endian: Endian) -> "Config":
        return replace(self, endian=endian)

    def with_address_size(self, address_size: AddressSize) -> "Config":
        return replace(self, address_size=address_size)

    def with_padding(self, padding: Padding) -> "Config":
        return replace(self, padding=padding)

    def with_line_length(self, line_length: int) -> "Config":
        return replace(self, line_length=line_length)

    def with_block_length(self, block_length: int) -> "Config":
        return replace(self, block_length=block_length)

    def with_repeat_address(self, repeat: bool) -> "Config":
        return replace(self, repeat_address=repeat)

    def with_preview(self, show: bool) -> "Config":
        return replace(self, show_preview=show)

    def with_start_address(self, address: int) -> "Config":
        return replace(self, start_address=address)

    def with_align_continuation(self, align: bool) -> "Config":
        return replace(self, align_continuation=align)


# ---------------- Address width ----------------
_STRETCH_STEPS = (
    (0x100, 2),
    (0x10000, 4),
    (0x1000000, 6),
    (0x100000000, 8),
)

def address_width(address: int, address_size: AddressSize) -> int:
    """Number of hex digits used to render ``address``."""
    digits = address_size.digits
    if digits is not None:
        return digits
    for limit, width in _STRETCH_STEPS:
        if address < limit:
            return width
    return 16


# ---------------- Option parsing ----------------
def parse_int_maybe(text: str) -> int:
    """Parse an integer accepting 0x/0b/0o prefixes or decimal."""
    s = text.strip().replace("_", "")
    if not s:
        raise ValueError("Enter a number (e.g., 1234 or 0x4D2).")
    return int(s, 0)

def parse_address_size(text: str) -> AddressSize:
    key = text.strip().upper()
    if key in AddressSize.__members__:
        return AddressSize[key]
    raise ConfigError(
        f"Invalid address-size: {text}. "
        "Use u8, u16, u24, u32, u40, u48, u64, or stretch"
    )

def parse_repeat_address(text: str) -> RepeatAddress:
    try:
        return RepeatAddress(text.strip().lower())
    except ValueError:
        raise ConfigError(
            f"Invalid repeat-address: {text}. Use never, once, or every_line"
        ) from None

def parse_check_level(text: str) -> CheckLevel:
    """Parse ``none``, ``text``, ``values``, ``all`` or a comma list of them."""
    level = CheckLevel.NONE
    for part in (p.strip().upper() for p in text.split(",")):
        if part not in CheckLevel.__members__:
            raise ConfigError(
                f"Invalid check: {text}. Use none, text, values, all, or text,values"
            )
        level |= CheckLevel[part]
    return level
