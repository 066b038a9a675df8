# hexyg/__init__.py

"""hexyg: binary data ⇆ hex text.

Re-exports the configuration model and the converters for convenient imports
in tests or other code.
"""
from .__about__ import (
    __version__,
    APP_NAME,
    APP_TITLE,
    AUTHOR,
    COPYRIGHT,
    COPYRIGHT_YEAR,
    HOMEPAGE,
)

from .config import (
    AddressSize,
    CheckLevel,
    Config,
    Endian,
    Padding,
    RepeatAddress,
    address_width,
)
from .convert import (
    CONTINUATION_INDENT,
    PRINTABLE_MIN,
    PRINTABLE_MAX,
    bin_to_hex,
    decode,
    encode,
    extract_hex_from_line,
    format_line,
    hex_to_bin,
    parse_hex_string,
)
from .errors import (
    ConfigError,
    HexygError,
    InvalidHexCharError,
    MalformedUtf8Error,
    OddHexLengthError,
    ParseError,
)

__all__ = [
    # Metadata
    "__version__", "APP_NAME", "APP_TITLE",
    "AUTHOR", "COPYRIGHT", "COPYRIGHT_YEAR", "HOMEPAGE",
    # Config
    "AddressSize", "CheckLevel", "Config", "Endian", "Padding",
    "RepeatAddress", "address_width",
    # Conversion
    "CONTINUATION_INDENT", "PRINTABLE_MIN", "PRINTABLE_MAX",
    "bin_to_hex", "hex_to_bin", "encode", "decode",
    "extract_hex_from_line", "format_line", "parse_hex_string",
    # Errors
    "HexygError", "InvalidHexCharError", "OddHexLengthError",
    "MalformedUtf8Error", "ParseError", "ConfigError",
]
