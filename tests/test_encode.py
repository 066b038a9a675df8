import io

import pytest

from hexyg.config import AddressSize, Config


@pytest.mark.parametrize(
    "block_length,expected",
    [
        (0, "AABBCCDD"),
        (1, "AA BB CC DD"),
        (2, "AABB CCDD"),
        (3, "AABBCC DD"),
        (4, "AABBCCDD"),
        (8, "AABBCCDD"),
    ],
)
def test_format_hex_bytes_blocks(convert, block_length, expected):
    assert convert.format_hex_bytes(bytes([0xAA, 0xBB, 0xCC, 0xDD]), block_length) == expected

def test_format_hex_bytes_uppercase_and_empty(convert):
    assert convert.format_hex_bytes(b"\x0a\xff", 1) == "0A FF"
    assert convert.format_hex_bytes(b"", 1) == ""

@pytest.mark.parametrize(
    "data,expected",
    [
        (b"Hello", "[Hello]"),
        (b"\x00", "[.]"),
        (b"\x1f\x20\x7e\x7f\x80\xff", "[. ~...]"),
        (b"", "[]"),
    ],
)
def test_format_preview(convert, data, expected):
    assert convert.format_preview(data) == expected


def test_encode_hello_default(convert):
    assert convert.encode(b"Hello") == "00000000: 48 65 6C 6C 6F [Hello]\n"

def test_encode_grouping_in_line(convert):
    data = bytes([0xAA, 0xBB, 0xCC, 0xDD])
    cfg = Config().with_preview(False)
    assert convert.encode(data, cfg.with_block_length(2)) == "00000000: AABB CCDD\n"
    assert convert.encode(data, cfg.with_block_length(0)) == "00000000: AABBCCDD\n"
    assert convert.encode(data, cfg) == "00000000: AA BB CC DD\n"

def test_encode_preview_shows_dot_for_nul(convert):
    assert convert.encode(b"\x00") == "00000000: 00 [.]\n"

def test_encode_empty_input_writes_nothing(convert):
    out = io.BytesIO()
    assert convert.bin_to_hex(io.BytesIO(b""), out, Config()) == 0
    assert out.getvalue() == b""

@pytest.mark.parametrize("line_length", [0, -1])
def test_encode_non_positive_line_length_writes_nothing(convert, line_length):
    assert convert.encode(b"abc", Config().with_line_length(line_length)) == ""

def test_encode_splits_lines_and_advances_address(convert):
    text = convert.encode(bytes(range(20)), Config().with_preview(False))
    assert text.splitlines() == [
        "00000000: 00 01 02 03 04 05 06 07 08 09 0A 0B 0C 0D 0E 0F",
        "00000010: 10 11 12 13",
    ]

def test_encode_returns_byte_count(convert):
    out = io.BytesIO()
    assert convert.bin_to_hex(io.BytesIO(b"x" * 40), out) == 40
    assert out.getvalue().count(b"\n") == 3

@pytest.mark.parametrize(
    "size,first",
    [
        (AddressSize.U8, "00: "),
        (AddressSize.U16, "0000: "),
        (AddressSize.U24, "000000: "),
        (AddressSize.U40, "0000000000: "),
        (AddressSize.U48, "000000000000: "),
        (AddressSize.U64, "0000000000000000: "),
    ],
)
def test_encode_fixed_address_sizes(convert, size, first):
    assert convert.encode(b"A", Config().with_address_size(size)) == f"{first}41 [A]\n"

def test_encode_stretch_widens_per_line(convert):
    cfg = Config().with_address_size(AddressSize.STRETCH).with_line_length(0x80).with_preview(False)
    lines = convert.encode(bytes(0x180), cfg).splitlines()
    assert [ln.split(":")[0] for ln in lines] == ["00", "80", "0100"]

def test_encode_uppercase_address(convert):
    cfg = Config().with_start_address(0xABC).with_preview(False)
    assert convert.encode(b"\x01", cfg) == "00000ABC: 01\n"


def test_encode_continuation_lines_use_fixed_indent(convert):
    cfg = Config().with_line_length(4).with_repeat_address(False)
    assert convert.encode(b"ABCDEF", cfg) == (
        "00000000: 41 42 43 44 [ABCD]\n"
        "          45 46 [EF]\n"
    )

def test_encode_continuation_indent_ignores_address_width(convert):
    cfg = (
        Config().with_line_length(2).with_repeat_address(False)
        .with_address_size(AddressSize.U16).with_preview(False)
    )
    assert convert.encode(b"ABCD", cfg) == "0000: 41 42\n" + " " * 10 + "43 44\n"

def test_encode_aligned_continuation_matches_address_width(convert):
    cfg = (
        Config().with_line_length(2).with_repeat_address(False)
        .with_address_size(AddressSize.U16).with_preview(False)
        .with_align_continuation(True)
    )
    assert convert.encode(b"ABCD", cfg) == "0000: 41 42\n      43 44\n"

def test_encode_first_line_has_address_with_start_offset(convert):
    cfg = Config().with_line_length(2).with_repeat_address(False).with_start_address(0x20)
    lines = convert.encode(b"ABCD", cfg).splitlines()
    assert lines[0].startswith("00000020: ")
    assert lines[1].startswith(" " * 10 + "43")


def test_format_line_defaults_first_to_start_address(convert):
    cfg = Config().with_repeat_address(False).with_preview(False).with_line_length(2)
    assert convert.format_line(b"AB", 0, cfg) == "00000000: 41 42"
    assert convert.format_line(b"CD", 2, cfg) == " " * 10 + "43 44"
    assert convert.format_line(b"CD", 2, cfg, first=True) == "00000002: 43 44"

def test_format_line_chunks_match_serial_encode(convert):
    data = bytes(range(50))
    cfg = Config().with_line_length(8)
    serial = convert.encode(data, cfg).splitlines()
    independent = [
        convert.format_line(data[a:a + 8], a, cfg) for a in range(0, len(data), 8)
    ]
    assert independent == serial


def test_encode_reads_fixed_line_length_chunks(convert, chunked_reader):
    reader = chunked_reader(bytes(10))
    convert.bin_to_hex(reader, io.BytesIO(), Config().with_line_length(4))
    assert reader.sizes == [4, 4, 4, 4]

def test_encode_short_reads_make_short_lines(convert, chunked_reader):
    reader = chunked_reader(b"abcdefg", cap=3)
    out = io.BytesIO()
    convert.bin_to_hex(reader, out, Config().with_line_length(4).with_preview(False))
    assert out.getvalue().decode().splitlines() == [
        "00000000: 61 62 63",
        "00000003: 64 65 66",
        "00000006: 67",
    ]

def test_encode_propagates_io_errors(convert):
    class Broken(io.RawIOBase):
        def readable(self):
            return True

        def read(self, size=-1):
            raise OSError("disk gone")

    with pytest.raises(OSError, match="disk gone"):
        convert.bin_to_hex(Broken(), io.BytesIO())
