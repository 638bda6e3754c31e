import struct
import time

import pytest

from panim_loader.Core.Errors import DecodeError, TruncatedInputError, InvalidUtf8Error
from panim_loader.Core.serialization.BinaryTargets import Reader
from panim_loader.Core.serialization.utils import hex_preview, HEX_PREVIEW_LENGTH


def test_read_scalars_little_endian():
    rw = Reader.from_bytes(struct.pack("<IfB", 2048, 24.0, 7))
    assert rw.rw_uint32(None) == 2048
    assert rw.rw_float32(None) == 24.0
    assert rw.rw_uint8(None) == 7
    assert rw.tell() == 9
    assert rw.at_eof()


def test_read_float_array():
    rw = Reader.from_bytes(struct.pack("<3f", 0.0, 0.5, 1.0))
    assert rw.rw_float32s(None, 3) == (0.0, 0.5, 1.0)
    assert rw.at_eof()


def test_zero_term_str():
    rw = Reader.from_bytes(b"hello\0world\0")
    assert rw.rw_cstr(None) == "hello"
    assert rw.tell() == 6
    assert rw.rw_cstr(None) == "world"
    assert rw.at_eof()


def test_empty_zero_term_str():
    rw = Reader.from_bytes(b"\0rest")
    assert rw.rw_cstr(None) == ""
    assert rw.tell() == 1


def test_zero_term_str_utf8():
    rw = Reader.from_bytes("Würfel\0".encode("utf8"))
    assert rw.rw_cstr(None) == "Würfel"


def test_zero_term_str_without_terminator():
    rw = Reader.from_bytes(b"hello")
    with pytest.raises(TruncatedInputError) as excinfo:
        rw.rw_cstr(None)
    assert excinfo.value.offset == 0
    assert excinfo.value.rule == "cstr"
    assert excinfo.value.remaining == "68 65 6c 6c 6f"


def test_zero_term_str_invalid_utf8():
    rw = Reader.from_bytes(b"ab\xff\xfe\0")
    with pytest.raises(InvalidUtf8Error) as excinfo:
        rw.rw_cstr(None)
    assert excinfo.value.offset == 0
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_at_eof_does_not_consume():
    rw = Reader.from_bytes(b"\x01")
    assert not rw.at_eof()
    assert rw.tell() == 0
    assert rw.rw_uint8(None) == 1


@pytest.mark.parametrize("method,data", [
    ("rw_uint8",   b""),
    ("rw_uint32",  b"\x00\x00\x00"),
    ("rw_float32", b"\x00"),
])
def test_short_scalar_is_truncated(method, data):
    rw = Reader.from_bytes(data)
    with pytest.raises(TruncatedInputError):
        getattr(rw, method)(None)


def test_short_float_array_reports_position():
    rw = Reader.from_bytes(b"\xaa" + struct.pack("<2f", 1.0, 2.0)[:-1])
    rw.rw_uint8(None)
    with pytest.raises(TruncatedInputError) as excinfo:
        rw.rw_float32s(None, 2)
    err = excinfo.value
    assert err.offset == 1
    assert err.rule == "float32[2]"
    assert isinstance(err, DecodeError)
    assert "offset 0x1" in str(err)


def test_huge_count_fails_without_reading():
    rw = Reader.from_bytes(b"\x00" * 8)
    with pytest.raises(TruncatedInputError):
        rw.rw_float32s(None, 0xFFFFFFFF)


def test_skip_reserved_bytes():
    rw = Reader.from_bytes(b"\x01" * 32 + b"\x02")
    rw.rw_skip(32)
    assert rw.rw_uint8(None) == 2


def test_skip_past_end():
    rw = Reader.from_bytes(b"\x00" * 31)
    with pytest.raises(TruncatedInputError) as excinfo:
        rw.rw_skip(32)
    assert excinfo.value.rule == "reserved[32]"


def test_hex_preview_is_bounded():
    data = bytes(range(HEX_PREVIEW_LENGTH + 4))
    preview = hex_preview(data)
    assert preview.startswith("00 01 02")
    assert preview.endswith("(+4 bytes)")
    assert "10" not in preview.split(" ... ")[0].split()


def test_error_preview_is_bounded():
    rw = Reader.from_bytes(bytes(100))
    with pytest.raises(TruncatedInputError) as excinfo:
        rw.rw_float32s(None, 100)
    assert excinfo.value.remaining.endswith(f"(+{100 - HEX_PREVIEW_LENGTH} bytes)")


def test_long_zero_term_str_is_linear():
    name = b"A" * 0x100000
    start = time.perf_counter()
    rw = Reader.from_bytes(name + b"\0" + b"\x07")
    assert rw.rw_cstr(None) == name.decode("ascii")
    assert rw.tell() == len(name) + 1
    assert rw.rw_uint8(None) == 7
    assert time.perf_counter() - start < 5.0


def test_long_zero_term_str_without_terminator_fails_quickly():
    start = time.perf_counter()
    rw = Reader.from_bytes(b"A" * 0x100000)
    with pytest.raises(TruncatedInputError) as excinfo:
        rw.rw_cstr(None)
    assert time.perf_counter() - start < 5.0
    assert excinfo.value.offset == 0
    assert excinfo.value.remaining.endswith(f"(+{0x100000 - HEX_PREVIEW_LENGTH} bytes)")


def test_zero_term_str_terminator_on_chunk_boundary():
    name = b"B" * Reader.CSTR_CHUNK_SIZE
    rw = Reader.from_bytes(name + b"\0" + b"next\0")
    assert rw.rw_cstr(None) == name.decode("ascii")
    assert rw.rw_cstr(None) == "next"
    assert rw.at_eof()


def test_invalid_utf8_after_first_chunk():
    rw = Reader.from_bytes(b"C" * (Reader.CSTR_CHUNK_SIZE + 3) + b"\xff\0")
    with pytest.raises(InvalidUtf8Error) as excinfo:
        rw.rw_cstr(None)
    assert excinfo.value.offset == 0
