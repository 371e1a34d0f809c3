"""Tests for AX.25 UI frame decoding."""

from __future__ import annotations

import pytest

from aprs_codec.ax25 import AX25Address, decode_frame, is_ax25_frame
from aprs_codec.errors import FormatError


def _encode_address(
    callsign: str, ssid: int = 0, *, last: bool, repeated: bool = False
) -> bytes:
    callsign = callsign.ljust(6)[:6].upper()
    field = bytearray()
    for char in callsign:
        field.append(ord(char) << 1)
    byte = 0x60 | ((ssid & 0x0F) << 1)
    if repeated:
        byte |= 0x80
    if last:
        byte |= 0x01
    field.append(byte)
    return bytes(field)


def _frame(body: bytes) -> bytes:
    return b"\x7e" + body + b"\xab\xcd\x7e"


def test_decode_frame_basic() -> None:
    frame = _frame(
        _encode_address("APRS", last=False)
        + _encode_address("N0CALL", ssid=10, last=False)
        + _encode_address("WIDE1", ssid=1, last=False)
        + _encode_address("WIDE2", ssid=2, last=True, repeated=True)
        + bytes([0x03, 0xF0])
        + b"Hello APRS"
    )

    decoded = decode_frame(frame)

    assert decoded.destination == AX25Address("APRS")
    assert decoded.source == AX25Address("N0CALL", 10)
    assert decoded.path == ("WIDE1-1", "WIDE2-2*")
    assert decoded.info == b"Hello APRS"


def test_decode_frame_preserves_binary_info() -> None:
    frame = _frame(
        _encode_address("APRS", last=False)
        + _encode_address("N0CALL", last=True)
        + bytes([0x03, 0xF0])
        + b"Binary\xff\xfe\xfddata"
    )

    assert decode_frame(frame).info == b"Binary\xff\xfe\xfddata"


@pytest.mark.parametrize("separator", [b"\r", b"\n", b"\r\n"])
def test_decode_frame_truncates_at_line_break(separator) -> None:
    frame = _frame(
        _encode_address("APRS", last=False)
        + _encode_address("N0CALL", last=True)
        + bytes([0x03, 0xF0])
        + b"First line"
        + separator
        + b"Second line"
    )

    assert decode_frame(frame).info == b"First line"


def test_decode_frame_invalid_pid() -> None:
    frame = _frame(
        _encode_address("APRS", last=False)
        + _encode_address("N0CALL", ssid=1, last=True)
        + bytes([0x03, 0xCF])
        + b"payload"
    )

    with pytest.raises(FormatError) as exc:
        decode_frame(frame)
    assert "pid=0xcf" in str(exc.value)


def test_decode_frame_rejects_single_address() -> None:
    frame = _frame(
        _encode_address("APRS", last=True)
        + _encode_address("N0CALL", last=False)
        + bytes([0x03, 0xF0])
    )

    with pytest.raises(FormatError):
        decode_frame(frame)


def test_decode_frame_rejects_short_or_unflagged_input() -> None:
    with pytest.raises(FormatError):
        decode_frame(b"\x7e\x7e")
    with pytest.raises(FormatError):
        decode_frame(b"N0CALL>APRS:>status")


def test_is_ax25_frame() -> None:
    assert is_ax25_frame(b"\x7e\x00\x7e")
    assert not is_ax25_frame(b"\x7e")
    assert not is_ax25_frame(b"N0CALL>APRS:>x")


def test_address_to_tnc2() -> None:
    address = AX25Address("WIDE2", 2, has_been_repeated=True)

    assert address.to_tnc2() == "WIDE2-2"
    assert address.to_tnc2(include_asterisk=True) == "WIDE2-2*"
    assert AX25Address("APRS").to_tnc2(include_asterisk=True) == "APRS"
