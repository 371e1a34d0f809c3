"""Decoding of the AX.25 binary envelope around an APRS information field."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import FormatError

FLAG = 0x7E
ADDRESS_LENGTH = 7
# Frame check sequence (2 bytes) and the closing flag.
TRAILER_LENGTH = 3
UI_FRAME_CONTROL = 0x03
NO_LAYER_THREE_PID = 0xF0
MIN_FRAME_LENGTH = 1 + 2 * ADDRESS_LENGTH + 2 + TRAILER_LENGTH


@dataclass(frozen=True, slots=True)
class AX25Address:
    callsign: str
    ssid: int = 0
    has_been_repeated: bool = False

    def to_tnc2(self, include_asterisk: bool = False) -> str:
        suffix = f"-{self.ssid}" if self.ssid > 0 else ""
        indicator = "*" if include_asterisk and self.has_been_repeated else ""
        return f"{self.callsign}{suffix}{indicator}"


@dataclass(frozen=True, slots=True)
class AX25Frame:
    """Addresses and information bytes of a UI frame."""

    destination: AX25Address
    source: AX25Address
    digipeaters: tuple[AX25Address, ...]
    info: bytes

    @property
    def path(self) -> tuple[str, ...]:
        """Digipeater path in TNC2 form, repeated entries marked with ``*``."""
        return tuple(digi.to_tnc2(include_asterisk=True) for digi in self.digipeaters)


def is_ax25_frame(data: bytes) -> bool:
    """Return True when ``data`` is delimited by AX.25 flag bytes."""
    return len(data) >= 2 and data[0] == FLAG and data[-1] == FLAG


def decode_frame(data: bytes, *, max_path_entries: int = 8) -> AX25Frame:
    """Split a flag-delimited UI frame into addresses and information bytes.

    The information field is truncated at the first CR or LF.
    """
    if not is_ax25_frame(data):
        raise FormatError("AX.25 frame must start and end with the 0x7E flag")
    if len(data) < MIN_FRAME_LENGTH:
        raise FormatError(f"AX.25 frame too short ({len(data)} bytes)")

    body = data[1:-TRAILER_LENGTH]
    addresses, offset = _parse_address_fields(body, max_addresses=2 + max_path_entries)
    if len(addresses) < 2:
        raise FormatError("AX.25 frame missing source/destination addresses")
    if offset + 2 > len(body):
        raise FormatError("AX.25 frame missing control/PID fields")

    control = body[offset]
    pid = body[offset + 1]
    if control != UI_FRAME_CONTROL or pid != NO_LAYER_THREE_PID:
        raise FormatError(
            f"Unsupported AX.25 frame type control={control:#x} pid={pid:#x}"
        )

    info = body[offset + 2 :]
    for sep in (b"\r", b"\n"):
        idx = info.find(sep)
        if idx >= 0:
            info = info[:idx]

    return AX25Frame(
        destination=addresses[0],
        source=addresses[1],
        digipeaters=tuple(addresses[2:]),
        info=info,
    )


def _parse_address_fields(
    body: bytes, *, max_addresses: int
) -> tuple[list[AX25Address], int]:
    addresses: list[AX25Address] = []
    offset = 0
    while offset + ADDRESS_LENGTH <= len(body):
        if len(addresses) == max_addresses:
            raise FormatError(
                f"AX.25 frame has more than {max_addresses - 2} digipeater addresses"
            )
        field = body[offset : offset + ADDRESS_LENGTH]
        offset += ADDRESS_LENGTH
        callsign = _decode_callsign(field[:6])
        ssid = (field[6] >> 1) & 0x0F
        has_been_repeated = bool(field[6] & 0x80)
        addresses.append(AX25Address(callsign, ssid, has_been_repeated))
        if field[6] & 0x01:
            break
    else:
        raise FormatError("AX.25 address extension bit not found")
    return addresses, offset


def _decode_callsign(raw: bytes) -> str:
    chars = []
    for byte in raw:
        value = (byte >> 1) & 0x7F
        if value == 0x20:
            chars.append(" ")
        elif value != 0:
            chars.append(chr(value))
    callsign = "".join(chars).strip().upper()
    if not callsign:
        raise FormatError("AX.25 address has an empty callsign")
    return callsign
