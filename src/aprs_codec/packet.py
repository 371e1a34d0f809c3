"""APRS packets: the envelope around an information field.

Two envelopes are understood on decode: the TNC2 text form
``SENDER>PATH1,PATH2:PAYLOAD`` used by APRS-IS and most software, and the
AX.25 binary UI frame used on air. Only the text form is produced on encode.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from . import ax25
from .config import DEFAULT_CONFIG, CodecConfig
from .errors import FormatError, NotSupportedError
from .info import InfoField, decode_info_field
from .timestamp import reference_or_now

logger = logging.getLogger(__name__)

_TEXT_ENVELOPE = re.compile(r"([A-Za-z0-9-]+)>([^:]*):(.*)", re.DOTALL)


class EnvelopeFormat(Enum):
    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True, slots=True)
class Packet:
    """A decoded or constructed APRS packet.

    ``destination`` is only known for packets decoded from a binary frame;
    in the text envelope it is the first entry of ``path``. ``received_time``
    is ``None`` for packets built in code.
    """

    sender: str
    path: tuple[str, ...]
    info_field: InfoField
    destination: str | None = None
    received_time: datetime | None = None

    def __post_init__(self) -> None:
        if not self.sender:
            raise FormatError("Packet sender must not be empty")
        if not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))

    @classmethod
    def decode(
        cls,
        raw: bytes | str,
        *,
        received_time: datetime | None = None,
        config: CodecConfig | None = None,
    ) -> Packet:
        """Decode a text line or binary frame into a :class:`Packet`.

        ``received_time`` defaults to the current UTC instant and is the
        reference against which partial timestamps are resolved.
        """
        config = config or DEFAULT_CONFIG
        if not raw:
            raise FormatError("Packet is empty")
        received_time = reference_or_now(received_time)
        text, data = _text_and_bytes(raw, config.text_encoding)

        if text is not None:
            match = _TEXT_ENVELOPE.fullmatch(text.rstrip("\r\n"))
            if match is not None:
                sender, path_text, payload = match.groups()
                logger.debug("Decoding text envelope from %s", sender)
                return cls(
                    sender=sender,
                    path=tuple(path_text.split(",")) if path_text else (),
                    info_field=decode_info_field(
                        payload, reference=received_time, config=config
                    ),
                    received_time=received_time,
                )

        if data is not None and ax25.is_ax25_frame(data):
            return cls._decode_binary(data, received_time, config)

        raise FormatError(f"Packet matches neither the text nor the binary envelope: {raw!r}")

    @classmethod
    def _decode_binary(
        cls, data: bytes, received_time: datetime, config: CodecConfig
    ) -> Packet:
        frame = ax25.decode_frame(data, max_path_entries=config.max_path_entries)
        try:
            payload = frame.info.decode(config.text_encoding)
        except UnicodeDecodeError as exc:
            raise FormatError(
                f"AX.25 information field is not valid {config.text_encoding}"
            ) from exc
        sender = frame.source.to_tnc2()
        logger.debug("Decoding binary envelope from %s", sender)
        return cls(
            sender=sender,
            destination=frame.destination.to_tnc2(),
            path=frame.path,
            info_field=decode_info_field(payload, reference=received_time, config=config),
            received_time=received_time,
        )

    def encode(self, fmt: EnvelopeFormat = EnvelopeFormat.TEXT) -> str:
        """Encode in the requested envelope format.

        The binary envelope is not supported.
        """
        if fmt is EnvelopeFormat.BINARY:
            raise NotSupportedError("Encoding the AX.25 binary envelope is not supported")
        path = self.path
        if self.destination is not None:
            path = (self.destination,) + path
        return f"{self.sender}>{','.join(path)}:{self.info_field.encode()}"


def _text_and_bytes(raw: bytes | str, encoding: str) -> tuple[str | None, bytes | None]:
    if isinstance(raw, str):
        try:
            return raw, raw.encode(encoding)
        except UnicodeEncodeError:
            return raw, None
    data = bytes(raw)
    try:
        return data.decode(encoding), data
    except UnicodeDecodeError:
        return None, data
