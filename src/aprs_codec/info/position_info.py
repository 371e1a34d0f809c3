"""Position reports with and without a timestamp."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from ..config import CodecConfig
from ..errors import FormatError, NotSupportedError
from ..packet_type import PacketType, identifier_for, packet_type_for
from ..position import Position
from ..timestamp import Timestamp, TimestampType, reference_or_now
from .base import InfoField

_WITHOUT_TIMESTAMP = re.compile(r"[!=](.{19})(.*)", re.DOTALL)
_WITH_TIMESTAMP = re.compile(r"[/@]([0-9]{6}[zh/])(.{19})(.*)", re.DOTALL)

_POSITION_TIMESTAMP_TYPES = (TimestampType.DHMZ, TimestampType.DHML, TimestampType.HMS)


@dataclass(frozen=True, slots=True)
class PositionInfo(InfoField):
    """Position report (``!``, ``=``, ``/`` or ``@``).

    Anything following the 19 character position block, including data
    extensions such as course/speed or PHG, is kept as the comment.
    """

    position: Position
    has_messaging: bool = False
    timestamp: Timestamp | None = None
    comment: str | None = None

    @property
    def packet_type(self) -> PacketType:
        if self.timestamp is None:
            if self.has_messaging:
                return PacketType.POSITION_WITHOUT_TIMESTAMP_WITH_MESSAGING
            return PacketType.POSITION_WITHOUT_TIMESTAMP_NO_MESSAGING
        if self.has_messaging:
            return PacketType.POSITION_WITH_TIMESTAMP_WITH_MESSAGING
        return PacketType.POSITION_WITH_TIMESTAMP_NO_MESSAGING

    @classmethod
    def decode(
        cls,
        text: str,
        *,
        reference: datetime | None = None,
        config: CodecConfig | None = None,
    ) -> PositionInfo:
        packet_type = packet_type_for(text)
        if not packet_type.is_position:
            raise FormatError(f"Not a position report (type {packet_type.name}): {text!r}")

        has_messaging = packet_type in (
            PacketType.POSITION_WITHOUT_TIMESTAMP_WITH_MESSAGING,
            PacketType.POSITION_WITH_TIMESTAMP_WITH_MESSAGING,
        )

        if packet_type in (
            PacketType.POSITION_WITHOUT_TIMESTAMP_NO_MESSAGING,
            PacketType.POSITION_WITHOUT_TIMESTAMP_WITH_MESSAGING,
        ):
            match = _WITHOUT_TIMESTAMP.fullmatch(text)
            if match is None:
                raise FormatError(f"Malformed {packet_type.name} report: {text!r}")
            timestamp = None
            position_text, comment = match.group(1), match.group(2)
        else:
            match = _WITH_TIMESTAMP.fullmatch(text)
            if match is None:
                raise FormatError(f"Malformed {packet_type.name} report: {text!r}")
            timestamp = Timestamp.decode(
                match.group(1), reference_or_now(reference), config=config
            )
            position_text, comment = match.group(2), match.group(3)

        return cls(
            position=Position.decode(position_text),
            has_messaging=has_messaging,
            timestamp=timestamp,
            comment=comment or None,
        )

    def encode(self, timestamp_type: TimestampType | None = None) -> str:
        """Encode the report.

        The timestamp is written as ``timestamp_type`` if given, otherwise in
        the grammar it was decoded from, otherwise as DHM zulu.
        """
        return (
            identifier_for(self.packet_type)
            + self._encode_timestamp(timestamp_type)
            + self.position.encode()
            + self._encode_comment()
        )

    def _encode_timestamp(self, timestamp_type: TimestampType | None) -> str:
        if self.timestamp is None:
            return ""
        if timestamp_type is None:
            timestamp_type = self.timestamp.decoded_type
        if timestamp_type is TimestampType.NOT_DECODED:
            timestamp_type = TimestampType.DHMZ
        if timestamp_type not in _POSITION_TIMESTAMP_TYPES:
            raise NotSupportedError(
                f"Position reports cannot carry a {timestamp_type.value} timestamp"
            )
        return self.timestamp.encode(timestamp_type)

    def _encode_comment(self) -> str:
        return self.comment or ""
