"""Status reports (``>``)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from ..config import CodecConfig
from ..errors import FormatError, NotSupportedError
from ..packet_type import PacketType
from ..position import Position
from ..timestamp import Timestamp, reference_or_now
from .base import InfoField

_WITH_GRID = re.compile(
    r">([A-Ra-r]{2}[0-9]{2}(?:[A-Xa-x]{2}(?:[0-9]{2})?)?)(\S{2})?(?: (.*))?",
    re.DOTALL,
)
_WITH_OPTIONAL_TIMESTAMP = re.compile(r">([0-9]{6}[z/])?(.*)", re.DOTALL)

MAX_COMMENT_WITH_POSITION = 53
MAX_COMMENT_WITH_TIMESTAMP = 55
MAX_COMMENT = 62
FORBIDDEN_COMMENT_CHARS = "|~"


@dataclass(frozen=True, slots=True)
class StatusInfo(InfoField):
    """Status text, optionally with a Maidenhead position or a DHM timestamp."""

    position: Position | None = None
    timestamp: Timestamp | None = None
    comment: str | None = None

    def __post_init__(self) -> None:
        if self.position is not None and self.timestamp is not None:
            raise FormatError("Status reports may carry a position or a timestamp, not both")
        if self.comment is None:
            return
        if self.position is not None:
            limit = MAX_COMMENT_WITH_POSITION
        elif self.timestamp is not None:
            limit = MAX_COMMENT_WITH_TIMESTAMP
        else:
            limit = MAX_COMMENT
        if len(self.comment) > limit:
            raise FormatError(
                f"Status comment must be at most {limit} characters, got {len(self.comment)}"
            )
        if any(char in self.comment for char in FORBIDDEN_COMMENT_CHARS):
            raise FormatError(f"Status comment may not contain '|' or '~': {self.comment!r}")

    @property
    def packet_type(self) -> PacketType:
        return PacketType.STATUS

    @classmethod
    def decode(
        cls,
        text: str,
        *,
        reference: datetime | None = None,
        config: CodecConfig | None = None,
    ) -> StatusInfo:
        if not text.startswith(">"):
            raise FormatError(f"Status reports must start with '>': {text!r}")

        match = _WITH_GRID.fullmatch(text)
        if match is not None:
            grid, symbol, comment = match.groups()
            return cls(
                position=Position.decode_maidenhead(grid + (symbol or "")),
                comment=comment or None,
            )

        match = _WITH_OPTIONAL_TIMESTAMP.fullmatch(text)
        if match is None:
            raise FormatError(f"Malformed status report: {text!r}")
        timestamp_text, comment = match.groups()
        timestamp = None
        if timestamp_text is not None:
            timestamp = Timestamp.decode(
                timestamp_text, reference_or_now(reference), config=config
            )
        return cls(timestamp=timestamp, comment=comment or None)

    def encode(self) -> str:
        """Encode a status report with a 6 character grid square and symbol."""
        if self.position is None:
            raise NotSupportedError("Only status reports with a Maidenhead position can be encoded")
        encoded = ">" + self.position.encode_gridsquare(6, True)
        if self.comment:
            encoded += " " + self.comment
        return encoded
