"""Messages addressed to a station (``:``)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from ..config import CodecConfig
from ..errors import FormatError
from ..packet_type import PacketType
from .base import InfoField

ADDRESSEE_LENGTH = 9
MAX_CONTENT_LENGTH = 67
FORBIDDEN_CONTENT_CHARS = "|~{"

_MESSAGE = re.compile(r":(.{9}):([^{]*)(?:\{([A-Za-z0-9]{1,5}))?", re.DOTALL)
_MESSAGE_ID = re.compile(r"[A-Za-z0-9]{1,5}")


@dataclass(frozen=True, slots=True)
class MessageInfo(InfoField):
    """A message; a ``message_id`` asks the addressee to acknowledge it."""

    addressee: str
    content: str | None = None
    message_id: str | None = None

    def __post_init__(self) -> None:
        if not 1 <= len(self.addressee) <= ADDRESSEE_LENGTH:
            raise FormatError(
                f"Addressee must be 1 to {ADDRESSEE_LENGTH} characters: {self.addressee!r}"
            )
        if self.content is not None:
            if len(self.content) > MAX_CONTENT_LENGTH:
                raise FormatError(
                    f"Message content must be at most {MAX_CONTENT_LENGTH} characters, "
                    f"got {len(self.content)}"
                )
            if any(char in self.content for char in FORBIDDEN_CONTENT_CHARS):
                raise FormatError(
                    f"Message content may not contain '|', '~' or '{{': {self.content!r}"
                )
        if self.message_id is not None and not _MESSAGE_ID.fullmatch(self.message_id):
            raise FormatError(
                f"Message id must be 1 to 5 alphanumeric characters: {self.message_id!r}"
            )

    @property
    def packet_type(self) -> PacketType:
        return PacketType.MESSAGE

    @property
    def requests_ack(self) -> bool:
        return self.message_id is not None

    @classmethod
    def decode(
        cls,
        text: str,
        *,
        reference: datetime | None = None,
        config: CodecConfig | None = None,
    ) -> MessageInfo:
        match = _MESSAGE.fullmatch(text)
        if match is None:
            raise FormatError(f"Malformed message: {text!r}")
        addressee, content, message_id = match.groups()
        return cls(
            addressee=addressee.rstrip(" "),
            content=content or None,
            message_id=message_id,
        )

    def encode(self) -> str:
        encoded = ":" + self.addressee.ljust(ADDRESSEE_LENGTH) + ":" + (self.content or "")
        if self.message_id is not None:
            encoded += "{" + self.message_id
        return encoded
