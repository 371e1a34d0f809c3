"""Common base for APRS information field variants."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING

from ..packet_type import PacketType

if TYPE_CHECKING:
    from ..config import CodecConfig


class InfoField(ABC):
    """The type-tagged body of an APRS packet.

    Implementations form a closed set: PositionInfo (and its WeatherInfo
    specialisation), StatusInfo, MessageInfo, MaidenheadBeaconInfo and
    UnsupportedInfo.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def packet_type(self) -> PacketType:
        """APRS data type of this field."""

    @abstractmethod
    def encode(self) -> str:
        """Encode as an information field string."""

    @staticmethod
    def from_string(
        text: str,
        *,
        reference: datetime | None = None,
        config: CodecConfig | None = None,
    ) -> InfoField:
        """Decode ``text`` into the variant selected by its first character."""
        from .dispatch import decode_info_field

        return decode_info_field(text, reference=reference, config=config)
