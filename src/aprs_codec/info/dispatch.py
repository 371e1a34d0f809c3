"""Route an information field to its variant by data type identifier."""

from __future__ import annotations

import logging
from datetime import datetime

from ..config import CodecConfig
from ..errors import FormatError
from ..packet_type import PacketType, packet_type_for
from .base import InfoField
from .maidenhead_info import MaidenheadBeaconInfo
from .message_info import MessageInfo
from .position_info import PositionInfo
from .status_info import StatusInfo
from .unsupported_info import UnsupportedInfo
from .weather_info import WeatherInfo

logger = logging.getLogger(__name__)


def decode_info_field(
    text: str,
    *,
    reference: datetime | None = None,
    config: CodecConfig | None = None,
) -> InfoField:
    """Decode ``text`` into the variant selected by its first character.

    Unimplemented and unknown data types decode to :class:`UnsupportedInfo`
    rather than failing.
    """
    if not text:
        raise FormatError("Information field is empty")

    packet_type = packet_type_for(text)
    if packet_type.is_position:
        info = PositionInfo.decode(text, reference=reference, config=config)
        if info.position.is_weather_symbol:
            return WeatherInfo.from_position_info(info)
        return info
    if packet_type is PacketType.STATUS:
        return StatusInfo.decode(text, reference=reference, config=config)
    if packet_type is PacketType.MESSAGE:
        return MessageInfo.decode(text, reference=reference, config=config)
    if packet_type is PacketType.MAIDENHEAD_GRID_LOCATOR_BEACON:
        return MaidenheadBeaconInfo.decode(text, reference=reference, config=config)

    logger.debug("No decoder for %s payload %r, keeping it verbatim", packet_type.name, text)
    return UnsupportedInfo(text)
