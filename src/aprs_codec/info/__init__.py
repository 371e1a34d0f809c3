"""APRS information field variants."""

from .base import InfoField
from .dispatch import decode_info_field
from .maidenhead_info import MaidenheadBeaconInfo
from .message_info import MessageInfo
from .position_info import PositionInfo
from .status_info import StatusInfo
from .unsupported_info import UnsupportedInfo
from .weather_info import WeatherInfo

__all__ = [
    "InfoField",
    "MaidenheadBeaconInfo",
    "MessageInfo",
    "PositionInfo",
    "StatusInfo",
    "UnsupportedInfo",
    "WeatherInfo",
    "decode_info_field",
]
