"""aprs_codec: decode and encode APRS packets and information fields.

Expose a single runtime version value (``__version__``) read from the
installed distribution metadata.
"""

import logging

from importlib import metadata as _importlib_metadata

try:
    __version__ = _importlib_metadata.version("aprs-codec")
except _importlib_metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .config import CodecConfig, load_config, save_config  # noqa: E402
from .errors import APRSError, FormatError, NotSupportedError, RangeError  # noqa: E402
from .info import (  # noqa: E402
    InfoField,
    MaidenheadBeaconInfo,
    MessageInfo,
    PositionInfo,
    StatusInfo,
    UnsupportedInfo,
    WeatherInfo,
)
from .packet import EnvelopeFormat, Packet  # noqa: E402
from .packet_type import PacketType  # noqa: E402
from .position import Position  # noqa: E402
from .stream import iter_packets  # noqa: E402
from .timestamp import Timestamp, TimestampType  # noqa: E402

decode = Packet.decode

__all__ = [
    "APRSError",
    "CodecConfig",
    "EnvelopeFormat",
    "FormatError",
    "InfoField",
    "MaidenheadBeaconInfo",
    "MessageInfo",
    "NotSupportedError",
    "Packet",
    "PacketType",
    "Position",
    "PositionInfo",
    "RangeError",
    "StatusInfo",
    "Timestamp",
    "TimestampType",
    "UnsupportedInfo",
    "WeatherInfo",
    "__version__",
    "decode",
    "iter_packets",
    "load_config",
    "save_config",
]
