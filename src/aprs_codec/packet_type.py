"""APRS data type identifiers.

The first character of an information field selects its grammar. The table
below is built once at import time and never mutated.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from .errors import FormatError


class PacketType(Enum):
    CURRENT_MIC_E_DATA = "current-mic-e-data"
    OLD_MIC_E_DATA = "old-mic-e-data"
    POSITION_WITHOUT_TIMESTAMP_NO_MESSAGING = "position-without-timestamp-no-messaging"
    PEET_BROS_U_II_WEATHER_STATION = "peet-bros-u-ii-weather-station"
    RAW_GPS_DATA = "raw-gps-data"
    AGRELO_DFJR_MICROFINDER = "agrelo-dfjr-microfinder"
    MAP_FEATURE = "map-feature"
    OLD_MIC_E_DATA_CURRENT_TM_D700 = "old-mic-e-data-current-tm-d700"
    ITEM = "item"
    SHELTER_DATA_WITH_TIME = "shelter-data-with-time"
    INVALID_OR_TEST_DATA = "invalid-or-test-data"
    SPACE_WEATHER = "space-weather"
    POSITION_WITH_TIMESTAMP_NO_MESSAGING = "position-with-timestamp-no-messaging"
    MESSAGE = "message"
    OBJECT = "object"
    STATION_CAPABILITIES = "station-capabilities"
    POSITION_WITHOUT_TIMESTAMP_WITH_MESSAGING = "position-without-timestamp-with-messaging"
    STATUS = "status"
    QUERY = "query"
    POSITION_WITH_TIMESTAMP_WITH_MESSAGING = "position-with-timestamp-with-messaging"
    TELEMETRY_DATA = "telemetry-data"
    MAIDENHEAD_GRID_LOCATOR_BEACON = "maidenhead-grid-locator-beacon"
    WEATHER_REPORT = "weather-report"
    CURRENT_MIC_E_DATA_NOT_TM_D700 = "current-mic-e-data-not-tm-d700"
    USER_DEFINED = "user-defined"
    THIRD_PARTY_TRAFFIC = "third-party-traffic"

    # Sentinels: recognised on decode, never encoded.
    UNUSED = "unused"
    DO_NOT_USE = "do-not-use"
    UNKNOWN = "unknown"

    @property
    def is_sentinel(self) -> bool:
        return self in _SENTINELS

    @property
    def is_position(self) -> bool:
        return self in _POSITION_TYPES


_SENTINELS = frozenset({PacketType.UNUSED, PacketType.DO_NOT_USE, PacketType.UNKNOWN})

_POSITION_TYPES = frozenset(
    {
        PacketType.POSITION_WITHOUT_TIMESTAMP_NO_MESSAGING,
        PacketType.POSITION_WITHOUT_TIMESTAMP_WITH_MESSAGING,
        PacketType.POSITION_WITH_TIMESTAMP_NO_MESSAGING,
        PacketType.POSITION_WITH_TIMESTAMP_WITH_MESSAGING,
    }
)

IDENTIFIERS: MappingProxyType[str, PacketType] = MappingProxyType(
    {
        "\x1c": PacketType.CURRENT_MIC_E_DATA,
        "\x1d": PacketType.OLD_MIC_E_DATA,
        "!": PacketType.POSITION_WITHOUT_TIMESTAMP_NO_MESSAGING,
        '"': PacketType.UNUSED,
        "#": PacketType.PEET_BROS_U_II_WEATHER_STATION,
        "$": PacketType.RAW_GPS_DATA,
        "%": PacketType.AGRELO_DFJR_MICROFINDER,
        "&": PacketType.MAP_FEATURE,
        "'": PacketType.OLD_MIC_E_DATA_CURRENT_TM_D700,
        "(": PacketType.UNUSED,
        ")": PacketType.ITEM,
        "*": PacketType.PEET_BROS_U_II_WEATHER_STATION,
        "+": PacketType.SHELTER_DATA_WITH_TIME,
        ",": PacketType.INVALID_OR_TEST_DATA,
        "-": PacketType.UNUSED,
        ".": PacketType.SPACE_WEATHER,
        "/": PacketType.POSITION_WITH_TIMESTAMP_NO_MESSAGING,
        ":": PacketType.MESSAGE,
        ";": PacketType.OBJECT,
        "<": PacketType.STATION_CAPABILITIES,
        "=": PacketType.POSITION_WITHOUT_TIMESTAMP_WITH_MESSAGING,
        ">": PacketType.STATUS,
        "?": PacketType.QUERY,
        "@": PacketType.POSITION_WITH_TIMESTAMP_WITH_MESSAGING,
        "T": PacketType.TELEMETRY_DATA,
        "[": PacketType.MAIDENHEAD_GRID_LOCATOR_BEACON,
        "\\": PacketType.UNUSED,
        "]": PacketType.UNUSED,
        "^": PacketType.UNUSED,
        "_": PacketType.WEATHER_REPORT,
        "`": PacketType.CURRENT_MIC_E_DATA_NOT_TM_D700,
        "{": PacketType.USER_DEFINED,
        "}": PacketType.THIRD_PARTY_TRAFFIC,
        "A": PacketType.DO_NOT_USE,
        "S": PacketType.DO_NOT_USE,
        "U": PacketType.DO_NOT_USE,
        "Z": PacketType.DO_NOT_USE,
        "0": PacketType.DO_NOT_USE,
        "9": PacketType.DO_NOT_USE,
    }
)

# First identifier wins for types reachable from more than one character.
_REVERSE: MappingProxyType[PacketType, str] = MappingProxyType(
    {
        packet_type: identifier
        for identifier, packet_type in reversed(list(IDENTIFIERS.items()))
        if not packet_type.is_sentinel
    }
)


def packet_type_for(identifier: str) -> PacketType:
    """Map a data type identifier character to its packet type."""
    if not identifier:
        return PacketType.UNKNOWN
    return IDENTIFIERS.get(identifier[0].upper(), PacketType.UNKNOWN)


def identifier_for(packet_type: PacketType) -> str:
    """Return the identifier character used to encode ``packet_type``."""
    try:
        return _REVERSE[packet_type]
    except KeyError as exc:
        raise FormatError(f"Packet type {packet_type.name} cannot be encoded") from exc
