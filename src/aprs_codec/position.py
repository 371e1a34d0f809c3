"""Position codec: APRS lat/long blocks and Maidenhead grid squares.

Lat/long blocks use degrees and decimal minutes (``DDMM.hhN`` and
``DDDMM.hhW``). Precision is reduced by blanking trailing digits with spaces;
the number of blanked digits is the position's ambiguity. The decimal point is
never blanked and never counted.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from .errors import FormatError, RangeError

POSITION_LENGTH = 19
LATITUDE_LENGTH = 8
LONGITUDE_LENGTH = 9
MAX_LATLONG_AMBIGUITY = 4
GRID_AMBIGUITIES = (0, 2, 4, 6)
WEATHER_SYMBOL_TABLES = ("/", "\\")
WEATHER_SYMBOL_CODE = "_"

_LATITUDE = re.compile(r"([0-9]{2})([0-9]{2})\.([0-9]{2})([NS])")
_LONGITUDE = re.compile(r"([0-9]{3})([0-9]{2})\.([0-9]{2})([EW])")
_GRID_WITH_SYMBOL = re.compile(r"([a-zA-Z0-9]{4,8})(.{2})?")


def count_ambiguity(coords: str) -> int:
    """Count blanked digits in a lat or long string.

    Scans from the digit nearest the direction letter towards the degrees.
    A blank to the left of a digit is rejected.
    """
    ambiguity = 0
    found_digit = False
    decimal_index = len(coords) - 4
    for index in range(len(coords) - 2, -1, -1):
        if index == decimal_index:
            continue
        if coords[index] == " ":
            if found_digit:
                raise FormatError(
                    f"Coordinate blanks must grow from the right: {coords!r}"
                )
            ambiguity += 1
        else:
            found_digit = True
    return ambiguity


def enforce_ambiguity(coords: str, ambiguity: int) -> str:
    """Blank ``ambiguity`` trailing digits of a lat or long string."""
    available = len(coords) - 2
    if ambiguity < 0 or ambiguity > available:
        raise RangeError(
            f"Only {available} digits can be blanked in {coords!r}, "
            f"but {ambiguity} were requested"
        )
    chars = list(coords)
    decimal_index = len(coords) - 4
    remaining = ambiguity
    index = len(coords) - 2
    while index >= 0 and remaining > 0:
        if index != decimal_index:
            chars[index] = " "
            remaining -= 1
        index -= 1
    return "".join(chars)


def decode_latitude(coords: str) -> float:
    """Decode an 8 character ``DDMM.hhN`` latitude into signed degrees."""
    upper = coords.upper()
    if len(upper) != LATITUDE_LENGTH:
        raise FormatError(
            f"Latitude must be {LATITUDE_LENGTH} characters, got {len(upper)}: {coords!r}"
        )
    if upper[7] not in ("N", "S"):
        raise FormatError(f"Latitude must end in N or S: {coords!r}")
    if upper[4] != ".":
        raise FormatError(f"Latitude must have '.' at index 4: {coords!r}")
    count_ambiguity(upper)

    match = _LATITUDE.fullmatch(upper.replace(" ", "0"))
    if match is None:
        raise FormatError(f"Latitude contains non-numeric values: {coords!r}")
    return _to_degrees(match, limit=90, coords=coords)


def decode_longitude(coords: str, ambiguity: int = 0) -> float:
    """Decode a 9 character ``DDDMM.hhW`` longitude into signed degrees.

    ``ambiguity`` is the latitude's ambiguity, which longitude inherits.
    """
    upper = coords.upper()
    if len(upper) != LONGITUDE_LENGTH:
        raise FormatError(
            f"Longitude must be {LONGITUDE_LENGTH} characters, got {len(upper)}: {coords!r}"
        )
    if upper[8] not in ("E", "W"):
        raise FormatError(f"Longitude must end in E or W: {coords!r}")
    if upper[5] != ".":
        raise FormatError(f"Longitude must have '.' at index 5: {coords!r}")
    count_ambiguity(upper)

    enforced = enforce_ambiguity(upper, ambiguity)
    match = _LONGITUDE.fullmatch(enforced.replace(" ", "0"))
    if match is None:
        raise FormatError(f"Longitude contains non-numeric values: {coords!r}")
    return _to_degrees(match, limit=180, coords=coords)


def _to_degrees(match: re.Match[str], *, limit: int, coords: str) -> float:
    degrees = int(match.group(1))
    minutes = int(match.group(2))
    hundredths = int(match.group(3))
    if degrees > limit:
        raise RangeError(f"Degrees must be in range [0, {limit}]: {coords!r}")
    if minutes >= 60:
        raise RangeError(f"Minutes must be in range [0, 59]: {coords!r}")
    value = degrees + (minutes + hundredths / 100) / 60.0
    if value > limit:
        raise RangeError(f"Coordinate exceeds {limit} degrees: {coords!r}")
    if match.group(4) in ("S", "W"):
        value = -value
    return round(value, 4)


def _encode_coordinate(value: float, *, degree_width: int, directions: str) -> str:
    hundredths_total = round(abs(value) * 6000)
    degrees, remainder = divmod(hundredths_total, 6000)
    minutes, hundredths = divmod(remainder, 100)
    direction = directions[1] if math.copysign(1.0, value) < 0 else directions[0]
    return f"{degrees:0{degree_width}d}{minutes:02d}.{hundredths:02d}{direction}"


def _decode_grid_axis(grid: str, *, latitude: bool) -> float:
    """Decode one axis of a Maidenhead grid to the centre of its cell."""
    index = 1 if latitude else 0
    multiplier = 1 if latitude else 2
    pairs = len(grid) // 2
    value = 0.0
    size = 0.0

    char = grid[index]
    if not "A" <= char <= "R":
        raise FormatError(f"Grid field characters must be A-R: {grid!r}")
    size = 10.0 * multiplier
    value += size * (ord(char) - ord("A"))

    if pairs >= 2:
        char = grid[index + 2]
        if not char.isascii() or not char.isdigit():
            raise FormatError(f"Grid square characters must be 0-9: {grid!r}")
        size = 1.0 * multiplier
        value += size * int(char)

    if pairs >= 3:
        char = grid[index + 4]
        if not "A" <= char <= "X":
            raise FormatError(f"Grid subsquare characters must be A-X: {grid!r}")
        size = 2.5 * multiplier / 60.0
        value += size * (ord(char) - ord("A"))

    if pairs >= 4:
        char = grid[index + 6]
        if not char.isascii() or not char.isdigit():
            raise FormatError(f"Grid extended square characters must be 0-9: {grid!r}")
        size = 0.25 * multiplier / 60.0
        value += size * int(char)

    value += size / 2.0
    return value - 90.0 * multiplier


def _encode_grid_axis(value: float, *, latitude: bool, pairs: int) -> str:
    multiplier = 1 if latitude else 2
    remaining = value + 90.0 * multiplier
    encoded = []

    step = 10.0 * multiplier
    index = min(int(remaining // step), 17)
    encoded.append(chr(ord("A") + index))
    remaining -= index * step

    if pairs >= 2:
        step = 1.0 * multiplier
        index = min(int(remaining // step), 9)
        encoded.append(str(index))
        remaining -= index * step

    # Subsquares are measured in minutes.
    remaining *= 60.0

    if pairs >= 3:
        step = 2.5 * multiplier
        index = min(int(remaining // step), 23)
        encoded.append(chr(ord("A") + index))
        remaining -= index * step

    if pairs >= 4:
        step = 0.25 * multiplier
        index = min(int(remaining // step), 9)
        encoded.append(str(index))

    return "".join(encoded)


@dataclass(frozen=True, slots=True)
class Position:
    """A geographic point with its APRS symbol and ambiguity."""

    latitude: float = 0.0
    longitude: float = 0.0
    symbol_table: str = "\\"
    symbol_code: str = "."
    ambiguity: int = 0

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise RangeError(f"Latitude must be in range [-90, 90], got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise RangeError(
                f"Longitude must be in range [-180, 180], got {self.longitude}"
            )
        if len(self.symbol_table) != 1 or len(self.symbol_code) != 1:
            raise FormatError("Symbol table and code must be single characters")
        if not 0 <= self.ambiguity <= max(GRID_AMBIGUITIES):
            raise RangeError(f"Ambiguity must be in range [0, 6], got {self.ambiguity}")

    @property
    def coordinates(self) -> tuple[float, float]:
        return self.latitude, self.longitude

    @property
    def is_weather_symbol(self) -> bool:
        return (
            self.symbol_table in WEATHER_SYMBOL_TABLES
            and self.symbol_code == WEATHER_SYMBOL_CODE
        )

    @classmethod
    def decode(cls, coords: str) -> Position:
        """Decode a 19 character lat/long position block with its symbol."""
        if len(coords) != POSITION_LENGTH:
            raise FormatError(
                f"Position must be {POSITION_LENGTH} characters, got {len(coords)}: {coords!r}"
            )
        latitude_text = coords[0:8]
        latitude = decode_latitude(latitude_text)
        ambiguity = count_ambiguity(latitude_text)
        if ambiguity > MAX_LATLONG_AMBIGUITY:
            raise RangeError(
                f"Lat/long ambiguity must be in range [0, {MAX_LATLONG_AMBIGUITY}], "
                f"got {ambiguity}: {coords!r}"
            )
        longitude = decode_longitude(coords[9:18], ambiguity)
        return cls(
            latitude=latitude,
            longitude=longitude,
            symbol_table=coords[8],
            symbol_code=coords[18],
            ambiguity=ambiguity,
        )

    @classmethod
    def decode_maidenhead(cls, gridsquare: str) -> Position:
        """Decode a 4, 6 or 8 character grid, optionally followed by a symbol pair."""
        if len(gridsquare) not in (4, 6, 8, 10):
            raise FormatError(
                "Maidenhead grid must be 4, 6, 8 or 10 characters including an "
                f"optional symbol pair, got {len(gridsquare)}: {gridsquare!r}"
            )
        match = _GRID_WITH_SYMBOL.fullmatch(gridsquare)
        if match is None:
            raise FormatError(f"Invalid Maidenhead grid: {gridsquare!r}")
        grid = match.group(1).upper()
        if len(grid) % 2:
            raise FormatError(f"Maidenhead grid must have an even length: {gridsquare!r}")

        symbols = match.group(2)
        table, code = (symbols[0], symbols[1]) if symbols else ("\\", ".")
        return cls(
            latitude=_decode_grid_axis(grid, latitude=True),
            longitude=_decode_grid_axis(grid, latitude=False),
            symbol_table=table,
            symbol_code=code,
            ambiguity=max(0, 6 - len(grid)),
        )

    def encode(self) -> str:
        """Encode as a 19 character lat/long position block."""
        return (
            self.encode_latitude()
            + self.symbol_table
            + self.encode_longitude()
            + self.symbol_code
        )

    def encode_latitude(self) -> str:
        self._check_latlong_ambiguity()
        encoded = _encode_coordinate(self.latitude, degree_width=2, directions="NS")
        return enforce_ambiguity(encoded, self.ambiguity)

    def encode_longitude(self) -> str:
        self._check_latlong_ambiguity()
        encoded = _encode_coordinate(self.longitude, degree_width=3, directions="EW")
        return enforce_ambiguity(encoded, self.ambiguity)

    def encode_gridsquare(self, length: int, append_symbol: bool) -> str:
        """Encode as a Maidenhead grid, shortened from the right by ambiguity."""
        if length not in (4, 6, 8):
            raise RangeError(f"Grid length must be 4, 6 or 8, got {length}")
        if self.ambiguity not in GRID_AMBIGUITIES:
            raise RangeError(
                f"Ambiguity must be one of {GRID_AMBIGUITIES} to encode a grid, "
                f"got {self.ambiguity}"
            )
        if self.ambiguity > length - 4:
            raise RangeError(
                f"Ambiguity {self.ambiguity} would shorten a {length} character grid "
                "below 4 characters"
            )

        pairs = (length - self.ambiguity) // 2
        longitude = _encode_grid_axis(self.longitude, latitude=False, pairs=pairs)
        latitude = _encode_grid_axis(self.latitude, latitude=True, pairs=pairs)
        grid = "".join(lon + lat for lon, lat in zip(longitude, latitude))
        if append_symbol:
            grid += self.symbol_table + self.symbol_code
        return grid

    def _check_latlong_ambiguity(self) -> None:
        if self.ambiguity > MAX_LATLONG_AMBIGUITY:
            raise RangeError(
                f"Lat/long ambiguity must be in range [0, {MAX_LATLONG_AMBIGUITY}], "
                f"got {self.ambiguity}"
            )
