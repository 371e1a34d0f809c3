"""Complete weather reports carried in a position report's comment."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from ..config import CodecConfig
from ..errors import FormatError, RangeError
from .position_info import PositionInfo


@dataclass(frozen=True, slots=True)
class WeatherField:
    """A tagged fixed-width measurement in the weather data block."""

    name: str
    tag: str
    width: int

    def find(self, comment: str) -> int | None:
        """Return the first value tagged with this field in ``comment``."""
        pattern = (
            re.escape(self.tag)
            + f"([0-9]{{{self.width}}}|-[0-9]{{{self.width - 1}}})"
        )
        match = re.search(pattern, comment)
        return int(match.group(1)) if match else None

    def check(self, value: int | None) -> None:
        if value is None:
            return
        if not -(10 ** (self.width - 1)) < value < 10**self.width:
            raise RangeError(
                f"{self.name} value {value} does not fit in {self.width} characters"
            )


WIND_DIRECTION = WeatherField("wind_direction", "", 3)

# Always encoded, in this order, with placeholders for unknown values.
PRIMARY_FIELDS = (
    WeatherField("wind_speed", "/", 3),
    WeatherField("wind_gust", "g", 3),
    WeatherField("temperature", "t", 3),
    WeatherField("rainfall_1_hour", "r", 3),
    WeatherField("rainfall_24_hour", "p", 3),
    WeatherField("rainfall_since_midnight", "P", 3),
    WeatherField("humidity", "h", 2),
    WeatherField("barometric_pressure", "b", 5),
)

LUMINOSITY = WeatherField("luminosity", "L", 3)
LUMINOSITY_OVER_1000 = WeatherField("luminosity", "l", 3)
RAIN_RAW = WeatherField("rain_raw", "#", 3)
SNOW = WeatherField("snow", "s", 3)

_ALL_TAGGED = PRIMARY_FIELDS + (LUMINOSITY, LUMINOSITY_OVER_1000, RAIN_RAW, SNOW)

_LEADING_DIRECTION = re.compile(r"[0-9. ]{3}|-[0-9. ]{2}")
_DIRECTION_VALUE = re.compile(r"([0-9]{3}|-[0-9]{2})")
_LEADING_FIELD = re.compile(
    "|".join(
        re.escape(field.tag)
        + f"(?:[0-9. ]{{{field.width}}}|-[0-9. ]{{{field.width - 1}}})"
        for field in _ALL_TAGGED
    )
)


def encode_measurement(value: int | None, width: int) -> str:
    """Encode a measurement zero-padded to ``width``, or dots when unknown."""
    if value is None:
        return "." * width
    encoded = str(abs(value)).zfill(width)
    if value < 0:
        encoded = "-" + encoded[1:]
    return encoded


def split_weather_comment(comment: str | None) -> tuple[dict[str, int | None], str | None]:
    """Split a weather comment into measurements and the trailing user comment."""
    values: dict[str, int | None] = {field.name: None for field in PRIMARY_FIELDS}
    values.update(wind_direction=None, luminosity=None, rain_raw=None, snow=None)
    if not comment:
        return values, None

    direction = _DIRECTION_VALUE.match(comment)
    if direction is not None:
        values["wind_direction"] = int(direction.group(1))
    for field in PRIMARY_FIELDS + (RAIN_RAW, SNOW):
        values[field.name] = field.find(comment)

    luminosity = LUMINOSITY.find(comment)
    if luminosity is None:
        luminosity = LUMINOSITY_OVER_1000.find(comment)
        if luminosity is not None:
            luminosity += 1000
    values["luminosity"] = luminosity

    offset = 0
    leading = _LEADING_DIRECTION.match(comment)
    if leading is not None:
        offset = leading.end()
    while (field_match := _LEADING_FIELD.match(comment, offset)) is not None:
        offset = field_match.end()
    return values, comment[offset:] or None


@dataclass(frozen=True, slots=True)
class WeatherInfo(PositionInfo):
    """Position report with the weather symbol and a weather data block.

    ``comment`` holds only the user comment that follows the weather data.
    Unknown measurements are ``None``, never zero.
    """

    wind_direction: int | None = None
    wind_speed: int | None = None
    wind_gust: int | None = None
    temperature: int | None = None
    rainfall_1_hour: int | None = None
    rainfall_24_hour: int | None = None
    rainfall_since_midnight: int | None = None
    humidity: int | None = None
    barometric_pressure: int | None = None
    luminosity: int | None = None
    rain_raw: int | None = None
    snow: int | None = None

    def __post_init__(self) -> None:
        if not self.position.is_weather_symbol:
            raise FormatError(
                "Weather reports must use the weather symbol (/_ or \\_), got "
                f"{self.position.symbol_table}{self.position.symbol_code}"
            )
        WIND_DIRECTION.check(self.wind_direction)
        for field in PRIMARY_FIELDS + (RAIN_RAW, SNOW):
            field.check(getattr(self, field.name))
        if self.luminosity is not None and not 0 <= self.luminosity <= 1999:
            raise RangeError(f"luminosity must be in range [0, 1999], got {self.luminosity}")

    @classmethod
    def decode(
        cls,
        text: str,
        *,
        reference: datetime | None = None,
        config: CodecConfig | None = None,
    ) -> WeatherInfo:
        return cls.from_position_info(
            PositionInfo.decode(text, reference=reference, config=config)
        )

    @classmethod
    def from_position_info(cls, info: PositionInfo) -> WeatherInfo:
        """Parse the weather data out of a decoded position report's comment."""
        values, user_comment = split_weather_comment(info.comment)
        return cls(
            position=info.position,
            has_messaging=info.has_messaging,
            timestamp=info.timestamp,
            comment=user_comment,
            **values,
        )

    def encode_weather(self) -> str:
        """Encode the weather data block without the user comment."""
        parts = [encode_measurement(self.wind_direction, WIND_DIRECTION.width)]
        for field in PRIMARY_FIELDS:
            parts.append(field.tag + encode_measurement(getattr(self, field.name), field.width))

        if self.luminosity is not None:
            if self.luminosity < 1000:
                parts.append(LUMINOSITY.tag + encode_measurement(self.luminosity, 3))
            else:
                parts.append(
                    LUMINOSITY_OVER_1000.tag + encode_measurement(self.luminosity - 1000, 3)
                )
        if self.rain_raw is not None:
            parts.append(RAIN_RAW.tag + encode_measurement(self.rain_raw, RAIN_RAW.width))
        if self.snow is not None:
            parts.append(SNOW.tag + encode_measurement(self.snow, SNOW.width))
        return "".join(parts)

    def _encode_comment(self) -> str:
        return self.encode_weather() + (self.comment or "")
