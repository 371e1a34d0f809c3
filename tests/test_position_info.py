"""Tests for position and weather information fields."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from aprs_codec.errors import FormatError, NotSupportedError, RangeError
from aprs_codec.info import InfoField, PositionInfo, WeatherInfo
from aprs_codec.packet_type import PacketType
from aprs_codec.position import Position
from aprs_codec.timestamp import Timestamp, TimestampType

REFERENCE = datetime(2016, 10, 24, 12, 0, tzinfo=timezone.utc)


def test_decode_position_with_timestamp() -> None:
    encoded = "/092345z4903.50N/07201.75W>Test1234"

    info = InfoField.from_string(encoded, reference=REFERENCE)

    assert isinstance(info, PositionInfo)
    assert info.packet_type is PacketType.POSITION_WITH_TIMESTAMP_NO_MESSAGING
    assert not info.has_messaging
    assert info.timestamp is not None
    assert info.timestamp.decoded_type is TimestampType.DHMZ
    assert info.timestamp.date_time == datetime(2016, 10, 9, 23, 45, tzinfo=timezone.utc)
    assert info.position.coordinates == (49.0583, -72.0292)
    assert (info.position.symbol_table, info.position.symbol_code) == ("/", ">")
    assert info.comment == "Test1234"
    assert info.encode() == encoded


@pytest.mark.parametrize(
    "encoded, packet_type, has_messaging, comment",
    [
        (
            "!4903.50N/07201.75W-Test 001234",
            PacketType.POSITION_WITHOUT_TIMESTAMP_NO_MESSAGING,
            False,
            "Test 001234",
        ),
        (
            "=4903.50N/07201.75W-",
            PacketType.POSITION_WITHOUT_TIMESTAMP_WITH_MESSAGING,
            True,
            None,
        ),
        (
            "@092345z4903.50N/07201.75W>",
            PacketType.POSITION_WITH_TIMESTAMP_WITH_MESSAGING,
            True,
            None,
        ),
        (
            "/234517h4903.50N/07201.75W>PHG5132",
            PacketType.POSITION_WITH_TIMESTAMP_NO_MESSAGING,
            False,
            "PHG5132",
        ),
        (
            "!49  .  N/072  .  W-ambiguous",
            PacketType.POSITION_WITHOUT_TIMESTAMP_NO_MESSAGING,
            False,
            "ambiguous",
        ),
    ],
)
def test_position_roundtrip(encoded, packet_type, has_messaging, comment) -> None:
    info = PositionInfo.decode(encoded, reference=REFERENCE)

    assert info.packet_type is packet_type
    assert info.has_messaging is has_messaging
    assert info.comment == comment
    assert info.encode() == encoded


def test_position_encode_with_requested_timestamp_type() -> None:
    info = PositionInfo.decode("/092345z4903.50N/07201.75W>", reference=REFERENCE)

    assert info.encode(TimestampType.HMS) == "/234500h4903.50N/07201.75W>"


def test_position_built_from_fields() -> None:
    info = PositionInfo(
        position=Position(49.0583, -72.0292, "/", ">"),
        timestamp=Timestamp(datetime(2016, 10, 9, 23, 45, tzinfo=timezone.utc)),
        comment="Test1234",
    )

    assert info.packet_type is PacketType.POSITION_WITH_TIMESTAMP_NO_MESSAGING
    assert info.encode() == "/092345z4903.50N/07201.75W>Test1234"


def test_position_rejects_mdhm_timestamp_on_encode() -> None:
    info = PositionInfo(
        position=Position(49.0583, -72.0292, "/", ">"),
        timestamp=Timestamp(REFERENCE, TimestampType.MDHM),
    )

    with pytest.raises(NotSupportedError):
        info.encode()


@pytest.mark.parametrize(
    "encoded",
    [
        "!4903.50N/07201.75",
        "/0923z4903.50N/07201.75W>",
        "@10092345N/07201.75W>",
        ">not a position",
    ],
)
def test_position_rejects_malformed(encoded) -> None:
    with pytest.raises(FormatError):
        PositionInfo.decode(encoded, reference=REFERENCE)


def test_position_rejects_out_of_range_latitude() -> None:
    with pytest.raises(RangeError):
        PositionInfo.decode("!9103.50N/07201.75W-")


@pytest.mark.parametrize(
    "encoded, comment, values",
    [
        (
            "!4903.50N/07201.75W_220/004g005t077r000p000P000h50b09900wRSW",
            "wRSW",
            dict(wind_direction=220, wind_speed=4, wind_gust=5, temperature=77,
                 rainfall_since_midnight=0, humidity=50, barometric_pressure=9900,
                 luminosity=None),
        ),
        (
            "!4903.50N/07201.75W_220/004g005t077r000p000P000h50b09900L010wRSW",
            "wRSW",
            dict(luminosity=10, barometric_pressure=9900),
        ),
        (
            "!4903.50N/07201.75W_220/004g005t077r000p000P000h50b09900l010wRSW",
            "wRSW",
            dict(luminosity=1010),
        ),
        (
            "!4903.50N/07201.75W_220/004g005t077r000p000P000h50b.....wRSW",
            "wRSW",
            dict(humidity=50, barometric_pressure=None),
        ),
        (
            "@092345z4903.50N/07201.75W_220/004g005t-07r000p000P000h50b09900wRSW",
            "wRSW",
            dict(temperature=-7, rainfall_1_hour=0, rainfall_24_hour=0),
        ),
        (
            "!4903.50N\\07201.75W_220/004g005t077r000p000P000h50b09900#123s004",
            None,
            dict(rain_raw=123, snow=4),
        ),
    ],
)
def test_weather_roundtrip(encoded, comment, values) -> None:
    info = InfoField.from_string(encoded, reference=REFERENCE)

    assert isinstance(info, WeatherInfo)
    assert isinstance(info, PositionInfo)
    assert info.comment == comment
    for name, expected in values.items():
        assert getattr(info, name) == expected, name
    assert info.encode() == encoded


@pytest.mark.parametrize(
    "encoded, expected_encoding, comment, luminosity",
    [
        (
            "@092345z4903.50N/07201.75W_090/000g000t066r000p000...dUII",
            "@092345z4903.50N/07201.75W_090/000g000t066r000p000P...h..b........dUII",
            "...dUII",
            None,
        ),
        # A measurement inside the user comment is still picked up.
        (
            "@092345z4903.50N/07201.75W_090/000g000t066r000p000...dUIIL878",
            "@092345z4903.50N/07201.75W_090/000g000t066r000p000P...h..b.....L878...dUIIL878",
            "...dUIIL878",
            878,
        ),
        # The first occurrence wins.
        (
            "@092345z4903.50N/07201.75W_090/000g000t066r000p000L555dUIIL878",
            "@092345z4903.50N/07201.75W_090/000g000t066r000p000P...h..b.....L555dUIIL878",
            "dUIIL878",
            555,
        ),
    ],
)
def test_weather_partial_report(encoded, expected_encoding, comment, luminosity) -> None:
    info = InfoField.from_string(encoded, reference=REFERENCE)

    assert isinstance(info, WeatherInfo)
    assert info.packet_type is PacketType.POSITION_WITH_TIMESTAMP_WITH_MESSAGING
    assert (info.wind_direction, info.wind_speed, info.wind_gust) == (90, 0, 0)
    assert info.temperature == 66
    assert info.rainfall_since_midnight is None
    assert info.humidity is None
    assert info.barometric_pressure is None
    assert info.luminosity == luminosity
    assert info.comment == comment
    assert info.encode() == expected_encoding


def test_weather_built_from_fields() -> None:
    info = WeatherInfo(
        position=Position(49.0583, -72.0292, "/", "_"),
        temperature=-7,
        humidity=50,
        luminosity=1200,
        comment=" station",
    )

    assert info.encode() == (
        "!4903.50N/07201.75W_.../...g...t-07r...p...P...h50b.....l200 station"
    )


def test_weather_requires_weather_symbol() -> None:
    with pytest.raises(FormatError):
        WeatherInfo(position=Position(49.0, -72.0, "/", ">"))
    with pytest.raises(FormatError):
        WeatherInfo.decode("!4903.50N/07201.75W>220/004")


@pytest.mark.parametrize(
    "field, value",
    [
        ("temperature", 1000),
        ("temperature", -100),
        ("humidity", 100),
        ("barometric_pressure", 100000),
        ("wind_direction", 1000),
        ("luminosity", 2000),
    ],
)
def test_weather_rejects_values_that_do_not_fit(field, value) -> None:
    with pytest.raises(RangeError):
        WeatherInfo(position=Position(symbol_table="/", symbol_code="_"), **{field: value})


def test_non_weather_symbol_stays_position() -> None:
    info = InfoField.from_string("!4903.50N/07201.75W-220/004g005")

    assert type(info) is PositionInfo
    assert info.comment == "220/004g005"
