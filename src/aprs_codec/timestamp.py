"""APRS timestamp codec.

APRS timestamps omit some of the calendar: DHM carries only the day of the
month, HMS only the time of day, and MDHM has no year. The missing parts are
resolved against a reference instant supplied by the caller (normally the time
the packet was received), so decoding never reads the clock itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum

from .config import DEFAULT_CONFIG, CodecConfig
from .errors import FormatError, RangeError

DEFAULT_CLOCK_DRIFT = timedelta(minutes=5)
DEFAULT_YEAR_ATTEMPTS = 4

_DIGITS_6 = re.compile(r"[0-9]{6}")
_DIGITS_8 = re.compile(r"[0-9]{8}")


class TimestampType(Enum):
    DHMZ = "DHMz"
    DHML = "DHMl"
    HMS = "HMS"
    MDHM = "MDHM"
    NOT_DECODED = "NotDecoded"

    @property
    def is_zulu(self) -> bool:
        return self is not TimestampType.DHML


def find_correct_year_and_month(day: int, reference: date) -> tuple[int, int]:
    """Return ``(year, month)`` of the most recent ``day`` at or before ``reference``.

    Walks backwards one day at a time, never forwards, so day 31 seen on the
    first of January resolves to the previous December.
    """
    if not 1 <= day <= 31:
        raise RangeError(f"Day must be in range [1, 31], got {day}")
    if day <= reference.day:
        return reference.year, reference.month
    current = reference if not isinstance(reference, datetime) else reference.date()
    while current.day != day:
        current -= timedelta(days=1)
    return current.year, current.month


def find_correct_day_month_and_year(
    hour: int,
    minute: int,
    second: int,
    reference: datetime,
    drift: timedelta = DEFAULT_CLOCK_DRIFT,
) -> tuple[int, int, int]:
    """Return ``(year, month, day)`` for an HMS time seen at ``reference``.

    A time more than ``drift`` ahead of the reference is taken to be yesterday's.
    """
    try:
        packet_time = reference.replace(
            hour=hour, minute=minute, second=second, microsecond=0
        )
    except ValueError as exc:
        raise RangeError(f"Invalid time of day {hour:02}:{minute:02}:{second:02}") from exc
    if packet_time - reference > drift:
        packet_time -= timedelta(days=1)
    return packet_time.year, packet_time.month, packet_time.day


def find_correct_year(
    month: int,
    day: int,
    hour: int,
    minute: int,
    reference: datetime,
    drift: timedelta = DEFAULT_CLOCK_DRIFT,
    attempts: int = DEFAULT_YEAR_ATTEMPTS,
) -> int:
    """Return the most recent year in which the MDHM instant is not in the future.

    Tries the reference year and then earlier years, skipping years in which
    the date does not exist (29 February).
    """
    for offset in range(attempts):
        try:
            candidate = datetime(
                reference.year - offset,
                month,
                day,
                hour,
                minute,
                tzinfo=reference.tzinfo,
            )
        except ValueError:
            continue
        if candidate - reference <= drift:
            return candidate.year
    raise RangeError(
        f"No valid year found for {month:02}-{day:02} {hour:02}:{minute:02} "
        f"within {attempts} years of {reference.isoformat()}"
    )


@dataclass(frozen=True, slots=True)
class Timestamp:
    """A calendar instant and the APRS grammar it was decoded from."""

    date_time: datetime
    decoded_type: TimestampType = TimestampType.NOT_DECODED

    @classmethod
    def decode(
        cls,
        text: str,
        reference: datetime,
        *,
        config: CodecConfig | None = None,
    ) -> Timestamp:
        """Decode a 7 or 8 character APRS timestamp relative to ``reference``."""
        config = config or DEFAULT_CONFIG
        if len(text) not in (7, 8):
            raise FormatError(
                f"APRS timestamp must be 7 or 8 characters, got {len(text)}: {text!r}"
            )

        indicator = text[6]
        if indicator in ("z", "/"):
            return cls._decode_dhm(text, reference, zulu=indicator == "z")
        if indicator == "h":
            return cls._decode_hms(text, reference, config)
        if indicator.isascii() and indicator.isdigit():
            return cls._decode_mdhm(text, reference, config)
        raise FormatError(f"Invalid timestamp indicator {indicator!r} in {text!r}")

    def encode(self, timestamp_type: TimestampType) -> str:
        """Format the stored instant in the requested APRS grammar."""
        if timestamp_type is TimestampType.DHMZ:
            return self.date_time.astimezone(timezone.utc).strftime("%d%H%Mz")
        if timestamp_type is TimestampType.DHML:
            return self.date_time.astimezone().strftime("%d%H%M/")
        if timestamp_type is TimestampType.HMS:
            return self.date_time.astimezone(timezone.utc).strftime("%H%M%Sh")
        if timestamp_type is TimestampType.MDHM:
            return self.date_time.astimezone(timezone.utc).strftime("%m%d%H%M")
        raise RangeError(f"Cannot encode timestamp as {timestamp_type.value}")

    @classmethod
    def _decode_dhm(cls, text: str, reference: datetime, *, zulu: bool) -> Timestamp:
        if len(text) != 7:
            raise FormatError(f"DHM timestamp must be 7 characters: {text!r}")
        if not _DIGITS_6.fullmatch(text[:6]):
            raise FormatError(f"Timestamp contains non-numeric values: {text!r}")
        day, hour, minute = int(text[0:2]), int(text[2:4]), int(text[4:6])

        hint = reference.astimezone(timezone.utc) if zulu else reference.astimezone()
        year, month = find_correct_year_and_month(day, hint)
        try:
            resolved = datetime(year, month, day, hour, minute, tzinfo=hint.tzinfo)
        except ValueError as exc:
            raise RangeError(f"Invalid DHM timestamp {text!r}: {exc}") from exc
        decoded_type = TimestampType.DHMZ if zulu else TimestampType.DHML
        return cls(resolved, decoded_type)

    @classmethod
    def _decode_hms(
        cls, text: str, reference: datetime, config: CodecConfig
    ) -> Timestamp:
        if len(text) != 7:
            raise FormatError(f"HMS timestamp must be 7 characters: {text!r}")
        if not _DIGITS_6.fullmatch(text[:6]):
            raise FormatError(f"Timestamp contains non-numeric values: {text!r}")
        hour, minute, second = int(text[0:2]), int(text[2:4]), int(text[4:6])

        hint = reference.astimezone(timezone.utc)
        year, month, day = find_correct_day_month_and_year(
            hour, minute, second, hint, config.clock_drift
        )
        resolved = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
        return cls(resolved, TimestampType.HMS)

    @classmethod
    def _decode_mdhm(
        cls, text: str, reference: datetime, config: CodecConfig
    ) -> Timestamp:
        if len(text) != 8:
            raise FormatError(f"MDHM timestamp must be 8 characters: {text!r}")
        if not _DIGITS_8.fullmatch(text):
            raise FormatError(f"Timestamp contains non-numeric values: {text!r}")
        month, day = int(text[0:2]), int(text[2:4])
        hour, minute = int(text[4:6]), int(text[6:8])

        hint = reference.astimezone(timezone.utc)
        year = find_correct_year(
            month,
            day,
            hour,
            minute,
            hint,
            config.clock_drift,
            config.mdhm_year_attempts,
        )
        resolved = datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
        return cls(resolved, TimestampType.MDHM)


def reference_or_now(reference: datetime | None) -> datetime:
    """Return ``reference``, or the current UTC instant when none was supplied."""
    if reference is not None:
        return reference
    return datetime.now(timezone.utc)
