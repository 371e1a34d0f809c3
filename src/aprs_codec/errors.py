"""Exceptions raised by the APRS codec."""

from __future__ import annotations


class APRSError(Exception):
    """Base class for every error raised while decoding or encoding."""


class FormatError(APRSError, ValueError):
    """Raised when input does not match the required APRS grammar."""


class RangeError(APRSError, ValueError):
    """Raised when a decoded or requested value is outside its legal domain."""


class NotSupportedError(APRSError, NotImplementedError):
    """Raised for well-understood operations that are intentionally unimplemented."""
