"""Payloads whose grammar this codec does not implement."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import NotSupportedError
from ..packet_type import PacketType, packet_type_for
from .base import InfoField


@dataclass(frozen=True, slots=True)
class UnsupportedInfo(InfoField):
    """Keeps the payload verbatim (Mic-E, objects, telemetry, ...)."""

    content: str

    @property
    def packet_type(self) -> PacketType:
        return packet_type_for(self.content)

    def encode(self) -> str:
        raise NotSupportedError(
            f"Encoding {self.packet_type.name} information fields is not supported"
        )
