"""Obsolete Maidenhead grid locator beacons (``[``)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from ..config import CodecConfig
from ..errors import FormatError
from ..packet_type import PacketType
from ..position import Position
from .base import InfoField

_BEACON = re.compile(r"\[([A-Za-z0-9]{4,8})([^\]\s]{2})?\](?: (.*))?", re.DOTALL)


@dataclass(frozen=True, slots=True)
class MaidenheadBeaconInfo(InfoField):
    position: Position
    comment: str | None = None

    @property
    def packet_type(self) -> PacketType:
        return PacketType.MAIDENHEAD_GRID_LOCATOR_BEACON

    @classmethod
    def decode(
        cls,
        text: str,
        *,
        reference: datetime | None = None,
        config: CodecConfig | None = None,
    ) -> MaidenheadBeaconInfo:
        match = _BEACON.fullmatch(text)
        if match is None:
            raise FormatError(f"Malformed Maidenhead beacon: {text!r}")
        grid, symbol, comment = match.groups()
        return cls(
            position=Position.decode_maidenhead(grid + (symbol or "")),
            comment=comment or None,
        )

    def encode(self) -> str:
        encoded = "[" + self.position.encode_gridsquare(6, False) + "]"
        if self.comment:
            encoded += " " + self.comment
        return encoded
