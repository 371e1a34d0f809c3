"""Decode a stream of packets, skipping the ones that fail."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime, timezone

from .config import CodecConfig
from .errors import APRSError
from .packet import Packet

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_skippable(item: str | bytes) -> bool:
    """Blank lines and APRS-IS server comments (``# ...``) carry no packet."""
    if isinstance(item, str):
        line = item.strip("\r\n")
        return not line.strip() or line.startswith("#")
    line = item.strip(b"\r\n")
    return not line.strip() or line.startswith(b"#")


def iter_packets(
    items: Iterable[str | bytes],
    *,
    config: CodecConfig | None = None,
    clock: Callable[[], datetime] | None = None,
) -> Iterator[Packet]:
    """Yield a :class:`Packet` for each decodable line or frame in ``items``.

    Malformed and unsupported traffic is expected on a shared channel, so an
    item that fails to decode is logged and skipped.
    """
    clock = clock or _utc_now
    for item in items:
        if _is_skippable(item):
            continue
        try:
            yield Packet.decode(item, received_time=clock(), config=config)
        except APRSError as exc:
            logger.debug("Skipping undecodable packet %r: %s", item, exc)
