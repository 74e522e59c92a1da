from __future__ import annotations

import logging
import operator

import msgpack

from wsbench.errors import InvalidPayloadSize
from wsbench.payload.base import PayloadKind

logger = logging.getLogger(__name__)

# Leading markers of every envelope; the decoder on the other end expects them verbatim.
ENVELOPE_HEADER = (0, 3, 2, 1)


def encode_envelope(kind: PayloadKind, size: int) -> bytes:
    if kind is PayloadKind.UTF8:
        body: str | bytes = "\x00" * size
    else:
        body = bytes(size)
    return msgpack.packb([*ENVELOPE_HEADER, body], use_bin_type=True)


class PayloadCache:
    """Encoded envelopes keyed by (kind, size).

    Entries are built on first request and reused for the lifetime of the
    cache. Two callers missing on the same key may both encode; whichever
    stores first wins and every later call returns that exact object.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[tuple[PayloadKind, int], bytes] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, kind: PayloadKind, size: int) -> bytes:
        kind = PayloadKind(kind)
        size = operator.index(size)
        if size < 0:
            raise InvalidPayloadSize(size)
        key = (kind, size)
        cached = self._entries.get(key)
        if cached is not None:
            return cached
        logger.debug("encoding %s payload of %d bytes", kind.value, size)
        return self._entries.setdefault(key, encode_envelope(kind, size))

    def utf8(self, size: int) -> bytes:
        return self.get(PayloadKind.UTF8, size)

    def binary(self, size: int) -> bytes:
        return self.get(PayloadKind.BINARY, size)


default_cache = PayloadCache()


def utf8(size: int) -> bytes:
    return default_cache.utf8(size)


def binary(size: int) -> bytes:
    return default_cache.binary(size)
