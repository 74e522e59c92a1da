from __future__ import annotations

from wsbench.payload.base import PayloadKind, PayloadSource
from wsbench.payload.factory import load_payload_source, payload_for
from wsbench.payload.generator import PayloadCache, binary, default_cache, utf8

__all__ = [
    "PayloadCache",
    "PayloadKind",
    "PayloadSource",
    "binary",
    "default_cache",
    "load_payload_source",
    "payload_for",
    "utf8",
]
