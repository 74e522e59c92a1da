from __future__ import annotations

import importlib
from typing import cast

from wsbench.payload.base import PayloadKind, PayloadSource
from wsbench.payload.generator import default_cache


def load_payload_source(name: str | None) -> PayloadSource:
    if not name:
        return default_cache
    module = importlib.import_module(name)
    for attr in ("utf8", "binary"):
        if not callable(getattr(module, attr, None)):
            msg = f"Generator {name!r} does not define a callable {attr}(size)"
            raise ValueError(msg)
    return cast(PayloadSource, module)


def payload_for(source: PayloadSource, kind: PayloadKind, size: int) -> bytes:
    if kind is PayloadKind.BINARY:
        return source.binary(size)
    return source.utf8(size)
