from __future__ import annotations

from enum import Enum
from typing import Protocol


class PayloadKind(str, Enum):
    UTF8 = "utf8"
    BINARY = "binary"


class PayloadSource(Protocol):
    def utf8(self, size: int) -> bytes:
        ...

    def binary(self, size: int) -> bytes:
        ...
