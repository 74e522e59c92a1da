from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping
from urllib.parse import urlsplit

from wsbench.payload import PayloadKind


@dataclass(frozen=True, slots=True)
class TargetConfig:
    url: str
    timeout_sec: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        scheme = urlsplit(self.url).scheme
        if scheme not in ("ws", "wss"):
            msg = f"Target must be a ws:// or wss:// URL, got {self.url!r}"
            raise ValueError(msg)
        if self.timeout_sec <= 0:
            msg = f"timeout_sec must be positive, got {self.timeout_sec}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RunConfig:
    target: TargetConfig
    amount: int = 100
    concurrent: int | None = None
    messages: int = 1
    message_size: int = 1024
    binary: bool = False
    generator: str | None = None
    run_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.amount <= 0:
            msg = f"amount must be positive, got {self.amount}"
            raise ValueError(msg)
        if self.concurrent is not None and self.concurrent <= 0:
            msg = f"concurrent must be positive, got {self.concurrent}"
            raise ValueError(msg)
        if self.messages < 0:
            msg = f"messages must be non-negative, got {self.messages}"
            raise ValueError(msg)
        if self.message_size < 0:
            msg = f"message_size must be non-negative, got {self.message_size}"
            raise ValueError(msg)

    @property
    def concurrency(self) -> int:
        if self.concurrent is None:
            return self.amount
        return min(self.concurrent, self.amount)

    @property
    def planned_requests(self) -> int:
        return self.amount * self.messages

    @property
    def payload_kind(self) -> PayloadKind:
        return PayloadKind.BINARY if self.binary else PayloadKind.UTF8

    def to_metadata(self) -> Mapping[str, Any]:
        return {
            "run_id": self.run_id or "",
            "created_at": self.created_at.isoformat(),
            "amount": self.amount,
            "concurrent": self.concurrency,
            "messages": self.messages,
            "message_size": self.message_size,
            "payload_kind": self.payload_kind.value,
            "generator": self.generator or "",
            "target": {
                "url": self.target.url,
                "timeout_sec": self.target.timeout_sec,
                "headers": dict(self.target.headers),
            },
        }
