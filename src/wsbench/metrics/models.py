from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> ErrorEvent:
        return cls(message=str(exc) or type(exc).__name__)


@dataclass(frozen=True, slots=True)
class MessageEvent:
    latency: float


@dataclass(frozen=True, slots=True)
class HandshakeEvent:
    duration: float


@dataclass(frozen=True, slots=True)
class CloseEvent:
    read: int
    send: int


@dataclass(slots=True)
class TimingMarks:
    start: float | None = None
    stop: float | None = None
    ready: float | None = None
    duration: float | None = None
    established: float | None = None


@dataclass(frozen=True, slots=True)
class StreamStats:
    count: int
    minimum: float | None
    maximum: float | None
    mean: float | None
    stddev: float | None
    median: float | None
    percentiles: Mapping[float, float] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RunSummary:
    requests: int
    bytes_received: int
    bytes_transferred: int
    duration_ms: float
    established_ms: float | None
    connections: int
    disconnects: int
    failures: int
    errors: Mapping[str, int]
    handshake: StreamStats
    latency: StreamStats

    @property
    def total_errors(self) -> int:
        return sum(self.errors.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "Total received": self.bytes_received,
            "Total transferred": self.bytes_transferred,
            "Time taken for tests": self.duration_ms,
            "Connections created": self.connections,
            "Handshake duration (median)": self.handshake.median,
            "Message latency (median)": self.latency.median,
            "Total errors": self.total_errors,
        }
