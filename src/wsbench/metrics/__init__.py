from __future__ import annotations

from wsbench.metrics.collector import Metrics
from wsbench.metrics.models import (
    CloseEvent,
    ErrorEvent,
    HandshakeEvent,
    MessageEvent,
    RunSummary,
    StreamStats,
    TimingMarks,
)
from wsbench.metrics.stream import SampleStream

__all__ = [
    "CloseEvent",
    "ErrorEvent",
    "HandshakeEvent",
    "MessageEvent",
    "Metrics",
    "RunSummary",
    "SampleStream",
    "StreamStats",
    "TimingMarks",
]
