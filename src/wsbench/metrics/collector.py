from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from wsbench.errors import NotStartedError, NotStoppedError
from wsbench.metrics.models import (
    CloseEvent,
    ErrorEvent,
    HandshakeEvent,
    MessageEvent,
    RunSummary,
    TimingMarks,
)
from wsbench.metrics.stream import SampleStream

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def wall_clock_ms() -> float:
    return time.time() * 1000.0


class Metrics:
    """Bookkeeping for a single run.

    Transport code reports what happened through the ``record_*`` hooks, which
    may be called from several workers at once; every hook and ``summary()``
    hold the same lock. Reported errors are tallied, never raised.
    """

    def __init__(self, requests: int, clock: Clock | None = None) -> None:
        self.requests = requests
        self.connections = 0
        self.disconnects = 0
        self.failures = 0
        self.errors: dict[str, int] = {}
        self.timing = TimingMarks()
        self.latency = SampleStream()
        self.handshaking = SampleStream()
        self.read = 0
        self.sent = 0
        self._clock = clock or wall_clock_ms
        self._lock = threading.Lock()

    def start(self) -> Metrics:
        with self._lock:
            self.timing.start = self._clock()
        logger.debug("metrics started, %d requests planned", self.requests)
        return self

    def established(self) -> Metrics:
        with self._lock:
            start = self._require_start("established")
            self.timing.ready = self._clock()
            self.timing.established = self.timing.ready - start
        return self

    def stop(self) -> Metrics:
        with self._lock:
            if self.timing.stop is not None:
                logger.debug("metrics already stopped, ignoring")
                return self
            start = self._require_start("stop")
            self.timing.stop = self._clock()
            self.timing.duration = self.timing.stop - start
        logger.debug("metrics stopped after %.1f ms", self.timing.duration)
        return self

    def record_error(self, event: ErrorEvent) -> Metrics:
        with self._lock:
            self.failures += 1
            self.errors[event.message] = self.errors.get(event.message, 0) + 1
        return self

    def record_message(self, event: MessageEvent) -> Metrics:
        with self._lock:
            self.latency.push(event.latency)
        return self

    def record_handshake(self, event: HandshakeEvent) -> Metrics:
        with self._lock:
            self.handshaking.push(event.duration)
            self.connections += 1
        return self

    def record_close(self, event: CloseEvent) -> Metrics:
        if event.read < 0 or event.send < 0:
            msg = f"Byte counts must be non-negative, got read={event.read} send={event.send}"
            raise ValueError(msg)
        with self._lock:
            self.disconnects += 1
            self.read += event.read
            self.sent += event.send
        return self

    def summary(self) -> RunSummary:
        with self._lock:
            if self.timing.duration is None:
                msg = "summary() requires the run to be stopped first"
                raise NotStoppedError(msg)
            return RunSummary(
                requests=self.requests,
                bytes_received=self.read,
                bytes_transferred=self.sent,
                duration_ms=self.timing.duration,
                established_ms=self.timing.established,
                connections=self.connections,
                disconnects=self.disconnects,
                failures=self.failures,
                errors=dict(self.errors),
                handshake=self.handshaking.stats(),
                latency=self.latency.stats(),
            )

    def _require_start(self, hook: str) -> float:
        if self.timing.start is None:
            msg = f"{hook}() called before start()"
            raise NotStartedError(msg)
        return self.timing.start
