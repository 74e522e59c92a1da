from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import WebSocketException

from wsbench.config import TargetConfig
from wsbench.metrics import CloseEvent, ErrorEvent, HandshakeEvent, MessageEvent, Metrics
from wsbench.payload import PayloadKind, PayloadSource, payload_for

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (OSError, asyncio.TimeoutError, WebSocketException)


@dataclass(frozen=True, slots=True)
class ConnectionOutcome:
    handshaken: bool
    messages: int
    error: str | None = None


async def drive_connection(
    target: TargetConfig,
    source: PayloadSource,
    kind: PayloadKind,
    size: int,
    messages: int,
    metrics: Metrics,
    on_open: Callable[[], None] | None = None,
) -> ConnectionOutcome:
    start_mono = time.perf_counter()
    try:
        ws = await connect(
            target.url,
            additional_headers=dict(target.headers) or None,
            open_timeout=target.timeout_sec,
            max_size=None,
            ping_interval=None,
            compression=None,
        )
    except TRANSPORT_ERRORS as exc:
        error = ErrorEvent.from_exception(exc)
        logger.warning("handshake with %s failed: %s", target.url, error.message)
        metrics.record_error(error)
        if on_open:
            on_open()
        return ConnectionOutcome(handshaken=False, messages=0, error=error.message)

    metrics.record_handshake(HandshakeEvent(duration=(time.perf_counter() - start_mono) * 1000.0))
    if on_open:
        on_open()
    return await _exchange(ws, target, source, kind, size, messages, metrics)


async def _exchange(
    ws: ClientConnection,
    target: TargetConfig,
    source: PayloadSource,
    kind: PayloadKind,
    size: int,
    messages: int,
    metrics: Metrics,
) -> ConnectionOutcome:
    read = 0
    sent = 0
    completed = 0
    error: str | None = None
    try:
        for _ in range(messages):
            data = payload_for(source, kind, size)
            sent_mono = time.perf_counter()
            await ws.send(data)
            sent += len(data)
            reply = await asyncio.wait_for(ws.recv(), timeout=target.timeout_sec)
            metrics.record_message(MessageEvent(latency=(time.perf_counter() - sent_mono) * 1000.0))
            read += len(reply.encode() if isinstance(reply, str) else reply)
            completed += 1
    except TRANSPORT_ERRORS as exc:
        event = ErrorEvent.from_exception(exc)
        logger.warning("connection to %s failed after %d messages: %s", target.url, completed, event.message)
        metrics.record_error(event)
        error = event.message
    finally:
        metrics.record_close(CloseEvent(read=read, send=sent))
        await ws.close()
    return ConnectionOutcome(handshaken=True, messages=completed, error=error)
