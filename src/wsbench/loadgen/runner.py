from __future__ import annotations

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable

from wsbench.config import RunConfig
from wsbench.loadgen.client import drive_connection
from wsbench.metrics import Metrics
from wsbench.payload import PayloadSource, load_payload_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunResult:
    run_id: str
    metrics: Metrics


ProgressCallback = Callable[[int, int], Awaitable[None]]


def _new_run_id() -> str:
    return uuid.uuid4().hex


async def run_benchmark(
    config: RunConfig,
    payloads: PayloadSource | None = None,
    progress: ProgressCallback | None = None,
    metrics: Metrics | None = None,
) -> RunResult:
    run_id = config.run_id or _new_run_id()
    source = payloads if payloads is not None else load_payload_source(config.generator)
    if metrics is None:
        metrics = Metrics(config.planned_requests)
    logger.info("run %s starting: %s", run_id, json.dumps(config.to_metadata()))
    metrics.start()
    try:
        await _execute_load(config, source, metrics, progress)
    finally:
        metrics.stop()
    logger.info(
        "run %s finished: %d connections, %d failures in %.0f ms",
        run_id,
        metrics.connections,
        metrics.failures,
        metrics.timing.duration,
    )
    return RunResult(run_id=run_id, metrics=metrics)


async def _execute_load(
    config: RunConfig,
    source: PayloadSource,
    metrics: Metrics,
    progress: ProgressCallback | None,
) -> None:
    semaphore = asyncio.Semaphore(config.concurrency)
    opened = 0
    finished = 0
    failed = 0

    def on_open() -> None:
        nonlocal opened
        opened += 1
        if opened == config.concurrency:
            metrics.established()
            logger.info("%d connections online", opened)

    async def worker() -> None:
        nonlocal finished, failed
        async with semaphore:
            outcome = await drive_connection(
                config.target,
                source,
                config.payload_kind,
                config.message_size,
                config.messages,
                metrics,
                on_open=on_open,
            )
        finished += 1
        if outcome.error is not None:
            failed += 1
        if progress:
            await progress(finished, config.amount)

    tasks = [asyncio.create_task(worker()) for _ in range(config.amount)]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    if failed:
        logger.warning("%d of %d connections ended with an error", failed, config.amount)
