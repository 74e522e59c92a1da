from __future__ import annotations

import pytest

from wsbench.config import RunConfig, TargetConfig
from wsbench.payload import PayloadKind


def test_defaults() -> None:
    config = RunConfig(target=TargetConfig(url="ws://localhost:8080"), amount=20, messages=5)
    assert config.concurrency == 20
    assert config.planned_requests == 100
    assert config.payload_kind is PayloadKind.UTF8


def test_concurrency_capped_by_amount() -> None:
    target = TargetConfig(url="wss://example.test/socket")
    assert RunConfig(target=target, amount=5, concurrent=50).concurrency == 5
    assert RunConfig(target=target, amount=50, concurrent=5).concurrency == 5


def test_binary_kind() -> None:
    config = RunConfig(target=TargetConfig(url="ws://h"), binary=True)
    assert config.payload_kind is PayloadKind.BINARY
    assert config.to_metadata()["payload_kind"] == "binary"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"amount": 0},
        {"concurrent": 0},
        {"messages": -1},
        {"message_size": -1},
    ],
)
def test_invalid_run_config(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        RunConfig(target=TargetConfig(url="ws://h"), **kwargs)


def test_target_requires_websocket_url() -> None:
    with pytest.raises(ValueError):
        TargetConfig(url="http://example.test")
    with pytest.raises(ValueError):
        TargetConfig(url="ws://example.test", timeout_sec=0)
