from __future__ import annotations


class WsbenchError(Exception):
    pass


class NotStartedError(WsbenchError, RuntimeError):
    pass


class NotStoppedError(WsbenchError, RuntimeError):
    pass


class InvalidPayloadSize(WsbenchError, ValueError):
    def __init__(self, size: int) -> None:
        super().__init__(f"Payload size must be non-negative, got {size}")
        self.size = size
