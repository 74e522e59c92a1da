from __future__ import annotations

from wsbench.config.models import RunConfig, TargetConfig

__all__ = ["RunConfig", "TargetConfig"]
