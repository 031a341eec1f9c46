# Process-wide configuration: service name, build mode, level override.
# Write-once: init() before creating loggers, shutdown() to start over.

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from .serializer import SerializeOptions

ENV_LEVEL = "POELINK_LOG_LEVEL"
ENV_MODE = "POELINK_ENV"

_DEV_ENVIRONMENTS = frozenset({"dev", "development", "local"})


@dataclass(frozen=True)
class Config:
    service_name: str = "PoeLink"
    environment: str = "dev"
    log_level: Optional[str] = None
    serialize: SerializeOptions = field(default_factory=SerializeOptions)
    channel: Any = None

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in _DEV_ENVIRONMENTS

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a config from POELINK_ENV / POELINK_LOG_LEVEL."""
        kw: dict[str, Any] = {}
        env = os.environ.get(ENV_MODE)
        if env:
            kw["environment"] = env
        level = os.environ.get(ENV_LEVEL)
        if level:
            kw["log_level"] = level.strip().lower()
        kw.update(overrides)
        return cls(**kw)


_global_cfg: Optional[Config] = None


def init(config: Optional[Config] = None) -> Config:
    """Install the process-wide config.

    Must run before any logger is constructed; loggers resolve their level
    once, from whatever config is active at that moment.
    """
    global _global_cfg
    if _global_cfg is not None:
        raise RuntimeError("poelink_obs already initialized; call shutdown() first")
    _global_cfg = config if config is not None else Config.from_env()
    return _global_cfg


def get_config() -> Config:
    global _global_cfg
    if _global_cfg is None:
        _global_cfg = Config.from_env()
    return _global_cfg


def shutdown() -> None:
    """Drop the active config (loggers already built keep theirs)."""
    global _global_cfg
    _global_cfg = None
