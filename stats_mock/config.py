"""Runtime configuration for the mock server.

Everything comes from MOCK_* environment variables:

  MOCK_HOST / MOCK_PORT / MOCK_LOG_LEVEL   uvicorn binding and verbosity
  MOCK_QUIET_PERIOD_MS                     idle span that closes a stats batch
  MOCK_JITTER_MIN_MS / MOCK_JITTER_MAX_MS  per-request redispatch delay range
  MOCK_SLOW_DELAY_MS                       fixed latency of /slow
  MOCK_SEED                                seed for reproducible jitter/shuffle
  MOCK_DEBUG=1                             expose /_mock/batching
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from typing import Mapping

from .coordinator import BatchDispatchCoordinator


def _truthy(value: str | None) -> bool:
    v = (value or "").strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


def _int_env(env: Mapping[str, str], name: str, default: int | None) -> int | None:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True, slots=True)
class MockConfig:
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"
    quiet_period_ms: int = 1000
    jitter_min_ms: int = 1000
    jitter_max_ms: int = 3000
    slow_delay_ms: int = 2000
    seed: int | None = None
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "MockConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=(env.get("MOCK_HOST") or defaults.host).strip(),
            port=_int_env(env, "MOCK_PORT", defaults.port),
            log_level=(env.get("MOCK_LOG_LEVEL") or defaults.log_level).strip().lower(),
            quiet_period_ms=_int_env(env, "MOCK_QUIET_PERIOD_MS", defaults.quiet_period_ms),
            jitter_min_ms=_int_env(env, "MOCK_JITTER_MIN_MS", defaults.jitter_min_ms),
            jitter_max_ms=_int_env(env, "MOCK_JITTER_MAX_MS", defaults.jitter_max_ms),
            slow_delay_ms=_int_env(env, "MOCK_SLOW_DELAY_MS", defaults.slow_delay_ms),
            seed=_int_env(env, "MOCK_SEED", None),
            debug=_truthy(env.get("MOCK_DEBUG")),
        )

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)

    def build_coordinator(self) -> BatchDispatchCoordinator:
        return BatchDispatchCoordinator(
            quiet_period=self.quiet_period_ms / 1000,
            min_delay=self.jitter_min_ms / 1000,
            max_delay=self.jitter_max_ms / 1000,
            rng=self.make_rng(),
        )
