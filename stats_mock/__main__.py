"""Module entrypoint for the mock server.

    python -m stats_mock

Configuration is read from MOCK_* environment variables (see config.py).
"""

from __future__ import annotations

import logging

import uvicorn

from .config import MockConfig


log = logging.getLogger("stats_mock")


def main() -> None:
    config = MockConfig.from_env()

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.info(
        "stats batching: quiet=%dms jitter=%d..%dms seed=%s",
        config.quiet_period_ms,
        config.jitter_min_ms,
        config.jitter_max_ms,
        config.seed,
    )

    uvicorn.run(
        "stats_mock.server:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level,
        # UI mocks are often run behind reverse proxies / tunnels.
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
