"""Test fixtures: a fast-timing app and an in-process HTTP client.

Timings are scaled down to milliseconds so batching tests run quickly on
real asyncio timers.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from stats_mock.config import MockConfig
from stats_mock.server import create_app


@pytest.fixture()
def fast_config():
    return MockConfig(
        quiet_period_ms=50,
        jitter_min_ms=10,
        jitter_max_ms=40,
        slow_delay_ms=10,
        seed=7,
        debug=True,
    )


@pytest.fixture()
def app(fast_config):
    return create_app(fast_config)


@pytest_asyncio.fixture()
async def client(app):
    """HTTP client bound to the ASGI app, no network involved."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
