"""Registry of known endpoints.

Known routes are registered before the catch-all so they are never
shadowed by the simulated-failure fallback. Routes match on path and
method; e.g. POST /products falls through to the fallback.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI

from .handlers.products import get_products
from .handlers.simulated import get_slow
from .handlers.stats import get_stats


log = logging.getLogger("stats_mock.routes")

# Each item: {'path': str, 'methods': [str], 'handler': callable}
ROUTES: list[dict[str, Any]] = [
    {"path": "/products", "methods": ["GET"], "handler": get_products},
    {"path": "/stats", "methods": ["GET"], "handler": get_stats},
    {"path": "/slow", "methods": ["GET"], "handler": get_slow},
]


def register_routes(app: FastAPI) -> None:
    for item in ROUTES:
        app.add_route(item["path"], item["handler"], methods=item["methods"])
        log.debug("registered %s %s", ",".join(item["methods"]), item["path"])
