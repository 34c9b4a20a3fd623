"""HTTP server and catch-all routing for the mock.

- Known routes (products lookup, stats batching, fixed latency) are
  registered first.
- Every other path, and any known path hit with a method it does not
  declare, answers HTTP 500, simulating a failing backend.
- Unexpected exceptions are logged and returned as a stable error body.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import MockConfig
from .errors import error_from_exception
from .handlers.simulated import simulated_failure
from .headers import build_request_context
from .routes import register_routes


log = logging.getLogger("stats_mock.server")


def create_app(config: MockConfig | None = None) -> FastAPI:
    config = config if config is not None else MockConfig.from_env()

    app = FastAPI(
        title="Stats Mock Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # One coordinator per app; request handlers reach it through app.state.
    app.state.config = config  # type: ignore[attr-defined]
    app.state.coordinator = config.build_coordinator()  # type: ignore[attr-defined]
    app.state.rng = config.make_rng()  # type: ignore[attr-defined]

    # Browser UIs on other dev ports need permissive CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    @app.middleware("http")
    async def _exception_guard(request: Request, call_next):
        """Ensure unexpected exceptions never escape as framework errors."""

        request.state.ctx = build_request_context(request.headers, request.query_params)
        try:
            response: Response = await call_next(request)
            return response
        except Exception as exc:  # noqa: BLE001
            log.exception("unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse({"error": error_from_exception(exc)}, status_code=500)

    @app.get("/")
    async def root():
        return PlainTextResponse("Hello, World!")

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok", "version": __version__}

    if config.debug:

        @app.get("/_mock/batching")
        async def batching_snapshot(request: Request):
            return request.app.state.coordinator.snapshot()

    register_routes(app)

    app.add_api_route(
        "/{full_path:path}",
        simulated_failure,
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
        include_in_schema=False,
    )

    return app


app = create_app()
