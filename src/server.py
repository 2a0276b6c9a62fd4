"""Main FastAPI server for the duplex session relay."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware

from src.state.runtime import RuntimeDeps
from src.config.websocket import WS_ENDPOINT_PATH
from src.runtime.logging import configure_logging
from src.runtime.settings_loader import load_settings
from src.runtime.dependencies import build_runtime_deps
from src.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

RuntimeDepsFactory = Callable[[], Awaitable[RuntimeDeps]]


def create_app(
    runtime_deps_factory: RuntimeDepsFactory = build_runtime_deps,
    *,
    cors_allow_origins: tuple[str, ...] | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = await runtime_deps_factory()
        app.state.runtime_deps = runtime_deps
        logger.info("runtime: ready")
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    origins = cors_allow_origins if cors_allow_origins is not None else load_settings().server.cors_allow_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.websocket(WS_ENDPOINT_PATH)
    async def websocket_endpoint(websocket: WebSocket, client_id: str) -> None:
        runtime_deps = getattr(app.state, "runtime_deps", None)
        if runtime_deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_websocket_connection(websocket, client_id, runtime_deps)

    return app


configure_logging()

app = create_app()

__all__ = ["app", "create_app"]
