"""Runtime dependency construction (upstream bridge, session registry, tools, admission control)."""

from __future__ import annotations

import logging

from src.state import RuntimeDeps
from src.state.settings import AppSettings
from src.realtime.bridge import RealtimeBridge
from src.config.upstream import ENV_GEMINI_API_KEY
from src.handlers.registry import SessionRegistry
from src.handlers.connections import ConnectionManager
from src.handlers.tools import build_default_dispatcher

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    if not settings.upstream.api_key:
        # Sessions will still be accepted; the upstream handshake is expected to fail.
        logger.warning("%s is not set; upstream connections will be rejected", ENV_GEMINI_API_KEY)

    logger.info(
        "runtime: model=%s max_connections=%s",
        settings.upstream.model,
        settings.limits.max_concurrent_connections,
    )

    return RuntimeDeps(
        connections=ConnectionManager(max_connections=settings.limits.max_concurrent_connections),
        realtime_bridge=RealtimeBridge(settings.upstream),
        registry=SessionRegistry(),
        tool_dispatcher=build_default_dispatcher(),
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
