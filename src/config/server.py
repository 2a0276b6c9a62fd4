"""HTTP server configuration (env names and defaults)."""

from __future__ import annotations

ENV_CORS_ALLOW_ORIGINS = "CORS_ALLOW_ORIGINS"

DEFAULT_CORS_ALLOW_ORIGINS: tuple[str, ...] = ("*",)

__all__ = ["ENV_CORS_ALLOW_ORIGINS", "DEFAULT_CORS_ALLOW_ORIGINS"]
