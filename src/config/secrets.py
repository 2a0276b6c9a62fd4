"""Secrets configuration."""

from __future__ import annotations

import os

from .upstream import ENV_GEMINI_API_KEY


def get_gemini_api_key() -> str:
    return (os.getenv(ENV_GEMINI_API_KEY) or "").strip()


__all__ = ["get_gemini_api_key"]
