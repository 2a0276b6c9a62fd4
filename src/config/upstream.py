"""Upstream AI service configuration (env names and defaults)."""

from __future__ import annotations

ENV_GEMINI_API_KEY = "GEMINI_API_KEY"
ENV_GEMINI_MODEL = "GEMINI_MODEL"
ENV_GEMINI_WS_URL = "GEMINI_WS_URL"
ENV_UPSTREAM_OPEN_TIMEOUT_S = "UPSTREAM_OPEN_TIMEOUT_S"
ENV_UPSTREAM_CLOSE_TIMEOUT_S = "UPSTREAM_CLOSE_TIMEOUT_S"
ENV_UPSTREAM_IMAGE_PROMPT = "UPSTREAM_IMAGE_PROMPT"
ENV_UPSTREAM_IMAGE_MIME_TYPE = "UPSTREAM_IMAGE_MIME_TYPE"

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash-exp"
DEFAULT_GEMINI_WS_URL = (
    "wss://generativelanguage.googleapis.com/ws/"
    "google.ai.generativelanguage.v1beta.GenerativeService.BidiGenerateContent"
)
DEFAULT_UPSTREAM_OPEN_TIMEOUT_S = 10.0
DEFAULT_UPSTREAM_CLOSE_TIMEOUT_S = 5.0
DEFAULT_UPSTREAM_IMAGE_PROMPT = "Describeme la imagen"
DEFAULT_UPSTREAM_IMAGE_MIME_TYPE = "image/jpeg"

# Output audio is disabled; the model answers in text only.
UPSTREAM_RESPONSE_MODALITIES: tuple[str, ...] = ("TEXT",)

__all__ = [
    "ENV_GEMINI_API_KEY",
    "ENV_GEMINI_MODEL",
    "ENV_GEMINI_WS_URL",
    "ENV_UPSTREAM_OPEN_TIMEOUT_S",
    "ENV_UPSTREAM_CLOSE_TIMEOUT_S",
    "ENV_UPSTREAM_IMAGE_PROMPT",
    "ENV_UPSTREAM_IMAGE_MIME_TYPE",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_GEMINI_WS_URL",
    "DEFAULT_UPSTREAM_OPEN_TIMEOUT_S",
    "DEFAULT_UPSTREAM_CLOSE_TIMEOUT_S",
    "DEFAULT_UPSTREAM_IMAGE_PROMPT",
    "DEFAULT_UPSTREAM_IMAGE_MIME_TYPE",
    "UPSTREAM_RESPONSE_MODALITIES",
]
