"""Typed results of a single upstream receive."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FrameReceived:
    raw: str | bytes


@dataclass(frozen=True, slots=True)
class UpstreamClosed:
    code: int | None = None
    reason: str = ""


@dataclass(frozen=True, slots=True)
class ReceiveFailed:
    error: BaseException


ReceiveResult = FrameReceived | UpstreamClosed | ReceiveFailed

__all__ = ["FrameReceived", "ReceiveFailed", "ReceiveResult", "UpstreamClosed"]
