"""A single playing segment on an audio output."""

from __future__ import annotations

from typing import Protocol
from collections.abc import Callable


class Voice(Protocol):
    on_ended: Callable[[], None] | None

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def disconnect(self) -> None: ...


__all__ = ["Voice"]
