from .bridge import RealtimeBridge
from .upstream import UpstreamSession
from .results import FrameReceived, ReceiveFailed, ReceiveResult, UpstreamClosed

__all__ = [
    "FrameReceived",
    "RealtimeBridge",
    "ReceiveFailed",
    "ReceiveResult",
    "UpstreamClosed",
    "UpstreamSession",
]
