from .relay import RelayClient
from .events import ClientEventHandler

__all__ = ["ClientEventHandler", "RelayClient"]
