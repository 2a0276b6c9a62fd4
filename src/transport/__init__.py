from .client import ClientTransport
from .upstream import UpstreamTransport

__all__ = ["ClientTransport", "UpstreamTransport"]
