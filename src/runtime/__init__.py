"""Runtime package.

Keep this module dependency-light: importing `src.runtime.*` from unit tests
should not open sockets or read secrets at import time.
"""

__all__: list[str] = []
