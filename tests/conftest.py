from __future__ import annotations

import sys
from pathlib import Path


def pytest_configure() -> None:
    # Keep `import src...` and the shared `helpers` package importable when running `pytest` from the repo root.
    tests_dir = Path(__file__).resolve().parent
    for path in (tests_dir.parent, tests_dir):
        path_str = str(path)
        if path_str not in sys.path:
            sys.path.insert(0, path_str)
