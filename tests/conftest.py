from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure `import geojsonseq` works when running tests without installing the package.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


class BrokenStream:
    """Binary stream whose every read and write fails."""

    def __init__(self) -> None:
        self.closed = False

    def read(self, n: int = -1) -> bytes:
        raise OSError("connection reset")

    def write(self, data: bytes) -> int:
        raise OSError("disk full")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def broken_stream() -> BrokenStream:
    return BrokenStream()
