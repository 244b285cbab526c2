import sys
from pathlib import Path

import pytest

# Ensure `src` is on sys.path for tests when not installed editable.
SRC = Path(__file__).resolve().parent.parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def mapped_frontend_bytes() -> bytes:
    """Raw bytes of ::ffff:192.168.1.1."""
    return bytes([0] * 10 + [0xFF, 0xFF] + [192, 168, 1, 1])


@pytest.fixture
def loopback_bytes() -> bytes:
    """Raw bytes of the IPv6 loopback ::1."""
    return bytes([0] * 15 + [1])
