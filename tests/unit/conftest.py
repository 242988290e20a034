"""Unit test fixtures (stream doubles).

Provides stream objects for testing handle release without touching disk.
"""

import io

import pytest


class CountingStream(io.BytesIO):
    """BytesIO that counts close() calls."""

    def __init__(self, data: bytes = b""):
        super().__init__(data)
        self.close_count = 0

    def close(self):
        self.close_count += 1
        super().close()


class FailingStream(CountingStream):
    """Stream whose reads always fail."""

    def read(self, size=-1):
        raise OSError("disk read failed")


@pytest.fixture
def counting_stream():
    """Factory fixture for CountingStream."""
    def _create(data: bytes = b"") -> CountingStream:
        return CountingStream(data)

    return _create


@pytest.fixture
def failing_stream():
    """Factory fixture for FailingStream."""
    def _create() -> FailingStream:
        return FailingStream()

    return _create
