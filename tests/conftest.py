"""Shared stream helpers for the decoder tests."""

import io

import pytest


class OneByteReader:
    """Serves every read() one byte at a time, to simulate a slow stream."""

    def __init__(self, data: bytes):
        self._stream = io.BytesIO(data)

    def read(self, size=-1):
        if size == 0:
            return b""
        return self._stream.read(1)


class FailingReader:
    """Serves its data, then raises instead of reporting end of input."""

    def __init__(self, data: bytes, error: Exception):
        self._stream = io.BytesIO(data)
        self.error = error
        self.failures = 0

    def read(self, size=-1):
        chunk = self._stream.read(size)
        if chunk:
            return chunk
        self.failures += 1
        raise self.error


class CountingReader:
    """Counts the read() calls that reach the raw stream."""

    def __init__(self, data: bytes):
        self._stream = io.BytesIO(data)
        self.calls = 0

    def read(self, size=-1):
        self.calls += 1
        return self._stream.read(size)


@pytest.fixture
def one_byte_reader():
    return OneByteReader


@pytest.fixture
def failing_reader():
    return FailingReader


@pytest.fixture
def counting_reader():
    return CountingReader
