"""
Byte Readers - Sources that support both bulk and single-byte reads.

Everything the array decoder reads from goes through the ByteReader
interface. Raw streams (files, sockets wrapped with makefile(), BytesIO)
only offer read(), so they get wrapped in a BufferedByteReader.
"""

import io
from typing import Optional


DEFAULT_BUFFER_SIZE = 4096


class ByteReader:
    """
    Base class for byte sources.

    read() returns b"" once the source is exhausted and read_byte()
    returns None.
    """

    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes. Subclasses must implement."""
        raise NotImplementedError

    def read_byte(self) -> Optional[int]:
        """Read a single byte. Subclasses must implement."""
        raise NotImplementedError


class BytesSource(ByteReader):
    """
    In-memory byte source.

    Unlike an arbitrary stream, a BytesSource knows how many bytes it has
    left, so a reader stack can drop it as soon as it is drained.
    """

    def __init__(self, data: bytes = b""):
        self._data: bytes = bytes(data)
        self._pos: int = 0

    def __len__(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self._pos

    def __repr__(self) -> str:
        return f"BytesSource({len(self)} bytes left)"

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            end = len(self._data)
        else:
            end = min(self._pos + size, len(self._data))
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def read_byte(self) -> Optional[int]:
        if self._pos >= len(self._data):
            return None
        c = self._data[self._pos]
        self._pos += 1
        return c


class BufferedByteReader(ByteReader):
    """
    Adds read_byte() to any object with a read(size) method.

    Bytes are pulled from the raw stream up to buffer_size at a time, with
    at most one underlying read per fill: buffered streams are read with
    read1() so bytes that already arrived are returned without waiting
    for a full chunk. Bulk reads at least as large as the buffer bypass
    it when it is empty.
    """

    def __init__(self, raw, buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._raw = raw
        self._read_some = getattr(raw, "read1", None) or raw.read
        self._buffer_size = buffer_size
        self._buf: bytes = b""
        self._pos: int = 0

    @property
    def raw(self):
        """The wrapped stream."""
        return self._raw

    def buffered(self) -> bytes:
        """Bytes pulled from the raw stream but not yet read."""
        return self._buf[self._pos:]

    def _fill(self) -> bool:
        chunk = self._read_some(self._buffer_size)
        if not chunk:
            return False
        self._buf = bytes(chunk)
        self._pos = 0
        return True

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            rest = self.buffered()
            self._buf, self._pos = b"", 0
            return rest + (self._raw.read() or b"")
        if size == 0:
            return b""

        if self._pos >= len(self._buf):
            if size >= self._buffer_size:
                return bytes(self._read_some(size) or b"")
            if not self._fill():
                return b""

        end = min(self._pos + size, len(self._buf))
        chunk = self._buf[self._pos:end]
        self._pos = end
        return chunk

    def read_byte(self) -> Optional[int]:
        if self._pos >= len(self._buf) and not self._fill():
            return None
        c = self._buf[self._pos]
        self._pos += 1
        return c


def as_byte_reader(source, buffer_size: int = DEFAULT_BUFFER_SIZE) -> ByteReader:
    """
    Turn bytes, a ByteReader or a readable binary stream into a ByteReader.

    Text streams are rejected up front; the decoder works on bytes.
    """
    if isinstance(source, ByteReader):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return BytesSource(bytes(source))
    if isinstance(source, io.TextIOBase):
        raise TypeError("expected a binary stream, got a text stream")
    if not hasattr(source, "read"):
        raise TypeError(f"cannot read bytes from {type(source).__name__}")
    return BufferedByteReader(source, buffer_size=buffer_size)


def is_empty(reader) -> bool:
    """Check whether a reader is known to have no bytes left."""
    if isinstance(reader, BytesSource):
        return len(reader) == 0
    if isinstance(reader, (bytes, bytearray, memoryview)):
        return len(reader) == 0
    return False
