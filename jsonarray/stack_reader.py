"""
Stack Reader - Several byte readers presented as one stream.

Works like chaining readers one after another, but new readers can be
pushed in front of the queue. The array decoder uses this to give back
the bytes a value decoder read past the end of its value.
"""

from typing import List, Optional

from .readers import (
    DEFAULT_BUFFER_SIZE,
    ByteReader,
    as_byte_reader,
    is_empty,
)


class StackReader(ByteReader):
    """
    Ordered stack of byte readers.

    The top of the stack (end of the list) is read first. Readers are
    popped once exhausted; drained in-memory readers are popped right
    after the read that drained them, which keeps the stack at two
    entries in practice: the stream plus one reinserted surplus.
    """

    def __init__(self, readers: Optional[List[ByteReader]] = None,
                 buffer_size: int = DEFAULT_BUFFER_SIZE):
        # front of the queue is the highest index, for easy insertion
        self._readers: List[ByteReader] = []
        self._buffer_size = buffer_size
        for reader in reversed(readers or []):
            self.insert(reader)

    @property
    def depth(self) -> int:
        """Number of readers still on the stack."""
        return len(self._readers)

    def __repr__(self) -> str:
        return f"StackReader(depth={len(self._readers)})"

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            chunks = []
            while self._readers:
                chunks.append(self._readers.pop().read())
            return b"".join(chunks)
        if size == 0:
            return b""

        while self._readers:
            top = self._readers[-1]
            chunk = top.read(size)
            if not chunk or is_empty(top):
                self._readers.pop()
            if chunk:
                # an exhausted member is not the end; the next one may have more
                return chunk
        return b""

    def read_byte(self) -> Optional[int]:
        while self._readers:
            top = self._readers[-1]
            c = top.read_byte()
            if c is None:
                self._readers.pop()
                continue
            if is_empty(top):
                self._readers.pop()
            return c
        return None

    def insert(self, reader) -> None:
        """
        Push a reader in front of the queue.

        Empty in-memory readers are ignored. Raw bytes become a
        BytesSource; streams without read_byte() get wrapped in a
        BufferedByteReader.
        """
        if reader is None or is_empty(reader):
            return
        self._readers.append(as_byte_reader(reader, buffer_size=self._buffer_size))
