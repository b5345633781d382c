"""
Value Decoder - Decodes exactly one JSON value from a byte reader.

The decoder pulls input in chunks, so it usually reads past the end of
the value it decodes. Those extra bytes are available from buffered()
and must be put back in front of the stream by whoever reads next.
"""

import json as json_module
from typing import Any, Callable

from .readers import ByteReader, BytesSource
from .scanner import (
    SCAN_END,
    SCAN_END_BEFORE,
    SCAN_ERROR,
    WHITESPACE,
    ValueScanner,
)


DEFAULT_CHUNK_SIZE = 512


class JSONValueDecoder:
    """
    Single-value JSON decoder over a ByteReader.

    Raises EOFError when the input ends before a value starts or in the
    middle of one. Syntax errors are raised as json.JSONDecodeError.
    """

    def __init__(self, source: ByteReader, chunk_size: int = DEFAULT_CHUNK_SIZE,
                 loads: Callable[[bytes], Any] = json_module.loads):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._source = source
        self._chunk_size = chunk_size
        self._loads = loads
        self._buf = bytearray()
        self._scanned: int = 0

    def _fill(self) -> bool:
        """Read another chunk from the source. False at end of input."""
        chunk = self._source.read(self._chunk_size)
        if not chunk:
            return False
        self._buf += chunk
        return True

    def _syntax_error(self, pos: int) -> json_module.JSONDecodeError:
        doc = self._buf.decode("utf-8", errors="replace")
        c = bytes([self._buf[pos]])
        return json_module.JSONDecodeError(
            f"invalid character {c!r} looking for beginning of value", doc, pos
        )

    def _skip_whitespace(self) -> int:
        pos = self._scanned
        while True:
            while pos < len(self._buf) and self._buf[pos] in WHITESPACE:
                pos += 1
            if pos < len(self._buf):
                return pos
            if not self._fill():
                self._scanned = pos
                raise EOFError("end of input before a JSON value")

    def decode(self) -> Any:
        """Decode the next JSON value from the source."""
        start = self._skip_whitespace()
        scanner = ValueScanner()

        pos = start
        while True:
            if pos == len(self._buf) and not self._fill():
                if scanner.complete_at_eof():
                    end = pos
                    break
                raise EOFError("end of input in the middle of a JSON value")

            status = scanner.feed(self._buf[pos])
            if status == SCAN_END:
                end = pos + 1
                break
            if status == SCAN_END_BEFORE:
                end = pos
                break
            if status == SCAN_ERROR:
                raise self._syntax_error(pos)
            pos += 1

        self._scanned = end
        return self._loads(bytes(self._buf[start:end]))

    def buffered(self) -> BytesSource:
        """Bytes read from the source but not part of a decoded value."""
        return BytesSource(bytes(self._buf[self._scanned:]))
