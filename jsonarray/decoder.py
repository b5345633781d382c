"""
Array Decoder - Reads the items of a JSON array one at a time.

Only one item is held in memory at a time, and items are decoded as
soon as they are complete, without waiting for the rest of the array.
The framing ('[', ',', ']') is handled by an explicit state machine;
each item is decoded by a fresh single-value decoder whose look-ahead
is pushed back onto the reader stack afterwards.
"""

import json as json_module
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, Union

from pydantic import TypeAdapter

from .errors import EndOfArray, UnexpectedEndOfInput
from .handler import JSONArrayHandler
from .readers import DEFAULT_BUFFER_SIZE
from .scanner import WHITESPACE
from .stack_reader import StackReader
from .states import AwaitingOpenBracketState, BrokenState, DecoderState
from .value_decoder import DEFAULT_CHUNK_SIZE, JSONValueDecoder

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def _type_adapter(tp: Any) -> TypeAdapter:
    """TypeAdapters are expensive to build; reuse one per destination type."""
    return TypeAdapter(tp)


class ArrayDecoder:
    """
    Incremental decoder for a JSON array on a byte stream.

    decode() returns the next item. When the array closes it raises
    EndOfArray; any other problem raises the error that caused it. Both
    are terminal: every later call raises the same thing again without
    reading from the stream.
    """

    def __init__(self, stream, item_type: Any = None,
                 buffer_size: int = DEFAULT_BUFFER_SIZE,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 value_decoder: Optional[Callable] = None,
                 loads: Callable[[bytes], Any] = json_module.loads):
        self._reader = StackReader([stream], buffer_size=buffer_size)
        self._item_type = item_type
        self._chunk_size = chunk_size
        self._loads = loads
        self._value_decoder = value_decoder or self._default_value_decoder
        self._count: int = 0

        self._state: DecoderState = None
        self._previous_state: DecoderState = None
        self._state = AwaitingOpenBracketState(self)

    @property
    def state(self) -> DecoderState:
        """Current decoder state object."""
        return self._state

    @property
    def state_name(self) -> str:
        """Name of current state for debugging."""
        return self._state.name

    @property
    def count(self) -> int:
        """Number of items decoded so far."""
        return self._count

    @property
    def done(self) -> bool:
        """True once the decoder reached a terminal state."""
        return isinstance(self._state, BrokenState)

    @property
    def error(self) -> Optional[BaseException]:
        """The terminal outcome (EndOfArray or an error), or None while decoding."""
        if isinstance(self._state, BrokenState):
            return self._state.error
        return None

    def __repr__(self) -> str:
        return f"ArrayDecoder(state={self.state_name}, count={self._count})"

    # ========================================================================
    # DECODING
    # ========================================================================

    def decode(self, into: Any = None) -> Any:
        """
        Decode the next item of the array.

        Args:
            into: Type to validate the item into (a pydantic model, a
                dataclass, list[int], ...). Defaults to the decoder's
                item_type; without either, the plain JSON value is returned.

        Raises:
            EndOfArray: The array was closed.
            NotArrayError: The stream does not start with '['.
            NotCommaSeparatedError: Items are not separated by ','.
            UnexpectedEndOfInput: The stream ended before the closing ']'.
        """
        return self._state.decode(into)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        try:
            return self.decode()
        except EndOfArray:
            raise StopIteration from None

    def run(self, handler: JSONArrayHandler, into: Any = None) -> int:
        """
        Decode the rest of the array, calling handler for every item.

        Returns the total number of items decoded by this decoder.
        """
        while True:
            try:
                item = self.decode(into)
            except EndOfArray:
                break
            handler.on_item(self._count - 1, item)
        handler.on_array_end(self._count)
        return self._count

    # ========================================================================
    # STATE MACHINE HELPERS (used by the state classes)
    # ========================================================================

    def _transition(self, new_state: DecoderState) -> None:
        """Transition to a new state."""
        self._previous_state = self._state
        self._state = new_state

    def _breaks(self, error: BaseException) -> BaseException:
        """Enter the terminal state and return the error for the caller to raise."""
        logger.debug("Array decoder stopped in %s after %d items: %r",
                     self._state.name, self._count, error)
        self._transition(BrokenState(self, error))
        return error

    def _read_non_whitespace(self) -> Optional[int]:
        """Read the next non-whitespace byte, None at end of input."""
        while True:
            c = self._reader.read_byte()
            # http://tools.ietf.org/html/rfc7159#section-2
            if c is None or c not in WHITESPACE:
                return c

    def _default_value_decoder(self, source) -> JSONValueDecoder:
        return JSONValueDecoder(source, chunk_size=self._chunk_size, loads=self._loads)

    def _decode_element(self, into: Any = None) -> Any:
        """Decode one item and push the decoder's look-ahead back onto the stack."""
        dec = self._value_decoder(self._reader)
        try:
            value = dec.decode()
        except EOFError as exc:
            # did not see closing ']'
            raise self._breaks(UnexpectedEndOfInput(str(exc) or "unexpected end of input")) from exc
        except Exception as exc:
            self._breaks(exc)
            raise

        # patch the parts already buffered back into the reader
        self._reader.insert(dec.buffered())

        destination = into if into is not None else self._item_type
        if destination is not None:
            try:
                value = _type_adapter(destination).validate_python(value)
            except Exception as exc:
                self._breaks(exc)
                raise

        self._count += 1
        return value


def iter_array(stream, item_type: Any = None, **options) -> Iterator[Any]:
    """
    Stream the items of a top-level JSON array.

    Args:
        stream: A binary stream, a ByteReader, or bytes.
        item_type: Optional type every item is validated into.
        **options: Passed on to ArrayDecoder.

    Yields:
        Each decoded item.
    """
    yield from ArrayDecoder(stream, item_type=item_type, **options)


def iter_array_file(file_path: Union[str, Path], item_type: Any = None,
                    **options) -> Iterator[Any]:
    """Stream the items of a JSON file whose top-level value is an array."""
    path = Path(file_path)
    with path.open("rb") as f:
        yield from iter_array(f, item_type=item_type, **options)
