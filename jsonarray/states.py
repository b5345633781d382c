"""
Decoder State Classes - Each state frames one step of a JSON array.

The array decoder delegates decode() to its current state. States read
the structural bytes ('[', ',', ']') themselves and hand the elements
over to the value decoder.
"""

from typing import TYPE_CHECKING, Any, Optional

from .errors import (
    EndOfArray,
    NotArrayError,
    NotCommaSeparatedError,
    UnexpectedEndOfInput,
)

if TYPE_CHECKING:
    from .decoder import ArrayDecoder


OPEN_BRACKET = ord("[")
CLOSE_BRACKET = ord("]")
COMMA = ord(",")


class DecoderState:
    """Base class for array decoder states."""

    name = "base"

    def __init__(self, decoder: 'ArrayDecoder'):
        self.decoder = decoder

    def decode(self, into: Any = None) -> Any:
        """Decode the next element. Subclasses must implement."""
        raise NotImplementedError

    def _read_structural(self) -> Optional[int]:
        """Next non-whitespace byte, or None at end of input. Read errors break the decoder."""
        try:
            return self.decoder._read_non_whitespace()
        except Exception as exc:
            self.decoder._breaks(exc)
            raise


class AwaitingOpenBracketState(DecoderState):
    """Nothing read yet, expecting '['."""

    name = "AWAITING_OPEN_BRACKET"

    def decode(self, into: Any = None) -> Any:
        c = self._read_structural()
        if c is None:
            raise self.decoder._breaks(UnexpectedEndOfInput("end of input before the array started"))
        if c != OPEN_BRACKET:
            raise self.decoder._breaks(NotArrayError(c))

        self.decoder._transition(AfterElementState(self.decoder))

        # '[' directly followed by ']' is an empty array
        c = self._read_structural()
        if c is None:
            raise self.decoder._breaks(UnexpectedEndOfInput("end of input before the array was closed"))
        if c == CLOSE_BRACKET:
            raise self.decoder._breaks(EndOfArray(0))
        self.decoder._reader.insert(bytes([c]))

        return self.decoder._decode_element(into)


class AfterElementState(DecoderState):
    """An element was decoded, expecting ',' or ']'."""

    name = "AFTER_ELEMENT"

    def decode(self, into: Any = None) -> Any:
        c = self._read_structural()
        if c is None:
            # did not see closing ']'
            raise self.decoder._breaks(UnexpectedEndOfInput("end of input before the array was closed"))
        if c == CLOSE_BRACKET:
            raise self.decoder._breaks(EndOfArray(self.decoder.count))
        if c != COMMA:
            raise self.decoder._breaks(NotCommaSeparatedError(c))

        return self.decoder._decode_element(into)


class BrokenState(DecoderState):
    """
    Terminal state.

    Holds the outcome that ended decoding (EndOfArray or an error) and
    raises it again on every call without touching the stream.
    """

    name = "BROKEN"

    def __init__(self, decoder: 'ArrayDecoder', error: BaseException):
        super().__init__(decoder)
        self.error = error

    def decode(self, into: Any = None) -> Any:
        raise self.error.with_traceback(None)
