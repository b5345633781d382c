"""
State Transition Tests - Verify decoder and scanner state machine transitions.

Tests that the array decoder moves through its framing states and that
the value scanner tracks strings, escapes and nesting correctly.
"""

import io

import pytest

from jsonarray import ArrayDecoder, EndOfArray, NotArrayError, UnexpectedEndOfInput
from jsonarray.scanner import (
    SCAN_CONTINUE,
    SCAN_END,
    SCAN_END_BEFORE,
    SCAN_ERROR,
    ContainerState,
    DoneState,
    EscapeState,
    LiteralState,
    NumberState,
    PrimitiveState,
    StringState,
    ValueScanner,
    ValueStartState,
)
from jsonarray.states import (
    AfterElementState,
    AwaitingOpenBracketState,
    BrokenState,
    DecoderState,
)


def feed_all(scanner, data: bytes):
    """Feed bytes to a scanner and return the last result."""
    result = None
    for c in data:
        result = scanner.feed(c)
    return result


class TestAwaitingOpenBracketTransitions:
    """Test transitions from AwaitingOpenBracketState."""

    def test_initial_state(self):
        """A new decoder waits for '['."""
        dec = ArrayDecoder(io.BytesIO(b"[1]"))

        assert isinstance(dec.state, AwaitingOpenBracketState)
        assert dec.state_name == "AWAITING_OPEN_BRACKET"
        assert not dec.done
        assert dec.error is None

    def test_open_bracket_to_after_element(self):
        """Decoding the first item moves to AfterElementState."""
        dec = ArrayDecoder(io.BytesIO(b"[1, 2]"))
        dec.decode()

        assert isinstance(dec.state, AfterElementState)

    def test_not_array_to_broken(self):
        """Anything but '[' breaks the decoder."""
        dec = ArrayDecoder(io.BytesIO(b"{}"))
        with pytest.raises(NotArrayError):
            dec.decode()

        assert isinstance(dec.state, BrokenState)
        assert isinstance(dec.error, NotArrayError)

    def test_empty_array_to_broken(self):
        """'[]' goes straight to the terminal state."""
        dec = ArrayDecoder(io.BytesIO(b"[]"))
        with pytest.raises(EndOfArray):
            dec.decode()

        assert isinstance(dec.state, BrokenState)
        assert isinstance(dec.error, EndOfArray)


class TestAfterElementTransitions:
    """Test transitions from AfterElementState."""

    def test_comma_stays_after_element(self):
        """Each further item keeps the decoder in AfterElementState."""
        dec = ArrayDecoder(io.BytesIO(b"[1, 2, 3]"))
        for _ in range(3):
            dec.decode()
            assert isinstance(dec.state, AfterElementState)

    def test_close_bracket_to_broken(self):
        """']' ends the array."""
        dec = ArrayDecoder(io.BytesIO(b"[1]"))
        dec.decode()
        with pytest.raises(EndOfArray) as exc_info:
            dec.decode()

        assert exc_info.value.count == 1
        assert dec.state_name == "BROKEN"

    def test_eof_to_broken(self):
        """End of input before ']' breaks the decoder."""
        dec = ArrayDecoder(io.BytesIO(b"[1"))
        dec.decode()
        with pytest.raises(UnexpectedEndOfInput):
            dec.decode()

        assert isinstance(dec.state, BrokenState)


class TestBrokenState:
    """Test the terminal state."""

    def test_broken_raises_stored_error(self):
        """BrokenState raises the same error on every call."""
        dec = ArrayDecoder(io.BytesIO(b""))
        error = RuntimeError("stored")
        state = BrokenState(dec, error)

        for _ in range(2):
            with pytest.raises(RuntimeError) as exc_info:
                state.decode()
            assert exc_info.value is error

    def test_base_state_is_abstract(self):
        """DecoderState.decode must be implemented by subclasses."""
        dec = ArrayDecoder(io.BytesIO(b""))
        with pytest.raises(NotImplementedError):
            DecoderState(dec).decode()


class TestScannerTransitions:
    """Test transitions of the value scanner."""

    def test_initial_state(self):
        scanner = ValueScanner()
        assert isinstance(scanner.state, ValueStartState)
        assert not scanner.complete_at_eof()

    def test_open_brace_to_container(self):
        scanner = ValueScanner()
        assert scanner.feed(ord("{")) == SCAN_CONTINUE
        assert isinstance(scanner.state, ContainerState)
        assert scanner.depth == 1

    def test_quote_to_string_and_back(self):
        """A string inside a container returns to ContainerState."""
        scanner = ValueScanner()
        feed_all(scanner, b'{"a')
        assert isinstance(scanner.state, StringState)

        scanner.feed(ord('"'))
        assert isinstance(scanner.state, ContainerState)

    def test_backslash_to_escape(self):
        scanner = ValueScanner()
        feed_all(scanner, b'"a\\')
        assert isinstance(scanner.state, EscapeState)

        assert scanner.feed(ord('"')) == SCAN_CONTINUE
        assert isinstance(scanner.state, StringState)
        assert scanner.feed(ord('"')) == SCAN_END

    def test_nesting_depth(self):
        """Only the bracket closing the outermost container ends the value."""
        scanner = ValueScanner()
        assert feed_all(scanner, b'[[{"x": "]"}]') == SCAN_CONTINUE
        assert scanner.depth == 1

        assert scanner.feed(ord("]")) == SCAN_END
        assert isinstance(scanner.state, DoneState)

    def test_primitive_ends_before_delimiter(self):
        scanner = ValueScanner()
        assert feed_all(scanner, b"123") == SCAN_CONTINUE
        assert isinstance(scanner.state, PrimitiveState)
        assert scanner.complete_at_eof()

        assert scanner.feed(ord(",")) == SCAN_END_BEFORE

    def test_invalid_start(self):
        scanner = ValueScanner()
        assert scanner.feed(ord("]")) == SCAN_ERROR
        assert isinstance(scanner.state, ValueStartState)

    def test_string_incomplete_at_eof(self):
        scanner = ValueScanner()
        feed_all(scanner, b'"abc')
        assert not scanner.complete_at_eof()

    def test_digit_to_number(self):
        scanner = ValueScanner()
        scanner.feed(ord("-"))
        assert isinstance(scanner.state, NumberState)
        assert not scanner.complete_at_eof()

        feed_all(scanner, b"0.5E+2")
        assert scanner.complete_at_eof()

    def test_number_stops_at_letter(self):
        scanner = ValueScanner()
        feed_all(scanner, b"12")
        assert scanner.feed(ord("a")) == SCAN_END_BEFORE
        assert isinstance(scanner.state, DoneState)

    def test_letter_to_literal(self):
        scanner = ValueScanner()
        feed_all(scanner, b"fal")
        assert isinstance(scanner.state, LiteralState)
        assert not scanner.complete_at_eof()

        assert feed_all(scanner, b"se") == SCAN_CONTINUE
        assert scanner.complete_at_eof()

    def test_literal_stops_after_last_letter(self):
        scanner = ValueScanner()
        feed_all(scanner, b"true")
        assert scanner.feed(ord("f")) == SCAN_END_BEFORE

    def test_literal_stops_at_wrong_letter(self):
        scanner = ValueScanner()
        feed_all(scanner, b"nu")
        assert scanner.feed(ord("x")) == SCAN_END_BEFORE
