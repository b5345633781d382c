"""
Value Scanner - Finds where a single JSON value ends in a byte stream.

The scanner does not build values. It only follows enough of the JSON
grammar (nesting, strings, escapes) to know when one complete value has
been seen, so the bytes of that value can be handed to a real JSON
decoder and everything after it given back to the stream.
"""

import re

WHITESPACE = b" \t\n\r"
CONTAINER_OPEN = b"{["
CONTAINER_CLOSE = b"}]"
NUMBER_START = b"-0123456789"
NUMBER_BYTES = b"+-.0123456789eE"
NUMBER_PATTERN = re.compile(rb"-?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")
LITERALS = {ord("t"): b"true", ord("f"): b"false", ord("n"): b"null"}

QUOTE = ord('"')
BACKSLASH = ord("\\")

# Results of ValueScanner.feed()
SCAN_CONTINUE = 0     # byte is part of the value, value not finished
SCAN_END = 1          # byte is the last byte of the value
SCAN_END_BEFORE = 2   # value ended before this byte; byte is not part of it
SCAN_ERROR = 3        # byte cannot start a JSON value


# ========================================================================
# STATE CLASSES
# ========================================================================

class ScanState:
    """Base class for scanner states."""

    name = "base"
    complete_at_eof = False

    def __init__(self, scanner: 'ValueScanner'):
        self.scanner = scanner

    def handle(self, c: int) -> int:
        """Handle a byte. Subclasses must implement."""
        raise NotImplementedError


class ValueStartState(ScanState):
    """Expecting the first byte of a value. Whitespace is skipped by the caller."""

    name = "VALUE_START"

    def handle(self, c: int) -> int:
        if c in CONTAINER_OPEN:
            self.scanner.depth = 1
            self.scanner._transition(ContainerState(self.scanner))
        elif c == QUOTE:
            self.scanner._transition(StringState(self.scanner))
        elif c in NUMBER_START:
            self.scanner._transition(NumberState(self.scanner, c))
        elif c in LITERALS:
            self.scanner._transition(LiteralState(self.scanner, c))
        else:
            return SCAN_ERROR
        return SCAN_CONTINUE


class ContainerState(ScanState):
    """Inside an object or array, outside of any string."""

    name = "CONTAINER"

    def handle(self, c: int) -> int:
        if c == QUOTE:
            self.scanner._transition(StringState(self.scanner))
        elif c in CONTAINER_OPEN:
            self.scanner.depth += 1
        elif c in CONTAINER_CLOSE:
            self.scanner.depth -= 1
            if self.scanner.depth == 0:
                self.scanner._transition(DoneState(self.scanner))
                return SCAN_END
        return SCAN_CONTINUE


class StringState(ScanState):
    """Inside a string, either a top-level one or one nested in a container."""

    name = "STRING"

    def handle(self, c: int) -> int:
        if c == BACKSLASH:
            self.scanner._transition(EscapeState(self.scanner))
        elif c == QUOTE:
            if self.scanner.depth == 0:
                self.scanner._transition(DoneState(self.scanner))
                return SCAN_END
            self.scanner._transition(ContainerState(self.scanner))
        return SCAN_CONTINUE


class EscapeState(ScanState):
    """Just saw a backslash inside a string; the next byte is escaped."""

    name = "ESCAPE"

    def handle(self, c: int) -> int:
        self.scanner._transition(StringState(self.scanner))
        return SCAN_CONTINUE


class PrimitiveState(ScanState):
    """
    Inside a top-level number or literal (true, false, null).

    These have no closing token, so the value only ends at the first byte
    that cannot belong to it, or at the end of the input. At the end of
    the input the token must already be whole.
    """

    name = "PRIMITIVE"

    def __init__(self, scanner: 'ValueScanner', first: int):
        super().__init__(scanner)
        self.token = bytearray([first])

    def accepts(self, c: int) -> bool:
        """Whether c can continue the token. Subclasses must implement."""
        raise NotImplementedError

    def handle(self, c: int) -> int:
        if self.accepts(c):
            self.token.append(c)
            return SCAN_CONTINUE
        self.scanner._transition(DoneState(self.scanner))
        return SCAN_END_BEFORE


class NumberState(PrimitiveState):
    """Inside a top-level number."""

    name = "NUMBER"

    def accepts(self, c: int) -> bool:
        return c in NUMBER_BYTES

    @property
    def complete_at_eof(self) -> bool:
        return NUMBER_PATTERN.fullmatch(self.token) is not None


class LiteralState(PrimitiveState):
    """Inside true, false or null."""

    name = "LITERAL"

    def __init__(self, scanner: 'ValueScanner', first: int):
        super().__init__(scanner, first)
        self.literal = LITERALS[first]

    def accepts(self, c: int) -> bool:
        n = len(self.token)
        return n < len(self.literal) and c == self.literal[n]

    @property
    def complete_at_eof(self) -> bool:
        return self.token == self.literal


class DoneState(ScanState):
    """A complete value has been scanned."""

    name = "DONE"
    complete_at_eof = True

    def handle(self, c: int) -> int:
        return SCAN_END_BEFORE


# ========================================================================
# SCANNER
# ========================================================================

class ValueScanner:
    """
    Byte-at-a-time scanner for the extent of one JSON value.

    Feed it the bytes of a value, starting at its first non-whitespace
    byte, until feed() reports SCAN_END or SCAN_END_BEFORE.
    """

    def __init__(self):
        self.depth: int = 0
        self._state: ScanState = ValueStartState(self)

    @property
    def state(self) -> ScanState:
        """Current scanner state object."""
        return self._state

    @property
    def state_name(self) -> str:
        """Name of current state for debugging."""
        return self._state.name

    def _transition(self, new_state: ScanState) -> None:
        """Transition to a new state."""
        self._state = new_state

    def feed(self, c: int) -> int:
        """Scan one byte and report whether the value continues."""
        return self._state.handle(c)

    def complete_at_eof(self) -> bool:
        """Whether the bytes seen so far form a whole value if the input ends here."""
        return self._state.complete_at_eof
