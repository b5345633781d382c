"""
Errors raised by the array decoder.

Framing problems derive from JSONArrayError. EndOfArray is the normal
end of an array and deliberately is not a JSONArrayError.
"""


class JSONArrayError(Exception):
    """Base class for array framing errors."""


class NotArrayError(JSONArrayError, ValueError):
    """The stream did not start with a JSON array."""

    def __init__(self, bad: int):
        self.bad = bad
        super().__init__(f"not an array: starts with {bytes([bad])!r}")


class NotCommaSeparatedError(JSONArrayError, ValueError):
    """Array items in the stream were not comma separated."""

    def __init__(self, bad: int):
        self.bad = bad
        super().__init__(f"not comma-separated: {bytes([bad])!r}")


class UnexpectedEndOfInput(JSONArrayError, EOFError):
    """The stream ended before the array was closed."""

    def __init__(self, message: str = "unexpected end of input"):
        super().__init__(message)


class EndOfArray(Exception):
    """
    The array was closed with ']'.

    This does not mean the underlying stream reached its end; anything
    after the closing bracket is left unread.
    """

    def __init__(self, count: int = 0):
        self.count = count
        super().__init__(f"end of array after {count} items")
