"""
JSON Array Handler - Base handler class for array decoding events.

Clients should subclass this and override the methods they need.
"""

from typing import Any


class JSONArrayHandler:
    """
    Base handler class for array decoding events.
    Clients should subclass this and override the methods they need.
    """

    def on_item(self, index: int, item: Any) -> None:
        """Called for every decoded item, in array order."""
        pass

    def on_array_end(self, count: int) -> None:
        """Called once the closing ']' was read."""
        pass
