"""
jsonarray - Incremental decoding of JSON arrays from byte streams.
"""

from .decoder import ArrayDecoder, iter_array, iter_array_file
from .errors import (
    EndOfArray,
    JSONArrayError,
    NotArrayError,
    NotCommaSeparatedError,
    UnexpectedEndOfInput,
)
from .handler import JSONArrayHandler
from .readers import BufferedByteReader, ByteReader, BytesSource
from .stack_reader import StackReader
from .value_decoder import JSONValueDecoder

__all__ = [
    'ArrayDecoder',
    'iter_array',
    'iter_array_file',
    'EndOfArray',
    'JSONArrayError',
    'NotArrayError',
    'NotCommaSeparatedError',
    'UnexpectedEndOfInput',
    'JSONArrayHandler',
    'BufferedByteReader',
    'ByteReader',
    'BytesSource',
    'StackReader',
    'JSONValueDecoder',
]
__version__ = '0.1.0'
