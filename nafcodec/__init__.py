"""
nafcodec — reader for Nucleotide Archive Format (NAF) files.

Features:

- Header, flags and record data model for NAF archives (format versions 1 and 2).
- One raw byte-stream abstraction over either a native file or any host
  file-like object with ``read(n)`` and ``seek(offset, whence)``.
- Host errors translated into native ``OSError`` codes where possible, with the
  original exception kept in a drainable slot when not.
- Header, title and block layout inspection with per-block size reporting.

Block decompression is not part of this package; the reader hands out the
stored payloads as-is.
"""

from .data import Flag, Flags, FormatVersion, Header, MaskUnit, Record, SequenceType, Size
from .errors import (
    FormatError,
    NafError,
    OpaqueIoError,
    StreamError,
    StreamTypeError,
    TruncatedError,
    UnsupportedSeekError,
)
from .foreign import foreign_errors, host_lock, reinterpret
from .pyfile import ForeignStreamAdapter
from .reader import ArchiveReader, BlockInfo
from .source import StreamSource

__version__ = "0.1"

__all__ = [
    "ArchiveReader",
    "BlockInfo",
    "Flag",
    "Flags",
    "ForeignStreamAdapter",
    "FormatError",
    "FormatVersion",
    "Header",
    "MaskUnit",
    "NafError",
    "OpaqueIoError",
    "Record",
    "SequenceType",
    "Size",
    "StreamError",
    "StreamSource",
    "StreamTypeError",
    "TruncatedError",
    "UnsupportedSeekError",
    "foreign_errors",
    "host_lock",
    "reinterpret",
]
