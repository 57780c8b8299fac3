"""
NAF header codec.

Layout
- magic: 3 bytes (01 F9 EC)
- format_version: u8 (1 or 2)
- sequence_type: u8, format version 2 only (version 1 archives hold DNA)
- flags: u8
- name_separator: u8 (one ASCII character)
- line_length: varint
- number_of_sequences: varint
- title: varint(length) || UTF-8 text, only when the TITLE flag is set

Varints are big-endian base-128: seven bits per byte, most significant group
first, high bit set on every byte except the last.
"""

from __future__ import annotations

from typing import BinaryIO, Optional

from .constants import FORMAT_MAGIC, VARINT_MAX_BITS
from .data import Flag, Flags, FormatVersion, Header, SequenceType
from .errors import FormatError, TruncatedError


def read_exact(f: BinaryIO, n: int) -> bytes:
    # raw streams may return short reads before the end
    out = bytearray()
    while len(out) < n:
        chunk = f.read(n - len(out))
        if not chunk:
            raise TruncatedError(f"Unexpected EOF: wanted {n} bytes, got {len(out)}")
        out += chunk
    return bytes(out)


def read_u8(f: BinaryIO) -> int:
    return read_exact(f, 1)[0]


def read_varint(f: BinaryIO) -> int:
    result = 0
    while True:
        b = read_u8(f)
        result = (result << 7) | (b & 0x7F)
        if result.bit_length() > VARINT_MAX_BITS:
            raise FormatError("varint: too large")
        if not (b & 0x80):
            return result


def encode_varint(n: int) -> bytes:
    if n < 0:
        raise ValueError("varint: negative not supported")
    out = bytearray([n & 0x7F])
    n >>= 7
    while n:
        out.append((n & 0x7F) | 0x80)
        n >>= 7
    out.reverse()
    return bytes(out)


def read_header(f: BinaryIO) -> Header:
    magic = read_exact(f, len(FORMAT_MAGIC))
    if magic != FORMAT_MAGIC:
        raise FormatError(f"Bad format descriptor: {magic.hex()}")
    version = read_u8(f)
    try:
        format_version = FormatVersion(version)
    except ValueError:
        raise FormatError(f"Unsupported format version: {version}") from None
    if format_version == FormatVersion.V2:
        seqtype = read_u8(f)
        try:
            sequence_type = SequenceType(seqtype)
        except ValueError:
            raise FormatError(f"Unknown sequence type: {seqtype}") from None
    else:
        sequence_type = SequenceType.DNA
    flags = Flags.from_byte(read_u8(f))
    separator = read_u8(f)
    if separator > 0x7F:
        raise FormatError(f"Name separator is not ASCII: {separator:#x}")
    line_length = read_varint(f)
    number_of_sequences = read_varint(f)
    return Header(
        format_version=format_version,
        sequence_type=sequence_type,
        flags=flags,
        name_separator=chr(separator),
        line_length=line_length,
        number_of_sequences=number_of_sequences,
    )


def read_title(f: BinaryIO) -> str:
    size = read_varint(f)
    raw = read_exact(f, size)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError(f"Title is not valid UTF-8: {exc}") from None


def pack_header(header: Header, title: Optional[str] = None) -> bytes:
    """Serialize ``header`` (and ``title`` when the TITLE flag is set)."""
    flags = header.flags
    if title is not None and not flags.test(Flag.TITLE):
        raise ValueError("title given but the TITLE flag is not set")
    if title is None and flags.test(Flag.TITLE):
        raise ValueError("TITLE flag set but no title given")
    separator = ord(header.name_separator)
    if separator > 0x7F:
        raise ValueError("name separator must be ASCII")
    out = bytearray(FORMAT_MAGIC)
    out.append(int(header.format_version))
    if header.format_version == FormatVersion.V2:
        out.append(int(header.sequence_type))
    elif header.sequence_type != SequenceType.DNA:
        raise ValueError("format version 1 only stores DNA")
    out.append(flags.as_byte())
    out.append(separator)
    out += encode_varint(header.line_length)
    out += encode_varint(header.number_of_sequences)
    if title is not None:
        encoded = title.encode("utf-8")
        out += encode_varint(len(encoded))
        out += encoded
    return bytes(out)
