"""
Common data types for NAF archives.

These are plain value types: the header model consumed by the archive reader,
and the record, mask and size carriers produced for callers.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from .constants import (
    DEFAULT_LINE_LENGTH,
    DEFAULT_NAME_SEPARATOR,
    DEFAULT_NUMBER_OF_SEQUENCES,
    FLAG_COMMENT,
    FLAG_EXTENDED,
    FLAG_ID,
    FLAG_LENGTH,
    FLAG_MASK,
    FLAG_QUALITY,
    FLAG_SEQUENCE,
    FLAG_TITLE,
    FORMAT_VERSION_1,
    FORMAT_VERSION_2,
    SEQTYPE_DNA,
    SEQTYPE_PROTEIN,
    SEQTYPE_RNA,
    SEQTYPE_TEXT,
)


class FormatVersion(enum.IntEnum):
    """The supported format versions of NAF archives."""

    V1 = FORMAT_VERSION_1
    V2 = FORMAT_VERSION_2

    @classmethod
    def default(cls) -> "FormatVersion":
        return cls.V1


class SequenceType(enum.IntEnum):
    """The type of sequence stored in an archive."""

    DNA = SEQTYPE_DNA  # ATCG(N-)
    RNA = SEQTYPE_RNA  # AUCG(N-)
    PROTEIN = SEQTYPE_PROTEIN  # single character amino acids
    TEXT = SEQTYPE_TEXT  # arbitrary string

    @classmethod
    def default(cls) -> "SequenceType":
        return cls.DNA

    def is_nucleotide(self) -> bool:
        return self in (SequenceType.DNA, SequenceType.RNA)


class Flag(enum.IntEnum):
    """A single bit of the header flags, one per optional archive section."""

    QUALITY = FLAG_QUALITY
    SEQUENCE = FLAG_SEQUENCE
    MASK = FLAG_MASK
    LENGTH = FLAG_LENGTH
    COMMENT = FLAG_COMMENT
    ID = FLAG_ID
    TITLE = FLAG_TITLE
    # reserved for future extension of the format
    EXTENDED = FLAG_EXTENDED

    @classmethod
    def values(cls) -> List["Flag"]:
        return list(cls)

    def as_byte(self) -> int:
        return int(self)

    def __or__(self, other):
        if isinstance(other, (Flag, Flags)):
            return Flags(self) | other
        return int.__or__(self, other)

    def __ror__(self, other):
        if isinstance(other, (Flag, Flags)):
            return Flags(self) | other
        return int.__ror__(self, other)


class Flags:
    """The set of optional sections present in an archive, as an 8-bit mask.

    ``Flags`` is mutable through :meth:`set`, :meth:`unset` and ``|=``;
    ``|`` always returns a new set.
    """

    __slots__ = ("_mask",)

    def __init__(self, value: Union[int, Flag, "Flags"] = 0):
        if isinstance(value, Flags):
            value = value._mask
        value = int(value)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"flags must fit in one byte, got {value:#x}")
        self._mask = value

    @classmethod
    def from_byte(cls, value: int) -> "Flags":
        return cls(value)

    def test(self, flag: Flag) -> bool:
        return (self._mask & int(flag)) != 0

    def set(self, flag: Flag) -> None:
        self._mask |= int(flag)

    def unset(self, flag: Flag) -> None:
        self._mask &= ~int(flag) & 0xFF

    def as_byte(self) -> int:
        return self._mask

    def copy(self) -> "Flags":
        return Flags(self._mask)

    def __int__(self) -> int:
        return self._mask

    def __contains__(self, flag) -> bool:
        return isinstance(flag, Flag) and self.test(flag)

    def __iter__(self) -> Iterator[Flag]:
        return (flag for flag in Flag if self.test(flag))

    def __len__(self) -> int:
        return bin(self._mask).count("1")

    def __or__(self, other):
        if isinstance(other, (Flags, Flag)):
            return Flags(self._mask | int(other))
        return NotImplemented

    __ror__ = __or__

    def __ior__(self, other):
        if isinstance(other, (Flags, Flag)):
            self._mask |= int(other)
            return self
        return NotImplemented

    def __eq__(self, other) -> bool:
        if isinstance(other, Flags):
            return self._mask == other._mask
        if isinstance(other, int):
            return self._mask == int(other)
        return NotImplemented

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        names = "|".join(flag.name for flag in self)
        return f"Flags({names or 0})"


class Header:
    """The header section of a NAF archive.

    Headers are the only mandatory section of an archive. They describe the
    stored sequences and hold the formatting defaults used when records are
    written back out as text. A header is read-only once built; ``flags``
    returns a copy.
    """

    __slots__ = (
        "_format_version",
        "_sequence_type",
        "_flags",
        "_name_separator",
        "_line_length",
        "_number_of_sequences",
    )

    def __init__(
        self,
        format_version: Union[int, FormatVersion] = FormatVersion.V1,
        sequence_type: Union[int, SequenceType] = SequenceType.DNA,
        flags: Union[int, Flag, Flags] = 0,
        name_separator: str = DEFAULT_NAME_SEPARATOR,
        line_length: int = DEFAULT_LINE_LENGTH,
        number_of_sequences: int = DEFAULT_NUMBER_OF_SEQUENCES,
    ):
        if not isinstance(name_separator, str) or len(name_separator) != 1:
            raise ValueError("name_separator must be a single character")
        if line_length < 0:
            raise ValueError("line_length must be non-negative")
        if number_of_sequences < 0:
            raise ValueError("number_of_sequences must be non-negative")
        self._format_version = FormatVersion(format_version)
        self._sequence_type = SequenceType(sequence_type)
        self._flags = Flags(flags)
        self._name_separator = name_separator
        self._line_length = int(line_length)
        self._number_of_sequences = int(number_of_sequences)

    @property
    def format_version(self) -> FormatVersion:
        return self._format_version

    @property
    def sequence_type(self) -> SequenceType:
        return self._sequence_type

    @property
    def flags(self) -> Flags:
        return self._flags.copy()

    @property
    def name_separator(self) -> str:
        return self._name_separator

    @property
    def line_length(self) -> int:
        return self._line_length

    @property
    def number_of_sequences(self) -> int:
        return self._number_of_sequences

    def _key(self):
        return (
            self._format_version,
            self._sequence_type,
            self._flags.as_byte(),
            self._name_separator,
            self._line_length,
            self._number_of_sequences,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Header):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"Header(format_version={self._format_version.name}, "
            f"sequence_type={self._sequence_type.name}, flags={self._flags!r}, "
            f"name_separator={self._name_separator!r}, line_length={self._line_length}, "
            f"number_of_sequences={self._number_of_sequences})"
        )


@dataclass(frozen=True)
class MaskUnit:
    """A single run decoded from the mask block."""

    length: int
    masked: bool

    def __post_init__(self):
        if self.length <= 0:
            raise ValueError(f"mask run length must be positive, got {self.length}")

    @classmethod
    def masked_run(cls, length: int) -> "MaskUnit":
        return cls(length, True)

    @classmethod
    def unmasked_run(cls, length: int) -> "MaskUnit":
        return cls(length, False)


@dataclass(frozen=True)
class Record:
    """A single sequence record from an archive.

    If set, the quality string must be as long as the sequence and as the
    record length. The quality block is stored as raw text, so it may carry
    other per-residue annotation such as secondary structure.
    Records are frozen so the length invariant holds for their lifetime;
    use ``dataclasses.replace`` to derive a modified record.
    """

    id: Optional[str] = None
    comment: Optional[str] = None
    sequence: Optional[bytes] = None
    quality: Optional[str] = None
    length: Optional[int] = None

    def __post_init__(self):
        lengths = [
            len(value) for value in (self.sequence, self.quality) if value is not None
        ]
        if self.length is not None:
            if self.length < 0:
                raise ValueError("record length must be non-negative")
            lengths.append(self.length)
        if len(set(lengths)) > 1:
            raise ValueError(
                f"inconsistent record lengths: sequence={_len_or_none(self.sequence)}, "
                f"quality={_len_or_none(self.quality)}, length={self.length}"
            )


def _len_or_none(value) -> Optional[int]:
    return None if value is None else len(value)


@dataclass
class Size:
    """Original and compressed byte sizes of one archive block."""

    block: str
    original: int
    compressed: Optional[int] = None

    def __post_init__(self):
        if self.compressed is None:
            self.compressed = self.original

    def __str__(self) -> str:
        if self.original == self.compressed:
            return f"{self.block}: {self.original}"
        if self.original:
            percent = self.compressed * 100.0 / self.original
        else:
            percent = float("inf")
        return f"{self.block}: {self.compressed} / {self.original} ({percent:.3f}%)"
