# Format descriptor
FORMAT_MAGIC = b"\x01\xF9\xEC"

FORMAT_VERSION_1 = 1
FORMAT_VERSION_2 = 2

# Sequence types (stored in the header from format version 2 on)
SEQTYPE_DNA = 0
SEQTYPE_RNA = 1
SEQTYPE_PROTEIN = 2
SEQTYPE_TEXT = 3

# Header flags
FLAG_QUALITY = 1 << 0
FLAG_SEQUENCE = 1 << 1
FLAG_MASK = 1 << 2
FLAG_LENGTH = 1 << 3
FLAG_COMMENT = 1 << 4
FLAG_ID = 1 << 5
FLAG_TITLE = 1 << 6
FLAG_EXTENDED = 1 << 7

# Header defaults
DEFAULT_NAME_SEPARATOR = " "
DEFAULT_LINE_LENGTH = 60
DEFAULT_NUMBER_OF_SEQUENCES = 0

# Blocks follow the header (and title) in this order, each one present only
# when its flag is set.
BLOCK_LAYOUT = (
    ("id", FLAG_ID),
    ("comment", FLAG_COMMENT),
    ("length", FLAG_LENGTH),
    ("mask", FLAG_MASK),
    ("sequence", FLAG_SEQUENCE),
    ("quality", FLAG_QUALITY),
)

# Variable-length integers are capped at 64 bits
VARINT_MAX_BITS = 64
