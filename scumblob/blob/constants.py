"""Property blob format constants (serializer layout as shipped in current saves).

A serialized scalar property looks like:

    <key name> | 5 bytes | <type tag> NUL | 10 bytes | <little-endian value>

The 5-byte gap is the key's NUL terminator plus the tag's 4-byte length
prefix; the 10-byte gap holds the property size, array index and guid flag.
Neither gap is described by any header, so both are fixed per format version.
"""

# Bytes between the end of a key name and the start of its type tag
KEY_PADDING = 0x05

# Bytes between a type tag's NUL terminator and the value
VALUE_PADDING = 0x0A

# Length of the type tag terminator
TAG_TERMINATOR = b"\x00"

# Bytes allowed in a key name; a key match must not touch one on either side
IDENTIFIER_BYTES = frozenset(
    b"abcdefghijklmnopqrstuvwxyz"
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    b"0123456789_"
)
