"""
Tripcode alphabets and the 6-bit group codec.

Every tripcode format renders bits of a digest through a 64-character
alphabet. Groups are taken most significant bit first, the order crypt(3)
uses, and a format chooses where in the digest to start and how many
characters to emit. Bits past the end of the digest read as zero.

Alphabets:
- CRYPT:        ./0-9A-Za-z (crypt(3), 4chan and 2channel 10-character)
- BASE64:       A-Za-z0-9+/ (2channel 12-character)
- SC15:         A-Za-z0-9.! (2ch.sc 15-character)
- SC_KATAKANA:  half-width katakana and ! (2ch.sc katakana)
"""

import string
from typing import Dict, Optional, Union


class Alphabet:
    """A fixed table of 64 characters indexed by 6-bit values."""

    def __init__(self, name: str, characters: str):
        if len(characters) != 64 or len(set(characters)) != 64:
            raise ValueError(f"Alphabet '{name}' must have 64 distinct characters")
        self.name = name
        self.characters = characters
        self._values: Dict[str, int] = {c: i for i, c in enumerate(characters)}

    def __getitem__(self, value: int) -> str:
        return self.characters[value]

    def __contains__(self, char: str) -> bool:
        return char in self._values

    def __len__(self) -> int:
        return len(self.characters)

    def __repr__(self) -> str:
        return f"Alphabet({self.name!r})"

    def index_of(
        self, char: Union[str, int], default: Optional[int] = None
    ) -> Optional[int]:
        """6-bit value of ``char`` (a character or a byte value)."""
        if isinstance(char, int):
            char = chr(char)
        return self._values.get(char, default)

    def is_valid(self, text: str) -> bool:
        return all(c in self._values for c in text)


CRYPT = Alphabet(
    "crypt", "./" + string.digits + string.ascii_uppercase + string.ascii_lowercase
)

BASE64 = Alphabet(
    "base64", string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
)

SC15 = Alphabet(
    "sc15", string.ascii_uppercase + string.ascii_lowercase + string.digits + ".!"
)

# Same ordering as BASE64: A-Za-z become U+FF6B..U+FF9E, 0-9 become
# U+FF61..U+FF6A, "+" becomes U+FF9F and "/" becomes "!".
SC_KATAKANA = Alphabet(
    "sc-katakana",
    "".join(chr(c) for c in range(0xFF6B, 0xFF9F))
    + "".join(chr(c) for c in range(0xFF61, 0xFF6B))
    + "ﾟ!",
)

ALPHABETS = {a.name: a for a in (CRYPT, BASE64, SC15, SC_KATAKANA)}


def encode(data: bytes, alphabet: Alphabet, count: int, skip: int = 0) -> str:
    """
    Encode ``count`` 6-bit groups of ``data`` starting ``skip`` bits in.

    Args:
        data: Raw digest bytes
        alphabet: Output alphabet
        count: Number of characters to produce
        skip: Number of leading bits to drop before the first group

    Returns:
        String of exactly ``count`` characters from ``alphabet``
    """
    if count < 0 or skip < 0:
        raise ValueError("count and skip must not be negative")

    value = int.from_bytes(bytes(data), "big")
    width = len(data) * 8

    needed = skip + 6 * count
    if needed > width:
        # Zero bits past the end of the data.
        value <<= needed - width
        width = needed

    chars = []
    for i in range(count):
        shift = width - skip - 6 * (i + 1)
        chars.append(alphabet[(value >> shift) & 0x3F])
    return "".join(chars)
