"""
Tripcode hashing library

Bit-exact reimplementations of the tripcode schemes used by 4chan, 2channel
and 2ch.sc, built from three layers:

- des:        the legacy crypt(3) DES primitive with salt perturbation
- alphabets:  the 64-character alphabets and the 6-bit group codec
- generators: one pure function per board format

Example Usage:
    from tripcode.hash import fourchan, mona, mona_raw

    fourchan(b"password")                 # ozOtJW9BFA
    mona(b"twelve bytes")                 # t+lnR7LBqNQY
    mona_raw(b"#0123456789ABCDEF./")      # IP9Lda5FPc
    mona_raw(b"not a nama key")           # None
"""

from .alphabets import (
    ALPHABETS,
    BASE64,
    CRYPT,
    SC15,
    SC_KATAKANA,
    Alphabet,
    encode,
)
from .des import crypt, des_crypt_core
from .generators import (
    des,
    fourchan,
    fourchan_nonescaping,
    mona,
    mona10,
    mona10_nonescaping,
    mona12,
    mona12_nonescaping,
    mona_nonescaping,
    mona_raw,
    sc,
    sc15,
    sc_katakana,
    sc_sjis,
)

__all__ = [
    # Primitive
    "des_crypt_core",
    "crypt",
    # Codec
    "Alphabet",
    "ALPHABETS",
    "CRYPT",
    "BASE64",
    "SC15",
    "SC_KATAKANA",
    "encode",
    # Generators
    "des",
    "fourchan",
    "fourchan_nonescaping",
    "mona",
    "mona_nonescaping",
    "mona10",
    "mona10_nonescaping",
    "mona12",
    "mona12_nonescaping",
    "mona_raw",
    "sc",
    "sc_sjis",
    "sc15",
    "sc_katakana",
]
