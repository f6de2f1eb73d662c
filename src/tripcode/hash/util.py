"""
Password preparation helpers shared by the tripcode generators.

Boards never hash the raw form input: they HTML-escape it first (each board
with its own set of entities), pick the DES salt out of the escaped text and
substitute any salt character crypt(3) would not accept.
"""

from typing import Optional, Union

from tripcode.hash.alphabets import CRYPT

PasswordLike = Union[bytes, bytearray, memoryview, str]

# 4chan escapes "&" as well; 2channel leaves it alone.
FOURCHAN_ESCAPES = (
    (b"&", b"&amp;"),
    (b'"', b"&quot;"),
    (b"<", b"&lt;"),
    (b">", b"&gt;"),
)
MONA_ESCAPES = (
    (b'"', b"&quot;"),
    (b"<", b"&lt;"),
    (b">", b"&gt;"),
)

# Appended to the password before the salt is cut out of it.
SALT_SUFFIX = b"H."


def _build_salt_table() -> bytes:
    table = bytearray(b"." * 256)
    for byte in range(ord("."), ord("z") + 1):
        table[byte] = byte
    for src, dst in zip(b":;<=>?@", b"ABCDEFG"):
        table[src] = dst
    for src, dst in zip(b"[\\]^_`", b"abcdef"):
        table[src] = dst
    return bytes(table)


SALT_TABLE = _build_salt_table()


def as_bytes(password: PasswordLike) -> bytes:
    """Accept the password types the generators take and return bytes."""
    if isinstance(password, str):
        return password.encode("utf-8")
    if isinstance(password, (bytes, bytearray, memoryview)):
        return bytes(password)
    raise TypeError(
        f"password must be bytes or str, not {type(password).__name__}"
    )


def escape(password: bytes, entities=FOURCHAN_ESCAPES) -> bytes:
    """HTML-escape ``password`` with the given (char, entity) pairs."""
    # "&" is always first in the table so entities are not escaped twice.
    for char, entity in entities:
        password = password.replace(char, entity)
    return password


def clamp_salt(salt: bytes) -> bytes:
    """
    Replace salt bytes crypt(3) would reject, the way 4chan and 2channel do.

    ``:;<=>?@`` become ``ABCDEFG``, ``[\\]^_`` and the backtick become
    ``abcdef``, and any other byte outside ``.``..``z`` becomes ``.``.
    """
    return bytes(salt).translate(SALT_TABLE)


def derive_salt(password: bytes) -> bytes:
    """
    Second and third bytes of ``password + "H."``, clamped.

    An empty password uses ``H.`` itself.
    """
    if not password:
        return SALT_SUFFIX
    return clamp_salt((password + SALT_SUFFIX)[1:3])


def strict_salt(salt: bytes) -> Optional[bytes]:
    """Return ``salt`` if every byte is in the crypt alphabet, else None."""
    if all(CRYPT.index_of(byte) is not None for byte in salt):
        return bytes(salt)
    return None


def pack_key(password: bytes) -> bytes:
    """First 8 bytes of ``password``, zero-padded."""
    return password[:8].ljust(8, b"\x00")


def decode_hex_key(digits: bytes) -> Optional[bytes]:
    """
    Decode hex digits into key bytes, dropping everything after a zero byte.

    Returns None if any character is not a hex digit.
    """
    try:
        text = digits.decode("ascii")
        if len(text) % 2 or not all(c in "0123456789abcdefABCDEF" for c in text):
            return None
        key = bytes.fromhex(text)
    except (UnicodeDecodeError, ValueError):
        return None

    # crypt(3) stops reading the key at the first NUL.
    end = key.find(b"\x00")
    if end != -1:
        key = key[:end]
    return pack_key(key)


def starts_with_katakana(password: bytes) -> bool:
    """
    True if the character after the leading sign is a UTF-8 half-width
    katakana (U+FF61..U+FF9F).
    """
    head = password[1:4]
    if len(head) < 3 or head[0] != 0xEF:
        return False
    if head[1] == 0xBD:
        return 0xA1 <= head[2] <= 0xBF
    if head[1] == 0xBE:
        return 0x80 <= head[2] <= 0x9F
    return False


def starts_with_katakana_sjis(password: bytes) -> bool:
    """Shift-JIS variant of :func:`starts_with_katakana` (single byte 0xA1..0xDF)."""
    return len(password) > 1 and 0xA1 <= password[1] <= 0xDF
