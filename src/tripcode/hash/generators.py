"""
Tripcode generators

One function per board format. Each takes the password as bytes (a str is
UTF-8 encoded) and returns the tripcode string. All of them are pure.

Formats:
- 4chan:               DES crypt, "&\"<>" escaped, 10 characters
- 2channel 10-char:    DES crypt, "\"<>" escaped, 10 characters
- 2channel 12-char:    SHA-1, BASE64 alphabet, 12 characters
- 2channel nama key:   DES crypt keyed by hex digits in the password, 10 characters
- 2ch.sc 15-char:      SHA-1, SC15 alphabet, 15 characters
- 2ch.sc katakana:     SHA-1, half-width katakana alphabet, 15 characters

The auto-selecting generators (``mona``, ``sc``) pick one of the above by the
password's length in bytes and its leading sign. Length is always counted in
bytes: a password typed in Shift-JIS and the same text in UTF-8 can land on
different formats, exactly as they do on the boards.

Reference: https://osdn.jp/projects/naniya/wiki/2chtrip (Japanese)
"""

import hashlib
from typing import Callable, Optional

from tripcode.config import (
    ERROR_TRIPCODE,
    LONG_PASSWORD_THRESHOLD,
    RAW_KEY_HEX_DIGITS,
    RAW_KEY_MARKER,
    RAW_KEY_MAX_SALT,
    SC_MARKER,
)
from tripcode.hash.alphabets import BASE64, CRYPT, SC15, SC_KATAKANA, encode
from tripcode.hash.des import des_crypt_core
from tripcode.hash.util import (
    FOURCHAN_ESCAPES,
    MONA_ESCAPES,
    PasswordLike,
    as_bytes,
    clamp_salt,
    decode_hex_key,
    derive_salt,
    escape,
    pack_key,
    starts_with_katakana,
    starts_with_katakana_sjis,
    strict_salt,
)

# crypt(3) renders 64 bits as 11 characters; tripcodes drop the first one.
DES_SKIP_BITS = 6
DES_LENGTH = 10

MONA12_LENGTH = 12

# 2ch.sc uses bits 18..107 of the SHA-1 digest.
SC_SKIP_BITS = 18
SC_LENGTH = 15


def _des_tripcode(key_source: bytes, salt: bytes) -> str:
    digest = des_crypt_core(pack_key(key_source), salt)
    return encode(digest, CRYPT, DES_LENGTH, skip=DES_SKIP_BITS)


def _escaped_des(password: bytes, entities) -> str:
    escaped = escape(password, entities)
    return _des_tripcode(escaped, derive_salt(escaped))


def des(password: PasswordLike, salt: PasswordLike) -> str:
    """
    DES tripcode with caller-chosen salt characters.

    Essentially crypt(3) with the 4chan/2channel treatment of invalid salt
    characters. The password is used as-is (no escaping).

    Examples:
        >>> des(b"password", b"as")
        'ozOtJW9BFA'
    """
    return _des_tripcode(as_bytes(password), clamp_salt(as_bytes(salt)[:2].ljust(2, b".")))


def fourchan(password: PasswordLike) -> str:
    """
    4chan's (non-secure) tripcode.

    The password is HTML-escaped (``& " < >``); the first 8 escaped bytes are
    the DES key and bytes 2-3 of ``escaped + "H."`` are the salt.

    Examples:
        >>> fourchan(b"password")
        'ozOtJW9BFA'
    """
    return _escaped_des(as_bytes(password), FOURCHAN_ESCAPES)


def fourchan_nonescaping(password: PasswordLike) -> str:
    """4chan / 2channel 10-character tripcode without HTML escaping."""
    password = as_bytes(password)
    return _des_tripcode(password, derive_salt(password))


def mona10(password: PasswordLike) -> str:
    """
    2channel's 10-character tripcode (10桁トリップ).

    Same DES scheme as 4chan but 2channel does not escape ``&``. Only the
    first 8 (escaped) bytes matter, so any password length is accepted.
    """
    return _escaped_des(as_bytes(password), MONA_ESCAPES)


# 2channel reuses the 4chan rule when nothing is escaped.
mona10_nonescaping = fourchan_nonescaping


def _sha1_tripcode(password: bytes, alphabet, length: int, skip: int) -> str:
    digest = hashlib.sha1(password).digest()
    return encode(digest, alphabet, length, skip=skip)


def mona12(password: PasswordLike) -> str:
    """
    2channel's 12-character tripcode (12桁トリップ).

    First 72 bits of SHA-1 of the escaped password in the BASE64 alphabet.
    """
    escaped = escape(as_bytes(password), MONA_ESCAPES)
    return _sha1_tripcode(escaped, BASE64, MONA12_LENGTH, 0)


def mona12_nonescaping(password: PasswordLike) -> str:
    return _sha1_tripcode(as_bytes(password), BASE64, MONA12_LENGTH, 0)


def mona_raw(password: PasswordLike) -> Optional[str]:
    """
    2channel's nama key tripcode (生キートリップ).

    The password must be ``#``, 16 hex digits giving the 8 DES key bytes,
    then up to two salt characters from the crypt alphabet (a missing salt
    character is ``.``). Key bytes after the first zero byte are ignored.

    Returns:
        The 10-character tripcode, or None if the password is not a valid
        nama key
    """
    password = as_bytes(password)
    if not password.startswith(RAW_KEY_MARKER):
        return None

    body = password[len(RAW_KEY_MARKER) :]
    if not RAW_KEY_HEX_DIGITS <= len(body) <= RAW_KEY_HEX_DIGITS + RAW_KEY_MAX_SALT:
        return None

    key = decode_hex_key(body[:RAW_KEY_HEX_DIGITS])
    salt = strict_salt(body[RAW_KEY_HEX_DIGITS:].ljust(RAW_KEY_MAX_SALT, b"."))
    if key is None or salt is None:
        return None

    return _des_tripcode(key, salt)


def _mona_select(password: bytes, escaped_length: int, short, long) -> str:
    if escaped_length < LONG_PASSWORD_THRESHOLD:
        return short(password)

    if password.startswith(RAW_KEY_MARKER):
        tripcode = mona_raw(password)
        return ERROR_TRIPCODE if tripcode is None else tripcode
    if password.startswith(SC_MARKER):
        # Reserved by 2channel for future formats.
        return ERROR_TRIPCODE
    return long(password)


def mona(password: PasswordLike) -> str:
    """
    2channel tripcode, format chosen automatically.

    * If the escaped password is 12 or more bytes long and:
        * begins with ``#`` -> nama key tripcode (``???`` if malformed)
        * begins with ``$`` -> ``???`` (undefined)
        * else -> 12-character tripcode
    * else -> 10-character tripcode

    Examples:
        >>> mona(b"7 bytes")
        'W/RvZlE2K.'
        >>> mona(b"twelve bytes")
        't+lnR7LBqNQY'
    """
    password = as_bytes(password)
    escaped_length = len(escape(password, MONA_ESCAPES))
    return _mona_select(password, escaped_length, mona10, mona12)


def mona_nonescaping(password: PasswordLike) -> str:
    password = as_bytes(password)
    return _mona_select(password, len(password), mona10_nonescaping, mona12_nonescaping)


def sc15(password: PasswordLike) -> str:
    """2ch.sc's 15-character tripcode (15桁トリップ)."""
    return _sha1_tripcode(as_bytes(password), SC15, SC_LENGTH, SC_SKIP_BITS)


def sc_katakana(password: PasswordLike) -> str:
    """
    2ch.sc's katakana tripcode (カタカナトリップ).

    Same bits as :func:`sc15`, rendered as 15 half-width katakana (or ``!``).
    """
    return _sha1_tripcode(as_bytes(password), SC_KATAKANA, SC_LENGTH, SC_SKIP_BITS)


def _sc_select(password: bytes, is_katakana: Callable[[bytes], bool]) -> str:
    if len(password) < LONG_PASSWORD_THRESHOLD:
        return fourchan_nonescaping(password)

    if password.startswith(RAW_KEY_MARKER):
        tripcode = mona_raw(password)
        return ERROR_TRIPCODE if tripcode is None else tripcode
    if password.startswith(SC_MARKER):
        if is_katakana(password):
            return sc_katakana(password)
        return sc15(password)
    return mona12_nonescaping(password)


def sc(password: PasswordLike) -> str:
    """
    2ch.sc tripcode, format chosen automatically.

    * If the password is 12 or more bytes long and:
        * begins with ``#`` -> nama key tripcode (``???`` if malformed)
        * begins with ``$`` and:
            * is followed by a half-width katakana -> katakana tripcode
            * else -> 15-character tripcode
        * else -> 12-character tripcode
    * else -> 10-character tripcode

    The password is expected in UTF-8; see :func:`sc_sjis` for Shift-JIS.
    """
    return _sc_select(as_bytes(password), starts_with_katakana)


def sc_sjis(password: PasswordLike) -> str:
    """Same as :func:`sc` but detects the katakana sign in Shift-JIS."""
    return _sc_select(as_bytes(password), starts_with_katakana_sjis)
