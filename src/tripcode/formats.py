"""
Tripcode format registry and dispatcher.

Maps a ``Format`` (or its name) to the generator that implements it:

    >>> generate("4chan", b"password")
    'ozOtJW9BFA'
    >>> try_generate(Format.MONA_RAW, b"#0123456789ABCDEF./")
    'IP9Lda5FPc'
    >>> try_generate(Format.MONA_RAW, b"no key here") is None
    True

Every format except ``2ch-raw`` always produces a tripcode. ``generate``
raises ``InvalidPasswordError`` where ``try_generate`` returns None.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from tripcode.config import ERROR_TRIPCODE
from tripcode.hash import generators
from tripcode.hash.alphabets import BASE64, CRYPT, SC15, SC_KATAKANA, Alphabet
from tripcode.hash.util import PasswordLike, as_bytes
from tripcode.lib.log import get_logger, log_event

_logger = get_logger("formats")

SJIS_CODEC = "cp932"


class TripcodeError(Exception):
    """Base exception for tripcode errors"""

    pass


class UnknownFormatError(TripcodeError, ValueError):
    """The format name is not one of the supported formats"""

    pass


class InvalidPasswordError(TripcodeError, ValueError):
    """The password cannot produce a tripcode in the requested format"""

    pass


class Format(str, Enum):
    FOURCHAN = "4chan"
    FOURCHAN_NONESCAPING = "4chan-nonescaping"
    MONA = "2ch"
    MONA_NONESCAPING = "2ch-nonescaping"
    MONA10 = "2ch-10"
    MONA12 = "2ch-12"
    MONA12_NONESCAPING = "2ch-12-nonescaping"
    MONA_RAW = "2ch-raw"
    SC = "sc"
    SC_SJIS = "sc-sjis"
    SC15 = "sc-15"
    SC_KATAKANA = "sc-katakana"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FormatDefinition:
    generator: Callable[[bytes], Optional[str]]
    lengths: Tuple[int, ...]
    alphabets: Tuple[Alphabet, ...]
    description: str
    failable: bool = False
    # Auto-selecting formats may answer "???" for undefined passwords.
    may_return_error: bool = False


FORMAT_DEFINITIONS: Dict[Format, FormatDefinition] = {
    Format.FOURCHAN: FormatDefinition(
        generators.fourchan,
        (10,),
        (CRYPT,),
        "4chan's tripcode (DES, HTML-escaped)",
    ),
    Format.FOURCHAN_NONESCAPING: FormatDefinition(
        generators.fourchan_nonescaping,
        (10,),
        (CRYPT,),
        "4chan / 2channel 10-character tripcode without HTML escaping",
    ),
    Format.MONA: FormatDefinition(
        generators.mona,
        (10, 12),
        (CRYPT, BASE64),
        "2channel tripcode, 10 or 12 characters chosen by byte length",
        may_return_error=True,
    ),
    Format.MONA_NONESCAPING: FormatDefinition(
        generators.mona_nonescaping,
        (10, 12),
        (CRYPT, BASE64),
        "2channel tripcode without HTML escaping",
        may_return_error=True,
    ),
    Format.MONA10: FormatDefinition(
        generators.mona10,
        (10,),
        (CRYPT,),
        "2channel 10-character tripcode (DES)",
    ),
    Format.MONA12: FormatDefinition(
        generators.mona12,
        (12,),
        (BASE64,),
        "2channel 12-character tripcode (SHA-1)",
    ),
    Format.MONA12_NONESCAPING: FormatDefinition(
        generators.mona12_nonescaping,
        (12,),
        (BASE64,),
        "2channel 12-character tripcode without HTML escaping",
    ),
    Format.MONA_RAW: FormatDefinition(
        generators.mona_raw,
        (10,),
        (CRYPT,),
        "2channel nama key tripcode: '#' + 16 hex digits + optional salt",
        failable=True,
    ),
    Format.SC: FormatDefinition(
        generators.sc,
        (10, 12, 15),
        (CRYPT, BASE64, SC15, SC_KATAKANA),
        "2ch.sc tripcode, format chosen by byte length and sign (UTF-8)",
        may_return_error=True,
    ),
    Format.SC_SJIS: FormatDefinition(
        generators.sc_sjis,
        (10, 12, 15),
        (CRYPT, BASE64, SC15, SC_KATAKANA),
        "2ch.sc tripcode for Shift-JIS passwords",
        may_return_error=True,
    ),
    Format.SC15: FormatDefinition(
        generators.sc15,
        (15,),
        (SC15,),
        "2ch.sc 15-character tripcode (SHA-1)",
    ),
    Format.SC_KATAKANA: FormatDefinition(
        generators.sc_katakana,
        (15,),
        (SC_KATAKANA,),
        "2ch.sc katakana tripcode (SHA-1, half-width katakana)",
    ),
}

# Short names accepted on the command line.
FORMAT_ALIASES: Dict[str, Format] = {
    "4": Format.FOURCHAN,
    "2": Format.MONA,
    # Board input arrives as Shift-JIS bytes.
    "s": Format.SC_SJIS,
}

FormatLike = Union[Format, str]


def resolve_format(fmt: FormatLike) -> Format:
    """
    Resolve a format name, alias or member to a ``Format``.

    Raises:
        UnknownFormatError: If the name is not recognized
    """
    if isinstance(fmt, Format):
        return fmt
    if isinstance(fmt, str):
        name = fmt.strip().lower()
        if name in FORMAT_ALIASES:
            return FORMAT_ALIASES[name]
        try:
            return Format(name)
        except ValueError:
            pass
    raise UnknownFormatError(
        f"Unknown tripcode type '{fmt}'. Valid types: {get_available_formats()}"
    )


def get_available_formats() -> List[str]:
    return [f.value for f in Format]


def get_format_info(fmt: FormatLike) -> Dict:
    """
    Get information about a tripcode format.

    Returns:
        Dictionary with name, aliases, lengths, alphabets, description and
        whether the format can fail
    """
    fmt = resolve_format(fmt)
    definition = FORMAT_DEFINITIONS[fmt]
    return {
        "name": fmt.value,
        "aliases": [a for a, f in FORMAT_ALIASES.items() if f is fmt],
        "lengths": list(definition.lengths),
        "alphabets": [a.name for a in definition.alphabets],
        "description": definition.description,
        "failable": definition.failable,
        "may_return_error": definition.may_return_error,
    }


def try_generate(fmt: FormatLike, password: PasswordLike) -> Optional[str]:
    """
    Generate the tripcode for ``password`` in format ``fmt``.

    Returns:
        The tripcode, or None if the format cannot encode this password
        (only ``2ch-raw`` can fail)
    """
    fmt = resolve_format(fmt)
    password = as_bytes(password)

    log_event(_logger, "debug", "dispatch", format=fmt.value, length=len(password))
    tripcode = FORMAT_DEFINITIONS[fmt].generator(password)

    if tripcode is None:
        log_event(_logger, "debug", "no tripcode", format=fmt.value)
    elif tripcode == ERROR_TRIPCODE:
        log_event(_logger, "debug", "undefined password format", format=fmt.value)
    return tripcode


def generate(fmt: FormatLike, password: PasswordLike) -> str:
    """
    Generate the tripcode for ``password`` in format ``fmt``.

    Raises:
        InvalidPasswordError: If the format cannot encode this password
    """
    tripcode = try_generate(fmt, password)
    if tripcode is None:
        raise InvalidPasswordError(
            f"Password is not valid for tripcode type '{resolve_format(fmt)}'"
        )
    return tripcode


def try_generate_sjis(fmt: FormatLike, password: PasswordLike) -> Optional[bytes]:
    """Like ``try_generate`` but returns the tripcode encoded in Shift-JIS."""
    tripcode = try_generate(fmt, password)
    if tripcode is None:
        return None
    return tripcode.encode(SJIS_CODEC)


def generate_sjis(fmt: FormatLike, password: PasswordLike) -> bytes:
    """
    Generate a Shift-JIS encoded tripcode.

    Katakana tripcodes take one byte per character in Shift-JIS, so every
    tripcode is at most 15 bytes long in this form.
    """
    return generate(fmt, password).encode(SJIS_CODEC)
