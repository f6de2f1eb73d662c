"""Tripcode - 4chan, 2channel and 2ch.sc tripcode generators with a CLI."""

__version__ = "0.1.0"
__author__ = "Tripcode Team"
__description__ = "Bit-exact tripcode generators for imageboards and textboards"

from .formats import (
    Format,
    InvalidPasswordError,
    TripcodeError,
    UnknownFormatError,
    generate,
    generate_sjis,
    get_available_formats,
    get_format_info,
    resolve_format,
    try_generate,
    try_generate_sjis,
)

__all__ = [
    "Format",
    "TripcodeError",
    "UnknownFormatError",
    "InvalidPasswordError",
    "generate",
    "try_generate",
    "generate_sjis",
    "try_generate_sjis",
    "resolve_format",
    "get_available_formats",
    "get_format_info",
]
