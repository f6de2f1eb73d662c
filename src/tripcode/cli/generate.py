import codecs
import os
from typing import Iterable, Iterator, Optional

import click

from tripcode.config import DEFAULT_FORMAT, FORMAT_ENV, TRIPCODE_PREFIX
from tripcode.formats import (
    Format,
    UnknownFormatError,
    get_available_formats,
    resolve_format,
    try_generate,
)
from tripcode.lib.log import get_logger, log_event

_logger = get_logger("cli")

# Passwords on the command line are raw board bytes, so "sc" detects the
# katakana sign in Shift-JIS. The UTF-8 variant stays reachable as "sc-utf8".
CLI_TYPE_NAMES = {
    "sc": Format.SC_SJIS,
    "sc-utf8": Format.SC,
}


def _resolve_type(ctx, param, value) -> Format:
    name = value.strip().lower() if isinstance(value, str) else value
    if name in CLI_TYPE_NAMES:
        return CLI_TYPE_NAMES[name]
    try:
        return resolve_format(value)
    except UnknownFormatError:
        raise click.BadParameter(
            f"unknown tripcode type `{value}`. "
            f"Choose from {', '.join(get_available_formats())} (or 4, 2, s, sc-utf8)."
        )


def _check_encoding(ctx, param, value) -> Optional[str]:
    if value is None:
        return None
    try:
        name = codecs.lookup(value).name
    except LookupError:
        raise click.BadParameter(f"unknown encoding `{value}`")
    try:
        # Rejects bytes-to-bytes codecs such as base64 or zlib.
        "".encode(name)
    except LookupError:
        raise click.BadParameter(f"`{value}` is not a text encoding")
    return name


def read_lines(stream) -> Iterator[bytes]:
    """Yield newline-delimited byte strings from a binary stream, without the newline."""
    for line in stream:
        if line.endswith(b"\n"):
            line = line[:-1]
        yield line


def iter_passwords(arguments: Iterable[str], read_stdin: bool) -> Iterator[bytes]:
    # Undecodable argv bytes come back through surrogateescape.
    for argument in arguments:
        yield os.fsencode(argument)
    if read_stdin:
        yield from read_lines(click.get_binary_stream("stdin"))


def format_line(
    tripcode: str, password: bytes, print_password: bool, with_prefix: bool
) -> bytes:
    line = tripcode.encode("utf-8")
    if with_prefix:
        line = TRIPCODE_PREFIX.encode("utf-8") + line
    if print_password:
        line += b"#" + password
    return line + b"\n"


@click.command("generate")
@click.option(
    "-t",
    "--type",
    "fmt",
    default=DEFAULT_FORMAT,
    envvar=FORMAT_ENV,
    show_default=True,
    callback=_resolve_type,
    help=(
        "The type of tripcodes: a name from `tripcode formats` or 4, 2, s. "
        "`sc` reads Shift-JIS passwords; `sc-utf8` reads UTF-8."
    ),
)
@click.option(
    "-f", "--filter", "read_stdin", is_flag=True, help="Read passwords from standard input."
)
@click.option(
    "-p",
    "--password",
    "print_password",
    is_flag=True,
    help="Print passwords along with tripcodes.",
)
@click.option(
    "-!", "--prefix", "with_prefix", is_flag=True, help="Print the tripcode prefix !"
)
@click.option(
    "-e",
    "--encoding",
    default=None,
    callback=_check_encoding,
    help="Convert passwords from UTF-8 to this encoding before hashing (e.g. cp932).",
)
@click.argument("passwords", nargs=-1)
@click.pass_context
def generate_command(ctx, fmt, read_stdin, print_password, with_prefix, encoding, passwords):
    """Generates tripcodes for PASSWORDS, one per line."""
    out = click.get_binary_stream("stdout")
    generated = skipped = 0

    for index, password in enumerate(iter_passwords(passwords, read_stdin)):
        key = password
        if encoding:
            try:
                key = password.decode("utf-8").encode(encoding)
            except (UnicodeDecodeError, UnicodeEncodeError) as e:
                log_event(
                    _logger,
                    "warning",
                    "skipped password: cannot re-encode",
                    line=index + 1,
                    encoding=encoding,
                    reason=e.reason,
                )
                skipped += 1
                continue

        tripcode = try_generate(fmt, key)
        if tripcode is None:
            log_event(
                _logger,
                "warning",
                "skipped password: not valid for this type",
                line=index + 1,
                type=fmt.value,
            )
            skipped += 1
            continue

        out.write(format_line(tripcode, password, print_password, with_prefix))
        generated += 1

    out.flush()
    log_event(_logger, "info", "done", generated=generated, skipped=skipped)

    if skipped:
        ctx.exit(1)
