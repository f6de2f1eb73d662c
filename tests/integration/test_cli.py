"""
End-to-end tests for the ``tripcode`` command line.

Driven through click's CliRunner; output is compared as bytes because the
command writes raw lines (passwords may not be valid UTF-8).
"""

import pytest

from tripcode import __version__
from tripcode.cli.generate import format_line, read_lines
from tripcode.cli.main import cli
from tripcode.config import FORMAT_ENV


@pytest.fixture(autouse=True)
def no_type_from_environment(monkeypatch):
    monkeypatch.delenv(FORMAT_ENV, raising=False)


def run(cli_runner, *args, **kwargs):
    return cli_runner.invoke(cli, list(args), **kwargs)


class TestGenerate:
    def test_default_type_is_4chan(self, cli_runner):
        result = run(cli_runner, "generate", "password", "tripcode")
        assert result.exit_code == 0, result.output
        assert result.stdout_bytes == b"ozOtJW9BFA\n3GqYIJ3Obs\n"

    @pytest.mark.parametrize("type_name", ["2", "2ch"])
    def test_mona(self, cli_runner, type_name):
        result = run(cli_runner, "generate", "-t", type_name, "7 bytes", "twelve bytes")
        assert result.exit_code == 0, result.output
        assert result.stdout_bytes == b"W/RvZlE2K.\nt+lnR7LBqNQY\n"

    def test_sc(self, cli_runner):
        result = run(cli_runner, "generate", "--type", "s", "$0123456789a")
        assert result.stdout_bytes == b"h3Si!7m4Qie8e.u\n"

    @pytest.mark.parametrize("type_name", ["s", "sc", "sc-sjis"])
    def test_sc_reads_shift_jis_stdin(self, cli_runner, sjis, type_name):
        result = run(
            cli_runner, "generate", "-t", type_name, "-f", input=sjis("$｡1008343131\n")
        )
        assert result.exit_code == 0
        assert result.stdout_bytes == "ﾃｽﾄ!ｹﾏﾜｬｴ･ｧﾎﾖｲﾎ\n".encode("utf-8")

    def test_sc_utf8(self, cli_runner):
        result = run(cli_runner, "generate", "-t", "sc-utf8", "$ｱ123456789012")
        assert result.exit_code == 0
        assert len(result.stdout_bytes.rstrip(b"\n").decode("utf-8")) == 15
        assert result.stdout_bytes != run(
            cli_runner, "generate", "-t", "sc", "$ｱ123456789012"
        ).stdout_bytes

    def test_empty_password_line(self, cli_runner):
        result = run(cli_runner, "generate", "-t", "s", "-f", input="\n")
        assert result.stdout_bytes == b"jPpg5.obl6\n"

    def test_sc_katakana_output_is_utf8(self, cli_runner):
        result = run(cli_runner, "generate", "-t", "sc-katakana", "$0123456789a")
        assert result.exit_code == 0
        assert len(result.stdout_bytes.rstrip(b"\n").decode("utf-8")) == 15

    def test_filter_reads_stdin(self, cli_runner):
        result = run(cli_runner, "generate", "-f", input="password\ntripcode\n")
        assert result.exit_code == 0
        assert result.stdout_bytes == b"ozOtJW9BFA\n3GqYIJ3Obs\n"

    def test_filter_keeps_blank_lines_and_missing_newline(self, cli_runner):
        result = run(cli_runner, "generate", "-f", input="\npassword")
        assert result.stdout_bytes == b"jPpg5.obl6\nozOtJW9BFA\n"

    def test_arguments_come_before_stdin(self, cli_runner):
        result = run(cli_runner, "generate", "-f", "tripcode", input="password\n")
        assert result.stdout_bytes == b"3GqYIJ3Obs\nozOtJW9BFA\n"

    def test_print_password(self, cli_runner):
        result = run(cli_runner, "generate", "-p", "password")
        assert result.stdout_bytes == b"ozOtJW9BFA#password\n"

    def test_prefix(self, cli_runner):
        result = run(cli_runner, "generate", "-!", "-p", "password")
        assert result.stdout_bytes == b"!ozOtJW9BFA#password\n"

    def test_encoding(self, cli_runner):
        result = run(cli_runner, "generate", "-e", "cp932", "-p", "トリップ")
        assert result.exit_code == 0
        # The password is echoed as typed, not in the hashing encoding.
        assert result.stdout_bytes == "XSSH/ryx32#トリップ\n".encode("utf-8")

    def test_encoding_failure_skips_line(self, cli_runner):
        result = run(cli_runner, "generate", "-e", "cp932", "😀", "password")
        assert result.exit_code == 1
        assert result.stdout_bytes == b"ozOtJW9BFA\n"

    def test_type_from_environment(self, cli_runner):
        result = run(cli_runner, "generate", "twelve bytes", env={FORMAT_ENV: "2"})
        assert result.stdout_bytes == b"t+lnR7LBqNQY\n"

    def test_option_overrides_environment(self, cli_runner):
        result = run(
            cli_runner, "generate", "-t", "4", "twelve bytes", env={FORMAT_ENV: "2"}
        )
        assert len(result.stdout_bytes) == 11

    def test_unknown_type(self, cli_runner):
        result = run(cli_runner, "generate", "-t", "5chan", "password")
        assert result.exit_code == 2
        assert "unknown tripcode type" in result.output
        assert b"ozOtJW9BFA" not in result.stdout_bytes

    def test_unknown_encoding(self, cli_runner):
        result = run(cli_runner, "generate", "-e", "no-such-codec", "password")
        assert result.exit_code == 2
        assert "unknown encoding" in result.output

    @pytest.mark.parametrize("codec", ["base64", "rot13", "zlib"])
    def test_non_text_encoding_is_usage_error(self, cli_runner, codec):
        result = run(cli_runner, "generate", "-e", codec, "password")
        assert result.exit_code == 2
        assert "not a text encoding" in result.output
        assert result.stdout_bytes == b""

    def test_invalid_nama_key_keeps_going(self, cli_runner):
        result = run(
            cli_runner,
            "generate",
            "-t",
            "2ch-raw",
            "#0123456789ABCDEF./",
            "not a key",
            "#1145145554560721..",
        )
        assert result.exit_code == 1
        assert result.stdout_bytes == b"IP9Lda5FPc\n14cvFmVHg2\n"

    def test_error_tripcode_is_printed(self, cli_runner):
        result = run(cli_runner, "generate", "-t", "2ch", "$23456789012")
        assert result.exit_code == 0
        assert result.stdout_bytes == b"???\n"

    def test_no_passwords(self, cli_runner):
        result = run(cli_runner, "generate")
        assert result.exit_code == 0
        assert result.stdout_bytes == b""


def test_formats_command(cli_runner):
    result = run(cli_runner, "formats")
    assert result.exit_code == 0
    for name in ("4chan", "2ch-raw", "sc-katakana", "2ch-12-nonescaping"):
        assert name in result.output


def test_version(cli_runner):
    result = run(cli_runner, "--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands(cli_runner):
    result = run(cli_runner, "--help")
    assert "generate" in result.output
    assert "formats" in result.output


def test_read_lines():
    assert list(read_lines([b"a\n", b"b\r\n", b"c"])) == [b"a", b"b\r", b"c"]


def test_format_line():
    assert format_line("abc", b"pw", False, False) == b"abc\n"
    assert format_line("abc", b"pw", True, True) == b"!abc#pw\n"
