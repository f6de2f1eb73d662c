import logging
import random

import pytest
from click.testing import CliRunner

from tripcode.lib.log import ROOT_LOGGER_NAME


def pytest_configure(config):
    """Register project markers."""
    config.addinivalue_line(
        "markers", "slow: exercises the pure-Python DES over many passwords"
    )


@pytest.fixture
def sjis():
    """Encodes text the way Japanese boards receive it (CP932, a superset of Shift-JIS)."""

    def _encode(text: str) -> bytes:
        return text.encode("cp932")

    return _encode


@pytest.fixture
def random_passwords():
    """A reproducible batch of arbitrary byte passwords of assorted lengths."""
    rng = random.Random(0x7219)
    passwords = []
    for length in (0, 1, 2, 3, 7, 8, 9, 11, 12, 13, 16, 19, 24, 40):
        passwords.append(bytes(rng.randrange(256) for _ in range(length)))
    return passwords


@pytest.fixture
def cli_runner():
    """CliRunner that drops the handler the CLI bound to its captured stderr."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    yield CliRunner()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(level)


@pytest.fixture
def restore_log_level():
    """Put the package logger's level back after a test reconfigures it."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    yield logger
    logger.setLevel(level)
