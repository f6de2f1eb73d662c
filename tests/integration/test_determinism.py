import subprocess
import sys

import pytest


@pytest.mark.slow
def test_subprocess_determinism():
    """Separate interpreter runs produce the same tripcodes."""
    command = [
        sys.executable,
        "-m",
        "tripcode",
        "generate",
        "-t",
        "s",
        "$0123456789a",
        "#1145145554560721..",
        "password",
    ]

    result1 = subprocess.run(command, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    result2 = subprocess.run(command, stdout=subprocess.PIPE, stderr=subprocess.PIPE)

    assert result1.returncode == 0, result1.stderr
    assert result1.stdout == result2.stdout
    assert result1.stdout.splitlines() == [
        b"h3Si!7m4Qie8e.u",
        b"14cvFmVHg2",
        b"ozOtJW9BFA",
    ]
