"""
Generators keep no shared state, so concurrent callers must get exactly the
results a single thread gets.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

import pytest

from tripcode.formats import Format, try_generate


@pytest.mark.slow
def test_threaded_generation_matches_serial(random_passwords):
    jobs = [(fmt, password) for fmt in Format for password in random_passwords[:6]]
    expected = {job: try_generate(*job) for job in jobs}

    with ThreadPoolExecutor(max_workers=8) as executor:
        futures = {executor.submit(try_generate, *job): job for job in jobs}
        for future in as_completed(futures):
            job = futures[future]
            assert future.result() == expected[job], job


def test_interleaved_salts_do_not_leak():
    # Two different salts hashed at once must not see each other's E table.
    passwords = [b"password", b"tripcode"] * 20
    expected = {b"password": "ozOtJW9BFA", b"tripcode": "3GqYIJ3Obs"}

    with ThreadPoolExecutor(max_workers=4) as executor:
        results = list(executor.map(lambda p: try_generate(Format.FOURCHAN, p), passwords))

    assert results == [expected[p] for p in passwords]
