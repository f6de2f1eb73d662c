"""
Legacy DES crypt(3) primitive

This module implements the traditional Unix ``crypt(3)`` one-way function
that 4chan and 2channel build their 10-character tripcodes on.

Algorithm Overview:
1. Take up to 8 key bytes; each contributes its low 7 bits (parity bit
   position left empty), missing bytes are zero
2. Build the 16 round subkeys with PC-1, the rotation schedule and PC-2
3. Fold the two salt characters into the E bit-selection table: for every
   set bit j of salt character i, swap E[6i+j] and E[6i+j+24]
4. Encrypt an all-zero 64-bit block 25 times with the salted cipher

Everything is built per call from immutable tables, so the functions here
can be used from any number of threads at once.
"""

from typing import List, Sequence, Tuple

from tripcode.hash.alphabets import CRYPT, encode

CRYPT_ITERATIONS = 25

# Initial permutation
IP = (
    58, 50, 42, 34, 26, 18, 10, 2,
    60, 52, 44, 36, 28, 20, 12, 4,
    62, 54, 46, 38, 30, 22, 14, 6,
    64, 56, 48, 40, 32, 24, 16, 8,
    57, 49, 41, 33, 25, 17, 9, 1,
    59, 51, 43, 35, 27, 19, 11, 3,
    61, 53, 45, 37, 29, 21, 13, 5,
    63, 55, 47, 39, 31, 23, 15, 7,
)

# Final permutation, FP = IP^(-1)
FP = (
    40, 8, 48, 16, 56, 24, 64, 32,
    39, 7, 47, 15, 55, 23, 63, 31,
    38, 6, 46, 14, 54, 22, 62, 30,
    37, 5, 45, 13, 53, 21, 61, 29,
    36, 4, 44, 12, 52, 20, 60, 28,
    35, 3, 43, 11, 51, 19, 59, 27,
    34, 2, 42, 10, 50, 18, 58, 26,
    33, 1, 41, 9, 49, 17, 57, 25,
)

# Permuted-choice 1. Bits 8, 16, ... of the key are parity bits and skipped.
PC1_C = (
    57, 49, 41, 33, 25, 17, 9,
    1, 58, 50, 42, 34, 26, 18,
    10, 2, 59, 51, 43, 35, 27,
    19, 11, 3, 60, 52, 44, 36,
)
PC1_D = (
    63, 55, 47, 39, 31, 23, 15,
    7, 62, 54, 46, 38, 30, 22,
    14, 6, 61, 53, 45, 37, 29,
    21, 13, 5, 28, 20, 12, 4,
)

# Permuted-choice 2, indexing the concatenated CD register (1-based).
PC2 = (
    14, 17, 11, 24, 1, 5,
    3, 28, 15, 6, 21, 10,
    23, 19, 12, 4, 26, 8,
    16, 7, 27, 20, 13, 2,
    41, 52, 31, 37, 47, 55,
    30, 40, 51, 45, 33, 48,
    44, 49, 39, 56, 34, 53,
    46, 42, 50, 36, 29, 32,
)

KEY_SHIFTS = (1, 1, 2, 2, 2, 2, 2, 2, 1, 2, 2, 2, 2, 2, 2, 1)

# The E bit-selection table, before salting.
E = (
    32, 1, 2, 3, 4, 5,
    4, 5, 6, 7, 8, 9,
    8, 9, 10, 11, 12, 13,
    12, 13, 14, 15, 16, 17,
    16, 17, 18, 19, 20, 21,
    20, 21, 22, 23, 24, 25,
    24, 25, 26, 27, 28, 29,
    28, 29, 30, 31, 32, 1,
)

S_BOXES = (
    (
        14, 4, 13, 1, 2, 15, 11, 8, 3, 10, 6, 12, 5, 9, 0, 7,
        0, 15, 7, 4, 14, 2, 13, 1, 10, 6, 12, 11, 9, 5, 3, 8,
        4, 1, 14, 8, 13, 6, 2, 11, 15, 12, 9, 7, 3, 10, 5, 0,
        15, 12, 8, 2, 4, 9, 1, 7, 5, 11, 3, 14, 10, 0, 6, 13,
    ),
    (
        15, 1, 8, 14, 6, 11, 3, 4, 9, 7, 2, 13, 12, 0, 5, 10,
        3, 13, 4, 7, 15, 2, 8, 14, 12, 0, 1, 10, 6, 9, 11, 5,
        0, 14, 7, 11, 10, 4, 13, 1, 5, 8, 12, 6, 9, 3, 2, 15,
        13, 8, 10, 1, 3, 15, 4, 2, 11, 6, 7, 12, 0, 5, 14, 9,
    ),
    (
        10, 0, 9, 14, 6, 3, 15, 5, 1, 13, 12, 7, 11, 4, 2, 8,
        13, 7, 0, 9, 3, 4, 6, 10, 2, 8, 5, 14, 12, 11, 15, 1,
        13, 6, 4, 9, 8, 15, 3, 0, 11, 1, 2, 12, 5, 10, 14, 7,
        1, 10, 13, 0, 6, 9, 8, 7, 4, 15, 14, 3, 11, 5, 2, 12,
    ),
    (
        7, 13, 14, 3, 0, 6, 9, 10, 1, 2, 8, 5, 11, 12, 4, 15,
        13, 8, 11, 5, 6, 15, 0, 3, 4, 7, 2, 12, 1, 10, 14, 9,
        10, 6, 9, 0, 12, 11, 7, 13, 15, 1, 3, 14, 5, 2, 8, 4,
        3, 15, 0, 6, 10, 1, 13, 8, 9, 4, 5, 11, 12, 7, 2, 14,
    ),
    (
        2, 12, 4, 1, 7, 10, 11, 6, 8, 5, 3, 15, 13, 0, 14, 9,
        14, 11, 2, 12, 4, 7, 13, 1, 5, 0, 15, 10, 3, 9, 8, 6,
        4, 2, 1, 11, 10, 13, 7, 8, 15, 9, 12, 5, 6, 3, 0, 14,
        11, 8, 12, 7, 1, 14, 2, 13, 6, 15, 0, 9, 10, 4, 5, 3,
    ),
    (
        12, 1, 10, 15, 9, 2, 6, 8, 0, 13, 3, 4, 14, 7, 5, 11,
        10, 15, 4, 2, 7, 12, 9, 5, 6, 1, 13, 14, 0, 11, 3, 8,
        9, 14, 15, 5, 2, 8, 12, 3, 7, 0, 4, 10, 1, 13, 11, 6,
        4, 3, 2, 12, 9, 5, 15, 10, 11, 14, 1, 7, 6, 0, 8, 13,
    ),
    (
        4, 11, 2, 14, 15, 0, 8, 13, 3, 12, 9, 7, 5, 10, 6, 1,
        13, 0, 11, 7, 4, 9, 1, 10, 14, 3, 5, 12, 2, 15, 8, 6,
        1, 4, 11, 13, 12, 3, 7, 14, 10, 15, 6, 8, 0, 5, 9, 2,
        6, 11, 13, 8, 1, 4, 10, 7, 9, 5, 0, 15, 14, 2, 3, 12,
    ),
    (
        13, 2, 8, 4, 6, 15, 11, 1, 10, 9, 3, 14, 5, 0, 12, 7,
        1, 15, 13, 8, 10, 3, 7, 4, 12, 5, 6, 11, 0, 14, 9, 2,
        7, 11, 4, 1, 9, 12, 14, 2, 0, 6, 10, 13, 15, 3, 5, 8,
        2, 1, 14, 7, 4, 10, 8, 13, 15, 12, 9, 0, 3, 5, 6, 11,
    ),
)

# P permutes the S-box output into f(R, K).
P = (
    16, 7, 20, 21,
    29, 12, 28, 17,
    1, 15, 23, 26,
    5, 18, 31, 10,
    2, 8, 24, 14,
    32, 27, 3, 9,
    19, 13, 30, 6,
    22, 11, 4, 25,
)


def key_to_bits(key: bytes) -> List[int]:
    """
    Spread up to 8 key bytes into the 64-bit DES key register.

    Only the low 7 bits of each byte are used; the eighth (parity) position
    of every byte is zero. Short keys are zero-padded.
    """
    bits = []
    for byte in key[:8]:
        for j in range(7):
            bits.append((byte >> (6 - j)) & 1)
        bits.append(0)
    bits += [0] * (64 - len(bits))
    return bits


def key_schedule(key_bits: Sequence[int]) -> List[List[int]]:
    """Derive the 16 48-bit round subkeys from a 64-bit key register."""
    c = [key_bits[i - 1] for i in PC1_C]
    d = [key_bits[i - 1] for i in PC1_D]

    schedule = []
    for shift in KEY_SHIFTS:
        c = c[shift:] + c[:shift]
        d = d[shift:] + d[:shift]
        cd = c + d
        schedule.append([cd[i - 1] for i in PC2])
    return schedule


def salted_expansion(salt_values: Tuple[int, int]) -> List[int]:
    """
    Return the E bit-selection table perturbed by two 6-bit salt values.

    This is the step that distinguishes crypt(3) from plain DES.
    """
    expansion = list(E)
    for i, value in enumerate(salt_values):
        for j in range(6):
            if (value >> j) & 1:
                a, b = 6 * i + j, 6 * i + j + 24
                expansion[a], expansion[b] = expansion[b], expansion[a]
    return expansion


def encrypt_block(
    block: Sequence[int],
    schedule: Sequence[Sequence[int]],
    expansion: Sequence[int],
) -> List[int]:
    """Run one 16-round DES encryption over a 64-bit block."""
    left = [block[i - 1] for i in IP[:32]]
    right = [block[i - 1] for i in IP[32:]]

    for subkey in schedule:
        # Expand right to 48 bits and mix in the round key.
        pre_s = [right[e - 1] ^ k for e, k in zip(expansion, subkey)]

        f = []
        for j in range(8):
            b = pre_s[6 * j : 6 * j + 6]
            row = (b[0] << 1) | b[5]
            column = (b[1] << 3) | (b[2] << 2) | (b[3] << 1) | b[4]
            s = S_BOXES[j][row * 16 + column]
            f.extend(((s >> 3) & 1, (s >> 2) & 1, (s >> 1) & 1, s & 1))

        left, right = right, [l ^ f[p - 1] for l, p in zip(left, P)]

    # The output halves are swapped before the final permutation.
    pre_output = right + left
    return [pre_output[i - 1] for i in FP]


def bits_to_bytes(bits: Sequence[int]) -> bytes:
    out = bytearray()
    for i in range(0, len(bits), 8):
        value = 0
        for bit in bits[i : i + 8]:
            value = (value << 1) | bit
        out.append(value)
    return bytes(out)


def salt_to_values(salt: bytes) -> Tuple[int, int]:
    """
    Map two crypt-alphabet salt characters to their 6-bit values.

    Characters outside the alphabet count as ``.`` (value 0); callers that
    need board-specific substitution clamp the salt first.
    """
    padded = (bytes(salt) + b"..")[:2]
    return tuple(CRYPT.index_of(byte, default=0) for byte in padded)


def des_crypt_core(key: bytes, salt: bytes) -> bytes:
    """
    Encrypt the zero block 25 times under ``key`` with ``salt``.

    Args:
        key: Key material; truncated or zero-padded to 8 bytes
        salt: Two crypt-alphabet characters

    Returns:
        8-byte ciphertext
    """
    schedule = key_schedule(key_to_bits(bytes(key)))
    expansion = salted_expansion(salt_to_values(salt))

    block = [0] * 64
    for _ in range(CRYPT_ITERATIONS):
        block = encrypt_block(block, schedule, expansion)
    return bits_to_bytes(block)


def crypt(password: bytes, salt: bytes) -> str:
    """
    Traditional 13-character crypt(3) string: the salt followed by the
    11-character encoding of the 64-bit result (padded to 66 bits).
    """
    salt = (bytes(salt) + b"..")[:2]
    digest = des_crypt_core(password, salt)
    return salt.decode("ascii", errors="replace") + encode(digest, CRYPT, 11)
