"""Recovering keys of single-byte and repeating-key XOR ciphers."""

from __future__ import annotations

import math
import sys
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from palsuite.inputs import find_flag, read_input
from palsuite.xor import repeating_xor, single_xor

# Frequency in percent of each printable character (0x20 to 0x7E) in English.
ENGLISH_FREQUENCIES = (
    17.1662, 0.0072, 0.2442, 0.0179, 0.0561, 0.0160, 0.0226, 0.2447, 0.2178,
    0.2233, 0.0628, 0.0215, 0.7384, 1.3734, 1.5124, 0.1549, 0.5516, 0.4594,
    0.3322, 0.1847, 0.1348, 0.1663, 0.1153, 0.1030, 0.1054, 0.1024, 0.4354,
    0.1214, 0.1225, 0.0227, 0.1242, 0.1474, 0.0073, 0.3132, 0.2163, 0.3906,
    0.3151, 0.2673, 0.1416, 0.1876, 0.2321, 0.3211, 0.1726, 0.0687, 0.1884,
    0.3529, 0.2085, 0.1842, 0.2614, 0.0316, 0.2519, 0.4003, 0.3322, 0.0814,
    0.0892, 0.2527, 0.0343, 0.0304, 0.0076, 0.0086, 0.0016, 0.0088, 0.0003,
    0.1159, 0.0009, 5.1880, 1.0195, 2.1129, 2.5071, 8.5771, 1.3725, 1.5597,
    2.7444, 4.9019, 0.0867, 0.6753, 3.1750, 1.6437, 4.9701, 5.7701, 1.5482,
    0.0747, 4.2586, 4.3686, 6.3700, 2.0999, 0.8462, 1.3034, 0.1950, 1.1330,
    0.0596, 0.0026, 0.0007, 0.0026, 0.0003,
)

MIN_KEYSIZE = 2
MAX_KEYSIZE = 40

_FIRST_PRINTABLE = 0x20
_LAST_PRINTABLE = 0x7E
_WHITESPACE = frozenset(b"\n\r\t")


@dataclass(frozen=True)
class SingleXorCandidate:
    """One key tried against a single-byte XOR cipher and how English it reads."""

    key: int
    distance: float
    plaintext: bytes


def _is_printable_byte(value: int) -> bool:
    return _FIRST_PRINTABLE <= value <= _LAST_PRINTABLE


def is_printable(data: bytes) -> bool:
    """True if every byte is printable ASCII, a tab, a newline or a carriage return."""
    return all(_is_printable_byte(b) or b in _WHITESPACE for b in data)


def _lower(value: int) -> int:
    return value + 0x20 if 0x41 <= value <= 0x5A else value


def english_score(data: bytes) -> float:
    """Bhattacharyya distance of *data* from English character frequencies.

    Smaller is more English. Character counts are taken case-insensitively
    but looked up by the byte as it stands, so upper-case letters add
    nothing; text with no scoring characters is infinitely far.
    """
    counts = Counter(_lower(b) for b in data if b not in _WHITESPACE)
    total = len(data)
    coefficient = sum(
        math.sqrt(
            counts[b] / total * ENGLISH_FREQUENCIES[b - _FIRST_PRINTABLE] / 100.0
        )
        for b in data
        if _is_printable_byte(b)
    )
    if coefficient <= 0:
        return math.inf
    return -math.log(coefficient)


def rank_single_xor(cipher: bytes) -> list[SingleXorCandidate]:
    """Try every key byte and return the printable results, best first."""
    if not cipher:
        raise ValueError("Received empty data.")
    candidates = []
    for key in range(256):
        plaintext = single_xor(cipher, key)
        if is_printable(plaintext):
            candidates.append(
                SingleXorCandidate(key, english_score(plaintext), plaintext)
            )
    candidates.sort(key=lambda candidate: candidate.distance)
    return candidates


def crack_single_xor(cipher: bytes) -> SingleXorCandidate:
    """Return the most English-looking decryption of *cipher*."""
    candidates = rank_single_xor(cipher)
    if not candidates:
        raise ValueError("No matching sxor key found.")
    return candidates[0]


def bitcount(byte: int) -> int:
    """Number of set bits in a single byte."""
    if not 0 <= byte <= 0xFF:
        raise ValueError("bitcount takes a single byte")
    return bin(byte).count("1")


def hamming_distance(a: bytes, b: bytes) -> int:
    """Number of differing bits between two byte strings of equal length."""
    if len(a) != len(b):
        raise ValueError("Hamming distance needs inputs of equal length")
    return sum(bitcount(x ^ y) for x, y in zip(a, b))


def find_keysize(cipher: bytes) -> int:
    """Guess the key length of a repeating-key XOR cipher.

    Each size from MIN_KEYSIZE to MAX_KEYSIZE is scored by the mean Hamming
    distance between neighbouring blocks, normalised by the size; the
    smallest score wins.
    """
    best: tuple[float, int] | None = None
    for size in range(MIN_KEYSIZE, MAX_KEYSIZE + 1):
        distances = [
            hamming_distance(
                cipher[start:start + size], cipher[start + size:start + 2 * size]
            )
            for start in range(0, len(cipher) - 2 * size, size)
        ]
        if not distances:
            continue
        normalised = sum(distances) / len(distances) / size
        if best is None or normalised < best[0]:
            best = (normalised, size)
    if best is None:
        raise ValueError("Input is too short to estimate a key size")
    return best[1]


def transpose_blocks(data: bytes, keysize: int) -> list[bytes]:
    """Split *data* into *keysize* columns: column i holds every byte at i mod keysize."""
    if keysize < 1:
        raise ValueError("keysize must be positive")
    return [bytes(data[offset::keysize]) for offset in range(keysize)]


def crack_repeating_xor(cipher: bytes) -> tuple[bytes, bytes]:
    """Recover the key of a repeating-key XOR cipher; return (key, plaintext)."""
    keysize = find_keysize(cipher)
    key_bytes = []
    for column in transpose_blocks(cipher, keysize):
        try:
            key_bytes.append(crack_single_xor(column).key)
        except ValueError as exc:
            raise ValueError("Failed to crack sxor step.") from exc
    key = bytes(key_bytes)
    return key, repeating_xor(cipher, key)


def _arguments(argv: Sequence[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def sxor_crack_main(argv: Sequence[str] | None = None) -> int:
    """Crack single-byte XOR on standard input; -s hides the candidate list."""
    silent, _ = find_flag(_arguments(argv), "s")
    data = read_input()
    try:
        candidates = rank_single_xor(data)
    except ValueError as exc:
        print(f"crack_sxor: {exc}", file=sys.stderr)
        return 1
    if not candidates:
        return 1

    out = sys.stdout.buffer
    if not silent:
        for candidate in candidates:
            out.write(
                b"key: " + bytes([candidate.key])
                + f", distance: {candidate.distance:+f}, out: ".encode()
                + candidate.plaintext + b"\n"
            )
    best = candidates[0]
    out.write(b"key: " + bytes([best.key]) + b", deciphered: " + best.plaintext + b"\n")
    out.flush()
    return 0


def rxor_crack_main(argv: Sequence[str] | None = None) -> int:
    """Crack repeating-key XOR on standard input; -s prints only the plaintext."""
    silent, _ = find_flag(_arguments(argv), "s")
    data = read_input()
    try:
        key, plaintext = crack_repeating_xor(data)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    out = sys.stdout.buffer
    if not silent:
        out.write(f"Determined keysize >>{len(key)}<<\n".encode())
        out.write(b"Cracked cipher key: >>" + key + b"<<\n")
        out.write(b"==Decrypted data =======\n")
    out.write(plaintext)
    if not silent:
        out.write(b"==END=================\n")
    out.flush()
    return 0