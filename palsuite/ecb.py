"""AES-128 in ECB mode, and detection of ECB by repeated cipher blocks."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from palsuite.aes import AES128, BLOCK_SIZE, KEY_SIZE
from palsuite.inputs import find_flag, read_input


def _key_bytes(key: bytes | str | None) -> bytes:
    if key is None:
        raise ValueError("Key needs to be exactly 16 characters.")
    raw = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if len(raw) != KEY_SIZE:
        raise ValueError("Key needs to be exactly 16 characters.")
    return raw


def aes128_ecb(data: bytes, key: bytes | str, encrypt: bool = True) -> bytes:
    """Encrypt or decrypt *data* block by block with AES-128 in ECB mode.

    Before encryption a short final block is filled with bytes whose value
    is the number of bytes added; input whose length is already a multiple
    of 16 gets no padding. Decryption requires whole blocks and leaves any
    padding in place.
    """
    raw_key = _key_bytes(key)
    data = bytes(data)
    if not encrypt and len(data) % BLOCK_SIZE:
        raise ValueError("Input data is not a multiple of 16 lengthwise.")

    padding = -len(data) % BLOCK_SIZE
    buffer = data + bytes([padding]) * padding

    cipher = AES128(raw_key)
    transform = cipher.encrypt_block if encrypt else cipher.decrypt_block
    return b"".join(
        transform(buffer[start:start + BLOCK_SIZE])
        for start in range(0, len(buffer), BLOCK_SIZE)
    )


def detect_aes128_ecb(data: bytes) -> bool:
    """True if any two 16-byte blocks of *data* are identical.

    Raises ValueError unless *data* is made of at least two whole blocks.
    """
    data = bytes(data)
    if len(data) % BLOCK_SIZE:
        raise ValueError("Input must be in 16-byte sized blocks.")
    blocks = [data[i:i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE)]
    if len(blocks) < 2:
        raise ValueError("Input must contain at least two blocks to analyze.")
    return len(set(blocks)) != len(blocks)


def _arguments(argv: Sequence[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def aes128_ecb_main(argv: Sequence[str] | None = None) -> int:
    """Encrypt standard input with the key argument, or decrypt it with -d."""
    args = _arguments(argv)
    if not args:
        print("Usage: aes128_ecb [-d] <key>", file=sys.stderr)
        return 1

    decrypt, positionals = find_flag(args, "d")
    key = os.fsencode(positionals[0]) if positionals else None
    data = read_input()
    try:
        result = aes128_ecb(data, key, not decrypt)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    out = sys.stdout.buffer
    out.write(result)
    out.flush()
    return 0


def detect_main(argv: Sequence[str] | None = None) -> int:
    """Report whether standard input looks like AES-128 ECB cipher text.

    With -s nothing is printed and the exit status is 0 for ECB, 1 otherwise.
    """
    silent, _ = find_flag(_arguments(argv), "s")
    data = read_input()
    try:
        is_ecb = detect_aes128_ecb(data)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    if silent:
        return 0 if is_ecb else 1

    out = sys.stdout.buffer
    out.write(data)
    out.write(f": is_aes128_ecb: {int(is_ecb)}\n".encode())
    out.flush()
    return 0