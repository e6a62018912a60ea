"""Conversions between raw bytes, hexadecimal text and base64."""

from __future__ import annotations

import base64
import os
import sys
from collections.abc import Sequence

from palsuite.inputs import iter_lines, read_input

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


def to_base64(data: bytes) -> str:
    """Encode *data* as padded base64 text."""
    if not data:
        raise ValueError("Received empty string")
    return base64.b64encode(bytes(data)).decode("ascii")


def to_hex(data: bytes) -> str:
    """Encode *data* as lower-case hexadecimal text, two digits per byte."""
    if not data:
        raise ValueError("Received empty string")
    return bytes(data).hex()


def from_hex(text: str | bytes) -> bytes:
    """Decode hexadecimal *text* into bytes.

    Raises ValueError for empty input, an odd number of digits or any
    character that is not a hexadecimal digit.
    """
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    if not raw:
        raise ValueError("Received empty string")
    if len(raw) % 2:
        raise ValueError("Hex string has an odd length")
    if not _HEX_DIGITS.issuperset(raw):
        raise ValueError("Invalid hex string")
    return bytes.fromhex(raw.decode("ascii"))


def _arguments(argv: Sequence[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def _single_argument_or_stdin(args: list[str]) -> bytes:
    if len(args) == 1:
        return os.fsencode(args[0])
    return read_input()


def atob64_main(argv: Sequence[str] | None = None) -> int:
    """Print the base64 form of the argument, or of standard input."""
    data = _single_argument_or_stdin(_arguments(argv))
    try:
        encoded = to_base64(data)
    except ValueError as exc:
        print(f"atob64: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(encoded)
    sys.stdout.flush()
    return 0


def atoh_main(argv: Sequence[str] | None = None) -> int:
    """Print the hexadecimal form of the argument, or of standard input."""
    data = _single_argument_or_stdin(_arguments(argv))
    try:
        encoded = to_hex(data)
    except ValueError as exc:
        print(f"atoh: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(encoded)
    sys.stdout.flush()
    return 0


def htoa_main(argv: Sequence[str] | None = None) -> int:
    """Decode each hexadecimal line of standard input and write the bytes."""
    _arguments(argv)
    data = read_input()
    if not data:
        print("Failed to read input", file=sys.stderr)
        return 1

    out = sys.stdout.buffer
    for line in iter_lines(data):
        if not line:
            out.flush()
            print("Failed to read input", file=sys.stderr)
            return 1
        try:
            decoded = from_hex(line)
        except ValueError as exc:
            out.flush()
            print(f"htoa: {exc}", file=sys.stderr)
            return 1
        out.write(decoded)
    out.flush()
    return 0