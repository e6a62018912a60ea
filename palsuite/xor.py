"""XOR of byte strings: against an equal-length pad, one byte, or a repeating key."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from itertools import cycle

from palsuite.encoding import from_hex
from palsuite.inputs import find_flag, read_file, read_input


def fixed_xor(data: bytes, key: bytes) -> bytes:
    """XOR *data* with *key* byte by byte; both must have the same length."""
    if not key:
        raise ValueError("Xor file provided is empty")
    if not data:
        raise ValueError("Data provided is empty")
    if len(key) != len(data):
        raise ValueError("Xor file data and message data must be the same length.")
    return bytes(a ^ b for a, b in zip(data, key))


def _as_key_byte(key_byte: int | bytes) -> int:
    if isinstance(key_byte, (bytes, bytearray)):
        if len(key_byte) != 1:
            raise ValueError("key must be a single byte")
        return key_byte[0]
    if not 0 <= key_byte <= 0xFF:
        raise ValueError("key must be a single byte")
    return key_byte


def single_xor(data: bytes, key_byte: int | bytes) -> bytes:
    """XOR every byte of *data* with the single byte *key_byte*."""
    value = _as_key_byte(key_byte)
    if not data:
        raise ValueError("Data provided is empty")
    return bytes(b ^ value for b in data)


def repeating_xor(data: bytes, key: bytes) -> bytes:
    """XOR *data* with *key* repeated as often as needed."""
    if not data:
        raise ValueError("Data provided is empty")
    if not key:
        raise ValueError("Key provided is empty")
    return bytes(b ^ k for b, k in zip(data, cycle(key)))


def _arguments(argv: Sequence[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def _emit(data: bytes) -> None:
    out = sys.stdout.buffer
    out.write(data)
    out.flush()


def _message_input(positionals: list[str]) -> bytes:
    """The message comes from the second argument, or standard input."""
    if len(positionals) > 1:
        return os.fsencode(positionals[1])
    return read_input()


def fxor_main(argv: Sequence[str] | None = None) -> int:
    """XOR a message with the contents of a file of the same length."""
    unhex, positionals = find_flag(_arguments(argv), "h")
    if not positionals:
        print("Usage: fxor [-h] <xor-file>", file=sys.stderr)
        return 1

    pad = read_file(positionals[0])
    data = _message_input(positionals)
    try:
        if unhex:
            data = from_hex(data)
            pad = from_hex(pad)
    except ValueError as exc:
        print(f"htoa: {exc}", file=sys.stderr)
        return 1

    try:
        result = fixed_xor(data, pad)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    _emit(result)
    return 0


def sxor_main(argv: Sequence[str] | None = None) -> int:
    """XOR a message with the first character of the key argument."""
    unhex, positionals = find_flag(_arguments(argv), "h")
    if not positionals:
        print("Usage: sxor [-h] <xor-char>", file=sys.stderr)
        return 1

    encoded = os.fsencode(positionals[0])
    key_byte = encoded[0] if encoded else 0
    data = _message_input(positionals)
    if unhex:
        try:
            data = from_hex(data)
        except ValueError as exc:
            print(f"htoa: {exc}", file=sys.stderr)
            return 1

    try:
        result = single_xor(data, key_byte)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    _emit(result)
    return 0


def rxor_main(argv: Sequence[str] | None = None) -> int:
    """XOR standard input with a repeating key given as an argument."""
    unhex, positionals = find_flag(_arguments(argv), "h")
    if not positionals:
        print("Usage: rxor [-h] <xor-string>", file=sys.stderr)
        return 1

    key = os.fsencode(positionals[0])
    data = read_input()
    if unhex:
        try:
            data = from_hex(data)
        except ValueError as exc:
            print(f"htoa: {exc}", file=sys.stderr)
            return 1

    try:
        result = repeating_xor(data, key)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    _emit(result)
    return 0