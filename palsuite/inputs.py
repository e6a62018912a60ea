"""Helpers that gather command input: files, standard input, lines and flags."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator, Sequence
from typing import IO, Union

PathLike = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


def _strip_newline(data: bytes) -> bytes:
    """Drop a single trailing line feed, if there is one."""
    return data[:-1] if data.endswith(b"\n") else data


def read_file(path: PathLike) -> bytes:
    """Return the bytes of *path* without one trailing newline.

    A file that cannot be opened reads as empty, so callers see it as
    missing data rather than as a crash.
    """
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        return b""
    return _strip_newline(data)


def read_input(stream: IO | None = None) -> bytes:
    """Read everything from *stream* (standard input by default) as bytes.

    One trailing newline is removed. Text streams are read through their
    underlying binary buffer where they have one.
    """
    if stream is None:
        stream = sys.stdin
    source = getattr(stream, "buffer", stream)
    data = source.read()
    if isinstance(data, str):
        data = data.encode()
    return _strip_newline(bytes(data))


def _separator_byte(separator: int | bytes) -> bytes:
    if isinstance(separator, int):
        if not 0 <= separator <= 0xFF:
            raise ValueError("separator must be a single byte")
        return bytes([separator])
    if len(separator) != 1:
        raise ValueError("separator must be a single byte")
    return bytes(separator)


def iter_lines(data: bytes, separator: int | bytes = b"\n") -> Iterator[bytes]:
    """Yield the pieces of *data* between occurrences of *separator*.

    Empty data yields nothing; empty pieces between two separators are
    yielded as empty bytes so callers can reject them.
    """
    sep = _separator_byte(separator)
    if not data:
        return
    yield from data.split(sep)


def find_flag(argv: Sequence[str], flag: str) -> tuple[bool, list[str]]:
    """Look for the single-letter option ``-flag`` in *argv*.

    Returns whether the flag was given and the remaining positional
    arguments. Option clusters such as ``-sh`` are understood, ``--`` ends
    option parsing and unknown option letters are reported and ignored.
    """
    if len(flag) != 1 or flag in "-:":
        raise ValueError(f"invalid flag letter: {flag!r}")

    found = False
    positionals: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            positionals.extend(args)
            break
        if len(arg) > 1 and arg.startswith("-"):
            for letter in arg[1:]:
                if letter == flag:
                    found = True
                else:
                    print(f"invalid option -- '{letter}'", file=sys.stderr)
            continue
        positionals.append(arg)
    return found, positionals