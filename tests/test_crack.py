import io
import math
import sys

import pytest

from palsuite.crack import (
    MAX_KEYSIZE,
    MIN_KEYSIZE,
    SingleXorCandidate,
    bitcount,
    crack_repeating_xor,
    crack_single_xor,
    english_score,
    find_keysize,
    hamming_distance,
    is_printable,
    rank_single_xor,
    rxor_crack_main,
    sxor_crack_main,
    transpose_blocks,
)
from palsuite.xor import repeating_xor, single_xor

SENTENCE = (
    b"the quick brown fox jumps over the lazy dog and then keeps running "
    b"through the quiet forest until the evening light falls on the hills"
)

PARAGRAPH = (
    b"it was a bright cold day in april and the clocks were striking the "
    b"hour as the people of the town went about their business in the "
    b"market square. there were merchants selling bread and fruit, children "
    b"playing near the fountain and old men sitting on the benches talking "
    b"about the weather and the news of the day. the sun was high in the sky "
    b"and the air was filled with the smell of fresh flowers from the "
    b"gardens that lined the streets. nobody in the square noticed the "
    b"stranger who walked slowly along the eastern side, carrying a small "
    b"leather case under his arm and looking at each shop window in turn as "
    b"if he were searching for something that he had lost a long time ago. "
    b"when the bells rang again he stopped, turned around and went back the "
    b"way he had come, leaving only the echo of his steps on the stones."
)


def _feed_stdin(monkeypatch, data: bytes) -> None:
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"hello world", True),
        (b"tab\tnew\nline\r", True),
        (b"", True),
        (b"\x00", False),
        (b"del\x7f", False),
        (b"high\x80", False),
    ],
)
def test_is_printable(data, expected):
    assert is_printable(data) is expected


def test_english_score_prefers_english():
    assert english_score(b"the cat sat on the mat") < english_score(b"qzxj qzxj qzxj")


def test_english_score_empty_is_infinite():
    assert english_score(b"") == math.inf


def test_english_score_uppercase_adds_nothing():
    assert english_score(b"ABCDEF") == math.inf


def test_rank_single_xor_invariants():
    cipher = single_xor(SENTENCE, 0x5A)
    candidates = rank_single_xor(cipher)
    distances = [c.distance for c in candidates]
    assert distances == sorted(distances)
    for candidate in candidates:
        assert is_printable(candidate.plaintext)
        assert single_xor(cipher, candidate.key) == candidate.plaintext
    assert len({c.key for c in candidates}) == len(candidates)


def test_rank_single_xor_empty():
    with pytest.raises(ValueError):
        rank_single_xor(b"")


def test_crack_single_xor_recovers_key():
    cipher = single_xor(SENTENCE, 0x5A)
    best = crack_single_xor(cipher)
    assert isinstance(best, SingleXorCandidate)
    assert best.key == 0x5A
    assert best.plaintext == SENTENCE


def test_crack_single_xor_no_printable_result():
    with pytest.raises(ValueError):
        crack_single_xor(b"\x00\x80")


@pytest.mark.parametrize("byte, expected", [(0, 0), (0xFF, 8), (0x80, 1)])
def test_bitcount(byte, expected):
    assert bitcount(byte) == expected


def test_bitcount_out_of_range():
    with pytest.raises(ValueError):
        bitcount(256)


def test_hamming_distance_known_value():
    assert hamming_distance(b"this is a test", b"wokka wokka!!!") == 37


def test_hamming_distance_properties():
    a = b"first text"
    b = b"other text"
    assert hamming_distance(a, a) == 0
    assert hamming_distance(a, b) == hamming_distance(b, a)


def test_hamming_distance_length_mismatch():
    with pytest.raises(ValueError):
        hamming_distance(b"ab", b"abc")


def test_find_keysize_within_bounds():
    size = find_keysize(repeating_xor(PARAGRAPH, b"secret"))
    assert MIN_KEYSIZE <= size <= MAX_KEYSIZE


def test_find_keysize_too_short():
    with pytest.raises(ValueError):
        find_keysize(b"abcd")


def test_transpose_blocks_columns():
    assert transpose_blocks(b"abcdefg", 3) == [b"adg", b"be", b"cf"]


def test_transpose_blocks_preserves_bytes():
    columns = transpose_blocks(PARAGRAPH, 7)
    assert len(columns) == 7
    assert sum(len(c) for c in columns) == len(PARAGRAPH)
    assert sorted(b"".join(columns)) == sorted(PARAGRAPH)


def test_transpose_blocks_bad_size():
    with pytest.raises(ValueError):
        transpose_blocks(b"abc", 0)


def test_crack_repeating_xor_recovers_plaintext():
    cipher = repeating_xor(PARAGRAPH, b"secret")
    key, plaintext = crack_repeating_xor(cipher)
    assert plaintext == PARAGRAPH
    assert repeating_xor(cipher, key) == plaintext


def test_crack_repeating_xor_empty():
    with pytest.raises(ValueError):
        crack_repeating_xor(b"")


def test_sxor_crack_main_silent(capsysbinary, monkeypatch):
    _feed_stdin(monkeypatch, single_xor(SENTENCE, 0x5A))
    assert sxor_crack_main(["-s"]) == 0
    out = capsysbinary.readouterr().out
    assert out == b"key: " + bytes([0x5A]) + b", deciphered: " + SENTENCE + b"\n"


def test_sxor_crack_main_empty_input(monkeypatch):
    _feed_stdin(monkeypatch, b"")
    assert sxor_crack_main(["-s"]) == 1


def test_rxor_crack_main_silent(capsysbinary, monkeypatch):
    _feed_stdin(monkeypatch, repeating_xor(PARAGRAPH, b"secret"))
    assert rxor_crack_main(["-s"]) == 0
    assert capsysbinary.readouterr().out == PARAGRAPH


def test_rxor_crack_main_verbose(capsysbinary, monkeypatch):
    _feed_stdin(monkeypatch, repeating_xor(PARAGRAPH, b"secret"))
    assert rxor_crack_main([]) == 0
    out = capsysbinary.readouterr().out
    assert out.startswith(b"Determined keysize >>")
    assert b"==Decrypted data =======\n" + PARAGRAPH + b"==END=================\n" in out


def test_rxor_crack_main_too_short(monkeypatch):
    _feed_stdin(monkeypatch, b"abc")
    assert rxor_crack_main(["-s"]) == 1