import io

import pytest

from palsuite.ecb import aes128_ecb, aes128_ecb_main, detect_aes128_ecb, detect_main

NIST_KEY = bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c")
NIST_PLAIN = bytes.fromhex(
    "6bc1bee22e409f96e93d7e117393172a"
    "ae2d8a571e03ac9c9eb76fac45af8e51"
    "30c81c46a35ce411e5fbc1191a0a52ef"
    "f69f2445df4f9b17ad2b417be66c3710"
)
NIST_CIPHER = bytes.fromhex(
    "3ad77bb40d7a3660a89ecaf32466ef97"
    "f5d3d58503b9699de785895a96fdbaaf"
    "43b1cd7f598ece23881b00e3ed030688"
    "7b0c785e27e8ad3f8223207104725dd4"
)

SIXTEEN_CHARS = "0123456789abcdef"


def _stdin(monkeypatch, data: bytes) -> None:
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data)))


def test_encrypt_matches_nist_vector():
    assert aes128_ecb(NIST_PLAIN, NIST_KEY, True) == NIST_CIPHER


def test_decrypt_matches_nist_vector():
    assert aes128_ecb(NIST_CIPHER, NIST_KEY, False) == NIST_PLAIN


def test_round_trip_with_text_key():
    data = bytes(range(48))
    encrypted = aes128_ecb(data, SIXTEEN_CHARS, True)
    assert len(encrypted) == len(data)
    assert aes128_ecb(encrypted, SIXTEEN_CHARS, False) == data


def test_short_input_is_padded_with_its_padding_length():
    data = b"hello"
    encrypted = aes128_ecb(data, NIST_KEY, True)
    assert len(encrypted) == 16
    decrypted = aes128_ecb(encrypted, NIST_KEY, False)
    assert decrypted.startswith(data)
    padding = decrypted[len(data):]
    assert set(padding) == {len(padding)}


def test_equal_plain_blocks_give_equal_cipher_blocks():
    encrypted = aes128_ecb(NIST_PLAIN[:16] * 2, NIST_KEY, True)
    assert encrypted[:16] == encrypted[16:] == NIST_CIPHER[:16]


def test_empty_input_gives_empty_output():
    assert aes128_ecb(b"", NIST_KEY, True) == b""


@pytest.mark.parametrize("key", [b"short", b"x" * 17, "", None])
def test_bad_key_length_is_rejected(key):
    with pytest.raises(ValueError, match="exactly 16"):
        aes128_ecb(b"data", key, True)


def test_decrypt_requires_whole_blocks():
    with pytest.raises(ValueError, match="multiple of 16"):
        aes128_ecb(b"x" * 17, NIST_KEY, False)


def test_detect_repeated_block():
    assert detect_aes128_ecb(NIST_CIPHER + NIST_CIPHER[:16]) is True


def test_detect_distinct_blocks():
    assert detect_aes128_ecb(NIST_CIPHER) is False


def test_detect_recognises_ecb_output_of_repetitive_plaintext():
    encrypted = aes128_ecb(b"A" * 64, NIST_KEY, True)
    assert detect_aes128_ecb(encrypted) is True


def test_detect_rejects_partial_blocks():
    with pytest.raises(ValueError, match="16-byte"):
        detect_aes128_ecb(b"x" * 20)


def test_detect_rejects_single_block():
    with pytest.raises(ValueError, match="two blocks"):
        detect_aes128_ecb(b"x" * 16)


def test_main_encrypt_then_decrypt(monkeypatch, capsysbinary):
    data = bytes(range(65, 97))
    _stdin(monkeypatch, data)
    assert aes128_ecb_main([SIXTEEN_CHARS]) == 0
    encrypted = capsysbinary.readouterr().out
    assert encrypted == aes128_ecb(data, SIXTEEN_CHARS, True)

    _stdin(monkeypatch, encrypted)
    assert aes128_ecb_main(["-d", SIXTEEN_CHARS]) == 0
    assert capsysbinary.readouterr().out == data


def test_main_without_arguments_prints_usage(capsys):
    assert aes128_ecb_main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_rejects_bad_key(monkeypatch, capsys):
    _stdin(monkeypatch, b"data")
    assert aes128_ecb_main(["short"]) == 1
    assert "exactly 16" in capsys.readouterr().err


def test_main_flag_without_key_fails(monkeypatch, capsys):
    _stdin(monkeypatch, b"data")
    assert aes128_ecb_main(["-d"]) == 1
    assert "exactly 16" in capsys.readouterr().err


def test_detect_main_reports_result(monkeypatch, capsysbinary):
    data = b"A" * 32
    _stdin(monkeypatch, data)
    assert detect_main([]) == 0
    assert capsysbinary.readouterr().out == data + b": is_aes128_ecb: 1\n"


def test_detect_main_reports_negative(monkeypatch, capsysbinary):
    data = b"A" * 16 + b"B" * 16
    _stdin(monkeypatch, data)
    assert detect_main([]) == 0
    assert capsysbinary.readouterr().out == data + b": is_aes128_ecb: 0\n"


@pytest.mark.parametrize(
    ("data", "status"),
    [(b"A" * 32, 0), (b"A" * 16 + b"B" * 16, 1)],
)
def test_detect_main_silent_exit_status(monkeypatch, capsysbinary, data, status):
    _stdin(monkeypatch, data)
    assert detect_main(["-s"]) == status
    assert capsysbinary.readouterr().out == b""


def test_detect_main_error(monkeypatch, capsys):
    _stdin(monkeypatch, b"x" * 10)
    assert detect_main([]) == 1
    assert "16-byte" in capsys.readouterr().err