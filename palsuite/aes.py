"""The AES-128 block cipher, with single-block use and CBC mode over buffers."""

from __future__ import annotations

from itertools import cycle

BLOCK_SIZE = 16
KEY_SIZE = 16
ROUNDS = 10

SBOX = bytes((
    0x63, 0x7C, 0x77, 0x7B, 0xF2, 0x6B, 0x6F, 0xC5, 0x30, 0x01, 0x67, 0x2B, 0xFE, 0xD7, 0xAB, 0x76,
    0xCA, 0x82, 0xC9, 0x7D, 0xFA, 0x59, 0x47, 0xF0, 0xAD, 0xD4, 0xA2, 0xAF, 0x9C, 0xA4, 0x72, 0xC0,
    0xB7, 0xFD, 0x93, 0x26, 0x36, 0x3F, 0xF7, 0xCC, 0x34, 0xA5, 0xE5, 0xF1, 0x71, 0xD8, 0x31, 0x15,
    0x04, 0xC7, 0x23, 0xC3, 0x18, 0x96, 0x05, 0x9A, 0x07, 0x12, 0x80, 0xE2, 0xEB, 0x27, 0xB2, 0x75,
    0x09, 0x83, 0x2C, 0x1A, 0x1B, 0x6E, 0x5A, 0xA0, 0x52, 0x3B, 0xD6, 0xB3, 0x29, 0xE3, 0x2F, 0x84,
    0x53, 0xD1, 0x00, 0xED, 0x20, 0xFC, 0xB1, 0x5B, 0x6A, 0xCB, 0xBE, 0x39, 0x4A, 0x4C, 0x58, 0xCF,
    0xD0, 0xEF, 0xAA, 0xFB, 0x43, 0x4D, 0x33, 0x85, 0x45, 0xF9, 0x02, 0x7F, 0x50, 0x3C, 0x9F, 0xA8,
    0x51, 0xA3, 0x40, 0x8F, 0x92, 0x9D, 0x38, 0xF5, 0xBC, 0xB6, 0xDA, 0x21, 0x10, 0xFF, 0xF3, 0xD2,
    0xCD, 0x0C, 0x13, 0xEC, 0x5F, 0x97, 0x44, 0x17, 0xC4, 0xA7, 0x7E, 0x3D, 0x64, 0x5D, 0x19, 0x73,
    0x60, 0x81, 0x4F, 0xDC, 0x22, 0x2A, 0x90, 0x88, 0x46, 0xEE, 0xB8, 0x14, 0xDE, 0x5E, 0x0B, 0xDB,
    0xE0, 0x32, 0x3A, 0x0A, 0x49, 0x06, 0x24, 0x5C, 0xC2, 0xD3, 0xAC, 0x62, 0x91, 0x95, 0xE4, 0x79,
    0xE7, 0xC8, 0x37, 0x6D, 0x8D, 0xD5, 0x4E, 0xA9, 0x6C, 0x56, 0xF4, 0xEA, 0x65, 0x7A, 0xAE, 0x08,
    0xBA, 0x78, 0x25, 0x2E, 0x1C, 0xA6, 0xB4, 0xC6, 0xE8, 0xDD, 0x74, 0x1F, 0x4B, 0xBD, 0x8B, 0x8A,
    0x70, 0x3E, 0xB5, 0x66, 0x48, 0x03, 0xF6, 0x0E, 0x61, 0x35, 0x57, 0xB9, 0x86, 0xC1, 0x1D, 0x9E,
    0xE1, 0xF8, 0x98, 0x11, 0x69, 0xD9, 0x8E, 0x94, 0x9B, 0x1E, 0x87, 0xE9, 0xCE, 0x55, 0x28, 0xDF,
    0x8C, 0xA1, 0x89, 0x0D, 0xBF, 0xE6, 0x42, 0x68, 0x41, 0x99, 0x2D, 0x0F, 0xB0, 0x54, 0xBB, 0x16,
))

_INV_SBOX = bytes(SBOX.index(value) for value in range(256))


def _xtime(value: int) -> int:
    """Multiply by x (that is, 2) in GF(2^8)."""
    return ((value << 1) ^ (0x1B if value & 0x80 else 0)) & 0xFF


def _multiply(x: int, y: int) -> int:
    """Multiply two elements of GF(2^8)."""
    result = 0
    while y:
        if y & 1:
            result ^= x
        x = _xtime(x)
        y >>= 1
    return result


def _round_constants() -> tuple[int, ...]:
    constants = [0x8D, 0x01]
    while len(constants) <= ROUNDS:
        constants.append(_xtime(constants[-1]))
    return tuple(constants)


_RCON = _round_constants()
_MUL = {factor: bytes(_multiply(v, factor) for v in range(256)) for factor in (9, 11, 13, 14)}


def _check_length(name: str, value: bytes, size: int) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be exactly {size} bytes, got {len(value)}")
    return value


def expand_key(key: bytes) -> bytes:
    """Expand a 16-byte key into the 176 bytes of the eleven round keys."""
    key = _check_length("key", key, KEY_SIZE)
    words = [list(key[i:i + 4]) for i in range(0, KEY_SIZE, 4)]
    for i in range(len(words), 4 * (ROUNDS + 1)):
        temp = list(words[-1])
        if i % 4 == 0:
            temp = [SBOX[b] for b in temp[1:] + temp[:1]]
            temp[0] ^= _RCON[i // 4]
        words.append([a ^ b for a, b in zip(words[i - 4], temp)])
    return bytes(b for word in words for b in word)


# The state is held column by column: byte 4*c + r is row r of column c.

def _add_round_key(state: bytes, round_key: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(state, round_key))


def _sub_bytes(state: bytes, box: bytes) -> bytes:
    return bytes(box[b] for b in state)


def _shift_rows(state: bytes) -> bytes:
    return bytes(state[((c + r) % 4) * 4 + r] for c in range(4) for r in range(4))


def _inv_shift_rows(state: bytes) -> bytes:
    return bytes(state[((c - r) % 4) * 4 + r] for c in range(4) for r in range(4))


def _mix_columns(state: bytes) -> bytes:
    mixed = bytearray()
    for c in range(0, 16, 4):
        column = state[c:c + 4]
        total = column[0] ^ column[1] ^ column[2] ^ column[3]
        mixed.extend(
            column[r] ^ total ^ _xtime(column[r] ^ column[(r + 1) % 4])
            for r in range(4)
        )
    return bytes(mixed)


def _inv_mix_columns(state: bytes) -> bytes:
    m9, m11, m13, m14 = _MUL[9], _MUL[11], _MUL[13], _MUL[14]
    mixed = bytearray()
    for c in range(0, 16, 4):
        a, b, cc, d = state[c:c + 4]
        mixed.extend((
            m14[a] ^ m11[b] ^ m13[cc] ^ m9[d],
            m9[a] ^ m14[b] ^ m11[cc] ^ m13[d],
            m13[a] ^ m9[b] ^ m14[cc] ^ m11[d],
            m11[a] ^ m13[b] ^ m9[cc] ^ m14[d],
        ))
    return bytes(mixed)


class AES128:
    """AES with a 128-bit key, working on single 16-byte blocks."""

    def __init__(self, key: bytes) -> None:
        expanded = expand_key(key)
        self._round_keys = tuple(
            expanded[r * BLOCK_SIZE:(r + 1) * BLOCK_SIZE] for r in range(ROUNDS + 1)
        )

    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt one 16-byte block."""
        state = _add_round_key(_check_length("block", block, BLOCK_SIZE), self._round_keys[0])
        for round_key in self._round_keys[1:ROUNDS]:
            state = _mix_columns(_shift_rows(_sub_bytes(state, SBOX)))
            state = _add_round_key(state, round_key)
        state = _shift_rows(_sub_bytes(state, SBOX))
        return _add_round_key(state, self._round_keys[ROUNDS])

    def decrypt_block(self, block: bytes) -> bytes:
        """Decrypt one 16-byte block."""
        state = _add_round_key(_check_length("block", block, BLOCK_SIZE), self._round_keys[ROUNDS])
        for round_key in reversed(self._round_keys[1:ROUNDS]):
            state = _sub_bytes(_inv_shift_rows(state), _INV_SBOX)
            state = _inv_mix_columns(_add_round_key(state, round_key))
        state = _sub_bytes(_inv_shift_rows(state), _INV_SBOX)
        return _add_round_key(state, self._round_keys[0])


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, cycle(b)))


def _blocks(data: bytes):
    return (data[i:i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE))


def cbc_encrypt(data: bytes, key: bytes, iv: bytes) -> bytes:
    """Encrypt *data* in CBC mode, padding a short final block with zeros."""
    cipher = AES128(key)
    previous = _check_length("iv", iv, BLOCK_SIZE)
    data = bytes(data)
    remainder = len(data) % BLOCK_SIZE
    if remainder:
        data += bytes(BLOCK_SIZE - remainder)
    out = bytearray()
    for block in _blocks(data):
        previous = cipher.encrypt_block(_xor(block, previous))
        out.extend(previous)
    return bytes(out)


def cbc_decrypt(data: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt CBC-mode *data*, whose length must be a multiple of 16."""
    cipher = AES128(key)
    previous = _check_length("iv", iv, BLOCK_SIZE)
    data = bytes(data)
    if len(data) % BLOCK_SIZE:
        raise ValueError("Ciphertext length must be a multiple of 16 bytes")
    out = bytearray()
    for block in _blocks(data):
        out.extend(_xor(cipher.decrypt_block(block), previous))
        previous = block
    return bytes(out)