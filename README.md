# palsuite

Small tools for classic cipher exercises. You can run them from the shell or
import them as a Python library. The tools take input from the command line or
from standard input and write raw results to standard output, so you can chain
them with pipes.

When a tool reads standard input or a file, it drops one trailing newline
before processing.

## Installation

```sh
pip install .
```

To run the test suite:

```sh
pip install ".[test]"
pytest
```

## Commands

### Encoding

| Command  | Input                                   | Output                  |
|----------|-----------------------------------------|-------------------------|
| `atob64` | one argument, or standard input         | base64 text, `=` padded |
| `atoh`   | one argument, or standard input         | lower-case hex          |
| `htoa`   | standard input, one hex string per line | decoded bytes           |

```sh
atoh "hello" | htoa
printf 'hello' | atob64
```

Both `atob64` and `atoh` fail on empty input. `htoa` stops with exit status 1
in these cases:

- an empty line
- a hex string of odd length
- a character that is not a hex digit

Lines decoded before the failing one have already been written.

### XOR

```sh
fxor [-h] <xor-file> [data]     # XOR data with the contents of a file of the same length
sxor [-h] <xor-char> [data]     # XOR every byte with the first byte of <xor-char>
rxor [-h] <xor-string>          # XOR standard input with a repeating key
```

When `data` is not given, it is read from standard input. With `-h`, the data
is hex-decoded first. For `fxor`, `-h` also hex-decodes the contents of the
XOR file.

A XOR file that cannot be opened reads as empty, and `fxor` then reports it as
empty. All three commands fail on empty data.

```sh
printf 'some message' | rxor secret | atoh
```

### Cracking XOR ciphers

```sh
sxor-crack [-s]   # recover a single-byte XOR key from standard input
rxor-crack [-s]   # recover a repeating XOR key from standard input
```

`sxor-crack`:

1. Tries all 256 key bytes and keeps those that decrypt to printable text (printable ASCII, tab, newline, carriage return).
2. Scores each survivor by its Bhattacharyya distance from English character frequencies.
3. Without `-s`, lists every candidate best first.
4. Prints the winner: `key: <k>, deciphered: <text>`.

If no key gives printable text, it exits with status 1.

`rxor-crack`:

1. Guesses the key size (2 to 40) from the mean normalised Hamming distance between neighbouring blocks.
2. Cracks each column of the cipher text as a single-byte XOR.
3. Writes the decrypted data.

Without `-s`, `rxor-crack` also prints the key size and the key, and frames
the decrypted data with header and footer lines. It fails if the input is too
short to estimate a key size, or if any column has no printable decryption.

### AES-128 ECB

```sh
aes128-ecb <key>        # encrypt standard input
aes128-ecb -d <key>     # decrypt standard input
detect-aes128-ecb [-s]  # report whether input looks like ECB cipher text
```

The key must be exactly 16 bytes.

- **Encrypting:** a short final block is filled up to 16 bytes, each added byte holding the number of bytes added. Input whose length is already a multiple of 16 gets no padding.
- **Decrypting:** the input length must be a multiple of 16. Any padding is left in place.

`detect-aes128-ecb` needs input of at least two whole 16-byte blocks. It
reports ECB when any two blocks are identical:

- Without `-s`, it echoes the input followed by `: is_aes128_ecb: 1` or `: is_aes128_ecb: 0`.
- With `-s`, it prints nothing and exits with status 0 for ECB and 1 otherwise.

## Library use

```python
from palsuite.encoding import to_hex, from_hex, to_base64
from palsuite.xor import fixed_xor, single_xor, repeating_xor
from palsuite.crack import crack_single_xor, crack_repeating_xor, hamming_distance
from palsuite.aes import AES128, cbc_encrypt, cbc_decrypt
from palsuite.ecb import aes128_ecb, detect_aes128_ecb

to_hex(b"hi")                          # "6869"
from_hex("6869")                       # b"hi"
ciphertext = repeating_xor(b"some message", b"secret")
repeating_xor(ciphertext, b"secret")   # b"some message"
hamming_distance(b"this is a test", b"wokka wokka!!!")  # 37
```

Cracking:

- `crack_single_xor` returns a `SingleXorCandidate` with `key`, `distance` and `plaintext`.
- `rank_single_xor` returns all printable candidates, best first.
- `crack_repeating_xor` returns `(key, plaintext)`.
- `find_keysize`, `transpose_blocks`, `english_score`, `is_printable` and `bitcount` are available on their own.

AES:

- `AES128(key)` works on single 16-byte blocks with `encrypt_block` and `decrypt_block`.
- `expand_key` returns the 176 bytes of round keys.
- `cbc_encrypt(data, key, iv)` pads a trailing partial block with zeros.
- `cbc_decrypt(data, key, iv)` requires a length that is a multiple of 16.

Input helpers in `palsuite.inputs`:

- `read_file`
- `read_input`
- `iter_lines`
- `find_flag`

Invalid input raises `ValueError`.

## Limitations

- CBC mode is available only from the library. There is no command for it.
- ECB encryption adds no padding block when the input is already a multiple of 16 bytes.
- Decryption never removes padding.