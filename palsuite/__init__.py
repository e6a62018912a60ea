"""Hex and base64 encoding, XOR ciphers and their cracking, and AES-128 in ECB and CBC modes."""

__version__ = "0.1.0"

__all__ = ["aes", "crack", "ecb", "encoding", "inputs", "xor"]