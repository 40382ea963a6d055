from __future__ import annotations

import string
from pathlib import Path

from wsucrypt_core.errors import IOFailure, KeyTooShort, MalformedInput
from wsucrypt.utils import concat16

BLOCK_BYTES = 8
BLOCK_HEX = 16
_HEX = frozenset(string.hexdigits)
_WS = str.maketrans("", "", string.whitespace)


def _check_hex(text: str, what: str) -> None:
    for pos, ch in enumerate(text):
        if ch not in _HEX:
            raise MalformedInput(f"{what}: non-hex character {ch!r} at position {pos}")


# ——— readers ———

# Raw plaintext bytes -> blocks of four words, last block zero padded on the low side
def read_plain_blocks(data: bytes) -> list[tuple[int, int, int, int]]:
    if len(data) % BLOCK_BYTES:
        data = data + b"\0" * (BLOCK_BYTES - len(data) % BLOCK_BYTES)
    return [
        tuple(concat16(data[i + j], data[i + j + 1]) for j in range(0, BLOCK_BYTES, 2))
        for i in range(0, len(data), BLOCK_BYTES)
    ]


# Hex ciphertext -> blocks, whitespace ignored, last block zero padded
def read_hex_blocks(text: str) -> list[tuple[int, int, int, int]]:
    text = text.translate(_WS)
    _check_hex(text, "ciphertext")
    if len(text) % BLOCK_HEX:
        text = text.ljust(len(text) + BLOCK_HEX - len(text) % BLOCK_HEX, "0")
    return [
        tuple(int(text[i + j:i + j + 4], 16) for j in range(0, BLOCK_HEX, 4))
        for i in range(0, len(text), BLOCK_HEX)
    ]


# First 16 hex digits of the key text as a 64-bit integer, the rest is ignored
def parse_key(text: str) -> int:
    text = text.translate(_WS)
    if text[:2].lower() == "0x":
        text = text[2:]
    if len(text) < BLOCK_HEX:
        _check_hex(text, "key")
        raise KeyTooShort(f"key needs {BLOCK_HEX} hex digits, got {len(text)}")
    text = text[:BLOCK_HEX]
    _check_hex(text, "key")
    return int(text, 16)


# A key handed over as an integer must fit the 64-bit register
def check_key(key: int) -> int:
    if isinstance(key, bool) or not isinstance(key, int) or not 0 <= key < (1 << 64):
        raise MalformedInput(f"key must be a 64-bit unsigned integer, got {key!r}")
    return key


def read_key(path) -> int:
    try:
        text = Path(path).read_text(encoding="ascii")
    except UnicodeDecodeError as e:
        raise MalformedInput(f"key file {path} is not ASCII text") from e
    except OSError as e:
        raise IOFailure(path, e.strerror or str(e)) from e
    return parse_key(text)


# ——— writers ———

# Blocks -> lowercase hex, 4 digits per word and no separators
def format_hex_blocks(blocks) -> str:
    return "".join("".join(f"{w:04x}" for w in block) for block in blocks)


# Blocks -> raw bytes, high byte then low byte per word
def blocks_to_bytes(blocks, strip_padding: bool = False) -> bytes:
    out = bytearray()
    for block in blocks:
        for w in block:
            out.append((w >> 8) & 0xFF)
            out.append(w & 0xFF)
    if strip_padding:
        return bytes(out).rstrip(b"\0")
    return bytes(out)
