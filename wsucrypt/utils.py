from __future__ import annotations

WORD_BITS = 16
KEY_BITS = 64


# Circular left shift of value inside a width-bit register
def rotate_left(value: int, steps: int, width: int) -> int:
    mask = (1 << width) - 1
    value &= mask
    return ((value << steps) | (value >> (width - steps))) & mask


# Circular right shift of value inside a width-bit register
def rotate_right(value: int, steps: int, width: int) -> int:
    mask = (1 << width) - 1
    value &= mask
    return ((value >> steps) | (value << (width - steps))) & mask


# Combine a two 8 bit values into a single 16-bit integer
def concat16(b1: int, b2: int) -> int:
    return ((b1 & 0xFF) << 8) | (b2 & 0xFF)


# Split a 16-bit word into (high byte, low byte)
def split16(w: int) -> tuple[int, int]:
    return (w >> 8) & 0xFF, w & 0xFF


# Pack four 16-bit words big-endian into one 64-bit integer
def words_to_int(words) -> int:
    value = 0
    for w in words:
        value = (value << 16) | (w & 0xFFFF)
    return value


# Unpack a 64-bit integer into four 16-bit words, most significant first
def int_to_words(value: int) -> tuple[int, int, int, int]:
    return (
        (value >> 48) & 0xFFFF,
        (value >> 32) & 0xFFFF,
        (value >> 16) & 0xFFFF,
        value & 0xFFFF,
    )
