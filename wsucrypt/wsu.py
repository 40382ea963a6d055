from __future__ import annotations

import logging
from enum import Enum

from wsucrypt.utils import KEY_BITS, WORD_BITS, concat16, int_to_words, split16
from wsucrypt.utils import rotate_left, rotate_right

log = logging.getLogger("wsucrypt.cipher")


class Mode(str, Enum):
    ENCRYPT = "e"
    DECRYPT = "d"


# Fixed 256-entry substitution table used by the G permutation
SBOX = (
    0xa3, 0xd7, 0x09, 0x83, 0xf8, 0x48, 0xf6, 0xf4, 0xb3, 0x21, 0x15, 0x78, 0x99, 0xb1, 0xaf, 0xf9,
    0xe7, 0x2d, 0x4d, 0x8a, 0xce, 0x4c, 0xca, 0x2e, 0x52, 0x95, 0xd9, 0x1e, 0x4e, 0x38, 0x44, 0x28,
    0x0a, 0xdf, 0x02, 0xa0, 0x17, 0xf1, 0x60, 0x68, 0x12, 0xb7, 0x7a, 0xc3, 0xe9, 0xfa, 0x3d, 0x53,
    0x96, 0x84, 0x6b, 0xba, 0xf2, 0x63, 0x9a, 0x19, 0x7c, 0xae, 0xe5, 0xf5, 0xf7, 0x16, 0x6a, 0xa2,
    0x39, 0xb6, 0x7b, 0x0f, 0xc1, 0x93, 0x81, 0x1b, 0xee, 0xb4, 0x1a, 0xea, 0xd0, 0x91, 0x2f, 0xb8,
    0x55, 0xb9, 0xda, 0x85, 0x3f, 0x41, 0xbf, 0xe0, 0x5a, 0x58, 0x80, 0x5f, 0x66, 0x0b, 0xd8, 0x90,
    0x35, 0xd5, 0xc0, 0xa7, 0x33, 0x06, 0x65, 0x69, 0x45, 0x00, 0x94, 0x56, 0x6d, 0x98, 0x9b, 0x76,
    0x97, 0xfc, 0xb2, 0xc2, 0xb0, 0xfe, 0xdb, 0x20, 0xe1, 0xeb, 0xd6, 0xe4, 0xdd, 0x47, 0x4a, 0x1d,
    0x42, 0xed, 0x9e, 0x6e, 0x49, 0x3c, 0xcd, 0x43, 0x27, 0xd2, 0x07, 0xd4, 0xde, 0xc7, 0x67, 0x18,
    0x89, 0xcb, 0x30, 0x1f, 0x8d, 0xc6, 0x8f, 0xaa, 0xc8, 0x74, 0xdc, 0xc9, 0x5d, 0x5c, 0x31, 0xa4,
    0x70, 0x88, 0x61, 0x2c, 0x9f, 0x0d, 0x2b, 0x87, 0x50, 0x82, 0x54, 0x64, 0x26, 0x7d, 0x03, 0x40,
    0x34, 0x4b, 0x1c, 0x73, 0xd1, 0xc4, 0xfd, 0x3b, 0xcc, 0xfb, 0x7f, 0xab, 0xe6, 0x3e, 0x5b, 0xa5,
    0xad, 0x04, 0x23, 0x9c, 0x14, 0x51, 0x22, 0xf0, 0x29, 0x79, 0x71, 0x7e, 0xff, 0x8c, 0x0e, 0xe2,
    0x0c, 0xef, 0xbc, 0x72, 0x75, 0x6f, 0x37, 0xa1, 0xec, 0xd3, 0x8e, 0x62, 0x8b, 0x86, 0x10, 0xe8,
    0x08, 0x77, 0x11, 0xbe, 0x92, 0x4f, 0x24, 0xc5, 0x32, 0x36, 0x9d, 0xcf, 0xf3, 0xa6, 0xbb, 0xac,
    0x5e, 0x6c, 0xa9, 0x13, 0x57, 0x25, 0xb5, 0xe3, 0xbd, 0xa8, 0x3a, 0x01, 0x05, 0x59, 0x2a, 0x46,
)


# Key scheduler K: one subkey byte per call, returns (byte, next register).
# Encrypt rotates left before reading byte b, decrypt reads byte 7-b then rotates right.
def next_subkey_byte(x: int, register: int, mode: Mode) -> tuple[int, int]:
    mode = Mode(mode)
    b = x % 8
    if mode == Mode.ENCRYPT:
        register = rotate_left(register, 1, KEY_BITS)
        return (register >> (b * 8)) & 0xFF, register
    subkey = (register >> ((7 - b) * 8)) & 0xFF
    return subkey, rotate_right(register, 1, KEY_BITS)


# The 12 subkey bytes of one round in slot order k0..k11, plus the advanced register
def round_subkeys(rnd: int, register: int, mode: Mode) -> tuple[list[int], int]:
    mode = Mode(mode)
    keys = []
    for _ in range(3):
        for j in range(4):
            k, register = next_subkey_byte(4 * rnd + j, register, mode)
            keys.append(k)
    # decryption fills the slots from k11 down to k0
    if mode == Mode.DECRYPT:
        keys.reverse()
    return keys, register


# G permutation: four substitution/xor stages over the two bytes of w
def g_permute(w: int, k0: int, k1: int, k2: int, k3: int) -> int:
    g1, g2 = split16(w)
    g3 = SBOX[g2 ^ k0] ^ g1
    g4 = SBOX[g3 ^ k1] ^ g2
    g5 = SBOX[g4 ^ k2] ^ g3
    g6 = SBOX[g5 ^ k3] ^ g4
    return (g5 << 8) | g6


# Round function F, returns ((f0, f1), next register)
def round_function(r0: int, r1: int, rnd: int, register: int, mode: Mode,
                   logger: logging.Logger = log) -> tuple[tuple[int, int], int]:
    k, register = round_subkeys(rnd, register, mode)
    t0 = g_permute(r0, k[0], k[1], k[2], k[3])
    t1 = g_permute(r1, k[4], k[5], k[6], k[7])
    catk0 = concat16(k[8], k[9])
    catk1 = concat16(k[10], k[11])
    f0 = (t0 + 2 * t1 + catk0) & 0xFFFF
    f1 = (2 * t0 + t1 + catk1) & 0xFFFF
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("subkeys: %s", " ".join(f"{b:02x}" for b in k))
        logger.debug("t0=%04x t1=%04x f0=%04x f1=%04x", t0, t1, f0, f1)
    return (f0, f1), register


# WSU cipher (16 Feistel rounds with input/output whitening, 64-bit blocks)
class WSU:
    ROUNDS = 16

    def __init__(self, key, mode: Mode, logger: logging.Logger | None = None):
        self.mode = Mode(mode)
        self.log = logger or log
        self.set_key(key)

    # accept the key as 8 raw bytes or as a 64-bit integer
    def set_key(self, key) -> None:
        if isinstance(key, (bytes, bytearray)):
            if len(key) != 8:
                raise ValueError("WSU expects 64-bit key")
            key = int.from_bytes(key, "big")
        if not 0 <= key < (1 << KEY_BITS):
            raise ValueError("WSU expects 64-bit key")
        self.key = key
        self.key_words = int_to_words(key)

    # transform one block given as four 16-bit words, returns the new four words
    def crypt_words(self, words) -> tuple[int, int, int, int]:
        kw = self.key_words
        debug = self.log.isEnabledFor(logging.DEBUG)
        # input whitening
        r0, r1, r2, r3 = (w ^ k for w, k in zip(words, kw))
        if debug:
            self.log.debug("whitened: r0=%04x r1=%04x r2=%04x r3=%04x", r0, r1, r2, r3)
        # schedule register starts from the raw key for every block
        register = self.key
        for rnd in range(self.ROUNDS):
            (f0, f1), register = round_function(r0, r1, rnd, register, self.mode, self.log)
            r0_old, r1_old = r0, r1
            if self.mode == Mode.ENCRYPT:
                r0 = rotate_right(r2 ^ f0, 1, WORD_BITS)
                r1 = rotate_left(r3, 1, WORD_BITS) ^ f1
            else:
                r0 = rotate_left(r2, 1, WORD_BITS) ^ f0
                r1 = rotate_right(r3 ^ f1, 1, WORD_BITS)
            r2, r3 = r0_old, r1_old
            if debug:
                self.log.debug("round %d: r0=%04x r1=%04x r2=%04x r3=%04x", rnd, r0, r1, r2, r3)
        # undo the last swap, then output whitening
        y = (r2, r3, r0, r1)
        return tuple(w ^ k for w, k in zip(y, kw))


def encrypt_block(block, key: int) -> tuple[int, int, int, int]:
    return WSU(key, Mode.ENCRYPT).crypt_words(block)


def decrypt_block(block, key: int) -> tuple[int, int, int, int]:
    return WSU(key, Mode.DECRYPT).crypt_words(block)
