from __future__ import annotations

import logging
from pathlib import Path

from wsucrypt_core.blocks import blocks_to_bytes, check_key, format_hex_blocks, parse_key
from wsucrypt_core.blocks import read_hex_blocks, read_plain_blocks
from wsucrypt_core.errors import IOFailure, MalformedInput
from wsucrypt.ecb import ECB
from wsucrypt.wsu import Mode

logger = logging.getLogger("wsucrypt.file")

DEFAULT_OUTPUT = {Mode.ENCRYPT: "ciphertext.txt", Mode.DECRYPT: "plaintext.txt"}
# blocks handed to the cipher between two progress reports
BATCH = 256


# Encrypt a plaintext file into hex ciphertext, or decrypt hex ciphertext back into raw bytes
class FileCipher:
    def __init__(self, src, dst, key, mode: Mode, prog=lambda *_: None,
                 overwrite: bool = False, strip_padding: bool = False, jobs: int = 1):
        self.src = Path(src)
        self.dst = Path(dst)
        self.mode = Mode(mode)
        # key given as hex text (as read from a key file) or as a 64-bit integer
        self.key = parse_key(key) if isinstance(key, str) else check_key(key)
        self.prog = prog
        self.overwrite = overwrite
        self.strip_padding = strip_padding
        self.ecb = ECB(self.key, self.mode, jobs)

    def _load(self) -> list[tuple[int, int, int, int]]:
        try:
            if self.mode == Mode.ENCRYPT:
                return read_plain_blocks(self.src.read_bytes())
            return read_hex_blocks(self.src.read_text(encoding="ascii"))
        except UnicodeDecodeError as e:
            raise MalformedInput(f"ciphertext file {self.src} is not ASCII hex") from e
        except OSError as e:
            raise IOFailure(self.src, e.strerror or str(e)) from e

    def _store(self, blocks) -> None:
        try:
            if self.mode == Mode.ENCRYPT:
                self.dst.write_text(format_hex_blocks(blocks), encoding="ascii")
            else:
                self.dst.write_bytes(blocks_to_bytes(blocks, self.strip_padding))
        except OSError as e:
            raise IOFailure(self.dst, e.strerror or str(e)) from e

    # main run entry-point, returns the written output path
    def run(self) -> Path:
        if self.dst.exists() and not self.overwrite:
            raise IOFailure(self.dst, "output file already exists, remove or move it before running")
        blocks = self._load()
        verb = "Encrypting" if self.mode == Mode.ENCRYPT else "Decrypting"
        logger.info("%s %d blocks from %s", verb, len(blocks), self.src)

        out = []
        total = len(blocks)
        for i in range(0, total, BATCH):
            out.extend(self.ecb.process_words(blocks[i:i + BATCH]))
            self.prog(len(out) / total)
        if not total:
            self.prog(1.0)

        self._store(out)
        logger.info("Wrote %s", self.dst)
        return self.dst
