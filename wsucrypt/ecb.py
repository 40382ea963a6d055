from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from wsucrypt.wsu import WSU, Mode


# ECB mode wrapping the 64-bit WSU block cipher, every block is processed on its own
class ECB:
    # init to store WSU object and the worker count
    def __init__(self, key, mode: Mode, jobs: int = 1, logger=None):
        self.cipher = WSU(key, mode, logger)
        self.jobs = max(1, jobs)

    # transform a sequence of blocks given as word tuples, order is preserved
    def process_words(self, blocks) -> list[tuple[int, int, int, int]]:
        if self.jobs == 1:
            return [self.cipher.crypt_words(b) for b in blocks]
        # crypt_words keeps its schedule register local, so workers share nothing mutable
        with ThreadPoolExecutor(max_workers=self.jobs) as pool:
            return list(pool.map(self.cipher.crypt_words, blocks))
