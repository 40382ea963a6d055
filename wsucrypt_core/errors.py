# Errors raised by the file layer, the cipher engine itself never raises
class WSUCryptError(Exception):
    pass


# Ciphertext or key text holding characters that are not hex, or undecodable input
class MalformedInput(WSUCryptError, ValueError):
    pass


# Key text with fewer than 16 hex digits
class KeyTooShort(WSUCryptError, ValueError):
    pass


# Missing/unreadable input, unwritable or already existing output
class IOFailure(WSUCryptError):
    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
