from enum import Enum


class FailureCause(Enum):
    BASE64 = "base64"
    BLOCK_LENGTH = "block_length"
    PADDING = "padding"
    ENCODING = "encoding"


class DecryptionError(Exception):
    """Raised when a payload cannot be decrypted.

    This is the only kind callers need to catch. ``cause`` records which step
    failed; wrong key, wrong user id and tampered ciphertext all surface as
    ``FailureCause.PADDING`` and cannot be told apart.
    """

    def __init__(self, message: str, cause: FailureCause = FailureCause.PADDING):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InputFormatError(DecryptionError):
    """Payload is not valid base64 or not a whole number of cipher blocks."""


class EncodingError(DecryptionError):
    """Decrypted bytes are not valid UTF-8."""
