from .decrypt import BLOCK_SIZE, LEGACY_USER_ID, Decryptor, decrypt
from .errors import DecryptionError, EncodingError, FailureCause, InputFormatError
from .keys import KEY_SIZE, DerivedKey, KeyDeriver, derive_key

__all__ = [
    "BLOCK_SIZE",
    "KEY_SIZE",
    "LEGACY_USER_ID",
    "DecryptionError",
    "Decryptor",
    "DerivedKey",
    "EncodingError",
    "FailureCause",
    "InputFormatError",
    "KeyDeriver",
    "decrypt",
    "derive_key",
]
