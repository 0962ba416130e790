import base64
import warnings

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from usercrypt.shared import Config, Logger
from usercrypt.shared.errors import decryption_error_handler

from .errors import DecryptionError, EncodingError, FailureCause, InputFormatError
from .keys import KEY_SIZE, DerivedKey, KeyDeriver

logger = Logger(__name__).get_logger()

BLOCK_SIZE = 16  # bytes, AES block

# Identifier the server falls back to for payloads encrypted with the old global key
LEGACY_USER_ID = "default-user"

# Padding and UTF-8 failures share one message, it must not work as an oracle
DECRYPTION_FAILED = (
    "Decryption failed. Make sure you're using the correct user id (Bearer token)."
)


def decrypt(encoded_ciphertext: str, derived_key: DerivedKey) -> str:
    """
    Decrypt a base64 AES-128/ECB/PKCS#7 payload with ``derived_key``.

    Raises ``InputFormatError`` for bad base64 or a length that is not a
    positive multiple of the block size, ``EncodingError`` when the plaintext
    is not UTF-8 and ``DecryptionError`` for everything that points to a wrong
    key or a tampered payload. All three are ``DecryptionError``.
    """
    if len(derived_key) != KEY_SIZE:
        raise ValueError(f"Derived key must be {KEY_SIZE} bytes, got {len(derived_key)}")

    with decryption_error_handler(
        InputFormatError, FailureCause.BASE64, "Invalid base64 payload"
    ):
        ciphertext = base64.b64decode(encoded_ciphertext, validate=True)

    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        logger.warning("Rejected ciphertext of %d bytes", len(ciphertext))
        raise InputFormatError(
            f"Ciphertext length must be a positive multiple of {BLOCK_SIZE} bytes,"
            f" got {len(ciphertext)}",
            cause=FailureCause.BLOCK_LENGTH,
        )

    # ECB is what the encrypting side uses, changing it breaks every payload
    decryptor = Cipher(algorithms.AES(derived_key), modes.ECB()).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    with decryption_error_handler(
        DecryptionError, FailureCause.PADDING, DECRYPTION_FAILED
    ):
        unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()

    with decryption_error_handler(
        EncodingError, FailureCause.ENCODING, DECRYPTION_FAILED
    ):
        text = plaintext.decode("utf-8")

    logger.debug("Decrypted %d bytes of ciphertext", len(ciphertext))
    return text


class Decryptor:
    """Decrypts payloads for a user id, deriving the key on every call."""

    def __init__(self, key_deriver: KeyDeriver):
        self.key_deriver = key_deriver

    @classmethod
    def from_config(cls, config: Config) -> "Decryptor":
        return cls(KeyDeriver.from_config(config))

    def decrypt(self, encrypted_data: str, user_id: str) -> str:
        return decrypt(encrypted_data, self.key_deriver.derive(user_id))

    def decrypt_default(self, encrypted_data: str) -> str:
        """Decrypt a payload made with the legacy global key."""
        warnings.warn(
            "decrypt_default() is deprecated, use decrypt(encrypted_data, user_id)",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.decrypt(encrypted_data, LEGACY_USER_ID)
