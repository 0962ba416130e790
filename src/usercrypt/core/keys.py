import hashlib
from functools import lru_cache

from usercrypt.shared import Config, Logger

logger = Logger(__name__).get_logger()

DerivedKey = bytes

KEY_SIZE = 16  # AES-128
SEPARATOR = b":"


def derive_key(base_secret: bytes, user_id: str) -> DerivedKey:
    """
    SHA-256 over ``base_secret + b":" + user_id``, truncated to 16 bytes.

    Deterministic and never fails. There is no key stretching: this is a
    one-way derivation matching the encrypting server, not a password KDF.
    """
    digest = hashlib.sha256(base_secret + SEPARATOR + user_id.encode("utf-8"))
    return digest.digest()[:KEY_SIZE]


class KeyDeriver:
    """Derives per-user keys from a base secret fixed at construction."""

    def __init__(self, base_secret: bytes | str, cache_size: int = 0):
        if isinstance(base_secret, str):
            base_secret = base_secret.encode("utf-8")
        if not base_secret:
            raise ValueError("base secret must not be empty")
        if cache_size < 0:
            raise ValueError("cache_size must be >= 0")

        self.__base_secret = base_secret
        self.cache_size = cache_size

        if cache_size:
            # Read-through, the cached bytes are exactly what derive_key returns
            self.__derive = lru_cache(maxsize=cache_size)(self.__derive_uncached)
        else:
            self.__derive = self.__derive_uncached

        logger.debug("Key deriver ready (cache size: %d)", cache_size)

    @classmethod
    def from_config(cls, config: Config) -> "KeyDeriver":
        return cls(
            config.encryption.base_secret,
            cache_size=config.encryption.key_cache_size,
        )

    def derive(self, user_id: str) -> DerivedKey:
        return self.__derive(user_id)

    def cache_info(self):
        """``functools`` cache statistics, or ``None`` when caching is off."""
        if not self.cache_size:
            return None
        return self.__derive.cache_info()

    def __derive_uncached(self, user_id: str) -> DerivedKey:
        return derive_key(self.__base_secret, user_id)

    def __repr__(self):
        # Never expose the secret
        return f"{type(self).__name__}(cache_size={self.cache_size})"
