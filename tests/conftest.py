import base64

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from usercrypt.core import Decryptor, KeyDeriver

BASE_SECRET = "default-encryption-key-base"
USER_ID = "61a7126f-e1d9-58dd-b79e-333928e83f03"

# sha256(b"default-encryption-key-base:61a7126f-e1d9-58dd-b79e-333928e83f03")[:16]
USER_KEY_HEX = "765b2a2fd18d9d36e14662aa1b1865ec"

# Produced by an independent AES-128-ECB implementation under USER_KEY_HEX
EMPTY_PAYLOAD = "Y+3ujuZZiO6L0kqOVSSlXA=="
LIST_PAYLOAD = "nN+a883HZh9YD9kwc6oNLw=="  # "[]"
USAGE_JSON = '{"packageName":"com.example.app","usageTime":1200}'
USAGE_PAYLOAD = (
    "VAHOzfWbXQc9QHsebRFDqQTC676xBPBFqr1g6J2WILI69d0B8yT9hjntv62/HQ3tSNYU5VE1"
    "ACzPYi1VWQInPQ=="
)
REPEATED_BLOCKS_PAYLOAD = (  # "A" * 32
    "O4oZHT7uWgvUvYMXQA3LoDuKGR0+7loL1L2DF0ANy6DL7e6O5lmI7ovSSo5VJKVc"
)
NOT_UTF8_PAYLOAD = "HOKFUOfszuSCiLsTC6DfhQ=="  # b"\xff\xfe\xfd", valid padding

# Under the "default-user" key
LEGACY_PAYLOAD = "xCK+Rz2agn38DzpPWP8wIA=="  # '{"legacy":true}'


def encrypt(plaintext: bytes, key: bytes) -> str:
    """Inverse construction, only used to check the decryptor."""
    padder = padding.PKCS7(128).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    return base64.b64encode(encryptor.update(padded) + encryptor.finalize()).decode()


@pytest.fixture(scope="session")
def user_key():
    return bytes.fromhex(USER_KEY_HEX)


@pytest.fixture
def key_deriver():
    return KeyDeriver(BASE_SECRET)


@pytest.fixture
def decryptor(key_deriver):
    return Decryptor(key_deriver)
