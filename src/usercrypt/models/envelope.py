import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from usercrypt.core import Decryptor
from usercrypt.shared import Logger

logger = Logger(__name__).get_logger()


class EncryptedPayload(BaseModel):
    """API response body carrying an encrypted payload.

    The server sends ``{"encryptedData": "<base64>", "date": "2024-01-31"}``;
    ``date`` is only present on date-scoped endpoints.
    """

    model_config = ConfigDict(populate_by_name=True)

    encrypted_data: str = Field(alias="encryptedData")  # Base64 AES/ECB ciphertext
    date: str | None = None

    def decrypt(self, decryptor: Decryptor, user_id: str) -> str:
        return decryptor.decrypt(self.encrypted_data, user_id)

    def decrypt_json(self, decryptor: Decryptor, user_id: str) -> Any:
        # Plain json.loads, callers validate the shape themselves
        plaintext = self.decrypt(decryptor, user_id)
        data = json.loads(plaintext)
        logger.debug("Decrypted payload parsed as %s", type(data).__name__)
        return data
