import json

import pytest
from conftest import LIST_PAYLOAD, USAGE_JSON, USAGE_PAYLOAD, USER_ID
from pydantic import ValidationError

from usercrypt.core import DecryptionError
from usercrypt.models import EncryptedPayload


def test_parse_server_response():
    body = json.dumps({"encryptedData": USAGE_PAYLOAD, "date": "2024-05-01"})
    envelope = EncryptedPayload.model_validate_json(body)

    assert envelope.encrypted_data == USAGE_PAYLOAD
    assert envelope.date == "2024-05-01"


def test_date_is_optional():
    envelope = EncryptedPayload.model_validate({"encryptedData": LIST_PAYLOAD})
    assert envelope.date is None


def test_populate_by_field_name():
    envelope = EncryptedPayload(encrypted_data=LIST_PAYLOAD)
    assert envelope.model_dump(by_alias=True) == {
        "encryptedData": LIST_PAYLOAD,
        "date": None,
    }


def test_missing_encrypted_data():
    with pytest.raises(ValidationError):
        EncryptedPayload.model_validate({"date": "2024-05-01"})


def test_decrypt(decryptor):
    envelope = EncryptedPayload(encrypted_data=USAGE_PAYLOAD)
    assert envelope.decrypt(decryptor, USER_ID) == USAGE_JSON


def test_decrypt_json(decryptor):
    envelope = EncryptedPayload(encrypted_data=USAGE_PAYLOAD)
    assert envelope.decrypt_json(decryptor, USER_ID) == {
        "packageName": "com.example.app",
        "usageTime": 1200,
    }
    assert EncryptedPayload(encrypted_data=LIST_PAYLOAD).decrypt_json(
        decryptor, USER_ID
    ) == []


def test_decrypt_json_wrong_user(decryptor):
    envelope = EncryptedPayload(encrypted_data=LIST_PAYLOAD)
    with pytest.raises(DecryptionError):
        envelope.decrypt_json(decryptor, "other-user")
