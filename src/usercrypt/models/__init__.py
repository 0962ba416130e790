from .envelope import EncryptedPayload

__all__ = ["EncryptedPayload"]
