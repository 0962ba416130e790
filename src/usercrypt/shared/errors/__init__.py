from .__errors import decryption_error_handler

__all__ = ["decryption_error_handler"]
