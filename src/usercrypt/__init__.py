"""Per-user AES payload decryption for encrypted API responses."""

__version__ = "0.1.0"
