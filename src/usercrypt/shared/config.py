from logging import CRITICAL, DEBUG, ERROR, INFO, WARNING
from os import PathLike, environ
from pathlib import Path
from tomllib import load

from pydantic import BaseModel, field_validator

DEFAULT_CONFIG_PATH = Path(environ.get("USERCRYPT_CONFIG", "config.toml"))
DEFAULT_BASE_SECRET = "default-encryption-key-base"

# Same variable the encrypting server reads
BASE_SECRET_ENV = "ENCRYPTION_KEY"


class General(BaseModel):
    title: str = "usercrypt"


class Logging(BaseModel):
    level: int = INFO

    @field_validator("level", mode="before")
    @classmethod
    def convert_log_level(cls, value):
        if isinstance(value, int):
            return value
        log_levels = {
            "DEBUG": DEBUG,
            "INFO": INFO,
            "WARNING": WARNING,
            "ERROR": ERROR,
            "CRITICAL": CRITICAL,
        }
        return log_levels.get(str(value).upper(), INFO)


class Paths(BaseModel):
    logs: str = "logs"


class Encryption(BaseModel):
    base_secret: str = DEFAULT_BASE_SECRET
    key_cache_size: int = 0  # 0 disables the derived key cache

    @field_validator("base_secret")
    @classmethod
    def check_base_secret(cls, value: str) -> str:
        if not value:
            raise ValueError("base_secret must not be empty")
        return value

    @field_validator("key_cache_size")
    @classmethod
    def check_key_cache_size(cls, value: int) -> int:
        if value < 0:
            raise ValueError("key_cache_size must be >= 0")
        return value


class Config(BaseModel):
    general: General = General()
    logging: Logging = Logging()
    paths: Paths = Paths()
    encryption: Encryption = Encryption()


def load_config(
    shared_config_file: PathLike = DEFAULT_CONFIG_PATH,
    specific_config_file: PathLike | None = None,
) -> Config:
    """Load and merge configurations from TOML files.

    A missing shared file yields the defaults. ``ENCRYPTION_KEY`` in the
    environment takes precedence over ``encryption.base_secret``.
    """
    config_data = {}

    # Load shared config
    shared_path = Path(shared_config_file)
    if shared_path.is_file():
        with shared_path.open("rb") as f:
            config_data = load(f)

    # Load and merge specific config if provided
    if specific_config_file:
        with Path(specific_config_file).open("rb") as f:
            specific_data = load(f)
            config_data.update(specific_data)

    base_secret = environ.get(BASE_SECRET_ENV)
    if base_secret:
        encryption = dict(config_data.get("encryption", {}))
        encryption["base_secret"] = base_secret
        config_data["encryption"] = encryption

    return Config(**config_data)
