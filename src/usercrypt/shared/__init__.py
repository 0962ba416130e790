from .config import Config, load_config
from .logger import Logger, apply_logging_config

__all__ = ["Config", "Logger", "apply_logging_config", "load_config"]
