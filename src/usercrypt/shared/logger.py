import logging
import re
import sys
from datetime import datetime
from pathlib import Path

from colorama import Fore, Style, init

from .config import Config, load_config

config: Config = load_config()


class ColorFormatter(logging.Formatter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.color_map = {
            logging.DEBUG: Fore.CYAN,
            logging.INFO: Fore.GREEN,
            logging.WARNING: Fore.YELLOW,
            logging.ERROR: Fore.RED,
            logging.CRITICAL: Fore.MAGENTA,
        }

    def format(self, record):
        color = self.color_map.get(record.levelno, Fore.WHITE)
        message = super().format(record)
        return f"{color}{message}{Style.RESET_ALL}"


class Logger:
    def __init__(self, name, log_file=config.paths.logs, level=config.logging.level):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Loggers are process-wide, only attach handlers once per name
        if self.logger.handlers:
            return

        Path(log_file).mkdir(parents=True, exist_ok=True)
        # Initialize colorama
        init()

        format_string_console = (
            f"{Style.BRIGHT}%(levelname)-10s "
            + f"{Style.DIM}%(name)-20s "
            + "%(module)s.%(funcName)-30s "
            + f"{Style.RESET_ALL}%(message)s"
        )
        format_string_file = re.sub(
            r"\x1b\[[0-9;]*m", "", "%(asctime)s - " + format_string_console
        )

        file_handler = logging.FileHandler(
            Path(log_file) / f"{datetime.now().strftime('%Y-%m-%d')}.log"
        )
        file_handler.setFormatter(logging.Formatter(format_string_file))

        # Console goes to stderr so command line output stays clean
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColorFormatter(format_string_console))

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

    def get_logger(self):
        return self.logger


def apply_logging_config(config: Config, prefix: str = "usercrypt"):
    """Re-point loggers created at import time to ``config``.

    Sets ``logging.level`` on every logger under ``prefix`` and moves their
    file handlers into ``paths.logs``.
    """
    log_dir = Path(config.paths.logs)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (log_dir / f"{datetime.now().strftime('%Y-%m-%d')}.log").resolve()

    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name != prefix and not name.startswith(prefix + "."):
            continue

        logger.setLevel(config.logging.level)

        for handler in list(logger.handlers):
            if not isinstance(handler, logging.FileHandler):
                continue
            if Path(handler.baseFilename) == log_file:
                continue

            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(handler.formatter)
            logger.removeHandler(handler)
            handler.close()
            logger.addHandler(file_handler)
