import logging
from contextlib import contextmanager

from ..logger import Logger

__all__ = ["decryption_error_handler"]

logger = Logger(__name__, level=logging.DEBUG).get_logger()


@contextmanager
def decryption_error_handler(error_type, cause, message, stacklevel=1):
    """Re-raise ``ValueError`` (and subclasses) as ``error_type``.

    ``binascii.Error`` and ``UnicodeDecodeError`` are both ``ValueError``
    subclasses, as is what ``cryptography`` raises for bad padding.
    """
    # Go 3 levels up to escape @contextmanager methods and current function
    stack_level = 2 + stacklevel
    kw = {"stacklevel": stack_level}
    try:
        yield

    except ValueError as e:
        logger.warning("Decryption step failed (%s): %s", cause.value, message, **kw)
        # Exception text can carry decrypted bytes, only the type is logged
        logger.debug("Underlying error: %s", type(e).__name__, **kw)
        raise error_type(message, cause=cause) from e
