"""
Logging setup for scripts that use mwbot.

The library itself only logs to the ``mwbot`` logger; nothing is printed
unless the application configures logging. Scripts can do that with:

..code-block:: python

    from mwbot.log import setup_logging

    setup_logging(log_file='bot.log')
    bot = mwbot.Bot({'api_url': API, 'verbose': True})
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

__all__ = [
    'setup_logging',
]

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logging(name='mwbot', level=logging.INFO, log_file=None,
                  max_bytes=10 * 1024 * 1024, backup_count=5, console=True):
    """Set up logging to the console and, optionally, a rotated file.

    ``name`` is the logger to configure; the default covers all of mwbot.
    Calling this again replaces the handlers it installed before.

    Returns the logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
