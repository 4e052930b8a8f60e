"""Logging configuration for the watermarking engine.

Modules log through ``log``. Importing the package leaves the host
application's loguru sinks alone; call ``setup_logger()`` to install the
package's own stderr and file sinks.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .settings import get_settings


def setup_logger(level: Optional[str] = None, log_file: Optional[Path] = None):
    """Configure loguru sinks for the package.

    Replaces every existing sink, so only call this when the package owns
    the process's logging (scripts, workers).

    Args:
        level: Minimum level to emit. Defaults to ``Settings.log_level``.
        log_file: Optional file sink. Defaults to ``Settings.log_file``.

    Returns:
        The configured loguru logger.
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
        level=level,
        colorize=True,
    )

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
        )

    return logger


log = logger
