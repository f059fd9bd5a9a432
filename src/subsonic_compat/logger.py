import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

import colorlog

LOG_COLORS = {
    'DEBUG': 'bold_blue',
    'INFO': 'bold_green',
    'WARNING': 'bold_yellow',
    'ERROR': 'bold_red',
    'CRITICAL': 'bold_purple'
}


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for applications using subsonic_compat.

    The library itself only creates module loggers; call this once from an
    application entry point to get coloured console output and, when
    SUBSONIC_LOG_FILE is set, a rotating log file.

    Environment:
        SUBSONIC_LOG_LEVEL: Root level (default INFO), overridden by ``level``
        SUBSONIC_LOG_FILE: Path of an optional rotating log file
        LOG_FILE_MAX_BYTES: Rotation size in bytes (default 10 MB)
        LOG_FILE_BACKUP_COUNT: Rotated files kept (default 5)

    Returns:
        The configured root logger
    """
    log_level = (level or os.getenv('SUBSONIC_LOG_LEVEL', 'INFO')).upper()
    log_file = os.getenv('SUBSONIC_LOG_FILE')
    max_bytes = int(os.getenv('LOG_FILE_MAX_BYTES', '10485760'))  # 10 MB
    backup_count = int(os.getenv('LOG_FILE_BACKUP_COUNT', '5'))

    logger = logging.getLogger()
    logger.setLevel(log_level)

    if not logger.hasHandlers():
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(levelname)s:%(name)s:%(message)s",
            log_colors=LOG_COLORS
        ))
        logger.addHandler(console_handler)

        if log_file:
            file_handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s - (%(filename)s:%(lineno)d)'
            ))
            logger.addHandler(file_handler)

    return logger
