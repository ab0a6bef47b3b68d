"""
Logging configuration for OrgChart Interchange
Colored console output plus an optional rotating log file, both driven by
the `logging` section of the YAML config
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional
import colorama

from orgchart.config import LoggingSettings

# Initialize colorama for Windows color support
colorama.init()

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
CONSOLE_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'
FILE_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(funcName)s:%(lineno)d %(message)s'

# Libraries that log every multipart chunk at DEBUG
QUIET_LOGGERS = ('multipart', 'python_multipart')


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name"""

    COLORS = {
        'DEBUG': colorama.Fore.CYAN,
        'INFO': colorama.Fore.GREEN,
        'WARNING': colorama.Fore.YELLOW,
        'ERROR': colorama.Fore.RED,
        'CRITICAL': colorama.Fore.RED + colorama.Style.BRIGHT,
    }

    def format(self, record):
        # Work on a copy so the file handler still sees the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname)
        if color:
            record.levelname = f"{color}{record.levelname}{colorama.Style.RESET_ALL}"
        return super().format(record)


def resolve_level(name: str) -> int:
    """
    Map a level name from config or the command line to its number.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def setup_logging(
    settings: Optional[LoggingSettings] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Configure the root logger from the config's logging section.

    Args:
        settings: Level, log file and rotation limits (defaults: INFO, console only)
        level: Overrides settings.level (e.g. a --log-level flag)

    Returns:
        Configured root logger
    """
    settings = settings or LoggingSettings()

    root = logging.getLogger()
    root.setLevel(resolve_level(level or settings.level))
    root.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(console_handler)

    if settings.file:
        log_path = Path(settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root
