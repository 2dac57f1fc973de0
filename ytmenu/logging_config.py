"""
Logging configuration for ytmenu.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Colours the level name; the record itself is left for other handlers."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno, '')
        reset = self.RESET if color else ''
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{reset}"
        return super().format(record)


def default_log_file() -> Path:
    """Log file location under the XDG cache directory."""
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    base = Path(xdg_cache) if xdg_cache else Path.home() / ".cache"
    return base / "ytmenu" / "ytmenu.log"


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """Setup logging configuration for ytmenu.

    The menu owns stdout, so the console handler only reports warnings
    and errors on stderr. Everything at ``level`` goes to ``log_file``.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL),
            defaults to $YTMENU_LOG_LEVEL or INFO
        log_file: Optional log file path
    """
    level = (level or os.environ.get("YTMENU_LOG_LEVEL") or "INFO").upper()
    numeric_level = getattr(logging, level, logging.INFO)

    logger = logging.getLogger('ytmenu')
    logger.setLevel(numeric_level)
    logger.propagate = False

    # Clear existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(max(numeric_level, logging.WARNING))
    console_formatter = ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            logger.warning(f"Cannot open log file {log_file}: {e}")
            return
        file_handler.setLevel(numeric_level)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)


def quiet_console() -> None:
    """Drop console output while the full-screen menu is drawn."""
    logger = logging.getLogger('ytmenu')
    for handler in logger.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(logging.CRITICAL + 1)


def get_logger(name: str) -> logging.Logger:
    """Child of the 'ytmenu' logger, e.g. get_logger('search') -> ytmenu.search."""
    return logging.getLogger(f'ytmenu.{name}')


# Exception hierarchy
class YtMenuError(Exception):
    """Base exception for ytmenu."""


class DependencyError(YtMenuError):
    """A required external tool is missing."""


class TerminalError(YtMenuError):
    """The process is not attached to a usable terminal."""


class ConfigurationError(YtMenuError):
    """A settings value could not be parsed."""


class SearchError(YtMenuError):
    """yt-dlp could not produce search results."""


class CommandError(YtMenuError):
    """An external command could not be started."""
