"""
Colored console logging for prisma-casemap.

Log output goes to stderr because stdout carries the rendered schema in dry
mode. The `log_*` helpers prefix a marker that the formatter colors.
"""

import logging
import sys
from typing import Optional


SUCCESS_MARKER = "✓"
PROGRESS_MARKER = "→"
HIGHLIGHT_MARKER = "•"


class ColoredFormatter(logging.Formatter):
    """Adds ANSI colors by level, and by marker for INFO and DEBUG records."""

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    MARKER_COLORS = {
        SUCCESS_MARKER: '\033[92m\033[1m',  # Bold bright green
        PROGRESS_MARKER: '\033[94m',        # Bright blue
        HIGHLIGHT_MARKER: '\033[96m',       # Bright cyan
    }

    RESET = '\033[0m'

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Args:
            fmt: Log format string (uses default if None)
            use_colors: Whether to use colors; off anyway when stderr is not a TTY
        """
        super().__init__(fmt or "%(levelname)s: %(message)s")
        self.use_colors = use_colors and hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()

    def _color_for(self, record: logging.LogRecord) -> str:
        if record.levelno < logging.WARNING:
            marker = record.getMessage()[:1]
            if marker in self.MARKER_COLORS:
                return self.MARKER_COLORS[marker]
        return self.LEVEL_COLORS.get(record.levelname, '')

    def format(self, record: logging.LogRecord) -> str:
        formatted_message = super().format(record)
        if not self.use_colors:
            return formatted_message
        color = self._color_for(record)
        if not color:
            return formatted_message
        return f"{color}{formatted_message}{self.RESET}"


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Route all logging through a single colored stderr handler.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(use_colors=use_colors))
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_colored_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_success(logger: logging.Logger, message: str) -> None:
    logger.info(f"{SUCCESS_MARKER} {message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    logger.info(f"{PROGRESS_MARKER} {message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    logger.info(f"{HIGHLIGHT_MARKER} {message}")
