"""
loguru setup for the resume builder.

Modules log through `context_logger("editor")` etc. so every line carries a
bracketed prefix naming where it came from.
"""

import sys

from loguru import logger

from .config import get_log_level, get_logs_path

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(level: str = None):
    """
    Configure loguru sinks.

    Console sink at LOG_LEVEL (or `level`), plus a DEBUG file sink under
    LOGS_PATH when that variable is set.

    Returns:
        Path to the log file, or None when only the console is used
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level=level or get_log_level(),
        colorize=True,
    )

    log_dir = get_logs_path()
    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "resume_builder.log"
    logger.add(
        log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG"
    )
    return log_file


class ContextLogger:
    """Thin wrapper adding a `[context]` prefix to every message."""

    def __init__(self, context: str):
        self.prefix = f"[{context}]"

    def debug(self, message: str) -> None:
        logger.debug(f"{self.prefix} {message}")

    def info(self, message: str) -> None:
        logger.info(f"{self.prefix} {message}")

    def success(self, message: str) -> None:
        logger.success(f"{self.prefix} {message}")

    def warning(self, message: str) -> None:
        logger.warning(f"{self.prefix} {message}")

    def error(self, message: str) -> None:
        logger.error(f"{self.prefix} {message}")

    def exception(self, message: str) -> None:
        # opt(exception=True) attaches the active traceback
        logger.opt(exception=True).error(f"{self.prefix} {message}")


def context_logger(context: str) -> ContextLogger:
    return ContextLogger(context)
