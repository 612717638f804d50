"""
Centralized logging configuration using Loguru.
Follows Single Responsibility Principle - only handles logging setup.
"""

import sys
from pathlib import Path

from loguru import logger

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_configured = False


def _resolve_level(settings) -> str:
    # LOG_LEVEL takes precedence over the DEBUG flag
    if settings.log_level:
        level = settings.log_level.upper()
        if level not in _VALID_LEVELS:
            level = "INFO"
        return level
    return "DEBUG" if settings.debug else "INFO"


def setup_logger(force: bool = False):
    """Configure logger handlers. Only configures once unless force=True."""
    global _configured

    if _configured and not force:
        return

    from .config import get_settings

    settings = get_settings()
    log_level = _resolve_level(settings)

    logger.remove()

    logger.add(
        sys.stderr,
        colorize=True,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=log_level,
    )

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            rotation="10 MB",
            retention="14 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level="DEBUG",  # File logs always DEBUG to capture everything
        )

    _configured = True


def format_exception_short(exc: BaseException, context: str = "") -> str:
    """
    Render an exception as a single compact line.

    Args:
        exc: The exception to render
        context: Optional prefix describing what was being attempted

    Returns:
        "context: ExcType: message" (context omitted when empty)
    """
    message = str(exc).strip().splitlines()[0] if str(exc).strip() else ""
    rendered = f"{type(exc).__name__}: {message}" if message else type(exc).__name__
    return f"{context}: {rendered}" if context else rendered


# Configure logger on module import
setup_logger()

__all__ = ["logger", "setup_logger", "format_exception_short"]
