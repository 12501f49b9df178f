"""
Markup context logger.

Provides logging interface for the markup context with automatic [markup] prefix.
All markup modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from clausemark.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[markup]"


def setup_markup_logger(log_dir: Path, visitor: str = "pdfmake") -> Path:
    """
    Setup logger for the markup context.

    Args:
        log_dir: Directory for this session
        visitor: Name of the visitor being run, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="markup",
        log_dir=log_dir,
        extra_provenance={"Visitor": visitor},
    )


def _log_info(message: str) -> None:
    """Log info message with [markup] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [markup] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [markup] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [markup] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [markup] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")
