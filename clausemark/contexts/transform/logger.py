"""
Transform context logger.

Provides logging interface for transform context with automatic [transform] prefix.
All transform modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import List

from loguru import logger

from clausemark.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[transform]"


def setup_transform_logger(log_dir: Path, source_format: str, destination_formats: List[str]) -> Path:
    """
    Setup logger for transform context.

    Args:
        log_dir: Directory for this transform session
        source_format: Format of the input document
        destination_formats: Requested conversion chain

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="transform",
        log_dir=log_dir,
        extra_provenance={
            "Source format": source_format,
            "Chain": " -> ".join([source_format] + list(destination_formats)),
        },
    )


def _log_info(message: str) -> None:
    """Log info message with [transform] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [transform] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [transform] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [transform] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [transform] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
