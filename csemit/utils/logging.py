"""
Logging configuration and utilities.

This module provides centralized logging configuration for the
csemit package with appropriate formatting and levels.
"""

import logging
import os
from typing import Iterable, Optional

from .constants import DEFAULT_LOG_LEVEL


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the csemit package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
    """
    # Determine log level
    if level is None:
        level = os.environ.get("CSEMIT_LOG_LEVEL", DEFAULT_LOG_LEVEL)

    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("csemit")
    logger.setLevel(log_level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(f"csemit.{name}")


class EmitLogger:
    """
    Centralized logging for rendering and file output.

    This class provides specialized logging methods for the stages of
    the two-pass emission pipeline.
    """

    def __init__(self, name: str):
        """
        Initialize logger for specific component.

        Args:
            name: Component name for logging context
        """
        self.logger = get_logger(name)

    def log_render_start(self, namespace: str, type_name: Optional[str]) -> None:
        """
        Log beginning of a file render.

        Args:
            namespace: Namespace of the file being rendered
            type_name: Name of the top-level declaration
        """
        qualified = f"{namespace}.{type_name}" if namespace else str(type_name)
        self.logger.debug(f"Rendering {qualified}")

    def log_imports_resolved(self, imports: Iterable[str], ambiguous: Iterable[str]) -> None:
        """
        Log the outcome of the collection pass.

        Args:
            imports: Namespaces that will be imported
            ambiguous: Simple names that must stay fully qualified
        """
        imports = list(imports)
        ambiguous = sorted(ambiguous)
        self.logger.debug(f"Resolved {len(imports)} usings, {len(ambiguous)} ambiguous names {ambiguous}")

    def log_ambiguous_name(self, simple_name: str, first: str, second: str) -> None:
        """
        Log a simple-name collision between two distinct types.

        Args:
            simple_name: The contested simple name
            first: Canonical name of the type that claimed it first
            second: Canonical name of the conflicting type
        """
        self.logger.info(f"Name '{simple_name}' is ambiguous ({first} vs {second}); using qualified names")

    def log_file_written(self, path: str, size: int) -> None:
        """
        Log a rendered file written to disk.

        Args:
            path: Output path
            size: Number of characters written
        """
        self.logger.info(f"Wrote {path} ({size} chars)")


# Initialize logging on module import
setup_logging()
