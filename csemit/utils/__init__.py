"""
Utils package for csemit.

This module provides the ambient utilities shared by the formatter and the
declaration model: constants, errors, naming checks, string literals,
configuration and logging.
"""

# Core utilities
from .exceptions import (
    CsEmitError,
    ConstructionError,
    StructuralError,
    InvalidReferenceError,
    AmbiguousNameWarning,
)
from .constants import *
from .naming import *
from .string_utils import *

# Configuration and system utilities
from .config import (
    EmitterConfig,
    FormattingConfig,
    ImportsConfig,
    LoggingConfig,
    get_config,
    set_config,
    load_config,
)

from .logging import get_logger, setup_logging, EmitLogger

__all__ = [
    # Core exceptions
    "CsEmitError",
    "ConstructionError",
    "StructuralError",
    "InvalidReferenceError",
    "AmbiguousNameWarning",

    # Constants (exported via *)
    # Naming utilities (exported via *)
    # String utilities (exported via *)

    # Configuration
    "EmitterConfig",
    "FormattingConfig",
    "ImportsConfig",
    "LoggingConfig",
    "get_config",
    "set_config",
    "load_config",

    # Logging
    "get_logger",
    "setup_logging",
    "EmitLogger",
]
