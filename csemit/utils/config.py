"""
Configuration System for csemit.

This module provides a unified configuration interface for rendering
defaults (indent unit, column limit, using-directive policy) and logging.
Values come from a JSON or YAML file, with environment variable overrides.
"""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAMES,
    DEFAULT_COLUMN_LIMIT,
    DEFAULT_INDENT,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_LEVEL,
    SYSTEM_NAMESPACE,
)
from .logging import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class FormattingConfig:
    """Layout configuration for rendered files."""

    indent: str = DEFAULT_INDENT
    column_limit: int = DEFAULT_COLUMN_LIMIT
    file_scoped_namespace: bool = False


@dataclass
class ImportsConfig:
    """Using-directive configuration."""

    skip_system_usings: bool = False
    system_namespace: str = SYSTEM_NAMESPACE


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = DEFAULT_LOG_LEVEL
    enable_file_logging: bool = False
    log_file: str = DEFAULT_LOG_FILE


class EmitterConfig:
    """
    Unified configuration manager for csemit.

    Loads a single JSON or YAML file and exposes typed sections. Builders
    read their defaults from here and snapshot them at build time.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file. If None, uses
                ``$CSEMIT_CONFIG`` or the package default location.
        """
        self.config_file = self._get_config_file_path(config_file)
        self._config_data = self._load_config()

        self.formatting = self._create_formatting_config()
        self.imports = self._create_imports_config()
        self.logging = self._create_logging_config()

    def _get_config_file_path(self, config_file: Optional[str]) -> Path:
        """Get the configuration file path."""
        if config_file:
            return Path(config_file)

        env_file = os.getenv(CONFIG_ENV_VAR)
        if env_file:
            return Path(env_file)

        # Default location: first existing candidate next to the package
        config_dir = Path(__file__).parent.parent
        for name in CONFIG_FILE_NAMES:
            candidate = config_dir / name
            if candidate.exists():
                return candidate
        return config_dir / CONFIG_FILE_NAMES[-1]

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not self.config_file.exists():
            logger.debug(f"Configuration file {self.config_file} not found, using defaults")
            return {}
        try:
            with open(self.config_file, "r") as f:
                if self.config_file.suffix.lower() in (".yaml", ".yml"):
                    config_data = yaml.safe_load(f) or {}
                else:
                    config_data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Failed to load configuration from {self.config_file}: {e}")
            return {}
        logger.info(f"Loaded configuration from {self.config_file}")
        return config_data

    def _create_formatting_config(self) -> FormattingConfig:
        """Create formatting configuration from loaded data."""
        fmt_data = self._config_data.get("formatting", {})

        indent = fmt_data.get("indent", DEFAULT_INDENT)
        env_indent = os.getenv("CSEMIT_INDENT_SIZE", "")
        if env_indent.isdigit():
            indent = " " * int(env_indent)

        column_limit = fmt_data.get("column_limit", DEFAULT_COLUMN_LIMIT)
        env_limit = os.getenv("CSEMIT_COLUMN_LIMIT", "")
        if env_limit.isdigit():
            column_limit = int(env_limit)

        return FormattingConfig(
            indent=indent,
            column_limit=int(column_limit),
            file_scoped_namespace=fmt_data.get("file_scoped_namespace", False),
        )

    def _create_imports_config(self) -> ImportsConfig:
        """Create using-directive configuration from loaded data."""
        imports_data = self._config_data.get("imports", {})

        return ImportsConfig(
            skip_system_usings=imports_data.get("skip_system_usings", False),
            system_namespace=imports_data.get("system_namespace", SYSTEM_NAMESPACE),
        )

    def _create_logging_config(self) -> LoggingConfig:
        """Create logging configuration from loaded data."""
        log_data = self._config_data.get("logging", {})

        return LoggingConfig(
            level=log_data.get("level", DEFAULT_LOG_LEVEL),
            enable_file_logging=log_data.get("enable_file_logging", False),
            log_file=log_data.get("log_file", DEFAULT_LOG_FILE),
        )

    def apply_logging(self) -> None:
        """Reconfigure the csemit logger from the logging section."""
        log_file = self.logging.log_file if self.logging.enable_file_logging else None
        setup_logging(level=self.logging.level, log_file=log_file)

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as a plain dictionary."""
        return {
            "version": "1.0",
            "formatting": asdict(self.formatting),
            "imports": asdict(self.imports),
            "logging": asdict(self.logging),
        }

    def save_config(self, path: Optional[str] = None) -> None:
        """
        Save current configuration to file.

        Args:
            path: Destination; defaults to the file this config was loaded from.
                The format follows the file extension.
        """
        target = Path(path) if path else self.config_file
        with open(target, "w") as f:
            if target.suffix.lower() in (".yaml", ".yml"):
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False)
            else:
                json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Configuration saved to {target}")


# Global configuration instance
_global_config: Optional[EmitterConfig] = None


def get_config() -> EmitterConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = EmitterConfig()
    return _global_config


def set_config(config: Optional[EmitterConfig]) -> None:
    """Set (or with None, reset) the global configuration instance."""
    global _global_config
    _global_config = config


def load_config(config_file: str) -> EmitterConfig:
    """Load configuration from a specific file."""
    return EmitterConfig(config_file)
