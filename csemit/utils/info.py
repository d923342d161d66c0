"""
Package information utility.

This module provides a command-line utility for displaying
information about the csemit installation, its active configuration
and the environment.
"""

import sys
import platform
from typing import Dict, Any

import yaml

import csemit
from .config import get_config


def get_system_info() -> Dict[str, Any]:
    """
    Get system information relevant to csemit.

    Returns:
        Dictionary containing system information
    """
    return {
        'python_version': sys.version,
        'platform': platform.platform(),
        'architecture': platform.architecture(),
        'processor': platform.processor(),
        'yaml_version': yaml.__version__,
    }


def get_csemit_info() -> Dict[str, Any]:
    """
    Get csemit-specific information.

    Returns:
        Dictionary containing version and configuration information
    """
    info = {
        'version': csemit.__version__,
        'author': csemit.__author__,
    }

    try:
        config = get_config()
        info['config_file'] = str(config.config_file)
        info['config_file_exists'] = config.config_file.exists()
        info['config'] = config.to_dict()
    except Exception as e:
        info['config_error'] = str(e)

    return info


def print_info() -> None:
    """Print formatted information about csemit and the system."""
    print("csemit C# Source Emitter")
    print("=" * 40)

    # csemit information
    csemit_info = get_csemit_info()
    print(f"\ncsemit Version: {csemit_info['version']}")
    print(f"Author: {csemit_info['author']}")

    if 'config_error' in csemit_info:
        print(f"Configuration Error: {csemit_info['config_error']}")
    else:
        source = csemit_info['config_file'] if csemit_info['config_file_exists'] else "defaults"
        formatting = csemit_info['config']['formatting']
        imports = csemit_info['config']['imports']
        print(f"Configuration: {source}")
        print(f"Indent: {formatting['indent']!r}")
        print(f"Column Limit: {formatting['column_limit']}")
        print(f"File-Scoped Namespaces: {formatting['file_scoped_namespace']}")
        print(f"Skip System Usings: {imports['skip_system_usings']}")

    # System information
    system_info = get_system_info()
    print(f"\nPython Version: {system_info['python_version'].split()[0]}")
    print(f"Platform: {system_info['platform']}")
    print(f"Architecture: {system_info['architecture'][0]}")
    print(f"PyYAML Version: {system_info['yaml_version']}")


def main() -> None:
    """Main entry point for the csemit-info command."""
    try:
        print_info()
    except Exception as e:
        print(f"Error getting system information: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
