"""
Naming Utilities for csemit.

This module provides identifier validation for declared names, namespaces
and dotted type paths. Builders call these at construction time so that bad
names fail fast with a ConstructionError.
"""

from __future__ import annotations

from typing import Optional

from .constants import CSHARP_KEYWORDS
from .exceptions import ConstructionError


# =============================================================================
# Core Naming Utilities
# =============================================================================

def is_keyword(name: str) -> bool:
    """Check whether a name is a reserved C# keyword."""
    return name in CSHARP_KEYWORDS


def is_valid_identifier(name: Optional[str]) -> bool:
    """
    Check whether a string is a legal C# identifier.

    A reserved keyword is accepted only in its verbatim form (``@class``).
    """
    if not name or not isinstance(name, str):
        return False
    if name.startswith("@"):
        return name[1:].isidentifier()
    return name.isidentifier() and not is_keyword(name)


def is_valid_namespace(namespace: str) -> bool:
    """Check a dotted namespace path; the empty string is the global namespace."""
    if namespace == "":
        return True
    return all(is_valid_identifier(part) for part in namespace.split("."))


def check_name(name: Optional[str], what: str = "name", owner: Optional[str] = None) -> str:
    """
    Validate an identifier and return it unchanged.

    Args:
        name: Identifier to validate
        what: Description used in the error message
        owner: Optional enclosing declaration for error context

    Returns:
        The validated name

    Raises:
        ConstructionError: If the name is not a legal identifier
    """
    if not is_valid_identifier(name):
        raise ConstructionError(f"not a valid {what}: {name!r}", declared_name=owner, member=name)
    return name


def is_enclosing_namespace(candidate: str, namespace: str) -> bool:
    """True if ``candidate`` is ``namespace`` or one of its parents."""
    return namespace == candidate or namespace.startswith(candidate + ".")


def needs_using(type_namespace: str, namespace: str) -> bool:
    """
    Check whether code in ``namespace`` needs a using directive for a type.

    Types in the global namespace, in ``namespace`` itself or in one of its
    parents are visible without one.
    """
    return bool(type_namespace) and not is_enclosing_namespace(type_namespace, namespace)
