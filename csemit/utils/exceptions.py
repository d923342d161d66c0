"""
Custom exception definitions.

This module defines the exception hierarchy for csemit errors. Every error is
raised synchronously to the immediate caller of a builder or render call and
carries enough context (declared name, member, offending format string or
reference) to be attributed without re-deriving the declaration tree.
"""

from typing import Optional


class CsEmitError(Exception):
    """
    Base exception for all csemit errors.

    This is the root exception class for all csemit-specific errors,
    providing a message plus a dictionary of context details.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize csemit error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConstructionError(CsEmitError):
    """
    Raised when a builder accretes invalid state.

    Covers bad identifiers, illegal modifier combinations, missing enum
    constants and abstract members inside concrete classes. Always raised
    from a builder method or ``build()``, never in the middle of a render.
    """

    def __init__(self, message: str, declared_name: Optional[str] = None, member: Optional[str] = None):
        """
        Initialize construction error.

        Args:
            message: Error description
            declared_name: Name of the declaration being built
            member: Optional name of the member involved
        """
        details = {}
        if declared_name is not None:
            details['declared_name'] = declared_name
        if member is not None:
            details['member'] = member

        super().__init__(message, details)
        self.declared_name = declared_name
        self.member = member


class StructuralError(CsEmitError):
    """
    Raised when a formatted block is structurally malformed.

    This covers unbalanced control-flow or statement markers and malformed
    format-string placeholders or arguments.
    """

    def __init__(self, message: str, format_string: Optional[str] = None):
        """
        Initialize structural error.

        Args:
            message: Error description
            format_string: Optional format string that triggered the error
        """
        details = {}
        if format_string is not None:
            details['format'] = repr(format_string)

        super().__init__(message, details)
        self.format_string = format_string


class InvalidReferenceError(CsEmitError):
    """
    Raised when a type reference cannot be canonicalized.

    Raised during placeholder evaluation in either emission pass, or when a
    non-type argument is supplied for a type placeholder.
    """

    def __init__(self, message: str, reference: Optional[str] = None):
        """
        Initialize invalid reference error.

        Args:
            message: Error description
            reference: Optional textual form of the offending reference
        """
        details = {}
        if reference is not None:
            details['reference'] = reference

        super().__init__(message, details)
        self.reference = reference


class AmbiguousNameWarning(UserWarning):
    """
    Issued when two distinct types claim the same simple name in one file.

    This is not an error: both references fall back to fully-qualified
    rendering and output is never blocked.
    """
