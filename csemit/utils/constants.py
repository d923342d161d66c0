"""
Constants for csemit.

This module consolidates the constant definitions used across the package,
providing a single source of truth for formatting defaults, C# keywords and
other fixed data.
"""

from __future__ import annotations


# =============================================================================
# Formatting Constants
# =============================================================================

DEFAULT_INDENT = "\t"
DEFAULT_COLUMN_LIMIT = 100

# Continuation lines of a wrapped statement are indented by this many units
CONTINUATION_INDENT_LEVELS = 2

# File extensions and paths
CSHARP_FILE_EXTENSION = ".cs"

# Debug and logging constants
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "csemit.log"

# Namespace whose usings may be suppressed (implicit global usings)
SYSTEM_NAMESPACE = "System"

# Special method names
CONSTRUCTOR_NAME = ".ctor"

# Config file discovery
CONFIG_FILE_NAMES = ["csemit_config.yaml", "csemit_config.yml", "csemit_config.json"]
CONFIG_ENV_VAR = "CSEMIT_CONFIG"


# =============================================================================
# Format String Placeholders
# =============================================================================

# Placeholders that consume an argument
ARGUMENT_CODES = frozenset("LNST")

# Placeholders that take no argument
NO_ARGUMENT_CODES = frozenset("$><[]WZ")


# =============================================================================
# C# Language Constants
# =============================================================================

CSHARP_KEYWORDS = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
    "char", "checked", "class", "const", "continue", "decimal", "default",
    "delegate", "do", "double", "else", "enum", "event", "explicit",
    "extern", "false", "finally", "fixed", "float", "for", "foreach", "goto",
    "if", "implicit", "in", "int", "interface", "internal", "is", "lock",
    "long", "namespace", "new", "null", "object", "operator", "out",
    "override", "params", "private", "protected", "public", "readonly", "ref",
    "return", "sbyte", "sealed", "short", "sizeof", "stackalloc", "static",
    "string", "struct", "switch", "this", "throw", "true", "try", "typeof",
    "uint", "ulong", "unchecked", "unsafe", "ushort", "using", "virtual",
    "void", "volatile", "while",
})

# Keyword spellings usable as types
PRIMITIVE_KEYWORDS = frozenset({
    "void", "bool", "byte", "sbyte", "char", "short", "ushort", "int", "uint",
    "long", "ulong", "float", "double", "decimal", "string", "object",
    "dynamic", "var", "nint", "nuint",
})

# Operators that can be overloaded with `operator <symbol>`
OVERLOADABLE_OPERATORS = frozenset({
    "+", "-", "!", "~", "++", "--", "true", "false", "*", "/", "%", "&", "|",
    "^", "<<", ">>", ">>>", "==", "!=", "<", ">", "<=", ">=",
})
