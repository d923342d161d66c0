"""
Codegen module: the formatter and the two-pass emission engine.

CodeBlock holds formatted code fragments; CodeWriter renders blocks and
specs, resolving type references to short or qualified names.
"""

from .code_block import CodeBlock, CodeBlockBuilder
from .code_writer import CodeWriter, required_imports
from .line_wrapper import LineWrapper

__all__ = [
    "CodeBlock",
    "CodeBlockBuilder",
    "CodeWriter",
    "LineWrapper",
    "required_imports",
]
