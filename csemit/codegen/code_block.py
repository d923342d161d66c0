"""
Formatted Code Blocks.

A CodeBlock is an immutable sequence of format parts (literal text and
placeholders) plus the arguments those placeholders consume. Blocks are
assembled with ``CodeBlockBuilder`` from a compact format-string
mini-language:

    $L  literal value          $N  identifier or spec name
    $S  quoted string literal  $T  type reference
    $$  dollar sign            $> / $<  indent / unindent
    $[ / $]  statement begin / end
    $W  soft wrap (space or newline)   $Z  zero-width soft wrap

Placeholders may be relative (``$L``), indexed (``$2L``) or named
(``$value:L`` with ``add_named``).
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ..typenames import TypeName
from ..utils.constants import ARGUMENT_CODES, NO_ARGUMENT_CODES
from ..utils.exceptions import StructuralError

NAMED_ARGUMENT = re.compile(r"\$(?P<name>[a-z][a-zA-Z0-9_]*):(?P<code>[a-zA-Z])")
LOWERCASE_NAME = re.compile(r"[a-z]+[a-zA-Z0-9_]*")


def _is_no_arg_code(c: str) -> bool:
    return c in NO_ARGUMENT_CODES


def _count_top_level_statements(parts: Iterable[str]) -> int:
    """Count $] markers outside any indented construct such as an if body."""
    depth = 0
    count = 0
    for part in parts:
        if part == "$>":
            depth += 1
        elif part == "$<":
            depth -= 1
        elif part == "$]" and depth <= 0:
            count += 1
    return count


class CodeBlock:
    """
    An immutable fragment of code with placeholders already bound.

    ``statement_count`` is the number of top-level statements (``$]``
    markers outside indented constructs); renderers use it to pick terse
    single-expression forms.
    """

    __slots__ = ("format_parts", "args", "statement_count")

    def __init__(self, format_parts: Iterable[str], args: Iterable[Any]):
        self.format_parts: Tuple[str, ...] = tuple(format_parts)
        self.args: Tuple[Any, ...] = tuple(args)
        self.statement_count: int = _count_top_level_statements(self.format_parts)

    @staticmethod
    def of(fmt: str, *args: Any) -> "CodeBlock":
        return CodeBlockBuilder().add(fmt, *args).build()

    @staticmethod
    def builder() -> "CodeBlockBuilder":
        return CodeBlockBuilder()

    @staticmethod
    def join(blocks: Iterable["CodeBlock"], separator: str = ", ") -> "CodeBlock":
        """Join blocks with a literal separator."""
        builder = CodeBlockBuilder()
        for i, block in enumerate(blocks):
            if i > 0:
                builder.add("$L", separator)
            builder.add_block(block)
        return builder.build()

    def is_empty(self) -> bool:
        return not self.format_parts

    def is_single_statement(self) -> bool:
        """True when the block is exactly one ``$[ ... ;\\n$]`` statement."""
        parts = self.format_parts
        return (
            self.statement_count == 1
            and len(parts) >= 3
            and parts[0] == "$["
            and parts[-1] == "$]"
            and parts[-2].endswith(";\n")
        )

    def single_statement_expression(self) -> "CodeBlock":
        """
        The expression of a single-statement block, for ``=> expr;`` forms.

        The terminating ``;`` is dropped, as is a leading ``return``.
        """
        if not self.is_single_statement():
            raise StructuralError(f"block has {self.statement_count} statements, expected exactly one")
        parts = list(self.format_parts[1:-1])
        parts[-1] = parts[-1][: -len(";\n")]
        if not parts[-1]:
            parts.pop()
        if parts and not parts[0].startswith("$") and parts[0].startswith("return "):
            parts[0] = parts[0][len("return "):]
            if not parts[0]:
                parts.pop(0)
        return CodeBlock(parts, self.args)

    def to_builder(self) -> "CodeBlockBuilder":
        builder = CodeBlockBuilder()
        builder._parts.extend(self.format_parts)
        builder._args.extend(self.args)
        return builder

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, CodeBlock):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __str__(self) -> str:
        from .code_writer import CodeWriter

        return CodeWriter.render(lambda writer: writer.emit_block(self))

    def __repr__(self) -> str:
        return f"CodeBlock({str(self)!r})"


class CodeBlockBuilder:
    """Mutable accumulator for a CodeBlock."""

    def __init__(self):
        self._parts: List[str] = []
        self._args: List[Any] = []
        self._flow_depth = 0

    def is_empty(self) -> bool:
        return not self._parts

    def add(self, fmt: str, *args: Any) -> "CodeBlockBuilder":
        """
        Append a format string with relative or indexed arguments.

        Raises:
            StructuralError: On malformed placeholders or argument mismatches
        """
        has_relative = False
        has_indexed = False
        relative_index = 0
        indexed_counts = [0] * len(args)

        p = 0
        while p < len(fmt):
            if fmt[p] != "$":
                next_p = fmt.find("$", p + 1)
                if next_p == -1:
                    next_p = len(fmt)
                self._parts.append(fmt[p:next_p])
                p = next_p
                continue

            p += 1  # '$'

            # Consume zero or more digits, leaving 'c' as the first non-digit char
            index_start = p
            while True:
                if p >= len(fmt):
                    raise StructuralError("dangling format characters", format_string=fmt)
                c = fmt[p]
                p += 1
                if not c.isdigit():
                    break
            index_end = p - 1

            if _is_no_arg_code(c):
                if index_start != index_end:
                    raise StructuralError(
                        "$$, $>, $<, $[, $], $W, and $Z may not have an index", format_string=fmt
                    )
                self._parts.append("$" + c)
                continue

            if index_start < index_end:
                index = int(fmt[index_start:index_end]) - 1
                has_indexed = True
                if args:
                    indexed_counts[index % len(args)] += 1
            else:
                index = relative_index
                has_relative = True
                relative_index += 1

            if index < 0 or index >= len(args):
                raise StructuralError(
                    f"index {index + 1} for '{fmt[index_start - 1:index_end + 1]}' not in range "
                    f"(received {len(args)} arguments)",
                    format_string=fmt,
                )
            if has_indexed and has_relative:
                raise StructuralError("cannot mix indexed and positional parameters", format_string=fmt)

            self._add_argument(fmt, c, args[index])
            self._parts.append("$" + c)

        if has_relative and relative_index < len(args):
            raise StructuralError(
                f"unused arguments: expected {relative_index}, received {len(args)}", format_string=fmt
            )
        if has_indexed:
            unused = [str(i + 1) for i, count in enumerate(indexed_counts) if count == 0]
            if unused:
                raise StructuralError(f"unused argument(s): ${', $'.join(unused)}", format_string=fmt)
        return self

    def add_named(self, fmt: str, arguments: Mapping[str, Any]) -> "CodeBlockBuilder":
        """Append a format string whose placeholders are ``$name:X``."""
        for name in arguments:
            if not LOWERCASE_NAME.fullmatch(name):
                raise StructuralError(f"argument '{name}' must start with a lowercase character")

        p = 0
        while p < len(fmt):
            next_p = fmt.find("$", p)
            if next_p == -1:
                self._parts.append(fmt[p:])
                break
            if p != next_p:
                self._parts.append(fmt[p:next_p])
                p = next_p

            match = NAMED_ARGUMENT.match(fmt, p)
            if match:
                name, code = match.group("name"), match.group("code")
                if name not in arguments:
                    raise StructuralError(f"missing named argument for ${name}", format_string=fmt)
                self._add_argument(fmt, code, arguments[name])
                self._parts.append("$" + code)
                p = match.end()
            else:
                if p >= len(fmt) - 1:
                    raise StructuralError("dangling $ at end", format_string=fmt)
                if not _is_no_arg_code(fmt[p + 1]):
                    raise StructuralError(f"unknown format ${fmt[p + 1]} at {p + 1}", format_string=fmt)
                self._parts.append(fmt[p:p + 2])
                p += 2
        return self

    def _add_argument(self, fmt: str, c: str, arg: Any) -> None:
        if c not in ARGUMENT_CODES:
            raise StructuralError(f"invalid format string placeholder ${c}", format_string=fmt)
        if c == "N":
            self._args.append(self._arg_to_name(fmt, arg))
        elif c == "L":
            self._args.append(arg)
        elif c == "S":
            self._args.append(None if arg is None else str(arg))
        else:
            self._args.append(TypeName.get(arg))

    @staticmethod
    def _arg_to_name(fmt: str, arg: Any) -> str:
        if isinstance(arg, str):
            return arg
        name = getattr(arg, "name", None)
        if isinstance(name, str):
            return name
        raise StructuralError(f"expected name but was {arg!r}", format_string=fmt)

    def add_block(self, block: CodeBlock) -> "CodeBlockBuilder":
        """Append every part and argument of an already-built block."""
        self._parts.extend(block.format_parts)
        self._args.extend(block.args)
        return self

    def add_statement(self, fmt: str, *args: Any) -> "CodeBlockBuilder":
        self.add("$[")
        self.add(fmt, *args)
        self.add(";\n$]")
        return self

    def add_comment(self, fmt: str, *args: Any) -> "CodeBlockBuilder":
        return self.add("// " + fmt + "\n", *args)

    def begin_control_flow(self, control_flow: str, *args: Any) -> "CodeBlockBuilder":
        """
        Open a braced construct such as ``if (x)`` or ``foreach (var y in z)``.

        Args:
            control_flow: Header text of the construct, without the brace
        """
        self.add(control_flow + " {\n", *args)
        self.indent()
        self._flow_depth += 1
        return self

    def next_control_flow(self, control_flow: str, *args: Any) -> "CodeBlockBuilder":
        """Close the current branch and open an alternate one (``} else {``)."""
        if self._flow_depth == 0:
            raise StructuralError("next_control_flow without begin_control_flow", format_string=control_flow)
        self.unindent()
        self.add("} " + control_flow + " {\n", *args)
        self.indent()
        return self

    def end_control_flow(self, control_flow: Optional[str] = None, *args: Any) -> "CodeBlockBuilder":
        """
        Close the current construct.

        Args:
            control_flow: Optional trailing clause, e.g. ``while (more)``
        """
        if self._flow_depth == 0:
            raise StructuralError("end_control_flow without begin_control_flow", format_string=control_flow)
        self._flow_depth -= 1
        self.unindent()
        if control_flow is None:
            self.add("}\n")
        else:
            self.add("} " + control_flow + ";\n", *args)
        return self

    def indent(self) -> "CodeBlockBuilder":
        self._parts.append("$>")
        return self

    def unindent(self) -> "CodeBlockBuilder":
        self._parts.append("$<")
        return self

    def clear(self) -> "CodeBlockBuilder":
        self._parts.clear()
        self._args.clear()
        self._flow_depth = 0
        return self

    def build(self) -> CodeBlock:
        """
        Snapshot the builder into an immutable CodeBlock.

        Raises:
            StructuralError: If control flow or statement markers are unbalanced
        """
        if self._flow_depth != 0:
            raise StructuralError(f"{self._flow_depth} control flow block(s) were never closed")
        in_statement = False
        for part in self._parts:
            if part == "$[":
                if in_statement:
                    raise StructuralError("statement enter $[ followed by statement enter $[")
                in_statement = True
            elif part == "$]":
                if not in_statement:
                    raise StructuralError("statement exit $] has no matching statement enter $[")
                in_statement = False
        if in_statement:
            raise StructuralError("statement enter $[ has no matching statement exit $]")
        return CodeBlock(self._parts, self._args)


CodeBlock.Builder = CodeBlockBuilder
