"""
Two-Pass Emission Engine.

A CodeWriter renders CodeBlocks and declaration specs to text. Rendering a
file takes two writers over the same declaration tree:

1. a *collecting* writer, whose output is discarded, records which simple
   names each referenced type could be imported under;
2. an *emitting* writer is built from the surviving claims
   (``suggested_imports()``) and produces the final text with short names
   wherever a reference is unambiguous.

Both passes walk the tree in exactly the same order, so the decisions of
pass 1 line up with the references seen in pass 2.
"""

from __future__ import annotations

import io
import warnings
from collections import namedtuple
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set

from ..modifiers import Modifier, sorted_modifiers
from ..typenames import ClassName, TypeName, TypeVariableName
from ..utils.constants import CONTINUATION_INDENT_LEVELS, DEFAULT_COLUMN_LIMIT, DEFAULT_INDENT
from ..utils.exceptions import AmbiguousNameWarning, StructuralError
from ..utils.logging import EmitLogger, get_logger
from ..utils.naming import needs_using
from ..utils.string_utils import string_literal
from .code_block import CodeBlock
from .line_wrapper import LineWrapper

logger = get_logger(__name__)

# A lexical scope: an open type declaration and the nested type names it makes visible
Scope = namedtuple("Scope", ["name", "nested_type_names"])


class _NullSink:
    """Write target that discards everything; used by the collecting pass."""

    def write(self, s: str) -> int:
        return len(s)


class CodeWriter:
    """
    Converts CodeBlocks and specs to text, resolving type references.

    Args:
        out: Text sink with a ``write`` method
        indent: Indent unit
        imported_types: Simple name to ClassName map decided by a collecting
            pass. ``None`` makes this writer a collecting writer that
            records claims instead.
        static_usings: Canonical type name to the member names imported with
            ``using static``; an empty set imports every member.
        namespace: Namespace of the file being rendered
        column_limit: Soft wrap column
    """

    def __init__(
        self,
        out: Any,
        indent: str = DEFAULT_INDENT,
        imported_types: Optional[Mapping[str, ClassName]] = None,
        static_usings: Optional[Mapping[str, Iterable[str]]] = None,
        namespace: str = "",
        column_limit: int = DEFAULT_COLUMN_LIMIT,
    ):
        self.out = LineWrapper(out, indent, column_limit)
        self.indent_unit = indent
        self.namespace = namespace
        self.indent_level = 0
        self.doc = False
        self.comment = False
        self.trailing_newline = False
        # -1 outside a statement, else the number of lines the statement spans so far
        self.statement_line = -1

        self.collecting = imported_types is None
        self._imported_types: Dict[str, ClassName] = dict(imported_types or {})
        self._static_usings: Dict[str, frozenset] = {
            canonical: frozenset(members) for canonical, members in (static_usings or {}).items()
        }
        self._scopes: List[Scope] = []
        self._type_variables: List[Set[str]] = []
        self._importable_types: Dict[str, ClassName] = {}
        self._ambiguous_names: Set[str] = set()
        self._emit_logger = EmitLogger("codegen.code_writer")

    @classmethod
    def collecting_writer(
        cls,
        indent: str = DEFAULT_INDENT,
        static_usings: Optional[Mapping[str, Iterable[str]]] = None,
        namespace: str = "",
        column_limit: int = DEFAULT_COLUMN_LIMIT,
    ) -> "CodeWriter":
        """A pass-1 writer over a discarding sink."""
        return cls(_NullSink(), indent, None, static_usings, namespace, column_limit)

    @classmethod
    def render(cls, emit: Callable[["CodeWriter"], Any], indent: str = DEFAULT_INDENT) -> str:
        """Render in a single pass with no imports; every type is fully qualified."""
        out = io.StringIO()
        writer = cls(out, indent, imported_types={})
        emit(writer)
        writer.close()
        return out.getvalue()

    # -------------------------------------------------------------------------
    # Import resolution
    # -------------------------------------------------------------------------

    @property
    def imported_types(self) -> Dict[str, ClassName]:
        return dict(self._imported_types)

    @property
    def ambiguous_names(self) -> frozenset:
        return frozenset(self._ambiguous_names)

    def suggested_imports(self) -> Dict[str, ClassName]:
        """Claims that survived the collecting pass, keyed by simple name."""
        return {
            simple_name: class_name
            for simple_name, class_name in self._importable_types.items()
            if simple_name not in self._ambiguous_names
        }

    def push_type(self, type_spec: Any, include_nested: bool = True) -> "CodeWriter":
        nested = type_spec.nested_type_names if include_nested else frozenset()
        self._scopes.append(Scope(type_spec.name, nested))
        return self

    def pop_type(self) -> "CodeWriter":
        self._scopes.pop()
        return self

    def push_type_variables(self, type_variables: Iterable[TypeVariableName]) -> "CodeWriter":
        self._type_variables.append({tv.name for tv in type_variables})
        return self

    def pop_type_variables(self) -> "CodeWriter":
        self._type_variables.pop()
        return self

    def lookup_name(self, class_name: ClassName) -> str:
        """
        Return the shortest text that refers to ``class_name`` from here.

        A suffix is used when one of the name's enclosing chain is visible
        from the open scopes or imports; a visible but different type forces
        the canonical name.
        """
        top_level_simple_name = class_name.top_level_class_name().simple_name
        if any(top_level_simple_name in names for names in self._type_variables):
            return class_name.canonical

        name_resolved = False
        c = class_name
        while c is not None:
            resolved = self._resolve(c.simple_name)
            name_resolved = resolved is not None
            if resolved is not None and resolved.canonical == c.canonical:
                suffix_offset = len(c.simple_names) - 1
                return ".".join(class_name.simple_names[suffix_offset:])
            c = c.enclosing_class_name()

        # Shadowed by a different visible type
        if name_resolved:
            return class_name.canonical

        if self.collecting:
            self._claim(class_name)
        return class_name.canonical

    def _claim(self, class_name: ClassName) -> None:
        top_level = class_name.top_level_class_name()
        simple_name = top_level.simple_name
        claimed = self._importable_types.get(simple_name)
        if claimed is None:
            self._importable_types[simple_name] = top_level
            return
        if claimed != top_level and simple_name not in self._ambiguous_names:
            self._ambiguous_names.add(simple_name)
            warnings.warn(
                f"'{simple_name}' refers to both {claimed.canonical} and {top_level.canonical}",
                AmbiguousNameWarning,
                stacklevel=2,
            )
            self._emit_logger.log_ambiguous_name(simple_name, claimed.canonical, top_level.canonical)

    def _resolve(self, simple_name: str) -> Optional[ClassName]:
        # A nested type of any open scope, innermost first
        for i in range(len(self._scopes) - 1, -1, -1):
            if simple_name in self._scopes[i].nested_type_names:
                return self._stack_class_name(i, simple_name)

        if self._scopes and self._scopes[0].name == simple_name:
            return ClassName(self.namespace, (simple_name,))

        return self._imported_types.get(simple_name)

    def _stack_class_name(self, depth: int, simple_name: str) -> ClassName:
        names = tuple(scope.name for scope in self._scopes[: depth + 1])
        return ClassName(self.namespace, names + (simple_name,))

    def _emit_static_member(self, canonical: str, part: str) -> bool:
        member_text = part[1:]
        if not member_text or not (member_text[0].isalpha() or member_text[0] == "_"):
            return False
        end = 1
        while end < len(member_text) and (member_text[end].isalnum() or member_text[end] == "_"):
            end += 1
        members = self._static_usings[canonical]
        if members and member_text[:end] not in members:
            return False
        self.emit_and_indent(member_text)
        return True

    # -------------------------------------------------------------------------
    # Indentation
    # -------------------------------------------------------------------------

    def indent(self, levels: int = 1) -> "CodeWriter":
        self.indent_level += levels
        return self

    def unindent(self, levels: int = 1) -> "CodeWriter":
        if self.indent_level - levels < 0:
            raise StructuralError(f"cannot unindent {levels} from {self.indent_level}")
        self.indent_level -= levels
        return self

    def _emit_indentation(self) -> None:
        self.out.append(self.indent_unit * self.indent_level)

    # -------------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------------

    def emit(self, fmt: str, *args: Any) -> "CodeWriter":
        return self.emit_block(CodeBlock.of(fmt, *args))

    def emit_block(self, block: CodeBlock, ensure_trailing_newline: bool = False) -> "CodeWriter":
        """
        Emit a CodeBlock, evaluating each placeholder against this writer.

        Raises:
            StructuralError: On unbalanced statement markers
            InvalidReferenceError: On a malformed type reference
        """
        a = 0
        deferred_type_name: Optional[ClassName] = None
        parts = block.format_parts
        for index, part in enumerate(parts):
            if part == "$L":
                self._emit_literal(block.args[a])
                a += 1
            elif part == "$N":
                self.emit_and_indent(block.args[a])
                a += 1
            elif part == "$S":
                self.emit_and_indent(string_literal(block.args[a], self.indent_unit))
                a += 1
            elif part == "$T":
                type_name = block.args[a]
                a += 1
                type_name.check_canonical()
                # Defer "Type" when ".Member" follows and the type is statically imported
                if (
                    isinstance(type_name, ClassName)
                    and index + 1 < len(parts)
                    and not parts[index + 1].startswith("$")
                    and type_name.canonical in self._static_usings
                ):
                    deferred_type_name = type_name
                    continue
                type_name.emit(self)
            elif part == "$$":
                self.emit_and_indent("$")
            elif part == "$>":
                self.indent()
            elif part == "$<":
                self.unindent()
            elif part == "$[":
                if self.statement_line != -1:
                    raise StructuralError("statement enter $[ followed by statement enter $[")
                self.statement_line = 0
            elif part == "$]":
                if self.statement_line == -1:
                    raise StructuralError("statement exit $] has no matching statement enter $[")
                if self.statement_line > 0:
                    self.unindent(CONTINUATION_INDENT_LEVELS)
                self.statement_line = -1
            elif part == "$W":
                self.out.wrapping_space(self.indent_level + CONTINUATION_INDENT_LEVELS)
            elif part == "$Z":
                self.out.zero_width_space(self.indent_level + CONTINUATION_INDENT_LEVELS)
            else:
                if deferred_type_name is not None:
                    if part.startswith(".") and self._emit_static_member(deferred_type_name.canonical, part):
                        deferred_type_name = None
                        continue
                    deferred_type_name.emit(self)
                    deferred_type_name = None
                self.emit_and_indent(part)

        if ensure_trailing_newline and self.out.last_char != "\n":
            self.emit("\n")
        return self

    def _emit_literal(self, value: Any) -> None:
        if isinstance(value, CodeBlock):
            self.emit_block(value)
        elif hasattr(value, "emit_literal"):
            value.emit_literal(self)
        elif isinstance(value, bool):
            self.emit_and_indent("true" if value else "false")
        elif value is None:
            self.emit_and_indent("null")
        else:
            self.emit_and_indent(str(value))

    def emit_and_indent(self, s: str) -> "CodeWriter":
        """
        Emit raw text, indenting each new line.

        Inside documentation or comments each line also gets its ``///`` or
        ``//`` prefix. The second line of a statement starts a continuation
        and indents the rest of the statement.
        """
        first = True
        for line in s.split("\n"):
            if not first:
                if (self.doc or self.comment) and self.trailing_newline:
                    self._emit_indentation()
                    self.out.append("///" if self.doc else "//")
                self.out.append("\n")
                self.trailing_newline = True
                if self.statement_line != -1:
                    if self.statement_line == 0:
                        self.indent(CONTINUATION_INDENT_LEVELS)
                    self.statement_line += 1
            first = False
            if not line:
                continue

            if self.trailing_newline:
                self._emit_indentation()
                if self.doc:
                    self.out.append("/// ")
                elif self.comment:
                    self.out.append("// ")
            self.out.append(line)
            self.trailing_newline = False
        return self

    def emit_comment(self, block: CodeBlock) -> "CodeWriter":
        # Force the "//" prefix on the first line
        self.trailing_newline = True
        self.comment = True
        try:
            self.emit_block(block)
            self.emit("\n")
        finally:
            self.comment = False
        return self

    def emit_doc(self, block: CodeBlock) -> "CodeWriter":
        if block.is_empty():
            return self
        self.trailing_newline = True
        self.doc = True
        try:
            self.emit_block(block, ensure_trailing_newline=True)
        finally:
            self.doc = False
        return self

    def emit_attributes(self, attributes: Iterable[Any], inline: bool) -> "CodeWriter":
        for attribute in attributes:
            attribute.emit(self, inline)
            self.emit(" " if inline else "\n")
        return self

    def emit_modifiers(self, modifiers: Iterable[Modifier], implicit_modifiers: Iterable[Modifier] = ()) -> "CodeWriter":
        """Emit modifiers in canonical order, skipping the implicit ones."""
        implicit = frozenset(implicit_modifiers)
        for modifier in sorted_modifiers(modifiers):
            if modifier in implicit:
                continue
            self.emit_and_indent(modifier.keyword)
            self.emit_and_indent(" ")
        return self

    def emit_type_variables(self, type_variables: Iterable[TypeVariableName]) -> "CodeWriter":
        type_variables = list(type_variables)
        if not type_variables:
            return self
        self.emit("<")
        for i, type_variable in enumerate(type_variables):
            if i > 0:
                self.emit(", ")
            self.emit("$L", type_variable.name)
        self.emit(">")
        return self

    def emit_type_constraints(self, type_variables: Iterable[TypeVariableName]) -> "CodeWriter":
        """Emit `` where T : Bound`` clauses for every bounded type variable."""
        for type_variable in type_variables:
            if not type_variable.bounds:
                continue
            self.emit(" where $L : ", type_variable.name)
            for i, bound in enumerate(type_variable.bounds):
                if i > 0:
                    self.emit(", ")
                if bound.is_primitive():
                    self.emit("$L", bound.canonical)
                else:
                    self.emit("$T", bound)
        return self

    def close(self) -> None:
        self.out.close()


def required_imports(spec: Any, namespace: str = "") -> List[str]:
    """
    Run a collecting pass over a spec, block or type and list what it imports.

    Types in the global namespace, in ``namespace`` or in one of its parents
    are visible without a using directive and are left out.

    Returns:
        Sorted canonical names of the types that would be imported
    """
    writer = CodeWriter.collecting_writer(namespace=namespace)
    if isinstance(spec, CodeBlock):
        writer.emit_block(spec)
    else:
        spec.emit(writer)
    writer.close()
    imports = sorted(
        class_name.canonical
        for class_name in writer.suggested_imports().values()
        if needs_using(class_name.namespace, namespace)
    )
    logger.debug(f"Collected {len(imports)} imports for {namespace or '<global>'}")
    return imports
