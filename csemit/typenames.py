"""
Type Reference Model.

Immutable value objects describing a reference to a type: keyword types,
namespaced class names (including nested types), arrays, generic
instantiations, nullable value types and type variables. All of them compare
and hash by their canonical (fully qualified) string form, so two references
to the same canonical name are interchangeable regardless of how they were
constructed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Tuple

from .utils.constants import PRIMITIVE_KEYWORDS
from .utils.exceptions import InvalidReferenceError
from .utils.naming import is_valid_identifier, is_valid_namespace

if TYPE_CHECKING:
    from .codegen.code_writer import CodeWriter


class TypeName:
    """
    Base class for every type reference.

    Instances of the base class itself are never created; keyword types are
    represented by ``PrimitiveTypeName`` and exposed as constants here
    (``TypeName.INT``, ``TypeName.STRING``, ...).
    """

    __slots__ = ()

    VOID: "PrimitiveTypeName"
    BOOL: "PrimitiveTypeName"
    BYTE: "PrimitiveTypeName"
    SBYTE: "PrimitiveTypeName"
    CHAR: "PrimitiveTypeName"
    SHORT: "PrimitiveTypeName"
    USHORT: "PrimitiveTypeName"
    INT: "PrimitiveTypeName"
    UINT: "PrimitiveTypeName"
    LONG: "PrimitiveTypeName"
    ULONG: "PrimitiveTypeName"
    FLOAT: "PrimitiveTypeName"
    DOUBLE: "PrimitiveTypeName"
    DECIMAL: "PrimitiveTypeName"
    STRING: "PrimitiveTypeName"
    OBJECT: "PrimitiveTypeName"
    DYNAMIC: "PrimitiveTypeName"

    @property
    def canonical(self) -> str:
        """Fully qualified string form."""
        raise NotImplementedError

    def is_primitive(self) -> bool:
        """True for keyword types, which are never imported."""
        return False

    def check_canonical(self) -> None:
        """Raise InvalidReferenceError if this reference cannot be canonicalized."""

    def emit(self, writer: "CodeWriter") -> "CodeWriter":
        """Write this reference through a CodeWriter."""
        raise NotImplementedError

    def array_of(self) -> "ArrayTypeName":
        return ArrayTypeName(self)

    def nullable(self) -> "TypeName":
        if isinstance(self, NullableTypeName):
            return self
        return NullableTypeName(self)

    @staticmethod
    def keyword(name: str) -> "PrimitiveTypeName":
        """Reference a C# keyword type such as ``int`` or ``string``."""
        if name not in PRIMITIVE_KEYWORDS:
            raise InvalidReferenceError(f"not a keyword type: {name!r}", reference=name)
        return PrimitiveTypeName(name)

    @staticmethod
    def get(obj: Any) -> "TypeName":
        """
        Convert a Python object into a type reference.

        Accepts an existing TypeName, None (``void``), a builtin type (mapped
        to its C# keyword) or any other class (a ClassName derived from its
        module and qualified name).
        """
        if isinstance(obj, TypeName):
            return obj
        if obj is None or obj is type(None):
            return TypeName.VOID
        if isinstance(obj, type):
            if obj in _BUILTIN_TYPES:
                return _BUILTIN_TYPES[obj]
            return ClassName.from_type(obj)
        raise InvalidReferenceError(f"expected a type but was {obj!r}", reference=repr(obj))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TypeName):
            return NotImplemented
        return self.canonical == other.canonical

    def __hash__(self) -> int:
        return hash(self.canonical)

    def __str__(self) -> str:
        return self.canonical

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.canonical!r})"


@dataclass(frozen=True, eq=False, repr=False)
class PrimitiveTypeName(TypeName):
    """A keyword type: never imported, never qualified."""

    name: str

    @property
    def canonical(self) -> str:
        return self.name

    def is_primitive(self) -> bool:
        return True

    def emit(self, writer: "CodeWriter") -> "CodeWriter":
        return writer.emit_and_indent(self.name)


TypeName.VOID = PrimitiveTypeName("void")
TypeName.BOOL = PrimitiveTypeName("bool")
TypeName.BYTE = PrimitiveTypeName("byte")
TypeName.SBYTE = PrimitiveTypeName("sbyte")
TypeName.CHAR = PrimitiveTypeName("char")
TypeName.SHORT = PrimitiveTypeName("short")
TypeName.USHORT = PrimitiveTypeName("ushort")
TypeName.INT = PrimitiveTypeName("int")
TypeName.UINT = PrimitiveTypeName("uint")
TypeName.LONG = PrimitiveTypeName("long")
TypeName.ULONG = PrimitiveTypeName("ulong")
TypeName.FLOAT = PrimitiveTypeName("float")
TypeName.DOUBLE = PrimitiveTypeName("double")
TypeName.DECIMAL = PrimitiveTypeName("decimal")
TypeName.STRING = PrimitiveTypeName("string")
TypeName.OBJECT = PrimitiveTypeName("object")
TypeName.DYNAMIC = PrimitiveTypeName("dynamic")


@dataclass(frozen=True, eq=False, repr=False)
class ClassName(TypeName):
    """
    A named type: a dotted namespace plus a chain of simple names.

    ``simple_names`` lists the outermost type first, so ``Outer.Inner`` in
    namespace ``App`` is ``ClassName("App", ("Outer", "Inner"))``.
    """

    namespace: str
    simple_names: Tuple[str, ...]

    @staticmethod
    def get(namespace: str, simple_name: str, *nested: str) -> "ClassName":
        return ClassName(namespace, (simple_name,) + tuple(nested))

    @staticmethod
    def best_guess(name: str) -> "ClassName":
        """
        Parse a reflection-style name such as ``System.Environment+SpecialFolder``.

        The last dotted component is the type; ``+`` separates nested types.
        """
        namespace, _, type_path = name.rpartition(".")
        simple_names = tuple(type_path.split("+"))
        result = ClassName(namespace, simple_names)
        result.check_canonical()
        return result

    @staticmethod
    def from_type(cls: type) -> "ClassName":
        """Build a ClassName from a Python class object."""
        namespace = "" if cls.__module__ == "builtins" else cls.__module__
        return ClassName(namespace, tuple(cls.__qualname__.split(".")))

    @property
    def simple_name(self) -> str:
        return self.simple_names[-1] if self.simple_names else ""

    @property
    def canonical(self) -> str:
        names = ".".join(self.simple_names)
        return f"{self.namespace}.{names}" if self.namespace else names

    @property
    def reflection_name(self) -> str:
        names = "+".join(self.simple_names)
        return f"{self.namespace}.{names}" if self.namespace else names

    def enclosing_class_name(self) -> Optional["ClassName"]:
        """The directly enclosing type, or None for a top-level type."""
        if len(self.simple_names) <= 1:
            return None
        return ClassName(self.namespace, self.simple_names[:-1])

    def top_level_class_name(self) -> "ClassName":
        return ClassName(self.namespace, self.simple_names[:1])

    def nested_class(self, name: str) -> "ClassName":
        return ClassName(self.namespace, self.simple_names + (name,))

    def peer_class(self, name: str) -> "ClassName":
        return ClassName(self.namespace, self.simple_names[:-1] + (name,))

    def check_canonical(self) -> None:
        if not self.simple_names:
            raise InvalidReferenceError("class name has no simple name", reference=self.canonical)
        if not is_valid_namespace(self.namespace):
            raise InvalidReferenceError(f"malformed namespace {self.namespace!r}", reference=self.canonical)
        for simple_name in self.simple_names:
            if not is_valid_identifier(simple_name):
                raise InvalidReferenceError(f"malformed simple name {simple_name!r}", reference=self.canonical)

    def emit(self, writer: "CodeWriter") -> "CodeWriter":
        return writer.emit_and_indent(writer.lookup_name(self))


@dataclass(frozen=True, eq=False, repr=False)
class ArrayTypeName(TypeName):
    """An array of a component type, e.g. ``byte[]``."""

    component_type: TypeName

    @staticmethod
    def of(component: Any) -> "ArrayTypeName":
        return ArrayTypeName(TypeName.get(component))

    @property
    def canonical(self) -> str:
        return f"{self.component_type.canonical}[]"

    def check_canonical(self) -> None:
        self.component_type.check_canonical()

    def emit(self, writer: "CodeWriter") -> "CodeWriter":
        self.component_type.emit(writer)
        return writer.emit_and_indent("[]")


@dataclass(frozen=True, eq=False, repr=False)
class ParameterizedTypeName(TypeName):
    """A generic type applied to type arguments, e.g. ``List<string>``."""

    raw_type: ClassName
    type_arguments: Tuple[TypeName, ...]

    @staticmethod
    def get(raw_type: Any, *type_arguments: Any) -> "ParameterizedTypeName":
        raw = TypeName.get(raw_type)
        if not isinstance(raw, ClassName):
            raise InvalidReferenceError(f"generic raw type must be a class name: {raw}", reference=str(raw))
        return ParameterizedTypeName(raw, tuple(TypeName.get(arg) for arg in type_arguments))

    @property
    def canonical(self) -> str:
        args = ", ".join(arg.canonical for arg in self.type_arguments)
        return f"{self.raw_type.canonical}<{args}>"

    def check_canonical(self) -> None:
        if not self.type_arguments:
            raise InvalidReferenceError("generic type has no type arguments", reference=self.canonical)
        self.raw_type.check_canonical()
        for arg in self.type_arguments:
            arg.check_canonical()

    def emit(self, writer: "CodeWriter") -> "CodeWriter":
        self.raw_type.emit(writer)
        writer.emit_and_indent("<")
        for i, arg in enumerate(self.type_arguments):
            if i > 0:
                writer.emit_and_indent(", ")
            arg.emit(writer)
        return writer.emit_and_indent(">")


@dataclass(frozen=True, eq=False, repr=False)
class NullableTypeName(TypeName):
    """A nullable reference to an underlying type, e.g. ``int?``."""

    underlying_type: TypeName

    @property
    def canonical(self) -> str:
        return f"{self.underlying_type.canonical}?"

    def check_canonical(self) -> None:
        if isinstance(self.underlying_type, NullableTypeName):
            raise InvalidReferenceError("nullable of nullable", reference=self.canonical)
        self.underlying_type.check_canonical()

    def emit(self, writer: "CodeWriter") -> "CodeWriter":
        self.underlying_type.emit(writer)
        return writer.emit_and_indent("?")


@dataclass(frozen=True, eq=False, repr=False)
class TypeVariableName(TypeName):
    """
    A type parameter such as ``T``.

    Bounds render as ``where T : Bound`` constraint clauses on the declaring
    type or method; references to the variable are name-only and never
    imported.
    """

    name: str
    bounds: Tuple[TypeName, ...] = ()

    @staticmethod
    def get(name: str, *bounds: Any) -> "TypeVariableName":
        return TypeVariableName(name, tuple(_constraint(bound) for bound in bounds))

    def with_bounds(self, *bounds: Any) -> "TypeVariableName":
        return TypeVariableName(self.name, self.bounds + tuple(_constraint(b) for b in bounds))

    @property
    def canonical(self) -> str:
        return self.name

    def check_canonical(self) -> None:
        if not is_valid_identifier(self.name):
            raise InvalidReferenceError(f"malformed type variable {self.name!r}", reference=self.name)

    def emit(self, writer: "CodeWriter") -> "CodeWriter":
        return writer.emit_and_indent(self.name)


_BUILTIN_TYPES = {
    int: TypeName.INT,
    float: TypeName.DOUBLE,
    str: TypeName.STRING,
    bool: TypeName.BOOL,
    bytes: ArrayTypeName(TypeName.BYTE),
    object: TypeName.OBJECT,
}

# Constraint keywords accepted as type variable bounds
CONSTRAINT_KEYWORDS = frozenset({"class", "struct", "new()", "notnull", "unmanaged"})


def _constraint(bound: Any) -> TypeName:
    if isinstance(bound, str):
        if bound not in CONSTRAINT_KEYWORDS:
            raise InvalidReferenceError(f"not a constraint keyword: {bound!r}", reference=bound)
        return PrimitiveTypeName(bound)
    return TypeName.get(bound)
