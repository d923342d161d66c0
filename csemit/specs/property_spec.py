"""
Property Specs.

A property is an accessor pair: a getter plus a setter (or ``init``
accessor), either of which may be absent. Each declared accessor is
auto-implemented (``get;``) or has a body. Rendering picks the tersest form
that represents the accessors faithfully:

1. A lone getter whose body is one statement renders as an expression-bodied
   property: ``public double X => Math.Sqrt(_x);``
2. When every declared accessor is auto-implemented the accessors share one
   line: ``public string Name { get; private set; } = "";``
3. Otherwise each accessor gets its own line inside braces, as
   ``get => expr;`` for a single statement or with a braced body.

Indexers are properties named ``this`` with a parameter list.
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, List, Optional

from ..codegen.code_block import CodeBlock, CodeBlockBuilder
from ..codegen.code_writer import CodeWriter
from ..modifiers import VISIBILITY_MODIFIERS, Modifier
from ..typenames import TypeName
from ..utils.exceptions import ConstructionError
from ..utils.naming import check_name
from .attribute_spec import AttributeSpec
from .parameter_spec import ParameterSpec
from .spec_base import Spec

INDEXER_NAME = "this"


@dataclass(frozen=True)
class AccessorSpec:
    """One accessor of a property; a ``None`` body means auto-implemented."""

    keyword: str
    modifiers: FrozenSet[Modifier] = frozenset()
    body: Optional[CodeBlock] = None

    def is_auto(self) -> bool:
        return self.body is None

    def is_single_statement(self) -> bool:
        return self.body is not None and self.body.is_single_statement()

    def emit(self, writer: CodeWriter) -> None:
        writer.emit_modifiers(self.modifiers)
        writer.emit("$L", self.keyword)
        if self.body is None:
            writer.emit(";\n")
        elif self.body.is_single_statement():
            writer.emit(" => $L;\n", self.body.single_statement_expression())
        else:
            writer.emit(" {\n")
            writer.indent()
            writer.emit_block(self.body, ensure_trailing_newline=True)
            writer.unindent()
            writer.emit("}\n")


class PropertySpec(Spec):
    """A built property or indexer."""

    __slots__ = (
        "type", "name", "doc", "attributes", "modifiers", "parameters",
        "getter", "setter", "initializer",
    )

    def __init__(self, builder: "PropertySpecBuilder"):
        self.type: TypeName = builder.type
        self.name: str = builder.name
        self.doc: CodeBlock = builder._doc.build()
        self.attributes = tuple(builder._attributes)
        self.modifiers: FrozenSet[Modifier] = frozenset(builder._modifiers)
        self.parameters = tuple(builder._parameters)
        self.getter: Optional[AccessorSpec] = builder._getter
        self.setter: Optional[AccessorSpec] = builder._setter
        self.initializer: Optional[CodeBlock] = builder._initializer

    @staticmethod
    def builder(type_: Any, name: str, *modifiers: Modifier) -> "PropertySpecBuilder":
        return PropertySpecBuilder(type_, check_name(name, "property name")).add_modifiers(*modifiers)

    @staticmethod
    def indexer_builder(type_: Any, *modifiers: Modifier) -> "PropertySpecBuilder":
        return PropertySpecBuilder(type_, INDEXER_NAME).add_modifiers(*modifiers)

    @property
    def accessors(self) -> List[AccessorSpec]:
        return [accessor for accessor in (self.getter, self.setter) if accessor is not None]

    def is_indexer(self) -> bool:
        return self.name == INDEXER_NAME

    def has_modifier(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers

    def is_expression_bodied(self) -> bool:
        return (
            self.setter is None
            and self.getter is not None
            and not self.getter.modifiers
            and self.getter.is_single_statement()
        )

    def emit(self, writer: CodeWriter, implicit_modifiers: Iterable[Modifier] = ()) -> None:
        writer.emit_doc(self.doc)
        writer.emit_attributes(self.attributes, False)
        writer.emit_modifiers(self.modifiers, implicit_modifiers)
        writer.emit("$T ", self.type)
        if self.is_indexer():
            writer.emit("this[$Z")
            for i, parameter in enumerate(self.parameters):
                if i > 0:
                    writer.emit(",$W")
                parameter.emit(writer)
            writer.emit("]")
        else:
            writer.emit("$L", self.name)

        accessors = self.accessors
        if self.is_expression_bodied():
            writer.emit(" => $L;\n", self.getter.body.single_statement_expression())
        elif all(accessor.is_auto() for accessor in accessors):
            writer.emit(" {")
            for accessor in accessors:
                writer.emit(" ")
                writer.emit_modifiers(accessor.modifiers)
                writer.emit("$L;", accessor.keyword)
            writer.emit(" }")
            if self.initializer is not None:
                writer.emit(" = $L;", self.initializer)
            writer.emit("\n")
        else:
            writer.emit(" {\n")
            writer.indent()
            for accessor in accessors:
                accessor.emit(writer)
            writer.unindent()
            writer.emit("}\n")

    def to_builder(self) -> "PropertySpecBuilder":
        builder = PropertySpecBuilder(self.type, self.name)
        builder._doc.add_block(self.doc)
        builder._attributes.extend(self.attributes)
        builder._modifiers.extend(self.modifiers)
        builder._parameters.extend(self.parameters)
        builder._getter = self.getter
        builder._setter = self.setter
        builder._initializer = self.initializer
        return builder


class PropertySpecBuilder:
    """Accumulates a property's signature and accessors."""

    def __init__(self, type_: Any, name: str):
        self.type = TypeName.get(type_)
        self.name = name
        self._doc = CodeBlockBuilder()
        self._attributes: List[AttributeSpec] = []
        self._modifiers: List[Modifier] = []
        self._parameters: List[ParameterSpec] = []
        self._getter: Optional[AccessorSpec] = None
        self._setter: Optional[AccessorSpec] = None
        self._initializer: Optional[CodeBlock] = None

    def add_doc(self, fmt: str, *args: Any) -> "PropertySpecBuilder":
        self._doc.add(fmt, *args)
        return self

    def add_attribute(self, attribute: Any) -> "PropertySpecBuilder":
        if not isinstance(attribute, AttributeSpec):
            attribute = AttributeSpec.get(attribute)
        self._attributes.append(attribute)
        return self

    def add_modifiers(self, *modifiers: Modifier) -> "PropertySpecBuilder":
        self._modifiers.extend(modifiers)
        return self

    def add_parameter(self, parameter: Any, name: Optional[str] = None, *modifiers: Modifier) -> "PropertySpecBuilder":
        if self.name != INDEXER_NAME:
            raise ConstructionError("only indexers take parameters", member=self.name)
        if not isinstance(parameter, ParameterSpec):
            if name is None:
                raise ConstructionError("parameter name is required", member=self.name)
            parameter = ParameterSpec.of(parameter, name, *modifiers)
        self._parameters.append(parameter)
        return self

    def _accessor(self, keyword: str, body: Optional[CodeBlock], modifiers: Iterable[Modifier]) -> AccessorSpec:
        modifiers = frozenset(modifiers)
        if not modifiers <= VISIBILITY_MODIFIERS:
            raise ConstructionError(f"{keyword} accessor only takes visibility modifiers", member=self.name)
        if body is not None and body.is_empty():
            body = None
        return AccessorSpec(keyword, modifiers, body)

    def getter(self, body: Optional[CodeBlock] = None, *modifiers: Modifier) -> "PropertySpecBuilder":
        """
        Declare the ``get`` accessor.

        Args:
            body: Accessor body; None or an empty block declares ``get;``
            *modifiers: Accessor visibility, e.g. ``Modifier.PROTECTED``
        """
        if self._getter is not None:
            raise ConstructionError("getter was already declared", member=self.name)
        self._getter = self._accessor("get", body, modifiers)
        return self

    def getter_statement(self, fmt: str, *args: Any) -> "PropertySpecBuilder":
        """Declare a getter whose body is the single statement ``fmt``."""
        return self.getter(CodeBlock.builder().add_statement(fmt, *args).build())

    def setter(self, body: Optional[CodeBlock] = None, *modifiers: Modifier) -> "PropertySpecBuilder":
        """Declare the ``set`` accessor; see ``getter``."""
        if self._setter is not None:
            raise ConstructionError(f"{self._setter.keyword} accessor was already declared", member=self.name)
        self._setter = self._accessor("set", body, modifiers)
        return self

    def init(self, body: Optional[CodeBlock] = None, *modifiers: Modifier) -> "PropertySpecBuilder":
        """Declare an ``init`` accessor in place of a setter."""
        if self._setter is not None:
            raise ConstructionError(f"{self._setter.keyword} accessor was already declared", member=self.name)
        self._setter = self._accessor("init", body, modifiers)
        return self

    def initializer(self, fmt: str, *args: Any) -> "PropertySpecBuilder":
        self._initializer = CodeBlock.of(fmt, *args)
        return self

    def build(self) -> PropertySpec:
        """
        Build the property.

        Raises:
            ConstructionError: If no accessor is declared, an abstract property
                has accessor bodies, or an initializer is set on a property
                with accessor bodies or on an indexer
        """
        accessors = [a for a in (self._getter, self._setter) if a is not None]
        if not accessors:
            raise ConstructionError("property must declare at least one accessor", member=self.name)

        has_bodies = any(not accessor.is_auto() for accessor in accessors)
        if Modifier.ABSTRACT in self._modifiers and has_bodies:
            raise ConstructionError("abstract property cannot have accessor bodies", member=self.name)

        if self.name == INDEXER_NAME:
            if not self._parameters:
                raise ConstructionError("indexer must declare at least one parameter", member=self.name)
            if self._initializer is not None:
                raise ConstructionError("indexer cannot have an initializer", member=self.name)
        elif self._initializer is not None and has_bodies:
            raise ConstructionError("only auto-implemented properties can have an initializer", member=self.name)

        return PropertySpec(self)
