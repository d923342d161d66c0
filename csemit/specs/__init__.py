"""
Declaration model.

Immutable specs for attributes, parameters, fields, methods, properties,
type declarations and whole source files, each with a mutable builder.
"""

from .attribute_spec import AttributeSpec, AttributeSpecBuilder
from .parameter_spec import ParameterSpec, ParameterSpecBuilder
from .field_spec import FieldSpec, FieldSpecBuilder
from .method_spec import MethodSpec, MethodSpecBuilder
from .property_spec import AccessorSpec, PropertySpec, PropertySpecBuilder
from .type_spec import TypeSpec, TypeSpecBuilder
from .csharp_file import CSharpFile, CSharpFileBuilder

__all__ = [
    "AttributeSpec",
    "AttributeSpecBuilder",
    "ParameterSpec",
    "ParameterSpecBuilder",
    "FieldSpec",
    "FieldSpecBuilder",
    "MethodSpec",
    "MethodSpecBuilder",
    "AccessorSpec",
    "PropertySpec",
    "PropertySpecBuilder",
    "TypeSpec",
    "TypeSpecBuilder",
    "CSharpFile",
    "CSharpFileBuilder",
]
