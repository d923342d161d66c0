"""
csemit: C# Source Emission for Python

Build C# declarations as immutable Python objects and render them to
formatted source text, with using directives and name qualification worked
out automatically.

Usage:
    from csemit import ClassName, CSharpFile, MethodSpec, Modifier, TypeSpec

    hello = (
        MethodSpec.method_builder("Main")
        .add_modifiers(Modifier.PUBLIC, Modifier.STATIC)
        .add_statement("$T.WriteLine($S)", ClassName.get("System", "Console"), "Hello")
        .build()
    )
    program = TypeSpec.class_builder("Program").add_method(hello).build()
    print(CSharpFile.builder("Demo", program).build())
"""

__version__ = "0.1.0"
__author__ = "csemit Team"
__email__ = "csemit@example.com"

# Public API exports
from .modifiers import DeclarationKind, MemberKind, Modifier
from .typenames import (
    ArrayTypeName,
    ClassName,
    NullableTypeName,
    ParameterizedTypeName,
    TypeName,
    TypeVariableName,
)
from .codegen import CodeBlock, CodeWriter, required_imports
from .specs import (
    AttributeSpec,
    CSharpFile,
    FieldSpec,
    MethodSpec,
    ParameterSpec,
    PropertySpec,
    TypeSpec,
)
from .utils import (
    AmbiguousNameWarning,
    ConstructionError,
    CsEmitError,
    InvalidReferenceError,
    StructuralError,
    EmitterConfig,
    get_config,
)

__all__ = [
    "DeclarationKind",
    "MemberKind",
    "Modifier",
    "ArrayTypeName",
    "ClassName",
    "NullableTypeName",
    "ParameterizedTypeName",
    "TypeName",
    "TypeVariableName",
    "CodeBlock",
    "CodeWriter",
    "required_imports",
    "AttributeSpec",
    "CSharpFile",
    "FieldSpec",
    "MethodSpec",
    "ParameterSpec",
    "PropertySpec",
    "TypeSpec",
    "AmbiguousNameWarning",
    "ConstructionError",
    "CsEmitError",
    "InvalidReferenceError",
    "StructuralError",
    "EmitterConfig",
    "get_config",
]
