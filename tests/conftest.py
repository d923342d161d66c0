"""
Pytest configuration and shared fixtures for csemit tests.

This module provides common test fixtures, configuration, and utilities
used across the test suite.
"""

import pytest

from csemit.codegen.code_block import CodeBlock
from csemit.modifiers import Modifier
from csemit.specs.field_spec import FieldSpec
from csemit.specs.method_spec import MethodSpec
from csemit.specs.type_spec import TypeSpec
from csemit.typenames import ClassName, TypeName
from csemit.utils.config import set_config


# Configuration isolation
@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Give every test a fresh global configuration with no env overrides."""
    for var in ("CSEMIT_CONFIG", "CSEMIT_INDENT_SIZE", "CSEMIT_COLUMN_LIMIT", "CSEMIT_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    set_config(None)
    yield
    set_config(None)


# Type reference fixtures
@pytest.fixture
def math_class():
    """System.Math, the external type of the Point scenario."""
    return ClassName.get("System", "Math")


@pytest.fixture
def list_class():
    """System.Collections.Generic.List."""
    return ClassName.get("System.Collections.Generic", "List")


# Declaration fixtures
@pytest.fixture
def distance_method(math_class):
    """Point.Distance: three statements and one reference to Math."""
    point = ClassName.get("Geometry", "Point")
    return (
        MethodSpec.method_builder("Distance")
        .add_modifiers(Modifier.PUBLIC)
        .returns(TypeName.DOUBLE)
        .add_parameter(point, "other")
        .add_statement("var dx = x - other.x")
        .add_statement("var dy = y - other.y")
        .add_statement("return $T.Sqrt(dx * dx + dy * dy)", math_class)
        .build()
    )


@pytest.fixture
def point_type(distance_method):
    """The Point class: two readonly fields and the Distance method."""
    return (
        TypeSpec.class_builder("Point")
        .add_modifiers(Modifier.PUBLIC)
        .add_field(TypeName.DOUBLE, "x", Modifier.PRIVATE, Modifier.READONLY)
        .add_field(TypeName.DOUBLE, "y", Modifier.PRIVATE, Modifier.READONLY)
        .add_method(distance_method)
        .build()
    )


@pytest.fixture
def simple_field():
    """A private int field with an initializer."""
    return FieldSpec.builder(TypeName.INT, "count", Modifier.PRIVATE).initializer("$L", 0).build()


@pytest.fixture
def statement_block():
    """A two-statement block."""
    return CodeBlock.builder().add_statement("int a = 1").add_statement("int b = a + 1").build()


# Pytest hooks for test collection
def pytest_collection_modifyitems(config, items):
    """Add markers based on test path."""
    for item in items:
        if "unit" in str(item.path):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.path):
            item.add_marker(pytest.mark.integration)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete file rendering"
    )
