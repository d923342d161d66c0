"""
Modifier and Declaration-Kind Catalog.

This module is pure lookup data: the C# modifier set, the closed set of
declaration kinds, and a per-kind rule table describing implicit modifiers and
which members need exactly-one-of modifier groups. Validation is a plain
function over (kind, member kind, modifier set).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional

from .utils.exceptions import ConstructionError


class Modifier(Enum):
    """C# modifiers, declared in canonical emission order."""

    PUBLIC = "public"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PRIVATE = "private"
    NEW = "new"
    ABSTRACT = "abstract"
    STATIC = "static"
    VIRTUAL = "virtual"
    SEALED = "sealed"
    OVERRIDE = "override"
    READONLY = "readonly"
    CONST = "const"
    VOLATILE = "volatile"
    EXTERN = "extern"
    UNSAFE = "unsafe"
    ASYNC = "async"
    PARTIAL = "partial"
    IMPLICIT = "implicit"
    EXPLICIT = "explicit"
    OPERATOR = "operator"

    # Parameter modifiers
    THIS = "this"
    REF = "ref"
    OUT = "out"
    IN = "in"
    PARAMS = "params"

    @property
    def keyword(self) -> str:
        """Source spelling of the modifier."""
        return self.value


_ORDER = {modifier: index for index, modifier in enumerate(Modifier)}


def sorted_modifiers(modifiers: Iterable[Modifier]) -> List[Modifier]:
    """Sort modifiers into canonical emission order."""
    return sorted(set(modifiers), key=_ORDER.__getitem__)


VISIBILITY_MODIFIERS = frozenset({
    Modifier.PUBLIC, Modifier.PROTECTED, Modifier.INTERNAL, Modifier.PRIVATE,
})

PARAMETER_MODIFIERS = frozenset({
    Modifier.THIS, Modifier.REF, Modifier.OUT, Modifier.IN, Modifier.PARAMS,
})


class DeclarationKind(Enum):
    """Closed set of declaration kinds."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ATTRIBUTE = "attribute"


class MemberKind(Enum):
    """Kinds of members attachable to a declaration."""

    FIELD = "field"
    METHOD = "method"
    PROPERTY = "property"
    TYPE = "type"


@dataclass(frozen=True)
class KindRules:
    """Implicit modifiers and member checks for one declaration kind."""

    keyword: str
    implicit_field_modifiers: FrozenSet[Modifier] = frozenset()
    implicit_method_modifiers: FrozenSet[Modifier] = frozenset()
    implicit_type_modifiers: FrozenSet[Modifier] = frozenset()
    member_visibility: FrozenSet[Modifier] = frozenset()
    member_dispatch: FrozenSet[Modifier] = frozenset()
    field_storage: FrozenSet[Modifier] = frozenset()
    abstract_by_default: bool = False
    implicit_base: Optional[str] = None


_CONTRACT_VISIBILITY = frozenset({Modifier.PUBLIC, Modifier.PRIVATE})
_CONTRACT_DISPATCH = frozenset({Modifier.ABSTRACT, Modifier.STATIC})
_CONTRACT_STORAGE = frozenset({Modifier.STATIC, Modifier.CONST})

RULES: Dict[DeclarationKind, KindRules] = {
    DeclarationKind.CLASS: KindRules(keyword="class"),
    DeclarationKind.ENUM: KindRules(keyword="enum"),
    DeclarationKind.INTERFACE: KindRules(
        keyword="interface",
        implicit_field_modifiers=frozenset({Modifier.PUBLIC}),
        implicit_method_modifiers=frozenset({Modifier.PUBLIC, Modifier.ABSTRACT}),
        member_visibility=_CONTRACT_VISIBILITY,
        member_dispatch=_CONTRACT_DISPATCH,
        field_storage=_CONTRACT_STORAGE,
        abstract_by_default=True,
    ),
    DeclarationKind.ATTRIBUTE: KindRules(
        keyword="class",
        member_visibility=_CONTRACT_VISIBILITY,
        member_dispatch=_CONTRACT_DISPATCH,
        field_storage=_CONTRACT_STORAGE,
        abstract_by_default=True,
        implicit_base="System.Attribute",
    ),
}


def _describe(modifiers: Iterable[Modifier]) -> str:
    return "{" + ", ".join(m.keyword for m in sorted_modifiers(modifiers)) + "}"


def require_exactly_one_of(
    modifiers: Iterable[Modifier],
    choices: FrozenSet[Modifier],
    owner: Optional[str] = None,
    member: Optional[str] = None,
) -> None:
    """Raise ConstructionError unless exactly one of ``choices`` is present."""
    present = set(modifiers) & choices
    if len(present) != 1:
        raise ConstructionError(
            f"expected exactly one of {_describe(choices)} but found {_describe(present)}",
            declared_name=owner,
            member=member,
        )


def require_at_most_one_of(
    modifiers: Iterable[Modifier],
    choices: FrozenSet[Modifier],
    owner: Optional[str] = None,
    member: Optional[str] = None,
) -> None:
    """Raise ConstructionError if more than one of ``choices`` is present."""
    present = set(modifiers) & choices
    if len(present) > 1:
        raise ConstructionError(
            f"at most one of {_describe(choices)} allowed but found {_describe(present)}",
            declared_name=owner,
            member=member,
        )


def check_member_modifiers(
    kind: DeclarationKind,
    member_kind: MemberKind,
    modifiers: Iterable[Modifier],
    owner: Optional[str] = None,
    member: Optional[str] = None,
) -> None:
    """
    Validate a member's modifiers against the rule table of its owner.

    Args:
        kind: Kind of the owning declaration
        member_kind: Kind of member being attached
        modifiers: The member's modifier set
        owner: Name of the owning declaration, for error context
        member: Name of the member, for error context

    Raises:
        ConstructionError: If a required exactly-one-of group is violated
    """
    rules = RULES[kind]
    modifiers = frozenset(modifiers)
    if member_kind is MemberKind.TYPE:
        return
    if rules.member_visibility:
        require_exactly_one_of(modifiers, rules.member_visibility, owner, member)
    if member_kind is MemberKind.FIELD:
        if rules.field_storage:
            require_exactly_one_of(modifiers, rules.field_storage, owner, member)
    elif rules.member_dispatch:
        require_exactly_one_of(modifiers, rules.member_dispatch, owner, member)


def implicit_modifiers(kind: DeclarationKind, member_kind: MemberKind) -> FrozenSet[Modifier]:
    """Modifiers a declaration kind applies to its members without printing them."""
    rules = RULES[kind]
    if member_kind is MemberKind.FIELD:
        return rules.implicit_field_modifiers
    if member_kind is MemberKind.TYPE:
        return rules.implicit_type_modifiers
    return rules.implicit_method_modifiers
