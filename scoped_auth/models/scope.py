# -*- coding: utf-8 -*-
"""
Scope references.

Helpers that accept "a scope or a resource" take a ``ScopeRef``: either
``Scope("user")`` naming the scope directly, or ``Instance(user)`` wrapping a
resource whose scope is looked up from its type.
"""

from dataclasses import dataclass
from typing import Any, Union

from scoped_auth.errors import ScopeNotRegistered
from scoped_auth.models.mapping import MappingTable


@dataclass(frozen=True)
class Scope:
    name: str


@dataclass(frozen=True)
class Instance:
    resource: Any


ScopeRef = Union[Scope, Instance]


def as_scope_ref(value: Union[ScopeRef, str]) -> ScopeRef:
    """Accept a bare scope name as shorthand for ``Scope(name)``."""
    if isinstance(value, (Scope, Instance)):
        return value
    if isinstance(value, str):
        return Scope(value)
    raise TypeError(
        f"Expected Scope, Instance or str, got {type(value).__name__}; "
        f"wrap resources in Instance(...)"
    )


def resolve_scope(ref: Union[ScopeRef, str], mappings: MappingTable) -> str:
    """Resolve a scope reference to a registered scope name.

    Raises ScopeNotRegistered for an unknown scope name and MappingNotFound
    when an instance's type has no mapping.
    """
    ref = as_scope_ref(ref)
    if isinstance(ref, Scope):
        if ref.name not in mappings:
            raise ScopeNotRegistered(ref.name)
        return ref.name
    return mappings.find_by_class(type(ref.resource)).name
