# -*- coding: utf-8 -*-
from .mapping import Mapping, MappingTable
from .scope import Instance, Scope, ScopeRef, as_scope_ref, resolve_scope

__all__ = [
    "Mapping",
    "MappingTable",
    "Scope",
    "Instance",
    "ScopeRef",
    "as_scope_ref",
    "resolve_scope",
]
