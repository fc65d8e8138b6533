# -*- coding: utf-8 -*-
"""
Scope mapping table.

A mapping declares that resources of one Python type authenticate under one
named scope, e.g. ``User -> "user"`` and ``Admin -> "admin"``. The table is
built once at startup and handed to the auth helpers; it is never mutated
afterwards.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping as MappingType, Optional, Tuple

from scoped_auth.errors import MappingNotFound


@dataclass(frozen=True)
class Mapping:
    """Association between a scope name and its resource type."""

    name: str
    resource_class: type
    default_url_options: MappingType[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not self.name.isidentifier():
            raise ValueError(f"Scope name must be a valid identifier: {self.name!r}")
        # Freeze the options so a shared mapping cannot be edited in place
        object.__setattr__(
            self, "default_url_options", MappingProxyType(dict(self.default_url_options))
        )


class MappingTable:
    """Immutable, ordered collection of scope mappings."""

    def __init__(self, mappings: Iterable[Mapping]):
        by_name: Dict[str, Mapping] = {}
        by_class: Dict[type, Mapping] = {}

        for mapping in mappings:
            if mapping.name in by_name:
                raise ValueError(f"Duplicate scope mapping: {mapping.name}")
            if mapping.resource_class in by_class:
                raise ValueError(
                    f"{mapping.resource_class.__name__} is already mapped to scope "
                    f"'{by_class[mapping.resource_class].name}'"
                )
            by_name[mapping.name] = mapping
            by_class[mapping.resource_class] = mapping

        self._by_name = MappingProxyType(by_name)
        self._by_class = MappingProxyType(by_class)

        url_options: Dict[str, Any] = {}
        for mapping in by_name.values():
            url_options.update(mapping.default_url_options)
        self._default_url_options = MappingProxyType(url_options)

    @classmethod
    def from_classes(cls, **scopes: type) -> "MappingTable":
        """Build a table from keyword pairs, e.g. ``from_classes(user=User)``."""
        return cls(Mapping(name, resource_class) for name, resource_class in scopes.items())

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._by_name)

    @property
    def default_url_options(self) -> MappingType[str, Any]:
        """URL generation defaults merged across all mappings."""
        return self._default_url_options

    def get(self, name: str) -> Optional[Mapping]:
        return self._by_name.get(name)

    def find_by_class(self, resource_class: type) -> Mapping:
        """Return the mapping for an exact resource type, or raise MappingNotFound."""
        try:
            return self._by_class[resource_class]
        except KeyError:
            raise MappingNotFound(resource_class) from None

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Mapping]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"<MappingTable {list(self.names)}>"
