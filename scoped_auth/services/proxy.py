# -*- coding: utf-8 -*-
"""
Authentication proxy interface.

The proxy is the object that actually authenticates: it runs strategies and
hooks and keeps per-scope login state in the session. One instance is
installed into the WSGI environ per request (see AuthProxyMiddleware) and the
auth helpers delegate every operation to it.
"""

from abc import ABC, abstractmethod
from typing import Any, MutableMapping, Optional


class AuthProxy(ABC):
    """Contract the auth helpers expect from an authentication proxy."""

    @abstractmethod
    def authenticate(self, scope: str) -> Optional[Any]:
        """Try to authenticate ``scope``; return the resource or None. Never aborts."""

    @abstractmethod
    def authenticate_or_abort(self, scope: str) -> Any:
        """Authenticate ``scope`` or raise a werkzeug HTTPException (401, redirect...)."""

    @abstractmethod
    def is_authenticated(self, scope: str) -> bool:
        """Whether ``scope`` has a resource in the session. Must not run hooks."""

    @abstractmethod
    def set_user(self, resource: Any, scope: str) -> None:
        ...

    @abstractmethod
    def user(self, scope: str) -> Optional[Any]:
        ...

    @abstractmethod
    def session(self, scope: str) -> MutableMapping[str, Any]:
        """Session data namespaced to ``scope``."""

    @abstractmethod
    def logout(self, scope: str) -> None:
        ...

    @property
    @abstractmethod
    def raw_session(self) -> MutableMapping[str, Any]:
        """The underlying session store, unscoped."""
