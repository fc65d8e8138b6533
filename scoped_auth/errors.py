# -*- coding: utf-8 -*-
"""Exception classes for scoped authentication helpers.

All of these indicate a setup mistake (an unmapped resource type, an unknown
scope, a missing proxy) rather than a failed login. Authentication failures
are reported by the proxy itself.
"""


class ScopedAuthError(Exception):
    """Base exception for all scoped auth configuration errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MappingNotFound(ScopedAuthError, LookupError):
    """Raised when a resource's type has no registered scope mapping."""

    def __init__(self, resource_class: type):
        super().__init__(
            f"Could not find a valid mapping for {resource_class.__name__}"
        )
        self.resource_class = resource_class


class ScopeNotRegistered(ScopedAuthError, LookupError):
    """Raised when a scope name is not declared in the mapping table."""

    def __init__(self, scope: str):
        super().__init__(f"Scope '{scope}' is not registered")
        self.scope = scope


class ProxyNotInstalled(ScopedAuthError, RuntimeError):
    """Raised when the request environ carries no authentication proxy."""

    def __init__(self, environ_key: str):
        super().__init__(
            f"No authentication proxy found in request environ under '{environ_key}'. "
            f"Is AuthProxyMiddleware installed?"
        )
        self.environ_key = environ_key
