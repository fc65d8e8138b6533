# -*- coding: utf-8 -*-
"""scoped-auth.

Per-request, scope aware authentication helpers for Flask. The actual
authentication is done by a proxy object installed in the WSGI environ; the
helpers expose it to views as sign in / sign out operations and, for every
mapped scope, ``authenticate_<scope>``, ``<scope>_signed_in``,
``current_<scope>`` and ``<scope>_session``.

Example:
    >>> from scoped_auth import MappingTable, create_app, current_auth
    >>> app = create_app(MappingTable.from_classes(user=User), make_proxy)
"""

from .errors import MappingNotFound, ProxyNotInstalled, ScopedAuthError, ScopeNotRegistered
from .factory import create_app
from .middleware import AuthProxyMiddleware, register_auth_error_handlers, scope_required
from .models import Instance, Mapping, MappingTable, Scope, ScopeRef, resolve_scope
from .services.auth_filters import (
    AuthFiltersMiddleware,
    authenticate_scope,
    current_auth,
    get_auth_helpers,
    init_auth_filters,
    is_auth_view,
)
from .services.auth_helpers import AuthHelpers, ScopeAccessors
from .services.proxy import AuthProxy
from .views import AuthMethodView, AuthViewMixin

__version__ = "0.1.0"
__all__ = [
    "create_app",
    # Helpers
    "AuthHelpers",
    "ScopeAccessors",
    "current_auth",
    "get_auth_helpers",
    "authenticate_scope",
    "is_auth_view",
    "scope_required",
    "init_auth_filters",
    "AuthFiltersMiddleware",
    "AuthViewMixin",
    "AuthMethodView",
    # Proxy
    "AuthProxy",
    "AuthProxyMiddleware",
    # Mappings
    "Mapping",
    "MappingTable",
    "Scope",
    "Instance",
    "ScopeRef",
    "resolve_scope",
    # Errors
    "ScopedAuthError",
    "MappingNotFound",
    "ScopeNotRegistered",
    "ProxyNotInstalled",
    "register_auth_error_handlers",
]
