# -*- coding: utf-8 -*-
"""
Flask integration for the scoped auth helpers.

``init_auth_filters(app, mappings)`` wires the mapping table into an
application:
- ``current_auth`` resolves to the request's AuthHelpers, built on first use
  from the proxy in the WSGI environ and cached on ``g``
- templates get ``signed_in``, ``auth_proxy``, ``is_auth_view`` plus
  ``current_<scope>`` / ``<scope>_signed_in``
- ``url_for`` receives the mappings' default URL options
- configuration errors are rendered by the auth error handlers

Guards for ``before_request`` come from ``authenticate_scope``:

    admin_bp.before_request(authenticate_scope("admin"))

An application-wide guard can leave the authentication package's own views
alone:

    app.before_request(authenticate_scope("user", skip_auth_views=True))
"""

from typing import Any, Callable, Dict, Optional

from flask import Flask, current_app, g, request
from werkzeug.local import LocalProxy

from scoped_auth.config import DEFAULT_PROXY_KEY
from scoped_auth.errors import ProxyNotInstalled
from scoped_auth.middleware.errors import register_auth_error_handlers
from scoped_auth.models.mapping import MappingTable
from scoped_auth.services.auth_helpers import AuthHelpers

EXTENSION_KEY = 'scoped_auth'


class AuthFiltersMiddleware:
    """Registers the scoped auth hooks on a Flask application."""

    def __init__(self, app: Flask, mappings: MappingTable):
        self.app = app
        self.mappings = mappings

        self._check_accessor_names()

        app.config.setdefault('SCOPED_AUTH_PROXY_KEY', DEFAULT_PROXY_KEY)
        app.extensions[EXTENSION_KEY] = mappings

        app.context_processor(self._template_helpers)
        app.url_defaults(self._inject_default_url_options)
        register_auth_error_handlers(app)

    def _check_accessor_names(self):
        """Refuse scopes whose accessors would shadow AuthHelpers methods."""
        for mapping in self.mappings:
            for name in AuthHelpers.accessor_names(mapping.name):
                if hasattr(AuthHelpers, name):
                    raise ValueError(
                        f"Scope '{mapping.name}' clashes with AuthHelpers.{name}"
                    )

    def _template_helpers(self) -> Dict[str, Callable[..., Any]]:
        helpers: Dict[str, Callable[..., Any]] = {
            'signed_in': lambda scope: get_auth_helpers().signed_in(scope),
            'auth_proxy': lambda: get_auth_helpers().proxy,
            'is_auth_view': is_auth_view,
        }
        for mapping in self.mappings:
            helpers.update(_scope_template_helpers(mapping.name))
        return helpers

    def _inject_default_url_options(self, endpoint: str, values: Dict[str, Any]):
        url_map = current_app.url_map
        for key, value in self.mappings.default_url_options.items():
            if key not in values and url_map.is_endpoint_expecting(endpoint, key):
                values[key] = value


def _scope_template_helpers(scope: str) -> Dict[str, Callable[[], Any]]:
    return {
        f'current_{scope}': lambda: get_auth_helpers().current(scope),
        f'{scope}_signed_in': lambda: get_auth_helpers().signed_in(scope),
    }


def get_mappings(app: Optional[Flask] = None) -> MappingTable:
    """Mapping table registered on the (current) application."""
    app = app or current_app
    try:
        return app.extensions[EXTENSION_KEY]
    except KeyError:
        raise RuntimeError(
            "Scoped auth is not initialised; call init_auth_filters(app, mappings)"
        ) from None


def get_auth_helpers() -> AuthHelpers:
    """AuthHelpers for the current request, created on first use."""
    helpers = g.get('_scoped_auth_helpers')
    if helpers is None:
        environ_key = current_app.config.get('SCOPED_AUTH_PROXY_KEY', DEFAULT_PROXY_KEY)
        proxy = request.environ.get(environ_key)
        if proxy is None:
            raise ProxyNotInstalled(environ_key)
        helpers = g._scoped_auth_helpers = AuthHelpers(proxy, get_mappings())
    return helpers


current_auth: AuthHelpers = LocalProxy(get_auth_helpers)  # type: ignore[assignment]


def is_auth_view() -> bool:
    """Whether the endpoint being served is a class-based view flagged ``auth_view``."""
    view = current_app.view_functions.get(request.endpoint)
    return bool(getattr(getattr(view, 'view_class', None), 'auth_view', False))


def authenticate_scope(scope: str, skip_auth_views: bool = False) -> Callable[[], None]:
    """Zero-argument guard for ``before_request`` that authenticates ``scope``.

    Returns None on success so the view runs; on failure the proxy aborts.
    With ``skip_auth_views`` views flagged ``auth_view`` are let through.
    """
    def guard():
        if skip_auth_views and is_auth_view():
            return None
        get_auth_helpers().authenticate_or_abort(scope)
        return None

    guard.__name__ = f'authenticate_{scope}'
    return guard


def init_auth_filters(app: Flask, mappings: MappingTable):
    """Initialize scoped auth helpers for Flask application."""
    return AuthFiltersMiddleware(app, mappings)
