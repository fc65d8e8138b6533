# -*- coding: utf-8 -*-
"""
WSGI middleware installing the authentication proxy.

Wraps ``app.wsgi_app`` and, for each request, stores the proxy built by
``proxy_factory(environ)`` in the environ so the auth helpers can find it:

    app.wsgi_app = AuthProxyMiddleware(app.wsgi_app, make_proxy)

A proxy already present in the environ (installed by an outer middleware) is
left alone.
"""

from typing import Any, Callable, Dict, Iterable

from scoped_auth.config import DEFAULT_PROXY_KEY
from scoped_auth.services.proxy import AuthProxy

ProxyFactory = Callable[[Dict[str, Any]], AuthProxy]


class AuthProxyMiddleware:
    """Put a per-request AuthProxy into the WSGI environ."""

    def __init__(self, application, proxy_factory: ProxyFactory,
                 environ_key: str = DEFAULT_PROXY_KEY):
        self.application = application
        self.proxy_factory = proxy_factory
        self.environ_key = environ_key

    def __call__(self, environ: Dict[str, Any], start_response) -> Iterable[bytes]:
        if environ.get(self.environ_key) is None:
            environ[self.environ_key] = self.proxy_factory(environ)
        return self.application(environ, start_response)
