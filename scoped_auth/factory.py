# -*- coding: utf-8 -*-
from flask import Flask

from scoped_auth.config import Config
from scoped_auth.middleware.proxy_middleware import AuthProxyMiddleware, ProxyFactory
from scoped_auth.models.mapping import MappingTable
from scoped_auth.services.auth_filters import init_auth_filters
from scoped_auth.services.request_context import init_request_context
from scoped_auth.services.structured_logging import init_logging


def create_app(mappings: MappingTable, proxy_factory: ProxyFactory,
               config_object=Config) -> Flask:
    app = Flask(__name__)
    app.url_map.strict_slashes = False

    # --- Core config ---
    app.config.from_object(config_object)

    # --- Authentication proxy, one per request ---
    app.wsgi_app = AuthProxyMiddleware(
        app.wsgi_app,
        proxy_factory,
        environ_key=app.config["SCOPED_AUTH_PROXY_KEY"],
    )

    # --- Initialize observability ---
    # request context first so its before_request hook sets request_id
    # before the request logger runs
    init_request_context(app)
    init_logging(app)

    # --- Auth helpers, template helpers, error handlers ---
    init_auth_filters(app, mappings)

    app.logger.info(f"Scoped auth initialised for scopes: {', '.join(mappings.names)}")
    return app
