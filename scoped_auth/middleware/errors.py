"""
Error handlers for scoped auth configuration errors.

An unmapped resource type, an unknown scope or a missing proxy means the
application is wired incorrectly. They are logged and answered with a
consistent JSON 500 instead of being recovered.
"""
from flask import jsonify, g
from scoped_auth.errors import MappingNotFound, ProxyNotInstalled, ScopeNotRegistered
from scoped_auth.services.structured_logging import get_logger

logger = get_logger('scoped_auth.errors')


def create_configuration_error_response(error):
    """Create a consistent response for auth configuration errors"""
    return jsonify({
        'error': 'auth_configuration_error',
        'message': error.message,
        'request_id': getattr(g, 'request_id', None)
    }), 500


def register_auth_error_handlers(app):
    """Register error handlers for scoped auth configuration errors"""

    @app.errorhandler(MappingNotFound)
    def handle_mapping_not_found(e):
        """Handle resources whose type has no scope mapping"""
        logger.log_error_event(
            e.message,
            error_type='mapping_not_found',
            resource_class=e.resource_class.__name__
        )
        return create_configuration_error_response(e)

    @app.errorhandler(ScopeNotRegistered)
    def handle_scope_not_registered(e):
        """Handle scope names missing from the mapping table"""
        logger.log_error_event(e.message, error_type='scope_not_registered', scope=e.scope)
        return create_configuration_error_response(e)

    @app.errorhandler(ProxyNotInstalled)
    def handle_proxy_not_installed(e):
        """Handle requests that reached a view without an authentication proxy"""
        logger.log_error_event(e.message, error_type='proxy_not_installed', environ_key=e.environ_key)
        return create_configuration_error_response(e)
