# -*- coding: utf-8 -*-
"""
Request context middleware for scoped auth.

Provides request_id generation and propagation throughout the request lifecycle:
- Generates unique request_id for each request
- Adds request_id to response headers
- Makes request_id available in Flask g context
- Tracks which auth scopes were signed in during the request

Request IDs are UUIDs that help trace sign in/out events across logs.
"""

import uuid
import time
from typing import List, Optional
from flask import Flask, request, g, Response


class RequestContextMiddleware:
    """Middleware for managing request context and request_id propagation."""

    def __init__(self, app: Flask):
        self.app = app

        app.before_request(self._before_request)
        app.after_request(self._after_request)

    def _before_request(self):
        """Initialize request context before processing."""
        # Generate or extract request_id, stored in g for the whole request
        g.request_id = self._get_or_generate_request_id()
        g.request_start_time = time.time()

        # Store request metadata for logging
        g.request_method = request.method
        g.request_path = request.path
        g.request_remote_addr = request.remote_addr

        # Scopes currently signed in by this request; maintained by AuthHelpers
        g.auth_scopes = []

    def _after_request(self, response: Response) -> Response:
        """Add request context to response headers."""
        # Add request_id to response headers
        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id

        # Add timing information for debugging
        if hasattr(g, 'request_start_time'):
            duration_ms = round((time.time() - g.request_start_time) * 1000, 2)
            response.headers['X-Response-Time'] = f"{duration_ms}ms"

        return response

    def _get_or_generate_request_id(self) -> str:
        """Get request_id from headers or generate new one."""
        # Check for existing request_id in headers
        request_id = request.headers.get('X-Request-ID')

        if request_id:
            # Validate that it looks like a UUID
            try:
                uuid.UUID(request_id)
                return request_id
            except ValueError:
                # Invalid UUID format, generate new one
                pass

        # Generate new request_id
        return str(uuid.uuid4())


def get_request_id() -> Optional[str]:
    """Get current request_id from Flask g context."""
    return getattr(g, 'request_id', None)


def get_auth_scopes() -> List[str]:
    """Scopes signed in by the current request and not signed out since."""
    return list(getattr(g, 'auth_scopes', None) or [])


def get_request_context() -> dict:
    """Get complete request context for logging."""
    context = {
        'request_id': getattr(g, 'request_id', None),
        'method': getattr(g, 'request_method', None),
        'path': getattr(g, 'request_path', None),
        'remote_addr': getattr(g, 'request_remote_addr', None),
    }

    # Add timing information if available
    if hasattr(g, 'request_start_time'):
        context['duration_ms'] = round(
            (time.time() - g.request_start_time) * 1000, 2)

    # Add auth context if available
    scopes = get_auth_scopes()
    if scopes:
        context['auth_scopes'] = scopes

    return context


def set_auth_context(scope: Optional[str] = None):
    """Record a scope signed in during the current request."""
    if not scope:
        return

    scopes = getattr(g, 'auth_scopes', None)
    if scopes is None:
        scopes = g.auth_scopes = []
    if scope not in scopes:
        scopes.append(scope)


def clear_auth_context(scope: Optional[str] = None):
    """Forget a scope signed out during the current request."""
    scopes = getattr(g, 'auth_scopes', None)
    if scope and scopes and scope in scopes:
        scopes.remove(scope)


def init_request_context(app: Flask):
    """Initialize request context middleware for Flask application."""
    return RequestContextMiddleware(app)
