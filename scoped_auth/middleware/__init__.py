# -*- coding: utf-8 -*-
"""
Middleware package for scoped auth
"""

from .auth import scope_required
from .errors import register_auth_error_handlers
from .proxy_middleware import AuthProxyMiddleware

__all__ = [
    'scope_required',
    'register_auth_error_handlers',
    'AuthProxyMiddleware',
]
