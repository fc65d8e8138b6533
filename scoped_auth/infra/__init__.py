"""
Infrastructure package - unified entry points for core services.

This package provides standardized, centralized access to:
- Authentication (current_auth, scope_required, authenticate_scope)
- Logging (configure_logging, init_logging, get_logger)
"""

from scoped_auth.infra.log import configure_logging, init_logging, get_logger
from scoped_auth.infra.auth import (
    authenticate_scope,
    current_auth,
    get_auth_helpers,
    scope_required,
)

__all__ = [
    "authenticate_scope",
    "current_auth",
    "get_auth_helpers",
    "scope_required",
    "configure_logging",
    "init_logging",
    "get_logger",
]
