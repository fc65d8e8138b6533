"""
Unified authentication infrastructure module.

Single entry point for the per-request auth helpers and the guards built on
them. Views should import from here.
"""

from scoped_auth.middleware.auth import scope_required
from scoped_auth.services.auth_filters import (
    authenticate_scope,
    current_auth,
    get_auth_helpers,
    is_auth_view,
)

__all__ = [
    "scope_required",
    "authenticate_scope",
    "current_auth",
    "get_auth_helpers",
    "is_auth_view",
]
