# -*- coding: utf-8 -*-
"""
Per-request authentication helpers.

AuthHelpers wraps the request's authentication proxy and exposes scope aware
operations to views:

    auth.sign_in(Scope("user"), user)    # or auth.sign_in(Instance(user))
    auth.sign_out("user")
    auth.stored_location_for("user") or url_for("index")

For every scope in the mapping table it also binds four accessors, e.g. for
``user``: ``authenticate_user``, ``user_signed_in``, ``current_user`` and
``user_session``. They are bound once per helper from the mapping table, so
only configured scopes have them.
"""

from typing import Any, Dict, MutableMapping, Optional, Tuple, Union

from flask import session

from scoped_auth.models.mapping import MappingTable
from scoped_auth.models.scope import Instance, ScopeRef, as_scope_ref, resolve_scope
from scoped_auth.services.proxy import AuthProxy
from scoped_auth.services.request_context import clear_auth_context, set_auth_context
from scoped_auth.services.structured_logging import get_logger

logger = get_logger('scoped_auth.auth')

# (attribute name template, ScopeAccessors method)
ACCESSOR_TEMPLATES: Tuple[Tuple[str, str], ...] = (
    ('authenticate_{scope}', 'authenticate'),
    ('{scope}_signed_in', 'signed_in'),
    ('current_{scope}', 'current'),
    ('{scope}_session', 'session'),
)

RETURN_TO_KEY = '{scope}.return_to'


class ScopeAccessors:
    """The accessors bound for a single scope."""

    def __init__(self, helpers: 'AuthHelpers', scope: str):
        self._helpers = helpers
        self.scope = scope

    def authenticate(self) -> Any:
        return self._helpers.authenticate_or_abort(self.scope)

    def signed_in(self) -> bool:
        return self._helpers.signed_in(self.scope)

    def current(self) -> Optional[Any]:
        return self._helpers.current(self.scope)

    def session(self) -> MutableMapping[str, Any]:
        return self._helpers.proxy.session(self.scope)

    def __repr__(self) -> str:
        return f"<ScopeAccessors {self.scope}>"


class AuthHelpers:
    """Scope aware authentication operations for the current request."""

    def __init__(self, proxy: AuthProxy, mappings: MappingTable):
        self._proxy = proxy
        self.mappings = mappings
        self._current: Dict[str, Any] = {}
        self.scopes: Dict[str, ScopeAccessors] = {}

        for mapping in mappings:
            accessors = ScopeAccessors(self, mapping.name)
            self.scopes[mapping.name] = accessors
            for template, method in ACCESSOR_TEMPLATES:
                setattr(self, template.format(scope=mapping.name), getattr(accessors, method))

    @staticmethod
    def accessor_names(scope: str) -> Tuple[str, ...]:
        """Names bound on the helper for ``scope``."""
        return tuple(template.format(scope=scope) for template, _ in ACCESSOR_TEMPLATES)

    @property
    def proxy(self) -> AuthProxy:
        return self._proxy

    def authenticate(self, scope: str) -> Optional[Any]:
        """Run authentication for ``scope`` without aborting on failure."""
        # Strategies may log a resource in
        self._current.pop(scope, None)
        return self._proxy.authenticate(scope=scope)

    def authenticate_or_abort(self, scope: str) -> Any:
        """Run authentication for ``scope``; the proxy aborts the request on failure."""
        self._current.pop(scope, None)
        return self._proxy.authenticate_or_abort(scope=scope)

    def signed_in(self, scope: str) -> bool:
        """Check the session for ``scope`` without running authentication hooks."""
        return self._proxy.is_authenticated(scope)

    def current(self, scope: str) -> Optional[Any]:
        """Resource signed in under ``scope``, looked up once per request.

        Only a found resource is kept; while nobody is signed in the proxy is
        asked again on each call.
        """
        resource = self._current.get(scope)
        if resource is None:
            resource = self._proxy.user(scope)
            if resource is not None:
                self._current[scope] = resource
        return resource

    def sign_in(self, resource_or_scope: Union[ScopeRef, str], resource: Any = None) -> None:
        """
        Sign in a resource that was already authenticated, e.g. after sign up.

            sign_in(Scope("user"), user)
            sign_in(Instance(user))
        """
        ref = as_scope_ref(resource_or_scope)
        scope = resolve_scope(ref, self.mappings)
        if resource is None:
            if not isinstance(ref, Instance):
                raise TypeError(f"sign_in() needs a resource to sign in under scope '{scope}'")
            resource = ref.resource

        self._proxy.set_user(resource, scope=scope)
        self._current.pop(scope, None)

        set_auth_context(scope=scope)
        logger.log_auth_event('sign_in', success=True, scope=scope)

    def sign_out(self, resource_or_scope: Union[ScopeRef, str]) -> None:
        """Sign out the given scope, e.g. after deleting an account."""
        scope = resolve_scope(resource_or_scope, self.mappings)

        # Load the resource first or before-logout hooks never see it
        self._proxy.user(scope)
        # Some session backends only clear after the store has been read
        len(self._proxy.raw_session)
        self._proxy.logout(scope)
        self._current.pop(scope, None)

        clear_auth_context(scope=scope)
        logger.log_auth_event('sign_out', success=True, scope=scope)

    def stored_location_for(self, resource_or_scope: Union[ScopeRef, str]) -> Optional[str]:
        """
        Pop the "return to" URL stored for the scope. Each stored location is
        returned once:

            return redirect(auth.stored_location_for("user") or url_for("index"))
        """
        scope = resolve_scope(resource_or_scope, self.mappings)
        return session.pop(RETURN_TO_KEY.format(scope=scope), None)

    def __repr__(self) -> str:
        return f"<AuthHelpers scopes={list(self.scopes)}>"
