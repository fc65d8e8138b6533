# -*- coding: utf-8 -*-
"""Class-based view support for the scoped auth helpers."""

from flask.views import MethodView

from scoped_auth.services.auth_filters import get_auth_helpers
from scoped_auth.services.auth_helpers import AuthHelpers


class AuthViewMixin:
    """
    Gives a view ``self.auth``; list scope guards in ``authenticate_scopes``
    to run them before dispatch:

        class Dashboard(AuthViewMixin, MethodView):
            authenticate_scopes = ("admin",)

            def get(self):
                return render_template("dashboard.html", admin=self.auth.current_admin())
    """

    # True for views shipped by an authentication package; see is_auth_view()
    # and authenticate_scope(..., skip_auth_views=True)
    auth_view = False
    authenticate_scopes = ()

    @property
    def auth(self) -> AuthHelpers:
        return get_auth_helpers()

    def dispatch_request(self, *args, **kwargs):
        for scope in self.authenticate_scopes:
            self.auth.authenticate_or_abort(scope)
        return super().dispatch_request(*args, **kwargs)


class AuthMethodView(AuthViewMixin, MethodView):
    pass
