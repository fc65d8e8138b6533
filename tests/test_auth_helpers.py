# -*- coding: utf-8 -*-
"""
Test suite for the per-request auth helpers.

Covers sign in/out, memoized current resources, one-shot stored locations,
scope resolution through the mapping table and the per-scope accessors.
"""

import pytest
from flask import session
from werkzeug.exceptions import Unauthorized

from scoped_auth.errors import MappingNotFound
from scoped_auth.models.scope import Instance, Scope
from scoped_auth.services.auth_helpers import AuthHelpers
from scoped_auth.services.request_context import get_auth_scopes

from fakes import Admin, Manager, User


@pytest.fixture
def auth(request_ctx, proxy, mappings):
    return AuthHelpers(proxy, mappings)


class TestSignIn:

    def test_sign_in_with_scope(self, auth):
        user = User('ann')
        auth.sign_in(Scope('user'), user)

        assert auth.user_signed_in() is True
        assert auth.current_user() is user

    def test_sign_in_with_scope_name(self, auth):
        user = User('ann')
        auth.sign_in('user', user)

        assert auth.signed_in('user') is True
        assert auth.current_user() is user

    def test_sign_in_instance_uses_mapping(self, auth, backend):
        admin = Admin('root')
        auth.sign_in(Instance(admin))

        assert backend.users == {'admin': admin}
        assert auth.admin_signed_in() is True
        assert auth.user_signed_in() is False

    def test_sign_in_instance_matches_explicit_scope(self, auth, backend):
        user = User('ann')
        auth.sign_in(Instance(user))
        by_instance = dict(backend.users)

        backend.users.clear()
        auth.sign_in(Scope('user'), user)

        assert by_instance == backend.users == {'user': user}

    def test_sign_in_unmapped_instance(self, auth, backend):
        with pytest.raises(LookupError):
            auth.sign_in(Instance(Manager()))

        with pytest.raises(MappingNotFound):
            auth.sign_in(Instance(Manager()))

        assert backend.calls_to('set_user') == []

    def test_sign_in_scope_without_resource(self, auth):
        with pytest.raises(TypeError):
            auth.sign_in(Scope('user'))

    def test_sign_in_replaces_memoized_resource(self, auth):
        assert auth.current_user() is None

        user = User('ann')
        auth.sign_in(Scope('user'), user)

        assert auth.current_user() is user

    def test_sign_in_recorded_in_request_context(self, auth):
        auth.sign_in(Instance(User('ann')))
        auth.sign_in(Instance(User('bob')))

        assert get_auth_scopes() == ['user']


class TestSignOut:

    def test_sign_out_instance(self, auth):
        user = User('ann')
        auth.sign_in(Scope('user'), user)
        assert auth.current_user() is user

        auth.sign_out(Instance(user))

        assert auth.user_signed_in() is False
        assert auth.current_user() is None

    def test_sign_out_order(self, auth, backend):
        auth.sign_in(Scope('user'), User('ann'))
        del backend.calls[:]

        auth.sign_out('user')

        assert backend.calls == [
            ('user', 'user'),
            ('raw_session', None),
            ('logout', 'user'),
        ]

    def test_sign_out_leaves_other_scopes(self, auth):
        admin = Admin('root')
        auth.sign_in(Scope('user'), User('ann'))
        auth.sign_in(Scope('admin'), admin)

        auth.sign_out(Scope('user'))

        assert auth.user_signed_in() is False
        assert auth.current_admin() is admin

    def test_sign_out_unmapped_instance(self, auth, backend):
        with pytest.raises(LookupError):
            auth.sign_out(Instance(Manager()))

        assert backend.calls_to('logout') == []

    def test_sign_out_removed_from_request_context(self, auth):
        auth.sign_in(Scope('user'), User('ann'))
        auth.sign_in(Scope('admin'), Admin('root'))

        auth.sign_out('user')

        assert get_auth_scopes() == ['admin']

    def test_sign_out_without_sign_in_keeps_context(self, auth):
        auth.sign_in(Scope('admin'), Admin('root'))

        auth.sign_out('user')

        assert get_auth_scopes() == ['admin']


class TestCurrentResource:

    def test_memoized_within_request(self, auth, backend):
        user = User('ann')
        backend.users['user'] = user

        assert auth.current_user() is user
        assert auth.current_user() is user
        assert len(backend.calls_to('user')) == 1

    def test_absent_resource_not_memoized(self, auth, backend):
        assert auth.current_user() is None
        assert auth.current_user() is None
        assert len(backend.calls_to('user')) == 2

    def test_resource_logged_in_by_authenticate(self, auth, backend):
        user = User('ann')
        backend.pending['user'] = user

        assert auth.current_user() is None
        assert auth.authenticate('user') is user
        assert auth.user_signed_in() is True
        assert auth.current_user() is user

    def test_resource_logged_in_by_authenticate_or_abort(self, auth, backend):
        admin = Admin('root')
        backend.pending['admin'] = admin

        assert auth.current_admin() is None
        assert auth.authenticate_admin() is admin
        assert auth.current_admin() is admin

    def test_resource_found_after_absent_lookup(self, auth, backend):
        user = User('ann')

        assert auth.current_user() is None
        backend.users['user'] = user

        assert auth.current_user() is user
        assert auth.current_user() is user
        assert len(backend.calls_to('user')) == 2

    def test_memo_is_per_scope(self, auth, backend):
        auth.current_user()
        auth.current_admin()

        assert backend.calls_to('user') == [('user', 'user'), ('user', 'admin')]


class TestAuthenticate:

    def test_authenticate_does_not_abort(self, auth):
        assert auth.authenticate('user') is None

    def test_authenticate_returns_resource(self, auth, backend):
        user = User('ann')
        backend.users['user'] = user
        assert auth.authenticate('user') is user

    def test_authenticate_or_abort(self, auth):
        with pytest.raises(Unauthorized):
            auth.authenticate_or_abort('user')

    def test_authenticate_scope_accessor(self, auth, backend):
        with pytest.raises(Unauthorized):
            auth.authenticate_admin()

        admin = Admin('root')
        backend.users['admin'] = admin
        assert auth.authenticate_admin() is admin
        assert backend.calls_to('authenticate_or_abort')[-1] == ('authenticate_or_abort', 'admin')

    def test_signed_in_does_not_authenticate(self, auth, backend):
        auth.user_signed_in()

        assert backend.calls_to('authenticate') == []
        assert backend.calls_to('authenticate_or_abort') == []


class TestScopeSession:

    def test_scope_session_is_mutable(self, auth, backend):
        auth.user_session()['cart'] = [1, 2]

        assert auth.user_session() == {'cart': [1, 2]}
        assert backend.sessions['user'] == {'cart': [1, 2]}

    def test_scope_sessions_are_separate(self, auth):
        auth.user_session()['theme'] = 'dark'

        assert 'theme' not in auth.admin_session()


class TestStoredLocation:

    def test_stored_location_is_popped(self, auth):
        session['user.return_to'] = '/orders'

        assert auth.stored_location_for('user') == '/orders'
        assert auth.stored_location_for('user') is None

    def test_stored_location_for_instance(self, auth):
        session['admin.return_to'] = '/admin/reports'
        session['user.return_to'] = '/orders'

        assert auth.stored_location_for(Instance(Admin('root'))) == '/admin/reports'
        assert session['user.return_to'] == '/orders'

    def test_stored_location_unmapped_instance(self, auth):
        with pytest.raises(LookupError):
            auth.stored_location_for(Instance(Manager()))


class TestScopeAccessors:

    @pytest.mark.parametrize('name', [
        'authenticate_user', 'user_signed_in', 'current_user', 'user_session',
        'authenticate_admin', 'admin_signed_in', 'current_admin', 'admin_session',
    ])
    def test_accessors_for_configured_scopes(self, auth, name):
        assert callable(getattr(auth, name))

    @pytest.mark.parametrize('name', [
        'authenticate_manager', 'manager_signed_in', 'current_manager', 'manager_session',
    ])
    def test_no_accessors_for_other_scopes(self, auth, name):
        assert not hasattr(auth, name)

    def test_scopes_lookup_table(self, auth):
        assert list(auth.scopes) == ['user', 'admin']
        assert auth.scopes['admin'].scope == 'admin'

    def test_accessor_names(self):
        assert AuthHelpers.accessor_names('admin') == (
            'authenticate_admin', 'admin_signed_in', 'current_admin', 'admin_session'
        )

    def test_proxy_accessor(self, auth, proxy):
        assert auth.proxy is proxy
