import pytest

from scoped_auth.config import TestingConfig
from scoped_auth.factory import create_app
from scoped_auth.models.mapping import Mapping, MappingTable

from fakes import Admin, FakeBackend, User


@pytest.fixture
def mappings():
    """user and admin scopes."""
    return MappingTable([Mapping('user', User), Mapping('admin', Admin)])


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def app(mappings, backend):
    """Create and configure a new app instance for each test."""
    return create_app(mappings, backend.make_proxy, config_object=TestingConfig)


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def proxy(backend):
    return backend.make_proxy({})


@pytest.fixture
def request_ctx(app, proxy):
    """A request context with the fake proxy installed in the environ."""
    environ = {app.config['SCOPED_AUTH_PROXY_KEY']: proxy}
    with app.test_request_context('/', environ_base=environ) as ctx:
        yield ctx
