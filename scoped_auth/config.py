import os

DEFAULT_PROXY_KEY = "scoped_auth.proxy"


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    # WSGI environ key the authentication proxy is installed under
    SCOPED_AUTH_PROXY_KEY = os.environ.get("SCOPED_AUTH_PROXY_KEY", DEFAULT_PROXY_KEY)
    SCOPED_AUTH_LOG_JSON = os.environ.get("SCOPED_AUTH_LOG_JSON", "true").lower() == "true"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
