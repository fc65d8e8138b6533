from functools import wraps

from scoped_auth.services.auth_filters import get_auth_helpers


def scope_required(scope):
    """Decorator to require a signed-in resource for ``scope``.

    The proxy decides what happens on failure (401, redirect to a login page).
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            get_auth_helpers().authenticate_or_abort(scope)
            return f(*args, **kwargs)

        return decorated_function

    return decorator
