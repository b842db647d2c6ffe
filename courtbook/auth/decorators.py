"""Decorators guarding the court routes.

Authentication itself happens upstream; these decorators only check what the
session already established.
"""

from functools import wraps

from flask import g

from courtbook.errors import ForbiddenError, UnauthorizedError


def login_required(f=None):
    """Reject the request if no user is loaded for the session.

    Usage:
    @login_required
    def protected_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if g.get("user") is None:
                raise UnauthorizedError(
                    "You must be logged in to access this resource."
                )
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator


def role_required(*roles):
    """Reject the request unless the session user holds one of ``roles``."""

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            user = g.get("user") or {}
            if user.get("role") not in roles:
                raise ForbiddenError(
                    "You are not authorized to access this resource.",
                    kind="NotAuthorized",
                )
            return func(*args, **kwargs)

        return decorated_function

    return decorator
