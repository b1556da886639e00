from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.exceptions import AuthenticationError, AuthorizationError
from ..users.model import TokenClaims
from ..users.service import AuthService


def bearer_token_from_header(header: str | None) -> str:
    if not header:
        raise AuthenticationError("Missing token")
    parts = header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise AuthenticationError("Invalid token")
    return parts[1]


def current_caller() -> TokenClaims:
    return g.caller


def make_guards(auth_service: AuthService):
    """Build the route decorators bound to one AuthService."""

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token_from_header(request.headers.get("Authorization"))
            g.caller = auth_service.authenticate_token(token)
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        @token_required
        def wrapper(*args, **kwargs):
            if not current_caller().is_admin:
                raise AuthorizationError("Access denied. Admin only.")
            return view(*args, **kwargs)

        return wrapper

    return token_required, admin_required
