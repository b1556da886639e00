from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import EMAIL_MAX_LENGTH, INSTITUTE_CODE_MAX_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .model import TokenClaims, User
from .repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


def _require_credentials(email: object, password: object) -> None:
    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        raise ValidationError("Email and password are required")


def _text(value: object) -> str:
    return "" if value is None else str(value).strip()


@dataclass(frozen=True)
class AuthResult:
    """Token plus the public view of the account it was issued for."""

    token: str
    user: User

    def to_dict(self) -> dict:
        return {"token": self.token, "user": self.user.to_public()}


class AuthService:
    """Use cases: register and log in."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def register(
        self,
        *,
        email: Optional[str],
        password: Optional[str],
        confirm_password: Optional[str],
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone: Optional[str] = None,
        institute_code: Optional[str] = None,
    ) -> AuthResult:
        _require_credentials(email, password)
        if password != confirm_password:
            raise ValidationError("Passwords do not match")
        require_min_length(password, f"Password must be at least {MIN_PASSWORD_LENGTH} characters", MIN_PASSWORD_LENGTH)
        if len(email) > EMAIL_MAX_LENGTH:
            raise ValidationError(f"Email must be less than {EMAIL_MAX_LENGTH} characters")
        institute_code = _text(institute_code)
        if len(institute_code) > INSTITUTE_CODE_MAX_LENGTH:
            raise ValidationError(f"Institute code must be less than {INSTITUTE_CODE_MAX_LENGTH} characters")

        if self._users.get_by_email(email):
            raise ConflictError("User with this email already exists")

        name = f"{_text(first_name)} {_text(last_name)}".strip()
        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            phone=_text(phone),
            institute_code=institute_code,
            role=Role.USER,
        )
        user = self._users.get_by_id(user_id)
        if not user:
            raise RuntimeError(f"User {user_id} vanished right after insert")

        logger.info("Registered user id=%s institute=%r", user.user_id, user.institute_code)
        return AuthResult(token=self._tokens.issue(user), user=user)

    def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        _require_credentials(email, password)

        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hash values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return AuthResult(token=self._tokens.issue(user), user=user)

    def authenticate_token(self, token: str) -> TokenClaims:
        return self._tokens.verify(token)


class UserService:
    """Use cases: manage accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, *, caller: TokenClaims) -> Sequence[User]:
        if not caller.is_admin:
            raise AuthorizationError("Access denied. Admin only.")
        return self._users.list_all()

    def delete_user(self, *, caller: TokenClaims, user_id: int) -> None:
        """Admin helper; no route exposes it."""

        if not caller.is_admin:
            raise AuthorizationError("Access denied. Admin only.")
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")
        self._users.delete_by_id(user_id)

    def ensure_default_admin(self, *, email: str, password: str) -> Optional[int]:
        """Create the bootstrap admin when no admin account exists yet."""

        if self._users.count_by_role(Role.ADMIN) > 0:
            return None

        email = require_non_empty(email, "Default admin email is required")
        existing = self._users.get_by_email(email)
        if existing:
            # Existing accounts are never promoted.
            logger.error("Default admin not created: %s is already registered as %s", email, existing.role.value)
            return None

        user_id = self._users.create_user(
            name="Admin",
            email=email,
            password_hash=generate_password_hash(password),
            phone="",
            institute_code="",
            role=Role.ADMIN,
        )
        logger.warning("Default admin created: %s (change its password)", email)
        return user_id
