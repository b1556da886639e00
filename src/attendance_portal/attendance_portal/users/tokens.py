from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from jose import JWTError, jwt

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_TOKEN_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import TokenClaims, User


class TokenService:
    """Issue and verify signed session tokens (HS256 JWT)."""

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret: str,
        *,
        ttl_days: int = DEFAULT_TOKEN_DAYS,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._secret = secret
        self._ttl = timedelta(days=int(ttl_days))
        self._clock = clock

    def issue(self, user: User) -> str:
        now = self._clock()
        claims = {
            "id": user.user_id,
            "email": user.email,
            "role": user.role.value,
            "instituteCode": user.institute_code or "",
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.ALGORITHM])
            return TokenClaims(
                user_id=int(payload["id"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
                institute_code=str(payload.get("instituteCode") or ""),
            )
        except (JWTError, KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")
