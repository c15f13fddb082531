from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from user_api.core.config import Settings
from user_api.core.errors import InvalidTokenError


@dataclass(frozen=True)
class TokenClaims:
    id: int
    email: str
    role: str
    expires_at: datetime


def create_access_token(
    settings: Settings,
    *,
    user_id: int,
    email: str,
    role: str,
    issued_at: datetime | None = None,
) -> str:
    issued_at = issued_at or datetime.now(timezone.utc)
    expire = issued_at + timedelta(minutes=settings.jwt_expires_minutes)
    payload = {"id": user_id, "email": email, "role": role, "iat": issued_at, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: Settings, token: str) -> TokenClaims:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "id", "email", "role"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidTokenError() from exc

    return TokenClaims(
        id=payload["id"],
        email=payload["email"],
        role=payload["role"],
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
