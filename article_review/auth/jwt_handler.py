from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from article_review.core import config
from article_review.core.errors import TokenError
from article_review.models.user import Role, User

REQUIRED_CLAIMS = ["sub", "exp", "iss", "aud", "role"]


@dataclass(frozen=True)
class Claims:
    user_id: int
    name: str
    email: str
    role: Role
    expires_at: datetime


def create_access_token(
    user: User,
    expires_minutes: int | None = None,
    now: datetime | None = None,
) -> str:
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "name": user.display_name,
        "email": user.email,
        "role": Role(user.role).value,
        "iss": config.JWT_ISSUER,
        "aud": config.JWT_AUDIENCE,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> Claims:
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            audience=config.JWT_AUDIENCE,
            issuer=config.JWT_ISSUER,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError(TokenError.EXPIRED, "Token has expired") from exc
    except jwt.InvalidSignatureError as exc:
        raise TokenError(TokenError.BAD_SIGNATURE, "Token signature is invalid") from exc
    except jwt.InvalidAudienceError as exc:
        raise TokenError(TokenError.WRONG_AUDIENCE, "Token audience is invalid") from exc
    except jwt.InvalidIssuerError as exc:
        raise TokenError(TokenError.WRONG_ISSUER, "Token issuer is invalid") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError(TokenError.MALFORMED, "Malformed token") from exc

    try:
        user_id = int(payload["sub"])
        role = Role(payload["role"])
    except (TypeError, ValueError) as exc:
        raise TokenError(TokenError.MALFORMED, "Malformed token claims") from exc

    return Claims(
        user_id=user_id,
        name=payload.get("name", ""),
        email=payload.get("email", ""),
        role=role,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
