from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest

from article_review.auth.jwt_handler import create_access_token, decode_access_token
from article_review.core import config
from article_review.core.errors import TokenError
from article_review.models.user import Role


def _user(role: Role = Role.STUDENT) -> SimpleNamespace:
    return SimpleNamespace(id=7, display_name='Ali Valiyev', email='ali@mail.com', role=role)


def _encode(key: str | None = None, **overrides) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        'sub': '7',
        'name': 'Ali Valiyev',
        'email': 'ali@mail.com',
        'role': 'Student',
        'iss': config.JWT_ISSUER,
        'aud': config.JWT_AUDIENCE,
        'iat': now,
        'exp': now + timedelta(hours=1),
    }
    payload.update(overrides)
    payload = {name: value for name, value in payload.items() if value is not None}
    return jwt.encode(payload, key or config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


@pytest.mark.parametrize('role', [Role.STUDENT, Role.TEACHER])
def test_decode_access_token_recovers_issued_identity(role: Role) -> None:
    claims = decode_access_token(create_access_token(_user(role)))

    assert claims.user_id == 7
    assert claims.email == 'ali@mail.com'
    assert claims.name == 'Ali Valiyev'
    assert claims.role is role


def test_create_access_token_expires_one_hour_after_issue() -> None:
    issued_at = datetime.now(timezone.utc).replace(microsecond=0)

    claims = decode_access_token(create_access_token(_user(), now=issued_at))

    assert claims.expires_at == issued_at + timedelta(hours=1)


def test_create_access_token_embeds_issuer_and_audience() -> None:
    payload = jwt.decode(
        create_access_token(_user()),
        options={'verify_signature': False},
    )

    assert payload['iss'] == 'Article'
    assert payload['aud'] == 'ArticleUser'
    assert payload['role'] == 'Student'


def test_decode_access_token_rejects_expired_token() -> None:
    token = create_access_token(_user(), now=datetime.now(timezone.utc) - timedelta(hours=1, minutes=1))

    with pytest.raises(TokenError) as exception_info:
        decode_access_token(token)

    assert exception_info.value.kind == TokenError.EXPIRED


def test_decode_access_token_rejects_foreign_signature() -> None:
    token = _encode(key='another-secret-key-with-at-least-32-bytes')

    with pytest.raises(TokenError) as exception_info:
        decode_access_token(token)

    assert exception_info.value.kind == TokenError.BAD_SIGNATURE


def test_decode_access_token_rejects_wrong_audience() -> None:
    with pytest.raises(TokenError) as exception_info:
        decode_access_token(_encode(aud='SomeoneElse'))

    assert exception_info.value.kind == TokenError.WRONG_AUDIENCE


def test_decode_access_token_rejects_wrong_issuer() -> None:
    with pytest.raises(TokenError) as exception_info:
        decode_access_token(_encode(iss='SomeoneElse'))

    assert exception_info.value.kind == TokenError.WRONG_ISSUER


@pytest.mark.parametrize(
    'token_factory',
    [
        lambda: 'not-a-token',
        lambda: _encode(role=None),
        lambda: _encode(role='Admin'),
        lambda: _encode(sub='ali'),
        lambda: _encode(exp=None),
    ],
    ids=['garbage', 'missing-role', 'unknown-role', 'non-integer-subject', 'missing-expiry'],
)
def test_decode_access_token_rejects_malformed_tokens(token_factory) -> None:
    with pytest.raises(TokenError) as exception_info:
        decode_access_token(token_factory())

    assert exception_info.value.kind == TokenError.MALFORMED
