"""Credential store: user registration and password verification."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from article_review.auth.passwords import dummy_password_hash, hash_password, verify_password
from article_review.core.errors import AuthFailure, DuplicateEmail
from article_review.models.user import Role, User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def register(db: Session, first_name: str, last_name: str, email: str, password: str) -> int:
    """Create a student account and return its id.

    Raises ``DuplicateEmail`` when the normalized email is taken, including
    when a concurrent registration wins the unique index first.
    """
    normalized_email = normalize_email(email)
    if get_user_by_email(db, normalized_email) is not None:
        raise DuplicateEmail(normalized_email)

    user = User(
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email=normalized_email,
        password_hash=hash_password(password),
        role=Role.STUDENT,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateEmail(normalized_email) from exc
    db.refresh(user)

    logger.info("Registered user id=%s", user.id)
    return user.id


def verify_credentials(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if user is None:
        verify_password(password, dummy_password_hash())
        raise AuthFailure()
    if not verify_password(password, user.password_hash):
        raise AuthFailure()
    return user
