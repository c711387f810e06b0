import os
import tempfile
from datetime import datetime, timezone

import pytest

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret-key-with-at-least-32-bytes!')
os.environ.setdefault('BCRYPT_ROUNDS', '4')
os.environ.setdefault('UPLOAD_DIR', tempfile.mkdtemp(prefix='article-review-uploads-'))

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from article_review.auth.jwt_handler import Claims  # noqa: E402
from article_review.auth.passwords import hash_password  # noqa: E402
from article_review.database import Base  # noqa: E402
from article_review.models.article import Article  # noqa: E402
from article_review.models.user import Role, User  # noqa: E402
from article_review.storage import LocalStorage  # noqa: E402


@pytest.fixture
def db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=[User.__table__, Article.__table__])

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine, tables=[Article.__table__, User.__table__])


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(root=tmp_path / 'uploads')


@pytest.fixture
def make_user(db):
    def factory(
        email: str = 'student@mail.com',
        password: str = 'secret123',
        role: Role = Role.STUDENT,
        first_name: str = 'Ali',
        last_name: str = 'Valiyev',
    ) -> User:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return factory


@pytest.fixture
def claims_for():
    def factory(user: User) -> Claims:
        return Claims(
            user_id=user.id,
            name=user.display_name,
            email=user.email,
            role=Role(user.role),
            expires_at=datetime(2099, 1, 1, tzinfo=timezone.utc),
        )

    return factory
