import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from article_review.auth import jwt_handler
from article_review.auth.dependencies import get_current_claims
from article_review.auth.jwt_handler import Claims
from article_review.core.errors import AuthFailure, DuplicateEmail
from article_review.database import get_db
from article_review.services import credentials

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 50
MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str
    last_name: str
    email: EmailStr
    password: str

    @field_validator('first_name', 'last_name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        if len(normalized) > MAX_NAME_LENGTH:
            raise ValueError(f'Name must be {MAX_NAME_LENGTH} characters or fewer.')
        return normalized

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return credentials.normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email', 'password')
    @classmethod
    def validate_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('Email and password are required.')
        return value


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class CurrentUserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str


@router.post('/register', response_model=MessageResponse)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    try:
        credentials.register(db, data.first_name, data.last_name, data.email, data.password)
    except DuplicateEmail as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail='Email already exists.',
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Registration failed')
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Database error.',
        ) from exc

    return MessageResponse(message='Registration successful')


@router.post('/login', response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = credentials.verify_credentials(db, data.email, data.password)
    except AuthFailure as exc:
        logger.info('Rejected login attempt')
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Invalid email or password.',
        ) from exc
    except SQLAlchemyError as exc:
        logger.exception('Login lookup failed')
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Database error.',
        ) from exc

    return TokenResponse(token=jwt_handler.create_access_token(user))


@router.get('/me', response_model=CurrentUserResponse)
def me(claims: Claims = Depends(get_current_claims)):
    return CurrentUserResponse(
        id=claims.user_id,
        name=claims.name,
        email=claims.email,
        role=claims.role.value,
    )
