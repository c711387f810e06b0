import logging
from datetime import datetime
from functools import lru_cache

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from article_review.auth.dependencies import require_student, require_teacher
from article_review.auth.jwt_handler import Claims
from article_review.core import config
from article_review.core.errors import InvalidFileType, MissingFile, NotFound, StorageWriteError
from article_review.database import get_db
from article_review.models.article import ArticleStatus
from article_review.services.review import ReviewWorkflow
from article_review.services.submission import SubmissionWorkflow
from article_review.storage import storage_from_config

router = APIRouter(tags=['articles'])

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
MAX_COMMENT_LENGTH = 2000


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ArticleResponse(CamelModel):
    title: str
    status: ArticleStatus
    review_comment: str | None = None
    grade: int | None = None
    upload_date: datetime


class StudentResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str


class ArticleDetailsResponse(CamelModel):
    id: int
    title: str
    file_url: str
    status: ArticleStatus
    grade: int | None = None
    review_comment: str | None = None
    upload_date: datetime
    student: StudentResponse


class ReviewRequest(BaseModel):
    comment: str | None = None
    grade: int

    @field_validator('comment')
    @classmethod
    def validate_comment(cls, value: str | None) -> str | None:
        if value is not None and len(value.strip()) > MAX_COMMENT_LENGTH:
            raise ValueError(f'Comment must be {MAX_COMMENT_LENGTH} characters or fewer.')
        return value


class MessageResponse(BaseModel):
    message: str


@lru_cache(maxsize=1)
def get_submission_workflow() -> SubmissionWorkflow:
    return SubmissionWorkflow(storage_from_config(config.UPLOAD_DIR), url_path=config.UPLOAD_URL_PATH)


@lru_cache(maxsize=1)
def get_review_workflow() -> ReviewWorkflow:
    return ReviewWorkflow(url_path=config.UPLOAD_URL_PATH)


def database_error(exc: SQLAlchemyError) -> HTTPException:
    logger.exception('Database operation failed', exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail='Database error.',
    )


@router.get('/my', response_model=list[ArticleResponse])
def list_my_articles(
    claims: Claims = Depends(require_student),
    db: Session = Depends(get_db),
    workflow: ReviewWorkflow = Depends(get_review_workflow),
):
    try:
        summaries = workflow.list_mine(db, claims.user_id)
    except SQLAlchemyError as exc:
        raise database_error(exc) from exc

    return [ArticleResponse.model_validate(summary) for summary in summaries]


@router.post('/upload', response_model=MessageResponse)
def upload_article(
    title: str = Form(...),
    file: UploadFile | None = File(None),
    claims: Claims = Depends(require_student),
    db: Session = Depends(get_db),
    workflow: SubmissionWorkflow = Depends(get_submission_workflow),
):
    normalized_title = title.strip()
    if not normalized_title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Title is required.')
    if len(normalized_title) > MAX_TITLE_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f'Title must be {MAX_TITLE_LENGTH} characters or fewer.',
        )
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='File is required.')

    try:
        workflow.submit(
            db,
            student_id=claims.user_id,
            title=normalized_title,
            file_name=file.filename or '',
            file_bytes=file.file.read(),
        )
    except MissingFile as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='File is required.') from exc
    except InvalidFileType as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Only PDF files are allowed.',
        ) from exc
    except StorageWriteError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Could not save the file.',
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_error(exc) from exc

    return MessageResponse(message='Article submitted for review')


@router.get('', response_model=list[ArticleDetailsResponse], dependencies=[Depends(require_teacher)])
def list_articles(
    request: Request,
    db: Session = Depends(get_db),
    workflow: ReviewWorkflow = Depends(get_review_workflow),
):
    try:
        details = workflow.list_all_for_review(db, str(request.base_url))
    except SQLAlchemyError as exc:
        raise database_error(exc) from exc

    return [ArticleDetailsResponse.model_validate(detail) for detail in details]


@router.post('/{article_id}/review', response_model=MessageResponse, dependencies=[Depends(require_teacher)])
def review_article(
    article_id: int,
    data: ReviewRequest,
    db: Session = Depends(get_db),
    workflow: ReviewWorkflow = Depends(get_review_workflow),
):
    try:
        workflow.review(db, article_id, data.comment, data.grade)
    except NotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Article not found.',
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_error(exc) from exc

    return MessageResponse(message='Article reviewed successfully')
