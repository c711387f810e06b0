"""Teacher review of submitted articles, plus the read-only article listings."""

import logging
import posixpath
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from article_review.core.errors import NotFound
from article_review.models.article import ArticleStatus
from article_review.services import articles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentSummary:
    id: int
    first_name: str
    last_name: str
    email: str


@dataclass(frozen=True)
class ArticleDetails:
    id: int
    title: str
    file_url: str
    status: ArticleStatus
    grade: int | None
    review_comment: str | None
    upload_date: datetime
    student: StudentSummary


@dataclass(frozen=True)
class ArticleSummary:
    title: str
    status: ArticleStatus
    review_comment: str | None
    grade: int | None
    upload_date: datetime


def as_utc(value: datetime) -> datetime:
    """Attach UTC to timestamps the database hands back without an offset."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def build_file_url(base_url: str, url_path: str, file_path: str) -> str:
    """Join ``base_url``, ``url_path`` and the base name of ``file_path``.

    >>> build_file_url("http://host:8000/", "uploads/", "uploads/a.pdf")
    'http://host:8000/uploads/a.pdf'
    """
    file_name = posixpath.basename(file_path.replace("\\", "/"))
    segments = [base_url.rstrip("/")]
    path = url_path.strip("/")
    if path:
        segments.append(path)
    segments.append(file_name)
    return "/".join(segments)


class ReviewWorkflow:
    def __init__(self, url_path: str = "/uploads"):
        self.url_path = url_path

    def list_all_for_review(self, db: Session, base_url: str) -> list[ArticleDetails]:
        return [
            ArticleDetails(
                id=article.id,
                title=article.title,
                file_url=build_file_url(base_url, self.url_path, article.file_path),
                status=ArticleStatus(article.status),
                grade=article.grade,
                review_comment=article.review_comment,
                upload_date=as_utc(article.upload_date),
                student=StudentSummary(
                    id=article.student.id,
                    first_name=article.student.first_name,
                    last_name=article.student.last_name,
                    email=article.student.email,
                ),
            )
            for article in articles.list_articles(db)
        ]

    def list_mine(self, db: Session, student_id: int) -> list[ArticleSummary]:
        return [
            ArticleSummary(
                title=article.title,
                status=ArticleStatus(article.status),
                review_comment=article.review_comment,
                grade=article.grade,
                upload_date=as_utc(article.upload_date),
            )
            for article in articles.list_articles_for_student(db, student_id)
        ]

    def review(self, db: Session, article_id: int, comment: str | None, grade: int) -> None:
        """Grade an article and mark it Reviewed.

        Reviewing an already Reviewed article overwrites the previous
        comment and grade.
        """
        article = articles.get_article(db, article_id)
        if article is None:
            raise NotFound(f"Article {article_id} not found")

        normalized_comment = (comment or "").strip() or None
        articles.save_review(db, article, comment=normalized_comment, grade=grade)
        logger.info("Article id=%s reviewed with grade=%s", article_id, grade)
