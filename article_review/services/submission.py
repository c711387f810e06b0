"""Student article submission."""

import logging
import os
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from article_review.core.errors import InvalidFileType, MissingFile, StorageWriteError
from article_review.services import articles
from article_review.storage import Storage

logger = logging.getLogger(__name__)

PDF_EXTENSION = ".pdf"


def is_pdf_filename(file_name: str) -> bool:
    return os.path.splitext(file_name)[1].lower() == PDF_EXTENSION


class SubmissionWorkflow:
    """Stores uploaded PDFs and records them as Submitted articles.

    The storage backend and the public URL path of the upload directory are
    fixed at construction; nothing here reads the environment per request.
    """

    def __init__(self, storage: Storage, url_path: str = "/uploads"):
        self.storage = storage
        self.url_path = url_path.strip("/")

    def submit(
        self,
        db: Session,
        student_id: int,
        title: str,
        file_name: str,
        file_bytes: bytes,
        now: datetime | None = None,
    ) -> int:
        if not file_name or not file_name.strip():
            raise MissingFile("File is required.")
        if not is_pdf_filename(file_name):
            raise InvalidFileType(file_name)

        stored_name = f"{uuid.uuid4().hex}{PDF_EXTENSION}"
        try:
            self.storage.put_bytes(stored_name, file_bytes)
        except StorageWriteError:
            logger.exception("Error saving file %s", file_name)
            raise

        # A crash past this point leaves an orphaned file behind.
        article = articles.create_article(
            db,
            title=title.strip(),
            student_id=student_id,
            file_path=f"{self.url_path}/{stored_name}" if self.url_path else stored_name,
            uploaded_at=now or datetime.now(timezone.utc),
        )
        logger.info("Article id=%s submitted by student id=%s", article.id, student_id)
        return article.id
