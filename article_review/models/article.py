"""Article model definitions."""

import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from article_review.database import Base


class ArticleStatus(str, enum.Enum):
    SUBMITTED = "Submitted"
    REVIEWED = "Reviewed"


class Article(Base):
    """Represents an uploaded article and its review state.

    ``grade`` and ``review_comment`` stay empty until a teacher reviews the
    article; the only transition is Submitted -> Reviewed.
    """
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    file_path = Column(String, nullable=False)
    status = Column(
        Enum(
            ArticleStatus,
            name="article_status",
            native_enum=False,
            validate_strings=True,
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
        default=ArticleStatus.SUBMITTED,
    )
    review_comment = Column(Text, nullable=True)
    grade = Column(Integer, nullable=True)
    upload_date = Column(DateTime(timezone=True), nullable=False)

    student = relationship("User", back_populates="articles")
