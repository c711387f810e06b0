"""User model definitions."""

import enum

from sqlalchemy import Column, Enum, Integer, String
from sqlalchemy.orm import relationship

from article_review.database import Base


class Role(str, enum.Enum):
    """Access level of a user. Checked on storage, token claims and routes."""
    STUDENT = "Student"
    TEACHER = "Teacher"


class User(Base):
    """Represents a registered student or teacher."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            Role,
            name="user_role",
            native_enum=False,
            validate_strings=True,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=Role.STUDENT,
    )

    articles = relationship("Article", back_populates="student")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
