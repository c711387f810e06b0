"""Domain errors raised by the credential, token and article workflows.

Route handlers translate these into HTTP responses; nothing below the
routes layer knows about status codes.
"""


class ArticleReviewError(Exception):
    """Base class for every domain error."""


class DuplicateEmail(ArticleReviewError):
    def __init__(self, email: str):
        super().__init__(f"Email already exists: {email}")
        self.email = email


class AuthFailure(ArticleReviewError):
    """Unknown email or wrong password; callers must not tell which."""

    def __init__(self):
        super().__init__("Invalid email or password.")


class TokenError(ArticleReviewError):
    MALFORMED = "malformed"
    EXPIRED = "expired"
    BAD_SIGNATURE = "bad_signature"
    WRONG_AUDIENCE = "wrong_audience"
    WRONG_ISSUER = "wrong_issuer"

    def __init__(self, kind: str, message: str = "Invalid token"):
        super().__init__(message)
        self.kind = kind


class NotFound(ArticleReviewError):
    pass


class MissingFile(ArticleReviewError):
    pass


class InvalidFileType(ArticleReviewError):
    def __init__(self, file_name: str):
        super().__init__(f"Only PDF files are allowed: {file_name!r}")
        self.file_name = file_name


class StorageWriteError(ArticleReviewError):
    pass
