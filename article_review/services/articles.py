from datetime import datetime

from sqlalchemy.orm import Session, joinedload

from article_review.models.article import Article, ArticleStatus


def create_article(
    db: Session,
    *,
    title: str,
    student_id: int,
    file_path: str,
    uploaded_at: datetime,
) -> Article:
    article = Article(
        title=title,
        student_id=student_id,
        file_path=file_path,
        status=ArticleStatus.SUBMITTED,
        upload_date=uploaded_at,
    )
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


def get_article(db: Session, article_id: int) -> Article | None:
    return db.get(Article, article_id)


def list_articles(db: Session) -> list[Article]:
    return db.query(Article).options(joinedload(Article.student)).order_by(Article.id.asc()).all()


def list_articles_for_student(db: Session, student_id: int) -> list[Article]:
    return db.query(Article).filter(Article.student_id == student_id).order_by(Article.id.asc()).all()


def save_review(db: Session, article: Article, *, comment: str | None, grade: int) -> Article:
    article.review_comment = comment
    article.grade = grade
    article.status = ArticleStatus.REVIEWED
    db.commit()
    db.refresh(article)
    return article
