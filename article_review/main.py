import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from article_review.core import config
from article_review.database import Base, engine
from article_review.models import article, user  # noqa: F401
from article_review.routes import article_routes, auth_routes

logger = logging.getLogger(__name__)

config.validate_runtime_config()

app = FastAPI(title='Article Review API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': jsonable_encoder(exc.errors())},
    )


@app.get('/')
def root():
    return {'status': 'Article Review API Running'}


app.include_router(auth_routes.router)
app.include_router(article_routes.router, prefix='/articles')

Path(config.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(config.UPLOAD_URL_PATH, StaticFiles(directory=config.UPLOAD_DIR), name='uploads')
