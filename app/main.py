import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.api.http import health_router, auth_router, articles_router
from app.core.config import settings
from app.core.db import create_tables
from app.core.exceptions import ArticleError, article_error_handler
from app.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.auto_create_tables:
        await create_tables()
        logger.info("Database tables ensured")
    yield


app = FastAPI(
    title="Articles API",
    description="REST-ресурс для CRUD-операций над статьями",
    version="1.0.0",
    lifespan=lifespan
)

app.add_exception_handler(ArticleError, article_error_handler)

# Подключаем роутеры
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(articles_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "Articles API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


def run():
    """Запуск сервера разработки"""
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
