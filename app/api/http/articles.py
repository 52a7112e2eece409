from typing import List, Union

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user, require_authenticated_user
from app.core.db import get_db
from app.core.exceptions import BadRequest
from app.domains.articles.schemas import ArticlePayload, ArticleResponse
from app.domains.articles.services import ArticleService, article_cacheability
from app.domains.identity.entities import AnonymousUser, User


router = APIRouter(prefix="/api/articles", tags=["articles"])


async def read_article_payload(request: Request) -> ArticlePayload:
    """Разбор JSON-тела запроса на запись статьи"""
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != "application/json":
        raise BadRequest("Content-Type must be application/json.")

    try:
        data = await request.json()
    except ValueError:
        raise BadRequest("Request body is not valid JSON.")

    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object.")

    try:
        return ArticlePayload.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise BadRequest(f"Invalid fields: {fields}.")


@router.get("", response_model=List[ArticleResponse])
async def list_articles(
    response: Response,
    current_user: Union[User, AnonymousUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение всех статей"""
    article_service = ArticleService(db)

    articles = await article_service.list_articles(current_user)
    article_cacheability(articles, collection=True).apply_to(response)

    return [ArticleResponse.from_entity(article) for article in articles]


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    response: Response,
    current_user: Union[User, AnonymousUser] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение статьи по id"""
    article_service = ArticleService(db)

    article = await article_service.get_article(article_id, current_user)
    article_cacheability([article]).apply_to(response)

    return ArticleResponse.from_entity(article)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    request: Request,
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание статьи"""
    payload = await read_article_payload(request)
    article_service = ArticleService(db)

    article = await article_service.create_article(payload, current_user)

    return ArticleResponse.from_entity(article)


@router.put("/{article_id}", response_model=ArticleResponse)
async def replace_article(
    article_id: str,
    request: Request,
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db)
):
    """Полная замена статьи"""
    article_service = ArticleService(db)

    # Сначала узел: отсутствующий id дает 404 независимо от тела
    article = await article_service.load_for_write(article_id, current_user)
    payload = await read_article_payload(request)
    article = await article_service.replace_article(article, payload, current_user)

    return ArticleResponse.from_entity(article)


@router.patch("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    request: Request,
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db)
):
    """Частичное обновление статьи"""
    article_service = ArticleService(db)

    # Сначала узел: отсутствующий id дает 404 независимо от тела
    article = await article_service.load_for_write(article_id, current_user)
    payload = await read_article_payload(request)
    article = await article_service.update_article(article, payload, current_user)

    return ArticleResponse.from_entity(article)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление статьи"""
    article_service = ArticleService(db)

    await article_service.delete_article(article_id, current_user)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
