import logging
from typing import List, Iterable, Union
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ensure_authenticated
from app.core.cache import CacheableMetadata
from app.core.config import settings
from app.core.exceptions import AccessDenied, BadRequest, NotFound
from app.db.repositories.article_repository import ArticleRepository
from app.domains.articles.entities import Article, ARTICLE_TYPE
from app.domains.articles.schemas import ArticlePayload
from app.domains.identity.entities import User, AnonymousUser

logger = logging.getLogger(__name__)

# Контексты, от которых зависит ответ на GET
READ_CACHE_CONTEXTS = ["url.path", "user.roles"]
LIST_CACHE_TAG = "node_list"


def _filled(value) -> bool:
    return value is not None and bool(value.strip())


class ArticleService:
    """Сервис CRUD-операций над статьями"""
    
    def __init__(self, session: AsyncSession, body_format: str = None):
        self.session = session
        self.article_repository = ArticleRepository(session)
        self.body_format = body_format or settings.default_body_format
    
    async def get_article(self, article_id: Union[int, str], user: Union[User, AnonymousUser]) -> Article:
        """Получение статьи по id; чужой тип и отсутствие неразличимы"""
        article = await self.article_repository.load(article_id)
        
        if not article or article.bundle() != ARTICLE_TYPE:
            raise AccessDenied()
        
        if not article.is_published() and user.is_anonymous():
            raise AccessDenied()
        
        return article
    
    async def list_articles(self, user: Union[User, AnonymousUser]) -> List[Article]:
        """Получение всех статей, видимых пользователю"""
        article_ids = await self.article_repository.query(
            ARTICLE_TYPE,
            published_only=user.is_anonymous()
        )
        
        if not article_ids:
            return []
        
        return await self.article_repository.load_multiple(article_ids)
    
    async def create_article(self, payload: ArticlePayload, user: Union[User, AnonymousUser]) -> Article:
        """Создание статьи"""
        ensure_authenticated(user)
        
        if not _filled(payload.title) or not _filled(payload.body):
            raise BadRequest("Title and body are required.")
        
        article = Article.create_article(
            title=payload.title,
            body=payload.body,
            owner_id=user.id,
            body_format=self.body_format
        )
        created = await self.article_repository.save(article)
        
        logger.info(f"Article {created.id} created by user {user.id}")
        return created
    
    async def load_for_write(self, article_id: Union[int, str], user: Union[User, AnonymousUser]) -> Article:
        """Загрузка статьи для изменения; вызывается до разбора тела запроса"""
        ensure_authenticated(user)
        article = await self.article_repository.load(article_id)
        
        if not article or article.bundle() != ARTICLE_TYPE:
            raise NotFound("Article not found.")
        
        return article
    
    async def replace_article(
        self,
        article: Article,
        payload: ArticlePayload,
        user: Union[User, AnonymousUser]
    ) -> Article:
        """Полная замена заголовка и тела статьи"""
        ensure_authenticated(user)
        
        if not _filled(payload.title) or not _filled(payload.body):
            raise BadRequest("Title and body are required.")
        
        article.set_title(payload.title)
        article.set_body(payload.body, self.body_format)
        saved = await self._save_existing(article)
        
        logger.info(f"Article {article.id} replaced by user {user.id}")
        return saved
    
    async def update_article(
        self,
        article: Article,
        payload: ArticlePayload,
        user: Union[User, AnonymousUser]
    ) -> Article:
        """Частичное обновление: применяются только непустые поля"""
        ensure_authenticated(user)
        
        if _filled(payload.title):
            article.set_title(payload.title)
        if _filled(payload.body):
            article.set_body(payload.body, self.body_format)
        saved = await self._save_existing(article)
        
        logger.info(f"Article {article.id} updated by user {user.id}")
        return saved
    
    async def delete_article(self, article_id: Union[int, str], user: Union[User, AnonymousUser]) -> None:
        """Удаление статьи"""
        article = await self.load_for_write(article_id, user)
        
        await self.article_repository.delete(article)
        logger.info(f"Article {article.id} deleted by user {user.id}")
    
    async def _save_existing(self, article: Article) -> Article:
        saved = await self.article_repository.save(article)
        
        # Узел удален между загрузкой и сохранением
        if saved is None:
            raise NotFound("Article not found.")
        
        return saved


def article_cacheability(articles: Iterable[Article], collection: bool = False) -> CacheableMetadata:
    """Метаданные кэширования для ответа на GET"""
    cacheability = CacheableMetadata(contexts=READ_CACHE_CONTEXTS)
    cacheability.add_cache_tags(article.cache_tag() for article in articles)
    if collection:
        cacheability.add_cache_tags([LIST_CACHE_TAG])
    return cacheability
