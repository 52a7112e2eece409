from datetime import datetime
from typing import Optional

ARTICLE_TYPE = "article"
DEFAULT_BODY_FORMAT = "basic_html"

PUBLISHED = 1


class Article:
    """Сущность статьи: узел контента с типом article"""
    
    def __init__(
        self,
        id: Optional[int],
        title: str,
        body: str = "",
        body_format: str = DEFAULT_BODY_FORMAT,
        status: int = PUBLISHED,
        type: str = ARTICLE_TYPE,
        owner_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.body = body
        self.body_format = body_format
        self.status = status
        self.type = type
        self.owner_id = owner_id
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()
    
    def bundle(self) -> str:
        """Тип узла"""
        return self.type
    
    def is_published(self) -> bool:
        return self.status == PUBLISHED
    
    def set_title(self, title: str) -> None:
        """Обновление заголовка"""
        self.title = title
        self.updated_at = datetime.utcnow()
    
    def set_body(self, value: str, body_format: str = DEFAULT_BODY_FORMAT) -> None:
        """Обновление тела статьи"""
        self.body = value
        self.body_format = body_format
        self.updated_at = datetime.utcnow()
    
    def cache_tag(self) -> str:
        return f"node:{self.id}"
    
    @classmethod
    def create_article(
        cls,
        title: str,
        body: str,
        owner_id: Optional[int] = None,
        body_format: str = DEFAULT_BODY_FORMAT
    ) -> "Article":
        """Создание новой опубликованной статьи"""
        return cls(
            id=None,
            title=title,
            body=body,
            body_format=body_format,
            status=PUBLISHED,
            type=ARTICLE_TYPE,
            owner_id=owner_id
        )
    
    def __repr__(self) -> str:
        return f"Article(id={self.id}, type={self.type}, title={self.title})"
