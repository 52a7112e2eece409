from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class ArticlePayload(BaseModel):
    """Тело запроса на запись статьи; обязательность полей проверяет сервис"""
    title: Optional[str] = Field(None, max_length=255)
    body: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ArticleBody(BaseModel):
    """Тело статьи с форматом"""
    value: str
    format: str


class ArticleResponse(BaseModel):
    """Схема для ответа с данными статьи"""
    id: int
    type: str
    title: str
    body: ArticleBody
    status: int
    owner_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, article) -> "ArticleResponse":
        return cls(
            id=article.id,
            type=article.type,
            title=article.title,
            body=ArticleBody(value=article.body or "", format=article.body_format),
            status=article.status,
            owner_id=article.owner_id,
            created_at=article.created_at,
            updated_at=article.updated_at
        )
