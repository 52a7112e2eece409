from app.db.repositories.user_repository import UserRepository
from app.db.repositories.article_repository import ArticleRepository

__all__ = [
    "UserRepository",
    "ArticleRepository"
]
