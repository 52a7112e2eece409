from app.domains.articles.entities import Article
from app.domains.articles.schemas import ArticlePayload, ArticleBody, ArticleResponse

__all__ = [
    "Article",
    "ArticlePayload", "ArticleBody", "ArticleResponse"
]
