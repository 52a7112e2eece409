from app.api.http.health import router as health_router
from app.api.http.auth import router as auth_router
from app.api.http.articles import router as articles_router

__all__ = [
    "health_router",
    "auth_router",
    "articles_router"
]
