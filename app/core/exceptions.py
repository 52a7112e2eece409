import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ArticleError(Exception):
    """Базовая ошибка ресурса статей"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AccessDenied(ArticleError):
    """Доступ запрещен (ресурс отсутствует или пользователь не аутентифицирован)"""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied."


class BadRequest(ArticleError):
    """Некорректный запрос"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request."


class NotFound(ArticleError):
    """Статья не найдена"""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."


async def article_error_handler(request: Request, exc: ArticleError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
