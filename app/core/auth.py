import logging
from typing import Optional, Union

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.exceptions import AccessDenied
from app.domains.identity.entities import AnonymousUser, User
from app.domains.identity.services import IdentityService

logger = logging.getLogger(__name__)

# auto_error=False: запрос без токена выполняется от имени анонимного пользователя
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> Union[User, AnonymousUser]:
    """Зависимость для получения текущего пользователя"""
    if credentials is None:
        return AnonymousUser()

    identity_service = IdentityService(db)
    user = await identity_service.get_current_user_from_token(credentials.credentials)

    if not user:
        logger.warning("Rejected bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def ensure_authenticated(user: Union[User, AnonymousUser]) -> None:
    """Запрет операций записи для анонимного пользователя"""
    if user.is_anonymous():
        raise AccessDenied("Authentication required.")


async def require_authenticated_user(
    current_user: Union[User, AnonymousUser] = Depends(get_current_user)
) -> User:
    """Зависимость для операций, требующих входа"""
    ensure_authenticated(current_user)
    return current_user
