import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserCreate, UserLogin
from app.core.security import create_access_token, verify_token

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для работы с идентификацией и аутентификацией пользователей"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
    
    async def register_user(self, user_data: UserCreate) -> User:
        """Регистрация нового пользователя"""
        if await self.user_repository.email_exists(user_data.email):
            raise ValueError("Email already registered")
        
        if await self.user_repository.username_exists(user_data.username):
            raise ValueError("Username already taken")
        
        user = User.create_user(
            email=user_data.email,
            username=user_data.username,
            password=user_data.password
        )
        
        created = await self.user_repository.create(user)
        logger.info(f"Registered user {created.id} ({created.username})")
        return created
    
    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        """Аутентификация пользователя"""
        user = await self.user_repository.get_by_email(login_data.email)
        
        if not user or not user.is_active:
            return None
        
        if not user.authenticate(login_data.password):
            return None
        
        return user
    
    async def login_user(self, login_data: UserLogin) -> Optional[str]:
        """Вход пользователя и создание JWT токена"""
        user = await self.authenticate_user(login_data)
        
        if not user:
            logger.warning(f"Failed login for {login_data.email}")
            return None
        
        return issue_token(user)
    
    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Получение текущего пользователя из JWT токена"""
        payload = verify_token(token)
        if not payload:
            return None
        
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            return None
        
        user = await self.user_repository.get_by_id(user_id)
        
        if user is None or not user.is_active:
            return None
        
        return user


def issue_token(user: User) -> str:
    """Создание токена доступа для пользователя"""
    token_data = {
        "sub": str(user.id),
        "username": user.username,
        "roles": user.roles
    }
    return create_access_token(data=token_data)
