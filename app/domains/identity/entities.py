from datetime import datetime
from typing import Optional, List

from app.core.security import get_password_hash, verify_password

AUTHENTICATED_ROLE = "authenticated"
ANONYMOUS_ROLE = "anonymous"


class User:
    """Сущность пользователя домена Identity"""
    
    def __init__(
        self,
        id: Optional[int],
        email: str,
        username: str,
        password_hash: str,
        role: str = AUTHENTICATED_ROLE,
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.email = email
        self.username = username
        self.password_hash = password_hash
        self.role = role
        self.is_active = is_active
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()
    
    @property
    def roles(self) -> List[str]:
        """Роли пользователя; authenticated есть у всех вошедших"""
        if self.role == AUTHENTICATED_ROLE:
            return [AUTHENTICATED_ROLE]
        return [AUTHENTICATED_ROLE, self.role]
    
    def is_anonymous(self) -> bool:
        return False
    
    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)
    
    @classmethod
    def create_user(cls, email: str, username: str, password: str, role: str = AUTHENTICATED_ROLE) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            id=None,
            email=email,
            username=username,
            password_hash=get_password_hash(password),
            role=role
        )
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id
    
    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, username={self.username})"


class AnonymousUser:
    """Пользователь без аутентификации"""
    
    id = None
    username = "anonymous"
    roles = [ANONYMOUS_ROLE]
    
    def is_anonymous(self) -> bool:
        return True
    
    def __repr__(self) -> str:
        return "AnonymousUser()"
