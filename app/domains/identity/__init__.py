from app.domains.identity.entities import User, AnonymousUser
from app.domains.identity.schemas import (
    UserBase, UserCreate, UserLogin, UserResponse, Token
)

__all__ = [
    "User", "AnonymousUser",
    "UserBase", "UserCreate", "UserLogin", "UserResponse", "Token"
]
