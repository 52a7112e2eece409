from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import require_authenticated_user
from app.core.db import get_db
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserCreate, UserLogin, UserResponse, Token
from app.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        username=user.username,
        roles=user.roles,
        is_active=user.is_active,
        created_at=user.created_at
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Регистрация нового пользователя"""
    identity_service = IdentityService(db)
    
    try:
        user = await identity_service.register_user(user_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    
    return _to_response(user)


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Вход пользователя"""
    identity_service = IdentityService(db)
    
    token = await identity_service.login_user(login_data)
    
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(require_authenticated_user)):
    """Информация о текущем пользователе"""
    return _to_response(current_user)
