from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from app.core.config import settings
from app.db.base import Base

# Асинхронный движок
engine = create_async_engine(settings.database_url, future=True, echo=settings.sql_echo)

# Сессии
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables():
    """Создание таблиц при старте приложения"""
    import app.db.models  # noqa: F401 - регистрирует модели в metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session
