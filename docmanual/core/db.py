import logging
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from docmanual.core.config import settings

logger = logging.getLogger(__name__)

# Базовый класс для моделей
Base = declarative_base()


def _engine_options(database_url: str) -> dict:
    """Параметры движка в зависимости от диалекта"""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return {}

    # Каталог для файла SQLite создаем заранее
    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return {"poolclass": NullPool}


# Асинхронный движок
engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    **_engine_options(settings.database_url)
)

# Сессии
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session


async def init_db() -> None:
    """Создание таблиц"""
    # Модели должны быть зарегистрированы в metadata
    import docmanual.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema is ready")


async def drop_db() -> None:
    """Удаление всех таблиц"""
    import docmanual.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
