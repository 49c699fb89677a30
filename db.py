import logging
from contextlib import asynccontextmanager
from typing import Optional

from aiogram import BaseMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker

import config
from models import Base

logger = logging.getLogger(__name__)


def make_engine(url: Optional[str] = None) -> AsyncEngine:
    return create_async_engine(url or config.DATABASE_URL, echo=False)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, expire_on_commit=False)


# Настройка асинхронного движка и фабрики сессий
async_engine = make_engine()
AsyncSessionLocal = make_session_factory(async_engine)


class DbSessionMiddleware(BaseMiddleware):
    def __init__(self, session_pool: async_sessionmaker):
        super().__init__()
        self.session_pool = session_pool

    async def __call__(self, handler, event, data):
        async with self.session_pool() as session:
            data["session"] = session
            return await handler(event, data)


# Сессия вне aiogram: для зависимостей FastAPI
@asynccontextmanager
async def get_async_session(session_pool: async_sessionmaker = AsyncSessionLocal):
    async with session_pool() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# Инициализация базы данных
async def init_db(engine: AsyncEngine = async_engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ База данных создана.")
